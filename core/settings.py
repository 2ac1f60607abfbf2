"""
Persisted configuration for the message queue coordinator.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional

from PySide6.QtCore import QSettings

from shared.category_order import format_category_order, parse_category_order
from shared.message_record import DEFAULT_MESSAGE_TYPE, ValidationError
from flash_queue.flash_queue import logger as app_logger

_LOGGER = app_logger.get_logger()

ORGANIZATION_NAME = "FlashQueue"
APPLICATION_NAME = "MessageQueue"
_GROUP = "MessageQueue"
_TRUE_STRINGS = {"1", "true", "yes", "on"}
_FALSE_STRINGS = {"0", "false", "no", "off"}


@dataclass(eq=True)
class QueueSettings:
    default_message_type: str = DEFAULT_MESSAGE_TYPE
    message_type_order: List[str] = field(default_factory=list)
    transfer_on_unregister: bool = True


class QueueSettingsManager:
    """Loads settings from QSettings and falls back to defaults on bad data."""

    def __init__(self, *, qsettings: Optional[QSettings] = None) -> None:
        self._qsettings = qsettings or QSettings(ORGANIZATION_NAME, APPLICATION_NAME)

    def read_settings(self) -> QueueSettings:
        defaults = QueueSettings()
        self._qsettings.beginGroup(_GROUP)
        try:
            return QueueSettings(
                default_message_type=self._read_type(
                    "DefaultMessageType", defaults.default_message_type
                ),
                message_type_order=self._read_order("MessageTypeOrder"),
                transfer_on_unregister=self._read_bool(
                    "TransferOnUnregister", defaults.transfer_on_unregister
                ),
            )
        finally:
            self._qsettings.endGroup()

    def write_settings(self, settings: QueueSettings) -> None:
        self._qsettings.beginGroup(_GROUP)
        try:
            self._qsettings.setValue("DefaultMessageType", settings.default_message_type)
            self._qsettings.setValue(
                "MessageTypeOrder", format_category_order(settings.message_type_order)
            )
            self._qsettings.setValue("TransferOnUnregister", bool(settings.transfer_on_unregister))
        finally:
            self._qsettings.endGroup()
        self._qsettings.sync()

    def _read_raw(self, name: str) -> Any:
        if not self._qsettings.contains(name):
            return None
        return self._qsettings.value(name)

    def _read_type(self, name: str, default: str) -> str:
        raw = self._read_raw(name)
        if raw is None:
            return default
        if not isinstance(raw, str) or not raw.strip():
            _LOGGER.warning("Setting {} has unusable value {!r}; using '{}'.", name, raw, default)
            return default
        return raw.strip()

    def _read_order(self, name: str) -> List[str]:
        raw = self._read_raw(name)
        if raw is None:
            return []
        try:
            return parse_category_order(raw)
        except (TypeError, ValidationError) as exc:
            _LOGGER.warning("Setting {} ignored: {}", name, exc)
            return []

    def _read_bool(self, name: str, default: bool) -> bool:
        raw = self._read_raw(name)
        if raw is None:
            return default
        if isinstance(raw, bool):
            return raw
        if isinstance(raw, int):
            return bool(raw)
        if isinstance(raw, str):
            lowered = raw.strip().lower()
            if lowered in _TRUE_STRINGS:
                return True
            if lowered in _FALSE_STRINGS:
                return False
        _LOGGER.warning("Setting {} has unexpected value {!r}; using {}.", name, raw, default)
        return default
