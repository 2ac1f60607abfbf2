"""
Widget painting the grouped messages of one container as alert cards.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import QLabel, QVBoxLayout, QWidget

from core.app import MessageQueueCoordinator
from core.message_container import MessageContainer

GROUP_CLASS = "alert"
GROUP_TYPE_CLASS_PREFIX = "alert-"

_TYPE_COLOURS: Dict[str, str] = {
    "danger": "rgba(192, 57, 43, 0.85)",
    "warning": "rgba(211, 133, 0, 0.85)",
    "success": "rgba(39, 130, 71, 0.85)",
    "info": "rgba(41, 98, 160, 0.85)",
}
_FALLBACK_COLOUR = "rgba(24, 24, 28, 0.78)"


class MessagePanel(QWidget):
    """
    Mounts a ``MessageContainer`` while shown and repaints one card per
    message type whenever the container's messages change.
    """

    mounted = Signal()
    unmounted = Signal()

    def __init__(
        self,
        message_queue: MessageQueueCoordinator,
        parent: QWidget | None = None,
        *,
        name: Optional[str] = None,
    ) -> None:
        super().__init__(parent)
        self.setObjectName("MessagePanel")
        self.container = MessageContainer(message_queue, name=name, parent=self)
        self.container.messagesChanged.connect(self.refresh)  # type: ignore[arg-type]

        self._layout = QVBoxLayout(self)
        self._layout.setContentsMargins(0, 0, 0, 0)
        self._layout.setSpacing(6)
        self._cards: List[QLabel] = []

    @property
    def cards(self) -> List[QLabel]:
        return list(self._cards)

    def showEvent(self, event) -> None:  # noqa: N802
        super().showEvent(event)
        if not self.container.is_mounted:
            self.container.mount()
            self.refresh()
            self.mounted.emit()

    def hideEvent(self, event) -> None:  # noqa: N802
        if not event.spontaneous() and self.container.is_mounted:
            self.container.unmount()
            self.unmounted.emit()
        super().hideEvent(event)

    def closeEvent(self, event) -> None:  # noqa: N802
        if self.container.is_mounted:
            self.container.unmount()
            self.unmounted.emit()
        super().closeEvent(event)

    def refresh(self) -> None:
        """Rebuild the cards from the container's grouped view."""
        for card in self._cards:
            self._layout.removeWidget(card)
            card.setParent(None)
            card.deleteLater()
        self._cards = []

        for group in self.container.sorted_messages:
            card = QLabel()
            card.setObjectName(f"{GROUP_CLASS} {GROUP_TYPE_CLASS_PREFIX}{group.type}")
            card.setProperty("messageType", group.type)
            card.setWordWrap(True)
            card.setTextFormat(Qt.TextFormat.PlainText)
            card.setText("\n".join(str(payload) for payload in group.payloads))
            card.setToolTip(group.type)
            card.setStyleSheet(
                "QLabel {"
                f" background-color: {_TYPE_COLOURS.get(group.type, _FALLBACK_COLOUR)};"
                " color: white; border-radius: 8px; padding: 8px 12px;"
                " }"
            )
            self._layout.addWidget(card)
            self._cards.append(card)

