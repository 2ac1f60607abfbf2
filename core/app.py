"""
Coordinator tying the container registry, the transition queue and the
dispatcher together behind the public message queue API.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, List, Optional, Sequence, Union

from PySide6.QtCore import QObject

from core.container_registry import ContainerRegistry
from core.dispatcher import Dispatcher, MessageGroup
from core.message_container import MessageContainer
from core.navigation import NavigationSignal
from core.render_queue import RenderQueue
from core.settings import QueueSettings, QueueSettingsManager
from core.transition_queue import TransitionQueue
from shared.category_order import CategoryOrderInput, parse_category_order
from shared.message_record import MessageRecord, create_message_records, extract_ids
from flash_queue.flash_queue import logger as app_logger

IdOrIds = Union[str, List[str]]


class MessageQueueCoordinator(QObject):
    """
    Entry point for application code posting flash messages.

    ``add`` shows messages immediately, ``queue`` holds them until enough
    navigations have completed. Containers mount themselves through
    ``register_container`` and read their grouped view through
    ``prepare_for_container``.
    """

    def __init__(
        self,
        *,
        navigation: Optional[NavigationSignal] = None,
        settings: Optional[QueueSettings] = None,
        settings_manager: Optional[QueueSettingsManager] = None,
        render_queue: Optional[RenderQueue] = None,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._logger = app_logger.get_logger()
        self.navigation = navigation if navigation is not None else NavigationSignal(self)
        self.settings_manager = settings_manager
        self.render_queue = render_queue if render_queue is not None else RenderQueue()
        self.registry = ContainerRegistry(self.render_queue)
        self.transition_queue = TransitionQueue()
        self.dispatcher = Dispatcher(self.registry)
        self._started = False

        if settings is None:
            settings = settings_manager.read_settings() if settings_manager else QueueSettings()
        self.apply_settings(settings)

    def start(self) -> None:
        """Subscribe to the navigation signal."""
        if self._started:
            return
        self.navigation.transitionCompleted.connect(self._on_transition_completed)
        self._started = True
        self._logger.info(
            "Message queue started (default type '{}', order {}, transfer on unregister {}).",
            self.default_message_type,
            self.message_type_order or "unset",
            self.transfer_on_unregister,
        )

    def shutdown(self) -> None:
        """Unsubscribe from navigation and drop any work not yet run."""
        if not self._started:
            return
        self.navigation.transitionCompleted.disconnect(self._on_transition_completed)
        self._started = False
        self.render_queue.clear()
        self.registry.clear_pending_transfers()
        self._logger.info(
            "Message queue stopped with {} queued message(s) discarded.",
            len(self.transition_queue),
        )
        self.transition_queue.clear()

    @property
    def is_running(self) -> bool:
        return self._started

    def apply_settings(self, settings: QueueSettings) -> None:
        self._applied_settings = replace(settings, message_type_order=list(settings.message_type_order))
        self._settings = replace(settings, message_type_order=list(settings.message_type_order))
        self.dispatcher.default_message_type = settings.default_message_type
        self.dispatcher.set_message_type_order(settings.message_type_order)
        self.registry.transfer_on_unregister = settings.transfer_on_unregister

    def reload_settings(self) -> None:
        if self.settings_manager is None:
            return
        new_settings = self.settings_manager.read_settings()
        if new_settings != self._applied_settings:
            self._logger.info("Message queue settings changed; applying.")
            self.apply_settings(new_settings)

    @property
    def settings(self) -> QueueSettings:
        return self._settings

    @property
    def default_message_type(self) -> str:
        return self.dispatcher.default_message_type

    @default_message_type.setter
    def default_message_type(self, value: str) -> None:
        self._settings.default_message_type = value
        self.dispatcher.default_message_type = value

    @property
    def message_type_order(self) -> List[str]:
        return list(self.dispatcher.message_type_order)

    @message_type_order.setter
    def message_type_order(self, value: CategoryOrderInput) -> None:
        order = parse_category_order(value)
        self._settings.message_type_order = order
        self.dispatcher.set_message_type_order(order)

    @property
    def transfer_on_unregister(self) -> bool:
        return self.registry.transfer_on_unregister

    @transfer_on_unregister.setter
    def transfer_on_unregister(self, value: bool) -> None:
        self._settings.transfer_on_unregister = bool(value)
        self.registry.transfer_on_unregister = bool(value)

    def queue(
        self,
        msg: Any,
        *,
        type: Optional[str] = None,
        target: Any = 0,
        lifespan: Any = 1,
        wait: Any = 1,
    ) -> IdOrIds:
        """
        Queue message(s) for display after ``wait`` navigations.

        Returns the id of the record, or a list of ids when ``msg`` is a list.
        """
        records = create_message_records(
            msg,
            type=type,
            target=target,
            lifespan=lifespan,
            wait=wait,
            default_type=self.default_message_type,
        )
        self.transition_queue.enqueue(records)
        return extract_ids(records)

    def unqueue(self, id: Union[str, Sequence[str]]) -> None:
        """
        Cancel queued message(s). Ids already delivered are removed from the
        containers showing them instead.
        """
        not_queued = self.transition_queue.cancel(id)
        if not_queued:
            self.dispatcher.remove(not_queued)

    def add(
        self,
        msg: Any,
        *,
        type: Optional[str] = None,
        target: Any = 0,
        lifespan: Any = 1,
        update: bool = True,
        clear: bool = False,
    ) -> IdOrIds:
        """Display message(s) right away in the container at ``target``."""
        records = self.dispatcher.add(
            msg,
            type=type,
            target=target,
            lifespan=lifespan,
            update=update,
            clear=clear,
        )
        return extract_ids(records)

    def remove(self, id: Union[str, Sequence[str]]) -> None:
        """Remove displayed message(s) wherever they are shown."""
        self.dispatcher.remove(id)

    def prepare_for_container(self, records: Sequence[MessageRecord]) -> List[MessageGroup]:
        return self.dispatcher.group_and_order(records)

    def register_container(self, container: MessageContainer) -> None:
        self.registry.register(container)

    def unregister_container(self, container: MessageContainer) -> None:
        self.registry.unregister(container)

    def _on_transition_completed(self) -> None:
        self.render_queue.schedule(self._deliver_queued_messages)

    def _deliver_queued_messages(self) -> None:
        additions = self.transition_queue.drain(self.registry.resolve_index)
        self.dispatcher.update_containers(additions)
