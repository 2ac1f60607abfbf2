"""
Display surface holding the messages assigned to it by the coordinator.
"""

from __future__ import annotations

import itertools
from typing import TYPE_CHECKING, List, Optional

from PySide6.QtCore import QObject, Signal

from shared.message_record import MessageRecord

if TYPE_CHECKING:
    from core.app import MessageQueueCoordinator
    from core.dispatcher import MessageGroup

_CONTAINER_IDS = itertools.count(1)


class MessageContainer(QObject):
    """
    Non-visual message container.

    ``messages`` is owned by the coordinator, which mutates it and then emits
    ``messagesChanged``. Views read ``sorted_messages`` to paint.
    """

    messagesChanged = Signal()

    def __init__(
        self,
        message_queue: Optional["MessageQueueCoordinator"] = None,
        *,
        name: Optional[str] = None,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self.container_id = name or f"container-{next(_CONTAINER_IDS)}"
        self.message_queue = message_queue
        self.messages: List[MessageRecord] = []
        self._mounted = False

    def __repr__(self) -> str:
        return f"<MessageContainer {self.container_id} messages={len(self.messages)}>"

    @property
    def is_mounted(self) -> bool:
        return self._mounted

    @property
    def sorted_messages(self) -> List["MessageGroup"]:
        if self.message_queue is None:
            return []
        return self.message_queue.prepare_for_container(self.messages)

    def mount(self) -> None:
        """Register with the coordinator, becoming index 0."""
        if self._mounted or self.message_queue is None:
            return
        self.message_queue.register_container(self)
        self._mounted = True

    def unmount(self) -> None:
        """Unregister from the coordinator; remaining messages may be transferred."""
        if not self._mounted or self.message_queue is None:
            return
        self._mounted = False
        self.message_queue.unregister_container(self)
