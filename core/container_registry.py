"""
Ordered registry of the message containers currently mounted.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple, Union

from core.message_container import MessageContainer
from core.render_queue import RenderQueue
from shared.message_record import MessageRecord
from flash_queue.flash_queue import logger as app_logger


@dataclass(frozen=True)
class ByIndex:
    """Reference to whichever container currently sits at ``index`` (clamped)."""

    index: int

    def resolve(self, registry: "ContainerRegistry") -> Optional[MessageContainer]:
        idx = registry.resolve_index(self.index)
        if idx is None:
            return None
        return registry.containers[idx]


@dataclass(frozen=True)
class ByHandle:
    """Reference to a specific container instance."""

    container: MessageContainer

    def resolve(self, registry: "ContainerRegistry") -> Optional[MessageContainer]:
        return self.container


ContainerRef = Union[ByIndex, ByHandle]


class ContainerRegistry:
    """
    Containers in mount order, newest first: index 0 is always the most
    recently registered container.
    """

    def __init__(self, render_queue: RenderQueue, *, transfer_on_unregister: bool = True) -> None:
        self._logger = app_logger.get_logger()
        self._render_queue = render_queue
        self._containers: List[MessageContainer] = []
        self._pending_transfers: List[List[MessageRecord]] = []
        self.transfer_on_unregister = transfer_on_unregister

    def __len__(self) -> int:
        return len(self._containers)

    def __iter__(self) -> Iterator[MessageContainer]:
        return iter(tuple(self._containers))

    def __contains__(self, container: object) -> bool:
        return any(existing is container for existing in self._containers)

    @property
    def containers(self) -> Tuple[MessageContainer, ...]:
        return tuple(self._containers)

    def index_of(self, container: MessageContainer) -> Optional[int]:
        for idx, existing in enumerate(self._containers):
            if existing is container:
                return idx
        return None

    def register(self, container: MessageContainer) -> None:
        if container in self:
            self._logger.debug("Container {} already registered.", container.container_id)
            return
        self._containers.insert(0, container)
        self._logger.debug(
            "Registered container {} ({} active).",
            container.container_id,
            len(self._containers),
        )

    def unregister(self, container: MessageContainer) -> None:
        """
        Remove ``container`` and hand its messages to the container that
        takes over its index once the render queue runs.
        """
        idx = self.index_of(container)
        if idx is None:
            self._logger.debug("Ignoring unregister of unknown container {}.", container.container_id)
            return

        del self._containers[idx]
        pending = list(container.messages)
        if pending:
            container.messages.clear()
            container.messagesChanged.emit()

        self._logger.debug(
            "Unregistered container {} from index {} ({} active).",
            container.container_id,
            idx,
            len(self._containers),
        )

        if not pending:
            return
        if not self.transfer_on_unregister:
            self._logger.debug("Dropping {} message(s); transfer on unregister disabled.", len(pending))
            return
        self._pending_transfers.append(pending)
        self._render_queue.schedule(self._transfer, idx, pending)

    def clear_pending_transfers(self) -> None:
        self._pending_transfers.clear()

    def discard_pending(self, ids: List[str]) -> List[str]:
        """
        Drop records waiting to be transferred from an unregistered container.

        Returns the ids that were not waiting.
        """
        not_found: List[str] = []
        for record_id in ids:
            for pending in self._pending_transfers:
                match = next((i for i, record in enumerate(pending) if record.id == record_id), None)
                if match is not None:
                    del pending[match]
                    break
            else:
                not_found.append(record_id)
        return not_found

    def resolve_index(self, proposed: object) -> Optional[int]:
        """
        Clamp ``proposed`` to the nearest valid index.

        Returns None when no container is registered or ``proposed`` is not
        an integer.
        """
        count = len(self._containers)
        if not count or isinstance(proposed, bool) or not isinstance(proposed, int):
            return None
        if proposed < 0:
            return 0
        if proposed >= count:
            return count - 1
        return proposed

    def resolve_handle(self, ref: ContainerRef) -> Optional[MessageContainer]:
        return ref.resolve(self)

    def _transfer(self, index: int, records: List[MessageRecord]) -> None:
        self._pending_transfers = [pending for pending in self._pending_transfers if pending is not records]
        if not records:
            return
        target = self.resolve_handle(ByIndex(index))
        if target is None:
            self._logger.debug("No container left for {} transferred message(s); dropping.", len(records))
            return

        known = {record.id for record in target.messages}
        additions = [record for record in records if record.id not in known]
        if not additions:
            return
        target.messages.extend(additions)
        target.messagesChanged.emit()
        self._logger.debug(
            "Transferred {} message(s) to container {}.",
            len(additions),
            target.container_id,
        )
