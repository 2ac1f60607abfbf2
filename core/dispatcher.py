"""
Routing of message records into containers, lifespan aging and the
category grouping used for rendering.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from core.container_registry import ByHandle, ByIndex, ContainerRef, ContainerRegistry
from shared.category_order import CategoryOrderInput, parse_category_order
from shared.message_record import (
    DEFAULT_MESSAGE_TYPE,
    MessageRecord,
    RecordOrRecords,
    as_id_list,
    as_record_list,
    coerce_int,
    create_message_records,
)
from flash_queue.flash_queue import logger as app_logger


@dataclass(slots=True)
class MessageGroup:
    type: str
    messages: List[MessageRecord] = field(default_factory=list)

    @property
    def payloads(self) -> List[Any]:
        return [record.msg for record in self.messages]


class Dispatcher:
    """Writes records into containers and ages what they already show."""

    def __init__(
        self,
        registry: ContainerRegistry,
        *,
        default_message_type: str = DEFAULT_MESSAGE_TYPE,
        message_type_order: CategoryOrderInput = None,
    ) -> None:
        self._logger = app_logger.get_logger()
        self.registry = registry
        self.default_message_type = default_message_type
        self.message_type_order = parse_category_order(message_type_order)

    def set_message_type_order(self, order: CategoryOrderInput) -> None:
        self.message_type_order = parse_category_order(order)

    def add(
        self,
        payload: Any,
        *,
        type: Optional[str] = None,
        target: Any = 0,
        lifespan: Any = 1,
        update: bool = True,
        clear: bool = False,
    ) -> RecordOrRecords:
        """
        Build records for ``payload`` and show them right away.

        With no container registered the records are built (their ids are
        still handed back) but go nowhere.
        """
        records = create_message_records(
            payload,
            type=type,
            target=target,
            lifespan=lifespan,
            wait=0,
            default_type=self.default_message_type,
        )
        target_index = coerce_int(target, field="target")
        if not self.update_container(ByIndex(target_index), records, update=update, clear=clear):
            self._logger.debug("No container registered; message(s) not displayed.")
        return records

    def update_container(
        self,
        ref: ContainerRef,
        additions: Optional[RecordOrRecords] = None,
        *,
        update: bool = True,
        clear: bool = False,
    ) -> bool:
        """
        Refresh one container.

        ``clear`` empties the list outright. Otherwise ``update`` runs one
        aging pass over the existing messages, dropping those whose lifespan
        runs out. Additions are appended afterwards and are never aged by the
        same call. Returns False when ``ref`` resolves to no container.
        """
        container = self.registry.resolve_handle(ref)
        if container is None:
            return False
        messages = container.messages
        changed = False

        if clear:
            if messages:
                messages.clear()
                changed = True
        elif update and messages:
            for record in messages:
                record.lifespan -= 1
            survivors = [record for record in messages if record.lifespan > 0]
            if len(survivors) != len(messages):
                expired = len(messages) - len(survivors)
                messages[:] = survivors
                self._logger.debug(
                    "Expired {} message(s) from container {}.",
                    expired,
                    container.container_id,
                )
            changed = True

        new_records = as_record_list(additions)
        if new_records:
            known = {record.id for record in messages}
            for record in new_records:
                if record.id not in known:
                    messages.append(record)
                    known.add(record.id)
            changed = True

        if changed:
            container.messagesChanged.emit()
        return True

    def update_containers(
        self,
        additions: Optional[Mapping[int, List[MessageRecord]]] = None,
        *,
        update: bool = True,
        clear: bool = False,
    ) -> None:
        """Run ``update_container`` on every container with its share of ``additions``."""
        additions = additions or {}
        for idx, container in enumerate(self.registry):
            self.update_container(ByHandle(container), additions.get(idx), update=update, clear=clear)

    def remove(self, ids: Union[str, Sequence[str]]) -> List[str]:
        """
        Remove displayed records by id, searching containers in registry order
        and then records still waiting to move off an unregistered container.

        Returns the ids that were not displayed anywhere.
        """
        remaining = as_id_list(ids)
        for container in self.registry:
            if not remaining:
                break
            before = len(container.messages)
            still_missing: List[str] = []
            for record_id in remaining:
                for idx, record in enumerate(container.messages):
                    if record.id == record_id:
                        del container.messages[idx]
                        break
                else:
                    still_missing.append(record_id)
            remaining = still_missing
            if len(container.messages) != before:
                container.messagesChanged.emit()

        if remaining:
            remaining = self.registry.discard_pending(remaining)
        if remaining:
            self._logger.debug("Message id(s) not displayed: {}", ", ".join(map(str, remaining)))
        return remaining

    def group_and_order(self, records: Sequence[MessageRecord]) -> List[MessageGroup]:
        """
        Group records by type for rendering.

        Types named in the configured order come first, in that order; any
        other types follow in lexicographic order. Types without records are
        left out.
        """
        buckets: Dict[str, List[MessageRecord]] = {}
        for record in records:
            buckets.setdefault(record.type, []).append(record)

        groups: List[MessageGroup] = []
        for msg_type in self.message_type_order:
            bucket = buckets.pop(msg_type, None)
            if bucket:
                groups.append(MessageGroup(type=msg_type, messages=bucket))

        for msg_type in sorted(buckets, key=str):
            groups.append(MessageGroup(type=msg_type, messages=buckets[msg_type]))
        return groups
