"""
Holding area for messages that are delivered on a later navigation.
"""

from __future__ import annotations

from typing import Callable, Dict, Iterator, List, Optional, Sequence, Tuple, Union

from shared.message_record import MessageRecord, RecordOrRecords, as_id_list, as_record_list
from flash_queue.flash_queue import logger as app_logger

IndexResolver = Callable[[int], Optional[int]]


class TransitionQueue:
    """Insertion-ordered list of records counting down their ``wait``."""

    def __init__(self) -> None:
        self._logger = app_logger.get_logger()
        self._records: List[MessageRecord] = []

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[MessageRecord]:
        return iter(tuple(self._records))

    @property
    def records(self) -> Tuple[MessageRecord, ...]:
        return tuple(self._records)

    def enqueue(self, records: RecordOrRecords) -> None:
        known = {record.id for record in self._records}
        for record in as_record_list(records):
            if record.id in known:
                continue
            self._records.append(record)
            known.add(record.id)

    def cancel(self, ids: Union[str, Sequence[str]]) -> List[str]:
        """Remove queued records by id. Returns the ids that were not queued."""
        not_found: List[str] = []
        for record_id in as_id_list(ids):
            for idx, record in enumerate(self._records):
                if record.id == record_id:
                    del self._records[idx]
                    break
            else:
                not_found.append(record_id)
        return not_found

    def drain(self, resolve_index: IndexResolver) -> Dict[int, List[MessageRecord]]:
        """
        Count every queued record down by one navigation and pull the due ones.

        Due records (``wait <= 0``) leave the queue and are returned grouped
        by resolved container index, preserving queue order. Due records with
        no container to go to are dropped.
        """
        if not self._records:
            return {}

        for record in self._records:
            record.wait -= 1

        due = [record for record in self._records if record.wait <= 0]
        if not due:
            return {}
        self._records = [record for record in self._records if record.wait > 0]

        additions: Dict[int, List[MessageRecord]] = {}
        dropped = 0
        for record in due:
            idx = resolve_index(record.target)
            if idx is None:
                dropped += 1
                continue
            additions.setdefault(idx, []).append(record)

        if dropped:
            self._logger.debug("No container registered; dropped {} due message(s).", dropped)
        self._logger.debug(
            "Transition drain released {} message(s), {} still waiting.",
            len(due),
            len(self._records),
        )
        return additions

    def clear(self) -> None:
        self._records.clear()
