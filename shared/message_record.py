"""
Message record model shared by the queue coordinator and the display surfaces.
"""

from __future__ import annotations

import math
import uuid
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence, Union

DEFAULT_MESSAGE_TYPE = "info"


class ValidationError(ValueError):
    """Raised when a message record is requested with malformed numeric fields."""


@dataclass(slots=True)
class MessageRecord:
    """
    A single flash message.

    ``lifespan`` counts the update passes the record survives once displayed,
    ``wait`` counts the navigations it sits in the transition queue before
    delivery. Both are plain counters and are mutated in place by the
    coordinator.
    """

    type: str
    msg: Any
    target: int = 0
    lifespan: int = 1
    wait: int = 0
    id: str = field(default_factory=lambda: uuid.uuid4().hex)


RecordOrRecords = Union[MessageRecord, List[MessageRecord]]


def create_message_records(
    payload: Any,
    *,
    type: Optional[str] = None,
    target: Any = 0,
    lifespan: Any = 1,
    wait: Any = 0,
    default_type: str = DEFAULT_MESSAGE_TYPE,
) -> RecordOrRecords:
    """
    Build one record per payload.

    A list or tuple of payloads produces a list of records sharing the same
    type and counters; anything else (strings included) produces a single
    record. Numeric fields are validated before any record exists.
    """
    msg_type = str(type) if type else default_type
    target_value = coerce_int(target, field="target")
    lifespan_value = coerce_int(lifespan, field="lifespan")
    wait_value = coerce_int(wait, field="wait")

    if isinstance(payload, (list, tuple)):
        return [
            MessageRecord(
                type=msg_type,
                msg=item,
                target=target_value,
                lifespan=lifespan_value,
                wait=wait_value,
            )
            for item in payload
        ]

    return MessageRecord(
        type=msg_type,
        msg=payload,
        target=target_value,
        lifespan=lifespan_value,
        wait=wait_value,
    )


def extract_ids(records: RecordOrRecords) -> Union[str, List[str]]:
    """Return the id of a single record, or the ids of a list of records."""
    if isinstance(records, list):
        return [record.id for record in records]
    return records.id


def as_record_list(records: Optional[RecordOrRecords]) -> List[MessageRecord]:
    if records is None:
        return []
    if isinstance(records, list):
        return records
    return [records]


def as_id_list(ids: Union[str, Sequence[str]]) -> List[str]:
    if isinstance(ids, (list, tuple, set, frozenset)):
        return list(ids)
    return [ids]


def coerce_int(value: Any, *, field: str) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be an integer, not a boolean.")
    if isinstance(value, float) and not math.isfinite(value):
        raise ValidationError(f"{field} must be a finite number.")
    if isinstance(value, str):
        value = value.strip()
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"{field} must be an integer (got {value!r}).") from exc
