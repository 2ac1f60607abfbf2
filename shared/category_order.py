"""
Parsing of the configured display order for message categories.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Optional, Union

from .message_record import ValidationError

CategoryOrderInput = Optional[Union[str, Iterable[str]]]


def parse_category_order(value: CategoryOrderInput) -> List[str]:
    """
    Normalise a category order into a list of names.

    Accepts a comma delimited string (``"danger, warning, info"``) or any
    iterable of strings. Items are trimmed and blank entries dropped.
    """
    if value is None:
        return []

    if isinstance(value, str):
        items: Iterable[Any] = value.split(",")
    else:
        items = value

    order: List[str] = []
    for item in items:
        if not isinstance(item, str):
            raise ValidationError(f"message type order entries must be strings (got {item!r}).")
        name = item.strip()
        if name and name not in order:
            order.append(name)
    return order


def format_category_order(order: Iterable[str]) -> str:
    """Return the comma delimited form used for persisted settings."""
    return ", ".join(order)
