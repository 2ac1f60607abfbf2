from __future__ import annotations

import pytest

from shared.category_order import format_category_order, parse_category_order
from shared.message_record import ValidationError


def test_delimited_string_is_split_and_trimmed():
    assert parse_category_order("danger, warning,success ,  info") == [
        "danger",
        "warning",
        "success",
        "info",
    ]


def test_empty_values_give_no_order():
    assert parse_category_order(None) == []
    assert parse_category_order("") == []
    assert parse_category_order([]) == []


def test_blank_and_duplicate_entries_are_dropped():
    assert parse_category_order("danger,, ,danger,info") == ["danger", "info"]


def test_explicit_list_is_kept_in_order():
    assert parse_category_order(["info", "danger"]) == ["info", "danger"]


def test_non_string_entries_are_rejected():
    with pytest.raises(ValidationError):
        parse_category_order(["info", 3])


def test_format_round_trips_through_parse():
    order = ["danger", "info"]
    assert parse_category_order(format_category_order(order)) == order
