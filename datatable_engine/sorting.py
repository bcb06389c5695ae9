from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from functools import cmp_to_key
from typing import Any, TypeVar

from datatable_engine.columns import FieldAccessor, mapping_accessor

T = TypeVar("T")

_KIND_NUMBER = 0
_KIND_TEXT = 1
_KIND_OTHER = 2
_KIND_MISSING = 3


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"

    def flipped(self) -> "SortDirection":
        return SortDirection.DESC if self is SortDirection.ASC else SortDirection.ASC


def _kind(value: Any) -> int:
    if value is None:
        return _KIND_MISSING
    if isinstance(value, (int, float, Decimal, Fraction)):
        # NaN has no place among numbers; it sorts with the missing values
        return _KIND_MISSING if value != value else _KIND_NUMBER
    if isinstance(value, str):
        return _KIND_TEXT
    return _KIND_OTHER


def _sign(left: Any, right: Any) -> int:
    return (left > right) - (left < right)


def compare_values(left: Any, right: Any) -> int:
    """Total order: numbers < strings < other values < missing (None, NaN).

    Values of the same kind use native ordering; pairs that refuse to compare
    fall back to their string form.
    """
    left_kind, right_kind = _kind(left), _kind(right)
    if left_kind != right_kind:
        return _sign(left_kind, right_kind)
    if left_kind == _KIND_MISSING:
        return 0
    try:
        return _sign(left, right)
    except TypeError:
        return _sign(str(left), str(right))


def sort_records(
    records: Sequence[T],
    sort_key: str | None,
    direction: SortDirection = SortDirection.ASC,
    accessor: FieldAccessor = mapping_accessor,
) -> list[T]:
    if sort_key is None:
        return list(records)
    value_key = cmp_to_key(compare_values)
    # sorted() keeps equal items in input order even with reverse=True.
    return sorted(
        records,
        key=lambda record: value_key(accessor(record, sort_key)),
        reverse=SortDirection(direction) is SortDirection.DESC,
    )
