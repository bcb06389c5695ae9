from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any, TypeVar

from datatable_engine.columns import FieldAccessor, mapping_accessor

T = TypeVar("T")


def searchable_text(value: Any) -> str | None:
    if value is None:
        return None
    return str(value).lower()


def record_matches(record: Any, needle: str, search_keys: Iterable[str], accessor: FieldAccessor) -> bool:
    for key in search_keys:
        text = searchable_text(accessor(record, key))
        if text is not None and needle in text:
            return True
    return False


def filter_records(
    records: Sequence[T],
    search_text: str,
    search_keys: Iterable[str],
    accessor: FieldAccessor = mapping_accessor,
) -> list[T]:
    """Keep records where any search key contains the text, case-insensitively.

    An empty search text keeps every record. Input order is preserved.
    """
    if not search_text:
        return list(records)
    needle = search_text.lower()
    keys = tuple(search_keys)
    return [record for record in records if record_matches(record, needle, keys, accessor)]
