from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any

from datatable_engine.exceptions import DuplicateColumnError, TableConfigError, UnknownSearchKeyError

FieldAccessor = Callable[[Any, str], Any]
CellRenderer = Callable[[Any, Any], str]


def mapping_accessor(record: Mapping[str, Any], key: str) -> Any:
    return record.get(key)


def attribute_accessor(record: object, key: str) -> Any:
    return getattr(record, key, None)


@dataclass(frozen=True)
class ColumnDef:
    key: str
    label: str
    sortable: bool = False
    render: CellRenderer | None = None


@dataclass(frozen=True)
class ColumnSet:
    """Ordered, immutable column definitions with unique keys."""

    columns: tuple[ColumnDef, ...]

    @classmethod
    def build(cls, columns: Iterable[ColumnDef]) -> "ColumnSet":
        resolved = tuple(columns)
        seen: set[str] = set()
        for column in resolved:
            if not column.key:
                raise TableConfigError("Column key must be a non-empty string")
            if column.key in seen:
                raise DuplicateColumnError(f"Duplicate column key: {column.key!r}")
            seen.add(column.key)
        return cls(columns=resolved)

    @property
    def keys(self) -> tuple[str, ...]:
        return tuple(column.key for column in self.columns)

    def get(self, key: str | None) -> ColumnDef | None:
        if key is None:
            return None
        return next((column for column in self.columns if column.key == key), None)

    def is_sortable(self, key: str | None) -> bool:
        column = self.get(key)
        return bool(column and column.sortable)

    def __iter__(self) -> Iterator[ColumnDef]:
        return iter(self.columns)

    def __len__(self) -> int:
        return len(self.columns)


def resolve_search_keys(
    search_keys: Iterable[str] | None,
    columns: ColumnSet,
    *,
    strict: bool = False,
) -> frozenset[str]:
    keys = frozenset(search_keys or ())
    if strict:
        unknown = sorted(keys - set(columns.keys))
        if unknown:
            raise UnknownSearchKeyError(f"Search keys not present in columns: {unknown}")
    return keys
