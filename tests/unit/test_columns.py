import pytest

from datatable_engine.columns import ColumnDef, ColumnSet, resolve_search_keys
from datatable_engine.exceptions import DuplicateColumnError, TableConfigError, UnknownSearchKeyError


def test_column_set_keeps_order_and_sortability() -> None:
    columns = ColumnSet.build([ColumnDef("id", "ID"), ColumnDef("name", "Name", sortable=True)])

    assert columns.keys == ("id", "name")
    assert len(columns) == 2
    assert columns.is_sortable("name") is True
    assert columns.is_sortable("id") is False
    assert columns.is_sortable("missing") is False
    assert columns.is_sortable(None) is False


def test_duplicate_keys_are_rejected() -> None:
    with pytest.raises(DuplicateColumnError):
        ColumnSet.build([ColumnDef("id", "ID"), ColumnDef("id", "Other")])


def test_blank_key_is_rejected() -> None:
    with pytest.raises(TableConfigError):
        ColumnSet.build([ColumnDef("", "Nothing")])


def test_search_keys_are_order_insensitive() -> None:
    columns = ColumnSet.build([ColumnDef("name", "Name")])

    assert resolve_search_keys(["b", "a"], columns) == resolve_search_keys(["a", "b"], columns)
    assert resolve_search_keys(None, columns) == frozenset()


def test_strict_search_keys_must_be_columns() -> None:
    columns = ColumnSet.build([ColumnDef("name", "Name")])

    with pytest.raises(UnknownSearchKeyError):
        resolve_search_keys(["name", "category"], columns, strict=True)
    assert resolve_search_keys(["name"], columns, strict=True) == frozenset({"name"})
