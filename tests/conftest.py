from __future__ import annotations

import pytest

from datatable_engine.columns import ColumnDef


@pytest.fixture
def people() -> list[dict]:
    return [
        {"name": "Charlie", "age": 30},
        {"name": "Alice", "age": 25},
        {"name": "Bob", "age": 35},
    ]


@pytest.fixture
def people_columns() -> list[ColumnDef]:
    return [ColumnDef("name", "Name", sortable=True), ColumnDef("age", "Age", sortable=True)]


@pytest.fixture
def produce() -> list[dict]:
    return [
        {"name": "Apple", "category": "Fruit"},
        {"name": "Banana", "category": "Fruit"},
        {"name": "Carrot", "category": "Vegetable"},
    ]


@pytest.fixture
def items() -> list[dict]:
    return [{"id": idx, "name": f"Item {idx}"} for idx in range(1, 16)]
