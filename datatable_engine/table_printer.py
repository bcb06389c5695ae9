from __future__ import annotations

from datetime import datetime
from typing import Any

from datatable_engine.columns import ColumnDef
from datatable_engine.engine import DataTable
from datatable_engine.sorting import SortDirection
from datatable_engine.view_state import EMPTY_MESSAGE, LOADING_MESSAGE, EmptyState, ErrorState, LoadingState

EMPTY_VALUE = "—"
_SORT_ARROWS = {SortDirection.ASC: "▲", SortDirection.DESC: "▼"}


def normalize_value(value: Any) -> str:
    if value is None:
        return EMPTY_VALUE
    if isinstance(value, str):
        return value.strip() or EMPTY_VALUE
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, datetime):
        return value.strftime("%Y-%m-%d %H:%M:%S")
    return str(value)


def render_cell(table: DataTable, column: ColumnDef, record: Any) -> str:
    value = table.accessor(record, column.key)
    if column.render is not None:
        return str(column.render(value, record))
    return normalize_value(value)


def render_header(table: DataTable, column: ColumnDef) -> str:
    arrow = _SORT_ARROWS.get(table.sort_indicator(column.key))
    return f"{column.label} {arrow}" if arrow else column.label


def render_table(table: DataTable) -> list[str]:
    state = table.render_state()
    if isinstance(state, LoadingState):
        return [f"{LOADING_MESSAGE}..."]
    if isinstance(state, ErrorState):
        return [f"Error: {state.message}"]
    if isinstance(state, EmptyState):
        return [EMPTY_MESSAGE]

    columns = list(table.columns)
    headers = [render_header(table, column) for column in columns]
    body = [[render_cell(table, column, record) for column in columns] for record in state.view.visible_rows]

    widths = []
    for idx, header in enumerate(headers):
        max_cell = max((len(row[idx]) for row in body), default=0)
        widths.append(max(len(header), max_cell))

    lines = []
    if table.search_enabled and table.search_text:
        lines.append(f"Search: {table.search_text}")
    lines.append(" | ".join(header.ljust(widths[idx]) for idx, header in enumerate(headers)))
    lines.append("-+-".join("-" * width for width in widths))
    for row in body:
        lines.append(" | ".join(cell.ljust(widths[idx]) for idx, cell in enumerate(row)))

    view = state.view
    if 0 < view.total_pages < view.current_page:
        lines.append(f"Page {view.current_page} is past the last page ({view.total_pages})")
    elif table.show_pagination:
        lines.append(f"Page {view.current_page} of {view.total_pages}")
    return lines


def print_table(table: DataTable, title: str | None = None) -> None:
    if title:
        print(f"\n{title}")
    for line in render_table(table):
        print(line)
