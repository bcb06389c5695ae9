from datetime import datetime

from datatable_engine.columns import ColumnDef
from datatable_engine.engine import DataTable
from datatable_engine.table_printer import EMPTY_VALUE, normalize_value, print_table, render_table


def test_normalize_value() -> None:
    assert normalize_value(None) == EMPTY_VALUE
    assert normalize_value("  ") == EMPTY_VALUE
    assert normalize_value(" Bob ") == "Bob"
    assert normalize_value(False) == "false"
    assert normalize_value(datetime(2026, 3, 4, 5, 6, 7)) == "2026-03-04 05:06:07"
    assert normalize_value(12) == "12"


def test_state_placeholders(people_columns) -> None:
    assert render_table(DataTable([], people_columns, is_loading=True)) == ["Loading..."]
    assert render_table(DataTable([], people_columns, error=RuntimeError("Failed to load data"))) == [
        "Error: Failed to load data"
    ]
    assert render_table(DataTable([], people_columns)) == ["No data available"]


def test_populated_table_with_sort_arrow_and_renderer(people) -> None:
    columns = [
        ColumnDef("name", "Name", sortable=True),
        ColumnDef("age", "Age", render=lambda value, record: f"{value} yrs"),
    ]
    table = DataTable(people, columns)
    table.toggle_sort("name")

    lines = render_table(table)

    assert lines[0].startswith("Name ▲")
    assert lines[2].startswith("Alice")
    assert lines[2].endswith("25 yrs")
    assert len(lines) == 5

    table.toggle_sort("name")
    assert render_table(table)[0].startswith("Name ▼")


def test_filtered_to_zero_keeps_table_shell(produce) -> None:
    table = DataTable(produce, [ColumnDef("name", "Name")], search_keys=["name"])
    table.search("zzz")

    lines = render_table(table)

    assert lines == ["Search: zzz", "Name", "----"]


def test_footer_only_with_several_pages(items, capsys) -> None:
    table = DataTable(items, [ColumnDef("id", "ID"), ColumnDef("name", "Name")])

    print_table(table, title="Items")

    output = capsys.readouterr().out
    assert "Items" in output
    assert output.rstrip().endswith("Page 1 of 2")
    assert "Page" not in "\n".join(render_table(DataTable(items[:3], [ColumnDef("id", "ID")])))


def test_page_past_the_end_is_called_out(items) -> None:
    table = DataTable(items, [ColumnDef("id", "ID")])
    table.goto_page(5)

    assert render_table(table)[-1] == "Page 5 is past the last page (2)"

    single = DataTable(items[:3], [ColumnDef("id", "ID")])
    single.goto_page(2)
    assert render_table(single) == ["ID", "--", "Page 2 is past the last page (1)"]
