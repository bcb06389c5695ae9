from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from datatable_engine.columns import ColumnDef
from datatable_engine.config import ConfigError, load_config
from datatable_engine.engine import DataTable
from datatable_engine.exceptions import ApiError, TableConfigError
from datatable_engine.logger import set_log_level
from datatable_engine.sources import HttpRecordSource, RecordLoader, parse_records
from datatable_engine.table_printer import render_table


class ColumnSpec(BaseModel):
    key: str = Field(min_length=1)
    label: str | None = None
    sortable: bool = False

    def to_column(self) -> ColumnDef:
        return ColumnDef(key=self.key, label=self.label or self.key, sortable=self.sortable)


class TableDefinition(BaseModel):
    columns: list[ColumnSpec] = Field(min_length=1)
    search_keys: list[str] = Field(default_factory=list)
    page_size: int | None = None


def load_table_definition(path: Path) -> TableDefinition:
    return TableDefinition.model_validate(json.loads(path.read_text(encoding="utf-8")))


def load_records_file(path: Path) -> list[dict[str, Any]]:
    return parse_records(json.loads(path.read_text(encoding="utf-8")))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="datatable-view", description="Search, sort and page a JSON record set.")
    parser.add_argument("records", nargs="?", type=Path, help="JSON file with a list of records")
    parser.add_argument("--api-path", help="Collection path fetched from DATATABLE_API_BASE_URL")
    parser.add_argument("--table", required=True, type=Path, help="JSON table definition (columns, search_keys, page_size)")
    parser.add_argument("--search", default="", help="Free-text search")
    parser.add_argument("--sort", action="append", default=[], metavar="KEY", help="Click a column header; repeat to toggle")
    parser.add_argument("--page", type=int, default=1, help="Page to show")
    parser.add_argument("--env-file", default=None)
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if (args.records is None) == (args.api_path is None):
        parser.error("pass either a records file or --api-path")
    try:
        config = load_config(args.env_file)
        set_log_level(config.log_level)
        definition = load_table_definition(args.table)
        table: DataTable = DataTable(
            [],
            [column.to_column() for column in definition.columns],
            search_keys=definition.search_keys,
            page_size=config.page_size if definition.page_size is None else definition.page_size,
            name=args.table.stem,
        )
        if args.api_path:
            RecordLoader(table, HttpRecordSource.from_config(config, args.api_path)).load()
        else:
            table.set_records(load_records_file(args.records))
    except (ConfigError, TableConfigError, ValidationError, ValueError, OSError) as exc:
        print(f"config error: {exc}", file=sys.stderr)
        return 2
    except ApiError as exc:
        print(f"load error: {exc}", file=sys.stderr)
        return 1

    if args.search:
        table.search(args.search)
    for key in args.sort:
        table.toggle_sort(key)
    table.goto_page(args.page)

    for line in render_table(table):
        print(line)
    return 1 if table.error is not None else 0


if __name__ == "__main__":
    raise SystemExit(main())
