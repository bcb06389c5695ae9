from __future__ import annotations

import json
from pathlib import Path

import pytest
import responses

from datatable_engine import cli


@pytest.fixture
def table_file(tmp_path: Path) -> Path:
    path = tmp_path / "people.json"
    path.write_text(
        json.dumps(
            {
                "columns": [
                    {"key": "name", "label": "Name", "sortable": True},
                    {"key": "age", "label": "Age", "sortable": True},
                ],
                "search_keys": ["name"],
                "page_size": 2,
            }
        ),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def records_file(tmp_path: Path, people) -> Path:
    path = tmp_path / "records.json"
    path.write_text(json.dumps(people), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path) -> None:
    monkeypatch.chdir(tmp_path)
    for key in ("DATATABLE_PAGE_SIZE", "DATATABLE_API_BASE_URL", "DATATABLE_RETRIES"):
        monkeypatch.delenv(key, raising=False)


def test_cli_sorts_and_pages(records_file, table_file, capsys) -> None:
    code = cli.main([str(records_file), "--table", str(table_file), "--sort", "name", "--sort", "name", "--page", "2"])

    lines = capsys.readouterr().out.splitlines()
    assert code == 0
    assert lines[0].startswith("Name ▼")
    assert lines[2].startswith("Alice")
    assert lines[-1] == "Page 2 of 2"


def test_cli_search(records_file, table_file, capsys) -> None:
    code = cli.main([str(records_file), "--table", str(table_file), "--search", "bo"])

    out = capsys.readouterr().out
    assert code == 0
    assert "Search: bo" in out
    assert "Bob" in out
    assert "Alice" not in out


def test_cli_empty_records(tmp_path, table_file, capsys) -> None:
    empty = tmp_path / "empty.json"
    empty.write_text("[]", encoding="utf-8")

    assert cli.main([str(empty), "--table", str(table_file)]) == 0
    assert capsys.readouterr().out.strip() == "No data available"


def test_cli_rejects_bad_table_definition(records_file, tmp_path, capsys) -> None:
    bad = tmp_path / "bad.json"
    bad.write_text(json.dumps({"columns": [{"key": "a"}, {"key": "a"}]}), encoding="utf-8")

    assert cli.main([str(records_file), "--table", str(bad)]) == 2
    assert "config error" in capsys.readouterr().err


def test_cli_rejects_zero_page_size(records_file, tmp_path) -> None:
    bad = tmp_path / "zero.json"
    bad.write_text(json.dumps({"columns": [{"key": "name"}], "page_size": 0}), encoding="utf-8")

    assert cli.main([str(records_file), "--table", str(bad)]) == 2


def test_cli_requires_exactly_one_source(table_file) -> None:
    with pytest.raises(SystemExit):
        cli.main(["--table", str(table_file)])


@responses.activate
def test_cli_loads_from_api(table_file, monkeypatch, capsys) -> None:
    monkeypatch.setenv("DATATABLE_API_BASE_URL", "https://api.example.com")
    responses.add(responses.GET, "https://api.example.com/api/people", json={"docs": [{"name": "Dana", "age": 41}]})

    code = cli.main(["--api-path", "/api/people", "--table", str(table_file)])

    assert code == 0
    assert "Dana" in capsys.readouterr().out


@responses.activate
def test_cli_reports_api_failure(table_file, monkeypatch, capsys) -> None:
    monkeypatch.setenv("DATATABLE_API_BASE_URL", "https://api.example.com")
    responses.add(responses.GET, "https://api.example.com/api/people", json={"message": "Failed to load data"}, status=500)

    code = cli.main(["--api-path", "/api/people", "--table", str(table_file)])

    assert code == 1
    assert capsys.readouterr().out.strip() == "Error: Failed to load data"
