import pytest

from datatable_engine.exceptions import InvalidPageSizeError, TableConfigError
from datatable_engine.pagination import can_next, can_previous, paginate, total_pages, validate_page_size


def test_paginate_slices_requested_window(items) -> None:
    first = paginate(items, 10, 1)
    second = paginate(items, 10, 2)

    assert [row["id"] for row in first.rows] == list(range(1, 11))
    assert [row["id"] for row in second.rows] == list(range(11, 16))
    assert first.total == 15
    assert first.total_pages == second.total_pages == 2


def test_out_of_range_page_is_empty_not_an_error(items) -> None:
    assert paginate(items, 10, 3).rows == ()
    assert paginate(items, 10, 99).rows == ()
    assert paginate(items, 10, 0).rows == ()


def test_total_pages_rounds_up_and_is_zero_when_empty() -> None:
    assert total_pages(0, 10) == 0
    assert total_pages(1, 10) == 1
    assert total_pages(10, 10) == 1
    assert total_pages(11, 10) == 2
    assert paginate([], 10, 1).total_pages == 0


def test_navigation_bounds() -> None:
    assert can_previous(1) is False
    assert can_previous(2) is True
    assert can_next(1, 2) is True
    assert can_next(2, 2) is False
    assert can_next(1, 1) is False
    assert can_next(1, 0) is False


@pytest.mark.parametrize("size", [0, -3, 2.5, "10", True, None])
def test_invalid_page_size_fails_fast(size) -> None:
    with pytest.raises(InvalidPageSizeError):
        validate_page_size(size)


def test_invalid_page_size_is_a_config_error() -> None:
    with pytest.raises(TableConfigError):
        validate_page_size(0)
    with pytest.raises(ValueError):
        validate_page_size(0)
    assert validate_page_size(1) == 1
