from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from typing import Any, Generic, TypeVar

from datatable_engine.columns import ColumnDef, ColumnSet, FieldAccessor, mapping_accessor, resolve_search_keys
from datatable_engine.config import DEFAULT_PAGE_SIZE, EngineConfig
from datatable_engine.filtering import filter_records
from datatable_engine.logger import get_logger, log_action, set_log_level
from datatable_engine.pagination import PageWindow, can_next, can_previous, paginate, validate_page_size
from datatable_engine.query_state import QueryState
from datatable_engine.sorting import SortDirection, sort_records
from datatable_engine.stage_cache import StageCache
from datatable_engine.telemetry import TableSnapshot, TelemetryLogger, build_event
from datatable_engine.view_state import (
    DerivedView,
    EmptyState,
    ErrorState,
    LoadingState,
    PopulatedState,
    RenderState,
    RenderStatus,
    describe_error,
    resolve_render_status,
)

T = TypeVar("T")

logger = get_logger(__name__)


class DataTable(Generic[T]):
    """Search, sort and paginate an in-memory record set for one view.

    The table owns its query state. Callers change it only through
    ``search``, ``toggle_sort`` and the page navigation methods; derived rows
    are recomputed lazily, stage by stage, when a stage's inputs change.
    """

    def __init__(
        self,
        records: Sequence[T],
        columns: Iterable[ColumnDef],
        *,
        search_keys: Iterable[str] | None = None,
        page_size: int = DEFAULT_PAGE_SIZE,
        is_loading: bool = False,
        error: object | None = None,
        on_row_select: Callable[[T], Any] | None = None,
        accessor: FieldAccessor = mapping_accessor,
        strict_search_keys: bool = False,
        name: str = "table",
        telemetry: TelemetryLogger | None = None,
    ) -> None:
        self.columns = ColumnSet.build(columns)
        self.search_keys = resolve_search_keys(search_keys, self.columns, strict=strict_search_keys)
        self.page_size = validate_page_size(page_size)
        self.accessor = accessor
        self.on_row_select = on_row_select
        self.name = name
        self.telemetry = telemetry
        self.is_loading = is_loading
        self.error = error
        self._records: Sequence[T] = _as_sequence(records)
        self._generation = 0
        self._query = QueryState()
        self._filter_cache: StageCache[list[T]] = StageCache("filter")
        self._sort_cache: StageCache[list[T]] = StageCache("sort")
        self._page_cache: StageCache[PageWindow[T]] = StageCache("paginate")

    @classmethod
    def from_config(
        cls,
        config: EngineConfig,
        records: Sequence[T],
        columns: Iterable[ColumnDef],
        **kwargs: Any,
    ) -> "DataTable[T]":
        kwargs.setdefault("page_size", config.page_size)
        set_log_level(config.log_level)
        if kwargs.get("telemetry") is None:
            kwargs["telemetry"] = TelemetryLogger.from_config(config)
        return cls(records, columns, **kwargs)

    # inputs

    @property
    def records(self) -> Sequence[T]:
        return self._records

    def set_records(self, records: Sequence[T]) -> None:
        """Install a record set; a new collection resets the query state."""
        if records is self._records:
            return
        self._records = _as_sequence(records)
        self._generation += 1
        self._query = self._query.reset()
        self._emit("record_load", "replace", context={"count": len(self._records)})

    def set_loading(self, is_loading: bool) -> None:
        self.is_loading = is_loading

    def set_error(self, error: object | None) -> None:
        self.error = error
        if error is not None:
            self._emit("error", "upstream", success=False, error_code=type(error).__name__)

    # query state

    @property
    def query(self) -> QueryState:
        return self._query

    @property
    def search_text(self) -> str:
        return self._query.search_text

    @property
    def sort_key(self) -> str | None:
        return self._query.sort_key

    @property
    def sort_direction(self) -> SortDirection:
        return self._query.sort_direction

    @property
    def current_page(self) -> int:
        return self._query.current_page

    @property
    def search_enabled(self) -> bool:
        return bool(self.search_keys)

    def search(self, text: str) -> QueryState:
        self._query = self._query.apply_search(text)
        self._emit("search", "apply", context={"length": len(text), "page": self._query.current_page})
        return self._query

    def toggle_sort(self, key: str) -> QueryState:
        if not self.columns.is_sortable(key):
            log_action(logger, self.name, "toggle_sort", "ignored", level=logging.WARNING, key=key)
            return self._query
        self._query = self._query.toggle_sort(key)
        self._emit("sort", "toggle", context={"key": key, "direction": self._query.sort_direction.value})
        return self._query

    def goto_page(self, page: int) -> QueryState:
        self._query = self._query.goto_page(page)
        self._emit("pagination", "goto", context={"page": self._query.current_page})
        return self._query

    def next_page(self) -> QueryState:
        self._query = self._query.next_page(self.view.total_pages)
        self._emit("pagination", "next", context={"page": self._query.current_page})
        return self._query

    def previous_page(self) -> QueryState:
        self._query = self._query.previous_page()
        self._emit("pagination", "previous", context={"page": self._query.current_page})
        return self._query

    def sort_indicator(self, key: str) -> SortDirection | None:
        if key != self._query.sort_key or not self.columns.is_sortable(key):
            return None
        return self._query.sort_direction

    # pipeline

    def _effective_sort_key(self) -> str | None:
        key = self._query.sort_key
        return key if self.columns.is_sortable(key) else None

    def _filtered(self) -> tuple[tuple[Any, ...], list[T]]:
        key = (self._generation, self._query.search_text, self.search_keys)
        rows = self._filter_cache.get_or_compute(
            key,
            lambda: filter_records(self._records, self._query.search_text, self.search_keys, self.accessor),
        )
        return key, rows

    def _sorted(self) -> tuple[tuple[Any, ...], list[T]]:
        filter_key, filtered = self._filtered()
        sort_key = self._effective_sort_key()
        direction = self._query.sort_direction if sort_key is not None else None
        key = (filter_key, sort_key, direction)
        rows = self._sort_cache.get_or_compute(
            key,
            lambda: sort_records(filtered, sort_key, direction or SortDirection.ASC, self.accessor),
        )
        return key, rows

    def _window(self) -> PageWindow[T]:
        upstream_key, ordered = self._sorted()
        page = self._query.current_page
        return self._page_cache.get_or_compute(
            (upstream_key, page),
            lambda: paginate(ordered, self.page_size, page),
        )

    @property
    def view(self) -> DerivedView:
        window = self._window()
        return DerivedView(
            visible_rows=window.rows,
            total_pages=window.total_pages,
            current_page=window.page,
            total_rows=window.total,
        )

    @property
    def can_previous(self) -> bool:
        return can_previous(self._query.current_page)

    @property
    def can_next(self) -> bool:
        return can_next(self._query.current_page, self.view.total_pages)

    @property
    def show_pagination(self) -> bool:
        return self.view.total_pages > 1

    def render_status(self) -> RenderStatus:
        return resolve_render_status(is_loading=self.is_loading, error=self.error, record_count=len(self._records))

    def render_state(self) -> RenderState:
        status = self.render_status()
        if status is RenderStatus.LOADING:
            return LoadingState()
        if status is RenderStatus.ERROR:
            return ErrorState(error=self.error, message=describe_error(self.error))
        if status is RenderStatus.EMPTY:
            return EmptyState()
        return PopulatedState(view=self.view)

    def cache_stats(self) -> dict[str, dict[str, int]]:
        return {
            cache.name: {"hits": cache.hits, "misses": cache.misses}
            for cache in (self._filter_cache, self._sort_cache, self._page_cache)
        }

    # selection

    def select_row(self, index: int) -> T:
        """Activate the ``index``-th visible row and hand it to ``on_row_select``."""
        if index < 0:
            raise IndexError(f"row index out of range: {index}")
        row = self.view.visible_rows[index]
        if self.on_row_select is not None:
            self.on_row_select(row)
        self._emit("row_select", "activate", context={"index": index})
        return row

    def _emit(
        self,
        category: str,
        action: str,
        *,
        success: bool | None = None,
        error_code: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        outcome = "error" if success is False else "ok"
        log_action(logger, self.name, f"{category}.{action}", outcome, level=logging.DEBUG, **(context or {}))
        if self.telemetry is None:
            return
        event = build_event(
            self.name,
            category,
            action,
            self._snapshot(),
            success=success is not False,
            error_code=error_code,
            context=context,
        )
        self.telemetry.emit(event)

    def _snapshot(self) -> TableSnapshot:
        sort_key = self._effective_sort_key()
        return TableSnapshot(
            generation=self._generation,
            record_count=len(self._records),
            page=self._query.current_page,
            sort_key=sort_key,
            sort_direction=self._query.sort_direction.value if sort_key is not None else None,
        )


def _as_sequence(records: Iterable[T]) -> Sequence[T]:
    if isinstance(records, Sequence):
        return records
    return list(records)
