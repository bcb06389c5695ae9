from __future__ import annotations

from dataclasses import dataclass, replace

from datatable_engine.pagination import can_next, can_previous
from datatable_engine.sorting import SortDirection


@dataclass(frozen=True)
class QueryState:
    """Search, sort and page position of one table.

    Instances are immutable; every transition returns a new state.
    """

    search_text: str = ""
    sort_key: str | None = None
    sort_direction: SortDirection = SortDirection.ASC
    current_page: int = 1

    def apply_search(self, text: str) -> "QueryState":
        """New search text, always back on page 1."""
        if text == self.search_text:
            return self
        return replace(self, search_text=text, current_page=1)

    def toggle_sort(self, key: str) -> "QueryState":
        """Same key flips the direction; another key starts ascending."""
        if key == self.sort_key:
            return replace(self, sort_direction=self.sort_direction.flipped())
        return replace(self, sort_key=key, sort_direction=SortDirection.ASC)

    def goto_page(self, page: int) -> "QueryState":
        return replace(self, current_page=max(1, page))

    def next_page(self, total_pages: int) -> "QueryState":
        if not can_next(self.current_page, total_pages):
            return self
        return replace(self, current_page=self.current_page + 1)

    def previous_page(self) -> "QueryState":
        if not can_previous(self.current_page):
            return self
        return replace(self, current_page=self.current_page - 1)

    def reset(self) -> "QueryState":
        return QueryState()
