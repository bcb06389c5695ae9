from __future__ import annotations

from dataclasses import dataclass


class DataTableError(Exception):
    pass


class TableConfigError(DataTableError, ValueError):
    """Table definition rejected at construction time."""


class InvalidPageSizeError(TableConfigError):
    pass


class DuplicateColumnError(TableConfigError):
    pass


class UnknownSearchKeyError(TableConfigError):
    pass


@dataclass
class ApiError(DataTableError):
    message: str
    status_code: int
    payload: object | None = None

    def __str__(self) -> str:
        return f"[{self.status_code}] {self.message}"


class TransportError(ApiError):
    """Network failure before an HTTP response was returned."""


class RequestTimeoutError(TransportError):
    pass


class ServerError(ApiError):
    """5xx server-side failures."""
