from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Union

LOADING_MESSAGE = "Loading"
EMPTY_MESSAGE = "No data available"


class RenderStatus(str, Enum):
    LOADING = "loading"
    ERROR = "error"
    EMPTY = "empty"
    POPULATED = "populated"


@dataclass(frozen=True)
class DerivedView:
    visible_rows: tuple[Any, ...]
    total_pages: int
    current_page: int
    total_rows: int


@dataclass(frozen=True)
class LoadingState:
    status: ClassVar[RenderStatus] = RenderStatus.LOADING


@dataclass(frozen=True)
class ErrorState:
    status: ClassVar[RenderStatus] = RenderStatus.ERROR
    error: object
    message: str


@dataclass(frozen=True)
class EmptyState:
    status: ClassVar[RenderStatus] = RenderStatus.EMPTY


@dataclass(frozen=True)
class PopulatedState:
    status: ClassVar[RenderStatus] = RenderStatus.POPULATED
    view: DerivedView


RenderState = Union[LoadingState, ErrorState, EmptyState, PopulatedState]


def describe_error(error: object) -> str:
    message = getattr(error, "message", None)
    if message:
        return str(message)
    text = str(error)
    return text or type(error).__name__


def resolve_render_status(*, is_loading: bool, error: object | None, record_count: int) -> RenderStatus:
    """Loading beats error, error beats empty, empty beats populated.

    Only the raw record count decides emptiness; a search that matches nothing
    is still populated.
    """
    if is_loading:
        return RenderStatus.LOADING
    if error is not None:
        return RenderStatus.ERROR
    if record_count == 0:
        return RenderStatus.EMPTY
    return RenderStatus.POPULATED
