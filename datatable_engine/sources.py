from __future__ import annotations

import json
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Protocol
from urllib.parse import urljoin

import requests
from pydantic import BaseModel, ValidationError

from datatable_engine.config import EngineConfig
from datatable_engine.engine import DataTable
from datatable_engine.exceptions import ApiError, RequestTimeoutError, ServerError, TransportError
from datatable_engine.logger import get_logger, log_action

logger = get_logger(__name__)

Record = dict[str, Any]


class RecordSource(Protocol):
    def fetch(self) -> list[Any]:
        ...


class RecordEnvelope(BaseModel):
    items: list[Record] | None = None
    docs: list[Record] | None = None
    data: list[Record] | None = None

    def records(self) -> list[Record]:
        for candidate in (self.items, self.docs, self.data):
            if candidate is not None:
                return candidate
        return []


def parse_records(payload: Any) -> list[Record]:
    """Accept a bare JSON list or an object wrapping it in items/docs/data."""
    if isinstance(payload, list):
        payload = {"items": payload}
    try:
        envelope = RecordEnvelope.model_validate(payload)
    except ValidationError as exc:
        raise ApiError(
            message=f"Unexpected record payload: {exc.error_count()} error(s)",
            status_code=0,
            payload=payload,
        ) from exc
    return envelope.records()


def _error_message(response: requests.Response) -> tuple[str, Any]:
    try:
        payload = response.json()
    except (json.JSONDecodeError, ValueError):
        payload = {"message": response.text}
    message = payload.get("message") if isinstance(payload, dict) else None
    return str(message or f"HTTP {response.status_code}"), payload


@dataclass
class HttpRecordSource:
    """GET a collection endpoint and return its records.

    5xx responses and transport failures are retried ``retries`` times with
    exponential backoff; a timeout surfaces as status 408.
    """

    base_url: str
    path: str
    params: dict[str, Any] | None = None
    headers: dict[str, str] = field(default_factory=dict)
    timeout_seconds: float = 30.0
    retries: int = 0
    retry_backoff_seconds: float = 1.0
    session: requests.Session | None = None
    sleeper: Callable[[float], None] = time.sleep

    @classmethod
    def from_config(cls, config: EngineConfig, path: str, **kwargs: Any) -> "HttpRecordSource":
        if not config.api_base_url:
            raise ValueError("DATATABLE_API_BASE_URL is required for HttpRecordSource")
        return cls(
            base_url=config.api_base_url,
            path=path,
            timeout_seconds=config.timeout_seconds,
            retries=config.retries,
            retry_backoff_seconds=config.retry_backoff_seconds,
            **kwargs,
        )

    def __post_init__(self) -> None:
        if self.session is None:
            self.session = requests.Session()

    @property
    def url(self) -> str:
        return urljoin(self.base_url.rstrip("/") + "/", self.path.lstrip("/"))

    def fetch(self) -> list[Record]:
        request_headers = {"Accept": "application/json", "Content-Type": "application/json", **self.headers}
        attempts = self.retries + 1
        for attempt in range(attempts):
            last_attempt = attempt >= attempts - 1
            try:
                response = self.session.get(
                    self.url,
                    params=self.params,
                    headers=request_headers,
                    timeout=self.timeout_seconds,
                )
            except requests.Timeout as exc:
                error: ApiError = RequestTimeoutError(message="Request timeout", status_code=408)
                if last_attempt:
                    raise error from exc
            except requests.RequestException as exc:
                error = TransportError(message=str(exc), status_code=0, payload={"type": type(exc).__name__})
                if last_attempt:
                    raise error from exc
            else:
                if response.ok:
                    if response.status_code == 204 or not response.content:
                        return []
                    try:
                        payload = response.json()
                    except ValueError as exc:
                        raise ApiError(message="Response is not valid JSON", status_code=response.status_code) from exc
                    return parse_records(payload)
                message, payload = _error_message(response)
                if response.status_code < 500:
                    raise ApiError(message=message, status_code=response.status_code, payload=payload)
                error = ServerError(message=message, status_code=response.status_code, payload=payload)
                if last_attempt:
                    raise error
            log_action(logger, "http_source", "fetch", "retry", attempt=attempt + 1, error=str(error))
            self.sleeper(self.retry_backoff_seconds * (2**attempt))
        raise RuntimeError("unreachable: fetch loop exited without a result")


class RecordLoader:
    """Feed a table from a source: loading flag, then records or an error."""

    def __init__(self, table: DataTable, source: RecordSource) -> None:
        self.table = table
        self.source = source

    def load(self) -> bool:
        self.table.set_loading(True)
        self.table.set_error(None)
        try:
            records = self.source.fetch()
        except ApiError as exc:
            log_action(logger, self.table.name, "load", "error", status_code=exc.status_code, message=exc.message)
            self.table.set_error(exc)
            return False
        finally:
            self.table.set_loading(False)
        self.table.set_records(records)
        log_action(logger, self.table.name, "load", "success", count=len(records))
        return True
