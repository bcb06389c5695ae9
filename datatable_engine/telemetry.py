from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, TextIO

from datatable_engine.config import EngineConfig

TELEMETRY_CATEGORIES = frozenset({"search", "sort", "pagination", "row_select", "record_load", "error"})
DEFAULT_TELEMETRY_FILE = Path("artifacts") / "telemetry" / "datatable.jsonl"
# Events describe interactions, never the records behind them.
_FORBIDDEN_CONTEXT_KEYS = frozenset({"record", "records", "row", "rows", "value", "values", "search_text"})


@dataclass(frozen=True)
class TableSnapshot:
    """Query position of a table at the moment an interaction happened."""

    generation: int
    record_count: int
    page: int
    sort_key: str | None = None
    sort_direction: str | None = None


@dataclass(frozen=True)
class TelemetryEvent:
    table: str
    category: str
    action: str
    timestamp_utc: str
    snapshot: TableSnapshot
    success: bool = True
    error_code: str | None = None
    context: dict[str, Any] = field(default_factory=dict)

    @property
    def name(self) -> str:
        return f"{self.table}.{self.category}.{self.action}"

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "event": self.name,
            "table": self.table,
            "category": self.category,
            "action": self.action,
            "ts": self.timestamp_utc,
            "success": self.success,
            **{key: value for key, value in asdict(self.snapshot).items() if value is not None},
        }
        if self.error_code:
            payload["error_code"] = self.error_code
        if self.context:
            payload["context"] = dict(self.context)
        return payload


def build_event(
    table: str,
    category: str,
    action: str,
    snapshot: TableSnapshot,
    *,
    success: bool = True,
    error_code: str | None = None,
    context: dict[str, Any] | None = None,
    now: datetime | None = None,
) -> TelemetryEvent:
    if category not in TELEMETRY_CATEGORIES:
        raise ValueError(f"Unsupported telemetry category: {category}")
    context = dict(context or {})
    illegal = sorted(key for key in context if key.lower() in _FORBIDDEN_CONTEXT_KEYS)
    if illegal:
        raise ValueError(f"Record data is forbidden in telemetry context: {illegal}")
    return TelemetryEvent(
        table=table,
        category=category,
        action=action,
        timestamp_utc=(now or datetime.now(timezone.utc)).isoformat(),
        snapshot=snapshot,
        success=success,
        error_code=error_code,
        context=context,
    )


class TelemetryLogger:
    """Append table interaction events to a JSONL file.

    A logger that exists is a logger that writes; ``from_config`` returns
    ``None`` when telemetry is switched off so tables simply carry no sink.
    """

    def __init__(self, log_file: str | Path = DEFAULT_TELEMETRY_FILE, *, mirror: TextIO | None = None) -> None:
        self.log_file = Path(log_file)
        self.mirror = mirror
        self.emitted = 0

    @classmethod
    def from_config(cls, config: EngineConfig, log_file: str | Path | None = None) -> "TelemetryLogger | None":
        if not config.telemetry_enabled:
            return None
        return cls(log_file or DEFAULT_TELEMETRY_FILE)

    def emit(self, event: TelemetryEvent) -> None:
        line = json.dumps(event.to_dict(), sort_keys=True)
        self.log_file.parent.mkdir(parents=True, exist_ok=True)
        with self.log_file.open("a", encoding="utf-8") as fp:
            fp.write(f"{line}\n")
        if self.mirror is not None:
            self.mirror.write(f"{line}\n")
        self.emitted += 1

    def read_events(self) -> list[dict[str, Any]]:
        if not self.log_file.exists():
            return []
        with self.log_file.open(encoding="utf-8") as fp:
            return [json.loads(line) for line in fp if line.strip()]
