from __future__ import annotations

import os
from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeVar

from dotenv import load_dotenv

DEFAULT_PAGE_SIZE = 10

N = TypeVar("N", int, float)


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class EngineConfig:
    page_size: int = DEFAULT_PAGE_SIZE
    api_base_url: str | None = None
    timeout_seconds: float = 30.0
    retries: int = 0
    retry_backoff_seconds: float = 1.0
    telemetry_enabled: bool = False
    log_level: str = "INFO"


_FLAG_VALUES = {"1": True, "true": True, "yes": True, "on": True, "0": False, "false": False, "no": False, "off": False}
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _env(name: str) -> str | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    return raw.strip()


def _number(name: str, default: N, cast: Callable[[str], N], *, minimum: N, inclusive: bool = True) -> N:
    raw = _env(name)
    if raw is None:
        return default
    try:
        value = cast(raw)
    except ValueError as exc:
        kind = "an integer" if cast is int else "a number"
        raise ConfigError(f"Invalid {name}: expected {kind}, got {raw!r}") from exc
    if value != value or value < minimum or (not inclusive and value == minimum):
        bound = ">=" if inclusive else ">"
        raise ConfigError(f"Invalid {name}: expected {bound} {minimum}, got {value}")
    return value


def _flag(name: str, default: bool) -> bool:
    raw = _env(name)
    if raw is None:
        return default
    try:
        return _FLAG_VALUES[raw.lower()]
    except KeyError:
        raise ConfigError(f"Invalid {name}: expected one of {sorted(_FLAG_VALUES)}, got {raw!r}") from None


def load_config(env_file: str | None = None) -> EngineConfig:
    """Build an EngineConfig from ``DATATABLE_*`` variables, after loading ``env_file``.

    Unset or blank variables keep the dataclass defaults.
    """
    load_dotenv(env_file)
    defaults = EngineConfig()

    log_level = (_env("DATATABLE_LOG_LEVEL") or defaults.log_level).upper()
    if log_level not in _LOG_LEVELS:
        raise ConfigError(f"Invalid DATATABLE_LOG_LEVEL: {log_level!r}")

    return EngineConfig(
        page_size=_number("DATATABLE_PAGE_SIZE", defaults.page_size, int, minimum=1),
        api_base_url=(_env("DATATABLE_API_BASE_URL") or "").rstrip("/") or None,
        timeout_seconds=_number("DATATABLE_TIMEOUT_SECONDS", defaults.timeout_seconds, float, minimum=0.0, inclusive=False),
        retries=_number("DATATABLE_RETRIES", defaults.retries, int, minimum=0),
        retry_backoff_seconds=_number("DATATABLE_RETRY_BACKOFF_SECONDS", defaults.retry_backoff_seconds, float, minimum=0.0),
        telemetry_enabled=_flag("DATATABLE_TELEMETRY_ENABLED", defaults.telemetry_enabled),
        log_level=log_level,
    )
