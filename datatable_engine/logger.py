import json
import logging
from datetime import datetime, timezone
from typing import Any

_CONFIGURED: set[str] = set()


def get_logger(name: str, level: str | int = logging.INFO) -> logging.Logger:
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger
    logger.setLevel(level)
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    _CONFIGURED.add(name)
    return logger


def set_log_level(level: str | int) -> None:
    for name in _CONFIGURED:
        logging.getLogger(name).setLevel(level)


def log_action(
    logger: logging.Logger,
    module: str,
    action: str,
    outcome: str,
    level: int = logging.INFO,
    **details: Any,
) -> None:
    if not logger.isEnabledFor(level):
        return
    logger.log(
        level,
        json.dumps(
            {
                "ts": datetime.now(timezone.utc).isoformat(),
                "level": logging.getLevelName(level),
                "module": module,
                "action": action,
                "outcome": outcome,
                **details,
            },
            default=str,
        ),
    )
