"""
JSON structured logging utilities for CLI Compat.
"""

import json
import logging
import sys
import time
from typing import Any, Optional

CONTEXT_FIELDS = ("feature_id", "release", "state", "gate")


class JsonFormatter(logging.Formatter):
    """Formatter that renders log records as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": int(time.time() * 1000),
            "level": record.levelname,
            "msg": record.getMessage(),
            "logger": record.name,
            "module": record.module,
            "funcName": record.funcName,
            "lineno": record.lineno,
        }

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        for attr in CONTEXT_FIELDS:
            if hasattr(record, attr):
                payload[attr] = getattr(record, attr)

        return json.dumps(payload, ensure_ascii=False, default=str)


def configure_logging(
    level: int = logging.WARNING, fmt: str = "text", stream: Optional[Any] = None
) -> None:
    """Configure the root logger for plain text or JSON output."""

    handler = logging.StreamHandler(stream or sys.stderr)
    if fmt == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))

    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(level)


def log_with_context(
    logger: logging.Logger, level: int, message: str, **context: Any
) -> None:
    """Log a message with additional context fields."""

    logger.log(level, message, extra=context)
