"""Logging setup and structured JSON events for per-node operations."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

STRUCTURED_LOGGER_NAME = "swarm_prune.events"


class JsonFormatter(logging.Formatter):
    """Format log records as JSON with the per-operation fields."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "workflow_step": getattr(record, "workflow_step", "unknown"),
            "node": getattr(record, "node", ""),
            "operation": getattr(record, "operation", None),
            "status": getattr(record, "status", record.levelname.lower()),
        }

        error_code = getattr(record, "error_code", None)
        error_message = getattr(record, "error_message", None)
        if error_code is not None:
            payload["error_code"] = error_code
        if error_message is not None:
            payload["error_message"] = error_message

        message = record.getMessage()
        if message:
            payload["message"] = message

        return json.dumps(payload, ensure_ascii=False)


def configure_logging(level: str = "WARNING") -> None:
    """Configure process-wide logging for CLI runs."""
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.WARNING
    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logging.getLogger(STRUCTURED_LOGGER_NAME).setLevel(numeric_level)


def get_structured_logger(name: str = STRUCTURED_LOGGER_NAME) -> logging.Logger:
    """Return a logger configured to emit JSON records."""
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    if logger.level == logging.NOTSET:
        logger.setLevel(logging.WARNING)
    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def log_operation_event(
    logger: logging.Logger,
    *,
    workflow_step: str,
    node: str,
    operation: str,
    status: str,
    message: str = "",
    error_code: str | None = None,
    error_message: str | None = None,
) -> None:
    """Emit a structured per-operation event."""
    extra: dict[str, Any] = {
        "workflow_step": workflow_step,
        "node": node,
        "operation": operation,
        "status": status,
        "error_code": error_code,
        "error_message": error_message,
    }
    logger.info(message, extra=extra)
