from __future__ import annotations

import json
import logging
import sys
from typing import Any, Dict

SERVICE_NAME = "asanak-sms"
LIBRARY_LOGGER = "asanak"

# Never rendered, whatever a caller puts in a record's payload.
_SECRET_FIELDS = frozenset({"password", "asanak_password"})


class JsonFormatter(logging.Formatter):
    """One JSON object per record; the message is the event name, `record.extra` the fields."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "severity": record.levelname,
            "event": record.getMessage(),
            "logger": record.name,
            "ts": round(record.created, 3),
            "service": SERVICE_NAME,
        }
        fields = getattr(record, "extra", None)
        if isinstance(fields, dict):
            for key, value in fields.items():
                payload[key] = "***" if key.lower() in _SECRET_FIELDS else value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def _json_handler() -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter())
    return handler


def attach_debug_handler(name: str = LIBRARY_LOGGER) -> logging.Logger:
    """
    Make debug-mode events visible without any host logging setup.

    When neither the logger nor its ancestors have handlers, a JSON stdout
    handler is attached. The level is lowered to INFO either way so the stage
    events are not filtered out by a WARNING root.
    """
    logger = logging.getLogger(name)
    if not logger.hasHandlers():
        logger.addHandler(_json_handler())
    if logger.getEffectiveLevel() > logging.INFO:
        logger.setLevel(logging.INFO)
    return logger


def setup_logging(level: str = "INFO") -> None:
    root = logging.getLogger()
    root.setLevel(level)

    # httpx/httpcore debug output includes request bodies, which carry the gateway password
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    root.handlers[:] = [_json_handler()]
