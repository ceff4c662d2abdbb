import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict

from flask import g, has_app_context, has_request_context, request


class RequestContextFilter(logging.Filter):
    """Attach request-scoped metadata to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = getattr(g, "request_id", None) if has_app_context() else None
        if has_request_context():
            record.path = request.path
            record.method = request.method
            record.remote_addr = request.headers.get("X-Forwarded-For", request.remote_addr)
        else:
            record.path = None
            record.method = None
            record.remote_addr = None
        return True


class JsonFormatter(logging.Formatter):
    """Render log records as JSON for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", None),
            "path": getattr(record, "path", None),
            "method": getattr(record, "method", None),
            "remote_addr": getattr(record, "remote_addr", None),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def configure_structured_logging(app) -> None:
    """Attach a structured stdout handler to the root logger once."""
    root = logging.getLogger()

    has_json_stream = any(
        isinstance(handler, logging.StreamHandler)
        and isinstance(getattr(handler, "formatter", None), JsonFormatter)
        for handler in root.handlers
    )
    if has_json_stream:
        return

    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(JsonFormatter())
    stream_handler.addFilter(RequestContextFilter())
    root.addHandler(stream_handler)
    app.logger.debug("Structured logging attached to root logger")
