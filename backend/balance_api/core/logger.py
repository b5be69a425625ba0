"""JSON logging to stdout, correlated by request id."""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from flask import Flask, g, has_request_context, request

REQUEST_ID_HEADER = "X-Request-ID"
# Inbound headers accepted as the request id, first match wins
CORRELATION_HEADERS = (REQUEST_ID_HEADER, "X-Correlation-ID")

# ``extra=`` keys copied into the payload when set on the record
EXTRA_KEYS = ("endpoint", "elapsed_ms", "user_email", "game_id", "target_id", "outcome")


class JSONFormatter(logging.Formatter):
    """One JSON object per line: time, level, logger, message, request id and extras."""

    def format(self, record: logging.LogRecord) -> str:
        stamp = datetime.fromtimestamp(record.created, tz=timezone.utc)
        payload: dict[str, Any] = {
            "time": stamp.isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", None),
        }
        payload.update({key: getattr(record, key) for key in EXTRA_KEYS if hasattr(record, key)})
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class RequestIdFilter(logging.Filter):
    """Stamp ``record.request_id``; ``None`` outside of a request."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = ensure_request_id() if has_request_context() else None
        return True


def ensure_request_id() -> str:
    """
    Request id of the current request, cached on :data:`flask.g`.

    Taken from the first correlation header the client sent, otherwise a new
    UUID4. Outside of a request every call returns a fresh UUID4.
    """
    if not has_request_context():
        return str(uuid4())
    if "request_id" not in g:
        inbound = (request.headers.get(name) for name in CORRELATION_HEADERS)
        g.request_id = next((value for value in inbound if value), None) or str(uuid4())
    return g.request_id  # type: ignore[no-any-return]


def configure_logging(level: str | int = "INFO") -> None:
    """Replace root handlers with a single JSON stdout handler at ``level``."""
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter())
    handler.addFilter(RequestIdFilter())

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(level.upper() if isinstance(level, str) else level)


def init_app(app: Flask) -> None:
    """Assign a request id to every request and echo it on the response."""
    app.logger.addFilter(RequestIdFilter())

    @app.before_request
    def _assign_request_id() -> None:
        # g outlives the request when an app context was pushed beforehand
        g.pop("request_id", None)
        ensure_request_id()

    @app.after_request
    def _echo_request_id(response):
        response.headers.setdefault(REQUEST_ID_HEADER, ensure_request_id())
        return response


__all__ = ["configure_logging", "init_app", "ensure_request_id", "JSONFormatter"]
