"""JSON logging for postboard with per-request correlation.

Every record leaving the root handler is stamped with the current request id,
the HTTP method and path, and the authenticated user when one is known. The
request id is taken from ``X-Request-ID`` (or ``X-Correlation-ID``) when the
client sends one and echoed back on the response.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from flask import Flask, g, has_request_context, request

REQUEST_ID_HEADER = "X-Request-ID"
CORRELATION_HEADERS = (REQUEST_ID_HEADER, "X-Correlation-ID")

# Attributes copied verbatim from ``extra={...}`` or the context filter
CONTEXT_KEYS = ("request_id", "method", "path", "user_id")
EXTRA_KEYS = ("endpoint", "elapsed_ms", "status", "post_id", "comment_id", "revoked")


class JSONFormatter(logging.Formatter):
    """One JSON object per line; unset context keys are omitted."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "time": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(
                timespec="milliseconds"
            ),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in CONTEXT_KEYS + EXTRA_KEYS:
            value = getattr(record, key, None)
            if value is not None:
                payload[key] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class RequestContextFilter(logging.Filter):
    """Attach request metadata to records emitted while a request is active."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not has_request_context():
            return True
        record.request_id = ensure_request_id()
        record.method = request.method
        record.path = request.path
        if getattr(record, "user_id", None) is None:
            record.user_id = g.get("user_id")
        return True


def _incoming_request_id() -> str | None:
    for header in CORRELATION_HEADERS:
        value = (request.headers.get(header) or "").strip()
        if value:
            return value
    return None


def begin_request() -> str:
    """Assign the request id and forget any caller left over on ``g``."""

    g.pop("user_id", None)
    g.request_id = _incoming_request_id() or uuid4().hex
    return g.request_id


def ensure_request_id() -> str | None:
    """Return the id of the active request, assigning one on first use."""

    if not has_request_context():
        return None
    if not g.get("request_id"):
        g.request_id = _incoming_request_id() or uuid4().hex
    return g.request_id


def configure_logging(level: str | int = "INFO") -> None:
    """Route every logger through a single JSON handler on stdout."""

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter())
    handler.addFilter(RequestContextFilter())

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level.upper() if isinstance(level, str) else level)


def init_app(app: Flask) -> None:
    """Install the request-id hooks on ``app``."""

    app.logger.addFilter(RequestContextFilter())

    @app.before_request
    def _assign_request_id() -> None:
        begin_request()

    @app.after_request
    def _echo_request_id(response):
        response.headers[REQUEST_ID_HEADER] = ensure_request_id()
        return response


__all__ = ["begin_request", "configure_logging", "ensure_request_id", "init_app"]
