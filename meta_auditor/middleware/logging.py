"""
Structured Logging Middleware

One access line per admin request, carrying the request id, the query
string (so a slow or failing audit can be replayed) and the authenticated
user. Formatting is JSON by default, plain text for local runs.
"""

import json
import logging
import time
import uuid
from collections.abc import Callable
from contextvars import ContextVar
from datetime import datetime, timezone

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

REQUEST_ID_HEADER = "X-Request-ID"
ACCESS_LOGGER = "meta_auditor.access"

request_id_var: ContextVar[str] = ContextVar("request_id", default="")

# Record attributes copied into JSON output when present
EXTRA_FIELDS = ("user_id", "method", "path", "query", "status_code", "duration_ms", "client_ip")

# No access line for these
QUIET_PATHS = {"/health", "/favicon.ico"}

PLAIN_FORMAT = "%(asctime)s %(levelname)-7s %(name)s [%(request_id)s] %(message)s"


def level_for_status(status_code: int) -> int:
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO


class RequestIdFilter(logging.Filter):
    """Stamp every record with the id of the request being served."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get("")
        return True


class StructuredFormatter(logging.Formatter):
    """JSON formatter, one object per line."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", ""),
        }
        entry.update({key: getattr(record, key) for key in EXTRA_FIELDS if hasattr(record, key)})

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, ensure_ascii=False, default=str)


class StructuredLoggingMiddleware(BaseHTTPMiddleware):
    """
    Access logging for every request.

    - Reuses the caller's X-Request-ID or generates one, and echoes it back
    - Level follows the status code: 5xx ERROR, 4xx WARNING, else INFO
    - Requests that raise are logged as 500 before the error propagates
    """

    def __init__(self, app: ASGIApp, logger_name: str = ACCESS_LOGGER):
        super().__init__(app)
        self.logger = logging.getLogger(logger_name)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request_id_var.set(request_id)
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as exc:
            self.log_access(request, 500, started, error=repr(exc))
            raise

        response.headers[REQUEST_ID_HEADER] = request_id
        self.log_access(request, response.status_code, started)
        return response

    def log_access(self, request: Request, status_code: int, started: float, error: str | None = None) -> None:
        path = request.url.path
        if path in QUIET_PATHS:
            return

        duration_ms = round((time.perf_counter() - started) * 1000, 2)
        fields = {
            "method": request.method,
            "path": path,
            "query": request.url.query,
            "status_code": status_code,
            "duration_ms": duration_ms,
            "client_ip": request.client.host if request.client else "unknown",
        }
        user = getattr(request.state, "user", None)
        if user is not None:
            fields["user_id"] = user.id

        target = f"{path}?{request.url.query}" if request.url.query else path
        message = f"{request.method} {target} {status_code} in {duration_ms}ms"
        if error:
            message = f"{message} ({error})"

        self.logger.log(level_for_status(status_code), message, extra=fields)


def setup_structured_logging(log_level: str = "INFO", json_format: bool = True) -> None:
    """
    Install the application log handler on the root logger.

    Calling it again replaces the handler it installed before; handlers
    added by anything else (pytest, uvicorn) are left alone.

    Args:
        log_level: Level name for the root and application loggers
        json_format: JSON lines when True, PLAIN_FORMAT otherwise
    """
    level = logging.getLevelName(log_level.upper())

    handler = logging.StreamHandler()
    handler.addFilter(RequestIdFilter())
    handler.setFormatter(StructuredFormatter() if json_format else logging.Formatter(PLAIN_FORMAT))

    root = logging.getLogger()
    for existing in list(root.handlers):
        if any(isinstance(f, RequestIdFilter) for f in existing.filters):
            root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level)

    for name in ("meta_auditor", ACCESS_LOGGER):
        logging.getLogger(name).setLevel(level)
    for name in ("uvicorn.access", "sqlalchemy.engine"):
        logging.getLogger(name).setLevel(logging.WARNING)


def get_request_id() -> str:
    """Id of the request currently being served, or an empty string."""
    return request_id_var.get("")
