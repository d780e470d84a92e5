"""
Global Exception Handlers for the SEO Meta Auditor

API paths (/api/...) receive a JSON error body:
{
    "error": {
        "status_code": 403,
        "message": "Permission denied.",
        "type": "Forbidden",
        "details": {"required_permission": "manage_options"},
        "path": "/api/v1/seo-audit"
    }
}

Admin pages receive a blocking HTML page carrying the same message, so a
denied action ends the request without any partial effect.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from meta_auditor.exceptions import AuditorException
from meta_auditor.rendering import templates

logger = logging.getLogger(__name__)

API_PREFIX = "/api/"

ERROR_TYPES = {
    status.HTTP_400_BAD_REQUEST: "Bad Request",
    status.HTTP_401_UNAUTHORIZED: "Unauthorized",
    status.HTTP_403_FORBIDDEN: "Forbidden",
    status.HTTP_404_NOT_FOUND: "Not Found",
    status.HTTP_405_METHOD_NOT_ALLOWED: "Method Not Allowed",
    422: "Validation Error",
    status.HTTP_500_INTERNAL_SERVER_ERROR: "Internal Server Error",
    status.HTTP_502_BAD_GATEWAY: "Bad Gateway",
    status.HTTP_503_SERVICE_UNAVAILABLE: "Service Unavailable",
}

GENERIC_ERROR_MESSAGE = "An unexpected error occurred. Please try again later."


def get_error_type(status_code: int) -> str:
    return ERROR_TYPES.get(status_code, "Error")


def wants_json(request: Request) -> bool:
    return request.url.path.startswith(API_PREFIX)


def create_error_response(
    request: Request,
    status_code: int,
    message: str,
    details: dict[str, Any] | None = None,
) -> Response:
    """
    Build the error response for a failed request.

    Args:
        request: The request that failed
        status_code: HTTP status code
        message: Message shown to the caller
        details: Extra structured data (JSON responses only)

    Returns:
        JSONResponse for API paths, the rendered error page otherwise
    """
    error_type = get_error_type(status_code)

    if not wants_json(request):
        context = {"message": message, "status_code": status_code, "error_type": error_type}
        return templates.TemplateResponse(request, "error.html", context, status_code=status_code)

    body: dict[str, Any] = {
        "status_code": status_code,
        "message": message,
        "type": error_type,
        "path": request.url.path,
    }
    if details:
        body["details"] = details
    return JSONResponse(status_code=status_code, content={"error": body})


async def auditor_exception_handler(request: Request, exc: AuditorException) -> Response:
    level = logging.ERROR if exc.status_code >= 500 else logging.WARNING
    logger.log(
        level,
        f"{type(exc).__name__} on {request.url.path}: {exc.message}",
        extra={"status_code": exc.status_code, "path": request.url.path},
    )
    return create_error_response(request, exc.status_code, exc.message, exc.details or None)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> Response:
    logger.warning(
        f"HTTP {exc.status_code} on {request.url.path}: {exc.detail}",
        extra={"status_code": exc.status_code, "path": request.url.path},
    )
    return create_error_response(request, exc.status_code, str(exc.detail))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> Response:
    """Report each invalid field; the report's own parameters never get here."""
    errors = [
        {
            "field": ".".join(str(part) for part in error["loc"] if part != "body"),
            "message": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]
    logger.warning(f"Validation error on {request.url.path}", extra={"errors": errors})

    return create_error_response(
        request,
        422,
        "Validation error",
        {"validation_errors": errors},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> Response:
    """
    Last resort for anything unexpected, host database failures included.

    The traceback is logged; the caller only sees a generic message.
    """
    logger.error(
        f"Unhandled {type(exc).__name__} on {request.method} {request.url.path}",
        exc_info=exc,
        extra={"path": request.url.path, "method": request.method},
    )
    return create_error_response(request, status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_ERROR_MESSAGE)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AuditorException, auditor_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
    logger.debug("Exception handlers registered")
