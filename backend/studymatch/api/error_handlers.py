"""Error Handlers: map every failure to the StudyMatch JSON error envelope.

Invariants:
    - StudyMatchError → its own http_status and to_response() body
    - RequestValidationError → 400 VALIDATION_ERROR with one detail per field
    - Exception (catch-all) → 500 INTERNAL_ERROR, logged with traceback,
      message never includes the exception text
    - Log level follows severity: info/warning for client faults, error for 5xx
"""

import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from studymatch.core.errors import ErrorCategory, ErrorSeverity, StudyMatchError

logger = logging.getLogger(__name__)

_LOG_LEVELS = {
    ErrorSeverity.INFO: logging.INFO,
    ErrorSeverity.WARNING: logging.WARNING,
    ErrorSeverity.ERROR: logging.ERROR,
    ErrorSeverity.CRITICAL: logging.CRITICAL,
}


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StudyMatchError, handle_domain_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)


def _envelope(
    code: str, message: str, category: ErrorCategory, severity: ErrorSeverity,
    **extra,
) -> dict:
    return {
        "error": {
            "code": code,
            "message": message,
            "category": category.value,
            "severity": severity.value,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            **extra,
        },
    }


def _log(
    request: Request, level: int, message: str, http_status: int,
    exc: Exception | None = None, **extra,
):
    logger.log(
        level, message,
        extra={"path": request.url.path, "status": http_status, **extra},
        exc_info=(type(exc), exc, exc.__traceback__) if exc else None,
    )


async def handle_domain_error(request: Request, exc: StudyMatchError):
    level = _LOG_LEVELS.get(exc.severity, logging.WARNING)
    if exc.http_status < 500:
        level = min(level, logging.WARNING)
    _log(request, level, exc.message, exc.http_status, error_code=exc.code)
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def handle_validation_error(request: Request, exc: RequestValidationError):
    details = [
        {
            "field": ".".join(str(part) for part in err["loc"]),
            "message": err["msg"],
            "type": err["type"],
        }
        for err in exc.errors()
    ]
    _log(
        request, logging.INFO,
        f"Rejected payload: {', '.join(d['field'] for d in details)}",
        status.HTTP_400_BAD_REQUEST, error_code="VALIDATION_ERROR",
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_envelope(
            "VALIDATION_ERROR", "Invalid request data",
            ErrorCategory.VALIDATION, ErrorSeverity.WARNING,
            details=details,
        ),
    )


async def handle_unexpected_error(request: Request, exc: Exception):
    _log(
        request, logging.ERROR,
        f"Unhandled {type(exc).__name__} on {request.method} {request.url.path}",
        status.HTTP_500_INTERNAL_SERVER_ERROR, exc, error_code="INTERNAL_ERROR",
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_envelope(
            "INTERNAL_ERROR", "An unexpected error occurred",
            ErrorCategory.INTERNAL, ErrorSeverity.CRITICAL,
        ),
    )
