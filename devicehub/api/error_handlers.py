"""Error Handlers — map raised errors onto the DeviceHub JSON error envelope.

Invariants:
    - Every error response has the shape {"error": {code, message, category, severity}}
    - DeviceHubError → its own http_status; 5xx logged with traceback, 4xx as warnings
    - RequestValidationError (bad UUID path, unknown body field, wrong type) → 400
    - Anything else → 500 INTERNAL_ERROR; driver text and causes stay in the logs

Design Decisions:
    - Extracted from main.py (ADR: import fan-out < 10)
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from devicehub.core.errors import DeviceHubError, ErrorCategory, ErrorSeverity

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    app.add_exception_handler(DeviceHubError, handle_devicehub_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(Exception, handle_unexpected)


def _envelope(
    code: str,
    message: str,
    category: ErrorCategory,
    severity: ErrorSeverity,
    **extra,
) -> dict:
    return {
        "error": {
            "code": code,
            "message": message,
            "category": category.value,
            "severity": severity.value,
            **extra,
        },
    }


async def handle_devicehub_error(
    request: Request, exc: DeviceHubError,
) -> JSONResponse:
    server_side = exc.http_status >= 500
    logger.log(
        logging.ERROR if server_side else logging.WARNING,
        f"{exc.code} on {request.method} {request.url.path}: {exc.message}",
        extra={**exc.log_extra(), "path": request.url.path},
        exc_info=exc if server_side else None,
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def handle_request_validation(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    details = [
        {
            "field": ".".join(str(loc) for loc in err["loc"]),
            "message": err["msg"],
            "type": err["type"],
        }
        for err in exc.errors()
    ]
    logger.warning(
        f"Rejected request on {request.url.path}: {len(details)} invalid field(s)",
        extra={"path": request.url.path, "error_code": "VALIDATION_ERROR"},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_envelope(
            "VALIDATION_ERROR",
            "Invalid request data",
            ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR,
            details=details,
        ),
    )


async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled {type(exc).__name__} on {request.url.path}",
        extra={"path": request.url.path, "error_code": "INTERNAL_ERROR"},
        exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_envelope(
            "INTERNAL_ERROR",
            "An unexpected error occurred",
            ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL,
        ),
    )
