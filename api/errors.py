from __future__ import annotations

from datetime import UTC, datetime

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from api.models import ErrorCode, ErrorResponse, HealthResponse


class QuoteNotFoundError(Exception):
    """Raised when a quote id does not exist in the store."""

    def __init__(self, quote_id: int) -> None:
        super().__init__(f"quote {quote_id} not found")
        self.quote_id = quote_id


class QuoteNotEditableError(Exception):
    """Raised when a bundled (non user-created) quote is edited or deleted."""

    def __init__(self, quote_id: int) -> None:
        super().__init__(f"quote {quote_id} is not user-created")
        self.quote_id = quote_id


def _code_for(status_code: int, path: str) -> ErrorCode:
    if status_code == 404 and "/quotes" in path:
        return "QUOTE_NOT_FOUND"
    if status_code == 404 and "/jobs/" in path:
        return "JOB_NOT_FOUND"
    if status_code == 409:
        return "QUOTE_NOT_EDITABLE"
    if status_code in (400, 422):
        return "INVALID_REQUEST"
    return "INTERNAL_ERROR"


async def http_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    if isinstance(exc, HTTPException):
        code = _code_for(exc.status_code, str(request.url.path))
        payload = ErrorResponse(
            error=str(exc.detail),
            code=code,
            details=None,
            timestamp=datetime.now(UTC),
        )
        return JSONResponse(
            status_code=exc.status_code, content=payload.model_dump(mode="json")
        )
    # Fallback: treat as unhandled
    return await unhandled_exception_handler(request, exc)


async def validation_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    if not isinstance(exc, RequestValidationError):
        return await unhandled_exception_handler(request, exc)
    payload = ErrorResponse(
        error="Invalid request",
        code="INVALID_REQUEST",
        details={"errors": [str(err.get("msg", "")) for err in exc.errors()]},
        timestamp=datetime.now(UTC),
    )
    return JSONResponse(status_code=422, content=payload.model_dump(mode="json"))


async def quote_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    code: ErrorCode
    if isinstance(exc, QuoteNotFoundError):
        status_code = 404
        code = "QUOTE_NOT_FOUND"
    elif isinstance(exc, QuoteNotEditableError):
        status_code = 409
        code = "QUOTE_NOT_EDITABLE"
    else:
        return await unhandled_exception_handler(request, exc)
    payload = ErrorResponse(
        error=str(exc),
        code=code,
        details={"quote_id": exc.quote_id},
        timestamp=datetime.now(UTC),
    )
    return JSONResponse(
        status_code=status_code, content=payload.model_dump(mode="json")
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    payload = ErrorResponse(
        error="Internal server error",
        code="INTERNAL_ERROR",
        details={"type": type(exc).__name__},
        timestamp=datetime.now(UTC),
    )
    return JSONResponse(status_code=500, content=payload.model_dump(mode="json"))


class HealthStatusError(Exception):
    """Domain exception used to return a stable health payload.

    This allows endpoints to avoid swallowing exceptions while still responding
    with 200 OK and a structured health body via a centralized handler.
    """

    def __init__(self, *, redis: bool, scripts: int) -> None:
        super().__init__("health status = degraded")
        self.redis = redis
        self.scripts = scripts


async def health_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    if not isinstance(exc, HealthStatusError):
        raise exc
    payload = HealthResponse(
        status="degraded",
        redis=exc.redis,
        scripts=exc.scripts,
        timestamp=datetime.now(UTC),
    )
    return JSONResponse(status_code=200, content=payload.model_dump(mode="json"))
