"""
Uniform JSON error bodies.

Domain exceptions, request validation failures and stray HTTP exceptions
all leave the API as an ``ErrorResponse``: a machine-readable
``error_code``, a message, a recovery hint and the request path.
"""

from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from src.application.dto.responses import ErrorResponse
from src.config import get_logger
from src.core.exceptions import (
    AuthenticationError,
    DuplicateEntityError,
    EntityInUseError,
    InsufficientStockError,
    InventoryError,
    MissingReferenceError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)

logger = get_logger(__name__)

# Checked in order; anything unlisted is a 500
DOMAIN_STATUS: tuple[tuple[type[InventoryError], int], ...] = (
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (MissingReferenceError, status.HTTP_400_BAD_REQUEST),
    (InsufficientStockError, status.HTTP_400_BAD_REQUEST),
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED),
    (UnauthorizedError, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (DuplicateEntityError, status.HTTP_409_CONFLICT),
    (EntityInUseError, status.HTTP_409_CONFLICT),
)

HINTS: dict[str, str] = {
    "VALIDATION_ERROR": "Check the request body against the API schema.",
    "REFERENCE_ERROR": "The referenced product, supplier, category or user does not exist.",
    "INSUFFICIENT_STOCK": "Check current stock with GET /api/products/{id} before dispatching.",
    "NOT_FOUND": "Verify the id in the request path.",
    "DUPLICATE_ENTITY": "An entry with the same unique value already exists.",
    "ENTITY_IN_USE": "Ledger entries reference this record; it cannot be deleted.",
    "AUTHENTICATION_FAILED": "Log in with POST /api/auth/login and send the Bearer token.",
    "UNAUTHORIZED": "Your role does not allow this action.",
    "INTERNAL_ERROR": "An internal error occurred. Check server logs.",
}

HTTP_CODES: dict[int, str] = {
    400: "BAD_REQUEST",
    401: "AUTHENTICATION_FAILED",
    403: "UNAUTHORIZED",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    409: "CONFLICT",
}


def _json(
    request: Request,
    status_code: int,
    error_code: str,
    message: str,
    detail: str | None = None,
    hint: str | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    body = ErrorResponse(
        error_code=error_code,
        message=message,
        hint=hint or HINTS.get(error_code),
        detail=detail,
        path=request.url.path,
    )
    if status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer", **(headers or {})}
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json"),
        headers=headers,
    )


def _domain_status(exc: InventoryError) -> int:
    for exc_type, code in DOMAIN_STATUS:
        if isinstance(exc, exc_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(request: Request, exc: Exception) -> JSONResponse:
    """Render any exception as an ErrorResponse, logging by severity."""
    if isinstance(exc, InventoryError):
        status_code = _domain_status(exc)
        error_code, message = exc.code, exc.message
        detail = str(exc.details) if exc.details else None
    else:
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        error_code, message, detail = "INTERNAL_ERROR", "Internal server error", None

    if status_code >= 500:
        logger.exception(
            "request_error",
            path=request.url.path,
            error_code=error_code,
            error=str(exc),
        )
    else:
        logger.info(
            "request_rejected",
            path=request.url.path,
            status=status_code,
            error_code=error_code,
            error=message,
        )

    return _json(request, status_code, error_code, message, detail=detail)


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Last line of defence for exceptions no handler claimed."""

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            return error_response(request, e)


def setup_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(InventoryError)
    async def handle_domain_error(request: Request, exc: InventoryError) -> JSONResponse:
        return error_response(request, exc)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        problems = [
            f"{' -> '.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        ]
        return _json(
            request,
            status.HTTP_422_UNPROCESSABLE_ENTITY,
            "VALIDATION_ERROR",
            "Request validation failed",
            detail="; ".join(problems),
            hint="Check the request body fields and types.",
        )

    @app.exception_handler(HTTPException)
    async def handle_http_error(request: Request, exc: HTTPException) -> JSONResponse:
        return _json(
            request,
            exc.status_code,
            HTTP_CODES.get(exc.status_code, "HTTP_ERROR"),
            str(exc.detail) if exc.detail else "An error occurred",
            headers=getattr(exc, "headers", None),
        )
