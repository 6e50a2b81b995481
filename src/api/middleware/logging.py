"""Per-request access log with a request id shared by every event."""

import time
import uuid
from collections.abc import Awaitable, Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from src.config import bind_request_context, clear_request_context, get_logger

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

# Polled by load balancers; logged at debug only
QUIET_PATHS = frozenset({"/health", "/api/health"})


def _level_for(path: str, status: int) -> str:
    if status >= 500:
        return "error"
    if status >= 400:
        return "warning"
    return "debug" if path in QUIET_PATHS else "info"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs one ``request_finished`` event per request.

    The request id comes from the caller's X-Request-ID header when present.
    It is bound to the structlog context, so ledger events logged while the
    request runs (stock recorded, alert sent) carry the same id.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:8]
        request.state.request_id = request_id

        clear_request_context()
        bind_request_context(request_id=request_id)
        path = request.url.path
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "request_crashed",
                method=request.method,
                path=path,
                error=str(e),
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
            )
            raise
        finally:
            duration_ms = round((time.perf_counter() - started) * 1000, 2)

        getattr(logger, _level_for(path, response.status_code))(
            "request_finished",
            method=request.method,
            path=path,
            status=response.status_code,
            duration_ms=duration_ms,
        )
        clear_request_context()

        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers["X-Response-Time"] = f"{duration_ms}ms"
        return response
