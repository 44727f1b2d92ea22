"""
Request correlation middleware.

Every request gets a correlation id, taken from X-Correlation-ID (or an
upstream X-Request-ID) when present and generated otherwise. The id is put
in the logging context so matcher and index log lines emitted while serving
a request can be tied back to it, and echoed in the response headers.
"""
import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from app.core.logging import set_correlation_id, clear_correlation_id, get_logger

logger = get_logger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"
FALLBACK_HEADERS = ("X-Request-ID",)


def _incoming_correlation_id(request: Request) -> str:
    for header in (CORRELATION_HEADER, *FALLBACK_HEADERS):
        value = request.headers.get(header)
        if value:
            return value.strip()
    return str(uuid.uuid4())


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """
    Attach a correlation id to the request, the log context and the response.

    Access in endpoints:
        correlation_id = request.state.correlation_id
    """

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Response]
    ) -> Response:
        correlation_id = _incoming_correlation_id(request)
        request.state.correlation_id = correlation_id
        token = set_correlation_id(correlation_id)
        started = time.perf_counter()

        try:
            response = await call_next(request)
            response.headers[CORRELATION_HEADER] = correlation_id

            logger.debug(
                f"{request.method} {request.url.path} -> {response.status_code}",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "status": response.status_code,
                    "duration_ms": round((time.perf_counter() - started) * 1000, 2),
                },
            )
            return response
        finally:
            clear_correlation_id(token)
