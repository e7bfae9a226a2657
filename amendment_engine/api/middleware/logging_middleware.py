"""Request logging middleware for the amendment API.

Each request runs inside a correlation scope taken from the
X-Correlation-ID header (or freshly generated). The same ID is returned
in the response header, so a client can match a problem response to the
workflow log entries it caused.

Problem responses (4xx) are logged as warnings; server errors as errors.
"""

import time
from collections.abc import Awaitable, Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from structlog import get_logger

from amendment_engine.infrastructure.observability.correlation import (
    correlation_scope,
)

CORRELATION_HEADER = "X-Correlation-ID"

logger = get_logger()


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


class LoggingMiddleware(BaseHTTPMiddleware):
    """Correlation scope plus one log entry per amendment API request."""

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        with correlation_scope(request.headers.get(CORRELATION_HEADER)) as correlation_id:
            log = logger.bind(method=request.method, path=request.url.path)
            log.debug("request_started")
            started = time.perf_counter()

            try:
                response = await call_next(request)
            except Exception as exc:
                log.exception(
                    "request_failed",
                    duration_ms=_elapsed_ms(started),
                    error_type=type(exc).__name__,
                )
                raise

            status = response.status_code
            emit = log.info
            if status >= 500:
                emit = log.error
            elif status >= 400:
                emit = log.warning
            emit("request_completed", status_code=status, duration_ms=_elapsed_ms(started))

            response.headers[CORRELATION_HEADER] = correlation_id
            return response
