"""Logging context middleware for observability.

Binds request_id and trace_id to structlog contextvars for the duration
of each request.
"""

import uuid
from collections.abc import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from structlog.contextvars import bind_contextvars, clear_contextvars

from itemsapi.observability.logging import get_logger

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class LoggingContextMiddleware(BaseHTTPMiddleware):
    """Middleware that binds request context to structlog contextvars.

    Headers:
        X-Request-ID: Caller-supplied request identifier (generated if absent)
        X-Trace-ID: Distributed trace identifier
        traceparent: W3C trace context (fallback for trace_id)
    """

    async def dispatch(  # type: ignore[override]
        self, request: Request, call_next: Callable[[Request], Response]
    ) -> Response:
        clear_contextvars()

        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        trace_id = request.headers.get("X-Trace-ID") or self._extract_trace_id(
            request.headers.get("traceparent")
        )

        bind_contextvars(request_id=request_id, trace_id=trace_id)

        logger.info(
            "request_started",
            method=request.method,
            path=request.url.path,
        )

        response = await call_next(request)  # type: ignore[misc]

        logger.info(
            "request_completed",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
        )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response  # type: ignore[no-any-return]

    @staticmethod
    def _extract_trace_id(traceparent: str | None) -> str | None:
        """Extract trace_id from W3C traceparent header.

        Format: version-trace_id-parent_id-trace_flags
        Example: 00-4bf92f3577b34da6a3ce929d0e0e4736-00f067aa0ba902b7-01
        """
        if not traceparent:
            return None
        parts = traceparent.split("-")
        return parts[1] if len(parts) >= 2 else None
