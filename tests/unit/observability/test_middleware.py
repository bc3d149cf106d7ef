"""Tests for LoggingContextMiddleware."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import FastAPI, Request
from fastapi.testclient import TestClient
from starlette.responses import Response
from structlog.contextvars import bind_contextvars, get_contextvars

from itemsapi.observability.middleware import REQUEST_ID_HEADER, LoggingContextMiddleware


def _request(headers: dict[str, str]) -> MagicMock:
    request = MagicMock(spec=Request)
    request.headers.get = MagicMock(side_effect=lambda key: headers.get(key))
    request.method = "GET"
    request.url.path = "/test"
    return request


class TestLoggingContextMiddleware:
    """Tests for LoggingContextMiddleware."""

    @pytest.fixture
    def app(self) -> FastAPI:
        """Create a FastAPI app with middleware."""
        app = FastAPI()
        app.add_middleware(LoggingContextMiddleware)

        @app.get("/test")
        async def test_endpoint() -> dict[str, str | None]:
            return {"request_id": get_contextvars().get("request_id")}

        return app

    @pytest.fixture
    def middleware(self) -> LoggingContextMiddleware:
        return LoggingContextMiddleware(MagicMock())

    @pytest.mark.asyncio
    async def test_clears_context_vars_on_request_start(
        self, middleware: LoggingContextMiddleware
    ) -> None:
        bind_contextvars(request_id="stale", other="value")
        call_next = AsyncMock(return_value=Response(status_code=200))

        with patch("itemsapi.observability.middleware.clear_contextvars") as mock_clear:
            await middleware.dispatch(_request({}), call_next)
            mock_clear.assert_called_once()

    @pytest.mark.asyncio
    async def test_binds_request_id_from_header(
        self, middleware: LoggingContextMiddleware
    ) -> None:
        call_next = AsyncMock(return_value=Response(status_code=200))

        with patch("itemsapi.observability.middleware.bind_contextvars") as mock_bind:
            response = await middleware.dispatch(_request({REQUEST_ID_HEADER: "req-1"}), call_next)

        mock_bind.assert_called_once_with(request_id="req-1", trace_id=None)
        assert response.headers[REQUEST_ID_HEADER] == "req-1"

    @pytest.mark.asyncio
    async def test_trace_id_from_traceparent(self, middleware: LoggingContextMiddleware) -> None:
        call_next = AsyncMock(return_value=Response(status_code=200))
        traceparent = "00-4bf92f3577b34da6a3ce929d0e0e4736-00f067aa0ba902b7-01"

        with patch("itemsapi.observability.middleware.bind_contextvars") as mock_bind:
            await middleware.dispatch(_request({"traceparent": traceparent}), call_next)

        assert mock_bind.call_args.kwargs["trace_id"] == "4bf92f3577b34da6a3ce929d0e0e4736"

    @pytest.mark.asyncio
    async def test_explicit_trace_id_wins(self, middleware: LoggingContextMiddleware) -> None:
        call_next = AsyncMock(return_value=Response(status_code=200))
        headers = {"X-Trace-ID": "trace-1", "traceparent": "00-abc-def-01"}

        with patch("itemsapi.observability.middleware.bind_contextvars") as mock_bind:
            await middleware.dispatch(_request(headers), call_next)

        assert mock_bind.call_args.kwargs["trace_id"] == "trace-1"

    def test_generates_request_id(self, app: FastAPI) -> None:
        response = TestClient(app).get("/test")

        request_id = response.headers[REQUEST_ID_HEADER]
        assert request_id
        assert response.json() == {"request_id": request_id}

    def test_echoes_request_id(self, app: FastAPI) -> None:
        response = TestClient(app).get("/test", headers={REQUEST_ID_HEADER: "abc"})

        assert response.headers[REQUEST_ID_HEADER] == "abc"
        assert response.json() == {"request_id": "abc"}


class TestExtractTraceId:
    """Tests for W3C traceparent parsing."""

    @pytest.mark.parametrize(
        ("traceparent", "expected"),
        [
            (None, None),
            ("", None),
            ("garbage", None),
            ("00-4bf92f3577b34da6a3ce929d0e0e4736-00f067aa0ba902b7-01",
             "4bf92f3577b34da6a3ce929d0e0e4736"),
        ],
    )
    def test_extract(self, traceparent: str | None, expected: str | None) -> None:
        assert LoggingContextMiddleware._extract_trace_id(traceparent) == expected
