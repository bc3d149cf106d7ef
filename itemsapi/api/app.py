"""FastAPI application factory.

Creates and configures the FastAPI application with middleware,
exception handlers, and route registration.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor

from itemsapi import __version__
from itemsapi.api.dependencies import get_item_store, reset_dependencies
from itemsapi.api.exceptions import ItemsAPIError, StoreUnavailableError
from itemsapi.api.models.errors import ErrorBody, ErrorCode, ErrorDetail, ErrorResponse
from itemsapi.api.routes import register_routes
from itemsapi.config import get_settings
from itemsapi.config.settings import Settings
from itemsapi.items.errors import StoreError
from itemsapi.observability.logging import get_logger, setup_logging_from_config
from itemsapi.observability.middleware import LoggingContextMiddleware
from itemsapi.observability.tracing import setup_tracing_from_config

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Build the shared item store at startup and close it on shutdown."""
    settings: Settings = app.state.settings
    await get_item_store(settings)
    logger.info("app_started", table=settings.table_name, backend=settings.storage.backend)
    try:
        yield
    finally:
        await reset_dependencies()
        logger.info("app_stopped")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Explicit settings; loaded from config files and the
            environment when omitted

    Raises:
        pydantic.ValidationError: If table_name or primary_key is not configured
    """
    settings = settings or get_settings()
    setup_logging_from_config(settings.observability.logging)

    app = FastAPI(
        title="Items API",
        description="CRUD facade over a single key-value table",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_methods=settings.api.cors_methods,
        allow_headers=["*"],
        expose_headers=["Location", "X-Request-ID"],
    )
    app.add_middleware(LoggingContextMiddleware)

    _register_exception_handlers(app)

    register_routes(app, settings)

    if settings.observability.tracing.enabled:
        setup_tracing_from_config(settings.observability.tracing)
        FastAPIInstrumentor.instrument_app(app)
        logger.info("opentelemetry_instrumentation_enabled")

    logger.info(
        "app_created",
        debug=settings.debug,
        backend=settings.storage.backend,
        cors_origins=settings.api.cors_origins,
    )

    return app


def _error_response(exc: ItemsAPIError, details: list[ErrorDetail] | None = None) -> JSONResponse:
    response = ErrorResponse(
        error=ErrorBody(code=exc.error_code, message=exc.message, details=details)
    )
    return JSONResponse(status_code=exc.status_code, content=response.model_dump(mode="json"))


def _register_exception_handlers(app: FastAPI) -> None:
    """Register global exception handlers."""

    @app.exception_handler(ItemsAPIError)
    async def items_api_error_handler(request: Request, exc: ItemsAPIError) -> JSONResponse:
        logger.warning(
            "api_error",
            error_code=exc.error_code.value,
            message=exc.message,
            path=request.url.path,
        )
        return _error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Malformed JSON or a body that is not a JSON object."""
        logger.warning("validation_error", errors=exc.errors(), path=request.url.path)

        details = [
            ErrorDetail(
                field=".".join(str(loc) for loc in error["loc"]),
                message=error["msg"],
            )
            for error in exc.errors()
        ]
        response = ErrorResponse(
            error=ErrorBody(
                code=ErrorCode.INVALID_REQUEST,
                message="Request validation failed",
                details=details,
            )
        )
        return JSONResponse(status_code=400, content=response.model_dump(mode="json"))

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
        """Backend failures become a bare 500; details stay in the logs."""
        logger.error(
            "store_error",
            error=str(exc),
            error_type=type(exc).__name__,
            cause=repr(exc.cause) if exc.cause else None,
            path=request.url.path,
        )
        return _error_response(StoreUnavailableError("Item store request failed"))

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(
            "unexpected_error",
            error=str(exc),
            error_type=type(exc).__name__,
            path=request.url.path,
        )
        return _error_response(ItemsAPIError("An unexpected error occurred"))
