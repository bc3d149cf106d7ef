"""API route registration."""

from fastapi import FastAPI

from itemsapi.config.settings import Settings
from itemsapi.observability.logging import get_logger

logger = get_logger(__name__)


def register_routes(app: FastAPI, settings: Settings) -> None:
    """Register all routes with the FastAPI application.

    Operational routes go first: the item routes include a catch-all
    ``/{item_id}`` path that would otherwise shadow them.
    """
    from itemsapi.api.routes.health import metrics_router
    from itemsapi.api.routes.health import router as health_router
    from itemsapi.api.routes.items import router as items_router

    app.include_router(health_router, tags=["Health"])
    if settings.observability.metrics.enabled:
        app.include_router(metrics_router, tags=["Health"])
    app.include_router(items_router, tags=["Items"])

    logger.info(
        "routes_registered",
        metrics=settings.observability.metrics.enabled,
    )
