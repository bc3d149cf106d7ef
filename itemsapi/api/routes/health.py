"""Health check and metrics endpoints."""

import time
from datetime import UTC, datetime

from fastapi import APIRouter, Response
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from itemsapi import __version__
from itemsapi.api.dependencies import ItemStoreDep
from itemsapi.api.models.health import ComponentHealth, HealthResponse
from itemsapi.items.store import ItemStore
from itemsapi.observability.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()
metrics_router = APIRouter()


async def _check_store_health(store: ItemStore) -> ComponentHealth:
    """Ping the item store and time the round trip."""
    start = time.perf_counter()
    healthy = await store.health_check()
    latency_ms = (time.perf_counter() - start) * 1000

    return ComponentHealth(
        name="item_store",
        status="healthy" if healthy else "unhealthy",
        backend=store.backend,
        latency_ms=latency_ms,
        message=None if healthy else "Item store health check failed",
    )


@router.get("/health", response_model=HealthResponse)
async def health_check(store: ItemStoreDep) -> JSONResponse:
    """Report service health; 503 when the item store is unreachable."""
    component = await _check_store_health(store)

    response = HealthResponse(
        status=component.status,
        version=__version__,
        components=[component],
        timestamp=datetime.now(UTC),
    )

    logger.debug("health_check_completed", status=response.status)

    return JSONResponse(
        status_code=200 if response.status == "healthy" else 503,
        content=response.model_dump(mode="json"),
    )


@metrics_router.get("/metrics")
async def get_metrics() -> Response:
    """Prometheus metrics in text exposition format."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
