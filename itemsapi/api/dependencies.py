"""Dependency injection for API routes.

Settings are fixed when the application is created and read back from
``app.state``. The item store is created once per process and shared by
every request. Dependencies can be overridden for testing through
``app.dependency_overrides``.
"""

from typing import Annotated

from fastapi import Depends, Request

from itemsapi.config import get_settings
from itemsapi.config.settings import Settings
from itemsapi.items.factory import create_item_store
from itemsapi.items.service import ItemService
from itemsapi.items.store import ItemStore
from itemsapi.observability.logging import get_logger

logger = get_logger(__name__)

_item_store: ItemStore | None = None


def get_app_settings(request: Request) -> Settings:
    """Get the settings the running application was built with."""
    return request.app.state.settings


async def get_item_store(
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> ItemStore:
    """Get the shared ItemStore, creating it on first access."""
    global _item_store
    if _item_store is None:
        _item_store = await create_item_store(settings)
        logger.info("item_store_initialized", backend=_item_store.backend)
    return _item_store


def get_item_service(
    store: Annotated[ItemStore, Depends(get_item_store)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> ItemService:
    """Get an ItemService bound to the shared store."""
    return ItemService(store=store, primary_key=settings.primary_key)


ItemStoreDep = Annotated[ItemStore, Depends(get_item_store)]
ItemServiceDep = Annotated[ItemService, Depends(get_item_service)]


async def reset_dependencies() -> None:
    """Close the shared store and forget cached instances.

    Called on application shutdown and by tests for fresh instances.
    """
    global _item_store

    if _item_store is not None:
        await _item_store.close()
        _item_store = None

    get_settings.cache_clear()
