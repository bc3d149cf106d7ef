"""Item CRUD endpoints."""

from typing import Any

from fastapi import APIRouter, Body, Response

from itemsapi.api.dependencies import ItemServiceDep
from itemsapi.api.exceptions import InvalidRequestError, ItemNotFoundError
from itemsapi.items import errors as store_errors

router = APIRouter()


@router.post("/items", status_code=200, response_class=Response)
async def create_item(
    service: ItemServiceDep,
    body: dict[str, Any] = Body(..., description="Item document"),
) -> Response:
    """Create an item under a generated key.

    The response body is empty; the new key is in the Location header.
    """
    try:
        item_id = await service.create(body)
    except store_errors.InvalidPatchError as e:
        raise InvalidRequestError(str(e)) from e

    return Response(status_code=200, headers={"Location": f"/{item_id}"})


@router.get("/items", response_model=list[dict[str, Any]])
async def list_items(service: ItemServiceDep) -> list[dict[str, Any]]:
    """List every item.

    One unpaginated scan; order is whatever the store returns.
    """
    return await service.list_all()


@router.get("/{item_id}", response_model=dict[str, Any])
async def get_item(item_id: str, service: ItemServiceDep) -> dict[str, Any]:
    """Get one item by key."""
    item = await service.get(item_id)
    if item is None:
        raise ItemNotFoundError(f"Item {item_id} not found")
    return item


@router.patch("/{item_id}", status_code=200, response_class=Response)
async def update_item(
    item_id: str,
    service: ItemServiceDep,
    patch: dict[str, Any] = Body(..., description="Attributes to set, null to remove"),
) -> Response:
    """Partially update an item."""
    try:
        await service.update(item_id, patch)
    except store_errors.InvalidPatchError as e:
        raise InvalidRequestError(str(e)) from e
    except store_errors.ItemNotFoundError as e:
        raise ItemNotFoundError(str(e)) from e

    return Response(status_code=200)


@router.delete("/{item_id}", status_code=200, response_class=Response)
async def delete_item(item_id: str, service: ItemServiceDep) -> Response:
    """Delete an item. Deleting a missing key succeeds."""
    await service.delete(item_id)
    return Response(status_code=200)
