"""Tests for ItemService."""

from unittest.mock import AsyncMock

import pytest

from itemsapi.items.errors import InvalidPatchError, ItemNotFoundError, StoreError
from itemsapi.items.service import ItemService
from itemsapi.items.store import ItemStore
from itemsapi.items.stores.inmemory import InMemoryItemStore


@pytest.fixture
def store() -> InMemoryItemStore:
    return InMemoryItemStore(primary_key="itemId")


@pytest.fixture
def service(store: InMemoryItemStore) -> ItemService:
    return ItemService(store=store, primary_key="itemId")


@pytest.fixture
def mock_store() -> AsyncMock:
    store = AsyncMock(spec=ItemStore)
    store.backend = "mock"
    return store


class TestCreate:
    """Tests for ItemService.create."""

    @pytest.mark.asyncio
    async def test_create_then_get(self, service: ItemService) -> None:
        """A created record is readable under the returned key."""
        item_id = await service.create({"name": "foo"})

        item = await service.get(item_id)
        assert item == {"name": "foo", "itemId": item_id}

    @pytest.mark.asyncio
    async def test_create_overwrites_client_key(self, service: ItemService) -> None:
        item_id = await service.create({"itemId": "mine", "name": "foo"})

        assert item_id != "mine"
        assert await service.get("mine") is None
        assert (await service.get(item_id))["itemId"] == item_id

    @pytest.mark.asyncio
    async def test_create_uses_id_factory(self, store: InMemoryItemStore) -> None:
        service = ItemService(store=store, primary_key="itemId", id_factory=lambda: "fixed")

        assert await service.create({}) == "fixed"
        assert await service.get("fixed") == {"itemId": "fixed"}

    @pytest.mark.asyncio
    async def test_create_generates_distinct_ids(self, service: ItemService) -> None:
        ids = {await service.create({"n": i}) for i in range(5)}
        assert len(ids) == 5

    @pytest.mark.asyncio
    async def test_create_does_not_mutate_body(self, service: ItemService) -> None:
        body = {"name": "foo"}
        await service.create(body)
        assert body == {"name": "foo"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [[1, 2], "text", None, 7])
    async def test_create_rejects_non_object(
        self, service: ItemService, body: object
    ) -> None:
        with pytest.raises(InvalidPatchError):
            await service.create(body)


class TestReadAndDelete:
    """Tests for get, list_all and delete."""

    @pytest.mark.asyncio
    async def test_get_missing_returns_none(self, service: ItemService) -> None:
        assert await service.get("nope") is None

    @pytest.mark.asyncio
    async def test_list_all_returns_every_record(self, service: ItemService) -> None:
        first = await service.create({"n": 1})
        second = await service.create({"n": 2})

        items = await service.list_all()
        assert {item["itemId"] for item in items} == {first, second}

    @pytest.mark.asyncio
    async def test_list_all_empty(self, service: ItemService) -> None:
        assert await service.list_all() == []

    @pytest.mark.asyncio
    async def test_delete_is_idempotent(self, service: ItemService) -> None:
        item_id = await service.create({"name": "foo"})

        await service.delete(item_id)
        await service.delete(item_id)

        assert await service.get(item_id) is None


class TestUpdate:
    """Tests for ItemService.update."""

    @pytest.mark.asyncio
    async def test_update_sets_and_removes(self, service: ItemService) -> None:
        item_id = await service.create({"name": "foo", "size": 1})

        await service.update(item_id, {"size": 2, "name": None, "color": "red"})

        assert await service.get(item_id) == {"itemId": item_id, "size": 2, "color": "red"}

    @pytest.mark.asyncio
    async def test_update_null_removes_field(self, service: ItemService) -> None:
        item_id = await service.create({"name": "foo"})

        await service.update(item_id, {"name": None})

        item = await service.get(item_id)
        assert "name" not in item

    @pytest.mark.asyncio
    async def test_empty_patch_skips_store(self, mock_store: AsyncMock) -> None:
        """An empty patch succeeds without any store call."""
        service = ItemService(store=mock_store, primary_key="itemId")

        await service.update("any-id", {})

        mock_store.update.assert_not_called()
        mock_store.get.assert_not_called()

    @pytest.mark.asyncio
    async def test_empty_patch_on_missing_item_succeeds(self, service: ItemService) -> None:
        await service.update("missing", {})

    @pytest.mark.asyncio
    async def test_update_missing_item_raises(self, service: ItemService) -> None:
        with pytest.raises(ItemNotFoundError):
            await service.update("missing", {"name": "foo"})

    @pytest.mark.asyncio
    async def test_update_sends_compiled_plan(self, mock_store: AsyncMock) -> None:
        service = ItemService(store=mock_store, primary_key="itemId")

        await service.update("abc", {"a": 1, "b": None})

        mock_store.update.assert_awaited_once()
        item_id, plan = mock_store.update.await_args.args
        assert item_id == "abc"
        assert plan.expression == "SET #a = :a REMOVE #b"

    @pytest.mark.asyncio
    async def test_update_drops_unchanged_key(self, mock_store: AsyncMock) -> None:
        """Sending the record's own key back is allowed and ignored."""
        service = ItemService(store=mock_store, primary_key="itemId")

        await service.update("abc", {"itemId": "abc", "a": 1})

        plan = mock_store.update.await_args.args[1]
        assert plan.attribute_names == {"#a": "a"}

    @pytest.mark.asyncio
    async def test_update_with_only_unchanged_key_is_noop(self, mock_store: AsyncMock) -> None:
        service = ItemService(store=mock_store, primary_key="itemId")

        await service.update("abc", {"itemId": "abc"})

        mock_store.update.assert_not_called()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("value", ["other", None])
    async def test_update_rejects_key_change(self, service: ItemService, value: object) -> None:
        item_id = await service.create({"name": "foo"})

        with pytest.raises(InvalidPatchError):
            await service.update(item_id, {"itemId": value})

    @pytest.mark.asyncio
    async def test_update_rejects_non_object(self, service: ItemService) -> None:
        with pytest.raises(InvalidPatchError):
            await service.update("abc", ["a"])


class TestStoreFailures:
    """Store errors propagate unchanged and are not retried."""

    @pytest.mark.asyncio
    async def test_store_error_propagates_once(self, mock_store: AsyncMock) -> None:
        mock_store.put.side_effect = StoreError("boom")
        service = ItemService(store=mock_store, primary_key="itemId")

        with pytest.raises(StoreError):
            await service.create({"a": 1})

        assert mock_store.put.await_count == 1


class TestNonFiniteNumbers:
    """NaN and infinities have no JSON form and are refused before the store."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body",
        [
            {"a": float("nan")},
            {"a": float("inf")},
            {"a": {"nested": [1, float("-inf")]}},
        ],
    )
    async def test_create_rejects_non_finite(self, mock_store: AsyncMock, body: dict) -> None:
        service = ItemService(store=mock_store, primary_key="itemId")

        with pytest.raises(InvalidPatchError):
            await service.create(body)

        mock_store.put.assert_not_called()

    @pytest.mark.asyncio
    async def test_update_rejects_non_finite(self, mock_store: AsyncMock) -> None:
        service = ItemService(store=mock_store, primary_key="itemId")

        with pytest.raises(InvalidPatchError, match="price"):
            await service.update("abc", {"price": float("nan"), "name": "foo"})

        mock_store.update.assert_not_called()

    @pytest.mark.asyncio
    async def test_finite_floats_pass(self, service: ItemService) -> None:
        item_id = await service.create({"price": 1.5, "tags": [0.25]})

        await service.update(item_id, {"price": -2.75})

        assert (await service.get(item_id))["price"] == -2.75
