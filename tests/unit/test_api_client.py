"""Tests for the Items API client."""

import pytest
from aioresponses import aioresponses

from ordino.report_tools.api_client import (
    ApiError,
    HttpMethod,
    ItemPayload,
    ItemsApiClient,
    run_items_smoke,
)

BASE_URL = "http://api.test/api"


@pytest.fixture
def client() -> ItemsApiClient:
    """Create client for the test API."""
    return ItemsApiClient(BASE_URL)


@pytest.fixture
def laptop() -> ItemPayload:
    """Create item payload."""
    return ItemPayload(name="Laptop", description="Dell XPS 15", category="electronics")


async def test_create_item_returns_data(
    client: ItemsApiClient, laptop: ItemPayload
) -> None:
    """create_item posts the payload and unwraps the envelope."""
    with aioresponses() as m:
        m.post(
            f"{BASE_URL}/items",
            status=201,
            payload={"status": "success", "data": {"id": "42", "name": "Laptop"}},
        )

        item = await client.create_item(laptop)

    assert item == {"id": "42", "name": "Laptop"}


async def test_get_items_by_category_sends_query(client: ItemsApiClient) -> None:
    """get_items_by_category filters with a query parameter."""
    with aioresponses() as m:
        m.get(
            f"{BASE_URL}/items?category=electronics",
            status=200,
            payload={"status": "success", "data": [{"id": "1"}]},
        )

        items = await client.get_items_by_category("electronics")

    assert items == [{"id": "1"}]


async def test_call_http_error(client: ItemsApiClient) -> None:
    """Non-2xx responses raise ApiError."""
    with aioresponses() as m:
        m.get(f"{BASE_URL}/items/7", status=404, body="Not Found")

        with pytest.raises(ApiError, match="GET /items/7 failed: 404"):
            await client.get_item("7")


async def test_call_error_envelope(client: ItemsApiClient) -> None:
    """An envelope with a non-success status raises ApiError."""
    with aioresponses() as m:
        m.delete(
            f"{BASE_URL}/items/7",
            status=200,
            payload={"status": "error", "data": None},
        )

        with pytest.raises(ApiError, match="returned status 'error'"):
            await client.delete_item("7")


async def test_call_missing_envelope(client: ItemsApiClient) -> None:
    """A response without an envelope raises ApiError."""
    with aioresponses() as m:
        m.get(f"{BASE_URL}/items", status=200, payload={"items": []})

        with pytest.raises(ApiError, match="returned no envelope"):
            await client.call(HttpMethod.GET, "/items")


async def test_base_url_trailing_slash() -> None:
    """A trailing slash on the base URL is ignored."""
    client = ItemsApiClient(f"{BASE_URL}/")
    with aioresponses() as m:
        m.get(f"{BASE_URL}/items", status=200, payload={"status": "success"})

        assert await client.get_all_items() is None


async def test_run_items_smoke(client: ItemsApiClient) -> None:
    """run_items_smoke walks the CRUD happy path."""
    ok = {"status": "success", "data": {"id": "42"}}
    with aioresponses() as m:
        m.post(f"{BASE_URL}/items", status=201, payload=ok)
        m.get(f"{BASE_URL}/items", status=200, payload={"status": "success"})
        m.get(f"{BASE_URL}/items/42", status=200, payload=ok)
        m.put(f"{BASE_URL}/items/42", status=200, payload=ok)
        m.get(
            f"{BASE_URL}/items?category=electronics",
            status=200,
            payload={"status": "success", "data": []},
        )
        m.delete(f"{BASE_URL}/items/42", status=200, payload=ok)

        steps = await run_items_smoke(client)

    assert steps == ["create", "list", "get", "update", "by-category", "delete"]


async def test_run_items_smoke_missing_id(client: ItemsApiClient) -> None:
    """run_items_smoke stops when the created item has no id."""
    with aioresponses() as m:
        m.post(
            f"{BASE_URL}/items",
            status=201,
            payload={"status": "success", "data": {"name": "Laptop"}},
        )

        with pytest.raises(ApiError, match="no id"):
            await run_items_smoke(client)
