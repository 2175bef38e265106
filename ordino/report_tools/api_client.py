"""Typed client for the Ordino demo Items API exercised by the API suite."""

import logging
from collections.abc import Mapping
from enum import Enum

import aiohttp
from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://demoapi.ordino.ai/api"


class HttpMethod(str, Enum):
    """HTTP methods supported by the Items API."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


class ApiError(RuntimeError):
    """Raised when the API returns an error status or envelope."""


class ApiResponse(BaseModel):
    """Response envelope wrapping every Items API payload."""

    status: str = Field(..., description="'success' when the call succeeded")
    data: object = Field(default=None, description="Call-specific payload")


class ItemPayload(BaseModel):
    """Body sent when creating or updating an item."""

    name: str = Field(..., description="Item name")
    description: str = Field(..., description="Item description")
    category: str = Field(..., description="Item category")


class ItemsApiClient:
    """CRUD client for /items."""

    def __init__(self, base_url: str = DEFAULT_BASE_URL) -> None:
        """Initialize client with the API root URL."""
        self.base_url = base_url.rstrip("/")
        self.headers = {
            "accept": "application/json",
            "Content-Type": "application/json",
        }

    async def call(
        self,
        method: HttpMethod,
        endpoint: str,
        payload: ItemPayload | None = None,
        params: Mapping[str, str] | None = None,
    ) -> object:
        """Send a request and return the envelope's data.

        Raises:
            ApiError: On a non-2xx response or a non-success envelope

        """
        url = f"{self.base_url}{endpoint}"
        body = payload.model_dump() if payload is not None else None

        async with aiohttp.ClientSession() as session:
            async with session.request(
                method.value,
                url,
                headers=self.headers,
                json=body,
                params=params,
            ) as response:
                if not 200 <= response.status < 300:
                    text = await response.text()
                    raise ApiError(
                        f"{method.value} {endpoint} failed: {response.status} {text}"
                    )

                response_data: Mapping[str, object] = await response.json()

        try:
            envelope = ApiResponse.model_validate(response_data)
        except ValidationError as e:
            raise ApiError(
                f"{method.value} {endpoint} returned no envelope: {e}"
            ) from e

        if envelope.status != "success":
            raise ApiError(
                f"{method.value} {endpoint} returned status {envelope.status!r}"
            )

        logger.info(f"{method.value} {endpoint} - Success")
        return envelope.data

    async def create_item(self, item: ItemPayload) -> object:
        """Create an item and return it."""
        return await self.call(HttpMethod.POST, "/items", item)

    async def get_all_items(self) -> object:
        """Return every item."""
        return await self.call(HttpMethod.GET, "/items")

    async def get_item(self, item_id: str) -> object:
        """Return a single item."""
        return await self.call(HttpMethod.GET, f"/items/{item_id}")

    async def update_item(self, item_id: str, item: ItemPayload) -> object:
        """Replace an item and return the updated version."""
        return await self.call(HttpMethod.PUT, f"/items/{item_id}", item)

    async def delete_item(self, item_id: str) -> object:
        """Delete an item."""
        return await self.call(HttpMethod.DELETE, f"/items/{item_id}")

    async def get_items_by_category(self, category: str) -> object:
        """Return the items in a category."""
        return await self.call(
            HttpMethod.GET, "/items", params={"category": category}
        )


async def run_items_smoke(client: ItemsApiClient) -> list[str]:
    """Run the create/read/update/delete happy path against the Items API.

    Args:
        client: Client pointed at the API under test

    Returns:
        Names of the steps that completed, in order

    Raises:
        ApiError: On the first failing step

    """
    completed: list[str] = []

    created = await client.create_item(
        ItemPayload(name="Laptop", description="Dell XPS 15", category="electronics")
    )
    if not isinstance(created, Mapping) or "id" not in created:
        raise ApiError("Create item response has no id")
    item_id = str(created["id"])
    completed.append("create")

    await client.get_all_items()
    completed.append("list")

    await client.get_item(item_id)
    completed.append("get")

    await client.update_item(
        item_id,
        ItemPayload(
            name="Laptop Pro",
            description="Dell XPS 15 - Premium Edition",
            category="electronics",
        ),
    )
    completed.append("update")

    await client.get_items_by_category("electronics")
    completed.append("by-category")

    await client.delete_item(item_id)
    completed.append("delete")

    return completed
