"""Open Food Facts API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx


class ProductClient(Protocol):
    """Interface for product lookups by barcode."""

    async def get_product(self, code: str) -> dict[str, object]:
        """Fetch a product by barcode and return raw API data."""


@dataclass
class OpenFoodFactsClient(ProductClient):
    """HTTPX-backed Open Food Facts client."""

    base_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, base_url: str) -> "OpenFoodFactsClient":
        """Create a client with a managed httpx session."""
        return cls(base_url=base_url, http_client=httpx.AsyncClient())

    async def get_product(self, code: str) -> dict[str, object]:
        """Fetch a product by barcode.

        Unknown barcodes answer 404 with a body whose `status` is 0; that
        body is returned as is.
        """
        url = f"{self.base_url}/api/v0/product/{code}.json"
        response = await self.http_client.get(url, timeout=15)
        if response.status_code != httpx.codes.NOT_FOUND:
            response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
