"""Open Food Facts product API client."""

from dataclasses import dataclass
from typing import Protocol
from urllib.parse import quote

import httpx

from calorie_tracker.adapters.http import fetch_json


class OpenFoodFactsClient(Protocol):
    """Interface for barcode product lookups."""

    async def get_product(self, barcode: str) -> object:
        """Fetch a product by barcode and return raw API data."""


@dataclass
class HttpxOpenFoodFactsClient(OpenFoodFactsClient):
    """HTTPX-backed Open Food Facts client."""

    base_url: str
    http_client: httpx.AsyncClient
    timeout: float = 15

    @classmethod
    def create(cls, base_url: str, timeout: float = 15) -> "HttpxOpenFoodFactsClient":
        """Create a client with a managed httpx session."""
        return cls(base_url=base_url, http_client=httpx.AsyncClient(), timeout=timeout)

    async def get_product(self, barcode: str) -> object:
        """Fetch a product by barcode."""
        url = f"{self.base_url}/api/v2/product/{quote(barcode, safe='')}.json"
        return await fetch_json(
            "Open Food Facts", self.http_client.get(url, timeout=self.timeout)
        )

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
