"""Edamam Food Database API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx

from calorie_tracker.adapters.http import fetch_json
from calorie_tracker.domain.nutrition import EdamamCredentials
from calorie_tracker.errors import ConfigurationError

PARSER_PATH = "/api/food-database/v2/parser"
ACCOUNT_USER_HEADER = "Edamam-Account-User"


class EdamamClient(Protocol):
    """Interface for Edamam food parser interactions."""

    async def parse_foods(
        self,
        query: str,
        *,
        nutrition_type: str | None = None,
        category: str | None = None,
        account_user: bool = False,
    ) -> object:
        """Query the food parser and return raw API data."""


@dataclass
class HttpxEdamamClient(EdamamClient):
    """HTTPX-backed Edamam client."""

    credentials: EdamamCredentials
    base_url: str
    http_client: httpx.AsyncClient
    timeout: float = 15

    @classmethod
    def create(
        cls, credentials: EdamamCredentials, base_url: str, timeout: float = 15
    ) -> "HttpxEdamamClient":
        """Create an Edamam client with a managed httpx session."""
        return cls(
            credentials=credentials,
            base_url=base_url,
            http_client=httpx.AsyncClient(),
            timeout=timeout,
        )

    async def parse_foods(
        self,
        query: str,
        *,
        nutrition_type: str | None = None,
        category: str | None = None,
        account_user: bool = False,
    ) -> object:
        """Query the parser endpoint.

        With ``account_user`` the request is attributed to the configured
        Edamam user id, which accounts on newer plans require.
        """
        if not self.credentials.is_complete:
            raise ConfigurationError(
                "Edamam API credentials not configured: "
                "set EDAMAM_APP_ID and EDAMAM_APP_KEY"
            )
        headers: dict[str, str] = {"Accept": "application/json"}
        if account_user:
            if not self.credentials.user_id:
                raise ConfigurationError(
                    "Edamam user id not configured: set EDAMAM_USER_ID"
                )
            headers[ACCOUNT_USER_HEADER] = self.credentials.user_id

        params = {
            "app_id": self.credentials.app_id,
            "app_key": self.credentials.app_key,
            "ingr": query,
        }
        if nutrition_type:
            params["nutrition-type"] = nutrition_type
        if category:
            params["category"] = category

        return await fetch_json(
            "Edamam",
            self.http_client.get(
                f"{self.base_url}{PARSER_PATH}",
                params=params,
                headers=headers,
                timeout=self.timeout,
            ),
        )

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
