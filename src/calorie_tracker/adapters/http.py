"""Shared helpers for HTTPX-backed provider clients."""

from collections.abc import Awaitable

import httpx

from calorie_tracker.errors import ApiError


async def fetch_json(provider: str, request: Awaitable[httpx.Response]) -> object:
    """Await a request and return its decoded JSON body.

    Transport failures, non-2xx responses and undecodable bodies are all
    reported as ``ApiError``.
    """
    try:
        response = await request
    except httpx.HTTPError as exc:
        raise ApiError(f"{provider} request failed: {exc}") from exc
    if not response.is_success:
        raise ApiError(
            f"{provider} API error {response.status_code}: {response.text}",
            status_code=response.status_code,
            body=response.text,
        )
    try:
        return response.json()
    except ValueError as exc:
        raise ApiError(
            f"{provider} returned a non-JSON response",
            status_code=response.status_code,
            body=response.text,
        ) from exc
