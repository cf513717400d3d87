"""Tests for HTTP-based adapters."""

import asyncio

import httpx
import pytest

from pantry_tracker.adapters.openfoodfacts_client import OpenFoodFactsClient


def test_openfoodfacts_client_fetches_product() -> None:
    seen_paths: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen_paths.append(request.url.path)
        return httpx.Response(
            200,
            json={"status": 1, "product": {"product_name": "Nutella"}},
        )

    transport = httpx.MockTransport(handler)
    client = OpenFoodFactsClient(
        base_url="https://world.openfoodfacts.org",
        http_client=httpx.AsyncClient(transport=transport),
    )

    payload = asyncio.run(client.get_product("3017620422003"))

    assert payload["product"] == {"product_name": "Nutella"}
    assert seen_paths == ["/api/v0/product/3017620422003.json"]


def test_openfoodfacts_client_raises_on_server_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, json={"error": "unavailable"})

    transport = httpx.MockTransport(handler)
    client = OpenFoodFactsClient(
        base_url="https://world.openfoodfacts.org",
        http_client=httpx.AsyncClient(transport=transport),
    )

    with pytest.raises(httpx.HTTPStatusError):
        asyncio.run(client.get_product("123"))


def test_openfoodfacts_client_returns_body_for_unknown_code() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            404, json={"status": 0, "status_verbose": "product not found"}
        )

    transport = httpx.MockTransport(handler)
    client = OpenFoodFactsClient(
        base_url="https://world.openfoodfacts.org",
        http_client=httpx.AsyncClient(transport=transport),
    )

    payload = asyncio.run(client.get_product("000"))

    assert payload["status"] == 0
