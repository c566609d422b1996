from __future__ import annotations

import asyncio

import httpx

from wugrecon.adapters.http_client import ApiClient
from wugrecon.config.http import HttpClientConfig, RateLimit


def test_api_client_applies_default_headers_and_throttle() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"ok": True})

    config = HttpClientConfig(
        name="wug",
        default_headers={"User-Agent": "wugrecon-tests"},
        ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
    )

    async def exercise() -> list[int]:
        async with ApiClient(config, transport=httpx.MockTransport(handler)) as client:
            first = await client.get("https://wug.example.net/api/v1/devices/42")
            second = await client.delete("https://wug.example.net/api/v1/devices/42")
            return [first.status_code, second.status_code]

    assert asyncio.run(exercise()) == [200, 200]
    assert [request.method for request in seen] == ["GET", "DELETE"]
    assert all(request.headers["User-Agent"] == "wugrecon-tests" for request in seen)


def test_api_client_without_throttle_passes_request_options() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=request.content)

    async def exercise() -> bytes:
        async with ApiClient(
            HttpClientConfig(name="wug"), transport=httpx.MockTransport(handler)
        ) as client:
            response = await client.patch("https://wug.example.net/x", content=b"payload")
            return response.content

    assert asyncio.run(exercise()) == b"payload"
