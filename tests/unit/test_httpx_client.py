# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import asyncio
import json

import httpx

from netlayer.config import NetworkSettings
from netlayer.http.client import create_default_http_client
from netlayer.http.httpx_client import HttpxClient
from netlayer.http.models import HttpRequest


def _client(handler, **settings):
    config = NetworkSettings(user_agent="UA/1.0", **settings)
    return HttpxClient(config, client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))


def test_httpx_client_success_normalizes_response():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(201, headers={"X-Test": "1"}, json={"ok": True})

    async def scenario():
        client = _client(handler)
        try:
            return await client.request(
                HttpRequest(url="https://api.test/items", method="POST", headers={"accept": "application/json"}, body=b"{}")
            )
        finally:
            await client.aclose()

    response = asyncio.run(scenario())
    assert response.ok is True
    assert response.status_code == 201
    assert response.is_success is True
    assert response.headers["x-test"] == "1"
    assert json.loads(response.content) == {"ok": True}
    assert response.url == "https://api.test/items"

    sent = seen[0]
    assert sent.method == "POST"
    assert sent.headers["User-Agent"] == "UA/1.0"
    assert sent.headers["Cache-Control"] == "no-cache"
    assert sent.headers["accept"] == "application/json"
    assert sent.content == b"{}"


def test_httpx_client_respects_cache_setting_and_explicit_headers():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(204)

    async def scenario():
        client = _client(handler, ignore_local_cache=False)
        try:
            await client.request(HttpRequest(url="https://api.test/", headers={"user-agent": "Mine/2"}))
        finally:
            await client.aclose()

    asyncio.run(scenario())
    assert "Cache-Control" not in seen[0].headers
    assert seen[0].headers["User-Agent"] == "Mine/2"


def test_httpx_client_streams_upload_with_progress():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200)

    async def scenario():
        client = _client(handler, upload_chunk_bytes=4)
        progress = []
        try:
            await client.request(
                HttpRequest(url="https://api.test/upload", method="POST", body=b"0123456789", on_upload_progress=progress.append)
            )
        finally:
            await client.aclose()
        return progress

    progress = asyncio.run(scenario())
    assert progress == [0.4, 0.8, 1.0]
    assert seen[0].content == b"0123456789"
    assert seen[0].headers["Content-Length"] == "10"


def test_httpx_client_reports_transport_errors_as_values():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("boom", request=request)

    async def scenario():
        client = _client(handler)
        try:
            return await client.request(HttpRequest(url="https://api.test/"))
        finally:
            await client.aclose()

    response = asyncio.run(scenario())
    assert response.ok is False
    assert response.status_code is None
    assert response.error_message == "boom"
    assert response.error_type == "ConnectError"
    assert response.meta["error_category"] == "CONNECTION_ERROR"


def test_create_default_http_client_uses_settings():
    async def scenario():
        client = create_default_http_client(NetworkSettings(verify_ssl=False, request_timeout=3))
        try:
            return client
        finally:
            await client.aclose()

    client = asyncio.run(scenario())
    assert isinstance(client, HttpxClient)
    assert client.settings.request_timeout == 3
