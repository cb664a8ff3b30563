# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed HttpClient implementation."""

from __future__ import annotations

import logging

import httpx

from ..config import NetworkSettings, load_network_settings
from ..errors import categorize_exception
from .client import HttpClient
from .headers import has_header
from .models import HttpRequest, HttpResponse
from .multipart import iter_upload_chunks

logger = logging.getLogger(__name__)


class HttpxClient(HttpClient):
    """Asynchronous httpx client wrapper sharing one connection pool."""

    def __init__(self, settings: NetworkSettings | None = None, client: httpx.AsyncClient | None = None):
        self.settings = settings or load_network_settings()
        self._client = client or httpx.AsyncClient(
            follow_redirects=self.settings.allow_redirects,
            timeout=self.settings.request_timeout,
            verify=self.settings.verify_ssl,
        )

    def _headers_for(self, request: HttpRequest) -> dict[str, str]:
        headers = dict(request.headers or {})
        if not has_header(headers, "User-Agent"):
            headers["User-Agent"] = self.settings.user_agent
        if self.settings.ignore_local_cache and not has_header(headers, "Cache-Control"):
            headers["Cache-Control"] = "no-cache"
        return headers

    async def request(self, request: HttpRequest) -> HttpResponse:
        headers = self._headers_for(request)
        content: object = request.body
        if request.on_upload_progress is not None and request.body:
            headers["Content-Length"] = str(len(request.body))
            content = iter_upload_chunks(request.body, request.on_upload_progress, self.settings.upload_chunk_bytes)

        timeout = request.timeout if request.timeout is not None else self.settings.request_timeout
        try:
            resp = await self._client.request(
                request.method,
                request.url,
                headers=headers,
                content=content,
                timeout=timeout,
                follow_redirects=request.allow_redirects,
            )
        except httpx.HTTPError as exc:
            logger.debug("%s %s failed: %s", request.method, request.url, exc)
            return HttpResponse(
                ok=False,
                error_message=str(exc) or exc.__class__.__name__,
                error_type=type(exc).__name__,
                meta={"error_category": categorize_exception(exc).value},
            )

        return HttpResponse(
            ok=True,
            status_code=resp.status_code,
            headers={key.lower(): value for key, value in resp.headers.items()},
            text=resp.text,
            content=resp.content,
            url=str(resp.url),
        )

    async def aclose(self) -> None:
        await self._client.aclose()
