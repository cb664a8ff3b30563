# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Per-attempt request adapters and a programmable HttpClient for tests."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Optional, Protocol

from .headers import set_header
from .models import HttpRequest, HttpResponse
from .multipart import iter_upload_chunks

logger = logging.getLogger(__name__)

TokenSource = Callable[[], Optional[str]]


class RequestAdapter(Protocol):
    """Mutates an outbound request right before each attempt is transmitted."""

    def adapt(self, request: HttpRequest) -> HttpRequest: ...


class BearerTokenAdapter(RequestAdapter):
    """Attach ``Authorization: Bearer <token>`` when the token source yields one."""

    def __init__(self, token_source: TokenSource):
        self._token_source = token_source

    def adapt(self, request: HttpRequest) -> HttpRequest:
        token = self._token_source()
        if not token:
            return request
        adapted = request.copy()
        set_header(adapted.headers, "Authorization", f"Bearer {token}")
        logger.debug("Attached bearer token to %s %s", adapted.method, adapted.url)
        return adapted


class StubHttpClient:
    """
    Deterministic, programmable HttpClient for tests.

    Responses are served per URL when registered with ``add``; otherwise the
    ``sequence`` is consumed in order, repeating its last element.
    """

    def __init__(
        self,
        responses: dict[str, HttpResponse] | None = None,
        *,
        sequence: Iterable[HttpResponse | BaseException] | None = None,
    ):
        self._responses = responses or {}
        self._sequence = list(sequence or [])
        self.requests: list[HttpRequest] = []
        self.closed = False

    def add(self, url: str, response: HttpResponse) -> None:
        self._responses[url] = response

    async def request(self, request: HttpRequest) -> HttpResponse:
        self.requests.append(request)
        # Drain the body the way a real transport would so progress callbacks fire.
        async for _chunk in iter_upload_chunks(request.body, request.on_upload_progress):
            pass
        if request.url in self._responses:
            return self._responses[request.url]
        if self._sequence:
            item = self._sequence[min(len(self.requests) - 1, len(self._sequence) - 1)]
            if isinstance(item, BaseException):
                raise item
            return item
        return HttpResponse(ok=False, status_code=None, error_message="No stubbed response configured")

    async def aclose(self) -> None:
        self.closed = True


__all__ = ["BearerTokenAdapter", "RequestAdapter", "StubHttpClient", "TokenSource"]
