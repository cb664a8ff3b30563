# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Transport client: adapt, transmit, validate, retry and decode."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Coroutine
from typing import Any, TypeVar

from ..config import NetworkSettings, load_network_settings
from ..errors import (
    DecodingFailure,
    ErrorCategory,
    NetworkError,
    TransportFailure,
    ValidationFailure,
    categorize_exception,
)
from ..models.decoding import decode_json
from .adapters import BearerTokenAdapter, RequestAdapter
from .client import HttpClient, create_default_http_client
from .handle import RequestHandle
from .models import HttpRequest, HttpResponse, ProgressCallback, RequestResult
from .multipart import MimeSniffer, encode_multipart, wrap_multipart
from .retry import RetryPolicy
from .router import Router

logger = logging.getLogger(__name__)

T = TypeVar("T")

Prepare = Callable[[HttpRequest], HttpRequest]


class APIRequest:
    """
    Long-lived session shared by every endpoint service.

    ``send`` and ``upload`` return a RequestHandle immediately; the work runs on
    the designated event loop, which is the loop passed at construction or the
    loop running when the call is made.
    """

    def __init__(
        self,
        settings: NetworkSettings | None = None,
        *,
        http_client: HttpClient | None = None,
        adapter: RequestAdapter | None = None,
        retry_policy: RetryPolicy | None = None,
        loop: asyncio.AbstractEventLoop | None = None,
        sniffer: MimeSniffer | None = None,
    ):
        self.settings = settings or load_network_settings()
        self.http_client = http_client or create_default_http_client(self.settings)
        self.adapter = adapter or BearerTokenAdapter(lambda: self.settings.auth_token)
        self.retry_policy = retry_policy or RetryPolicy.from_settings(self.settings)
        self._loop = loop
        self._sniffer = sniffer
        self._closed = False
        logger.debug("APIRequest created")

    @property
    def closed(self) -> bool:
        return self._closed

    def send(self, router: Router, response_type: type[T]) -> RequestHandle[T]:
        """Send the request described by ``router`` and decode the body as ``response_type``."""
        return self._spawn(self._perform(router, response_type))

    def upload(
        self,
        router: Router,
        file: bytes | None,
        field_name: str | None = None,
        on_progress: ProgressCallback | None = None,
        *,
        response_type: type[T],
    ) -> RequestHandle[T]:
        """Upload ``file`` as a single multipart part inside the router's request."""

        def prepare(request: HttpRequest) -> HttpRequest:
            body = encode_multipart(file, field_name, sniffer=self._sniffer)
            return wrap_multipart(request, body, on_progress)

        return self._spawn(self._perform(router, response_type, prepare=prepare))

    def _spawn(self, coro: Coroutine[Any, Any, RequestResult[T]]) -> RequestHandle[T]:
        if self._closed:
            coro.close()
            raise RuntimeError("APIRequest is closed")
        try:
            running: asyncio.AbstractEventLoop | None = asyncio.get_running_loop()
        except RuntimeError:
            running = None
        loop = self._loop or running
        if loop is None:
            coro.close()
            raise RuntimeError("No designated event loop: call from a running loop or pass loop=...")
        if running is loop:
            return RequestHandle(loop.create_task(coro), loop)
        return RequestHandle(asyncio.run_coroutine_threadsafe(coro, loop), loop)

    async def _perform(self, router: Router, response_type: type[T], *, prepare: Prepare | None = None) -> RequestResult[T]:
        try:
            base_request = router.to_wire_request()
            if prepare is not None:
                base_request = prepare(base_request)
        except NetworkError as exc:
            logger.debug("Could not build request for %s: %s", type(router).__name__, exc)
            return RequestResult.failure(exc)
        except Exception as exc:  # noqa: BLE001
            logger.debug("Could not build request for %s: %r", type(router).__name__, exc)
            return RequestResult.failure(_unexpected_failure(exc, attempts=0))

        retry_count = 0
        while True:
            attempt = retry_count + 1
            try:
                request = self.adapter.adapt(base_request.copy())
            except Exception as exc:  # noqa: BLE001
                logger.debug("Adapter failed on attempt %d: %r", attempt, exc)
                return RequestResult.failure(_unexpected_failure(exc, attempts=attempt))
            logger.debug("Attempt %d: %s %s", attempt, request.method, request.url)
            response = await self._transmit(request)

            if response.is_success:
                try:
                    value = decode_json(response.content, response_type)
                except DecodingFailure as exc:
                    exc.attempts = attempt
                    return RequestResult.failure(exc)
                return RequestResult.success(value, attempts=attempt)

            decision = self.retry_policy.decide(retry_count, response.status_code)
            if not decision.should_retry:
                exhausted = response.status_code is not None and retry_count >= self.retry_policy.limit
                return RequestResult.failure(_failure_from_response(response, attempt, exhausted))
            if decision.delay > 0:
                await asyncio.sleep(decision.delay)
            retry_count += 1

    async def _transmit(self, request: HttpRequest) -> HttpResponse:
        timeout = self.settings.resource_timeout if self.settings.resource_timeout > 0 else None
        try:
            return await asyncio.wait_for(self.http_client.request(request), timeout=timeout)
        except asyncio.TimeoutError:
            return HttpResponse(
                ok=False,
                error_message=f"Resource timed out after {timeout}s",
                error_type="TimeoutError",
                meta={"error_category": ErrorCategory.TIMEOUT.value},
            )
        except Exception as exc:  # noqa: BLE001
            return HttpResponse(
                ok=False,
                error_message=str(exc),
                error_type=exc.__class__.__name__,
                meta={"error_category": categorize_exception(exc).value},
            )

    async def aclose(self) -> None:
        if self._closed:
            return
        self._closed = True
        await self.http_client.aclose()
        logger.debug("APIRequest closed")

    async def __aenter__(self) -> APIRequest:
        return self

    async def __aexit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        await self.aclose()


def _unexpected_failure(exc: Exception, *, attempts: int) -> NetworkError:
    error = NetworkError(f"{type(exc).__name__}: {exc}", attempts=attempts)
    error.__cause__ = exc
    return error


def _failure_from_response(
response: HttpResponse, attempts: int, retry_exhausted: bool) -> NetworkError:
    if response.status_code is None:
        try:
            category = ErrorCategory(response.meta.get("error_category", ErrorCategory.CONNECTION_ERROR))
        except ValueError:
            category = ErrorCategory.UNKNOWN_ERROR
        return TransportFailure(
            response.error_message or "",
            category=category,
            error_type=response.error_type,
            attempts=attempts,
            retry_exhausted=retry_exhausted,
        )
    return ValidationFailure(
        response.status_code,
        body=response.text,
        attempts=attempts,
        retry_exhausted=retry_exhausted,
    )


__all__ = ["APIRequest"]
