# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Cancelable handle for an in-flight send/upload call."""

from __future__ import annotations

import asyncio
import concurrent.futures
import logging
import threading
from collections.abc import Callable, Generator
from typing import Any, Generic, TypeVar, Union

from ..errors import NetworkError
from .models import RequestResult

logger = logging.getLogger(__name__)

T = TypeVar("T")

ResultCallback = Callable[[RequestResult[Any]], None]
_Pending = Union["asyncio.Task[RequestResult[T]]", "concurrent.futures.Future[RequestResult[T]]"]


class RequestHandle(Generic[T]):
    """
    Awaitable, cancelable view of one logical request.

    Completion callbacks always run on the designated event loop, whichever
    thread started the call. Once ``cancel()`` has been requested the
    in-flight attempt is aborted, no further retry is made, and callbacks that
    have not run yet are dropped.
    """

    def __init__(self, pending: _Pending, loop: asyncio.AbstractEventLoop):
        self._pending = pending
        self._loop = loop
        self._lock = threading.Lock()
        self._callbacks: list[ResultCallback] = []
        self._cancel_requested = False
        pending.add_done_callback(self._on_done)

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        return self._loop

    def done(self) -> bool:
        return self._pending.done()

    def cancelled(self) -> bool:
        return self._cancel_requested or self._pending.cancelled()

    def cancel(self) -> bool:
        with self._lock:
            if self._pending.done():
                self._cancel_requested = True
                self._callbacks.clear()
                return False
            self._cancel_requested = True
            self._callbacks.clear()
        logger.debug("Request cancelled")
        if isinstance(self._pending, asyncio.Task) and not self._on_loop_thread():
            self._loop.call_soon_threadsafe(self._pending.cancel)
            return True
        return self._pending.cancel()

    def add_done_callback(self, callback: ResultCallback) -> None:
        """Register ``callback(result)``; it is delivered on the designated loop."""
        with self._lock:
            if self._cancel_requested:
                return
            if not self._pending.done():
                self._callbacks.append(callback)
                return
        if not self._pending.cancelled():
            self._deliver(callback, _result_of(self._pending))

    def _on_loop_thread(self) -> bool:
        try:
            return asyncio.get_running_loop() is self._loop
        except RuntimeError:
            return False

    def _on_done(self, pending: _Pending) -> None:
        with self._lock:
            callbacks, self._callbacks = self._callbacks, []
            if self._cancel_requested or pending.cancelled():
                return
        result = _result_of(pending)
        for callback in callbacks:
            self._deliver(callback, result)

    def _deliver(self, callback: ResultCallback, result: RequestResult[T]) -> None:
        def run() -> None:
            if self._cancel_requested:
                return
            callback(result)

        if self._loop.is_closed():
            logger.debug("Dropping completion callback: designated loop is closed")
            return
        self._loop.call_soon_threadsafe(run)

    def __await__(self) -> Generator[Any, None, RequestResult[T]]:
        if isinstance(self._pending, asyncio.Task):
            return self._pending.__await__()
        return asyncio.wrap_future(self._pending).__await__()


def _result_of(pending: _Pending) -> RequestResult[Any]:
    exc = pending.exception()
    if exc is None:
        return pending.result()
    logger.debug("Request task failed: %r", exc)
    error = NetworkError(f"{type(exc).__name__}: {exc}")
    error.__cause__ = exc
    return RequestResult.failure(error)


__all__ = ["RequestHandle", "ResultCallback"]
