# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP request/response data models used across netlayer."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Generic, TypeVar

from ..errors import NetworkError

Headers = dict[str, str]
ProgressCallback = Callable[[float], None]

T = TypeVar("T")


class RequestMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    TRACE = "TRACE"
    DELETE = "DELETE"


@dataclass
class HttpRequest:
    """Wire request consumed by HttpClient implementations."""

    url: str
    method: str = "GET"
    headers: Headers | None = None
    body: bytes | None = None
    timeout: float | None = None
    allow_redirects: bool = True
    on_upload_progress: ProgressCallback | None = None

    def copy(self) -> HttpRequest:
        """Return a copy whose header map can be mutated independently."""
        return replace(self, headers=dict(self.headers or {}))


@dataclass
class HttpResponse:
    """Normalized HTTP response; transport failures carry ok=False and no status code."""

    ok: bool
    status_code: int | None = None
    headers: Headers = field(default_factory=dict)
    text: str = ""
    content: bytes = b""
    url: str | None = None
    error_message: str | None = None
    error_type: str | None = None
    meta: dict[str, Any] = field(default_factory=dict)

    @property
    def is_success(self) -> bool:
        return self.status_code is not None and 200 <= self.status_code < 300


@dataclass
class RequestResult(Generic[T]):
    """Outcome of one logical send/upload call; failures are values, never raised."""

    ok: bool
    value: T | None = None
    error: NetworkError | None = None
    attempts: int = 0

    @classmethod
    def success(cls, value: T, *, attempts: int = 1) -> RequestResult[T]:
        return cls(ok=True, value=value, attempts=attempts)

    @classmethod
    def failure(cls, error: NetworkError) -> RequestResult[T]:
        return cls(ok=False, error=error, attempts=error.attempts)

    def unwrap(self) -> T:
        """Return the value or raise the carried error."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]
