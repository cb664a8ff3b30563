# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

import asyncio
import socket
import ssl as ssl_module
from enum import Enum

import httpx


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    SSL_ERROR = "SSL_ERROR"
    DNS_ERROR = "DNS_ERROR"
    INVALID_URL = "INVALID_URL"
    ENCODING = "ENCODING"
    VALIDATION = "VALIDATION"
    DECODING = "DECODING"
    CANCELLED = "CANCELLED"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    NONE = "NONE"


class NetworkError(Exception):
    """Base class for every failure surfaced through a RequestResult."""

    category: ErrorCategory = ErrorCategory.UNKNOWN_ERROR

    def __init__(self, message: str = "", *, attempts: int = 0, retry_exhausted: bool = False):
        super().__init__(message)
        self.message = message
        self.attempts = attempts
        self.retry_exhausted = retry_exhausted

    @property
    def reason(self) -> str:
        return error_category_to_reason(self.category)

    def __str__(self) -> str:
        return self.message or self.reason


class InvalidURLError(NetworkError):
    """The router could not be resolved into an absolute URL."""

    category = ErrorCategory.INVALID_URL

    def __init__(self, url: str, message: str = ""):
        super().__init__(message or f"Invalid URL: {url!r}")
        self.url = url


class EncodingError(NetworkError):
    """Parameters could not be encoded into the wire request."""

    category = ErrorCategory.ENCODING


class TransportFailure(NetworkError):
    """Connection-level failure: no HTTP status was observed."""

    def __init__(
        self,
        message: str = "",
        *,
        category: ErrorCategory = ErrorCategory.CONNECTION_ERROR,
        error_type: str | None = None,
        attempts: int = 0,
        retry_exhausted: bool = False,
    ):
        super().__init__(message, attempts=attempts, retry_exhausted=retry_exhausted)
        self.category = category
        self.error_type = error_type


class ValidationFailure(NetworkError):
    """The server answered with a status outside the 2xx range."""

    category = ErrorCategory.VALIDATION

    def __init__(self, status_code: int, *, body: str = "", attempts: int = 0, retry_exhausted: bool = False):
        super().__init__(
            f"Response status code was unacceptable: {status_code}",
            attempts=attempts,
            retry_exhausted=retry_exhausted,
        )
        self.status_code = status_code
        self.body = body


class DecodingFailure(NetworkError):
    """The response body does not conform to the expected model."""

    category = ErrorCategory.DECODING


def categorize_exception(exc: BaseException) -> ErrorCategory:
    """
    Map Python/httpx exceptions to ErrorCategory.
    """
    if isinstance(exc, NetworkError):
        return exc.category

    if isinstance(exc, (httpx.TimeoutException, asyncio.TimeoutError, TimeoutError)):
        return ErrorCategory.TIMEOUT

    if isinstance(exc, httpx.InvalidURL):
        return ErrorCategory.INVALID_URL

    # ssl and dns checks come first: httpx wraps them in ConnectError but the
    # raw exceptions can also surface from custom transports.
    if isinstance(exc, (ssl_module.SSLError, ssl_module.CertificateError)):
        return ErrorCategory.SSL_ERROR

    if isinstance(exc, (socket.gaierror, socket.herror)):
        return ErrorCategory.DNS_ERROR

    if isinstance(exc, (httpx.ConnectError, httpx.RemoteProtocolError, httpx.NetworkError, httpx.ProxyError)):
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, (ConnectionError, ConnectionRefusedError, ConnectionResetError)):
        return ErrorCategory.CONNECTION_ERROR

    return ErrorCategory.UNKNOWN_ERROR


def error_category_to_reason(category: ErrorCategory | None) -> str:
    """User-facing reason string."""
    mapping = {
        ErrorCategory.TIMEOUT: "Network timeout",
        ErrorCategory.CONNECTION_ERROR: "Network connectivity issue",
        ErrorCategory.SSL_ERROR: "TLS/certificate issue",
        ErrorCategory.DNS_ERROR: "DNS resolution failure",
        ErrorCategory.INVALID_URL: "Request URL could not be built",
        ErrorCategory.ENCODING: "Request parameters could not be encoded",
        ErrorCategory.VALIDATION: "Server rejected the request",
        ErrorCategory.DECODING: "Response could not be decoded",
        ErrorCategory.CANCELLED: "Request was cancelled",
        ErrorCategory.UNKNOWN_ERROR: "Network error",
        ErrorCategory.NONE: "",
        None: "",
    }
    return mapping.get(category, "Request failed due to network error")


__all__ = [
    "DecodingFailure",
    "EncodingError",
    "ErrorCategory",
    "InvalidURLError",
    "NetworkError",
    "TransportFailure",
    "ValidationFailure",
    "categorize_exception",
    "error_category_to_reason",
]
