# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Request header kinds, an immutable header builder and lookup helpers.

HTTP header field names are case-insensitive (RFC 9110). Routers declare their
headers with lower-cased names, while adapters may write canonical casing
("Authorization"), so lookups and replacements go through the helpers below.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Union


class ConnectionHeader(str, Enum):
    KEEP_ALIVE = "keep-alive"
    CLOSE = "close"

    @property
    def header_name(self) -> str:
        return "connection"


class AcceptHeader(str, Enum):
    ALL = "*/*"
    APPLICATION_JSON = "application/json"
    APPLICATION_JSON_UTF8 = "application/json; charset=utf-8"
    TEXT = "text/plain"
    COMBINED_ALL = "application/json, text/plain, */*"

    @property
    def header_name(self) -> str:
        return "accept"


class ContentTypeHeader(str, Enum):
    APPLICATION_JSON = "application/json"
    APPLICATION_JSON_UTF8 = "application/json; charset=utf-8"
    URL_ENCODED = "application/x-www-form-urlencoded"
    FORM_DATA = "multipart/form-data"

    @property
    def header_name(self) -> str:
        return "content-type"


class AcceptEncodingHeader(str, Enum):
    GZIP = "gzip"
    COMPRESS = "compress"
    DEFLATE = "deflate"
    BR = "br"
    IDENTITY = "identity"
    ALL = "*"

    @property
    def header_name(self) -> str:
        return "accept-encoding"


class AcceptLanguageHeader(str, Enum):
    EN = "en"
    FA = "fa"
    ALL = "*"

    @property
    def header_name(self) -> str:
        return "accept-language"


class AuthorizationHeader(str, Enum):
    BASIC = "Basic"
    BEARER = "Bearer"

    @property
    def header_name(self) -> str:
        return "authorization"


HeaderKind = Union[ConnectionHeader, AcceptHeader, ContentTypeHeader, AcceptEncodingHeader, AcceptLanguageHeader]


@dataclass(frozen=True)
class HeaderBuilder:
    """
    Immutable header accumulator.

    Every ``with_*`` call returns a new builder, so a partially built chain can
    be shared between routers without leaking headers from one to another.
    """

    _headers: tuple[tuple[str, str], ...] = field(default=())

    def _updated(self, name: str, value: str) -> HeaderBuilder:
        headers = dict(self._headers)
        headers[name] = value
        return HeaderBuilder(tuple(headers.items()))

    def with_header(self, kind: HeaderKind) -> HeaderBuilder:
        return self._updated(kind.header_name, kind.value)

    def with_authorization(self, kind: AuthorizationHeader, token: str | None = None) -> HeaderBuilder:
        """
        Add ``<scheme> <token>``; without a token the header is left out.

        The request adapter fills in the live token on every attempt.
        """
        token = (token or "").strip()
        if not token:
            return self
        return self._updated(kind.header_name, f"{kind.value} {token}")

    def with_custom_header(self, name: str, value: str) -> HeaderBuilder:
        return self._updated(name, value)

    def with_custom_headers(self, headers: Mapping[str, str]) -> HeaderBuilder:
        builder = self
        for name, value in headers.items():
            builder = builder._updated(name, value)
        return builder

    def build(self) -> dict[str, str]:
        return dict(self._headers)


def has_header(headers: Mapping[str, str] | None, name: str) -> bool:
    if not headers:
        return False
    lower = name.lower()
    return any(str(key).lower() == lower for key in headers)


def set_header(headers: dict[str, str], name: str, value: str) -> dict[str, str]:
    """Replace every casing of ``name`` in-place with a single entry."""
    lower = name.lower()
    for key in [key for key in headers if str(key).lower() == lower]:
        del headers[key]
    headers[name] = value
    return headers


__all__ = [
    "AcceptEncodingHeader",
    "AcceptHeader",
    "AcceptLanguageHeader",
    "AuthorizationHeader",
    "ConnectionHeader",
    "ContentTypeHeader",
    "HeaderBuilder",
    "HeaderKind",
    "has_header",
    "set_header",
]
