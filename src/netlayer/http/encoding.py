# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Parameter encodings that fold a parameter mapping into an HttpRequest.

Both encodings follow the conventions of the Alamofire encoders the routers
were modeled on: query components are sorted by key, nested containers use
bracket notation, and booleans are written as 1/0.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from enum import Enum
from typing import Any, Protocol
from urllib.parse import quote, urlsplit, urlunsplit

from ..errors import EncodingError
from .headers import has_header, set_header
from .models import HttpRequest

Parameters = Mapping[str, Any]

# RFC 3986 unreserved characters plus "/" and "?" stay literal in query components.
_QUERY_SAFE = "/?"
_URL_ENCODED_CONTENT_TYPE = "application/x-www-form-urlencoded; charset=utf-8"
_JSON_CONTENT_TYPE = "application/json"
_QUERY_METHODS = {"GET", "HEAD", "DELETE"}


class ParameterEncoding(Protocol):
    def encode(self, request: HttpRequest, parameters: Parameters | None) -> HttpRequest: ...


class URLDestination(str, Enum):
    METHOD_DEPENDENT = "method_dependent"
    QUERY_STRING = "query_string"
    HTTP_BODY = "http_body"


def _escape(value: str) -> str:
    return quote(value, safe=_QUERY_SAFE)


def _scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    if value is None:
        return ""
    return str(value)


def query_components(key: str, value: Any) -> list[tuple[str, str]]:
    """Flatten one parameter into escaped (key, value) pairs."""
    components: list[tuple[str, str]] = []
    if isinstance(value, Mapping):
        for nested_key in sorted(value, key=str):
            components.extend(query_components(f"{key}[{nested_key}]", value[nested_key]))
    elif isinstance(value, (list, tuple)):
        for item in value:
            components.extend(query_components(f"{key}[]", item))
    else:
        components.append((_escape(key), _escape(_scalar(value))))
    return components


def query_string(parameters: Parameters) -> str:
    components: list[tuple[str, str]] = []
    for key in sorted(parameters, key=str):
        components.extend(query_components(str(key), parameters[key]))
    return "&".join(f"{key}={value}" for key, value in components)


class URLEncoding:
    """Encode parameters as a query string or a form-urlencoded body."""

    def __init__(self, destination: URLDestination = URLDestination.METHOD_DEPENDENT):
        self.destination = destination

    def _encodes_in_url(self, method: str) -> bool:
        if self.destination is URLDestination.QUERY_STRING:
            return True
        if self.destination is URLDestination.HTTP_BODY:
            return False
        return method.upper() in _QUERY_METHODS

    def encode(self, request: HttpRequest, parameters: Parameters | None) -> HttpRequest:
        if parameters is None:
            return request
        encoded = request.copy()
        try:
            query = query_string(parameters)
        except (TypeError, ValueError) as exc:
            raise EncodingError(f"Query encoding failed: {exc}") from exc

        if self._encodes_in_url(encoded.method):
            if query:
                parts = urlsplit(encoded.url)
                merged = f"{parts.query}&{query}" if parts.query else query
                encoded.url = urlunsplit((parts.scheme, parts.netloc, parts.path, merged, parts.fragment))
            return encoded

        headers = encoded.headers if encoded.headers is not None else {}
        if not has_header(headers, "Content-Type"):
            set_header(headers, "Content-Type", _URL_ENCODED_CONTENT_TYPE)
        encoded.headers = headers
        encoded.body = query.encode("utf-8")
        return encoded

    def __eq__(self, other: object) -> bool:
        return isinstance(other, URLEncoding) and other.destination is self.destination

    def __repr__(self) -> str:
        return f"URLEncoding(destination={self.destination.value!r})"


class JSONEncoding:
    """Encode parameters as a compact JSON request body."""

    def __init__(self, sort_keys: bool = False):
        self.sort_keys = sort_keys

    def encode(self, request: HttpRequest, parameters: Parameters | None) -> HttpRequest:
        if parameters is None:
            return request
        encoded = request.copy()
        try:
            body = json.dumps(parameters, separators=(",", ":"), sort_keys=self.sort_keys, ensure_ascii=False)
        except (TypeError, ValueError) as exc:
            raise EncodingError(f"JSON encoding failed: {exc}") from exc

        headers = encoded.headers if encoded.headers is not None else {}
        if not has_header(headers, "Content-Type"):
            set_header(headers, "Content-Type", _JSON_CONTENT_TYPE)
        encoded.headers = headers
        encoded.body = body.encode("utf-8")
        return encoded

    def __eq__(self, other: object) -> bool:
        return isinstance(other, JSONEncoding) and other.sort_keys == self.sort_keys

    def __repr__(self) -> str:
        return f"JSONEncoding(sort_keys={self.sort_keys!r})"


__all__ = [
    "JSONEncoding",
    "ParameterEncoding",
    "Parameters",
    "URLDestination",
    "URLEncoding",
    "query_string",
]
