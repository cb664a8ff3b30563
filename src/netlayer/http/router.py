# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Declarative endpoint descriptors and their conversion into wire requests."""

from __future__ import annotations

from typing import Any
from urllib.parse import urlsplit, urlunsplit

import httpx

from ..errors import InvalidURLError
from .encoding import JSONEncoding, ParameterEncoding, URLDestination, URLEncoding
from .models import HttpRequest, RequestMethod


def append_path_component(base_url: str, path: str) -> str:
    """
    Resolve ``base_url`` and append ``path`` as a path component.

    Raises InvalidURLError when the result is not an absolute http(s) URL.
    """
    try:
        parsed = httpx.URL(base_url)
    except (httpx.InvalidURL, TypeError, ValueError) as exc:
        raise InvalidURLError(base_url, str(exc)) from exc
    if parsed.scheme not in {"http", "https"} or not parsed.host:
        raise InvalidURLError(base_url)

    parts = urlsplit(base_url)
    segment = path.strip("/")
    if not segment:
        return base_url
    joined = f"{parts.path.rstrip('/')}/{segment}"
    url = urlunsplit((parts.scheme, parts.netloc, joined, parts.query, parts.fragment))
    try:
        httpx.URL(url)
    except httpx.InvalidURL as exc:
        raise InvalidURLError(url, str(exc)) from exc
    return url


class Router:
    """
    Base class for endpoint descriptors.

    Subclasses provide ``base_url``, ``path`` and ``method``; the remaining
    attributes have defaults matching a JSON API without query parameters.
    """

    base_url: str
    path: str
    method: RequestMethod

    headers: dict[str, str] | None = None
    params: dict[str, Any] | None = None
    query_params: dict[str, Any] | None = None
    encoding: ParameterEncoding = JSONEncoding()
    is_url_encoded: bool = False
    is_query_string: bool = False

    def to_wire_request(self) -> HttpRequest:
        """Build the wire request for this descriptor."""
        url = append_path_component(self.base_url, self.path)
        method = RequestMethod(self.method)
        request = HttpRequest(url=url, method=method.value, headers=dict(self.headers or {}))

        # GET/DELETE always place parameters in the query, even when only
        # `params` is declared and is_query_string is False.
        if method in (RequestMethod.GET, RequestMethod.DELETE):
            if self.is_query_string:
                request = URLEncoding(URLDestination.QUERY_STRING).encode(request, self.query_params)
            else:
                request = URLEncoding().encode(request, self.params)
        elif method in (RequestMethod.POST, RequestMethod.PUT, RequestMethod.PATCH):
            if self.is_url_encoded:
                request = URLEncoding().encode(request, self.params)
            else:
                request = self.encoding.encode(request, self.params)
        return request


__all__ = ["Router", "append_path_component"]
