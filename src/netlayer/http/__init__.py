# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP pipeline exports."""

from .adapters import BearerTokenAdapter, RequestAdapter, StubHttpClient
from .api_request import APIRequest
from .client import HttpClient, create_default_http_client
from .encoding import JSONEncoding, ParameterEncoding, URLDestination, URLEncoding
from .handle import RequestHandle
from .headers import (
    AcceptEncodingHeader,
    AcceptHeader,
    AcceptLanguageHeader,
    AuthorizationHeader,
    ConnectionHeader,
    ContentTypeHeader,
    HeaderBuilder,
)
from .httpx_client import HttpxClient
from .models import Headers, HttpRequest, HttpResponse, RequestMethod, RequestResult
from .retry import RetryAction, RetryDecision, RetryPolicy, build_default_retry_policy
from .router import Router

__all__ = [
    "APIRequest",
    "AcceptEncodingHeader",
    "AcceptHeader",
    "AcceptLanguageHeader",
    "AuthorizationHeader",
    "BearerTokenAdapter",
    "ConnectionHeader",
    "ContentTypeHeader",
    "HeaderBuilder",
    "Headers",
    "HttpClient",
    "HttpRequest",
    "HttpResponse",
    "HttpxClient",
    "JSONEncoding",
    "ParameterEncoding",
    "RequestAdapter",
    "RequestHandle",
    "RequestMethod",
    "RequestResult",
    "RetryAction",
    "RetryDecision",
    "RetryPolicy",
    "Router",
    "StubHttpClient",
    "URLDestination",
    "URLEncoding",
    "build_default_retry_policy",
    "create_default_http_client",
]
