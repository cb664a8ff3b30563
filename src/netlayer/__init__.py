# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
netlayer package entrypoint.

An async client networking layer: routers describe endpoints, APIRequest
adapts, transmits, retries and decodes them over httpx, and view models
republish results as observable cells. HTTP behavior is abstracted behind an
injectable client interface, and domain objects are modeled with typed
dataclasses.
"""

from .config import NetworkSettings, load_network_settings
from .errors import (
    DecodingFailure,
    EncodingError,
    ErrorCategory,
    InvalidURLError,
    NetworkError,
    TransportFailure,
    ValidationFailure,
)
from .http import (
    APIRequest,
    BearerTokenAdapter,
    HeaderBuilder,
    HttpClient,
    HttpRequest,
    HttpResponse,
    HttpxClient,
    RequestHandle,
    RequestMethod,
    RequestResult,
    RetryPolicy,
    Router,
    create_default_http_client,
)
from .log import setup_logging
from .manager import NetworkManager
from .models import RegisterDomainModel
from .repositories import AuthenticationRepository
from .services import RegisterUser, RegistrationService
from .version import __version__
from .viewmodel import Published, RegistrationViewModel

__all__ = [
    "APIRequest",
    "AuthenticationRepository",
    "BearerTokenAdapter",
    "DecodingFailure",
    "EncodingError",
    "ErrorCategory",
    "HeaderBuilder",
    "HttpClient",
    "HttpRequest",
    "HttpResponse",
    "HttpxClient",
    "InvalidURLError",
    "NetworkError",
    "NetworkManager",
    "NetworkSettings",
    "Published",
    "RegisterDomainModel",
    "RegisterUser",
    "RegistrationService",
    "RegistrationViewModel",
    "RequestHandle",
    "RequestMethod",
    "RequestResult",
    "RetryPolicy",
    "Router",
    "TransportFailure",
    "ValidationFailure",
    "create_default_http_client",
    "load_network_settings",
    "setup_logging",
    "__version__",
]
