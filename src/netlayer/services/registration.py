# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Registration endpoint: router variants and the service that sends them."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from ..config import DEFAULT_BASE_URL
from ..http.api_request import APIRequest
from ..http.encoding import JSONEncoding, ParameterEncoding
from ..http.handle import RequestHandle
from ..http.headers import (
    AcceptEncodingHeader,
    AcceptHeader,
    ConnectionHeader,
    ContentTypeHeader,
    HeaderBuilder,
)
from ..http.models import RequestMethod
from ..http.router import Router
from ..models import RegisterDomainModel

logger = logging.getLogger(__name__)

_JSON_API_HEADERS = (
    HeaderBuilder()
    .with_header(AcceptEncodingHeader.GZIP)
    .with_header(AcceptHeader.APPLICATION_JSON)
    .with_header(ConnectionHeader.KEEP_ALIVE)
    .with_header(ContentTypeHeader.APPLICATION_JSON_UTF8)
)


class RegistrationRouter(Router):
    """Closed set of registration endpoints; every variant is matched below."""

    base_url: str

    @property
    def path(self) -> str:  # type: ignore[override]
        match self:
            case RegisterUser():
                return "authentication/register"
        raise TypeError(f"Unknown registration route: {type(self).__name__}")

    @property
    def method(self) -> RequestMethod:  # type: ignore[override]
        match self:
            case RegisterUser():
                return RequestMethod.POST
        raise TypeError(f"Unknown registration route: {type(self).__name__}")

    @property
    def headers(self) -> dict[str, str]:  # type: ignore[override]
        return _JSON_API_HEADERS.build()

    @property
    def encoding(self) -> ParameterEncoding:  # type: ignore[override]
        return JSONEncoding()

    @property
    def params(self) -> dict[str, Any] | None:  # type: ignore[override]
        match self:
            case RegisterUser(username=username, password=password):
                return {"username": username, "password": password}
        raise TypeError(f"Unknown registration route: {type(self).__name__}")


@dataclass(frozen=True)
class RegisterUser(RegistrationRouter):
    username: str
    password: str = field(repr=False)
    base_url: str = DEFAULT_BASE_URL


class RegistrationService:
    def __init__(self, api_request: APIRequest):
        self.api_request = api_request
        logger.debug("RegistrationService created")

    def register_user(self, username: str, password: str) -> RequestHandle[RegisterDomainModel]:
        route = RegisterUser(username=username, password=password, base_url=self.api_request.settings.base_url)
        return self.api_request.send(route, RegisterDomainModel)
