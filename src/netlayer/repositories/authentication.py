# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Groups the authentication-related endpoint services."""

from __future__ import annotations

import logging

from ..http.api_request import APIRequest
from ..services.registration import RegistrationService

logger = logging.getLogger(__name__)


class AuthenticationRepository:
    def __init__(self, api_request: APIRequest):
        self.api_request = api_request
        self._registration_service: RegistrationService | None = None
        logger.debug("AuthenticationRepository created")

    @property
    def registration_service(self) -> RegistrationService:
        if self._registration_service is None:
            self._registration_service = RegistrationService(self.api_request)
        return self._registration_service
