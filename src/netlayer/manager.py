# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Session facade that owns the shared transport and the repositories built on it."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import ClassVar

from .config import NetworkSettings, load_network_settings
from .http.api_request import APIRequest
from .http.client import HttpClient, create_default_http_client
from .repositories.authentication import AuthenticationRepository

logger = logging.getLogger(__name__)


class NetworkManager:
    """
    Lazily wires one APIRequest into every repository.

    The manager owns the transport: ``reset()`` closes it and drops the
    repositories so the next access builds fresh ones, and ``aclose()`` ends
    the manager's life. ``NetworkManager.shared()`` hands out a process-wide
    instance for callers that do not manage their own.
    """

    _shared: ClassVar[NetworkManager | None] = None
    _shared_lock: ClassVar[threading.Lock] = threading.Lock()

    def __init__(
        self,
        settings: NetworkSettings | None = None,
        http_client_factory: Callable[[NetworkSettings], HttpClient] | None = None,
    ):
        self.settings = settings or load_network_settings()
        self._http_client_factory = http_client_factory or create_default_http_client
        self._api_request: APIRequest | None = None
        self._authentication_repository: AuthenticationRepository | None = None

    @classmethod
    def shared(cls) -> NetworkManager:
        with cls._shared_lock:
            if cls._shared is None:
                cls._shared = cls()
            return cls._shared

    @classmethod
    def set_shared(cls, manager: NetworkManager | None) -> None:
        with cls._shared_lock:
            cls._shared = manager

    @classmethod
    async def destroy(cls) -> None:
        """Tear down the shared instance; the next ``shared()`` call builds a new one."""
        with cls._shared_lock:
            manager, cls._shared = cls._shared, None
        if manager is not None:
            await manager.aclose()

    @property
    def api_request(self) -> APIRequest:
        if self._api_request is None:
            self._api_request = APIRequest(self.settings, http_client=self._http_client_factory(self.settings))
        return self._api_request

    @property
    def authentication_repository(self) -> AuthenticationRepository:
        if self._authentication_repository is None:
            self._authentication_repository = AuthenticationRepository(self.api_request)
        return self._authentication_repository

    async def reset(self) -> None:
        api_request, self._api_request = self._api_request, None
        self._authentication_repository = None
        if api_request is not None:
            await api_request.aclose()
        logger.debug("NetworkManager reset")

    async def aclose(self) -> None:
        await self.reset()

    async def __aenter__(self) -> NetworkManager:
        return self

    async def __aexit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        await self.aclose()


__all__ = ["NetworkManager"]
