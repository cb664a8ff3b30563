# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Presentation state for the registration flow."""

from __future__ import annotations

import logging

from ..errors import NetworkError
from ..http.handle import RequestHandle
from ..http.models import RequestResult
from ..manager import NetworkManager
from ..models import RegisterDomainModel
from .published import Published

logger = logging.getLogger(__name__)


class RegistrationViewModel:
    """
    Publishes ``loading``, ``error`` and ``register_model`` for one screen.

    Submissions are not queued. Two overlapping ``register_user`` calls each
    write the cells when they complete, so the last completion wins and
    ``loading`` may drop to False while the other call is still in flight.
    """

    def __init__(self, manager: NetworkManager | None = None):
        self._manager = manager
        self.loading: Published[bool] = Published(False)
        self.error: Published[NetworkError | None] = Published(None)
        self.register_model: Published[RegisterDomainModel | None] = Published(None)
        self._handles: set[RequestHandle[RegisterDomainModel]] = set()

    @property
    def manager(self) -> NetworkManager:
        return self._manager or NetworkManager.shared()

    def register_user(self, username: str, password: str) -> RequestHandle[RegisterDomainModel]:
        self.loading.send(True)
        service = self.manager.authentication_repository.registration_service
        try:
            handle = service.register_user(username, password)
        except RuntimeError:
            self.loading.send(False)
            raise
        self._handles.add(handle)

        def on_complete(result: RequestResult[RegisterDomainModel]) -> None:
            self._handles.discard(handle)
            if result.error is not None:
                self.loading.send(False)
                logger.debug("Registration failed: %s", result.error)
                self.error.send(result.error)
            else:
                self.register_model.send(result.value)
                self.loading.send(False)

        handle.add_done_callback(on_complete)
        return handle

    def cancel_all(self) -> None:
        handles, self._handles = self._handles, set()
        for handle in handles:
            handle.cancel()
        if handles:
            self.loading.send(False)

    async def aclose(self) -> None:
        self.cancel_all()
        if self._manager is None:
            await NetworkManager.destroy()
        else:
            await self._manager.aclose()
