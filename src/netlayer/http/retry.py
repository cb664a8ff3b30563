# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Retry policy consulted by APIRequest after a failed attempt."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from ..config import NetworkSettings, load_network_settings

logger = logging.getLogger(__name__)


class RetryAction(str, Enum):
    STOP = "stop"
    RETRY_NOW = "retry_now"
    RETRY_AFTER = "retry_after"


@dataclass(frozen=True)
class RetryDecision:
    action: RetryAction
    delay: float = 0.0

    @property
    def should_retry(self) -> bool:
        return self.action is not RetryAction.STOP

    @classmethod
    def stop(cls) -> RetryDecision:
        return cls(RetryAction.STOP)

    @classmethod
    def retry_after(cls, delay: float) -> RetryDecision:
        if delay <= 0:
            return cls(RetryAction.RETRY_NOW)
        return cls(RetryAction.RETRY_AFTER, delay)


@dataclass
class RetryPolicy:
    """
    Bounded fixed-delay retry.

    ``retry_count`` is the number of retries already made for the logical
    request, so a limit of 2 allows at most 3 attempts.
    """

    limit: int = 2
    delay: float = 30.0

    @classmethod
    def from_settings(cls, settings: NetworkSettings) -> RetryPolicy:
        return cls(limit=max(0, settings.retry_limit), delay=max(0.0, settings.retry_delay))

    def decide(self, retry_count: int, status_code: int | None) -> RetryDecision:
        if retry_count >= self.limit:
            decision = RetryDecision.stop()
        elif status_code is None:
            decision = RetryDecision.stop()
        elif status_code == 401:
            decision = self._decide_unauthorized(retry_count)
        else:
            decision = RetryDecision.retry_after(self.delay)
        logger.debug("Retry decision for status=%s retry_count=%d: %s", status_code, retry_count, decision.action.value)
        return decision

    def _decide_unauthorized(self, retry_count: int) -> RetryDecision:  # noqa: ARG002
        # Token refresh hooks in here; until then a 401 is retried like any other status.
        return RetryDecision.retry_after(self.delay)


def build_default_retry_policy() -> RetryPolicy:
    """Create a RetryPolicy from environment-backed NetworkSettings."""
    return RetryPolicy.from_settings(load_network_settings())


__all__ = ["RetryAction", "RetryDecision", "RetryPolicy", "build_default_retry_policy"]
