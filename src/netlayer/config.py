# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for netlayer."""

import os
from dataclasses import dataclass

from .version import __version__

DEFAULT_USER_AGENT = f"netlayer/{__version__}"
DEFAULT_BASE_URL = "https://yourdomain.com/api/v1"


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    try:
        value = os.getenv(name)
        return int(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _optional_str_env(name: str, default: str | None) -> str | None:
    value = os.getenv(name)
    if value is None:
        return default
    value = value.strip()
    return value or None


@dataclass
class NetworkSettings:
    """Session-wide defaults, fixed when an APIRequest is constructed."""

    base_url: str = DEFAULT_BASE_URL
    request_timeout: float = 30.0
    resource_timeout: float = 30.0
    retry_limit: int = 2
    retry_delay: float = 30.0
    ignore_local_cache: bool = True
    user_agent: str = DEFAULT_USER_AGENT
    allow_redirects: bool = True
    verify_ssl: bool = True
    auth_token: str | None = None
    upload_chunk_bytes: int = 64 * 1024

    @classmethod
    def from_env(cls) -> "NetworkSettings":
        """Create settings from environment variables (evaluated at call time)."""
        retry_limit = _int_env("NETLAYER_RETRY_LIMIT", cls.retry_limit)
        if retry_limit < 0:
            retry_limit = cls.retry_limit
        retry_delay = _float_env("NETLAYER_RETRY_DELAY", cls.retry_delay)
        if retry_delay < 0:
            retry_delay = cls.retry_delay
        upload_chunk_bytes = _int_env("NETLAYER_UPLOAD_CHUNK_BYTES", cls.upload_chunk_bytes)
        if upload_chunk_bytes <= 0:
            upload_chunk_bytes = cls.upload_chunk_bytes
        return cls(
            base_url=os.getenv("NETLAYER_BASE_URL", cls.base_url),
            request_timeout=_float_env("NETLAYER_REQUEST_TIMEOUT", cls.request_timeout),
            resource_timeout=_float_env("NETLAYER_RESOURCE_TIMEOUT", cls.resource_timeout),
            retry_limit=retry_limit,
            retry_delay=retry_delay,
            ignore_local_cache=_bool_env("NETLAYER_IGNORE_LOCAL_CACHE", cls.ignore_local_cache),
            user_agent=os.getenv("NETLAYER_USER_AGENT", cls.user_agent),
            allow_redirects=_bool_env("NETLAYER_HTTP_REDIRECTS", cls.allow_redirects),
            verify_ssl=_bool_env("NETLAYER_VERIFY_SSL", cls.verify_ssl),
            auth_token=_optional_str_env("NETLAYER_AUTH_TOKEN", cls.auth_token),
            upload_chunk_bytes=upload_chunk_bytes,
        )


def load_network_settings() -> NetworkSettings:
    """Load network settings from environment with sensible defaults."""
    return NetworkSettings.from_env()
