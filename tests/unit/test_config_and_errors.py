# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import asyncio
import importlib
import socket
import ssl

import httpx

from netlayer import config
from netlayer.config import DEFAULT_BASE_URL, DEFAULT_USER_AGENT
from netlayer.errors import (
    DecodingFailure,
    ErrorCategory,
    InvalidURLError,
    TransportFailure,
    ValidationFailure,
    categorize_exception,
    error_category_to_reason,
)


def test_network_settings_defaults():
    settings = config.NetworkSettings()
    assert settings.base_url == DEFAULT_BASE_URL
    assert settings.request_timeout == 30.0
    assert settings.resource_timeout == 30.0
    assert settings.retry_limit == 2
    assert settings.retry_delay == 30.0
    assert settings.ignore_local_cache is True
    assert settings.auth_token is None


def test_network_settings_env_overrides(monkeypatch):
    monkeypatch.setenv("NETLAYER_BASE_URL", "http://localhost:8000/api")
    monkeypatch.setenv("NETLAYER_REQUEST_TIMEOUT", "5.5")
    monkeypatch.setenv("NETLAYER_RESOURCE_TIMEOUT", "12")
    monkeypatch.setenv("NETLAYER_RETRY_LIMIT", "4")
    monkeypatch.setenv("NETLAYER_RETRY_DELAY", "0.25")
    monkeypatch.setenv("NETLAYER_IGNORE_LOCAL_CACHE", "off")
    monkeypatch.setenv("NETLAYER_USER_AGENT", "CustomAgent/1.0")
    monkeypatch.setenv("NETLAYER_VERIFY_SSL", "0")
    monkeypatch.setenv("NETLAYER_AUTH_TOKEN", "secret")
    monkeypatch.setenv("NETLAYER_UPLOAD_CHUNK_BYTES", "1024")

    importlib.reload(config)
    settings = config.load_network_settings()

    assert settings.base_url == "http://localhost:8000/api"
    assert settings.request_timeout == 5.5
    assert settings.resource_timeout == 12
    assert settings.retry_limit == 4
    assert settings.retry_delay == 0.25
    assert settings.ignore_local_cache is False
    assert settings.user_agent == "CustomAgent/1.0"
    assert settings.verify_ssl is False
    assert settings.auth_token == "secret"
    assert settings.upload_chunk_bytes == 1024


def test_network_settings_invalid_env_fall_back(monkeypatch):
    monkeypatch.setenv("NETLAYER_REQUEST_TIMEOUT", "not-a-number")
    monkeypatch.setenv("NETLAYER_RETRY_LIMIT", "ten")
    monkeypatch.setenv("NETLAYER_RETRY_DELAY", "-3")
    monkeypatch.setenv("NETLAYER_UPLOAD_CHUNK_BYTES", "0")
    monkeypatch.setenv("NETLAYER_AUTH_TOKEN", "   ")

    importlib.reload(config)
    settings = config.load_network_settings()

    assert settings.request_timeout == config.NetworkSettings.request_timeout
    assert settings.retry_limit == config.NetworkSettings.retry_limit
    assert settings.retry_delay == config.NetworkSettings.retry_delay
    assert settings.upload_chunk_bytes == config.NetworkSettings.upload_chunk_bytes
    assert settings.auth_token is None
    assert DEFAULT_USER_AGENT in settings.user_agent


def test_categorize_exception_maps_common_errors():
    request = httpx.Request("GET", "https://example.com")
    assert categorize_exception(httpx.ReadTimeout("slow", request=request)) == ErrorCategory.TIMEOUT
    assert categorize_exception(asyncio.TimeoutError()) == ErrorCategory.TIMEOUT
    assert categorize_exception(httpx.ConnectError("refused", request=request)) == ErrorCategory.CONNECTION_ERROR
    assert categorize_exception(ssl.SSLError("bad cert")) == ErrorCategory.SSL_ERROR
    assert categorize_exception(socket.gaierror("no host")) == ErrorCategory.DNS_ERROR
    assert categorize_exception(ConnectionResetError()) == ErrorCategory.CONNECTION_ERROR
    assert categorize_exception(InvalidURLError("::")) == ErrorCategory.INVALID_URL
    assert categorize_exception(RuntimeError("other")) == ErrorCategory.UNKNOWN_ERROR


def test_error_values_carry_retry_metadata():
    exhausted = ValidationFailure(503, attempts=3, retry_exhausted=True)
    assert exhausted.status_code == 503
    assert exhausted.category == ErrorCategory.VALIDATION
    assert exhausted.retry_exhausted is True
    assert "503" in str(exhausted)

    transport = TransportFailure("refused", category=ErrorCategory.DNS_ERROR, attempts=1)
    assert transport.category == ErrorCategory.DNS_ERROR
    assert transport.retry_exhausted is False

    decoding = DecodingFailure()
    assert str(decoding) == error_category_to_reason(ErrorCategory.DECODING)


def test_error_category_reason_fallbacks():
    assert error_category_to_reason(None) == ""
    assert error_category_to_reason(ErrorCategory.NONE) == ""
    assert error_category_to_reason(ErrorCategory.TIMEOUT) == "Network timeout"
