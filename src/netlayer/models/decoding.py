# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Decoding of JSON response bodies into domain models."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any, TypeVar

from ..errors import DecodingFailure

T = TypeVar("T")


def decode_json(content: bytes, model_type: type[T]) -> T:
    """
    Parse ``content`` as a JSON object and build ``model_type`` from it.

    ``model_type`` is either ``dict`` (the raw object is returned) or a class
    exposing a strict ``from_mapping`` classmethod. Anything the model rejects
    surfaces as DecodingFailure.
    """
    if not content:
        raise DecodingFailure("Response body was empty")
    try:
        data: Any = json.loads(content)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise DecodingFailure(f"Response body is not valid JSON: {exc}") from exc

    if not isinstance(data, Mapping):
        raise DecodingFailure(f"Expected a JSON object, got {type(data).__name__}")
    if model_type is dict:
        return data  # type: ignore[return-value]

    from_mapping = getattr(model_type, "from_mapping", None)
    if not callable(from_mapping):
        raise DecodingFailure(f"{model_type.__name__} cannot be decoded from JSON")
    try:
        return from_mapping(data)
    except (KeyError, TypeError, ValueError) as exc:
        raise DecodingFailure(f"{model_type.__name__}: {exc}") from exc


__all__ = ["decode_json"]
