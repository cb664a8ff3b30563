# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Registration endpoint payloads."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import asdict, dataclass
from typing import Any


def _required_str(data: Mapping[str, Any], key: str) -> str:
    if key not in data:
        raise KeyError(f"missing required key {key!r}")
    value = data[key]
    if not isinstance(value, str):
        raise TypeError(f"{key!r} must be a string, got {type(value).__name__}")
    return value


def _optional_str(data: Mapping[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise TypeError(f"{key!r} must be a string or null, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class RegisterDomainModel:
    """Successful registration response."""

    user_id: str
    username: str
    access_token: str | None = None
    message: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> RegisterDomainModel:
        """Strict decode: required keys must be strings, unknown keys are ignored."""
        return cls(
            user_id=_required_str(data, "user_id"),
            username=_required_str(data, "username"),
            access_token=_optional_str(data, "access_token"),
            message=_optional_str(data, "message"),
        )
