# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Endpoint services."""

from .registration import RegisterUser, RegistrationRouter, RegistrationService

__all__ = ["RegisterUser", "RegistrationRouter", "RegistrationService"]
