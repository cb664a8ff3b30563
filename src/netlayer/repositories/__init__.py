# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

from .authentication import AuthenticationRepository

__all__ = ["AuthenticationRepository"]
