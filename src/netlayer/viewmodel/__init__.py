# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

from .published import Published, Subscription
from .registration import RegistrationViewModel

__all__ = ["Published", "RegistrationViewModel", "Subscription"]
