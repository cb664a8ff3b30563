# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Domain models and strict response decoding."""

from .decoding import decode_json
from .registration import RegisterDomainModel

__all__ = ["RegisterDomainModel", "decode_json"]
