# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import ClaimResult, License, LicenseStatus, Subscription
from .exceptions import LicenseInvalidError, LicenseKeyExistsError
from .repositories import LicenseRepository

__all__ = [
    "ClaimResult",
    "License",
    "LicenseInvalidError",
    "LicenseKeyExistsError",
    "LicenseRepository",
    "LicenseStatus",
    "Subscription",
]
