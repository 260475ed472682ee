# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from authlicensing.domain.exceptions import InvariantViolation


class LicenseStatus(str, Enum):
    ACTIVE = "active"
    SUSPENDED = "suspended"
    REVOKED = "revoked"


class ClaimResult(str, Enum):
    CLAIMED = "claimed"
    ALREADY_CLAIMED = "already_claimed"
    NOT_FOUND = "not_found"
    # store call failed after the user row was written; outcome must be re-queried
    UNKNOWN = "unknown"


@dataclass(slots=True, frozen=True)
class Subscription:

    level: str
    expires_at: datetime

    def is_current(self, now: datetime) -> bool:
        return self.expires_at > now


@dataclass(slots=True, frozen=True)
class License:

    id: int
    user_id: int | None
    key: str
    status: LicenseStatus
    subscription: Subscription
    issued_at: datetime

    def __post_init__(self) -> None:
        if not self.key or not self.key.strip():
            raise InvariantViolation("license key must not be blank", field="key")
        if not self.subscription.level:
            raise InvariantViolation("subscription level must not be blank", field="subscription.level")

    @property
    def is_claimed(self) -> bool:
        return self.user_id is not None

    @property
    def is_active(self) -> bool:
        return self.status is LicenseStatus.ACTIVE
