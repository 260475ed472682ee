# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum

from authlicensing.application.services.license_claims import LicenseClaimEngine
from authlicensing.domain.licenses import ClaimResult
from authlicensing.domain.users.entities import User
from authlicensing.domain.users.exceptions import UserAlreadyExistsError
from authlicensing.domain.users.repositories import PasswordHasher, UserRepository
from authlicensing.shared.errors.base import InfrastructureError
from authlicensing.shared.logging import logger


class RegistrationStatus(str, Enum):
    CREATED = "created"
    DUPLICATE_USERNAME = "duplicate_username"
    VALIDATION_ERROR = "validation_error"


@dataclass(slots=True, frozen=True)
class RegistrationResult:

    status: RegistrationStatus
    user: User | None = None
    claim_outcome: ClaimResult | None = None

    @property
    def created(self) -> bool:
        return self.status is RegistrationStatus.CREATED


def _utcnow() -> datetime:
    return datetime.now(UTC)


class RegisterUserUseCase:
    """Creates a user, then optionally claims a license key for it.

    The user row is never rolled back because of the claim: a key that is
    missing, already taken or whose claim could not be confirmed is only
    reported through ``claim_outcome``.
    """

    def __init__(
        self,
        *,
        users: UserRepository,
        password_hasher: PasswordHasher,
        claims: LicenseClaimEngine,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher
        self._claims = claims
        self._clock = clock

    def execute(
        self, username: str, password: str, license_key: str | None = None
    ) -> RegistrationResult:
        if not username or not username.strip() or not password or not password.strip():
            return RegistrationResult(RegistrationStatus.VALIDATION_ERROR)

        if self._users.find_by_username(username) is not None:
            return RegistrationResult(RegistrationStatus.DUPLICATE_USERNAME)

        hashed = self._password_hasher.hash(password)
        try:
            user = self._users.add(
                User(id=0, username=username, password_hash=hashed, created_at=self._clock())
            )
        except UserAlreadyExistsError:
            # lost the race against a concurrent registration after the pre-check
            return RegistrationResult(RegistrationStatus.DUPLICATE_USERNAME)
        logger.info(f"auth.register: created user_id={user.id}")

        if not license_key or not license_key.strip():
            return RegistrationResult(RegistrationStatus.CREATED, user=user)

        try:
            outcome = self._claims.try_claim(license_key.strip(), user.id)
        except InfrastructureError as exc:
            logger.warning(f"auth.register: claim outcome unknown user_id={user.id} ({exc.code})")
            outcome = ClaimResult.UNKNOWN
        return RegistrationResult(RegistrationStatus.CREATED, user=user, claim_outcome=outcome)
