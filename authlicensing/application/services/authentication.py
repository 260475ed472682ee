# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Credential and license decision for token issuance."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from authlicensing.domain.licenses import LicenseRepository
from authlicensing.domain.users.exceptions import MalformedHashError
from authlicensing.domain.users.repositories import PasswordHasher, UserRepository
from authlicensing.shared.logging import logger


class AuthStatus(str, Enum):
    OK = "ok"
    INVALID_CREDENTIALS = "invalid_credentials"
    LICENSE_INVALID = "license_invalid"


@dataclass(slots=True, frozen=True)
class AuthDecision:

    status: AuthStatus
    level: str | None = None
    license_key: str | None = None
    expires_at: datetime | None = None

    @property
    def is_ok(self) -> bool:
        return self.status is AuthStatus.OK

    @classmethod
    def rejected(cls, status: AuthStatus) -> "AuthDecision":
        return cls(status=status)


class AuthenticationEngine:
    """Decides whether a (username, password, license key) triple may get a token.

    Checks run in a fixed order and stop at the first failure: user lookup,
    password, owned active license, subscription expiry. Credentials are
    always checked before the license so an unauthenticated caller learns
    nothing about license keys. Callers only ever see two rejection kinds.
    """

    def __init__(
        self,
        *,
        users: UserRepository,
        licenses: LicenseRepository,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._licenses = licenses
        self._password_hasher = password_hasher

    def authorize(self, username: str, password: str, key: str, now: datetime) -> AuthDecision:
        user = self._users.find_by_username(username)
        if user is None:
            return AuthDecision.rejected(AuthStatus.INVALID_CREDENTIALS)

        try:
            password_valid = self._password_hasher.verify(password, user.password_hash)
        except MalformedHashError:
            logger.error(f"auth.authorize: malformed password hash for user_id={user.id}")
            password_valid = False
        if not password_valid:
            return AuthDecision.rejected(AuthStatus.INVALID_CREDENTIALS)

        active_license = self._licenses.find_active_for_user(user.id, key) if key else None
        if active_license is None:
            logger.info(f"auth.authorize: no active license for user_id={user.id}")
            return AuthDecision.rejected(AuthStatus.LICENSE_INVALID)

        if not active_license.subscription.is_current(now):
            logger.info(f"auth.authorize: subscription expired for user_id={user.id}")
            return AuthDecision.rejected(AuthStatus.LICENSE_INVALID)

        return AuthDecision(
            status=AuthStatus.OK,
            level=active_license.subscription.level,
            license_key=active_license.key,
            expires_at=active_license.subscription.expires_at,
        )
