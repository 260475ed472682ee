# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from http import HTTPStatus

from authlicensing.application.services.tokens import JwtTokenService, TokenStatus
from authlicensing.domain.licenses import LicenseRepository, LicenseStatus
from authlicensing.domain.users.repositories import UserRepository
from authlicensing.shared.errors.base import DomainError


class TokenRejectedError(DomainError):
    status = HTTPStatus.UNAUTHORIZED

    def __init__(self, code: str = "token_invalid") -> None:
        super().__init__(code=code)


class ProfileNotFoundError(DomainError):
    code = "profile_not_found"
    status = HTTPStatus.NOT_FOUND


@dataclass(slots=True, frozen=True)
class Profile:

    username: str
    level: str
    license_key: str
    license_status: LicenseStatus
    subscription_expires_at: datetime
    account_created_at: datetime


def _utcnow() -> datetime:
    return datetime.now(UTC)


class GetProfileUseCase:
    """Reads profile and license state for a bearer token.

    User and license are looked up again on every call, so status and expiry
    reflect the store. The token itself stays usable after the license is
    suspended; it only stops working at its own expiry.
    """

    def __init__(
        self,
        *,
        users: UserRepository,
        licenses: LicenseRepository,
        tokens: JwtTokenService,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._users = users
        self._licenses = licenses
        self._tokens = tokens
        self._clock = clock

    def execute(self, token: str) -> Profile:
        if not token:
            raise TokenRejectedError("missing_token")

        validation = self._tokens.validate(token, self._clock())
        if validation.status is TokenStatus.EXPIRED:
            raise TokenRejectedError("token_expired")
        if not validation.is_valid or validation.claims is None:
            raise TokenRejectedError("token_invalid")

        claims = validation.claims
        user = self._users.find_by_username(claims.username)
        license_record = self._licenses.find_by_key(claims.license_key)
        if user is None or license_record is None:
            raise ProfileNotFoundError()

        return Profile(
            username=user.username,
            level=claims.level,
            license_key=license_record.key,
            license_status=license_record.status,
            subscription_expires_at=license_record.subscription.expires_at,
            account_created_at=user.created_at,
        )
