# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime

from authlicensing.application.services.authentication import AuthenticationEngine, AuthStatus
from authlicensing.application.services.tokens import IssuedToken, JwtTokenService
from authlicensing.domain.licenses import LicenseInvalidError
from authlicensing.domain.users.exceptions import InvalidCredentialsError


@dataclass(slots=True, frozen=True)
class AuthenticationResult:

    username: str
    level: str
    license_key: str
    subscription_expires_at: datetime
    token: IssuedToken


def _utcnow() -> datetime:
    return datetime.now(UTC)


class AuthenticateUserUseCase:
    def __init__(
        self,
        *,
        engine: AuthenticationEngine,
        tokens: JwtTokenService,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._engine = engine
        self._tokens = tokens
        self._clock = clock

    def execute(self, username: str, password: str, key: str) -> AuthenticationResult:
        now = self._clock()
        decision = self._engine.authorize(username, password, key, now)

        if decision.status is AuthStatus.INVALID_CREDENTIALS:
            raise InvalidCredentialsError()
        if not decision.is_ok:
            raise LicenseInvalidError()

        assert decision.level is not None and decision.license_key is not None
        assert decision.expires_at is not None
        token = self._tokens.issue(username, decision.level, decision.license_key, now)
        return AuthenticationResult(
            username=username,
            level=decision.level,
            license_key=decision.license_key,
            subscription_expires_at=decision.expires_at,
            token=token,
        )
