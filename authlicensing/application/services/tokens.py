# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Bearer token issuance and validation.

Tokens are compact HS256 JWTs carrying ``sub`` (username), ``level`` and
``licenseKey`` next to the registered ``iss``/``aud``/``iat``/``exp`` claims.
They are stateless: nothing is stored and nothing is revoked server-side.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from enum import Enum
from typing import Any

import jwt

from authlicensing.shared.config import AuthConfig
from authlicensing.shared.logging import logger

_ALGORITHM = "HS256"
_REQUIRED_CLAIMS = ["sub", "level", "licenseKey", "iat", "exp", "iss", "aud"]


class TokenStatus(str, Enum):
    VALID = "valid"
    EXPIRED = "expired"
    INVALID_SIGNATURE = "invalid_signature"
    INVALID_ISSUER_OR_AUDIENCE = "invalid_issuer_or_audience"


@dataclass(slots=True, frozen=True)
class TokenClaims:

    username: str
    level: str
    license_key: str
    issued_at: datetime
    expires_at: datetime


@dataclass(slots=True, frozen=True)
class IssuedToken:

    token: str
    issued_at: datetime
    expires_at: datetime

    @property
    def expires_in_seconds(self) -> int:
        return int((self.expires_at - self.issued_at).total_seconds())


@dataclass(slots=True, frozen=True)
class TokenValidation:

    status: TokenStatus
    claims: TokenClaims | None = None

    @property
    def is_valid(self) -> bool:
        return self.status is TokenStatus.VALID


class JwtTokenService:
    def __init__(self, config: AuthConfig) -> None:
        self._key = config.jwt_key
        self._issuer = config.jwt_issuer
        self._audience = config.jwt_audience
        self._ttl = timedelta(seconds=config.token_ttl_seconds)

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def issue(self, username: str, level: str, license_key: str, now: datetime) -> IssuedToken:
        issued_at = now.astimezone(UTC)
        expires_at = issued_at + self._ttl
        payload: dict[str, Any] = {
            "sub": username,
            "level": level,
            "licenseKey": license_key,
            "iss": self._issuer,
            "aud": self._audience,
            # fractional NumericDates keep exp exactly iat + TTL
            "iat": issued_at.timestamp(),
            "exp": expires_at.timestamp(),
        }
        token = jwt.encode(payload, self._key, algorithm=_ALGORITHM)
        return IssuedToken(token=token, issued_at=issued_at, expires_at=expires_at)

    def validate(self, token: str, now: datetime) -> TokenValidation:
        """Check signature, issuer and audience, then expiry against ``now``.

        Expiry uses the caller's clock with zero leeway, so a token is
        rejected from the exact instant of its ``exp`` claim onwards.
        """
        if not token:
            return TokenValidation(TokenStatus.INVALID_SIGNATURE)
        try:
            payload = jwt.decode(
                token,
                self._key,
                algorithms=[_ALGORITHM],
                issuer=self._issuer,
                audience=self._audience,
                options={
                    "require": _REQUIRED_CLAIMS,
                    "verify_exp": False,
                    "verify_iat": False,
                    "verify_nbf": False,
                },
            )
        except (jwt.InvalidIssuerError, jwt.InvalidAudienceError):
            logger.info("token.validate: issuer/audience mismatch")
            return TokenValidation(TokenStatus.INVALID_ISSUER_OR_AUDIENCE)
        except jwt.InvalidTokenError as exc:
            logger.info(f"token.validate: rejected ({type(exc).__name__})")
            return TokenValidation(TokenStatus.INVALID_SIGNATURE)

        try:
            exp = float(payload["exp"])
            expires_at = datetime.fromtimestamp(exp, UTC)
            issued_at = datetime.fromtimestamp(float(payload["iat"]), UTC)
        except (TypeError, ValueError, OverflowError):
            return TokenValidation(TokenStatus.INVALID_SIGNATURE)

        # compared as NumericDates so the float round trip cannot shift the boundary
        if now.timestamp() >= exp:
            return TokenValidation(TokenStatus.EXPIRED)

        claims = TokenClaims(
            username=str(payload["sub"]),
            level=str(payload["level"]),
            license_key=str(payload["licenseKey"]),
            issued_at=issued_at,
            expires_at=expires_at,
        )
        return TokenValidation(TokenStatus.VALID, claims)


__all__ = [
    "IssuedToken",
    "JwtTokenService",
    "TokenClaims",
    "TokenStatus",
    "TokenValidation",
]
