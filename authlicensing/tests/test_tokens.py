from __future__ import annotations

from datetime import timedelta

import jwt
import pytest

from authlicensing.application.services.tokens import JwtTokenService, TokenStatus
from authlicensing.tests.fakes import NOW, TEST_JWT_KEY, make_auth_config


def _issue(service: JwtTokenService, now=NOW) -> str:
    return service.issue("alice", "pro", "ABCD-1234-EFGH", now).token


def test_issued_token_validates_with_claims(token_service: JwtTokenService) -> None:
    issued = token_service.issue("alice", "pro", "ABCD-1234-EFGH", NOW)

    result = token_service.validate(issued.token, NOW + timedelta(minutes=1))

    assert result.status is TokenStatus.VALID
    assert result.claims is not None
    assert result.claims.username == "alice"
    assert result.claims.level == "pro"
    assert result.claims.license_key == "ABCD-1234-EFGH"
    assert result.claims.issued_at == NOW
    assert result.claims.expires_at == NOW + timedelta(minutes=15)


def test_issue_sets_expiry_to_issue_time_plus_ttl(token_service: JwtTokenService) -> None:
    issued_at = NOW + timedelta(microseconds=750)
    issued = token_service.issue("alice", "pro", "K-1", issued_at)

    assert issued.issued_at == issued_at
    assert issued.expires_at - issued.issued_at == timedelta(minutes=15)
    assert issued.expires_in_seconds == 900


def test_payload_carries_registered_and_custom_claims(token_service: JwtTokenService) -> None:
    token = _issue(token_service)

    payload = jwt.decode(token, options={"verify_signature": False})

    assert payload["sub"] == "alice"
    assert payload["licenseKey"] == "ABCD-1234-EFGH"
    assert payload["iss"] == "AuthLicensingAPI"
    assert payload["aud"] == "AuthLicensingClient"
    assert payload["exp"] - payload["iat"] == 900


def test_token_valid_until_last_second(token_service: JwtTokenService) -> None:
    token = _issue(token_service)

    result = token_service.validate(token, NOW + timedelta(minutes=15, seconds=-1))

    assert result.is_valid


def test_fractional_issue_time_keeps_full_ttl(token_service: JwtTokenService) -> None:
    issued_at = NOW + timedelta(milliseconds=600)
    token = token_service.issue("alice", "pro", "K-1", issued_at).token
    expiry = issued_at + timedelta(minutes=15)

    almost = token_service.validate(token, expiry - timedelta(milliseconds=200))
    at_expiry = token_service.validate(token, expiry)

    assert almost.status is TokenStatus.VALID
    assert abs(almost.claims.expires_at - expiry) < timedelta(milliseconds=1)
    assert at_expiry.status is TokenStatus.EXPIRED


@pytest.mark.parametrize("offset", [timedelta(minutes=15), timedelta(hours=2)])
def test_token_expired_from_exp_onwards(token_service: JwtTokenService, offset) -> None:
    token = _issue(token_service)

    result = token_service.validate(token, NOW + offset)

    assert result.status is TokenStatus.EXPIRED
    assert result.claims is None


def test_configured_ttl_is_used() -> None:
    service = JwtTokenService(make_auth_config(token_ttl_minutes=5))

    issued = service.issue("alice", "pro", "K-1", NOW)

    assert service.ttl == timedelta(minutes=5)
    assert issued.expires_in_seconds == 300


def test_tampered_token_rejected(token_service: JwtTokenService) -> None:
    header, payload, signature = _issue(token_service).split(".")
    flipped = ("A" if signature[0] != "A" else "B") + signature[1:]

    result = token_service.validate(f"{header}.{payload}.{flipped}", NOW)

    assert result.status is TokenStatus.INVALID_SIGNATURE


def test_token_signed_with_other_key_rejected(token_service: JwtTokenService) -> None:
    other = JwtTokenService(make_auth_config(jwt_key="another-signing-key-abcdefghijklmnop"))

    result = token_service.validate(_issue(other), NOW)

    assert result.status is TokenStatus.INVALID_SIGNATURE


@pytest.mark.parametrize(
    "overrides",
    [{"jwt_issuer": "SomeoneElse"}, {"jwt_audience": "OtherClient"}],
)
def test_issuer_or_audience_mismatch(token_service: JwtTokenService, overrides) -> None:
    foreign = JwtTokenService(make_auth_config(**overrides))

    result = token_service.validate(_issue(foreign), NOW)

    assert result.status is TokenStatus.INVALID_ISSUER_OR_AUDIENCE


@pytest.mark.parametrize("token", ["", "not-a-token", "a.b.c"])
def test_garbage_rejected(token_service: JwtTokenService, token: str) -> None:
    assert token_service.validate(token, NOW).status is TokenStatus.INVALID_SIGNATURE


def test_missing_license_claim_rejected(token_service: JwtTokenService) -> None:
    token = jwt.encode(
        {
            "sub": "alice",
            "level": "pro",
            "iss": "AuthLicensingAPI",
            "aud": "AuthLicensingClient",
            "iat": int(NOW.timestamp()),
            "exp": int((NOW + timedelta(minutes=15)).timestamp()),
        },
        TEST_JWT_KEY,
        algorithm="HS256",
    )

    assert token_service.validate(token, NOW).status is TokenStatus.INVALID_SIGNATURE


def test_unsigned_token_rejected(token_service: JwtTokenService) -> None:
    payload = jwt.decode(_issue(token_service), options={"verify_signature": False})
    unsigned = jwt.encode(payload, None, algorithm="none")

    assert token_service.validate(unsigned, NOW).status is TokenStatus.INVALID_SIGNATURE
