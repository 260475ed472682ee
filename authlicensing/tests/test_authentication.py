from __future__ import annotations

from datetime import timedelta

import pytest

from authlicensing.application.services.authentication import AuthenticationEngine, AuthStatus
from authlicensing.domain.licenses import LicenseStatus
from authlicensing.domain.users.entities import User
from authlicensing.tests.fakes import (
    NOW,
    DeterministicHasher,
    InMemoryLicenseRepository,
    InMemoryUserRepository,
    make_license,
)


@pytest.fixture()
def engine(
    users: InMemoryUserRepository,
    licenses: InMemoryLicenseRepository,
    hasher: DeterministicHasher,
) -> AuthenticationEngine:
    return AuthenticationEngine(users=users, licenses=licenses, password_hasher=hasher)


@pytest.fixture()
def alice(users: InMemoryUserRepository) -> User:
    return users.add(User(id=0, username="alice", password_hash="hashed:pw", created_at=NOW))


def test_valid_triple_is_authorized(
    engine: AuthenticationEngine, licenses: InMemoryLicenseRepository, alice: User
) -> None:
    record = licenses.add(make_license("KEY-1", user_id=alice.id, level="enterprise"))

    decision = engine.authorize("alice", "pw", "KEY-1", NOW)

    assert decision.is_ok
    assert decision.level == "enterprise"
    assert decision.license_key == "KEY-1"
    assert decision.expires_at == record.subscription.expires_at


def test_unknown_user_is_invalid_credentials(engine: AuthenticationEngine) -> None:
    assert engine.authorize("bob", "pw", "KEY-1", NOW).status is AuthStatus.INVALID_CREDENTIALS


def test_wrong_password_checked_before_license(
    engine: AuthenticationEngine, licenses: InMemoryLicenseRepository, alice: User
) -> None:
    decision = engine.authorize("alice", "nope", "NO-SUCH-KEY", NOW)

    assert decision.status is AuthStatus.INVALID_CREDENTIALS
    assert decision.level is None
    assert licenses.lookups == 0


def test_malformed_stored_hash_is_invalid_credentials(
    engine: AuthenticationEngine, users: InMemoryUserRepository, licenses: InMemoryLicenseRepository
) -> None:
    bob = users.add(User(id=0, username="bob", password_hash="$2a$legacy", created_at=NOW))
    licenses.add(make_license("KEY-B", user_id=bob.id))

    assert engine.authorize("bob", "pw", "KEY-B", NOW).status is AuthStatus.INVALID_CREDENTIALS


def test_license_owned_by_someone_else_is_invalid(
    engine: AuthenticationEngine, licenses: InMemoryLicenseRepository, alice: User
) -> None:
    licenses.add(make_license("KEY-1", user_id=alice.id + 100))

    assert engine.authorize("alice", "pw", "KEY-1", NOW).status is AuthStatus.LICENSE_INVALID


@pytest.mark.parametrize("key", ["", "MISSING"])
def test_missing_license_is_invalid(engine: AuthenticationEngine, alice: User, key: str) -> None:
    assert engine.authorize("alice", "pw", key, NOW).status is AuthStatus.LICENSE_INVALID


@pytest.mark.parametrize("status", [LicenseStatus.SUSPENDED, LicenseStatus.REVOKED])
def test_inactive_license_is_invalid(
    engine: AuthenticationEngine,
    licenses: InMemoryLicenseRepository,
    alice: User,
    status: LicenseStatus,
) -> None:
    licenses.add(make_license("KEY-1", user_id=alice.id, status=status))

    assert engine.authorize("alice", "pw", "KEY-1", NOW).status is AuthStatus.LICENSE_INVALID


def test_subscription_expiring_now_is_invalid(
    engine: AuthenticationEngine, licenses: InMemoryLicenseRepository, alice: User
) -> None:
    licenses.add(make_license("KEY-1", user_id=alice.id, expires_at=NOW))

    assert engine.authorize("alice", "pw", "KEY-1", NOW).status is AuthStatus.LICENSE_INVALID
    assert engine.authorize("alice", "pw", "KEY-1", NOW - timedelta(seconds=1)).is_ok


def test_rejections_carry_no_license_details(
    engine: AuthenticationEngine, licenses: InMemoryLicenseRepository, alice: User
) -> None:
    licenses.add(make_license("KEY-1", user_id=alice.id, expires_at=NOW - timedelta(days=1)))

    decision = engine.authorize("alice", "pw", "KEY-1", NOW)

    assert decision.status is AuthStatus.LICENSE_INVALID
    assert (decision.level, decision.license_key, decision.expires_at) == (None, None, None)
