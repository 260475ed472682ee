from datetime import timedelta

import pytest

from authlicensing.domain import InvariantViolation
from authlicensing.domain.licenses import LicenseStatus, Subscription
from authlicensing.domain.users.entities import User
from authlicensing.tests.fakes import NOW, make_license


def test_subscription_is_current_strictly_before_expiry() -> None:
    sub = Subscription(level="pro", expires_at=NOW)

    assert sub.is_current(NOW - timedelta(seconds=1)) is True
    assert sub.is_current(NOW) is False
    assert sub.is_current(NOW + timedelta(seconds=1)) is False


def test_license_reports_claim_and_activity() -> None:
    unowned = make_license(status=LicenseStatus.SUSPENDED)
    owned = make_license(user_id=7)

    assert unowned.is_claimed is False
    assert unowned.is_active is False
    assert owned.is_claimed is True
    assert owned.is_active is True


@pytest.mark.parametrize("key", ["", "   "])
def test_license_rejects_blank_key(key: str) -> None:
    with pytest.raises(InvariantViolation) as exc_info:
        make_license(key)

    assert exc_info.value.field == "key"


def test_license_rejects_blank_level() -> None:
    with pytest.raises(InvariantViolation):
        make_license(level="")


def test_user_rejects_blank_username() -> None:
    with pytest.raises(InvariantViolation):
        User(id=1, username=" ", password_hash="hashed:pw", created_at=NOW)
