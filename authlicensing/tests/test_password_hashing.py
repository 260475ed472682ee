from __future__ import annotations

import pytest

from authlicensing.application.services.password_hashing import WerkzeugPasswordHasher
from authlicensing.domain.users.exceptions import MalformedHashError


@pytest.fixture(scope="module")
def hasher() -> WerkzeugPasswordHasher:
    return WerkzeugPasswordHasher()


def test_hash_verifies_plaintext(hasher: WerkzeugPasswordHasher) -> None:
    hashed = hasher.hash("s3cret!")

    assert hashed.startswith("scrypt:")
    assert "s3cret!" not in hashed
    assert hasher.verify("s3cret!", hashed) is True
    assert hasher.verify("s3cret?", hashed) is False


def test_hash_is_salted(hasher: WerkzeugPasswordHasher) -> None:
    assert hasher.hash("same") != hasher.hash("same")


def test_empty_password_never_matches(hasher: WerkzeugPasswordHasher) -> None:
    hashed = hasher.hash("s3cret!")

    assert hasher.verify("", hashed) is False


@pytest.mark.parametrize(
    "stored",
    [
        "",
        "plaintext-password",
        "$2a$11$abcdefghijklmnopqrstuuJ8W1hXk8a5o6rDq6Zt4Z3vW1bq5y",
        "scrypt:32768:8:1$salt$not-hex",
    ],
)
def test_malformed_hash_raises(hasher: WerkzeugPasswordHasher, stored: str) -> None:
    with pytest.raises(MalformedHashError):
        hasher.verify("anything", stored)


def test_pbkdf2_method_is_supported() -> None:
    hasher = WerkzeugPasswordHasher("pbkdf2:sha256:1000")
    hashed = hasher.hash("s3cret!")

    assert hashed.startswith("pbkdf2:sha256:1000$")
    assert hasher.verify("s3cret!", hashed) is True
