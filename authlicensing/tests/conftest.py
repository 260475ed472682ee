from __future__ import annotations

import pytest

from authlicensing.application.services.tokens import JwtTokenService
from authlicensing.tests.fakes import (
    DeterministicHasher,
    InMemoryLicenseRepository,
    InMemoryUserRepository,
    make_auth_config,
)


@pytest.fixture()
def users() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture()
def licenses() -> InMemoryLicenseRepository:
    return InMemoryLicenseRepository()


@pytest.fixture()
def hasher() -> DeterministicHasher:
    return DeterministicHasher()


@pytest.fixture()
def token_service() -> JwtTokenService:
    return JwtTokenService(make_auth_config())
