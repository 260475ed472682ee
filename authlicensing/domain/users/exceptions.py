# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from authlicensing.shared.errors.base import DomainError


class UserAlreadyExistsError(DomainError):
    code = "duplicate_username"
    status = HTTPStatus.CONFLICT


class InvalidCredentialsError(DomainError):
    code = "invalid_credentials"
    status = HTTPStatus.UNAUTHORIZED


class MalformedHashError(ValueError):
    """Stored password hash does not follow the hashing scheme's layout."""
