# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from authlicensing.shared.errors.base import DomainError


class LicenseInvalidError(DomainError):
    code = "license_invalid"
    status = HTTPStatus.FORBIDDEN


class LicenseKeyExistsError(DomainError):
    code = "license_key_exists"
    status = HTTPStatus.CONFLICT
