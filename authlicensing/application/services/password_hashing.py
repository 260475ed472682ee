# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Password hashing strategies."""

from __future__ import annotations

import re

from werkzeug.security import check_password_hash, generate_password_hash

from authlicensing.domain.users.exceptions import MalformedHashError
from authlicensing.domain.users.repositories import PasswordHasher

# <method>$<salt>$<hex digest>, as produced by werkzeug.security
_HASH_LAYOUT = re.compile(
    r"^(?P<method>scrypt:\d+:\d+:\d+|pbkdf2:[a-z0-9_]+(?::\d+)?)"
    r"\$(?P<salt>[A-Za-z0-9]+)"
    r"\$(?P<digest>[0-9a-f]{32,})$"
)


class WerkzeugPasswordHasher(PasswordHasher):
    def __init__(self, method: str = "scrypt") -> None:
        self._method = method

    def hash(self, password: str) -> str:
        return str(generate_password_hash(password, method=self._method))

    def verify(self, password: str, hashed: str) -> bool:
        if not hashed or not _HASH_LAYOUT.match(hashed):
            raise MalformedHashError("stored password hash has an unrecognised layout")
        if not password:
            return False
        try:
            return bool(check_password_hash(hashed, password))
        except ValueError as exc:
            raise MalformedHashError(str(exc)) from exc
