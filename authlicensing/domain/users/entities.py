# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from authlicensing.domain.exceptions import InvariantViolation


@dataclass(slots=True, frozen=True)
class User:
    """Registered account. Username and id never change after creation."""

    id: int
    username: str
    password_hash: str
    created_at: datetime

    def __post_init__(self) -> None:
        if not self.username or not self.username.strip():
            raise InvariantViolation("username must not be blank", field="username")
