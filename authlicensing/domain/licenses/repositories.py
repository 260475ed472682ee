# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Protocol

from .entities import License


class LicenseRepository(Protocol):
    def find_by_key(self, key: str) -> License | None: ...

    def find_active_for_user(self, user_id: int, key: str) -> License | None:
        """Return the license with ``key`` owned by ``user_id`` whose status is active."""
        ...

    def add(self, record: License) -> License: ...

    def claim_unowned(self, key: str, user_id: int) -> bool:
        """Atomically bind an unclaimed license to ``user_id`` and activate it.

        Matching (key equal, no owner) and mutating happen in one store
        operation. Returns True only when this call performed the claim.
        """
        ...
