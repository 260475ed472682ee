# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from authlicensing.domain.licenses import ClaimResult, LicenseRepository
from authlicensing.shared.logging import logger


class LicenseClaimEngine:
    """Binds an unclaimed license to a user exactly once.

    Correctness under concurrent registrations rests entirely on
    ``LicenseRepository.claim_unowned`` being a single conditional update at
    the store; this class adds no locking and never retries.
    """

    def __init__(self, *, licenses: LicenseRepository) -> None:
        self._licenses = licenses

    def try_claim(self, key: str, user_id: int) -> ClaimResult:
        if not key:
            raise ValueError("license key must not be empty")

        if self._licenses.claim_unowned(key, user_id):
            logger.info(f"license.claim: claimed user_id={user_id}")
            return ClaimResult.CLAIMED

        # Only used to pick the reported reason; the claim above already lost.
        if self._licenses.find_by_key(key) is None:
            logger.info(f"license.claim: key not found user_id={user_id}")
            return ClaimResult.NOT_FOUND
        logger.info(f"license.claim: already claimed user_id={user_id}")
        return ClaimResult.ALREADY_CLAIMED
