from __future__ import annotations

import threading

import pytest

from authlicensing.application.services.license_claims import LicenseClaimEngine
from authlicensing.domain.licenses import ClaimResult, LicenseStatus
from authlicensing.tests.fakes import InMemoryLicenseRepository, make_license


@pytest.fixture()
def engine(licenses: InMemoryLicenseRepository) -> LicenseClaimEngine:
    return LicenseClaimEngine(licenses=licenses)


def test_claim_binds_unowned_license(
    licenses: InMemoryLicenseRepository, engine: LicenseClaimEngine
) -> None:
    licenses.add(make_license("KEY-1", status=LicenseStatus.SUSPENDED))

    assert engine.try_claim("KEY-1", 5) is ClaimResult.CLAIMED

    claimed = licenses.find_by_key("KEY-1")
    assert claimed is not None
    assert claimed.user_id == 5
    assert claimed.status is LicenseStatus.ACTIVE


def test_second_claim_reports_already_claimed(
    licenses: InMemoryLicenseRepository, engine: LicenseClaimEngine
) -> None:
    licenses.add(make_license("KEY-1"))
    engine.try_claim("KEY-1", 5)

    assert engine.try_claim("KEY-1", 6) is ClaimResult.ALREADY_CLAIMED
    assert engine.try_claim("KEY-1", 5) is ClaimResult.ALREADY_CLAIMED
    assert licenses.find_by_key("KEY-1").user_id == 5


def test_unknown_key_reports_not_found(engine: LicenseClaimEngine) -> None:
    assert engine.try_claim("MISSING", 5) is ClaimResult.NOT_FOUND


def test_empty_key_is_rejected(engine: LicenseClaimEngine) -> None:
    with pytest.raises(ValueError):
        engine.try_claim("", 5)


def test_concurrent_claims_have_single_winner(
    licenses: InMemoryLicenseRepository, engine: LicenseClaimEngine
) -> None:
    licenses.add(make_license("KEY-RACE"))
    barrier = threading.Barrier(8)
    results: dict[int, ClaimResult] = {}

    def claim(user_id: int) -> None:
        barrier.wait()
        results[user_id] = engine.try_claim("KEY-RACE", user_id)

    threads = [threading.Thread(target=claim, args=(uid,)) for uid in range(1, 9)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    winners = [uid for uid, outcome in results.items() if outcome is ClaimResult.CLAIMED]
    assert len(winners) == 1
    assert set(results.values()) == {ClaimResult.CLAIMED, ClaimResult.ALREADY_CLAIMED}
    assert licenses.find_by_key("KEY-RACE").user_id == winners[0]
