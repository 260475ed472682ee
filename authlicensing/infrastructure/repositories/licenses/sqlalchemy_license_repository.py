# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from authlicensing.domain.licenses import License as DomainLicense
from authlicensing.domain.licenses import (
    LicenseKeyExistsError,
    LicenseRepository,
    LicenseStatus,
    Subscription,
)
from authlicensing.infrastructure.db.models import License
from authlicensing.infrastructure.repositories._common import store_errors
from authlicensing.infrastructure.unit_of_work import unit_of_work_scope


def _to_domain(row: License) -> DomainLicense:
    return DomainLicense(
        id=row.id,
        user_id=row.user_id,
        key=row.key,
        status=LicenseStatus(row.status),
        subscription=Subscription(level=row.level, expires_at=row.expires_at),
        issued_at=row.issued_at,
    )


class SqlAlchemyLicenseRepository(LicenseRepository):
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def find_by_key(self, key: str) -> DomainLicense | None:
        with store_errors("licenses.find_by_key"):
            with unit_of_work_scope(self._session_factory) as session:
                row = session.query(License).filter(License.key == key).first()
                return _to_domain(row) if row else None

    def find_active_for_user(self, user_id: int, key: str) -> DomainLicense | None:
        with store_errors("licenses.find_active_for_user"):
            with unit_of_work_scope(self._session_factory) as session:
                row = (
                    session.query(License)
                    .filter(
                        License.user_id == user_id,
                        License.key == key,
                        License.status == LicenseStatus.ACTIVE,
                    )
                    .first()
                )
                return _to_domain(row) if row else None

    def add(self, record: DomainLicense) -> DomainLicense:
        try:
            with store_errors("licenses.add"):
                with unit_of_work_scope(self._session_factory) as session:
                    row = License(
                        user_id=record.user_id,
                        key=record.key,
                        status=record.status,
                        level=record.subscription.level,
                        expires_at=record.subscription.expires_at,
                        issued_at=record.issued_at,
                    )
                    session.add(row)
                    session.flush()
                    persisted = _to_domain(row)
        except IntegrityError as exc:
            raise LicenseKeyExistsError(context={"key": record.key}) from exc
        return persisted

    def claim_unowned(self, key: str, user_id: int) -> bool:
        # Single UPDATE ... WHERE owner IS NULL: the database decides the winner.
        stmt = (
            update(License)
            .where(License.key == key, License.user_id.is_(None))
            .values(user_id=user_id, status=LicenseStatus.ACTIVE)
            .execution_options(synchronize_session=False)
        )
        with store_errors("licenses.claim_unowned"):
            with unit_of_work_scope(self._session_factory) as session:
                result = session.execute(stmt)
                return result.rowcount == 1
