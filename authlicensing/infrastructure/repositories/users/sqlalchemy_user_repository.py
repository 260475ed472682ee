# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from authlicensing.domain.users.entities import User as DomainUser
from authlicensing.domain.users.exceptions import UserAlreadyExistsError
from authlicensing.domain.users.repositories import UserRepository
from authlicensing.infrastructure.db.models import User
from authlicensing.infrastructure.repositories._common import store_errors
from authlicensing.infrastructure.unit_of_work import unit_of_work_scope


def _to_domain(row: User) -> DomainUser:
    return DomainUser(
        id=row.id,
        username=row.username,
        password_hash=row.password_hash,
        created_at=row.created_at,
    )


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def find_by_username(self, username: str) -> DomainUser | None:
        with store_errors("users.find_by_username"):
            with unit_of_work_scope(self._session_factory) as session:
                row = session.query(User).filter(User.username == username).first()
                return _to_domain(row) if row else None

    def find_by_id(self, user_id: int) -> DomainUser | None:
        with store_errors("users.find_by_id"):
            with unit_of_work_scope(self._session_factory) as session:
                row = session.get(User, user_id)
                return _to_domain(row) if row else None

    def add(self, user: DomainUser) -> DomainUser:
        try:
            with store_errors("users.add"):
                with unit_of_work_scope(self._session_factory) as session:
                    row = User(
                        username=user.username,
                        password_hash=user.password_hash,
                        created_at=user.created_at,
                    )
                    session.add(row)
                    session.flush()
                    persisted = _to_domain(row)
        except IntegrityError as exc:
            raise UserAlreadyExistsError() from exc
        return persisted
