# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from functools import cached_property

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from authlicensing.application.services.authentication import AuthenticationEngine
from authlicensing.application.services.license_claims import LicenseClaimEngine
from authlicensing.application.services.password_hashing import WerkzeugPasswordHasher
from authlicensing.application.services.tokens import JwtTokenService
from authlicensing.application.use_cases.users.authenticate_user import AuthenticateUserUseCase
from authlicensing.application.use_cases.users.get_profile import GetProfileUseCase
from authlicensing.application.use_cases.users.register_user import RegisterUserUseCase
from authlicensing.infrastructure.db import build_engine, build_session_factory
from authlicensing.infrastructure.repositories.licenses.sqlalchemy_license_repository import (
    SqlAlchemyLicenseRepository,
)
from authlicensing.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemyUserRepository,
)
from authlicensing.interfaces.http.controllers.auth_controller import AuthController
from authlicensing.interfaces.http.controllers.misc_controller import MiscController
from authlicensing.interfaces.http.controllers.profile_controller import ProfileController
from authlicensing.shared.config import AppConfig


class Container:
    def __init__(self, config: AppConfig) -> None:
        self.config = config

    @cached_property
    def engine(self) -> Engine:
        return build_engine(self.config.database)

    @cached_property
    def session_factory(self) -> sessionmaker[Session]:
        return build_session_factory(self.engine)

    @cached_property
    def password_hasher(self) -> WerkzeugPasswordHasher:
        return WerkzeugPasswordHasher(self.config.auth.password_method)

    @cached_property
    def token_service(self) -> JwtTokenService:
        return JwtTokenService(self.config.auth)

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository(self.session_factory)

    @cached_property
    def license_repository(self) -> SqlAlchemyLicenseRepository:
        return SqlAlchemyLicenseRepository(self.session_factory)

    @cached_property
    def license_claim_engine(self) -> LicenseClaimEngine:
        return LicenseClaimEngine(licenses=self.license_repository)

    @cached_property
    def authentication_engine(self) -> AuthenticationEngine:
        return AuthenticationEngine(
            users=self.user_repository,
            licenses=self.license_repository,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            users=self.user_repository,
            password_hasher=self.password_hasher,
            claims=self.license_claim_engine,
        )

    @cached_property
    def authenticate_user_use_case(self) -> AuthenticateUserUseCase:
        return AuthenticateUserUseCase(
            engine=self.authentication_engine,
            tokens=self.token_service,
        )

    @cached_property
    def get_profile_use_case(self) -> GetProfileUseCase:
        return GetProfileUseCase(
            users=self.user_repository,
            licenses=self.license_repository,
            tokens=self.token_service,
        )

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            register_use_case=self.register_user_use_case,
            authenticate_use_case=self.authenticate_user_use_case,
        )

    @cached_property
    def profile_controller(self) -> ProfileController:
        return ProfileController(get_profile_use_case=self.get_profile_use_case)

    @cached_property
    def misc_controller(self) -> MiscController:
        return MiscController(engine=self.engine, service_name=self.config.service_name)
