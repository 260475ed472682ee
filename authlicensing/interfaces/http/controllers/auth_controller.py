# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, Response, jsonify, request

from authlicensing.application.use_cases.users.authenticate_user import AuthenticateUserUseCase
from authlicensing.application.use_cases.users.register_user import (
    RegisterUserUseCase,
    RegistrationStatus,
)
from authlicensing.domain.users.exceptions import UserAlreadyExistsError
from authlicensing.interfaces.http.dto.auth import (
    AuthCheckRequestDTO,
    AuthCheckResponseDTO,
    RegisterRequestDTO,
    RegisterResponseDTO,
)
from authlicensing.shared.errors.base import ValidationError
from authlicensing.shared.errors.validation import validate_payload
from authlicensing.shared.logging import logger


class AuthController:
    def __init__(
        self,
        *,
        register_use_case: RegisterUserUseCase,
        authenticate_use_case: AuthenticateUserUseCase,
    ) -> None:
        self._register_use_case = register_use_case
        self._authenticate_use_case = authenticate_use_case

    def register(self) -> tuple[Response, int]:
        dto = validate_payload(RegisterRequestDTO, request.get_json(silent=True))

        result = self._register_use_case.execute(dto.username, dto.password, dto.license_key)
        if result.status is RegistrationStatus.DUPLICATE_USERNAME:
            raise UserAlreadyExistsError()
        if result.status is RegistrationStatus.VALIDATION_ERROR:
            raise ValidationError()

        outcome = result.claim_outcome.value if result.claim_outcome else None
        payload = RegisterResponseDTO(username=dto.username, claim_outcome=outcome)
        logger.info(f"auth.register: ok claim_outcome={outcome}")
        return jsonify(payload.model_dump(mode="json", by_alias=True)), HTTPStatus.CREATED

    def auth_check(self) -> tuple[Response, int]:
        dto = validate_payload(AuthCheckRequestDTO, request.get_json(silent=True))

        result = self._authenticate_use_case.execute(dto.username, dto.password, dto.key)

        payload = AuthCheckResponseDTO(
            username=result.username,
            license_key=result.license_key,
            level=result.level,
            subscription_expires_at=result.subscription_expires_at,
            access_token=result.token.token,
            token_issued_at=result.token.issued_at,
            token_expires_at=result.token.expires_at,
            token_expires_in_seconds=result.token.expires_in_seconds,
        )
        logger.info(f"auth.check: ok level={result.level}")
        return jsonify(payload.model_dump(mode="json", by_alias=True)), HTTPStatus.OK

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__)
        bp.add_url_rule("/register", view_func=self.register, methods=["POST"])
        bp.add_url_rule("/auth/check", view_func=self.auth_check, methods=["POST"])
        return bp
