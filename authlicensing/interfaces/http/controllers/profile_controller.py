# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, Response, jsonify, request

from authlicensing.application.use_cases.users.get_profile import GetProfileUseCase
from authlicensing.interfaces.http.dto.profile import ProfileResponseDTO


def _bearer_token() -> str:
    auth_header = request.headers.get("Authorization", "")
    scheme, _, token = auth_header.partition(" ")
    if scheme.lower() != "bearer":
        return ""
    return token.strip()


class ProfileController:
    def __init__(self, *, get_profile_use_case: GetProfileUseCase) -> None:
        self._get_profile_use_case = get_profile_use_case

    def me(self) -> tuple[Response, int]:
        profile = self._get_profile_use_case.execute(_bearer_token())
        payload = ProfileResponseDTO(
            username=profile.username,
            level=profile.level,
            license_key=profile.license_key,
            license_status=profile.license_status.value,
            subscription_expires_at=profile.subscription_expires_at,
            account_created_at=profile.account_created_at,
        )
        return jsonify(payload.model_dump(mode="json", by_alias=True)), HTTPStatus.OK

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("profile", __name__)
        bp.add_url_rule("/me", view_func=self.me, methods=["GET"])
        return bp
