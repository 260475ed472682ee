# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import UTC, datetime

from flask import Blueprint, jsonify
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from authlicensing import __version__
from authlicensing.infrastructure.health import check_database
from authlicensing.interfaces.http.dto.profile import HealthResponseDTO
from authlicensing.shared.logging import logger


class MiscController:
    def __init__(self, *, engine: Engine, service_name: str) -> None:
        self._engine = engine
        self._service_name = service_name

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("misc", __name__)
        bp.add_url_rule("/", view_func=self.health, methods=["GET"])
        return bp

    def health(self):
        database = "ok"
        try:
            check_database(self._engine)
        except SQLAlchemyError as exc:
            logger.error(f"health: database check failed ({type(exc).__name__})")
            database = "error"
        payload = HealthResponseDTO(
            status="ok" if database == "ok" else "degraded",
            service=self._service_name,
            version=__version__,
            time_utc=datetime.now(UTC),
            database=database,
        )
        status_code = 200 if database == "ok" else 503
        return jsonify(payload.model_dump(mode="json", by_alias=True)), status_code
