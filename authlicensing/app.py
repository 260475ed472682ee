# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Flask

from authlicensing.infrastructure.container import Container
from authlicensing.infrastructure.db import init_db
from authlicensing.infrastructure.health import check_database
from authlicensing.shared.config import AppConfig, load_config
from authlicensing.shared.logging import logger, setup_logging
from authlicensing.shared.middleware.error_handler import configure_error_handling
from authlicensing.shared.middleware.request_logger import configure_request_logging


def create_app(config: AppConfig | None = None) -> Flask:
    """Build the API.

    Misconfigured signing settings or an unreachable database raise here,
    before any request is served.
    """
    config = (config or load_config()).validate_startup()
    setup_logging(config.log_level, debug_mode=config.debug_logging)

    container = Container(config)
    check_database(container.engine)
    init_db(container.engine)

    app = Flask(__name__)
    app.extensions["container"] = container
    configure_error_handling(app, debug_mode=config.debug_logging)
    configure_request_logging(app, debug_mode=config.debug_logging)

    app.register_blueprint(container.misc_controller.as_blueprint())
    app.register_blueprint(container.auth_controller.as_blueprint())
    app.register_blueprint(container.profile_controller.as_blueprint())

    @app.after_request
    def _add_security_headers(resp):
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        resp.headers.setdefault("Referrer-Policy", "no-referrer")
        resp.headers.setdefault("Cache-Control", "no-store")

        if config.security.enable_hsts:
            resp.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains",
            )

        return resp

    logger.info(f"{config.service_name} initialized (env={config.app_env})")
    return app


if __name__ == "__main__":
    create_app().run(host="0.0.0.0", port=5080, debug=False)
