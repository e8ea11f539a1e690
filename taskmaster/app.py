# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from flask import Flask
from flask_cors import CORS

from taskmaster.infrastructure.container import Container, container
from taskmaster.infrastructure.db import init_db
from taskmaster.shared.config import AppConfig
from taskmaster.shared.logging import logger, setup_logging
from taskmaster.shared.middleware.error_handler import configure_error_handling
from taskmaster.shared.middleware.request_logger import configure_request_logging

_SECURITY_HEADERS = {
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
    "X-Content-Type-Options": "nosniff",
    "Cross-Origin-Opener-Policy": "same-origin",
}


def _configure_cors(app: Flask, config: AppConfig) -> None:
    origins = config.security.allowed_origins
    CORS(
        app,
        resources={r"/api/*": {"origins": origins}},
        allow_headers=["Content-Type", "Authorization", "X-Request-ID"],
        expose_headers=["X-Request-ID"],
        methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        # Credentialed CORS is only valid with an explicit origin list.
        supports_credentials="*" not in origins,
    )


def create_app(deps: Container | None = None) -> Flask:
    deps = deps or container
    config = deps.config
    setup_logging(config.logging.effective_level, log_file=config.logging.file)
    for warning in config.production_warnings():
        logger.warning(f"config: {warning}")
    init_db()

    # No built-in static route: every HTML view goes through the page gate.
    app = Flask(__name__, static_folder=None)
    app.config.update(SECRET_KEY=config.secret_key)
    app.json.sort_keys = False

    configure_error_handling(app)
    configure_request_logging(app)
    _configure_cors(app, config)

    for controller in (
        deps.misc_controller,
        deps.auth_controller,
        deps.tasks_controller,
        deps.pages_controller,
    ):
        app.register_blueprint(controller.as_blueprint())

    @app.after_request
    def _add_security_headers(resp):
        for header, value in _SECURITY_HEADERS.items():
            resp.headers.setdefault(header, value)
        if config.security.enable_hsts:
            resp.headers.setdefault(
                "Strict-Transport-Security", "max-age=31536000; includeSubDomains"
            )
        return resp

    logger.info(f"app: ready (env={config.app_env}, tz={config.display_timezone})")
    return app


def main() -> None:
    app = create_app()
    port = container.config.port
    logger.info(f"Server running at http://localhost:{port}/")
    app.run(host="0.0.0.0", port=port, debug=container.config.logging.debug)


if __name__ == "__main__":
    main()
