# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, jsonify
from sqlalchemy.exc import SQLAlchemyError

from taskmaster.infrastructure.db import ping_database
from taskmaster.shared.logging import logger


class MiscController:
    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("misc", __name__, url_prefix="/api")
        bp.add_url_rule("/health", view_func=self.health, methods=["GET"])
        return bp

    def health(self):
        try:
            ping_database()
        except SQLAlchemyError as exc:
            logger.warning(f"health: database unreachable ({type(exc).__name__})")
            return jsonify({"ok": False, "status": "degraded", "database": "error"}), 503
        return jsonify({"ok": True, "status": "ok", "database": "ok"})
