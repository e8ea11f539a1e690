# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from pathlib import Path

from flask import Blueprint, abort, send_from_directory

from taskmaster.infrastructure.auth import AuthGate

PAGES: tuple[str, ...] = (
    "index.html",
    "tasks.html",
    "inbox.html",
    "analytics.html",
    "login.html",
    "signup.html",
)


class PagesController:
    """Serves the HTML views; all but the login/signup pages need a session."""

    def __init__(self, *, gate: AuthGate, static_dir: Path) -> None:
        self._gate = gate
        self._static_dir = Path(static_dir)

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("pages", __name__)
        guard = self._gate.page_required
        bp.add_url_rule("/", view_func=guard(self.index), methods=["GET", "HEAD"])
        bp.add_url_rule("/<page>.html", view_func=guard(self.page), methods=["GET", "HEAD"])
        return bp

    def index(self):
        return send_from_directory(self._static_dir, "index.html")

    def page(self, page: str):
        filename = f"{page}.html"
        if filename not in PAGES:
            abort(404)
        return send_from_directory(self._static_dir, filename)
