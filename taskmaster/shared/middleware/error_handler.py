# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Flask error handlers: every failure on an API route becomes ``{"error": code}``."""

from __future__ import annotations

from http import HTTPStatus

from flask import Flask, g, jsonify, request
from werkzeug.exceptions import HTTPException

from taskmaster.shared.config import load_config
from taskmaster.shared.errors import AppError
from taskmaster.shared.logging import logger


def _is_api_request() -> bool:
    return request.path.startswith("/api/")


def _http_error_code(exc: HTTPException) -> str:
    # "Method Not Allowed" -> "method_not_allowed"
    return (exc.name or "http_error").lower().replace(" ", "_")


def configure_error_handling(app: Flask) -> None:
    verbose = load_config().logging.debug

    @app.errorhandler(AppError)
    def _handle_app_error(exc: AppError):
        where = f"{request.method} {request.path}"
        if exc.status >= HTTPStatus.INTERNAL_SERVER_ERROR:
            logger.error(f"errors: {exc.code} on {where}")
        else:
            logger.info(f"errors: {exc.code} ({int(exc.status)}) on {where}")
        return jsonify(exc.to_dict()), exc.status

    @app.errorhandler(HTTPException)
    def _handle_http_exception(exc: HTTPException):
        if not _is_api_request():
            return exc
        return jsonify({"error": _http_error_code(exc)}), exc.code

    @app.errorhandler(Exception)
    def _handle_unexpected(exc: Exception):
        user_id = getattr(g, "user_id", None)
        if verbose:
            logger.exception(
                f"errors: unhandled {type(exc).__name__} on {request.method} {request.path} "
                f"(user_id={user_id}, body_size={len(request.data)})"
            )
        else:
            logger.error(
                f"errors: unhandled {type(exc).__name__} on {request.method} {request.path} "
                f"(user_id={user_id})"
            )
        return jsonify({"error": "internal_error"}), HTTPStatus.INTERNAL_SERVER_ERROR


__all__ = ["configure_error_handling"]
