# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""One log line per request, tagged with a correlation id.

The id comes from the caller's ``X-Request-ID`` header when present (the sync
client always sends one) and is echoed back on the response.
"""

from __future__ import annotations

import secrets
from time import perf_counter

from flask import Flask, g, request

from taskmaster.shared.config import load_config
from taskmaster.shared.logging import clear_correlation_id, logger, set_correlation_id

REQUEST_ID_HEADER = "X-Request-ID"
_SKIP_PREFIXES = ("/favicon.ico",)


def _client_ip() -> str:
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.remote_addr or "unknown"


def configure_request_logging(app: Flask) -> None:
    verbose = load_config().logging.debug

    @app.before_request
    def _start() -> None:
        request_id = request.headers.get(REQUEST_ID_HEADER) or secrets.token_hex(6)
        g.request_id = request_id
        g.request_started = perf_counter()
        set_correlation_id(request_id)
        if verbose:
            logger.debug(
                f"http: --> {request.method} {request.full_path.rstrip('?')} "
                f"from {_client_ip()} body={len(request.data)}B"
            )

    @app.after_request
    def _finish(response):
        response.headers.setdefault(REQUEST_ID_HEADER, getattr(g, "request_id", "-"))
        if request.path.startswith(_SKIP_PREFIXES):
            return response
        elapsed_ms = (perf_counter() - getattr(g, "request_started", perf_counter())) * 1000
        logger.info(
            f"http: {request.method} {request.path} -> {response.status_code} "
            f"({elapsed_ms:.0f} ms, user_id={getattr(g, 'user_id', None)})"
        )
        return response

    @app.teardown_request
    def _teardown(exc: BaseException | None) -> None:
        if exc is not None:
            logger.error(f"http: {request.method} {request.path} aborted by {type(exc).__name__}")
        clear_correlation_id()


__all__ = ["REQUEST_ID_HEADER", "configure_request_logging"]
