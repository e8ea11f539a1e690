# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Per-client sliding-window throttling for the credential endpoints."""

from __future__ import annotations

import math
import threading
import time
from collections import defaultdict, deque
from collections.abc import Callable
from functools import wraps

from flask import Request, jsonify, request

from taskmaster.shared.config import load_config
from taskmaster.shared.logging import logger


class InMemoryRateLimiter:
    """At most ``limit`` hits per ``window_seconds`` for each key, in this process."""

    def __init__(self, limit: int, window_seconds: float) -> None:
        self._limit = max(1, int(limit))
        self._window = max(0.1, float(window_seconds))
        self._hits: dict[str, deque[float]] = defaultdict(deque)
        self._lock = threading.Lock()

    def _prune(self, hits: deque[float], now: float) -> None:
        while hits and now - hits[0] >= self._window:
            hits.popleft()

    def allow(self, key: str) -> bool:
        now = time.monotonic()
        with self._lock:
            hits = self._hits[key]
            self._prune(hits, now)
            if len(hits) >= self._limit:
                return False
            hits.append(now)
            return True

    def retry_after(self, key: str) -> int:
        """Whole seconds until ``key`` gets a free slot again."""
        now = time.monotonic()
        with self._lock:
            hits = self._hits[key]
            self._prune(hits, now)
            if len(hits) < self._limit:
                return 0
            return max(1, math.ceil(self._window - (now - hits[0])))


def _client_key(req: Request) -> str:
    forwarded = req.headers.get("X-Forwarded-For", "").split(",")[0].strip()
    return f"{req.path}:{forwarded or req.remote_addr or 'unknown'}"


def rate_limit(limit: int | None = None, window_seconds: float | None = None):
    security = load_config().security
    limiter = InMemoryRateLimiter(
        limit or security.rate_limit_requests,
        window_seconds or security.rate_limit_window,
    )

    def decorator(view: Callable):
        if not security.enable_rate_limit:
            return view

        @wraps(view)
        def throttled(*args, **kwargs):
            key = _client_key(request)
            if not limiter.allow(key):
                logger.warning(f"rate_limit: rejected {request.method} {request.path}")
                response = jsonify({"error": "rate_limited"})
                response.headers["Retry-After"] = str(limiter.retry_after(key))
                return response, 429
            return view(*args, **kwargs)

        return throttled

    return decorator


__all__ = ["InMemoryRateLimiter", "rate_limit"]
