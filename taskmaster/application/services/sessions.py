# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Opaque bearer-token sessions."""

from __future__ import annotations

import secrets
from collections.abc import Callable
from datetime import datetime, timedelta

from taskmaster.domain.tasks.timestamps import utc_now
from taskmaster.domain.users.entities import Session
from taskmaster.domain.users.repositories import SessionTokenRepository
from taskmaster.shared.logging import logger

TOKEN_BYTES = 32
DEFAULT_LIFETIME = timedelta(days=7)


class SessionManager:
    def __init__(
        self,
        *,
        tokens: SessionTokenRepository,
        lifetime: timedelta = DEFAULT_LIFETIME,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._tokens = tokens
        self._lifetime = lifetime
        self._clock = clock

    def create_session(self, user_id: int) -> str:
        now = self._clock()
        session = Session(
            token=secrets.token_urlsafe(TOKEN_BYTES),
            user_id=user_id,
            created_at=now,
            expires_at=now + self._lifetime,
        )
        self._tokens.add(session)
        logger.info(
            f"sessions.create: ok (user_id={user_id}, exp={session.expires_at.isoformat()})"
        )
        return session.token

    def resolve(self, token: str | None) -> Session | None:
        if not token:
            return None
        session = self._tokens.find(token)
        if session is None:
            return None
        if not session.is_valid_at(self._clock()):
            logger.debug(f"sessions.resolve: expired (user_id={session.user_id})")
            return None
        return session

    def revoke(self, token: str | None) -> None:
        if token:
            self._tokens.revoke(token)
