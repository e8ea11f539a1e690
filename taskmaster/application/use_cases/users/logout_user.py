"""Use-case for revoking access tokens."""

from __future__ import annotations

from taskmaster.application.services.sessions import SessionManager


class LogoutUserUseCase:
    def __init__(self, *, sessions: SessionManager) -> None:
        self._sessions = sessions

    def execute(self, token: str) -> None:
        self._sessions.revoke(token)
