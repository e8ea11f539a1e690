# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import UTC, datetime

from taskmaster.application.services.sessions import SessionManager
from taskmaster.domain.users.entities import User
from taskmaster.domain.users.exceptions import EmailAlreadyRegisteredError
from taskmaster.domain.users.repositories import PasswordHasher, UserRepository


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        sessions: SessionManager,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._sessions = sessions
        self._password_hasher = password_hasher

    def execute(self, name: str, email: str, password: str) -> tuple[User, str]:
        if self._users.find_by_email(email):
            raise EmailAlreadyRegisteredError()
        hashed = self._password_hasher.hash(password)
        user = User(
            id=0,
            name=name,
            email=email,
            password_hash=hashed,
            created_at=datetime.now(UTC),
        )
        persisted = self._users.add(user)
        token = self._sessions.create_session(persisted.id)
        return persisted, token
