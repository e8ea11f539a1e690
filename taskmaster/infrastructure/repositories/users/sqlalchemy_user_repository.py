# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from taskmaster.domain.users.entities import Session as DomainSession
from taskmaster.domain.users.entities import User as DomainUser
from taskmaster.domain.users.exceptions import EmailAlreadyRegisteredError
from taskmaster.domain.users.repositories import SessionTokenRepository, UserRepository
from taskmaster.infrastructure.db import session_scope
from taskmaster.infrastructure.db.models import SessionToken, User


def _to_domain(row: User) -> DomainUser:
    return DomainUser(
        id=row.id,
        name=row.name,
        email=row.email,
        password_hash=row.password_hash,
        created_at=row.created_at,
    )


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def find_by_email(self, email: str) -> DomainUser | None:
        with session_scope(self._session_factory) as session:
            row = session.query(User).filter(User.email == email).first()
            return _to_domain(row) if row else None

    def find_by_id(self, user_id: int) -> DomainUser | None:
        with session_scope(self._session_factory) as session:
            row = session.get(User, user_id)
            return _to_domain(row) if row else None

    def add(self, user: DomainUser) -> DomainUser:
        try:
            with session_scope(self._session_factory) as session:
                row = User(
                    name=user.name,
                    email=user.email,
                    password_hash=user.password_hash,
                    created_at=user.created_at,
                )
                session.add(row)
                session.flush()
                return _to_domain(row)
        except IntegrityError as exc:
            # Lost a race with a concurrent signup for the same email.
            raise EmailAlreadyRegisteredError() from exc


class SqlAlchemySessionTokenRepository(SessionTokenRepository):
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def add(self, session_token: DomainSession) -> DomainSession:
        with session_scope(self._session_factory) as session:
            session.add(
                SessionToken(
                    user_id=session_token.user_id,
                    token=session_token.token,
                    created_at=session_token.created_at,
                    expires_at=session_token.expires_at,
                )
            )
        return session_token

    def find(self, token: str) -> DomainSession | None:
        with session_scope(self._session_factory) as session:
            row = session.query(SessionToken).filter(SessionToken.token == token).first()
            if not row:
                return None
            return DomainSession(
                token=row.token,
                user_id=row.user_id,
                created_at=row.created_at,
                expires_at=row.expires_at,
            )

    def revoke(self, token: str) -> None:
        with session_scope(self._session_factory) as session:
            session.query(SessionToken).filter(SessionToken.token == token).delete()
