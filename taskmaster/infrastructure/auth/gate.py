# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Request guard shared by API routes and HTML page routes.

Both call sites resolve the token through the same ``SessionManager``; they only
differ in what happens on failure: API routes answer 401 with a JSON error,
page routes redirect to the login page.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from functools import wraps
from typing import cast

from flask import Request, g, redirect, request

from taskmaster.application.services.sessions import SessionManager
from taskmaster.domain.users.entities import Session
from taskmaster.shared.errors import UnauthorizedError
from taskmaster.shared.logging import logger

LOGIN_PAGE = "/login.html"
PUBLIC_PAGES: frozenset[str] = frozenset({"/login.html", "/signup.html"})


class AuthedRequest(Request):
    user_id: int


def authed_request() -> AuthedRequest:
    """Return the current request cast to include authentication attributes."""
    return cast(AuthedRequest, request)


def bearer_token(req: Request) -> str:
    auth = req.headers.get("Authorization", "")
    if auth.startswith("Bearer "):
        return auth[7:].strip()
    return ""


def token_from_request(req: Request, *, cookie_name: str | None = None) -> str:
    """Bearer header first, then the session cookie when ``cookie_name`` is given."""
    token = bearer_token(req)
    if not token and cookie_name:
        token = req.cookies.get(cookie_name, "")
    return token


class AuthGate:
    def __init__(
        self,
        *,
        sessions: SessionManager,
        cookie_name: str = "token",
        login_page: str = LOGIN_PAGE,
        public_pages: Iterable[str] = PUBLIC_PAGES,
    ) -> None:
        self._sessions = sessions
        self._cookie_name = cookie_name
        self._login_page = login_page
        self._public_pages = frozenset(public_pages)

    @property
    def cookie_name(self) -> str:
        return self._cookie_name

    def _attach(self, session: Session) -> None:
        g.user_id = session.user_id
        g.session_token = session.token
        request.user_id = session.user_id  # type: ignore[attr-defined]

    def resolve_api(self) -> Session | None:
        return self._sessions.resolve(bearer_token(request))

    def resolve_page(self) -> Session | None:
        return self._sessions.resolve(token_from_request(request, cookie_name=self._cookie_name))

    def is_public_page(self, path: str) -> bool:
        return path in self._public_pages

    def api_required(self, f: Callable) -> Callable:
        @wraps(f)
        def inner(*a, **kw):
            session = self.resolve_api()
            if session is None:
                logger.warning(
                    f"auth.api: rejected (token missing/unknown/expired) on {request.method} {request.path}"
                )
                raise UnauthorizedError()
            self._attach(session)
            logger.debug(f"auth.api: ok (user_id={session.user_id}) {request.method} {request.path}")
            return f(*a, **kw)

        return inner

    def page_required(self, f: Callable) -> Callable:
        @wraps(f)
        def inner(*a, **kw):
            if not self.is_public_page(request.path):
                session = self.resolve_page()
                if session is None:
                    logger.info(f"auth.page: redirect to login from {request.path}")
                    return redirect(self._login_page)
                self._attach(session)
            return f(*a, **kw)

        return inner


__all__ = [
    "AuthGate",
    "AuthedRequest",
    "LOGIN_PAGE",
    "PUBLIC_PAGES",
    "authed_request",
    "bearer_token",
    "token_from_request",
]
