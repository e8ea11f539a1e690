# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from taskmaster.application.use_cases.users.get_current_user import GetCurrentUserUseCase
from taskmaster.application.use_cases.users.login_user import LoginUserUseCase
from taskmaster.application.use_cases.users.logout_user import LogoutUserUseCase
from taskmaster.application.use_cases.users.register_user import RegisterUserUseCase
from taskmaster.domain.users.entities import User
from taskmaster.infrastructure.auth import AuthGate, authed_request, bearer_token
from taskmaster.interfaces.http.dto.auth import (
    AuthSuccessDTO,
    LoginRequestDTO,
    OkDTO,
    SignupRequestDTO,
    UserDTO,
)
from taskmaster.shared.config import load_config
from taskmaster.shared.errors.validation import raise_validation_error
from taskmaster.shared.logging import logger
from taskmaster.shared.middleware.rate_limit import rate_limit


def _auth_response(user: User, token: str, status: int) -> tuple[Response, int]:
    payload = AuthSuccessDTO(
        token=token, user=UserDTO(id=user.id, name=user.name, email=user.email)
    ).model_dump()
    response = jsonify(payload)
    config = load_config()
    response.set_cookie(
        config.session.cookie_name,
        token,
        httponly=True,
        samesite=config.security.cookie_samesite,
        secure=config.security.cookie_secure,
        max_age=config.session.lifetime_seconds,
    )
    return response, status


class AuthController:
    def __init__(
        self,
        *,
        gate: AuthGate,
        register_use_case: RegisterUserUseCase,
        login_use_case: LoginUserUseCase,
        logout_use_case: LogoutUserUseCase,
        current_user_use_case: GetCurrentUserUseCase,
    ) -> None:
        self._gate = gate
        self._register_use_case = register_use_case
        self._login_use_case = login_use_case
        self._logout_use_case = logout_use_case
        self._current_user_use_case = current_user_use_case

    @rate_limit(limit=5, window_seconds=60.0)
    def signup(self) -> tuple[Response, int]:
        try:
            dto = SignupRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        user, token = self._register_use_case.execute(dto.name, dto.email, dto.password)
        logger.info(f"auth.signup: ok user_id={user.id}")
        return _auth_response(user, token, 201)

    @rate_limit(limit=10, window_seconds=60.0)
    def login(self) -> tuple[Response, int]:
        try:
            dto = LoginRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        try:
            user, token = self._login_use_case.execute(dto.email, dto.password)
        except Exception:
            logger.info("auth.login: rejected")
            raise
        logger.info(f"auth.login: ok user_id={user.id}")
        return _auth_response(user, token, 200)

    def me(self) -> tuple[Response, int]:
        user = self._current_user_use_case.execute(authed_request().user_id)
        return jsonify(UserDTO(id=user.id, name=user.name, email=user.email).model_dump()), 200

    def logout(self) -> tuple[Response, int]:
        self._logout_use_case.execute(bearer_token(request))
        response = jsonify(OkDTO().model_dump())
        response.delete_cookie(self._gate.cookie_name)
        logger.info(f"auth.logout: ok user_id={authed_request().user_id}")
        return response, 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__, url_prefix="/api/auth")
        bp.add_url_rule("/signup", view_func=self.signup, methods=["POST"])
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        bp.add_url_rule("/me", view_func=self._gate.api_required(self.me), methods=["GET"])
        bp.add_url_rule(
            "/logout", view_func=self._gate.api_required(self.logout), methods=["POST"]
        )
        return bp
