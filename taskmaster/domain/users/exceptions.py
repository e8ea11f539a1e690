# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from taskmaster.shared.errors.base import ConflictError, DomainError, NotFoundError


class EmailAlreadyRegisteredError(ConflictError):
    code = "email_already_registered"


class InvalidCredentialsError(DomainError):
    code = "invalid_credentials"
    status = HTTPStatus.UNAUTHORIZED


class UserNotFoundError(NotFoundError):
    code = "user_not_found"
