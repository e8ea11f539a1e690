# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import Session, User
from .exceptions import EmailAlreadyRegisteredError, InvalidCredentialsError, UserNotFoundError
from .repositories import PasswordHasher, SessionTokenRepository, UserRepository

__all__ = [
    "EmailAlreadyRegisteredError",
    "InvalidCredentialsError",
    "PasswordHasher",
    "Session",
    "SessionTokenRepository",
    "User",
    "UserNotFoundError",
    "UserRepository",
]
