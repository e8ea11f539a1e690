# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .gate import (
    LOGIN_PAGE,
    PUBLIC_PAGES,
    AuthedRequest,
    AuthGate,
    authed_request,
    bearer_token,
    token_from_request,
)

__all__ = [
    "AuthGate",
    "AuthedRequest",
    "LOGIN_PAGE",
    "PUBLIC_PAGES",
    "authed_request",
    "bearer_token",
    "token_from_request",
]
