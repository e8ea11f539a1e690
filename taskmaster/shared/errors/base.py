# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Error taxonomy shared by every layer.

Each error carries the machine-readable ``code`` sent to clients as
``{"error": code}`` and the HTTP status it maps to. Subclasses normally only
override the two class attributes.
"""

from __future__ import annotations

from collections.abc import Mapping
from http import HTTPStatus
from typing import Any


class AppError(Exception):
    code: str = "internal_error"
    status: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(
        self,
        code: str | None = None,
        *,
        status: HTTPStatus | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        self.code = code or type(self).code
        self.status = status or type(self).status
        self.context = dict(context) if context else None
        super().__init__(self.code)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.code}
        if self.context:
            payload["context"] = self.context
        return payload


class DomainError(AppError):
    code = "domain_error"
    status = HTTPStatus.BAD_REQUEST


class InfrastructureError(AppError):
    code = "infrastructure_error"


class ValidationError(AppError):
    code = "validation_error"
    status = HTTPStatus.BAD_REQUEST


class MissingFieldsError(ValidationError):
    code = "missing_fields"

    def __init__(self, fields: list[str]) -> None:
        super().__init__(context={"fields": sorted(set(fields))})


class UnauthorizedError(AppError):
    code = "unauthorized"
    status = HTTPStatus.UNAUTHORIZED


class NotFoundError(DomainError):
    code = "not_found"
    status = HTTPStatus.NOT_FOUND


class ConflictError(DomainError):
    code = "conflict"
    status = HTTPStatus.CONFLICT
