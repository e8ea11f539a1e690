# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Translate pydantic request validation failures into API errors."""

from __future__ import annotations

from typing import Any, NoReturn

from pydantic import ValidationError as PydanticValidationError

from .base import MissingFieldsError, ValidationError

# Absent keys and empty strings both count as "not provided".
_MISSING_TYPES = frozenset({"missing", "string_too_short"})


def format_pydantic_errors(exc: PydanticValidationError) -> dict[str, Any]:
    errors = [
        {
            "field": ".".join(str(part) for part in err.get("loc", ())) or "body",
            "type": err.get("type", "value_error"),
        }
        for err in exc.errors()
    ]
    return {"fields": sorted({e["field"] for e in errors}), "errors": errors}


def raise_validation_error(exc: PydanticValidationError) -> NoReturn:
    context = format_pydantic_errors(exc)
    if all(e["type"] in _MISSING_TYPES for e in context["errors"]):
        raise MissingFieldsError(context["fields"]) from exc
    raise ValidationError(context=context) from exc


__all__ = ["format_pydantic_errors", "raise_validation_error"]
