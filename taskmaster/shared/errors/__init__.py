from .base import (
    AppError,
    ConflictError,
    DomainError,
    InfrastructureError,
    MissingFieldsError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from .validation import format_pydantic_errors, raise_validation_error

__all__ = [
    "AppError",
    "ConflictError",
    "DomainError",
    "InfrastructureError",
    "MissingFieldsError",
    "NotFoundError",
    "UnauthorizedError",
    "ValidationError",
    "format_pydantic_errors",
    "raise_validation_error",
]
