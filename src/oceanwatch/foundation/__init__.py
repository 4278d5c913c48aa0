"""OceanWatch foundation: framework-free domain error types."""

from oceanwatch.foundation.exceptions import (
    ConflictError,
    DomainError,
    InternalError,
    NotFoundError,
    ValidationError,
)

__all__ = [
    "ConflictError",
    "DomainError",
    "InternalError",
    "NotFoundError",
    "ValidationError",
]
