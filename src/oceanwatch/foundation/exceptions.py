"""Domain exception hierarchy for type-safe error handling.

Every error raised by the deletion subsystem derives from ``DomainError``
and carries a machine-readable ``error_code`` plus structured ``context``
so the HTTP layer and the logs can treat them uniformly.

Example:
    >>> from oceanwatch.foundation.exceptions import NotFoundError
    >>> raise NotFoundError("Report", 42)
"""

from __future__ import annotations

from typing import Any

__all__ = [
    "ConflictError",
    "DomainError",
    "InternalError",
    "NotFoundError",
    "ValidationError",
]


class DomainError(Exception):
    """Base class for all domain errors.

    Attributes:
        error_code: Machine-readable error code for client handling.
        message: Human-readable error description.
        context: Structured debugging information (report IDs, field names).

    Example:
        >>> raise DomainError("Operation failed", context={"report_id": 12})
        DomainError: Operation failed (report_id=12)
    """

    error_code: str = "DOMAIN_ERROR"

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        """Initialize domain error with message and optional context.

        Args:
            message: Human-readable error description.
            context: Structured debugging information. Keys should be snake_case.
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        """String representation including context for logging."""
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message

    def __repr__(self) -> str:
        """Detailed representation for debugging."""
        return f"{self.__class__.__name__}({self.message!r}, context={self.context!r})"


class NotFoundError(DomainError):
    """Raised when a requested resource does not exist.

    Maps to HTTP 404 Not Found.

    Attributes:
        error_code: "RESOURCE_NOT_FOUND" (class constant).
        resource_type: Type of missing resource.
        resource_id: Identifier of missing resource.

    Example:
        >>> raise NotFoundError("Report", 42)
        NotFoundError: Report not found: 42
    """

    error_code: str = "RESOURCE_NOT_FOUND"

    def __init__(
        self,
        resource_type: str,
        resource_id: int | str,
        **extra_context: Any,
    ) -> None:
        """Initialize not found error.

        Args:
            resource_type: Type of resource (e.g., "Report").
            resource_id: Identifier of missing resource.
            **extra_context: Additional debugging context.
        """
        self.resource_type = resource_type
        self.resource_id = resource_id
        message = f"{resource_type} not found: {resource_id}"
        context = {
            "resource_type": resource_type,
            "resource_id": resource_id,
            **extra_context,
        }
        super().__init__(message, context)


class ValidationError(DomainError):
    """Raised when input fails validation before any storage is touched.

    Maps to HTTP 400 Bad Request.

    Attributes:
        error_code: "VALIDATION_ERROR" (class constant).
        field: Field path that failed validation.
        reason: Human-readable validation failure reason.

    Example:
        >>> raise ValidationError("report_id", "must be a positive integer")
        ValidationError: Validation failed for 'report_id': must be a positive integer
    """

    error_code: str = "VALIDATION_ERROR"

    def __init__(
        self,
        field: str,
        reason: str,
        **extra_context: Any,
    ) -> None:
        """Initialize validation error.

        Args:
            field: Field path that failed validation. Supports dot notation
                   for nested fields (e.g., "report_ids.2").
            reason: Human-readable validation failure reason.
            **extra_context: Additional debugging context.
        """
        self.field = field
        self.reason = reason
        message = f"Validation failed for '{field}': {reason}"
        context = {
            "field": field,
            "reason": reason,
            **extra_context,
        }
        super().__init__(message, context)


class ConflictError(DomainError):
    """Raised when an operation conflicts with current system state.

    Maps to HTTP 409 Conflict. Used when a concurrent writer changed the
    row between our read and our write.

    Attributes:
        error_code: "CONFLICT" (class constant).
        reason: Description of the conflict.

    Example:
        >>> raise ConflictError("Row already deleted", report_id=42)
        ConflictError: Conflict: Row already deleted (report_id=42)
    """

    error_code: str = "CONFLICT"

    def __init__(
        self,
        reason: str,
        **context: Any,
    ) -> None:
        """Initialize conflict error.

        Args:
            reason: Description of conflict.
            **context: Additional debugging context.
        """
        self.reason = reason
        message = f"Conflict: {reason}"
        super().__init__(message, context)


class InternalError(DomainError):
    """Raised when an operation failed for reasons the caller cannot fix.

    Maps to HTTP 500. ``message`` must be safe to show to clients; the
    underlying cause is chained and logged, never rendered.

    Attributes:
        error_code: "INTERNAL_ERROR" (class constant).
    """

    error_code: str = "INTERNAL_ERROR"
