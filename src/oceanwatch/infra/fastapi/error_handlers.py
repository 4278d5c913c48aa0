"""RFC 7807 Problem Details exception handlers for FastAPI.

Translates domain exceptions into standardized HTTP responses with
Content-Type: application/problem+json.

Usage:
    from oceanwatch.infra.fastapi.error_handlers import register_exception_handlers

    app = FastAPI()
    register_exception_handlers(app)
"""

from __future__ import annotations

import json
import logging
import re
from datetime import datetime
from typing import TYPE_CHECKING, Any

from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from oceanwatch.foundation.exceptions import (
    ConflictError,
    DomainError,
    InternalError,
    NotFoundError,
    ValidationError,
)

if TYPE_CHECKING:
    from fastapi import FastAPI, Request

logger = logging.getLogger(__name__)

PROBLEM_MEDIA_TYPE = "application/problem+json"


class ProblemDetail(BaseModel):
    """RFC 7807 Problem Details response model.

    Standard fields:
    - type: URI reference identifying the problem type
    - title: Short human-readable summary
    - status: HTTP status code
    - detail: Human-readable explanation
    - instance: URI reference to specific occurrence

    Extension fields:
    - error_code: Machine-readable error code for client handling
    - context: Structured debugging information
    """

    type: str = Field(
        ...,
        description="URI reference identifying problem type",
        examples=["/errors/not-found", "/errors/validation-error"],
    )
    title: str = Field(..., description="Short human-readable summary")
    status: int = Field(..., ge=400, le=599, description="HTTP status code")
    detail: str = Field(..., description="Human-readable explanation")
    instance: str | None = Field(
        default=None,
        description="URI reference to specific occurrence (request path)",
    )
    error_code: str | None = Field(
        default=None,
        description="Machine-readable error code",
        examples=["RESOURCE_NOT_FOUND", "VALIDATION_ERROR"],
    )
    context: dict[str, Any] | None = Field(
        default=None,
        description="Structured debugging information",
    )


# Patterns for sensitive data
_SENSITIVE_PATTERNS = [
    (
        re.compile(r"postgresql(\+\w+)?://[^@]*@[^/\s]*"),
        "postgresql://[REDACTED]@[REDACTED]",
    ),
    (
        re.compile(r"password\s*=\s*['\"]?[^'\"\s]+['\"]?", re.IGNORECASE),
        "password=[REDACTED]",
    ),
    (
        re.compile(r"token\s*=\s*['\"]?[^'\"\s]+['\"]?", re.IGNORECASE),
        "token=[REDACTED]",
    ),
]


def _create_problem_response(problem: ProblemDetail) -> JSONResponse:
    return JSONResponse(
        status_code=problem.status,
        content=problem.model_dump(exclude_none=True),
        media_type=PROBLEM_MEDIA_TYPE,
    )


def _sanitize_context(context: dict[str, Any] | None) -> dict[str, Any] | None:
    """Sanitize context dictionary for safe inclusion in responses.

    - Converts datetimes to strings
    - Removes or redacts sensitive values (passwords, tokens, etc.)
    - Handles non-serializable types gracefully
    """
    if context is None:
        return None

    sanitized = {}
    for key, value in context.items():
        if _is_sensitive_key(key):
            continue
        sanitized[key] = _sanitize_value(value)

    return sanitized if sanitized else None


def _is_sensitive_key(key: str) -> bool:
    sensitive_keys = {"password", "secret", "token", "api_key", "apikey", "credential"}
    return key.lower() in sensitive_keys


def _sanitize_value(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, str):
        return _redact_sensitive_strings(value)
    if isinstance(value, dict):
        return _sanitize_context(value)
    if isinstance(value, (list, tuple)):
        return [_sanitize_value(v) for v in value]
    try:
        json.dumps(value)
        return value
    except (TypeError, ValueError):
        return str(value)


def _redact_sensitive_strings(text: str) -> str:
    result = text
    for pattern, replacement in _SENSITIVE_PATTERNS:
        result = pattern.sub(replacement, result)
    return result


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    """Translate NotFoundError to 404 with RFC 7807 problem details."""
    problem = ProblemDetail(
        type="/errors/not-found",
        title="Resource Not Found",
        status=404,
        detail=exc.message,
        instance=str(request.url.path),
        error_code=exc.error_code,
        context=_sanitize_context(exc.context),
    )
    return _create_problem_response(problem)


async def validation_error_handler(
    request: Request,
    exc: ValidationError,
) -> JSONResponse:
    """Translate ValidationError to 400 with field-level details."""
    problem = ProblemDetail(
        type="/errors/validation-error",
        title="Validation Error",
        status=400,
        detail=exc.message,
        instance=str(request.url.path),
        error_code=exc.error_code,
        context=_sanitize_context(exc.context),
    )
    return _create_problem_response(problem)


async def conflict_error_handler(
    request: Request,
    exc: ConflictError,
) -> JSONResponse:
    """Translate ConflictError to 409 with conflict context."""
    problem = ProblemDetail(
        type="/errors/conflict",
        title="Conflict",
        status=409,
        detail=exc.message,
        instance=str(request.url.path),
        error_code=exc.error_code,
        context=_sanitize_context(exc.context),
    )
    return _create_problem_response(problem)


async def internal_error_handler(
    request: Request,
    exc: InternalError,
) -> JSONResponse:
    """Translate InternalError to 500.

    The failure was already logged with its cause where it was raised;
    only the client-safe message and error code are returned.
    """
    problem = ProblemDetail(
        type="/errors/internal-error",
        title="Internal Server Error",
        status=500,
        detail=exc.message,
        instance=str(request.url.path),
        error_code=exc.error_code,
    )
    return _create_problem_response(problem)


async def domain_error_handler(
    request: Request,
    exc: DomainError,
) -> JSONResponse:
    """Fallback: translate any other DomainError to 400 Bad Request."""
    problem = ProblemDetail(
        type="/errors/domain-error",
        title="Bad Request",
        status=400,
        detail=exc.message,
        instance=str(request.url.path),
        error_code=exc.error_code,
        context=_sanitize_context(exc.context),
    )
    return _create_problem_response(problem)


async def request_validation_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Translate Pydantic RequestValidationError to 400.

    Malformed path parameters and bodies are input validation failures like
    any other, so they share the 400 status of ValidationError.
    """
    errors = [
        {
            "loc": list(error.get("loc", [])),
            "msg": error.get("msg", ""),
            "type": error.get("type", ""),
        }
        for error in exc.errors()
    ]

    problem = ProblemDetail(
        type="/errors/request-validation-error",
        title="Request Validation Error",
        status=400,
        detail="Request validation failed",
        instance=str(request.url.path),
        error_code="REQUEST_VALIDATION_ERROR",
        context={"errors": errors},
    )
    return _create_problem_response(problem)


async def unhandled_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """Catch-all handler for unhandled exceptions.

    Logs full exception details but returns a sanitized response. In debug
    mode the exception type and message are included.
    """
    logger.exception(
        "unhandled_exception",
        extra={
            "path": str(request.url.path),
            "method": request.method,
            "exception_type": type(exc).__name__,
        },
    )

    if getattr(request.app, "debug", False):
        detail = f"{type(exc).__name__}: {exc}"
        context: dict[str, Any] | None = {"exception_type": type(exc).__name__}
    else:
        detail = "An internal error occurred."
        context = None

    problem = ProblemDetail(
        type="/errors/internal-error",
        title="Internal Server Error",
        status=500,
        detail=detail,
        instance=str(request.url.path),
        error_code="INTERNAL_ERROR",
        context=context,
    )
    return _create_problem_response(problem)


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on FastAPI application.

    Handlers are registered from most specific to least specific:
    1. NotFoundError -> 404
    2. ValidationError -> 400
    3. ConflictError -> 409
    4. InternalError -> 500
    5. DomainError -> 400 (base class fallback)
    6. RequestValidationError -> 400 (Pydantic)
    7. Exception -> 500 (catch-all)
    """
    # Type ignores needed due to Starlette's overly strict handler typing
    app.add_exception_handler(
        NotFoundError,
        not_found_handler,  # type: ignore[arg-type]
    )
    app.add_exception_handler(
        ValidationError,
        validation_error_handler,  # type: ignore[arg-type]
    )
    app.add_exception_handler(
        ConflictError,
        conflict_error_handler,  # type: ignore[arg-type]
    )
    app.add_exception_handler(
        InternalError,
        internal_error_handler,  # type: ignore[arg-type]
    )
    app.add_exception_handler(
        DomainError,
        domain_error_handler,  # type: ignore[arg-type]
    )
    app.add_exception_handler(
        RequestValidationError,
        request_validation_handler,  # type: ignore[arg-type]
    )
    app.add_exception_handler(Exception, unhandled_exception_handler)
