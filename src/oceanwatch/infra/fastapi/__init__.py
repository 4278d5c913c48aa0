"""OceanWatch Infra FastAPI: app factory, lifespan composition, RFC 7807 errors."""

from oceanwatch.infra.fastapi.app_factory import create_app
from oceanwatch.infra.fastapi.error_handlers import ProblemDetail, register_exception_handlers
from oceanwatch.infra.fastapi.lifespan import (
    LIFESPAN_PRIORITY_OBSERVABILITY,
    LIFESPAN_PRIORITY_PERSISTENCE,
    LifespanContribution,
    compose_lifespan,
)
from oceanwatch.infra.fastapi.settings import AppSettings

__all__ = [
    "LIFESPAN_PRIORITY_OBSERVABILITY",
    "LIFESPAN_PRIORITY_PERSISTENCE",
    "AppSettings",
    "LifespanContribution",
    "ProblemDetail",
    "compose_lifespan",
    "create_app",
    "register_exception_handlers",
]
