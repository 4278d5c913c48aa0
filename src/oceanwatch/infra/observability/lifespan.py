"""Observability lifespan hook: configure structlog before anything else logs."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

from oceanwatch.infra.fastapi.lifespan import LIFESPAN_PRIORITY_OBSERVABILITY, LifespanContribution
from oceanwatch.infra.observability.logging import LoggingSettings, configure_logging

if TYPE_CHECKING:
    from collections.abc import AsyncIterator


def observability_lifespan(settings: LoggingSettings | None = None) -> LifespanContribution:
    """Build the hook that installs logging on startup.

    Args:
        settings: Logging settings. If ``None``, loaded from environment.
    """

    @asynccontextmanager
    async def _observability_lifespan(app: Any) -> AsyncIterator[None]:
        configure_logging(settings)
        yield

    return LifespanContribution(
        hook=_observability_lifespan,
        priority=LIFESPAN_PRIORITY_OBSERVABILITY,  # Start early, shut down late
    )
