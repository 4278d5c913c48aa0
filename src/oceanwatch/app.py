"""OceanWatch report-deletion application factory.

Usage::

    from oceanwatch.app import create_oceanwatch_app

    app = create_oceanwatch_app()

Run with ``uvicorn oceanwatch.app:create_oceanwatch_app --factory``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from oceanwatch.domain.reports.lifespan import deletion_lifespan
from oceanwatch.domain.reports.router import router as reports_router
from oceanwatch.infra.fastapi import AppSettings, create_app
from oceanwatch.infra.observability import observability_lifespan

if TYPE_CHECKING:
    from fastapi import FastAPI

    from oceanwatch.domain.reports.settings import DeletionSettings
    from oceanwatch.infra.fastapi import LifespanContribution
    from oceanwatch.infra.persistence import DatabaseSettings


def create_oceanwatch_app(
    settings: AppSettings | None = None,
    *,
    database_settings: DatabaseSettings | None = None,
    deletion_settings: DeletionSettings | None = None,
) -> FastAPI:
    """Create the admin API with the deletion endpoints mounted.

    Args:
        settings: Application settings. If ``None``, loaded from environment.
        database_settings: Overrides ``DATABASE_*`` environment settings.
        deletion_settings: Overrides ``DELETION_*`` environment settings.
    """
    settings = settings or AppSettings()

    hooks: list[LifespanContribution] = [
        deletion_lifespan(database_settings, deletion_settings),
    ]
    if settings.configure_logging:
        hooks.append(observability_lifespan())

    return create_app(settings=settings, routers=[reports_router], lifespan_hooks=hooks)
