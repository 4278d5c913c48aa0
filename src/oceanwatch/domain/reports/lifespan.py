"""Startup/shutdown of the deletion services.

Startup:
    1. Build the engine from ``DatabaseSettings`` (pool owned by this hook).
    2. Execute ``SELECT 1`` health check.
    3. Wire the deletion service, bulk coordinator and stats repository
       onto ``app.state``.

Shutdown:
    1. Dispose the engine and its connection pool.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

from sqlalchemy import text

from oceanwatch.domain.reports.bulk_deletion import BulkDeletionCoordinator
from oceanwatch.domain.reports.deletion_app import build_deletion_service
from oceanwatch.domain.reports.infrastructure.deletion_stats import DeletionStatsRepository
from oceanwatch.domain.reports.settings import DeletionSettings, get_deletion_settings
from oceanwatch.infra.fastapi.lifespan import LIFESPAN_PRIORITY_PERSISTENCE, LifespanContribution
from oceanwatch.infra.persistence.database import DatabaseManager, DatabaseSettings

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

logger = logging.getLogger(__name__)


def deletion_lifespan(
    database_settings: DatabaseSettings | None = None,
    deletion_settings: DeletionSettings | None = None,
) -> LifespanContribution:
    """Build the lifespan hook that owns the engine for the deletion services."""

    @asynccontextmanager
    async def _deletion_lifespan(app: Any) -> AsyncIterator[None]:
        db_settings = database_settings or DatabaseSettings()
        settings = deletion_settings or get_deletion_settings()
        manager = DatabaseManager(db_settings)
        engine = manager.get_engine()

        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        logger.info("deletion_lifespan: database health check passed")

        service = build_deletion_service(engine, settings, db_settings)
        app.state.deletion_service = service
        app.state.bulk_deletion = BulkDeletionCoordinator(service)
        app.state.deletion_stats = DeletionStatsRepository(engine)
        logger.info(
            "deletion_lifespan: services ready",
            extra={"uploads_dir": str(settings.uploads_dir)},
        )

        try:
            yield
        finally:
            manager.dispose()
            logger.info("deletion_lifespan: database engine disposed")

    return LifespanContribution(hook=_deletion_lifespan, priority=LIFESPAN_PRIORITY_PERSISTENCE)
