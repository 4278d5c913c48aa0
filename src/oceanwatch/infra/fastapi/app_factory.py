"""FastAPI application factory.

Provides :func:`create_app`, which wires routers, RFC 7807 error handlers
and ordered lifespan hooks into a FastAPI application.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import FastAPI

from oceanwatch.infra.fastapi.error_handlers import register_exception_handlers
from oceanwatch.infra.fastapi.lifespan import LifespanContribution, compose_lifespan
from oceanwatch.infra.fastapi.settings import AppSettings

if TYPE_CHECKING:
    from fastapi import APIRouter

logger = logging.getLogger(__name__)


def create_app(
    settings: AppSettings | None = None,
    *,
    routers: list[APIRouter] | None = None,
    lifespan_hooks: list[LifespanContribution] | None = None,
) -> FastAPI:
    """Create a FastAPI application.

    Args:
        settings: Application settings. If ``None``, loaded from environment.
        routers: Routers to include.
        lifespan_hooks: Startup/shutdown hooks, run in priority order.

    Returns:
        Configured FastAPI application instance.
    """
    settings = settings or AppSettings()

    app = FastAPI(
        title=settings.title,
        version=settings.version,
        description=settings.description,
        docs_url=settings.docs_url,
        openapi_url=settings.openapi_url,
        debug=settings.debug,
        lifespan=compose_lifespan(list(lifespan_hooks or [])),
    )

    register_exception_handlers(app)

    for router in routers or []:
        app.include_router(router)
        logger.info("Included router: %r", router.prefix)

    return app
