"""OceanWatch Infra Observability: structlog logging configuration."""

from oceanwatch.infra.observability.lifespan import observability_lifespan
from oceanwatch.infra.observability.logging import (
    LoggingSettings,
    SensitiveDataProcessor,
    configure_logging,
    get_logger,
    get_logging_settings,
)

__all__ = [
    "LoggingSettings",
    "SensitiveDataProcessor",
    "configure_logging",
    "get_logger",
    "get_logging_settings",
    "observability_lifespan",
]
