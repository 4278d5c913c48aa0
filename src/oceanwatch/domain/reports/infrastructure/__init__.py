"""Storage and filesystem adapters for report deletion."""

from oceanwatch.domain.reports.infrastructure.audit_log import AuditLogger
from oceanwatch.domain.reports.infrastructure.cascade_deletion import (
    AUXILIARY_TABLES,
    AuxiliaryTable,
    CascadeDeletionService,
)
from oceanwatch.domain.reports.infrastructure.deletion_stats import (
    DailyDeletionCount,
    DeletionStats,
    DeletionStatsRepository,
)
from oceanwatch.domain.reports.infrastructure.file_assets import (
    FileAssetCleaner,
    FileCleanupResult,
)
from oceanwatch.domain.reports.infrastructure.tables import (
    deletion_logs_table,
    metadata,
    reports_table,
)

__all__ = [
    "AUXILIARY_TABLES",
    "AuditLogger",
    "AuxiliaryTable",
    "CascadeDeletionService",
    "DailyDeletionCount",
    "DeletionStats",
    "DeletionStatsRepository",
    "FileAssetCleaner",
    "FileCleanupResult",
    "deletion_logs_table",
    "metadata",
    "reports_table",
]
