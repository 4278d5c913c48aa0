"""Reports domain: permanent deletion of hazard reports.

A deletion removes rows referencing the report from auxiliary tables,
removes the report itself, writes one audit record (all in a single
transaction), then removes the report's media files.
"""

from oceanwatch.domain.reports.bulk_deletion import BulkDeletionCoordinator
from oceanwatch.domain.reports.deletion_app import (
    ReportDeletionService,
    build_deletion_service,
    validate_actor_id,
    validate_report_id,
)
from oceanwatch.domain.reports.exceptions import (
    AuditWriteError,
    DeletionFailedError,
    ReportConflictError,
    ReportNotFoundError,
)
from oceanwatch.domain.reports.outcomes import (
    BulkDeletionOutcome,
    BulkFailure,
    CascadeResult,
    DeletionOutcome,
    DeletionStage,
    Failed,
    Processed,
    Skipped,
)
from oceanwatch.domain.reports.report import Report

__all__ = [
    "AuditWriteError",
    "BulkDeletionCoordinator",
    "BulkDeletionOutcome",
    "BulkFailure",
    "CascadeResult",
    "DeletionFailedError",
    "DeletionOutcome",
    "DeletionStage",
    "Failed",
    "Processed",
    "Report",
    "ReportConflictError",
    "ReportDeletionService",
    "ReportNotFoundError",
    "Skipped",
    "build_deletion_service",
    "validate_actor_id",
    "validate_report_id",
]
