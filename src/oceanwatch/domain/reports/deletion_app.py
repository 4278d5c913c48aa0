"""Single-report deletion service.

``ReportDeletionService.delete_report`` is the only path that destroys a
report. One call runs as one database transaction::

    validate -> BEGIN -> SELECT ... FOR UPDATE -> cascade -> DELETE report
             -> INSERT deletion_logs -> COMMIT -> remove asset files

Anything that fails before COMMIT rolls the whole transaction back, so a
report is either fully present or fully gone with exactly one audit row.
File removal happens after COMMIT and is best-effort.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError

from oceanwatch.domain.reports.exceptions import (
    DeletionFailedError,
    ReportConflictError,
    ReportNotFoundError,
)
from oceanwatch.domain.reports.infrastructure.audit_log import AuditLogger
from oceanwatch.domain.reports.infrastructure.cascade_deletion import (
    AUXILIARY_TABLES,
    CascadeDeletionService,
)
from oceanwatch.domain.reports.infrastructure.file_assets import (
    FileAssetCleaner,
    FileCleanupResult,
)
from oceanwatch.domain.reports.infrastructure.tables import reports_table
from oceanwatch.domain.reports.outcomes import DeletionOutcome, DeletionStage
from oceanwatch.domain.reports.report import Report
from oceanwatch.foundation.exceptions import DomainError, ValidationError
from oceanwatch.infra.persistence.schema_probe import SchemaProbe

if TYPE_CHECKING:
    from sqlalchemy import Connection, Engine

    from oceanwatch.domain.reports.settings import DeletionSettings
    from oceanwatch.infra.persistence.database import DatabaseSettings

logger = logging.getLogger(__name__)

_REPORT_COLUMNS = [reports_table.c[name] for name in Report.__dataclass_fields__]


def validate_report_id(value: Any, field: str = "report_id") -> int:
    """Return ``value`` if it is a positive int, else raise ValidationError.

    ``bool`` is rejected even though it subclasses ``int``.
    """
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValidationError(field, "must be a positive integer", value=repr(value))
    return value


def validate_actor_id(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError("actor_id", "must be an integer", value=repr(value))
    return value


class ReportDeletionService:
    """Transactional, audited deletion of one report and its dependents.

    All collaborators are injected; the engine's pool is owned by the
    hosting service.

    Args:
        engine: Engine whose pool supplies one connection per deletion.
        cascade: Deletes auxiliary rows inside the transaction.
        audit: Writes the deletion log row inside the transaction.
        files: Removes asset files after commit.
    """

    def __init__(
        self,
        engine: Engine,
        cascade: CascadeDeletionService,
        audit: AuditLogger,
        files: FileAssetCleaner,
    ) -> None:
        self._engine = engine
        self._cascade = cascade
        self._audit = audit
        self._files = files

    def delete_report(
        self,
        report_id: Any,
        actor_id: Any,
        *,
        reason: str | None = None,
    ) -> DeletionOutcome:
        """Permanently delete a report, its auxiliary rows and its asset files.

        Args:
            report_id: Positive integer id of the report.
            actor_id: Id of the admin performing the deletion.
            reason: Optional justification stored in the audit row.

        Returns:
            DeletionOutcome with the deletion time, actor and per-table results.

        Raises:
            ValidationError: Malformed input; no connection was acquired.
            ReportNotFoundError: No such report; rolled back, nothing audited.
            ReportConflictError: A concurrent deletion removed the row first.
            AuditWriteError: The audit row could not be written; rolled back.
            DeletionFailedError: Any other storage failure; rolled back.
        """
        stage = DeletionStage.VALIDATING
        report_id = validate_report_id(report_id)
        actor_id = validate_actor_id(actor_id)
        log_ctx = {"report_id": report_id, "actor_id": actor_id}
        logger.info("report_deletion_started", extra=log_ctx)

        try:
            with self._engine.begin() as conn:
                stage = self._enter(DeletionStage.TRANSACTION_OPEN, log_ctx)
                report = self._fetch_for_update(conn, report_id)

                stage = self._enter(DeletionStage.CASCADE_PROCESSING, log_ctx)
                cascade = self._cascade.delete_dependents(conn, report_id)

                self._delete_report_row(conn, report_id)
                stage = self._enter(DeletionStage.REPORT_ROW_DELETED, log_ctx)

                deleted_at = self._audit.append(conn, report, actor_id, cascade, reason=reason)
                stage = self._enter(DeletionStage.AUDIT_WRITTEN, log_ctx)
            stage = self._enter(DeletionStage.COMMITTED, log_ctx)
        except DeletionFailedError as exc:
            logger.error(
                "report_deletion_rolled_back",
                extra={**log_ctx, "stage": str(stage), "error_code": exc.error_code},
            )
            raise
        except DomainError as exc:
            logger.info(
                "report_deletion_rejected",
                extra={**log_ctx, "stage": str(stage), "error_code": exc.error_code},
            )
            raise
        except SQLAlchemyError as exc:
            logger.exception(
                "report_deletion_rolled_back",
                extra={**log_ctx, "stage": str(stage), "error_type": type(exc).__name__},
            )
            raise DeletionFailedError(report_id, stage=str(stage)) from exc

        self._enter(DeletionStage.FILE_CLEANUP, log_ctx)
        try:
            files = self._files.remove(report.asset_references)
        except Exception:
            # Committed; cleanup errors never surface to the caller.
            logger.warning("asset_cleanup_failed", extra=log_ctx, exc_info=True)
            files = FileCleanupResult()

        outcome = DeletionOutcome(
            report_id=report_id,
            deleted_at=deleted_at,
            deleted_by=actor_id,
            cascade=cascade,
            files_removed=files.removed,
        )
        self._enter(DeletionStage.DONE, log_ctx)
        logger.info(
            "report_deleted",
            extra={
                **log_ctx,
                "total_deleted": cascade.total_deleted,
                "files_removed": len(files.removed),
                "files_failed": len(files.failed),
            },
        )
        return outcome

    def _fetch_for_update(self, conn: Connection, report_id: int) -> Report:
        row = (
            conn.execute(
                select(*_REPORT_COLUMNS)
                .where(reports_table.c.id == report_id)
                .with_for_update()
            )
            .mappings()
            .one_or_none()
        )
        if row is None:
            raise ReportNotFoundError(report_id)
        return Report.from_row(row)

    def _delete_report_row(self, conn: Connection, report_id: int) -> None:
        result = conn.execute(delete(reports_table).where(reports_table.c.id == report_id))
        if result.rowcount != 1:
            raise ReportConflictError(report_id)

    @staticmethod
    def _enter(stage: DeletionStage, log_ctx: dict[str, Any]) -> DeletionStage:
        logger.debug("report_deletion_stage", extra={**log_ctx, "stage": str(stage)})
        return stage


def build_deletion_service(
    engine: Engine,
    settings: DeletionSettings,
    database_settings: DatabaseSettings | None = None,
) -> ReportDeletionService:
    """Wire a ReportDeletionService with the default auxiliary allow-list."""
    schema = database_settings.schema_name if database_settings else None
    probe = SchemaProbe(schema)
    return ReportDeletionService(
        engine,
        cascade=CascadeDeletionService(AUXILIARY_TABLES, probe),
        audit=AuditLogger(),
        files=FileAssetCleaner(settings.uploads_dir),
    )
