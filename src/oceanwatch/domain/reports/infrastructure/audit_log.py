"""Append-only audit trail for report deletions.

One ``deletion_logs`` row is written per successful deletion, inside the
same transaction as the deletion itself. Rows are never updated or deleted
here. The table belongs to this module, which creates it if it is missing.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import insert, inspect
from sqlalchemy.exc import SQLAlchemyError

from oceanwatch.domain.reports.exceptions import AuditWriteError
from oceanwatch.domain.reports.infrastructure.tables import deletion_logs_table
from oceanwatch.infra.persistence.schema_probe import SchemaProbe

if TYPE_CHECKING:
    from sqlalchemy import Connection

    from oceanwatch.domain.reports.outcomes import CascadeResult
    from oceanwatch.domain.reports.report import Report

logger = logging.getLogger(__name__)


class AuditLogger:
    """Writes DeletionLog rows.

    The table check runs until the table has been seen to exist; a table
    created inside a transaction that later rolls back is therefore checked
    again on the next call.
    """

    def __init__(self, probe: SchemaProbe | None = None) -> None:
        self._probe = probe or SchemaProbe()
        self._table = deletion_logs_table
        self._table_ready = False

    def ensure_table(self, connection: Connection) -> bool:
        """Create ``deletion_logs`` if absent.

        Returns:
            True if the table was created by this call.
        """
        if self._table_ready:
            return False
        if self._probe.exists_table(connection, self._table.name):
            self._table_ready = True
            return False
        try:
            with connection.begin_nested():
                self._table.create(connection)
        except SQLAlchemyError:
            # Another transaction may have created it since the check above.
            if not inspect(connection).has_table(self._table.name, schema=self._table.schema):
                raise
            logger.info(
                "deletion_log_table_created_concurrently",
                extra={"table": self._table.name},
            )
            self._table_ready = True
            return False
        logger.info("deletion_log_table_created", extra={"table": self._table.name})
        return True

    def append(
        self,
        connection: Connection,
        report: Report,
        actor_id: int,
        cascade: CascadeResult,
        *,
        reason: str | None = None,
    ) -> datetime:
        """Insert one deletion log row for ``report``.

        Args:
            connection: Connection with the deletion's open transaction.
            report: Snapshot of the row being deleted.
            actor_id: Admin performing the deletion.
            cascade: Per-table results to record in ``metadata``.
            reason: Optional free-text justification.

        Returns:
            The ``deleted_at`` timestamp written.

        Raises:
            AuditWriteError: If the table cannot be ensured or the insert fails.
                The caller's transaction must not commit.
        """
        deleted_at = datetime.now(UTC)
        metadata = {
            "had_image": report.has_image,
            "had_video": report.has_video,
            "deletion_timestamp": deleted_at.isoformat(),
            "total_deleted": cascade.total_deleted,
            "tables": cascade.to_dict(),
        }
        try:
            self.ensure_table(connection)
            connection.execute(
                insert(self._table).values(
                    report_id=report.id,
                    original_user_id=report.user_id,
                    deleted_by_admin_id=actor_id,
                    event_type=report.event_type,
                    deletion_reason=reason,
                    original_created_at=report.created_at,
                    deleted_at=deleted_at,
                    report_data=report.snapshot(),
                    metadata=metadata,
                )
            )
        except SQLAlchemyError as exc:
            logger.exception(
                "audit_write_failed",
                extra={"report_id": report.id, "actor_id": actor_id},
            )
            raise AuditWriteError(report.id) from exc

        logger.info(
            "audit_written",
            extra={"report_id": report.id, "actor_id": actor_id},
        )
        return deleted_at
