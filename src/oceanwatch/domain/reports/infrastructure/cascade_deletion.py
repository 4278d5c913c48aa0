"""Cascade deletion of auxiliary rows that reference a report.

Removes every row pointing at a report from the allow-listed side tables,
inside the caller's transaction. Deployments carry different subsets of
these tables, so each one is probed first; a missing table is skipped and
a failing delete is isolated in its own SAVEPOINT so the rest of the
cascade (and the enclosing transaction) stays usable.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from sqlalchemy import text
from sqlalchemy.exc import DBAPIError, SQLAlchemyError

from oceanwatch.domain.reports.outcomes import (
    MISSING_TABLE,
    CascadeResult,
    Failed,
    Processed,
    Skipped,
    TableResult,
)
from oceanwatch.infra.persistence.schema_probe import SchemaProbe, validate_identifier

if TYPE_CHECKING:
    from collections.abc import Iterable

    from sqlalchemy import Connection, TextClause

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AuxiliaryTable:
    """An allow-listed side table keyed to reports by ``foreign_key``.

    Identifiers are validated on construction, so an ``AuxiliaryTable``
    can only ever render a safe DELETE statement.

    Attributes:
        name: Table name.
        foreign_key: Column holding the report id.
        description: What the table stores, for logs and audit metadata.
    """

    name: str
    foreign_key: str = "report_id"
    description: str = ""

    def __post_init__(self) -> None:
        validate_identifier(self.name, "table_name")
        validate_identifier(self.foreign_key, "foreign_key")

    def delete_statement(self, schema: str | None = None) -> TextClause:
        qualified = f"{validate_identifier(schema, 'schema')}.{self.name}" if schema else self.name
        return text(f"DELETE FROM {qualified} WHERE {self.foreign_key} = :report_id")


AUXILIARY_TABLES: tuple[AuxiliaryTable, ...] = (
    AuxiliaryTable("map_markers", description="Map marker positions"),
    AuxiliaryTable("analytics_daily", description="Daily analytics data"),
    AuxiliaryTable("analytics", description="Analytics data"),
    AuxiliaryTable("metrics_cache", description="Cached metrics"),
    AuxiliaryTable("activity_logs", description="Activity log entries"),
    AuxiliaryTable("report_analytics", description="Report-specific analytics"),
    AuxiliaryTable("report_metrics", description="Report metrics data"),
)


def _describe_error(exc: SQLAlchemyError) -> tuple[str, str]:
    """Short message and type name for the underlying driver error."""
    cause: BaseException = exc.orig if isinstance(exc, DBAPIError) and exc.orig else exc
    message = str(cause).strip().splitlines()[0] if str(cause).strip() else type(cause).__name__
    return message, type(cause).__name__


class CascadeDeletionService:
    """Deletes auxiliary rows for one report within an open transaction.

    Deletion targets are fixed at construction. Duplicate table names are
    rejected so each table appears once in the result map.

    Args:
        tables: Allow-listed auxiliary tables, processed in order.
        probe: Catalog lookup used before touching each table.
    """

    def __init__(
        self,
        tables: Iterable[AuxiliaryTable] = AUXILIARY_TABLES,
        probe: SchemaProbe | None = None,
    ) -> None:
        self._tables = tuple(tables)
        self._probe = probe or SchemaProbe()
        names = [table.name for table in self._tables]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            msg = f"Duplicate auxiliary tables: {', '.join(duplicates)}"
            raise ValueError(msg)

    @property
    def tables(self) -> tuple[AuxiliaryTable, ...]:
        return self._tables

    def delete_dependents(self, connection: Connection, report_id: int) -> CascadeResult:
        """Delete all auxiliary rows referencing ``report_id``.

        Args:
            connection: Connection with an open transaction.
            report_id: Report whose dependents are removed.

        Returns:
            CascadeResult mapping every allow-listed table to
            Processed, Skipped or Failed.
        """
        logger.info("cascade_deletion_started", extra={"report_id": report_id})

        results: dict[str, TableResult] = {}
        for table in self._tables:
            if not self._probe.exists_table(connection, table.name):
                results[table.name] = Skipped(MISSING_TABLE)
                logger.info(
                    "cascade_table_skipped",
                    extra={"report_id": report_id, "table": table.name, "reason": MISSING_TABLE},
                )
                continue
            results[table.name] = self._delete_from(connection, table, report_id)

        result = CascadeResult(results)
        logger.info(
            "cascade_deletion_completed",
            extra={
                "report_id": report_id,
                "tables_processed": len(result.names_with(Processed)),
                "tables_skipped": len(result.names_with(Skipped)),
                "tables_failed": len(result.names_with(Failed)),
                "total_deleted": result.total_deleted,
            },
        )
        return result

    def _delete_from(
        self, connection: Connection, table: AuxiliaryTable, report_id: int
    ) -> TableResult:
        statement = table.delete_statement(self._probe.schema)
        try:
            with connection.begin_nested():
                deleted = connection.execute(statement, {"report_id": report_id}).rowcount
        except SQLAlchemyError as exc:
            message, error_type = _describe_error(exc)
            # Never escalated; the failure is carried in the outcome and the audit row.
            logger.warning(
                "cascade_table_failed",
                extra={
                    "report_id": report_id,
                    "table": table.name,
                    "error": message,
                    "error_type": error_type,
                },
            )
            return Failed(message, error_type)

        deleted = max(deleted or 0, 0)
        logger.debug(
            "cascade_table_processed",
            extra={"report_id": report_id, "table": table.name, "deleted_rows": deleted},
        )
        return Processed(deleted)
