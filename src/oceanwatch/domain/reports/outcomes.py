"""Value objects returned by the deletion operations.

Per-table cascade results are a closed set of variants::

    TableResult = Processed | Skipped | Failed

so a caller can see exactly what happened to every auxiliary table without
reading logs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Any, ClassVar

if TYPE_CHECKING:
    from datetime import datetime


class DeletionStage(StrEnum):
    """Progress of a single report deletion."""

    IDLE = "idle"
    VALIDATING = "validating"
    TRANSACTION_OPEN = "transaction_open"
    CASCADE_PROCESSING = "cascade_processing"
    REPORT_ROW_DELETED = "report_row_deleted"
    AUDIT_WRITTEN = "audit_written"
    COMMITTED = "committed"
    FILE_CLEANUP = "file_cleanup"
    DONE = "done"


@dataclass(frozen=True, slots=True)
class Processed:
    """The table existed and ``deleted_rows`` rows referencing the report were removed."""

    deleted_rows: int
    status: ClassVar[str] = "processed"

    def to_dict(self) -> dict[str, Any]:
        return {"status": self.status, "deleted_rows": self.deleted_rows}


@dataclass(frozen=True, slots=True)
class Skipped:
    """The table was not touched, e.g. because this deployment lacks it."""

    reason: str
    status: ClassVar[str] = "skipped"

    def to_dict(self) -> dict[str, Any]:
        return {"status": self.status, "reason": self.reason}


@dataclass(frozen=True, slots=True)
class Failed:
    """The delete against an existing table raised; its savepoint was rolled back."""

    error: str
    error_type: str = "Exception"
    status: ClassVar[str] = "failed"

    def to_dict(self) -> dict[str, Any]:
        return {"status": self.status, "error": self.error, "error_type": self.error_type}


TableResult = Processed | Skipped | Failed

MISSING_TABLE = "missing"


@dataclass(frozen=True, slots=True)
class CascadeResult:
    """Ordered per-table results of one cascade run."""

    tables: dict[str, TableResult] = field(default_factory=dict)

    @property
    def total_deleted(self) -> int:
        return sum(r.deleted_rows for r in self.tables.values() if isinstance(r, Processed))

    def names_with(self, kind: type[Processed | Skipped | Failed]) -> list[str]:
        return [name for name, result in self.tables.items() if isinstance(result, kind)]

    def to_dict(self) -> dict[str, dict[str, Any]]:
        return {name: result.to_dict() for name, result in self.tables.items()}


@dataclass(frozen=True, slots=True)
class DeletionOutcome:
    """Result of a successful ``delete_report`` call."""

    report_id: int
    deleted_at: datetime
    deleted_by: int
    cascade: CascadeResult
    files_removed: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "reportId": self.report_id,
            "deletedAt": self.deleted_at.isoformat(),
            "deletedBy": self.deleted_by,
            "tables": self.cascade.to_dict(),
            "totalDeleted": self.cascade.total_deleted,
            "filesRemoved": list(self.files_removed),
        }


@dataclass(frozen=True, slots=True)
class BulkFailure:
    """One id that could not be deleted during a bulk run."""

    id: Any
    error: str

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "error": self.error}


@dataclass(frozen=True, slots=True)
class BulkDeletionOutcome:
    """Aggregated per-id results of ``delete_many``.

    ``len(successful) + len(failed) == total``.
    """

    successful: list[DeletionOutcome] = field(default_factory=list)
    failed: list[BulkFailure] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.successful) + len(self.failed)

    @property
    def summary(self) -> dict[str, int]:
        return {
            "total": self.total,
            "successful": len(self.successful),
            "failed": len(self.failed),
        }

    def to_dict(self) -> dict[str, Any]:
        return {
            "summary": self.summary,
            "successful": [outcome.to_dict() for outcome in self.successful],
            "failed": [failure.to_dict() for failure in self.failed],
        }
