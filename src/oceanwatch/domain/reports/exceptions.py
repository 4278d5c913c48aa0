"""Report deletion errors.

``message`` on each of these is short and client-safe; bulk results report
it verbatim per failed id. Details live in ``context`` and in the logs.
"""

from __future__ import annotations

from typing import Any

from oceanwatch.foundation.exceptions import ConflictError, InternalError, NotFoundError


class ReportNotFoundError(NotFoundError):
    """The report did not exist when read inside the deletion transaction."""

    def __init__(self, report_id: int) -> None:
        super().__init__("Report", report_id)
        self.message = "Report not found"


class ReportConflictError(ConflictError):
    """The report row vanished between our read and our delete."""

    def __init__(self, report_id: int) -> None:
        super().__init__("report was deleted concurrently", report_id=report_id)
        self.message = "Report was deleted concurrently"


class DeletionFailedError(InternalError):
    """Unexpected storage failure; the whole transaction was rolled back.

    Maps to HTTP 500. The underlying exception is chained as ``__cause__``
    and logged server-side, never rendered to the client.
    """

    error_code: str = "DELETION_FAILED"

    def __init__(self, report_id: int, stage: str, **context: Any) -> None:
        super().__init__(
            "Internal error while deleting report",
            {"report_id": report_id, "stage": stage, **context},
        )
        self.report_id = report_id
        self.stage = stage


class AuditWriteError(DeletionFailedError):
    """The deletion log row could not be written.

    An unaudited deletion counts as no deletion: the cascade and the report
    row delete are rolled back with it.
    """

    error_code: str = "AUDIT_WRITE_FAILED"

    def __init__(self, report_id: int) -> None:
        super().__init__(report_id, stage="audit_written")
