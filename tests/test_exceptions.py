"""Unit tests for the foundation and report deletion exception hierarchies."""

from __future__ import annotations

import pytest

from oceanwatch.domain.reports.exceptions import (
    AuditWriteError,
    DeletionFailedError,
    ReportConflictError,
    ReportNotFoundError,
)
from oceanwatch.foundation.exceptions import (
    ConflictError,
    DomainError,
    InternalError,
    NotFoundError,
    ValidationError,
)


@pytest.mark.unit
class TestDomainError:
    def test_message_and_context(self) -> None:
        exc = DomainError("Operation failed", {"report_id": 12})
        assert exc.message == "Operation failed"
        assert exc.context == {"report_id": 12}
        assert exc.error_code == "DOMAIN_ERROR"

    def test_str_includes_context(self) -> None:
        exc = DomainError("Operation failed", {"report_id": 12})
        assert str(exc) == "Operation failed (report_id=12)"

    def test_str_without_context(self) -> None:
        assert str(DomainError("Operation failed")) == "Operation failed"

    def test_repr(self) -> None:
        assert repr(DomainError("x")) == "DomainError('x', context={})"


@pytest.mark.unit
class TestFoundationErrors:
    def test_not_found(self) -> None:
        exc = NotFoundError("Report", 42)
        assert exc.message == "Report not found: 42"
        assert exc.context == {"resource_type": "Report", "resource_id": 42}
        assert exc.error_code == "RESOURCE_NOT_FOUND"

    def test_validation(self) -> None:
        exc = ValidationError("report_id", "must be a positive integer", value="0")
        assert exc.field == "report_id"
        assert exc.reason == "must be a positive integer"
        assert exc.message == "Validation failed for 'report_id': must be a positive integer"
        assert exc.context["value"] == "0"

    def test_conflict(self) -> None:
        exc = ConflictError("row gone", report_id=3)
        assert exc.message == "Conflict: row gone"
        assert exc.context == {"report_id": 3}
        assert exc.error_code == "CONFLICT"

    def test_internal(self) -> None:
        exc = InternalError("Something broke")
        assert exc.error_code == "INTERNAL_ERROR"
        assert isinstance(exc, DomainError)


@pytest.mark.unit
class TestReportErrors:
    def test_not_found_has_short_message(self) -> None:
        exc = ReportNotFoundError(999)
        assert isinstance(exc, NotFoundError)
        assert exc.message == "Report not found"
        assert exc.context["resource_id"] == 999

    def test_conflict(self) -> None:
        exc = ReportConflictError(5)
        assert isinstance(exc, ConflictError)
        assert exc.message == "Report was deleted concurrently"
        assert exc.context == {"report_id": 5}

    def test_deletion_failed(self) -> None:
        exc = DeletionFailedError(5, stage="cascade_processing")
        assert isinstance(exc, InternalError)
        assert exc.error_code == "DELETION_FAILED"
        assert exc.message == "Internal error while deleting report"
        assert exc.report_id == 5
        assert exc.stage == "cascade_processing"

    def test_audit_write_is_a_deletion_failure(self) -> None:
        exc = AuditWriteError(5)
        assert isinstance(exc, DeletionFailedError)
        assert exc.error_code == "AUDIT_WRITE_FAILED"
        assert exc.stage == "audit_written"
        assert exc.message == "Internal error while deleting report"
