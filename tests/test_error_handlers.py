"""Unit tests for oceanwatch.infra.fastapi.error_handlers."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from oceanwatch.domain.reports.exceptions import (
    AuditWriteError,
    DeletionFailedError,
    ReportConflictError,
    ReportNotFoundError,
)
from oceanwatch.foundation.exceptions import DomainError, ValidationError
from oceanwatch.infra.fastapi.error_handlers import (
    PROBLEM_MEDIA_TYPE,
    ProblemDetail,
    _is_sensitive_key,
    _sanitize_context,
    _sanitize_value,
    register_exception_handlers,
)


def _client_raising(exc: Exception) -> TestClient:
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/api/reports/{report_id}")
    def endpoint(report_id: int) -> None:
        raise exc

    return TestClient(app, raise_server_exceptions=False)


class TestProblemDetail:
    @pytest.mark.unit
    def test_exclude_none_serialization(self) -> None:
        problem = ProblemDetail(type="/errors/test", title="Test", status=400, detail="d")
        assert problem.model_dump(exclude_none=True) == {
            "type": "/errors/test",
            "title": "Test",
            "status": 400,
            "detail": "d",
        }


class TestSanitization:
    @pytest.mark.unit
    def test_sanitize_context_none_and_empty(self) -> None:
        assert _sanitize_context(None) is None
        assert _sanitize_context({}) is None

    @pytest.mark.unit
    def test_strips_sensitive_keys(self) -> None:
        result = _sanitize_context({"report_id": 4, "password": "x", "token": "y"})
        assert result == {"report_id": 4}

    @pytest.mark.unit
    def test_redacts_connection_strings(self) -> None:
        result = _sanitize_value("postgresql+psycopg://admin:pw@db:5432/oceanwatch")
        assert "admin:pw" not in result
        assert "REDACTED" in result

    @pytest.mark.unit
    def test_datetime_to_isoformat(self) -> None:
        dt = datetime(2026, 10, 19, 8, 0)
        assert _sanitize_value(dt) == dt.isoformat()

    @pytest.mark.unit
    def test_nested_and_lists(self) -> None:
        result = _sanitize_context({"outer": {"secret": "s", "ok": [1, "two"]}})
        assert result == {"outer": {"ok": [1, "two"]}}

    @pytest.mark.unit
    def test_non_serializable_stringified(self) -> None:
        assert _sanitize_value(Path("/srv/uploads/a.jpg")) == "/srv/uploads/a.jpg"

    @pytest.mark.unit
    def test_is_sensitive_key(self) -> None:
        assert _is_sensitive_key("API_KEY") is True
        assert _is_sensitive_key("report_id") is False


class TestDomainErrorHandlers:
    @pytest.mark.unit
    def test_not_found_is_404(self) -> None:
        resp = _client_raising(ReportNotFoundError(999)).get("/api/reports/999")
        assert resp.status_code == 404
        body = resp.json()
        assert body["type"] == "/errors/not-found"
        assert body["detail"] == "Report not found"
        assert body["error_code"] == "RESOURCE_NOT_FOUND"
        assert body["instance"] == "/api/reports/999"
        assert PROBLEM_MEDIA_TYPE in resp.headers["content-type"]

    @pytest.mark.unit
    def test_validation_is_400(self) -> None:
        exc = ValidationError("report_id", "must be a positive integer")
        resp = _client_raising(exc).get("/api/reports/0")
        assert resp.status_code == 400
        body = resp.json()
        assert body["error_code"] == "VALIDATION_ERROR"
        assert body["context"]["field"] == "report_id"

    @pytest.mark.unit
    def test_conflict_is_409(self) -> None:
        resp = _client_raising(ReportConflictError(3)).get("/api/reports/3")
        assert resp.status_code == 409
        assert resp.json()["detail"] == "Report was deleted concurrently"

    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("exc", "error_code"),
        [
            (DeletionFailedError(3, stage="cascade_processing"), "DELETION_FAILED"),
            (AuditWriteError(3), "AUDIT_WRITE_FAILED"),
        ],
    )
    def test_internal_is_500_without_context(self, exc: Exception, error_code: str) -> None:
        resp = _client_raising(exc).get("/api/reports/3")
        assert resp.status_code == 500
        body = resp.json()
        assert body["detail"] == "Internal error while deleting report"
        assert body["error_code"] == error_code
        assert "context" not in body

    @pytest.mark.unit
    def test_other_domain_error_is_400(self) -> None:
        resp = _client_raising(DomainError("nope", {"k": "v"})).get("/api/reports/1")
        assert resp.status_code == 400
        assert resp.json()["type"] == "/errors/domain-error"

    @pytest.mark.unit
    def test_unmapped_domain_subclass_uses_fallback(self) -> None:
        class ReportLockedError(DomainError):
            error_code = "REPORT_LOCKED"

        exc = ReportLockedError("Report is locked", {"report_id": 4, "api_key": "k"})
        resp = _client_raising(exc).get("/api/reports/4")

        assert resp.status_code == 400
        assert PROBLEM_MEDIA_TYPE in resp.headers["content-type"]
        body = resp.json()
        assert body["type"] == "/errors/domain-error"
        assert body["detail"] == "Report is locked"
        assert body["error_code"] == "REPORT_LOCKED"
        assert body["instance"] == "/api/reports/4"
        assert body["context"] == {"report_id": 4}


class TestFrameworkErrors:
    @pytest.mark.unit
    def test_request_validation_is_400(self) -> None:
        resp = _client_raising(RuntimeError()).get("/api/reports/abc")
        assert resp.status_code == 400
        body = resp.json()
        assert body["error_code"] == "REQUEST_VALIDATION_ERROR"
        assert body["context"]["errors"][0]["loc"] == ["path", "report_id"]

    @pytest.mark.unit
    def test_unhandled_is_sanitized(self) -> None:
        resp = _client_raising(RuntimeError("password=hunter2")).get("/api/reports/1")
        assert resp.status_code == 500
        body: dict[str, Any] = resp.json()
        assert body["detail"] == "An internal error occurred."
        assert "hunter2" not in resp.text

