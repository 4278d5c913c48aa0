"""Tests for CascadeDeletionService against a real SQLite transaction."""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import MagicMock

import pytest

from oceanwatch.domain.reports.infrastructure.cascade_deletion import (
    AUXILIARY_TABLES,
    AuxiliaryTable,
    CascadeDeletionService,
)
from oceanwatch.domain.reports.outcomes import Failed, Processed, Skipped
from oceanwatch.infra.persistence.schema_probe import SchemaProbe

if TYPE_CHECKING:
    from sqlalchemy import Engine

    from tests.conftest import Seeder


@pytest.mark.unit
class TestAuxiliaryTable:
    def test_default_foreign_key(self) -> None:
        assert AuxiliaryTable("map_markers").foreign_key == "report_id"

    def test_rejects_unsafe_name(self) -> None:
        with pytest.raises(ValueError, match="table_name"):
            AuxiliaryTable("map_markers; DROP TABLE reports")

    def test_rejects_unsafe_foreign_key(self) -> None:
        with pytest.raises(ValueError, match="foreign_key"):
            AuxiliaryTable("map_markers", foreign_key="report id")

    def test_delete_statement(self) -> None:
        statement = AuxiliaryTable("analytics").delete_statement()
        assert str(statement) == "DELETE FROM analytics WHERE report_id = :report_id"

    def test_delete_statement_with_schema(self) -> None:
        statement = AuxiliaryTable("analytics").delete_statement("reporting")
        assert str(statement) == "DELETE FROM reporting.analytics WHERE report_id = :report_id"

    def test_default_allow_list(self) -> None:
        assert [t.name for t in AUXILIARY_TABLES] == [
            "map_markers",
            "analytics_daily",
            "analytics",
            "metrics_cache",
            "activity_logs",
            "report_analytics",
            "report_metrics",
        ]


@pytest.mark.unit
class TestCascadeDeletionServiceConstruction:
    def test_rejects_duplicate_tables(self) -> None:
        tables = [AuxiliaryTable("analytics"), AuxiliaryTable("analytics")]
        with pytest.raises(ValueError, match="Duplicate auxiliary tables: analytics"):
            CascadeDeletionService(tables)

    def test_defaults(self) -> None:
        assert CascadeDeletionService().tables == AUXILIARY_TABLES

    def test_missing_tables_never_touched(self) -> None:
        probe = MagicMock(spec=SchemaProbe)
        probe.exists_table.return_value = False
        connection = MagicMock()

        result = CascadeDeletionService(probe=probe).delete_dependents(connection, 1)

        connection.execute.assert_not_called()
        connection.begin_nested.assert_not_called()
        assert result.names_with(Skipped) == [t.name for t in AUXILIARY_TABLES]


@pytest.mark.integration
class TestDeleteDependents:
    def test_deletes_only_rows_for_the_report(self, engine: Engine, seeder: Seeder) -> None:
        seeder.auxiliary("map_markers")
        seeder.auxiliary("activity_logs")
        seeder.dependents("map_markers", report_id=1, count=2)
        seeder.dependents("map_markers", report_id=2)
        seeder.dependents("activity_logs", report_id=1, count=3)

        with engine.begin() as conn:
            result = CascadeDeletionService().delete_dependents(conn, 1)

        assert result.tables["map_markers"] == Processed(2)
        assert result.tables["activity_logs"] == Processed(3)
        assert result.total_deleted == 5
        assert seeder.count("map_markers", report_id=1) == 0
        assert seeder.count("map_markers", report_id=2) == 1
        assert seeder.count("activity_logs") == 0

    def test_every_allow_listed_table_reported_in_order(
        self, engine: Engine, seeder: Seeder
    ) -> None:
        seeder.auxiliary("analytics")

        with engine.begin() as conn:
            result = CascadeDeletionService().delete_dependents(conn, 1)

        assert list(result.tables) == [t.name for t in AUXILIARY_TABLES]
        assert result.tables["analytics"] == Processed(0)
        assert result.tables["map_markers"] == Skipped("missing")

    def test_failing_table_isolated_by_savepoint(self, engine: Engine, seeder: Seeder) -> None:
        seeder.auxiliary("map_markers")
        seeder.auxiliary("analytics", foreign_key="hazard_id")
        seeder.auxiliary("report_metrics")
        seeder.dependents("map_markers", report_id=1)
        seeder.dependents("report_metrics", report_id=1)

        with engine.begin() as conn:
            result = CascadeDeletionService().delete_dependents(conn, 1)

        failed = result.tables["analytics"]
        assert isinstance(failed, Failed)
        assert failed.error_type == "OperationalError"
        assert "report_id" in failed.error
        assert result.tables["map_markers"] == Processed(1)
        assert result.tables["report_metrics"] == Processed(1)
        assert seeder.count("map_markers") == 0
        assert seeder.count("report_metrics") == 0

    def test_custom_foreign_key(self, engine: Engine, seeder: Seeder) -> None:
        seeder.auxiliary("hazard_links", foreign_key="hazard_id")
        with engine.begin() as conn:
            conn.exec_driver_sql("INSERT INTO hazard_links (hazard_id) VALUES (4)")

        service = CascadeDeletionService([AuxiliaryTable("hazard_links", "hazard_id")])
        with engine.begin() as conn:
            result = service.delete_dependents(conn, 4)

        assert result.tables == {"hazard_links": Processed(1)}
