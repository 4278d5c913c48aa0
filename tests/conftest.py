"""Shared fixtures: a file-backed SQLite database shaped like the OceanWatch schema."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

import pytest
from sqlalchemy import func, inspect, insert, select, table, text

from oceanwatch.domain.reports.deletion_app import build_deletion_service
from oceanwatch.domain.reports.infrastructure.tables import reports_table
from oceanwatch.domain.reports.settings import DeletionSettings
from oceanwatch.infra.persistence.database import DatabaseManager, DatabaseSettings

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

    from sqlalchemy import Engine

    from oceanwatch.domain.reports.deletion_app import ReportDeletionService

REPORT_CREATED_AT = datetime(2026, 3, 14, 9, 30, tzinfo=UTC)


class Seeder:
    """Creates tables and rows directly, outside the code under test."""

    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    def report(self, report_id: int, **values: Any) -> None:
        row = {
            "id": report_id,
            "user_id": 7,
            "event_type": "oil_spill",
            "severity_level": "high",
            "brief_title": f"Report {report_id}",
            "phone_number": "+15550100",
            "created_at": REPORT_CREATED_AT,
            **values,
        }
        with self.engine.begin() as conn:
            conn.execute(insert(reports_table).values(**row))

    def auxiliary(self, name: str, foreign_key: str = "report_id") -> None:
        with self.engine.begin() as conn:
            conn.execute(
                text(f"CREATE TABLE {name} (id INTEGER PRIMARY KEY, {foreign_key} INTEGER)")
            )

    def dependents(self, name: str, report_id: int, count: int = 1) -> None:
        with self.engine.begin() as conn:
            for _ in range(count):
                conn.execute(
                    text(f"INSERT INTO {name} (report_id) VALUES (:report_id)"),
                    {"report_id": report_id},
                )

    def count(self, name: str, **where: Any) -> int:
        statement = select(func.count()).select_from(table(name))
        for column, value in where.items():
            statement = statement.where(text(f"{column} = :{column}").bindparams(**{column: value}))
        with self.engine.connect() as conn:
            return conn.execute(statement).scalar_one()

    def exists(self, name: str) -> bool:
        with self.engine.connect() as conn:
            return inspect(conn).has_table(name)


@pytest.fixture()
def database_settings(tmp_path: Path) -> DatabaseSettings:
    return DatabaseSettings(url=f"sqlite:///{tmp_path / 'oceanwatch.db'}")


@pytest.fixture()
def engine(database_settings: DatabaseSettings) -> Iterator[Engine]:
    """Engine with the ``reports`` table created; no auxiliary tables."""
    manager = DatabaseManager(database_settings)
    engine = manager.get_engine()
    reports_table.create(engine)
    yield engine
    manager.dispose()


@pytest.fixture()
def seeder(engine: Engine) -> Seeder:
    return Seeder(engine)


@pytest.fixture()
def uploads_dir(tmp_path: Path) -> Path:
    path = tmp_path / "uploads"
    path.mkdir()
    return path


@pytest.fixture()
def deletion_settings(uploads_dir: Path) -> DeletionSettings:
    return DeletionSettings(uploads_dir=uploads_dir)


@pytest.fixture()
def deletion_service(
    engine: Engine, deletion_settings: DeletionSettings
) -> ReportDeletionService:
    return build_deletion_service(engine, deletion_settings)
