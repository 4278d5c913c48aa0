"""Read-only deletion statistics for the admin dashboard."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, date, datetime, timedelta
from typing import TYPE_CHECKING, Any

from sqlalchemy import func, select

from oceanwatch.domain.reports.infrastructure.tables import deletion_logs_table
from oceanwatch.infra.persistence.schema_probe import SchemaProbe

if TYPE_CHECKING:
    from sqlalchemy import Engine


@dataclass(frozen=True, slots=True)
class DailyDeletionCount:
    day: str
    count: int


@dataclass(frozen=True, slots=True)
class DeletionStats:
    days: int
    total_deletions: int = 0
    admin_count: int = 0
    daily: list[DailyDeletionCount] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "days": self.days,
            "totalDeletions": self.total_deletions,
            "adminCount": self.admin_count,
            "daily": [{"date": d.day, "count": d.count} for d in self.daily],
        }


class DeletionStatsRepository:
    """Aggregates ``deletion_logs`` over a trailing window.

    Args:
        engine: Engine to read from.
        probe: Used to return empty stats before the first deletion has
            created the log table.
    """

    def __init__(self, engine: Engine, probe: SchemaProbe | None = None) -> None:
        self._engine = engine
        self._probe = probe or SchemaProbe()

    def daily_counts(self, days: int = 30) -> DeletionStats:
        if days < 1:
            msg = f"days must be positive, got {days}"
            raise ValueError(msg)

        table = deletion_logs_table
        since = datetime.now(UTC) - timedelta(days=days)
        day = func.date(table.c.deleted_at).label("day")

        with self._engine.connect() as conn:
            if not self._probe.exists_table(conn, table.name):
                return DeletionStats(days=days)

            totals = conn.execute(
                select(
                    func.count().label("total"),
                    func.count(table.c.deleted_by_admin_id.distinct()).label("admins"),
                ).where(table.c.deleted_at >= since)
            ).one()
            rows = conn.execute(
                select(day, func.count().label("deletions"))
                .where(table.c.deleted_at >= since)
                .group_by(day)
                .order_by(day.desc())
            ).all()

        return DeletionStats(
            days=days,
            total_deletions=totals.total,
            admin_count=totals.admins,
            daily=[DailyDeletionCount(_day_str(row.day), row.deletions) for row in rows],
        )


def _day_str(value: date | str) -> str:
    # PostgreSQL returns a date, SQLite an ISO string.
    return value.isoformat() if isinstance(value, date) else str(value)
