"""Admin REST API for permanent report deletion.

Authentication is handled by the hosting service: it overrides
``get_actor_id`` with its own principal resolver. The default reads the
acting admin's id from ``X-User-ID``.

Endpoints are sync so FastAPI runs each deletion in its threadpool.
"""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Header, HTTPException, Query, Request
from pydantic import BaseModel, ConfigDict, Field

from oceanwatch.domain.reports.bulk_deletion import BulkDeletionCoordinator
from oceanwatch.domain.reports.deletion_app import ReportDeletionService
from oceanwatch.domain.reports.infrastructure.deletion_stats import DeletionStatsRepository

router = APIRouter(prefix="/api/reports", tags=["reports"])


# -- Request models ------------------------------------------------------------


class BulkDeleteRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    # Element types are checked by the coordinator so bad ids yield a domain 400.
    report_ids: list[Any] = Field(alias="reportIds")
    reason: str | None = Field(default=None, max_length=1000)


# -- Dependencies --------------------------------------------------------------


def get_actor_id(x_user_id: Annotated[int | None, Header()] = None) -> int:
    if x_user_id is None:
        raise HTTPException(status_code=401, detail="Authentication required")
    return x_user_id


def get_deletion_service(request: Request) -> ReportDeletionService:
    return request.app.state.deletion_service


def get_bulk_coordinator(request: Request) -> BulkDeletionCoordinator:
    return request.app.state.bulk_deletion


def get_stats_repository(request: Request) -> DeletionStatsRepository:
    return request.app.state.deletion_stats


ActorId = Annotated[int, Depends(get_actor_id)]


# -- Endpoints -----------------------------------------------------------------


@router.delete("/{report_id}")
def delete_report(
    report_id: int,
    actor_id: ActorId,
    service: Annotated[ReportDeletionService, Depends(get_deletion_service)],
    reason: Annotated[str | None, Query(max_length=1000)] = None,
) -> dict[str, Any]:
    """Permanently delete one report and everything that references it."""
    outcome = service.delete_report(report_id, actor_id, reason=reason)
    return {
        "success": True,
        "message": "Report and all associated data deleted successfully",
        "data": outcome.to_dict(),
    }


@router.post("/bulk-delete")
def bulk_delete_reports(
    body: BulkDeleteRequest,
    actor_id: ActorId,
    coordinator: Annotated[BulkDeletionCoordinator, Depends(get_bulk_coordinator)],
) -> dict[str, Any]:
    """Delete several reports independently; partial success is still a 200."""
    outcome = coordinator.delete_many(body.report_ids, actor_id, reason=body.reason)
    summary = outcome.summary
    return {
        "success": True,
        "message": (
            f"Bulk deletion completed: {summary['successful']} successful, "
            f"{summary['failed']} failed"
        ),
        "data": outcome.to_dict(),
    }


@router.get("/deletions/stats")
def deletion_stats(
    actor_id: ActorId,
    repository: Annotated[DeletionStatsRepository, Depends(get_stats_repository)],
    days: Annotated[int, Query(ge=1, le=365)] = 30,
) -> dict[str, Any]:
    """Per-day deletion counts over the trailing ``days``."""
    return {"success": True, "data": repository.daily_counts(days).to_dict()}
