"""Bulk report deletion.

Fans a list of ids out to ``ReportDeletionService.delete_report``, one
transaction per id. There is no cross-report atomicity: a failed id is
recorded and the run moves on.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from oceanwatch.domain.reports.deletion_app import validate_actor_id, validate_report_id
from oceanwatch.domain.reports.exceptions import DeletionFailedError
from oceanwatch.domain.reports.outcomes import BulkDeletionOutcome, BulkFailure
from oceanwatch.foundation.exceptions import DomainError, ValidationError

if TYPE_CHECKING:
    from oceanwatch.domain.reports.deletion_app import ReportDeletionService

logger = logging.getLogger(__name__)

_INTERNAL_ERROR = "Internal error while deleting report"


def validate_report_ids(value: Any) -> list[int]:
    """Check the whole batch before any deletion runs.

    Raises:
        ValidationError: If ``value`` is not a non-empty sequence of
            positive integers.
    """
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
        raise ValidationError("report_ids", "must be a non-empty array")
    if not value:
        raise ValidationError("report_ids", "must be a non-empty array")
    try:
        return [validate_report_id(item, f"report_ids[{i}]") for i, item in enumerate(value)]
    except ValidationError as exc:
        raise ValidationError(
            "report_ids", "all report IDs must be positive integers", invalid=exc.field
        ) from exc


class BulkDeletionCoordinator:
    """Runs independent single-report deletions over a list of ids.

    Deletions run sequentially, so no two of them ever share a connection.
    """

    def __init__(self, deleter: ReportDeletionService) -> None:
        self._deleter = deleter

    def delete_many(
        self,
        report_ids: Any,
        actor_id: Any,
        *,
        reason: str | None = None,
    ) -> BulkDeletionOutcome:
        """Delete each report in ``report_ids`` independently.

        Args:
            report_ids: Non-empty sequence of positive integer ids.
            actor_id: Id of the admin performing the deletions.
            reason: Optional justification stored with every audit row.

        Returns:
            BulkDeletionOutcome; ``summary.total == len(report_ids)``.

        Raises:
            ValidationError: On malformed input, before any deletion.
        """
        ids = validate_report_ids(report_ids)
        actor_id = validate_actor_id(actor_id)
        logger.info("bulk_deletion_started", extra={"count": len(ids), "actor_id": actor_id})

        outcome = BulkDeletionOutcome()
        for report_id in ids:
            try:
                outcome.successful.append(
                    self._deleter.delete_report(report_id, actor_id, reason=reason)
                )
            except DeletionFailedError:
                outcome.failed.append(BulkFailure(report_id, _INTERNAL_ERROR))
            except DomainError as exc:
                outcome.failed.append(BulkFailure(report_id, exc.message))
            except Exception:
                logger.exception(
                    "bulk_deletion_item_crashed",
                    extra={"report_id": report_id, "actor_id": actor_id},
                )
                outcome.failed.append(BulkFailure(report_id, _INTERNAL_ERROR))

        logger.info("bulk_deletion_completed", extra={"actor_id": actor_id, **outcome.summary})
        return outcome
