"""Report record read by the deletion path.

Reports are created and verified elsewhere; the deletion subsystem only
needs an immutable snapshot of the row it is about to destroy.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(frozen=True, slots=True)
class Report:
    """Snapshot of a ``reports`` row.

    Only ``id`` and ``event_type`` are guaranteed; every other column may be
    NULL in the store and is ``None`` here.
    """

    id: int
    event_type: str
    severity_level: str | None = None
    report_language: str | None = None
    brief_title: str | None = None
    description: str | None = None
    address: str | None = None
    image_url: str | None = None
    video_url: str | None = None
    user_id: int | None = None
    is_verified: bool | None = None
    verified_by: int | None = None
    verified_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> Report:
        """Build a Report from a result row mapping, ignoring unknown columns."""
        fields = cls.__dataclass_fields__
        return cls(**{key: value for key, value in row.items() if key in fields})

    @property
    def has_image(self) -> bool:
        return bool(self.image_url)

    @property
    def has_video(self) -> bool:
        return bool(self.video_url)

    @property
    def asset_references(self) -> tuple[str, ...]:
        """Non-empty image/video references, in that order."""
        return tuple(ref for ref in (self.image_url, self.video_url) if ref)

    def snapshot(self) -> dict[str, Any]:
        """JSON-safe copy of every field, datetimes as ISO 8601 strings."""
        data = asdict(self)
        for key, value in data.items():
            if isinstance(value, datetime):
                data[key] = value.isoformat()
        return data
