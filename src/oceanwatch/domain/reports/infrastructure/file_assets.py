"""Best-effort removal of uploaded report assets.

Runs after the database commit. Failures are logged and reported back but
never undo the deletion.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING
from urllib.parse import urlsplit

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FileCleanupResult:
    removed: tuple[str, ...] = ()
    missing: tuple[str, ...] = ()
    failed: tuple[str, ...] = ()


class FileAssetCleaner:
    """Deletes asset files referenced by a report from ``uploads_dir``.

    References may be paths (``/uploads/x.jpg``) or URLs
    (``https://host/uploads/x.jpg``). Only the final path component is
    used, so a reference can never point outside ``uploads_dir``.
    """

    def __init__(self, uploads_dir: Path | str) -> None:
        self._uploads_dir = Path(uploads_dir)

    @property
    def uploads_dir(self) -> Path:
        return self._uploads_dir

    def resolve(self, reference: str) -> Path | None:
        """Map an asset reference to its file under ``uploads_dir``.

        Args:
            reference: Stored ``image_url`` or ``video_url`` value.

        Returns:
            The file path, or None if the reference has no usable file name
            or cannot be parsed.
        """
        try:
            path = urlsplit(reference).path
        except ValueError:
            return None
        if not path or path.endswith("/"):
            return None
        name = PurePosixPath(path).name
        if name in {"", ".", ".."}:
            return None
        return self._uploads_dir / name

    def remove(self, references: Iterable[str]) -> FileCleanupResult:
        """Unlink each referenced file; never raises.

        Args:
            references: Asset references of a report that is already deleted.

        Returns:
            FileCleanupResult listing removed, already-absent and failed files.
        """
        removed: list[str] = []
        missing: list[str] = []
        failed: list[str] = []
        for reference in references:
            path = self.resolve(reference)
            if path is None:
                logger.warning("asset_reference_unresolvable", extra={"reference": reference})
                failed.append(reference)
                continue
            try:
                path.unlink()
            except FileNotFoundError:
                logger.info("asset_already_absent", extra={"path": str(path)})
                missing.append(str(path))
            except (OSError, ValueError) as exc:
                # ValueError: the path contains a NUL byte.
                logger.warning(
                    "asset_removal_failed",
                    extra={"path": str(path), "error": str(exc)},
                )
                failed.append(str(path))
            else:
                logger.info("asset_removed", extra={"path": str(path)})
                removed.append(str(path))
        return FileCleanupResult(tuple(removed), tuple(missing), tuple(failed))
