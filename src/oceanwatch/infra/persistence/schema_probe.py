"""Runtime catalog checks for optional tables.

Deployments carry different subsets of the auxiliary tables, and the schema
can change underneath a long-running process, so existence is looked up in
the catalog on every call. Nothing is cached between calls.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from sqlalchemy import inspect

if TYPE_CHECKING:
    from sqlalchemy import Connection

logger = logging.getLogger(__name__)

_IDENTIFIER_PATTERN = re.compile(r"^[a-z_][a-z0-9_]*$")


def validate_identifier(name: str, label: str = "identifier") -> str:
    """Validate that a string is a safe SQL identifier.

    Args:
        name: The identifier to validate.
        label: Human-readable label for error messages.

    Returns:
        The validated identifier.

    Raises:
        ValueError: If the identifier contains unsafe characters.
    """
    if not _IDENTIFIER_PATTERN.fullmatch(name):
        msg = (
            f"Invalid SQL {label}: {name!r}. "
            "Must match [a-z_][a-z0-9_]* (lowercase, no special characters)."
        )
        raise ValueError(msg)
    return name


class SchemaProbe:
    """Checks whether a named table exists in the current schema.

    Args:
        schema: Schema to search. ``None`` means the connection's default
            schema (``public`` on PostgreSQL, ``main`` on SQLite).
    """

    def __init__(self, schema: str | None = None) -> None:
        self._schema = schema

    @property
    def schema(self) -> str | None:
        return self._schema

    def exists_table(self, connection: Connection, name: str) -> bool:
        """Return True if ``name`` exists, querying the catalog on ``connection``.

        A new inspector is created per call; SQLAlchemy inspectors memoize
        reflection results for their own lifetime only.
        """
        exists = inspect(connection).has_table(name, schema=self._schema)
        logger.debug(
            "schema_probe",
            extra={"table": name, "schema": self._schema, "exists": exists},
        )
        return exists
