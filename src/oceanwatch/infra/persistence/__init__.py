"""OceanWatch Infra Persistence: engine lifecycle and schema probing."""

from oceanwatch.infra.persistence.database import DatabaseManager, DatabaseSettings
from oceanwatch.infra.persistence.schema_probe import SchemaProbe, validate_identifier

__all__ = [
    "DatabaseManager",
    "DatabaseSettings",
    "SchemaProbe",
    "validate_identifier",
]
