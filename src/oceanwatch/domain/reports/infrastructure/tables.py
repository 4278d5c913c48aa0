"""SQLAlchemy Core table definitions used by the deletion subsystem.

``reports`` is owned by the reporting and verification workflows; it is
declared here only as the column contract the deletion path reads. The
geospatial ``location`` column belongs to the map layer and is not mirrored.

``deletion_logs`` is owned entirely by the audit logger, which creates it on
first use.
"""

from __future__ import annotations

from sqlalchemy import (
    JSON,
    BigInteger,
    Boolean,
    Column,
    DateTime,
    Integer,
    MetaData,
    String,
    Table,
    Text,
)
from sqlalchemy.dialects.postgresql import JSONB

metadata = MetaData()

_JSON = JSON().with_variant(JSONB(), "postgresql")

reports_table = Table(
    "reports",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("user_id", Integer, nullable=True),
    Column("event_type", String(100), nullable=False),
    Column("severity_level", String(50), nullable=True),
    Column("report_language", String(10), nullable=True),
    Column("brief_title", String(255), nullable=True),
    Column("description", Text, nullable=True),
    Column("image_url", String(255), nullable=True),
    Column("video_url", String(255), nullable=True),
    Column("phone_number", String(20), nullable=True),
    Column("address", Text, nullable=True),
    Column("is_verified", Boolean, nullable=True),
    Column("verified_by", Integer, nullable=True),
    Column("verified_at", DateTime(timezone=True), nullable=True),
    Column("created_at", DateTime(timezone=True), nullable=True),
    Column("updated_at", DateTime(timezone=True), nullable=True),
)

deletion_logs_table = Table(
    "deletion_logs",
    metadata,
    Column("id", BigInteger().with_variant(Integer, "sqlite"), primary_key=True),
    Column("report_id", Integer, nullable=False, index=True),
    Column("original_user_id", Integer, nullable=True),
    Column("deleted_by_admin_id", Integer, nullable=False),
    Column("event_type", String(100), nullable=True),
    Column("deletion_reason", Text, nullable=True),
    Column("original_created_at", DateTime(timezone=True), nullable=True),
    Column("deleted_at", DateTime(timezone=True), nullable=False, index=True),
    Column("report_data", _JSON, nullable=True),
    Column("metadata", _JSON, nullable=True),
)
