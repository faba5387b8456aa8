"""SQLAlchemy table definitions for the datasets catalog.

Identifier and text columns are unbounded strings. Object size is kept as a
decimal string so no integer width limits apply.
"""

from sqlalchemy import (
    Column,
    Index,
    Integer,
    LargeBinary,
    MetaData,
    String,
    Table,
    UniqueConstraint,
)

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# OBJECTS TABLE (system metadata, one row per minted PID)
# ============================================================================
objects_table = Table(
    "objects",
    metadata,
    Column("seq", Integer, primary_key=True, autoincrement=True),  # insertion order
    Column("id", String, nullable=False),
    Column("date_added", String, nullable=False),  # ISO-8601 UTC, see model.dates
    Column("serial_number", Integer, nullable=False),
    Column("format", String, nullable=False),
    Column("size", String, nullable=False),
    Column("checksum", String, nullable=False),
    Column("algorithm", String, nullable=False),
    UniqueConstraint("id", name="uq_objects_id"),
)

Index("idx_objects_date_added", objects_table.c.date_added)
Index("idx_objects_format", objects_table.c.format)


# ============================================================================
# LOCATION TABLES (PID -> DAP URL that returns the bytes)
# ============================================================================
sdo_locations_table = Table(
    "sdo_locations",
    metadata,
    Column("seq", Integer, primary_key=True, autoincrement=True),
    Column("id", String, nullable=False),
    Column("fetch_url", String, nullable=False),
)

Index("idx_sdo_locations_id", sdo_locations_table.c.id)

smo_locations_table = Table(
    "smo_locations",
    metadata,
    Column("seq", Integer, primary_key=True, autoincrement=True),
    Column("id", String, nullable=False),
    Column("fetch_url", String, nullable=False),
)

Index("idx_smo_locations_id", smo_locations_table.c.id)


# ============================================================================
# AGGREGATIONS TABLE (ORE PID -> SMO/SDO PIDs and the stored resource map)
# ============================================================================
aggregations_table = Table(
    "aggregations",
    metadata,
    Column("seq", Integer, primary_key=True, autoincrement=True),
    Column("id", String, nullable=False),
    Column("sdo_id", String, nullable=False),
    Column("smo_id", String, nullable=False),
    Column("document", LargeBinary, nullable=False),
)

Index("idx_aggregations_id", aggregations_table.c.id)


# ============================================================================
# DATASETS TABLE (base URL -> current PID triple; the only mutable rows)
# ============================================================================
datasets_table = Table(
    "datasets",
    metadata,
    Column("seq", Integer, primary_key=True, autoincrement=True),
    Column("base_url", String, nullable=False),
    Column("sdo_id", String, nullable=False),
    Column("smo_id", String, nullable=False),
    Column("ore_id", String, nullable=False),
    UniqueConstraint("base_url", name="uq_datasets_base_url"),
)


# ============================================================================
# OBSOLETES TABLE (new_id supersedes previous_id)
# ============================================================================
obsoletes_table = Table(
    "obsoletes",
    metadata,
    Column("seq", Integer, primary_key=True, autoincrement=True),
    Column("new_id", String, nullable=False),
    Column("previous_id", String, nullable=False),
    UniqueConstraint("new_id", name="uq_obsoletes_new_id"),
    UniqueConstraint("previous_id", name="uq_obsoletes_previous_id"),
)

TABLE_NAMES: frozenset[str] = frozenset(metadata.tables)
