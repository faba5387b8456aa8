"""SQL implementation of CatalogRepository."""

import logging
from collections.abc import Sequence
from datetime import datetime
from typing import Any

from sqlalchemy import ColumnElement, Row, Table, func, insert, or_, select, update
from sqlalchemy.engine import Connection, CursorResult
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.sql.expression import Executable

from dapd1.domain.catalog.model.dates import ceil_to_millisecond, format_timestamp
from dapd1.domain.catalog.model.entity import (
    AggregationRecord,
    CatalogDump,
    DatasetPointer,
    LocationRecord,
    ObjectRecord,
    ObsoletesEdge,
)
from dapd1.domain.catalog.model.value import ArtifactKind
from dapd1.domain.catalog.port.repository import CatalogRepository
from dapd1.domain.shared.error import (
    CorruptCatalogError,
    NotFoundError,
    StorageUnavailableError,
)
from dapd1.infrastructure.persistence.mappers.catalog import (
    aggregation_to_dict,
    dataset_to_dict,
    location_to_dict,
    object_record_to_dict,
    obsoletes_to_dict,
    row_to_aggregation,
    row_to_dataset,
    row_to_location,
    row_to_object_record,
    row_to_obsoletes,
)
from dapd1.infrastructure.persistence.tables import (
    aggregations_table,
    datasets_table,
    objects_table,
    obsoletes_table,
    sdo_locations_table,
    smo_locations_table,
)

logger = logging.getLogger(__name__)

OBJECT_FIELDS: frozenset[str] = frozenset(c.name for c in objects_table.columns) - {"seq"}

_LOCATION_TABLES: dict[ArtifactKind, Table] = {
    ArtifactKind.SDO: sdo_locations_table,
    ArtifactKind.SMO: smo_locations_table,
}


class SqlCatalogRepository(CatalogRepository):
    """Catalog tables over a single SQLAlchemy connection.

    Nothing here commits; writes become visible when the caller's unit of
    work commits.
    """

    def __init__(self, connection: Connection) -> None:
        self.connection = connection

    def _execute(self, stmt: Executable) -> CursorResult[Any]:
        try:
            return self.connection.execute(stmt)
        except IntegrityError as e:
            logger.error("Catalog integrity violation: %s", e.orig)
            raise CorruptCatalogError(f"Catalog integrity violation: {e.orig}") from e
        except OperationalError as e:
            logger.error("Catalog query failed: %s", e.orig)
            raise StorageUnavailableError(f"Catalog query failed: {e.orig}") from e

    @staticmethod
    def _exactly_one(rows: Sequence[Row[Any]], what: str, pid: str) -> Row[Any]:
        if not rows:
            raise NotFoundError(f"Did not find {what} for '{pid}'")
        if len(rows) > 1:
            raise CorruptCatalogError(f"Corrupt catalog. Found more than one {what} for '{pid}'")
        return rows[0]

    @staticmethod
    def _at_most_one(rows: Sequence[Row[Any]], what: str, pid: str) -> Row[Any] | None:
        if len(rows) > 1:
            raise CorruptCatalogError(f"Corrupt catalog. Found more than one {what} for '{pid}'")
        return rows[0] if rows else None

    # =========================================================================
    # Writes
    # =========================================================================

    def add_object(self, record: ObjectRecord) -> None:
        self._execute(insert(objects_table).values(**object_record_to_dict(record)))

    def add_location(self, location: LocationRecord) -> None:
        table = _LOCATION_TABLES.get(location.kind)
        if table is None:
            raise ValueError(f"no location table for {location.kind.value} PIDs")
        self._execute(insert(table).values(**location_to_dict(location)))

    def add_aggregation(self, aggregation: AggregationRecord) -> None:
        self._execute(insert(aggregations_table).values(**aggregation_to_dict(aggregation)))

    def add_obsoletes(self, edge: ObsoletesEdge) -> None:
        self._execute(insert(obsoletes_table).values(**obsoletes_to_dict(edge)))

    def add_dataset(self, pointer: DatasetPointer) -> None:
        self._execute(insert(datasets_table).values(**dataset_to_dict(pointer)))

    def update_dataset(self, pointer: DatasetPointer) -> None:
        stmt = (
            update(datasets_table)
            .where(datasets_table.c.base_url == pointer.base_url)
            .values(sdo_id=pointer.sdo_id, smo_id=pointer.smo_id, ore_id=pointer.ore_id)
        )
        result = self._execute(stmt)
        if result.rowcount == 0:
            raise NotFoundError(f"The URL '{pointer.base_url}' was not in the catalog")
        if result.rowcount > 1:
            raise CorruptCatalogError(f"Found more than one dataset row for '{pointer.base_url}'")

    # =========================================================================
    # Point lookups
    # =========================================================================

    def get_object_field(self, pid: str, field: str) -> Any:
        """Return one column of the object row for ``pid``, as stored."""
        if field not in OBJECT_FIELDS:
            raise ValueError(f"unknown object field: {field!r}")
        column = objects_table.c[field]
        rows = self._execute(select(column).where(objects_table.c.id == pid)).all()
        return self._exactly_one(rows, f"'{field}'", pid)[0]

    def get_object(self, pid: str) -> ObjectRecord:
        stmt = select(objects_table).where(objects_table.c.id == pid)
        rows = self._execute(stmt).all()
        return row_to_object_record(self._exactly_one(rows, "metadata", pid)._mapping)

    def contains(self, pid: str) -> bool:
        stmt = select(func.count()).select_from(objects_table).where(objects_table.c.id == pid)
        return self._execute(stmt).scalar_one() > 0

    def is_registered(self, base_url: str) -> bool:
        stmt = (
            select(func.count())
            .select_from(datasets_table)
            .where(datasets_table.c.base_url == base_url)
        )
        return self._execute(stmt).scalar_one() == 1

    def get_dataset(self, base_url: str) -> DatasetPointer:
        stmt = select(datasets_table).where(datasets_table.c.base_url == base_url)
        rows = self._execute(stmt).all()
        return row_to_dataset(self._exactly_one(rows, "a dataset", base_url)._mapping)

    def find_dataset_by_pid(self, pid: str) -> DatasetPointer | None:
        """The pointer whose current triple includes ``pid``, if any."""
        stmt = select(datasets_table).where(
            or_(
                datasets_table.c.sdo_id == pid,
                datasets_table.c.smo_id == pid,
                datasets_table.c.ore_id == pid,
            )
        )
        row = self._at_most_one(self._execute(stmt).all(), "dataset", pid)
        return row_to_dataset(row._mapping) if row is not None else None

    def get_fetch_url(self, pid: str) -> str:
        """DAP URL for an SDO or SMO PID; the two location tables are searched together."""
        rows: list[Row[Any]] = []
        for table in _LOCATION_TABLES.values():
            rows.extend(self._execute(select(table.c.fetch_url).where(table.c.id == pid)).all())
        return self._exactly_one(rows, "a DAP URL entry", pid)[0]

    def get_aggregation(self, pid: str) -> AggregationRecord:
        stmt = select(aggregations_table).where(aggregations_table.c.id == pid)
        rows = self._execute(stmt).all()
        return row_to_aggregation(self._exactly_one(rows, "the aggregation", pid)._mapping)

    def get_obsoletes(self, pid: str) -> str | None:
        stmt = select(obsoletes_table.c.previous_id).where(obsoletes_table.c.new_id == pid)
        row = self._at_most_one(self._execute(stmt).all(), "obsoleted PID", pid)
        return row[0] if row else None

    def get_obsoleted_by(self, pid: str) -> str | None:
        stmt = select(obsoletes_table.c.new_id).where(obsoletes_table.c.previous_id == pid)
        row = self._at_most_one(self._execute(stmt).all(), "successor PID", pid)
        return row[0] if row else None

    # =========================================================================
    # Range queries
    # =========================================================================

    @staticmethod
    def _object_filters(
        date_from: datetime | None, date_to: datetime | None, format: str | None
    ) -> list[ColumnElement[bool]]:
        filters: list[ColumnElement[bool]] = []
        # Stored values stop at milliseconds; round bounds up to match.
        if date_from is not None:
            since = format_timestamp(ceil_to_millisecond(date_from))
            filters.append(objects_table.c.date_added >= since)
        if date_to is not None:
            until = format_timestamp(ceil_to_millisecond(date_to))
            filters.append(objects_table.c.date_added < until)
        if format is not None:
            filters.append(objects_table.c.format == format)
        return filters

    def list_objects(
        self,
        date_from: datetime | None = None,
        date_to: datetime | None = None,
        format: str | None = None,
        start: int = 0,
        count: int | None = None,
    ) -> list[ObjectRecord]:
        stmt = (
            select(objects_table)
            .where(*self._object_filters(date_from, date_to, format))
            .order_by(objects_table.c.seq)
            .offset(start)
        )
        if count is not None:
            stmt = stmt.limit(count)
        logger.debug("Metadata access stmt: %s", stmt)
        return [row_to_object_record(row._mapping) for row in self._execute(stmt).all()]

    def count(
        self,
        date_from: datetime | None = None,
        date_to: datetime | None = None,
        format: str | None = None,
    ) -> int:
        stmt = (
            select(func.count())
            .select_from(objects_table)
            .where(*self._object_filters(date_from, date_to, format))
        )
        return self._execute(stmt).scalar_one()

    def dump(self) -> CatalogDump:
        def ordered(table: Table) -> list[Row[Any]]:
            return self._execute(select(table).order_by(table.c.seq)).all()

        return CatalogDump(
            objects=[row_to_object_record(r._mapping) for r in ordered(objects_table)],
            datasets=[row_to_dataset(r._mapping) for r in ordered(datasets_table)],
            locations=[
                row_to_location(r._mapping, kind)
                for kind, table in _LOCATION_TABLES.items()
                for r in ordered(table)
            ],
            aggregations=[row_to_aggregation(r._mapping) for r in ordered(aggregations_table)],
            obsoletes=[row_to_obsoletes(r._mapping) for r in ordered(obsoletes_table)],
        )
