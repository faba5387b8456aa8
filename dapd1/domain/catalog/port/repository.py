"""CatalogRepository port - persistence interface for the datasets catalog."""

from datetime import datetime
from typing import Any, Protocol

from dapd1.domain.catalog.model.entity import (
    AggregationRecord,
    CatalogDump,
    DatasetPointer,
    LocationRecord,
    ObjectRecord,
    ObsoletesEdge,
)


class CatalogRepository(Protocol):
    """Reads and append-mostly writes over the six catalog tables.

    Writes do not commit; callers wrap them in a unit of work.
    """

    # -- writes --------------------------------------------------------------

    def add_object(self, record: ObjectRecord) -> None: ...

    def add_location(self, location: LocationRecord) -> None: ...

    def add_aggregation(self, aggregation: AggregationRecord) -> None: ...

    def add_obsoletes(self, edge: ObsoletesEdge) -> None: ...

    def add_dataset(self, pointer: DatasetPointer) -> None: ...

    def update_dataset(self, pointer: DatasetPointer) -> None: ...

    # -- point lookups -------------------------------------------------------

    def get_object_field(self, pid: str, field: str) -> Any: ...

    def get_object(self, pid: str) -> ObjectRecord: ...

    def contains(self, pid: str) -> bool: ...

    def is_registered(self, base_url: str) -> bool: ...

    def get_dataset(self, base_url: str) -> DatasetPointer: ...

    def find_dataset_by_pid(self, pid: str) -> DatasetPointer | None: ...

    def get_fetch_url(self, pid: str) -> str: ...

    def get_aggregation(self, pid: str) -> AggregationRecord: ...

    def get_obsoletes(self, pid: str) -> str | None: ...

    def get_obsoleted_by(self, pid: str) -> str | None: ...

    # -- range queries -------------------------------------------------------

    def list_objects(
        self,
        date_from: datetime | None = None,
        date_to: datetime | None = None,
        format: str | None = None,
        start: int = 0,
        count: int | None = None,
    ) -> list[ObjectRecord]: ...

    def count(
        self,
        date_from: datetime | None = None,
        date_to: datetime | None = None,
        format: str | None = None,
    ) -> int: ...

    def dump(self) -> CatalogDump: ...
