"""Catalog rows as domain objects.

Objects, locations and aggregations are append-only; the dataset pointer is
the only row that changes after it is written.
"""

from datetime import datetime

from pydantic import Field

from dapd1.domain.catalog.model.value import ArtifactKind
from dapd1.domain.shared.model.value import ValueObject


class ObjectRecord(ValueObject):
    """System metadata for one minted PID."""

    id: str
    date_added: datetime
    serial_number: int = Field(ge=1)
    format: str
    size: int = Field(ge=0)  # stored as a decimal string
    checksum: str
    algorithm: str


class LocationRecord(ValueObject):
    """Where to fetch the bytes for an SDO or SMO PID."""

    id: str
    kind: ArtifactKind
    fetch_url: str


class AggregationRecord(ValueObject):
    """A resource map and the two PIDs it ties together.

    The document is kept verbatim: it carries its own generation time, so a
    rebuilt copy would never match the recorded checksum.
    """

    id: str
    sdo_id: str
    smo_id: str
    document: bytes


class DatasetPointer(ValueObject):
    """The current PID triple for a dataset base URL."""

    base_url: str
    sdo_id: str
    smo_id: str
    ore_id: str


class ObsoletesEdge(ValueObject):
    """``new_id`` supersedes ``previous_id``."""

    new_id: str
    previous_id: str


class CatalogDump(ValueObject):
    """Every row of every table, in insertion order."""

    objects: list[ObjectRecord] = []
    datasets: list[DatasetPointer] = []
    locations: list[LocationRecord] = []
    aggregations: list[AggregationRecord] = []
    obsoletes: list[ObsoletesEdge] = []
