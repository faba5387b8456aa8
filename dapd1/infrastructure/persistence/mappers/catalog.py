from typing import Any, Mapping

from dapd1.domain.catalog.model.dates import format_timestamp, parse_timestamp
from dapd1.domain.catalog.model.entity import (
    AggregationRecord,
    DatasetPointer,
    LocationRecord,
    ObjectRecord,
    ObsoletesEdge,
)
from dapd1.domain.catalog.model.value import ArtifactKind
from dapd1.domain.shared.error import CorruptCatalogError


def object_record_to_dict(record: ObjectRecord) -> dict[str, Any]:
    return {
        "id": record.id,
        "date_added": format_timestamp(record.date_added),
        "serial_number": record.serial_number,
        "format": record.format,
        "size": str(record.size),
        "checksum": record.checksum,
        "algorithm": record.algorithm,
    }


def row_to_object_record(row: Mapping[str, Any]) -> ObjectRecord:
    """Convert an objects row to an ObjectRecord.

    A date or size that does not parse means the store was written by
    something other than this catalog.
    """
    try:
        date_added = parse_timestamp(row["date_added"])
        size = int(row["size"])
    except ValueError as e:
        raise CorruptCatalogError(f"Malformed metadata for '{row['id']}': {e}") from e

    return ObjectRecord(
        id=row["id"],
        date_added=date_added,
        serial_number=int(row["serial_number"]),
        format=row["format"],
        size=size,
        checksum=row["checksum"],
        algorithm=row["algorithm"],
    )


def location_to_dict(location: LocationRecord) -> dict[str, Any]:
    return {"id": location.id, "fetch_url": location.fetch_url}


def row_to_location(row: Mapping[str, Any], kind: ArtifactKind) -> LocationRecord:
    return LocationRecord(id=row["id"], kind=kind, fetch_url=row["fetch_url"])


def aggregation_to_dict(aggregation: AggregationRecord) -> dict[str, Any]:
    return {
        "id": aggregation.id,
        "sdo_id": aggregation.sdo_id,
        "smo_id": aggregation.smo_id,
        "document": aggregation.document,
    }


def row_to_aggregation(row: Mapping[str, Any]) -> AggregationRecord:
    return AggregationRecord(
        id=row["id"],
        sdo_id=row["sdo_id"],
        smo_id=row["smo_id"],
        document=bytes(row["document"]),
    )


def dataset_to_dict(pointer: DatasetPointer) -> dict[str, Any]:
    return {
        "base_url": pointer.base_url,
        "sdo_id": pointer.sdo_id,
        "smo_id": pointer.smo_id,
        "ore_id": pointer.ore_id,
    }


def row_to_dataset(row: Mapping[str, Any]) -> DatasetPointer:
    return DatasetPointer(
        base_url=row["base_url"],
        sdo_id=row["sdo_id"],
        smo_id=row["smo_id"],
        ore_id=row["ore_id"],
    )


def obsoletes_to_dict(edge: ObsoletesEdge) -> dict[str, Any]:
    return {"new_id": edge.new_id, "previous_id": edge.previous_id}


def row_to_obsoletes(row: Mapping[str, Any]) -> ObsoletesEdge:
    return ObsoletesEdge(new_id=row["new_id"], previous_id=row["previous_id"])
