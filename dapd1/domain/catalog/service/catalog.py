"""CatalogService - read access to object metadata and the version chain."""

from datetime import datetime

from dapd1.domain.catalog.model.dates import parse_timestamp
from dapd1.domain.catalog.model.entity import CatalogDump, DatasetPointer, ObjectRecord
from dapd1.domain.catalog.model.pid import canonical_locator
from dapd1.domain.catalog.model.value import ORE_FORMAT, ChecksumInfo
from dapd1.domain.catalog.port.repository import CatalogRepository
from dapd1.domain.shared.error import CorruptCatalogError, NotFoundError
from dapd1.domain.shared.service import Service


class CatalogService(Service):
    repo: CatalogRepository

    def contains(self, pid: str) -> bool:
        return self.repo.contains(pid)

    def is_registered(self, base_url: str) -> bool:
        return self.repo.is_registered(canonical_locator(base_url))

    def get_dataset(self, base_url: str) -> DatasetPointer:
        return self.repo.get_dataset(canonical_locator(base_url))

    def get_object(self, pid: str) -> ObjectRecord:
        return self.repo.get_object(pid)

    def get_format(self, pid: str) -> str:
        return self.repo.get_object_field(pid, "format")

    def get_size(self, pid: str) -> int:
        return int(self.repo.get_object_field(pid, "size"))

    def get_serial_number(self, pid: str) -> int:
        return int(self.repo.get_object_field(pid, "serial_number"))

    def get_checksum(self, pid: str) -> ChecksumInfo:
        return ChecksumInfo(
            checksum=self.repo.get_object_field(pid, "checksum"),
            algorithm=self.repo.get_object_field(pid, "algorithm"),
        )

    def get_date_added(self, pid: str) -> datetime:
        value = self.repo.get_object_field(pid, "date_added")
        try:
            return parse_timestamp(value)
        except ValueError as e:
            raise CorruptCatalogError(f"Malformed date/time for '{pid}': {e}") from e

    def is_fetchable(self, pid: str) -> bool:
        """Whether the PID names a DAP response (SDO or SMO) rather than a resource map."""
        return self.get_format(pid) != ORE_FORMAT

    def get_fetch_url(self, pid: str) -> str:
        return self.repo.get_fetch_url(pid)

    def get_aggregation_members(self, pid: str) -> list[str]:
        """The ``[smo_id, sdo_id]`` pair aggregated by an ORE PID."""
        aggregation = self.repo.get_aggregation(pid)
        return [aggregation.smo_id, aggregation.sdo_id]

    def get_resource_map(self, pid: str) -> bytes:
        return self.repo.get_aggregation(pid).document

    def get_obsoletes(self, pid: str) -> str | None:
        return self.repo.get_obsoletes(pid)

    def get_obsoleted_by(self, pid: str) -> str | None:
        return self.repo.get_obsoleted_by(pid)

    def get_version_chain(self, pid: str) -> list[str]:
        """All PIDs in the chain through ``pid``, oldest first."""
        if not self.repo.contains(pid):
            raise NotFoundError(f"Did not find '{pid}'")

        chain = [pid]
        while (previous := self.repo.get_obsoletes(chain[0])) is not None:
            if previous in chain:
                raise CorruptCatalogError(f"Obsoletes chain through '{pid}' has a cycle")
            chain.insert(0, previous)
        while (successor := self.repo.get_obsoleted_by(chain[-1])) is not None:
            if successor in chain:
                raise CorruptCatalogError(f"Obsoletes chain through '{pid}' has a cycle")
            chain.append(successor)
        return chain

    def list_objects(
        self,
        date_from: datetime | None = None,
        date_to: datetime | None = None,
        format: str | None = None,
        start: int = 0,
        count: int | None = None,
    ) -> list[ObjectRecord]:
        if start < 0:
            raise ValueError("start must be >= 0")
        if count is not None and count < 0:
            raise ValueError("count must be >= 0")
        return self.repo.list_objects(date_from, date_to, format, start, count)

    def count(
        self,
        date_from: datetime | None = None,
        date_to: datetime | None = None,
        format: str | None = None,
    ) -> int:
        return self.repo.count(date_from, date_to, format)

    def dump(self) -> CatalogDump:
        return self.repo.dump()
