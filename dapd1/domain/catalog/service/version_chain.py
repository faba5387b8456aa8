"""VersionChainService - adds datasets and moves them along their version chain."""

import logging
from collections.abc import Callable
from datetime import datetime

from dapd1.domain.catalog.model.dates import utcnow
from dapd1.domain.catalog.model.entity import (
    AggregationRecord,
    DatasetPointer,
    LocationRecord,
    ObjectRecord,
    ObsoletesEdge,
)
from dapd1.domain.catalog.model.pid import canonical_locator, fetch_url, mint_pid
from dapd1.domain.catalog.model.value import FORMATS, ArtifactKind, Digest
from dapd1.domain.catalog.port.fetcher import DigestFetcher
from dapd1.domain.catalog.port.repository import CatalogRepository
from dapd1.domain.catalog.port.resource_map import ResourceMapBuilder
from dapd1.domain.shared.error import (
    AlreadyObsoletedError,
    CorruptCatalogError,
    DatasetAlreadyRegisteredError,
    DatasetNotRegisteredError,
)
from dapd1.domain.shared.service import Service
from dapd1.domain.shared.uow import UoW

logger = logging.getLogger(__name__)


class VersionChainService(Service):
    """Mints, fetches and records one dataset version per call.

    Every public method runs inside a single unit of work: either all rows
    for the new version are written, or none are. Remote reads happen inside
    the transaction, sequentially (SDO, then SMO, then the ORE document).
    """

    repo: CatalogRepository
    uow: UoW
    fetcher: DigestFetcher
    resource_maps: ResourceMapBuilder
    sdo_suffix: str = ".nc"
    smo_suffix: str = ".iso"
    clock: Callable[[], datetime] = utcnow

    def add_new(self, base_url: str) -> DatasetPointer:
        """Register a dataset that has never been seen, at serial number 1."""
        base_url = canonical_locator(base_url)

        with self.uow:
            if self.repo.is_registered(base_url):
                raise DatasetAlreadyRegisteredError(f"The URL '{base_url}' is already in the catalog")

            pointer = self._record_version(base_url, 1)
            self.repo.add_dataset(pointer)

        logger.info("Added %s as %s", base_url, pointer.sdo_id)
        return pointer

    def update_in_place(self, base_url: str) -> DatasetPointer:
        """Record a new version of a registered dataset under the same URL."""
        base_url = canonical_locator(base_url)

        with self.uow:
            current = self._current(base_url)
            serial_number = self._next_serial_number(current)

            pointer = self._record_version(base_url, serial_number)
            self._record_obsoletes(pointer, current)
            self.repo.update_dataset(pointer)

        logger.info("Updated %s to serial number %d", base_url, serial_number)
        return pointer

    def replace(self, new_base_url: str, old_base_url: str) -> DatasetPointer:
        """Record ``new_base_url`` as the next version of ``old_base_url``.

        Both URLs name the same logical dataset. The old URL keeps its
        pointer row; the new URL gets a row of its own.
        """
        new_base_url = canonical_locator(new_base_url)
        old_base_url = canonical_locator(old_base_url)

        with self.uow:
            if self.repo.is_registered(new_base_url):
                raise DatasetAlreadyRegisteredError(
                    f"The URL '{new_base_url}' is already in the catalog"
                )
            current = self._current(old_base_url)
            serial_number = self._next_serial_number(current)

            pointer = self._record_version(new_base_url, serial_number)
            self._record_obsoletes(pointer, current)
            self.repo.add_dataset(pointer)

        logger.info(
            "Replaced %s with %s at serial number %d", old_base_url, new_base_url, serial_number
        )
        return pointer

    # -------------------------------------------------------------------------

    def _current(self, base_url: str) -> DatasetPointer:
        if not self.repo.is_registered(base_url):
            raise DatasetNotRegisteredError(f"The URL '{base_url}' was not in the catalog")
        current = self.repo.get_dataset(base_url)

        for pid in (current.sdo_id, current.smo_id, current.ore_id):
            successor = self.repo.get_obsoleted_by(pid)
            if successor is not None:
                raise AlreadyObsoletedError(f"'{pid}' has already been obsoleted by '{successor}'")
        return current

    def _next_serial_number(self, current: DatasetPointer) -> int:
        # All three PIDs of a version share one serial number; the SDO's is authoritative.
        return int(self.repo.get_object_field(current.sdo_id, "serial_number")) + 1

    def _record_obsoletes(self, new: DatasetPointer, old: DatasetPointer) -> None:
        for new_id, previous_id in (
            (new.sdo_id, old.sdo_id),
            (new.smo_id, old.smo_id),
            (new.ore_id, old.ore_id),
        ):
            self.repo.add_obsoletes(ObsoletesEdge(new_id=new_id, previous_id=previous_id))

    def _record_version(self, base_url: str, serial_number: int) -> DatasetPointer:
        """Mint, fetch, digest and insert the three artifacts of one version."""
        ids = {kind: mint_pid(base_url, kind, serial_number) for kind in ArtifactKind}
        for pid in ids.values():
            if not self.repo.contains(pid):
                continue
            owner = self.repo.find_dataset_by_pid(pid)
            if owner is not None:
                raise DatasetAlreadyRegisteredError(
                    f"The URL '{base_url}' is already in the catalog as '{owner.base_url}'"
                )
            raise CorruptCatalogError(f"PID '{pid}' was minted before and cannot be reused")

        # One timestamp for all three records
        now = self.clock()

        for kind, suffix in ((ArtifactKind.SDO, self.sdo_suffix), (ArtifactKind.SMO, self.smo_suffix)):
            url = fetch_url(base_url, suffix)
            logger.debug("Fetching %s for %s", url, ids[kind])
            digest = self.fetcher.fetch_digest(url)
            self.repo.add_location(LocationRecord(id=ids[kind], kind=kind, fetch_url=url))
            self.repo.add_object(self._object_record(ids[kind], kind, serial_number, digest, now))

        document = self.resource_maps.build(
            ids[ArtifactKind.ORE], ids[ArtifactKind.SMO], [ids[ArtifactKind.SDO]]
        )
        digest = self.fetcher.digest_bytes(document)
        self.repo.add_aggregation(
            AggregationRecord(
                id=ids[ArtifactKind.ORE],
                sdo_id=ids[ArtifactKind.SDO],
                smo_id=ids[ArtifactKind.SMO],
                document=document,
            )
        )
        self.repo.add_object(
            self._object_record(ids[ArtifactKind.ORE], ArtifactKind.ORE, serial_number, digest, now)
        )

        return DatasetPointer(
            base_url=base_url,
            sdo_id=ids[ArtifactKind.SDO],
            smo_id=ids[ArtifactKind.SMO],
            ore_id=ids[ArtifactKind.ORE],
        )

    @staticmethod
    def _object_record(
        pid: str, kind: ArtifactKind, serial_number: int, digest: Digest, now: datetime
    ) -> ObjectRecord:
        return ObjectRecord(
            id=pid,
            date_added=now,
            serial_number=serial_number,
            format=FORMATS[kind],
            size=digest.size,
            checksum=digest.checksum,
            algorithm=digest.algorithm,
        )
