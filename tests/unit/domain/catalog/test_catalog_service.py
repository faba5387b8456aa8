from datetime import UTC, datetime

import pytest
from sqlalchemy import insert

from dapd1.domain.catalog.model.value import ORE_FORMAT, SDO_FORMAT
from dapd1.domain.shared.error import CorruptCatalogError, NotFoundError
from dapd1.infrastructure.persistence.tables import objects_table
from fakes import FNOC1

SDO_1 = "test.opendap.org/dataone_sdo_1/opendap/hyrax/data/nc/fnoc1.nc"
SMO_1 = "test.opendap.org/dataone_smo_1/opendap/hyrax/data/nc/fnoc1.nc"
ORE_1 = "test.opendap.org/dataone_ore_1/opendap/hyrax/data/nc/fnoc1.nc"


@pytest.fixture
def added(version_chain):
    return version_chain.add_new(FNOC1)


class TestCatalogService:
    def test_contains_and_is_registered(self, catalog_service, added):
        assert catalog_service.contains(SDO_1)
        assert not catalog_service.contains("test.opendap.org/dataone_sdo_2/x")
        assert catalog_service.is_registered(FNOC1)
        assert not catalog_service.is_registered(FNOC1 + "x")

    def test_typed_accessors(self, catalog_service, added):
        assert catalog_service.get_format(SDO_1) == SDO_FORMAT
        assert catalog_service.get_serial_number(ORE_1) == 1
        assert catalog_service.get_size(SDO_1) == len((FNOC1 + ".nc").encode())

        checksum = catalog_service.get_checksum(SMO_1)
        assert checksum.algorithm == "SHA-1"
        assert len(checksum.checksum) == 40

    def test_date_added_is_aware_utc(self, catalog_service, added):
        assert catalog_service.get_date_added(SDO_1) == datetime(2014, 6, 3, 10, 15, tzinfo=UTC)

    def test_unknown_pid_is_not_found(self, catalog_service, added):
        with pytest.raises(NotFoundError):
            catalog_service.get_format("nohost/dataone_sdo_1/nothing")
        with pytest.raises(NotFoundError):
            catalog_service.get_object("nohost/dataone_sdo_1/nothing")

    def test_is_fetchable(self, catalog_service, added):
        assert catalog_service.is_fetchable(SDO_1)
        assert catalog_service.is_fetchable(SMO_1)
        assert not catalog_service.is_fetchable(ORE_1)

    def test_fetch_url(self, catalog_service, added):
        assert catalog_service.get_fetch_url(SDO_1) == FNOC1 + ".nc"
        assert catalog_service.get_fetch_url(SMO_1) == FNOC1 + ".iso"
        with pytest.raises(NotFoundError):
            catalog_service.get_fetch_url(ORE_1)

    def test_aggregation_members_and_resource_map(self, catalog_service, added):
        assert catalog_service.get_aggregation_members(ORE_1) == [SMO_1, SDO_1]

        document = catalog_service.get_resource_map(ORE_1)
        assert document.startswith(b"<?xml")
        assert catalog_service.get_format(ORE_1) == ORE_FORMAT

    def test_resource_map_is_stored_not_rebuilt(self, catalog_service, added):
        assert catalog_service.get_resource_map(ORE_1) == catalog_service.get_resource_map(ORE_1)

    def test_version_chain_oldest_first(self, catalog_service, version_chain, added):
        second = version_chain.update_in_place(FNOC1)
        third = version_chain.update_in_place(FNOC1)

        expected = [SDO_1, second.sdo_id, third.sdo_id]
        assert catalog_service.get_version_chain(SDO_1) == expected
        assert catalog_service.get_version_chain(second.sdo_id) == expected
        assert catalog_service.get_obsoletes(SDO_1) is None
        assert catalog_service.get_obsoleted_by(third.sdo_id) is None

    def test_version_chain_of_unknown_pid(self, catalog_service):
        with pytest.raises(NotFoundError):
            catalog_service.get_version_chain("nohost/dataone_sdo_1/nothing")

    def test_unparsable_date_is_corruption(self, catalog_service, catalog, uow):
        with uow:
            catalog.connection.execute(
                insert(objects_table).values(
                    id="legacy/dataone_sdo_1/a.nc",
                    date_added="Tue Jun 03 10:15:00 MDT 2014",
                    serial_number=1,
                    format=SDO_FORMAT,
                    size="10",
                    checksum="00",
                    algorithm="SHA-1",
                )
            )

        with pytest.raises(CorruptCatalogError):
            catalog_service.get_date_added("legacy/dataone_sdo_1/a.nc")

    def test_list_objects_rejects_negative_paging(self, catalog_service):
        with pytest.raises(ValueError):
            catalog_service.list_objects(start=-1)
        with pytest.raises(ValueError):
            catalog_service.list_objects(count=-5)

    def test_dump(self, catalog_service, added):
        dump = catalog_service.dump()
        assert [o.id for o in dump.objects] == [SDO_1, SMO_1, ORE_1]
        assert [loc.id for loc in dump.locations] == [SDO_1, SMO_1]
        assert dump.datasets == [added]
        assert dump.obsoletes == []

    def test_lookup_by_other_spelling_of_url(self, catalog_service, added):
        alias = FNOC1.replace("http://", "")
        assert catalog_service.is_registered(alias)
        assert catalog_service.get_dataset(alias) == added
