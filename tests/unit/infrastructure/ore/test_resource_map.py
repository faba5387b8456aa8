from datetime import UTC, datetime
from xml.etree import ElementTree

import pytest

from dapd1.infrastructure.ore.resource_map import (
    CITO_NS,
    DC_NS,
    DCTERMS_NS,
    ORE_NS,
    RDF_NS,
    OreResourceMapBuilder,
)
from fakes import StepClock

ORE_ID = "host/dataone_ore_1/path/fnoc1.nc"
SMO_ID = "host/dataone_smo_1/path/fnoc1.nc"
SDO_ID = "host/dataone_sdo_1/path/fnoc1.nc"
RESOLVE = "https://cn.example.org/resolve/"


def q(ns: str, tag: str) -> str:
    return f"{{{ns}}}{tag}"


def descriptions(document: bytes) -> dict[str, ElementTree.Element]:
    root = ElementTree.fromstring(document)
    assert root.tag == q(RDF_NS, "RDF")
    return {d.get(q(RDF_NS, "about")): d for d in root.findall(q(RDF_NS, "Description"))}


def resources(node: ElementTree.Element, ns: str, tag: str) -> list[str]:
    return [e.get(q(RDF_NS, "resource")) for e in node.findall(q(ns, tag))]


class TestOreResourceMapBuilder:
    @pytest.fixture
    def builder(self) -> OreResourceMapBuilder:
        return OreResourceMapBuilder(resolve_base=RESOLVE, creator="tester", clock=StepClock())

    def test_uri_percent_encodes_identifier(self, builder):
        assert builder.uri(SDO_ID) == RESOLVE + "host%2Fdataone_sdo_1%2Fpath%2Ffnoc1.nc"

    def test_describes_resource_map(self, builder):
        nodes = descriptions(builder.build(ORE_ID, SMO_ID, [SDO_ID]))
        rem = nodes[builder.uri(ORE_ID)]

        assert rem.findtext(q(DCTERMS_NS, "identifier")) == ORE_ID
        assert rem.findtext(q(DCTERMS_NS, "modified")) == "2014-06-03T10:15:00.000Z"
        assert rem.findtext(q(DC_NS, "creator")) == "tester"
        assert resources(rem, RDF_NS, "type") == [ORE_NS + "ResourceMap"]
        assert resources(rem, ORE_NS, "describes") == [builder.uri(ORE_ID) + "#aggregation"]

    def test_aggregation_holds_smo_and_sdo(self, builder):
        nodes = descriptions(builder.build(ORE_ID, SMO_ID, [SDO_ID]))
        agg = nodes[builder.uri(ORE_ID) + "#aggregation"]

        assert resources(agg, ORE_NS, "aggregates") == [builder.uri(SMO_ID), builder.uri(SDO_ID)]
        assert resources(agg, ORE_NS, "isDescribedBy") == [builder.uri(ORE_ID)]

    def test_smo_documents_sdo(self, builder):
        nodes = descriptions(builder.build(ORE_ID, SMO_ID, [SDO_ID]))

        smo = nodes[builder.uri(SMO_ID)]
        sdo = nodes[builder.uri(SDO_ID)]
        assert resources(smo, CITO_NS, "documents") == [builder.uri(SDO_ID)]
        assert resources(sdo, CITO_NS, "isDocumentedBy") == [builder.uri(SMO_ID)]
        assert sdo.findtext(q(DCTERMS_NS, "identifier")) == SDO_ID

    def test_several_data_objects(self, builder):
        other = "host/dataone_sdo_1/path/other.nc"
        nodes = descriptions(builder.build(ORE_ID, SMO_ID, [SDO_ID, other]))

        smo = nodes[builder.uri(SMO_ID)]
        assert resources(smo, CITO_NS, "documents") == [builder.uri(SDO_ID), builder.uri(other)]
        assert builder.uri(other) in nodes

    def test_document_depends_on_generation_time(self, builder):
        first = builder.build(ORE_ID, SMO_ID, [SDO_ID])
        second = builder.build(ORE_ID, SMO_ID, [SDO_ID])

        assert first != second

    def test_fixed_time_is_reproducible(self):
        fixed = datetime(2020, 1, 1, tzinfo=UTC)
        builder = OreResourceMapBuilder(clock=lambda: fixed)

        assert builder.build(ORE_ID, SMO_ID, [SDO_ID]) == builder.build(ORE_ID, SMO_ID, [SDO_ID])

    def test_requires_a_data_object(self, builder):
        with pytest.raises(ValueError):
            builder.build(ORE_ID, SMO_ID, [])
