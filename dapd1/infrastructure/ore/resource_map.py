"""OAI-ORE resource maps in RDF/XML, as used by DataONE data packages."""

from collections.abc import Callable, Sequence
from datetime import datetime
from urllib.parse import quote
from xml.etree import ElementTree

from dapd1.domain.catalog.model.dates import format_timestamp, utcnow
from dapd1.domain.catalog.port.resource_map import ResourceMapBuilder

RDF_NS = "http://www.w3.org/1999/02/22-rdf-syntax-ns#"
ORE_NS = "http://www.openarchives.org/ore/terms/"
DCTERMS_NS = "http://purl.org/dc/terms/"
DC_NS = "http://purl.org/dc/elements/1.1/"
CITO_NS = "http://purl.org/spar/cito/"

NAMESPACES = {
    "rdf": RDF_NS,
    "ore": ORE_NS,
    "dcterms": DCTERMS_NS,
    "dc": DC_NS,
    "cito": CITO_NS,
}

for _prefix, _uri in NAMESPACES.items():
    ElementTree.register_namespace(_prefix, _uri)

DEFAULT_RESOLVE_BASE = "https://cn.dataone.org/cn/v1/resolve/"


def _q(ns: str, tag: str) -> str:
    return f"{{{ns}}}{tag}"


class OreResourceMapBuilder(ResourceMapBuilder):
    """Builds a resource map whose aggregation holds one SMO and the SDOs it documents.

    Identifiers are opaque: each is percent-encoded onto ``resolve_base`` to
    form its URI and also stated literally with ``dcterms:identifier``.
    """

    def __init__(
        self,
        resolve_base: str = DEFAULT_RESOLVE_BASE,
        creator: str = "dapd1",
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self.resolve_base = resolve_base
        self.creator = creator
        self.clock = clock

    def uri(self, identifier: str) -> str:
        return self.resolve_base + quote(identifier, safe="")

    def build(self, ore_id: str, smo_id: str, sdo_ids: Sequence[str]) -> bytes:
        if not sdo_ids:
            raise ValueError("a resource map must aggregate at least one data object")

        map_uri = self.uri(ore_id)
        aggregation_uri = map_uri + "#aggregation"
        smo_uri = self.uri(smo_id)
        sdo_uris = [self.uri(sdo_id) for sdo_id in sdo_ids]

        root = ElementTree.Element(_q(RDF_NS, "RDF"))

        # The resource map itself
        rem = self._describe(root, map_uri, ORE_NS + "ResourceMap", ore_id)
        ElementTree.SubElement(rem, _q(DCTERMS_NS, "modified")).text = format_timestamp(self.clock())
        ElementTree.SubElement(rem, _q(DC_NS, "creator")).text = self.creator
        self._link(rem, ORE_NS, "describes", aggregation_uri)

        # The aggregation
        agg = self._describe(root, aggregation_uri, ORE_NS + "Aggregation")
        self._link(agg, ORE_NS, "isDescribedBy", map_uri)
        for member in [smo_uri, *sdo_uris]:
            self._link(agg, ORE_NS, "aggregates", member)

        # The metadata object documents each data object
        smo = self._describe(root, smo_uri, None, smo_id)
        self._link(smo, ORE_NS, "isAggregatedBy", aggregation_uri)
        for sdo_uri in sdo_uris:
            self._link(smo, CITO_NS, "documents", sdo_uri)

        for sdo_id, sdo_uri in zip(sdo_ids, sdo_uris):
            sdo = self._describe(root, sdo_uri, None, sdo_id)
            self._link(sdo, ORE_NS, "isAggregatedBy", aggregation_uri)
            self._link(sdo, CITO_NS, "isDocumentedBy", smo_uri)

        return ElementTree.tostring(root, encoding="utf-8", xml_declaration=True)

    @staticmethod
    def _describe(
        root: ElementTree.Element, about: str, rdf_type: str | None, identifier: str | None = None
    ) -> ElementTree.Element:
        node = ElementTree.SubElement(root, _q(RDF_NS, "Description"), {_q(RDF_NS, "about"): about})
        if rdf_type is not None:
            ElementTree.SubElement(node, _q(RDF_NS, "type"), {_q(RDF_NS, "resource"): rdf_type})
        if identifier is not None:
            ElementTree.SubElement(node, _q(DCTERMS_NS, "identifier")).text = identifier
        return node

    @staticmethod
    def _link(node: ElementTree.Element, ns: str, tag: str, resource: str) -> None:
        ElementTree.SubElement(node, _q(ns, tag), {_q(RDF_NS, "resource"): resource})
