"""GetObject query - one PID's system metadata and its place in the version chain."""

from dapd1.domain.catalog.model.entity import ObjectRecord
from dapd1.domain.catalog.service.catalog import CatalogService
from dapd1.domain.shared.query import Query, QueryHandler, Result


class GetObject(Query):
    pid: str


class ObjectDetail(Result):
    record: ObjectRecord
    fetch_url: str | None  # None for resource maps
    members: list[str] = []  # [smo_id, sdo_id] for resource maps
    obsoletes: str | None = None
    obsoleted_by: str | None = None


class GetObjectHandler(QueryHandler[GetObject, ObjectDetail]):
    catalog: CatalogService

    def run(self, query: GetObject) -> ObjectDetail:
        record = self.catalog.get_object(query.pid)
        fetchable = self.catalog.is_fetchable(query.pid)
        return ObjectDetail(
            record=record,
            fetch_url=self.catalog.get_fetch_url(query.pid) if fetchable else None,
            members=[] if fetchable else self.catalog.get_aggregation_members(query.pid),
            obsoletes=self.catalog.get_obsoletes(query.pid),
            obsoleted_by=self.catalog.get_obsoleted_by(query.pid),
        )
