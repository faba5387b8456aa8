"""ListObjects query - paged object metadata, oldest first."""

from datetime import datetime

from pydantic import Field

from dapd1.domain.catalog.model.entity import ObjectRecord
from dapd1.domain.catalog.service.catalog import CatalogService
from dapd1.domain.shared.query import Query, QueryHandler, Result


class ListObjects(Query):
    date_from: datetime | None = None  # inclusive
    date_to: datetime | None = None  # exclusive
    format: str | None = None
    start: int = Field(default=0, ge=0)
    count: int | None = Field(default=None, ge=0)


class ObjectList(Result):
    start: int
    total: int  # matching rows, ignoring start/count
    objects: list[ObjectRecord]


class ListObjectsHandler(QueryHandler[ListObjects, ObjectList]):
    catalog: CatalogService

    def run(self, query: ListObjects) -> ObjectList:
        objects = self.catalog.list_objects(
            query.date_from, query.date_to, query.format, query.start, query.count
        )
        total = self.catalog.count(query.date_from, query.date_to, query.format)
        return ObjectList(start=query.start, total=total, objects=objects)
