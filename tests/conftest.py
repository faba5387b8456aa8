"""Global test fixtures: an in-memory catalog and fakes for the network."""

from collections.abc import Iterator

import pytest

from dapd1.config import DatabaseConfig
from dapd1.domain.catalog.service.catalog import CatalogService
from dapd1.domain.catalog.service.version_chain import VersionChainService
from dapd1.infrastructure.ore.resource_map import OreResourceMapBuilder
from dapd1.infrastructure.persistence.database import Catalog
from dapd1.infrastructure.persistence.repository.catalog import SqlCatalogRepository
from dapd1.infrastructure.persistence.schema import create_schema
from dapd1.infrastructure.persistence.uow import SqlUnitOfWork
from fakes import FakeFetcher, StepClock


@pytest.fixture
def catalog() -> Iterator[Catalog]:
    with Catalog.open(DatabaseConfig(url="sqlite://")) as catalog:
        create_schema(catalog.connection)
        yield catalog


@pytest.fixture
def repo(catalog: Catalog) -> SqlCatalogRepository:
    return SqlCatalogRepository(catalog.connection)


@pytest.fixture
def uow(catalog: Catalog) -> SqlUnitOfWork:
    return SqlUnitOfWork(catalog.connection)


@pytest.fixture
def fetcher() -> FakeFetcher:
    return FakeFetcher()


@pytest.fixture
def clock() -> StepClock:
    return StepClock()


@pytest.fixture
def version_chain(
    repo: SqlCatalogRepository, uow: SqlUnitOfWork, fetcher: FakeFetcher, clock: StepClock
) -> VersionChainService:
    return VersionChainService(
        repo=repo,
        uow=uow,
        fetcher=fetcher,
        resource_maps=OreResourceMapBuilder(clock=clock),
        clock=clock,
    )


@pytest.fixture
def catalog_service(repo: SqlCatalogRepository) -> CatalogService:
    return CatalogService(repo=repo)
