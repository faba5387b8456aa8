"""Wiring for CLI commands: config, logging, the catalog handle and handlers."""

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

import httpx

from dapd1.config import Config, configure_logging
from dapd1.domain.catalog.command.add import AddDatasetHandler
from dapd1.domain.catalog.command.update import UpdateDatasetHandler
from dapd1.domain.catalog.query.get_object import GetObjectHandler
from dapd1.domain.catalog.query.list_objects import ListObjectsHandler
from dapd1.domain.catalog.service.catalog import CatalogService
from dapd1.domain.catalog.service.version_chain import VersionChainService
from dapd1.domain.shared.error import StorageUnavailableError
from dapd1.infrastructure.http.fetcher import HttpDigestFetcher
from dapd1.infrastructure.ore.resource_map import OreResourceMapBuilder
from dapd1.infrastructure.persistence.database import Catalog
from dapd1.infrastructure.persistence.repository.catalog import SqlCatalogRepository
from dapd1.infrastructure.persistence.schema import is_valid
from dapd1.infrastructure.persistence.uow import SqlUnitOfWork


def database_url(database: str) -> str:
    """Accept either a SQLAlchemy URL or a plain path to a SQLite file."""
    if "://" in database:
        return database
    return f"sqlite:///{database}"


def load_config(database: str | None = None, verbose: bool = False) -> Config:
    config = Config()
    if database is not None:
        config.database.url = database_url(database)
    if verbose:
        config.logging.level = "DEBUG"
    return config


@dataclass
class CatalogSession:
    """Everything one CLI invocation needs, built over one open catalog."""

    catalog: Catalog
    config: Config
    client: httpx.Client
    repo: SqlCatalogRepository = field(init=False)
    catalog_service: CatalogService = field(init=False)
    version_chain: VersionChainService = field(init=False)

    def __post_init__(self) -> None:
        self.repo = SqlCatalogRepository(self.catalog.connection)
        self.catalog_service = CatalogService(repo=self.repo)
        self.version_chain = VersionChainService(
            repo=self.repo,
            uow=SqlUnitOfWork(self.catalog.connection),
            fetcher=HttpDigestFetcher(self.client, algorithm=self.config.fetch.algorithm),
            resource_maps=OreResourceMapBuilder(
                resolve_base=self.config.resource_map.resolve_base,
                creator=self.config.resource_map.creator,
            ),
            sdo_suffix=self.config.fetch.sdo_suffix,
            smo_suffix=self.config.fetch.smo_suffix,
        )

    @property
    def add_dataset(self) -> AddDatasetHandler:
        return AddDatasetHandler(version_chain=self.version_chain)

    @property
    def update_dataset(self) -> UpdateDatasetHandler:
        return UpdateDatasetHandler(version_chain=self.version_chain)

    @property
    def list_objects(self) -> ListObjectsHandler:
        return ListObjectsHandler(catalog=self.catalog_service)

    @property
    def get_object(self) -> GetObjectHandler:
        return GetObjectHandler(catalog=self.catalog_service)


@contextmanager
def open_session(
    database: str | None = None,
    verbose: bool = False,
    *,
    require_valid: bool = True,
) -> Iterator[CatalogSession]:
    """Open the configured catalog and close it on every exit path.

    Raises:
        StorageUnavailableError: If ``require_valid`` and the store does not
            hold exactly the catalog tables.
    """
    config = load_config(database, verbose)
    configure_logging(config.logging)

    with (
        Catalog.open(config.database) as catalog,
        httpx.Client(
            timeout=config.fetch.timeout,
            headers={"User-Agent": config.fetch.user_agent},
            follow_redirects=True,
        ) as client,
    ):
        if require_valid and not is_valid(catalog.connection):
            raise StorageUnavailableError(
                f"Catalog ({catalog.name}) opened but is not valid",
                code="INVALID_CATALOG",
            )
        yield CatalogSession(catalog=catalog, config=config, client=client)
