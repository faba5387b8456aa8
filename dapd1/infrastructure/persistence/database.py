"""Database engine creation and the catalog handle."""

import logging
import os
from pathlib import Path
from types import TracebackType
from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool

from dapd1.config import DatabaseConfig
from dapd1.domain.shared.error import StorageUnavailableError

logger = logging.getLogger(__name__)


def _is_memory_url(url: str) -> bool:
    return url in ("sqlite://", "sqlite:///:memory:") or url.endswith(":memory:")


def _expand_sqlite_path(url: str) -> str:
    """Expand ~ in SQLite URLs and ensure parent directory exists."""
    if not url.startswith("sqlite") or _is_memory_url(url):
        return url

    # Extract path from URL (sqlite:///path)
    prefix_end = url.index("///") + 3
    prefix = url[:prefix_end]
    path = url[prefix_end:]

    # Expand ~ and make absolute
    expanded = os.path.expanduser(path)
    abs_path = os.path.abspath(expanded)

    # Ensure parent directory exists
    parent = Path(abs_path).parent
    parent.mkdir(parents=True, exist_ok=True)

    return f"{prefix}{abs_path}"


def create_db_engine(config: DatabaseConfig) -> Engine:
    """Create the database engine.

    In-memory SQLite uses a StaticPool so every checkout sees the same database.
    """
    url = _expand_sqlite_path(config.url)

    engine_kwargs: dict[str, Any] = {"echo": config.echo}
    if url.startswith("sqlite") and _is_memory_url(url):
        engine_kwargs["poolclass"] = StaticPool
        engine_kwargs["connect_args"] = {"check_same_thread": False}

    return create_engine(url, **engine_kwargs)


class Catalog:
    """An open catalog: one engine and the one connection that writes to it.

    Use as a context manager so the connection is closed on every exit path::

        with Catalog.open(config.database) as catalog:
            ...
    """

    def __init__(self, engine: Engine, *, owns_engine: bool = True) -> None:
        self.engine = engine
        self._owns_engine = owns_engine
        self._connection: Connection | None = None

    @classmethod
    def open(cls, config: DatabaseConfig) -> "Catalog":
        catalog = cls(create_db_engine(config))
        try:
            return catalog.connect()
        except StorageUnavailableError:
            catalog.engine.dispose()
            raise

    @property
    def name(self) -> str:
        return self.engine.url.render_as_string(hide_password=True)

    @property
    def connection(self) -> Connection:
        if self._connection is None:
            raise StorageUnavailableError(f"Catalog ({self.name}) is not open")
        return self._connection

    def connect(self) -> "Catalog":
        if self._connection is None:
            try:
                self._connection = self.engine.connect()
            except SQLAlchemyError as e:
                logger.error("Failed to open catalog (%s)", self.name)
                raise StorageUnavailableError(f"Failed to open catalog ({self.name}): {e}") from e
            logger.debug("Opened catalog successfully (%s)", self.name)
        return self

    def close(self) -> None:
        if self._connection is not None:
            self._connection.close()
            self._connection = None
            logger.debug("Catalog connection closed (%s)", self.name)
        if self._owns_engine:
            self.engine.dispose()

    def __enter__(self) -> "Catalog":
        return self.connect()

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
