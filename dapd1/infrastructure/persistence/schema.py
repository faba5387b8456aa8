"""Creating and validating the catalog schema."""

import logging

from sqlalchemy import inspect
from sqlalchemy.engine import Connection
from sqlalchemy.exc import SQLAlchemyError

from dapd1.domain.shared.error import PreconditionError, StorageUnavailableError
from dapd1.infrastructure.persistence.tables import TABLE_NAMES, metadata

logger = logging.getLogger(__name__)


def existing_tables(connection: Connection) -> set[str]:
    return set(inspect(connection).get_table_names())


def create_schema(connection: Connection) -> None:
    """Create all catalog tables in an empty store.

    Raises:
        PreconditionError: If any catalog table already exists.
        StorageUnavailableError: If the DDL fails.
    """
    clash = existing_tables(connection) & TABLE_NAMES
    if clash:
        raise PreconditionError(f"Catalog tables already exist: {', '.join(sorted(clash))}")

    if connection.in_transaction():
        connection.rollback()
    try:
        with connection.begin():
            metadata.create_all(connection, checkfirst=False)
    except SQLAlchemyError as e:
        logger.error("Failed to create catalog tables")
        raise StorageUnavailableError(f"Failed to create catalog tables: {e}") from e

    logger.debug("Made catalog tables successfully")


def is_valid(connection: Connection) -> bool:
    """True when the store holds exactly the catalog tables, no more and no fewer."""
    found = existing_tables(connection)
    if connection.in_transaction():
        connection.rollback()

    extra = found - TABLE_NAMES
    if extra:
        logger.debug("Catalog failed validity test; unexpected tables: %s", sorted(extra))
        return False
    missing = TABLE_NAMES - found
    if missing:
        logger.debug("Catalog failed validity test; missing tables: %s", sorted(missing))
        return False
    return True
