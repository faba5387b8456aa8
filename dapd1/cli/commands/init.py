"""Create the catalog tables in a new database."""

import cyclopts

from dapd1.cli.console import get_console
from dapd1.cli.util.session import open_session
from dapd1.domain.shared.error import StorageUnavailableError
from dapd1.infrastructure.persistence.schema import create_schema, is_valid

app = cyclopts.App(name="init", help="Create the tables for a blank catalog")


@app.default
def init(*, database: str | None = None, verbose: bool = False) -> None:
    """Create the catalog tables.

    Fails if any of the tables already exist.

    Args:
        database: SQLite file or SQLAlchemy URL (default from configuration).
        verbose: Log debug output to stderr.
    """
    console = get_console()

    with open_session(database, verbose, require_valid=False) as session:
        create_schema(session.catalog.connection)
        if not is_valid(session.catalog.connection):
            raise StorageUnavailableError(
                f"Catalog ({session.catalog.name}) was initialized but is not valid"
            )
        console.success(f"Initialized catalog {session.catalog.name}")
