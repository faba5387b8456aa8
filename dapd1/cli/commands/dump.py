"""Print every table in the catalog."""

import cyclopts

from dapd1.cli.console import get_console
from dapd1.cli.util.session import open_session

app = cyclopts.App(name="dump", help="Print the catalog contents")


@app.default
def dump(*, database: str | None = None, verbose: bool = False) -> None:
    """Print all catalog tables in insertion order.

    Args:
        database: SQLite file or SQLAlchemy URL (default from configuration).
        verbose: Log debug output to stderr.
    """
    console = get_console()

    with open_session(database, verbose) as session:
        console.dump(session.catalog_service.dump())
