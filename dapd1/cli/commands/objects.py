"""List object metadata with optional filters."""

from datetime import datetime

import cyclopts

from dapd1.cli.console import get_console
from dapd1.cli.util.session import open_session
from dapd1.domain.catalog.query.list_objects import ListObjects

app = cyclopts.App(name="list", help="List objects in the catalog")


@app.default
def list_objects(
    *,
    since: datetime | None = None,
    until: datetime | None = None,
    format: str | None = None,
    start: int = 0,
    count: int | None = None,
    database: str | None = None,
    verbose: bool = False,
) -> None:
    """List objects in the order they were added.

    Args:
        since: Only objects added at or after this time (UTC if no zone).
        until: Only objects added before this time.
        format: Only objects with this format id.
        start: Skip this many matching objects.
        count: Show at most this many objects.
        database: SQLite file or SQLAlchemy URL (default from configuration).
        verbose: Log debug output to stderr.
    """
    console = get_console()

    with open_session(database, verbose) as session:
        result = session.list_objects.run(
            ListObjects(date_from=since, date_to=until, format=format, start=start, count=count)
        )
        console.objects(result.objects)
        console.info(f"Showing {len(result.objects)} of {result.total} from {result.start}")
