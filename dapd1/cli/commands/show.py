"""Show one PID's metadata."""

import cyclopts

from dapd1.cli.console import get_console
from dapd1.cli.util.session import open_session
from dapd1.domain.catalog.query.get_object import GetObject

app = cyclopts.App(name="show", help="Show the metadata for a PID")


@app.default
def show(
    pid: str,
    /,
    *,
    resource_map: bool = False,
    database: str | None = None,
    verbose: bool = False,
) -> None:
    """Show a PID's system metadata and version chain neighbours.

    Args:
        pid: A minted PID.
        resource_map: For an ORE PID, print the stored resource map document.
        database: SQLite file or SQLAlchemy URL (default from configuration).
        verbose: Log debug output to stderr.
    """
    console = get_console()

    with open_session(database, verbose) as session:
        detail = session.get_object.run(GetObject(pid=pid))
        console.object_detail(detail)
        if resource_map and detail.members:
            console.print(session.catalog_service.get_resource_map(pid).decode("utf-8"), markup=False)
