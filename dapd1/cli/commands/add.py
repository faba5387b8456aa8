"""Add new datasets to the catalog."""

import cyclopts

from dapd1.cli.console import get_console
from dapd1.cli.util.session import open_session
from dapd1.domain.catalog.command.add import AddDataset
from dapd1.domain.shared.error import CatalogError

app = cyclopts.App(name="add", help="Add new dataset URLs")


@app.default
def add(
    *urls: str,
    database: str | None = None,
    verbose: bool = False,
    keep_going: bool = False,
) -> int:
    """Add one or more DAP dataset URLs at serial number 1.

    Args:
        urls: Base URLs of DAP datasets.
        database: SQLite file or SQLAlchemy URL (default from configuration).
        verbose: Log debug output to stderr.
        keep_going: Report a URL that fails and continue with the rest.

    Returns:
        Number of URLs that failed.
    """
    console = get_console()
    failures = 0

    with open_session(database, verbose) as session:
        for url in urls:
            try:
                result = session.add_dataset.run(AddDataset(base_url=url))
            except CatalogError as e:
                if not keep_going:
                    raise
                failures += 1
                console.warning(f"{url}: {e.message}")
                continue
            console.success(f"Added {url} as {result.sdo_id}")

        if verbose:
            console.info(f"Rows in the catalog: {session.catalog_service.count()}")

    return failures
