"""Record a new version of a dataset."""

import cyclopts

from dapd1.cli.console import get_console
from dapd1.cli.util.session import open_session
from dapd1.domain.catalog.command.update import UpdateDataset

app = cyclopts.App(name="update", help="Record a new version of a dataset")


@app.default
def update(
    url: str,
    /,
    *,
    obsoletes: str | None = None,
    database: str | None = None,
    verbose: bool = False,
) -> None:
    """Mint the next serial number for a registered dataset.

    Args:
        url: Base URL of the dataset's new version.
        obsoletes: Registered URL that ``url`` replaces. Without it, ``url``
            itself must be registered and is updated in place.
        database: SQLite file or SQLAlchemy URL (default from configuration).
        verbose: Log debug output to stderr.
    """
    console = get_console()

    with open_session(database, verbose) as session:
        result = session.update_dataset.run(UpdateDataset(base_url=url, obsoletes=obsoletes))
        console.success(f"Updated {url} to {result.sdo_id}")
