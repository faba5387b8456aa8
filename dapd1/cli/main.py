"""Main CLI application using Cyclopts."""

import sys

import cyclopts

from dapd1 import __version__
from dapd1.cli.commands import add, dump, init, objects, read, show, update
from dapd1.cli.console import get_console
from dapd1.domain.shared.error import CatalogError

app = cyclopts.App(
    name="dapd1",
    help="Catalog of DAP datasets published as DataONE objects",
    version=__version__,
)

app.command(init.app, name="init")
app.command(add.app, name="add")
app.command(update.app, name="update")
app.command(read.app, name="read")
app.command(dump.app, name="dump")
app.command(show.app, name="show")
app.command(objects.app, name="list")


def main(tokens: list[str] | None = None) -> None:
    """Console entry point: errors go to stderr and end the process with status 1."""
    try:
        result = app(tokens)
    except CatalogError as e:
        get_console().error(e.message)
        sys.exit(1)

    if isinstance(result, int) and result:
        sys.exit(1)


if __name__ == "__main__":
    main()
