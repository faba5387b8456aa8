"""Bulk load dataset URLs from a file or stdin.

Each line is either ``URL`` (added if new, updated in place if already
registered) or ``NEW_URL,OLD_URL`` (NEW_URL replaces OLD_URL). Blank lines
and lines starting with ``#`` are skipped.
"""

import sys
from typing import NamedTuple

import cyclopts

from dapd1.cli.console import get_console
from dapd1.cli.util.session import CatalogSession, open_session
from dapd1.domain.catalog.command.add import AddDataset, DatasetVersioned
from dapd1.domain.catalog.command.update import UpdateDataset
from dapd1.domain.shared.error import CatalogError, ValidationError

app = cyclopts.App(name="read", help="Add or update datasets listed in a file")


class Entry(NamedTuple):
    url: str
    obsoletes: str | None


def parse_line(raw: str) -> Entry | None:
    """The entry on one line, or None for a blank or comment line.

    Raises:
        ValidationError: On a line with more than two comma-separated fields
            or an empty field.
    """
    line = raw.strip()
    if not line or line.startswith("#"):
        return None
    fields = [f.strip() for f in line.split(",")]
    if len(fields) > 2 or not all(fields):
        raise ValidationError(f"expected 'URL' or 'NEW_URL,OLD_URL', got '{line}'", field="line")
    return Entry(fields[0], fields[1] if len(fields) == 2 else None)


def apply_entry(session: CatalogSession, entry: Entry) -> DatasetVersioned:
    if entry.obsoletes is not None:
        return session.update_dataset.run(UpdateDataset(base_url=entry.url, obsoletes=entry.obsoletes))
    if session.catalog_service.is_registered(entry.url):
        return session.update_dataset.run(UpdateDataset(base_url=entry.url))
    return session.add_dataset.run(AddDataset(base_url=entry.url))


@app.default
def read(
    source: str = "-",
    /,
    *,
    database: str | None = None,
    verbose: bool = False,
    keep_going: bool = False,
) -> int:
    """Read dataset URLs from a file, or from stdin when the file is '-'.

    Args:
        source: File of URLs, one per line.
        database: SQLite file or SQLAlchemy URL (default from configuration).
        verbose: Log debug output to stderr.
        keep_going: Report a line that fails and continue with the rest.

    Returns:
        Number of lines that failed.
    """
    console = get_console()
    failures = 0

    with open_session(database, verbose) as session:
        try:
            stream = sys.stdin if source == "-" else open(source, encoding="utf-8")
        except OSError as e:
            raise ValidationError(f"Cannot read '{source}': {e.strerror}", field="source") from e
        try:
            for line_number, raw in enumerate(stream, 1):
                try:
                    entry = parse_line(raw)
                    if entry is None:
                        continue
                    result = apply_entry(session, entry)
                except CatalogError as e:
                    if not keep_going:
                        raise
                    failures += 1
                    console.warning(f"line {line_number}: {e.message}")
                    continue
                console.success(f"{entry.url} -> {result.sdo_id}")
        finally:
            if stream is not sys.stdin:
                stream.close()

    return failures
