"""Console output for the CLI.

Provides a Console class that wraps rich for consistent output.
All CLI output should go through this module.
"""

from typing import Any

from rich.console import Console as RichConsole
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from dapd1.domain.catalog.model.dates import format_timestamp
from dapd1.domain.catalog.model.entity import CatalogDump, ObjectRecord
from dapd1.domain.catalog.query.get_object import ObjectDetail

OBJECT_COLUMNS: list[tuple[str, str]] = [
    ("id", "Id"),
    ("date_added", "Date"),
    ("format", "FormatId"),
    ("size", "Size"),
    ("checksum", "Checksum"),
    ("algorithm", "Algorithm"),
]


def object_row(record: ObjectRecord) -> dict[str, Any]:
    return {
        **record.model_dump(),
        "date_added": format_timestamp(record.date_added),
    }


class Console:
    """CLI output manager wrapping rich.

    Status and errors go to stderr; tables and data go to stdout.
    """

    def __init__(
        self,
        *,
        force_terminal: bool | None = None,
        quiet: bool = False,
    ) -> None:
        """Initialize the console.

        Args:
            force_terminal: Force terminal mode (True/False) or auto-detect (None).
            quiet: Suppress non-essential output.
        """
        self._console = RichConsole(force_terminal=force_terminal, stderr=False)
        self._err_console = RichConsole(force_terminal=force_terminal, stderr=True)
        self._quiet = quiet

    # -------------------------------------------------------------------------
    # Status messages
    # -------------------------------------------------------------------------

    def success(self, message: str) -> None:
        """Print a success message."""
        self._console.print(f"[green]✓[/green] {message}")

    def error(self, message: str, *, hint: str | None = None) -> None:
        """Print an error message to stderr."""
        self._err_console.print(f"[red]✗[/red] Error: {escape(message)}")
        if hint:
            self._err_console.print(f"  [dim]{hint}[/dim]")

    def warning(self, message: str) -> None:
        """Print a warning message to stderr."""
        self._err_console.print(f"[yellow]⚠[/yellow] {escape(message)}")

    def info(self, message: str) -> None:
        """Print an info message (suppressed in quiet mode)."""
        if not self._quiet:
            self._console.print(f"[dim]{message}[/dim]")

    # -------------------------------------------------------------------------
    # Structured output
    # -------------------------------------------------------------------------

    def print(self, *args: Any, **kwargs: Any) -> None:
        """Print to console (pass-through to rich)."""
        self._console.print(*args, **kwargs)

    def table(
        self,
        rows: list[dict[str, Any]],
        columns: list[tuple[str, str]],  # (key, header)
        *,
        title: str | None = None,
    ) -> None:
        table = Table(title=title, show_header=True, header_style="bold")
        for _, header in columns:
            table.add_column(header, overflow="fold")
        for row in rows:
            table.add_row(*(str(row.get(key, "")) for key, _ in columns))
        self._console.print(table)

    def objects(self, records: list[ObjectRecord], *, title: str | None = "Objects") -> None:
        self.table([object_row(r) for r in records], OBJECT_COLUMNS, title=title)

    def dump(self, dump: CatalogDump) -> None:
        """Print every catalog table (resource map bodies are omitted)."""
        self.objects(dump.objects, title="Objects")
        self.table(
            [d.model_dump() for d in dump.datasets],
            [("base_url", "Base URL"), ("sdo_id", "SDO Id"), ("smo_id", "SMO Id"), ("ore_id", "ORE Id")],
            title="Datasets",
        )
        self.table(
            [{**loc.model_dump(), "kind": loc.kind.value.upper()} for loc in dump.locations],
            [("kind", "Kind"), ("id", "Id"), ("fetch_url", "DAP URL")],
            title="Locations",
        )
        self.table(
            [a.model_dump(exclude={"document"}) for a in dump.aggregations],
            [("id", "Id"), ("sdo_id", "SDO Id"), ("smo_id", "SMO Id")],
            title="Aggregations",
        )
        self.table(
            [e.model_dump() for e in dump.obsoletes],
            [("new_id", "Id"), ("previous_id", "Previous")],
            title="Obsoletes",
        )

    def object_detail(self, detail: ObjectDetail) -> None:
        record = detail.record
        lines = [
            f"[cyan]Format:[/cyan] {record.format}",
            f"[cyan]Serial number:[/cyan] {record.serial_number}",
            f"[cyan]Date added:[/cyan] {format_timestamp(record.date_added)}",
            f"[cyan]Size:[/cyan] {record.size}",
            f"[cyan]Checksum:[/cyan] {record.checksum} ({record.algorithm})",
        ]
        if detail.fetch_url:
            lines.append(f"[cyan]DAP URL:[/cyan] {detail.fetch_url}")
        for member in detail.members:
            lines.append(f"[cyan]Aggregates:[/cyan] {member}")
        if detail.obsoletes:
            lines.append(f"[cyan]Obsoletes:[/cyan] {detail.obsoletes}")
        if detail.obsoleted_by:
            lines.append(f"[cyan]Obsoleted by:[/cyan] {detail.obsoleted_by}")

        self._console.print(
            Panel("\n".join(lines), title=f"[bold]{record.id}[/bold]", border_style="blue", padding=(1, 2))
        )


# Module-level default instance for convenience
_default: Console | None = None


def get_console() -> Console:
    """Get the default console instance."""
    global _default
    if _default is None:
        _default = Console()
    return _default
