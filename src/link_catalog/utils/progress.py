"""Rich summary tables for catalog builds."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from link_catalog.catalog import Catalog

console = Console()


def summary_table(catalog: Catalog) -> Table:
    """Return a table of collection sizes, unresolved ids and skipped documents."""
    table = Table(title="Catalog Summary", show_header=True, header_style="bold cyan")
    table.add_column("Collection", style="bold")
    table.add_column("Entries", justify="right")
    table.add_column("Indexed terms", justify="right")
    table.add_column("Unresolved", justify="right")
    table.add_column("Skipped", justify="right")

    unresolved = {
        "links": None,
        "people": len(catalog.missing_people),
        "keywords": len(catalog.missing_keywords),
    }

    for name, index in catalog.indexes.items():
        missing = unresolved.get(name)
        if missing is None:
            missing_cell = "-"
        elif missing:
            missing_cell = f"[red]{missing}[/red]"
        else:
            missing_cell = "0"
        skipped = len(index.skipped)
        table.add_row(
            name,
            f"{len(index):,}",
            f"{len(index.vocabulary):,}",
            missing_cell,
            f"[yellow]{skipped}[/yellow]" if skipped else "0",
        )

    return table


def log_summary(catalog: Catalog) -> None:
    """Print the summary table, followed by any unresolved ids."""
    console.print()
    console.print(summary_table(catalog))

    if catalog.missing_people:
        people = escape(", ".join(catalog.missing_people))
        console.print(f"[red]Unresolved people:[/red] {people}")
    if catalog.missing_keywords:
        keywords = escape(", ".join(catalog.missing_keywords))
        console.print(f"[red]Unresolved keywords:[/red] {keywords}")
    console.print()
