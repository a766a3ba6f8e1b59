"""Click CLI for the link catalog."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from link_catalog.config import Settings

console = Console()

BANNER = """
[bold cyan]Link Catalog[/bold cyan] - people, keywords and links, searchable
"""


def _load_settings(data_dir: Path | None = None) -> Settings:
    """Load settings from environment, optionally overriding the data directory."""
    if data_dir is not None:
        return Settings(data_dir=data_dir)
    return Settings()


def _load_catalog(settings: Settings):
    """Build the catalog, exiting with status 1 on unreadable or invalid tables."""
    from link_catalog.catalog import Catalog
    from link_catalog.errors import CatalogError

    try:
        return Catalog.from_settings(settings)
    except FileNotFoundError as exc:
        console.print(f"[red]Missing table: {exc.filename}[/red]")
    except ValidationError as exc:
        console.print(f"[red]Invalid table row:[/red]\n{escape(str(exc))}")
    except CatalogError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
    sys.exit(1)


# ---------------------------------------------------------------------------
# Top-level group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="link-catalog")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log progress to stderr.")
def cli(verbose: bool) -> None:
    """Link Catalog -- aggregate, validate and search people, keywords and links.

    Tables are read from LINKCAT_DATA_DIR (links.json, people.json,
    keywords.json) unless --data-dir is given.
    """
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    console.print(BANNER)


_data_dir_option = click.option(
    "--data-dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Directory holding links.json, people.json and keywords.json.",
)


# ---------------------------------------------------------------------------
# validate
# ---------------------------------------------------------------------------


@cli.command()
@_data_dir_option
def validate(data_dir: Path | None) -> None:
    """Validate the tables' schema and cross-references.

    \b
    Examples:
      link-catalog validate
      link-catalog validate --data-dir ./data
    """
    from link_catalog.models.entities import Keyword, Link, Person
    from link_catalog.models.registry import LookupTable, load_records
    from link_catalog.validators.integrity import IntegrityChecker
    from link_catalog.validators.schema import SchemaValidator

    settings = _load_settings(data_dir)
    paths = {
        "links": settings.resolved_links_path,
        "people": settings.resolved_people_path,
        "keywords": settings.resolved_keywords_path,
    }

    schema_results = SchemaValidator().validate_tables(paths)
    if any(schema_results.values()):
        console.print("[bold red]Schema validation failed; skipping integrity checks.[/bold red]")
        sys.exit(1)

    try:
        checker = IntegrityChecker(
            LookupTable.from_json(paths["people"], Person),
            LookupTable.from_json(paths["keywords"], Keyword),
            suggest_threshold=settings.suggest_threshold,
        )
        links = load_records(paths["links"], Link)
    except ValidationError as exc:
        console.print(f"[red]Invalid table row:[/red]\n{escape(str(exc))}")
        sys.exit(1)

    errors = checker.check(links)
    for err in errors:
        console.print(f"  [red]{escape(err)}[/red]")
    if errors:
        sys.exit(1)


# ---------------------------------------------------------------------------
# stats
# ---------------------------------------------------------------------------


@cli.command()
@_data_dir_option
def stats(data_dir: Path | None) -> None:
    """Print collection sizes, unresolved references and index statistics."""
    from link_catalog.utils.progress import log_summary

    catalog = _load_catalog(_load_settings(data_dir))
    log_summary(catalog)


# ---------------------------------------------------------------------------
# search
# ---------------------------------------------------------------------------


@cli.command()
@click.argument("collection", type=click.Choice(["links", "people", "keywords"]))
@click.argument("query", type=str)
@_data_dir_option
@click.option("--limit", "-n", type=int, default=10, help="Number of results.")
def search(collection: str, query: str, data_dir: Path | None, limit: int) -> None:
    """Ranked full-text search over one collection.

    \b
    Examples:
      link-catalog search people "evan"
      link-catalog search links "parsing json" --limit 5
    """
    from link_catalog.processors.search_index import run_query

    catalog = _load_catalog(_load_settings(data_dir))
    index = catalog.indexes[collection]

    console.print(f'Searching {collection} for: [bold cyan]"{escape(query)}"[/bold cyan]')
    hits = run_query(index, query, expand_prefixes=catalog.expand_prefixes)[:limit]

    if not hits:
        console.print("[yellow]No results found.[/yellow]")
        return

    table = Table(title=f"Top {len(hits)} Results")
    table.add_column("#", justify="right")
    table.add_column("Name", style="cyan", max_width=50)
    table.add_column("Score", justify="right", style="bold")
    if collection != "links":
        table.add_column("Links", justify="right")

    for rank, hit in enumerate(hits, start=1):
        row = [str(rank), escape(hit.ref), f"{hit.score:.2f}"]
        if collection != "links":
            row.append(str(index.get(hit.ref).quantity))
        table.add_row(*row)

    console.print(table)


# ---------------------------------------------------------------------------
# export
# ---------------------------------------------------------------------------


@cli.command()
@_data_dir_option
@click.option("--output", "-o", type=click.Path(path_type=Path), default=None)
def export(data_dir: Path | None, output: Path | None) -> None:
    """Export the sorted, quantity-annotated catalog as JSON."""
    from link_catalog.exporters.json_export import JsonExporter

    settings = _load_settings(data_dir)
    catalog = _load_catalog(settings)
    JsonExporter().export(catalog, output or settings.output_dir)


if __name__ == "__main__":
    cli()
