"""JSON exporter for the derived catalog.

Writes the snapshot the front end renders from: the naturally sorted
collections with their quantities, plus the unresolved-reference lists.
"""

from __future__ import annotations

import json
from pathlib import Path

from rich.console import Console

from link_catalog.catalog import Catalog


class JsonExporter:
    """Export a built catalog to JSON."""

    def __init__(self) -> None:
        self._console = Console()

    def to_dict(self, catalog: Catalog) -> dict:
        """Return the JSON-ready snapshot of *catalog*.

        Keys match the front end's field names (``authorIds``,
        ``sortedPeopleWithQuantity`` ...), and unset optional fields are
        left out.
        """
        return {
            "links": [
                link.model_dump(exclude_none=True) for link in catalog.sorted_links
            ],
            "sortedPeopleWithQuantity": [
                wq.model_dump(exclude_none=True)
                for wq in catalog.sorted_people_with_quantity
            ],
            "sortedKeywordsWithQuantity": [
                wq.model_dump(exclude_none=True)
                for wq in catalog.sorted_keywords_with_quantity
            ],
            "missingPeople": list(catalog.missing_people),
            "missingKeywords": list(catalog.missing_keywords),
        }

    def export(
        self,
        catalog: Catalog,
        output_dir: Path,
        filename: str = "catalog.json",
    ) -> Path:
        """Write the catalog snapshot to ``output_dir / filename``.

        Returns
        -------
        Path
            The path to the written JSON file.
        """
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        out_path = output_dir / filename

        out_path.write_text(
            json.dumps(self.to_dict(catalog), indent=2, ensure_ascii=False),
            encoding="utf-8",
        )

        size_kb = out_path.stat().st_size / 1024
        self._console.print(
            f"[green]Exported {len(catalog.sorted_links):,} links, "
            f"{len(catalog.sorted_people_with_quantity):,} people and "
            f"{len(catalog.sorted_keywords_with_quantity):,} keywords to "
            f"{out_path.resolve()} ({size_kb:.1f} KB)[/green]"
        )
        return out_path
