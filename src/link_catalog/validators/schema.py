"""Schema validation for the catalog's static JSON tables.

Validates raw dicts and JSON files against the Link, Person and Keyword
Pydantic models, reporting structured error messages for any fields that
fail validation.
"""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import BaseModel, ValidationError
from rich.console import Console
from rich.table import Table

from link_catalog.models.entities import Keyword, Link, Person

TABLE_MODELS: dict[str, type[BaseModel]] = {
    "links": Link,
    "people": Person,
    "keywords": Keyword,
}


class SchemaValidator:
    """Validate table rows against their Pydantic schema."""

    def __init__(self) -> None:
        self._console = Console()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def validate_record(self, data: dict, model: type[BaseModel]) -> list[str]:
        """Validate a single row against *model*.

        Returns
        -------
        list[str]
            A list of human-readable error messages.  Empty if valid.
        """
        try:
            model.model_validate(data)
            return []
        except ValidationError as exc:
            label = data.get("id") or data.get("name") or "<unknown>"
            return self._format_validation_errors(exc, str(label))

    def validate_file(self, path: Path, model: type[BaseModel]) -> list[str]:
        """Load a JSON file and validate every row in it.

        The file must contain either a JSON array of objects or a single
        object.

        Returns
        -------
        list[str]
            A list of all validation error messages across all rows.
        """
        path = Path(path)
        errors: list[str] = []

        if not path.exists():
            return [f"File not found: {path}"]

        if not path.suffix.lower() == ".json":
            return [f"Expected a .json file, got: {path.suffix}"]

        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            return [f"Invalid JSON in {path.name}: {exc}"]

        if isinstance(raw, dict):
            rows = [raw]
        elif isinstance(raw, list):
            rows = raw
        else:
            return [f"Expected a JSON object or array in {path.name}, got {type(raw).__name__}"]

        invalid = 0
        for idx, row in enumerate(rows):
            if not isinstance(row, dict):
                errors.append(f"{path.name}[{idx}]: Expected object, got {type(row).__name__}")
                invalid += 1
                continue

            row_errors = self.validate_record(row, model)
            if row_errors:
                invalid += 1
            for err in row_errors:
                errors.append(f"{path.name}[{idx}]: {err}")

        if errors:
            self._console.print(
                f"[yellow]{path.name}:[/yellow] {len(rows) - invalid}/{len(rows)} valid, "
                f"{len(errors)} error(s)"
            )
        else:
            self._console.print(f"[green]{path.name}:[/green] {len(rows)} rows, all valid")

        return errors

    def validate_tables(self, paths: dict[str, Path]) -> dict[str, list[str]]:
        """Validate each table file (keyed by table name) and print a summary."""
        results: dict[str, list[str]] = {}

        for table_name, path in paths.items():
            results[table_name] = self.validate_file(path, TABLE_MODELS[table_name])

        self._console.print()
        table = Table(title="Validation Summary", title_style="bold cyan")
        table.add_column("Table", style="bold")
        table.add_column("Errors", justify="right")
        table.add_column("Status")

        for table_name, errors in results.items():
            status = "[red]FAIL[/red]" if errors else "[green]PASS[/green]"
            table.add_row(table_name, str(len(errors)), status)

        self._console.print(table)
        return results

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _format_validation_errors(exc: ValidationError, label: str) -> list[str]:
        """Convert a Pydantic ValidationError into readable strings."""
        errors: list[str] = []

        for err in exc.errors():
            location = " -> ".join(str(loc) for loc in err["loc"])
            errors.append(f"[{label}] {location}: {err['msg']} (type={err['type']})")

        return errors
