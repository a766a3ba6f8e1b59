"""Data integrity checks for the link catalog.

Validates cross-references between links and the people/keyword tables,
uniqueness constraints and required fields: everything that goes beyond
schema validation.
"""

from __future__ import annotations

from collections import Counter

from rich.console import Console
from rich.table import Table

from link_catalog.models.entities import Link
from link_catalog.models.registry import LookupTable
from link_catalog.processors.aggregator import author_ids, keyword_ids


class IntegrityChecker:
    """Run integrity checks on the link table against its lookup tables.

    Checks include:
    1. No id appears twice in the people or keywords table
    2. No display name appears twice in one collection (it would collide as
       a search reference key)
    3. Required fields are non-empty
    4. Every author and keyword id cited by a link resolves
    """

    def __init__(
        self,
        people: LookupTable,
        keywords: LookupTable,
        suggest_threshold: int = 80,
    ) -> None:
        self._people = people
        self._keywords = keywords
        self._suggest_threshold = suggest_threshold
        self._console = Console()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def check(self, links: list[Link], *, report: bool = True) -> list[str]:
        """Run all integrity checks.

        Parameters
        ----------
        links:
            The link table to validate.
        report:
            Print a summary table to the console.

        Returns
        -------
        list[str]
            Human-readable messages, each prefixed with its check code.
            Empty if all checks pass.
        """
        errors: list[str] = []

        errors.extend(self._check_duplicate_ids())
        errors.extend(self._check_duplicate_names(links))
        errors.extend(self._check_required_fields(links))
        errors.extend(
            self._check_references(links, self._people, author_ids, "UNKNOWN_PERSON", "person")
        )
        errors.extend(
            self._check_references(
                links, self._keywords, keyword_ids, "UNKNOWN_KEYWORD", "keyword"
            )
        )

        if report:
            self._print_summary(links, errors)

        return errors

    # ------------------------------------------------------------------
    # Individual checks
    # ------------------------------------------------------------------

    def _check_duplicate_ids(self) -> list[str]:
        errors: list[str] = []
        for label, table in (("person", self._people), ("keyword", self._keywords)):
            for entity_id in table.duplicate_ids:
                errors.append(f"DUPLICATE_ID: {label} id '{entity_id}' appears more than once")
        return errors

    def _check_duplicate_names(self, links: list[Link]) -> list[str]:
        """Names double as search reference keys, so they must be unique."""
        errors: list[str] = []
        collections = (
            ("link", [link.name for link in links]),
            ("person", [p.name for p in self._people]),
            ("keyword", [k.name for k in self._keywords]),
        )
        for label, names in collections:
            for name, count in Counter(names).items():
                if count > 1:
                    errors.append(
                        f"DUPLICATE_NAME: {label} name '{name}' appears {count} times"
                    )
        return errors

    def _check_required_fields(self, links: list[Link]) -> list[str]:
        errors: list[str] = []

        for i, link in enumerate(links):
            if not link.name.strip():
                errors.append(f"EMPTY_FIELD: link #{i} has empty 'name'")

        for label, table in (("person", self._people), ("keyword", self._keywords)):
            for entity in table:
                if not entity.id.strip():
                    errors.append(f"EMPTY_FIELD: {label} '{entity.name}' has empty 'id'")
                if not entity.name.strip():
                    errors.append(f"EMPTY_FIELD: {label} '{entity.id}' has empty 'name'")

        return errors

    def _check_references(self, links, table, select_ids, code, label) -> list[str]:
        """Check that every cited id resolves, suggesting the closest known id."""
        errors: list[str] = []

        for link in links:
            for entity_id in select_ids(link):
                if entity_id in table:
                    continue
                message = f"{code}: link '{link.name}' references unknown {label} id '{entity_id}'"
                suggestion = table.suggest(entity_id, self._suggest_threshold)
                if suggestion is not None:
                    message += f" (did you mean '{suggestion}'?)"
                errors.append(message)

        return errors

    # ------------------------------------------------------------------
    # Reporting
    # ------------------------------------------------------------------

    def _print_summary(self, links: list[Link], errors: list[str]) -> None:
        """Print a formatted summary of integrity check results."""
        self._console.print()
        self._console.rule("[bold cyan]Integrity Check Results[/bold cyan]")
        self._console.print()

        categories: Counter[str] = Counter()
        for err in errors:
            prefix = err.split(":")[0] if ":" in err else "OTHER"
            categories[prefix] += 1

        table = Table(show_lines=False)
        table.add_column("Check", style="bold")
        table.add_column("Errors", justify="right")
        table.add_column("Status")

        check_names = {
            "DUPLICATE_ID": "Duplicate ids",
            "DUPLICATE_NAME": "Duplicate names",
            "EMPTY_FIELD": "Required fields",
            "UNKNOWN_PERSON": "Person references",
            "UNKNOWN_KEYWORD": "Keyword references",
        }

        for check_key, label in check_names.items():
            count = categories.get(check_key, 0)
            status = "[green]PASS[/green]" if count == 0 else f"[red]{count} error(s)[/red]"
            table.add_row(label, str(count), status)

        self._console.print(table)
        self._console.print()

        self._console.print(f"Links checked:   {len(links):,}")
        self._console.print(f"  People:        {len(self._people):,}")
        self._console.print(f"  Keywords:      {len(self._keywords):,}")
        self._console.print()

        if errors:
            self._console.print(f"[bold red]FAILED: {len(errors):,} error(s) found.[/bold red]")
        else:
            self._console.print("[bold green]PASSED: All integrity checks passed.[/bold green]")
