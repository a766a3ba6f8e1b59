"""Id-keyed lookup tables for people and keywords."""

from __future__ import annotations

import json
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Generic, Protocol, TypeVar

from pydantic import BaseModel
from rapidfuzz import fuzz, process


class _Identified(Protocol):
    id: str
    name: str


E = TypeVar("E", bound=_Identified)
M = TypeVar("M", bound=BaseModel)


def load_records(path: Path, model: type[M]) -> list[M]:
    """Read a JSON array from *path* and validate every entry as *model*.

    A file holding a single JSON object is read as a one-row table.  Raises
    ``pydantic.ValidationError`` on the first invalid entry.
    """
    raw = json.loads(Path(path).read_text(encoding="utf-8"))
    if isinstance(raw, dict):
        raw = [raw]
    return [model.model_validate(entry) for entry in raw]


class LookupTable(Generic[E]):
    """In-memory, read-only table of entities keyed by their ``id``.

    The table is loaded once at startup and never mutated.  When the raw rows
    contain the same id more than once the first row wins and the id is
    reported through :attr:`duplicate_ids` so integrity checks can flag it.

    Expected JSON format::

        [
            {"id": "evan", "name": "Evan Czaplicki", "twitter": "czaplic"},
            ...
        ]
    """

    def __init__(self, rows: Iterable[E]) -> None:
        self._by_id: dict[str, E] = {}
        self._duplicate_ids: list[str] = []

        for row in rows:
            if row.id in self._by_id:
                if row.id not in self._duplicate_ids:
                    self._duplicate_ids.append(row.id)
                continue
            self._by_id[row.id] = row

    # ------------------------------------------------------------------
    # Factory
    # ------------------------------------------------------------------

    @classmethod
    def from_json(cls, path: Path, model: type[BaseModel]) -> LookupTable:
        """Load a table from a JSON array of *model* records."""
        return cls(load_records(path, model))

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def get(self, entity_id: str) -> E | None:
        """Return the entity for *entity_id*, or ``None``."""
        return self._by_id.get(entity_id)

    @property
    def duplicate_ids(self) -> list[str]:
        return list(self._duplicate_ids)

    def suggest(self, entity_id: str, threshold: int = 80) -> str | None:
        """Return the closest known id to *entity_id*, or ``None``.

        Only used to make unresolved-reference reports actionable
        ("did you mean ...?").  Search never goes through here.
        """
        if not self._by_id:
            return None

        result = process.extractOne(
            entity_id,
            list(self._by_id),
            scorer=fuzz.ratio,
            score_cutoff=threshold,
        )
        if result is None:
            return None

        matched_id, _score, _index = result
        return matched_id

    def __iter__(self) -> Iterator[E]:
        return iter(self._by_id.values())

    def __len__(self) -> int:
        return len(self._by_id)

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self._by_id
