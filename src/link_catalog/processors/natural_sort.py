"""Natural ("human") ordering of display names.

``"Part 2"`` sorts before ``"Part 10"`` because digit runs are compared by
their integer value.  Text runs are compared case-folded with accents
stripped, and the untouched string breaks any remaining tie, so the key is a
total order over all strings.
"""

from __future__ import annotations

import re
import unicodedata
from collections.abc import Callable, Iterable
from typing import TypeVar

T = TypeVar("T")

_DIGIT_RUN = re.compile(r"(\d+)")


def _fold(text: str) -> str:
    """Case-fold and drop combining marks (``"Émile"`` -> ``"emile"``)."""
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch)).casefold()


def natural_key(text: str) -> tuple[tuple[str | int, ...], str]:
    """Return a sort key that orders *text* naturally.

    ``re.split`` with a capturing group always alternates text and digit
    runs (text at even positions, digits at odd ones), so two keys never
    compare a ``str`` against an ``int``.
    """
    parts = _DIGIT_RUN.split(text)
    runs: list[str | int] = []
    for i, part in enumerate(parts):
        runs.append(int(part) if i % 2 else _fold(part))
    return tuple(runs), text


def natural_sorted(items: Iterable[T], key: Callable[[T], str]) -> list[T]:
    """Stable sort of *items* by the natural order of ``key(item)``."""
    return sorted(items, key=lambda item: natural_key(key(item)))
