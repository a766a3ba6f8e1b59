"""Pydantic v2 models for the static entity tables and derived collections."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, Literal, TypeVar

from pydantic import BaseModel, Field

# ---------------------------------------------------------------------------
# Collection names (the three browsable pages)
# ---------------------------------------------------------------------------

Collection = Literal["links", "people", "keywords"]

COLLECTIONS: tuple[Collection, ...] = ("links", "people", "keywords")


# ---------------------------------------------------------------------------
# Static entity tables
# ---------------------------------------------------------------------------


class Person(BaseModel):
    """A person credited as an author of one or more links."""

    model_config = {"frozen": True}

    id: str
    name: str
    twitter: str | None = None  # handle without the leading "@"
    github: str | None = None
    url: str | None = None
    description: str | None = None


class Keyword(BaseModel):
    """A topic tag attached to links."""

    model_config = {"frozen": True}

    id: str
    name: str
    description: str | None = None


class Link(BaseModel):
    """A catalogued link (article, video, talk, package...)."""

    model_config = {"frozen": True}

    name: str
    description: str = ""
    url: str | None = None
    authorIds: list[str] = Field(default_factory=list)
    keywordIds: list[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Derived collections
# ---------------------------------------------------------------------------

T = TypeVar("T")


class WithQuantity(BaseModel, Generic[T]):
    """An entity paired with the number of times links reference it."""

    model_config = {"frozen": True}

    lookup: T
    quantity: int = Field(ge=1)


@dataclass
class AggregationResult:
    """Referenced ids split into resolved entities and unresolved ids.

    ``resolved`` is in natural order of display name and ``missing`` in
    natural order of id.  The two never share an id.
    """

    resolved: list[WithQuantity] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)


class SearchHit(BaseModel):
    """One ranked search result: the document's reference key and its score."""

    model_config = {"frozen": True}

    ref: str
    score: float = Field(gt=0)
