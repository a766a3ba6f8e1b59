"""Shared test fixtures for the link catalog test suite."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from link_catalog.catalog import Catalog
from link_catalog.config import Settings
from link_catalog.models.entities import Keyword, Link, Person
from link_catalog.models.registry import LookupTable


@pytest.fixture
def sample_people() -> list[Person]:
    """A small people table; ``unused`` is never cited by a link."""
    return [
        Person(id="evan", name="Evan Czaplicki", twitter="czaplic", github="evancz"),
        Person(id="richard", name="Richard Feldman", twitter="rtfeldman", github="rtfeldman"),
        Person(id="luca", name="Luca Mugnaini", twitter="luca_mug", github="lucamug"),
        Person(id="unused", name="Nobody Cited"),
    ]


@pytest.fixture
def sample_keywords() -> list[Keyword]:
    return [
        Keyword(id="json", name="JSON"),
        Keyword(id="css", name="CSS"),
        Keyword(id="parsing", name="Parsing"),
        Keyword(id="talk", name="Talk"),
    ]


@pytest.fixture
def sample_links() -> list[Link]:
    """Links citing the sample tables, plus one unknown person and keyword."""
    return [
        Link(
            name="Styling with elm-css",
            description="Type-safe CSS",
            url="https://example.com/elm-css",
            authorIds=["luca", "ghost"],
            keywordIds=["css", "animation"],
        ),
        Link(
            name="Elm in Production 10",
            description="Ten years of Elm in production",
            authorIds=["richard", "evan"],
            keywordIds=["talk"],
        ),
        Link(
            name="Decoding JSON",
            description="How to write JSON decoders",
            authorIds=["evan"],
            keywordIds=["json", "parsing"],
        ),
        Link(
            name="Elm in Production 2",
            description="Lessons from shipping Elm at scale",
            authorIds=["richard"],
            keywordIds=["talk"],
        ),
    ]


@pytest.fixture
def people_table(sample_people: list[Person]) -> LookupTable:
    return LookupTable(sample_people)


@pytest.fixture
def keywords_table(sample_keywords: list[Keyword]) -> LookupTable:
    return LookupTable(sample_keywords)


@pytest.fixture
def catalog(
    sample_links: list[Link], people_table: LookupTable, keywords_table: LookupTable
) -> Catalog:
    return Catalog.build(sample_links, people_table, keywords_table)


@pytest.fixture
def tables_dir(
    tmp_path: Path,
    sample_links: list[Link],
    sample_people: list[Person],
    sample_keywords: list[Keyword],
) -> Path:
    """Write the sample tables as links.json, people.json and keywords.json."""
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    for filename, rows in (
        ("links.json", sample_links),
        ("people.json", sample_people),
        ("keywords.json", sample_keywords),
    ):
        data = [row.model_dump(exclude_none=True) for row in rows]
        (data_dir / filename).write_text(json.dumps(data), encoding="utf-8")
    return data_dir


@pytest.fixture
def settings(tmp_path: Path, tables_dir: Path) -> Settings:
    """Create a Settings instance pointing at the sample tables."""
    return Settings(data_dir=tables_dir, output_dir=tmp_path / "output")
