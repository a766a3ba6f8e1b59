"""The derived, read-only catalog held for the lifetime of the process.

Data flow::

    links ──► ReferenceAggregator ──► resolved (natural order) + missing ids
                                        │
                                        ▼
                                   SearchIndex.build  (one per collection)

At query time a filter string goes through the collection's index and the
ranked reference keys are joined back to entities in score order.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from link_catalog.config import Settings
from link_catalog.models.entities import Collection, Keyword, Link, Person, WithQuantity
from link_catalog.models.registry import LookupTable, load_records
from link_catalog.processors.aggregator import (
    ReferenceAggregator,
    author_ids,
    keyword_ids,
    links_by_keyword,
    links_by_person,
)
from link_catalog.processors.natural_sort import natural_sorted
from link_catalog.processors.search_index import (
    KEYWORD_FIELDS,
    LINK_FIELDS,
    PERSON_FIELDS,
    SearchIndex,
    entity_ref,
    link_ref,
    run_query,
)
from link_catalog.processors.stopwords import StopWordFilter

logger = logging.getLogger(__name__)


@dataclass
class Catalog:
    """Sorted collections, unresolved references and per-collection indexes."""

    links: list[Link]
    sorted_links: list[Link]
    sorted_people_with_quantity: list[WithQuantity]
    sorted_keywords_with_quantity: list[WithQuantity]
    missing_people: list[str]
    missing_keywords: list[str]
    indexes: dict[str, SearchIndex] = field(default_factory=dict)
    expand_prefixes: bool = True

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------

    @classmethod
    def build(
        cls,
        links: Iterable[Link],
        people: LookupTable | Iterable[Person],
        keywords: LookupTable | Iterable[Keyword],
        *,
        stop_words: StopWordFilter | None = None,
        expand_prefixes: bool = True,
    ) -> Catalog:
        """Aggregate, sort and index the three static tables.

        Raises
        ------
        IndexKeyCollisionError
            If two entities of one collection share a display name.
        """
        links = list(links)
        people_table = people if isinstance(people, LookupTable) else LookupTable(people)
        keywords_table = (
            keywords if isinstance(keywords, LookupTable) else LookupTable(keywords)
        )
        stop_words = stop_words or StopWordFilter()

        people_result = ReferenceAggregator(people_table, author_ids, "people").aggregate(links)
        keywords_result = ReferenceAggregator(
            keywords_table, keyword_ids, "keywords"
        ).aggregate(links)
        sorted_links = natural_sorted(links, key=link_ref)

        indexes = {
            "links": SearchIndex.build("links", sorted_links, LINK_FIELDS, link_ref, stop_words),
            "people": SearchIndex.build(
                "people", people_result.resolved, PERSON_FIELDS, entity_ref, stop_words
            ),
            "keywords": SearchIndex.build(
                "keywords", keywords_result.resolved, KEYWORD_FIELDS, entity_ref, stop_words
            ),
        }

        return cls(
            links=links,
            sorted_links=sorted_links,
            sorted_people_with_quantity=people_result.resolved,
            sorted_keywords_with_quantity=keywords_result.resolved,
            missing_people=people_result.missing,
            missing_keywords=keywords_result.missing,
            indexes=indexes,
            expand_prefixes=expand_prefixes,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> Catalog:
        """Load the JSON tables named by *settings* and build the catalog."""
        people = LookupTable.from_json(settings.resolved_people_path, Person)
        keywords = LookupTable.from_json(settings.resolved_keywords_path, Keyword)
        links = load_records(settings.resolved_links_path, Link)
        logger.info(
            "Loaded %d links, %d people, %d keywords",
            len(links),
            len(people),
            len(keywords),
        )
        return cls.build(
            links,
            people,
            keywords,
            stop_words=StopWordFilter(settings.extra_stop_words),
            expand_prefixes=settings.expand_prefixes,
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def collection(self, name: Collection) -> list:
        """Return the full, naturally sorted collection *name*."""
        if name == "links":
            return self.sorted_links
        if name == "people":
            return self.sorted_people_with_quantity
        if name == "keywords":
            return self.sorted_keywords_with_quantity
        raise KeyError(name)

    def visible(self, name: Collection, filter_text: str) -> list:
        """Return what a page shows for *filter_text*.

        An empty (or blank) filter shows the whole sorted collection.
        Otherwise entities appear in score order and non-matching entities
        are left out.
        """
        if not filter_text.strip():
            return list(self.collection(name))

        index = self.indexes[name]
        hits = run_query(index, filter_text, expand_prefixes=self.expand_prefixes)
        return [index.get(hit.ref) for hit in hits]

    def links_for_person(self, person_id: str) -> list[Link]:
        return links_by_person(self.sorted_links, person_id)

    def links_for_keyword(self, keyword_id: str) -> list[Link]:
        return links_by_keyword(self.sorted_links, keyword_id)
