"""Reference aggregation -- count how often links cite each person or keyword."""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Callable, Iterable

from link_catalog.models.entities import AggregationResult, Link, WithQuantity
from link_catalog.models.registry import LookupTable
from link_catalog.processors.natural_sort import natural_key, natural_sorted

logger = logging.getLogger(__name__)


def author_ids(link: Link) -> list[str]:
    return link.authorIds


def keyword_ids(link: Link) -> list[str]:
    return link.keywordIds


class ReferenceAggregator:
    """Join the ids cited by links against one lookup table.

    Every id cited at least once ends up in exactly one of
    ``result.resolved`` (with its quantity) or ``result.missing``.  Ids that
    no link cites never appear.  The quantity is the raw number of
    occurrences across all links, so a link that cites the same id twice
    counts twice.
    """

    def __init__(
        self,
        table: LookupTable,
        select_ids: Callable[[Link], list[str]],
        label: str = "entities",
    ) -> None:
        self.table = table
        self.select_ids = select_ids
        self.label = label

    def aggregate(self, links: Iterable[Link]) -> AggregationResult:
        """Return the resolved entities (natural order) and missing ids."""
        counts: Counter[str] = Counter(
            entity_id for link in links for entity_id in self.select_ids(link)
        )

        resolved: list[WithQuantity] = []
        missing: list[str] = []
        for entity_id, quantity in counts.items():
            entity = self.table.get(entity_id)
            if entity is None:
                missing.append(entity_id)
                logger.warning("Unresolved %s reference: %r", self.label, entity_id)
                continue
            resolved.append(WithQuantity(lookup=entity, quantity=quantity))

        logger.info(
            "Aggregated %d %s (%d unresolved) from %d references",
            len(resolved),
            self.label,
            len(missing),
            sum(counts.values()),
        )
        return AggregationResult(
            resolved=natural_sorted(resolved, key=lambda wq: wq.lookup.name),
            missing=sorted(missing, key=natural_key),
        )


def links_citing(
    links: Iterable[Link],
    entity_id: str,
    select_ids: Callable[[Link], list[str]],
) -> list[Link]:
    """Return the links whose reference list contains *entity_id*, in input order."""
    return [link for link in links if entity_id in select_ids(link)]


def links_by_person(links: Iterable[Link], person_id: str) -> list[Link]:
    return links_citing(links, person_id, author_ids)


def links_by_keyword(links: Iterable[Link], keyword_id: str) -> list[Link]:
    return links_citing(links, keyword_id, keyword_ids)
