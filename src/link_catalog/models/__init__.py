"""Data models for the link catalog."""

from link_catalog.models.entities import (
    COLLECTIONS,
    AggregationResult,
    Collection,
    Keyword,
    Link,
    Person,
    SearchHit,
    WithQuantity,
)
from link_catalog.models.registry import LookupTable, load_records

__all__ = [
    "COLLECTIONS",
    "AggregationResult",
    "Collection",
    "Keyword",
    "Link",
    "LookupTable",
    "load_records",
    "Person",
    "SearchHit",
    "WithQuantity",
]
