"""Exceptions raised while building and querying the catalog."""

from __future__ import annotations


class CatalogError(Exception):
    """Base class for catalog errors."""


class IndexKeyCollisionError(CatalogError):
    """Two documents of one collection share a reference key."""

    def __init__(self, collection: str, key: str) -> None:
        super().__init__(
            f"Duplicate reference key {key!r} in the {collection} index"
        )
        self.collection = collection
        self.key = key


class QueryError(CatalogError):
    """A query has no searchable token left after normalisation."""

    def __init__(self, query: str) -> None:
        super().__init__(f"Query {query!r} has no searchable terms")
        self.query = query
