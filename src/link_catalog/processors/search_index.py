"""Weighted multi-field inverted index with ranked free-text search.

Each collection (links, people, keywords) gets one :class:`SearchIndex`,
built once at startup from a list of :class:`IndexField` extractors:

1. **Build** -- every field of every document is tokenised, stop words are
   dropped and each remaining occurrence adds the field's weight to the
   document's posting for that token.
2. **Search** -- the query is tokenised and filtered with the same stop-word
   filter, then each document's score is the sum over query tokens of
   ``weighted_tf * idf``, with ``idf = 1 + ln(N / df)``.  Results are ranked
   by descending score, ties broken by natural order of the reference key.

Prefix expansion (on by default) lets a partial token such as ``"ali"``
match ``"alice"``.  An expanded term's contribution is scaled by
``len(query_token) / len(term)`` and its idf is capped at the idf of the
query token itself when that token is indexed.  A document only keeps the
best contribution per query token.  Expansions therefore never outrank an exact
match of the same term frequency and never double count.
"""

from __future__ import annotations

import logging
import math
import re
import unicodedata
from bisect import bisect_left
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType
from typing import Generic, TypeVar

from link_catalog.errors import IndexKeyCollisionError, QueryError
from link_catalog.models.entities import Link, SearchHit, WithQuantity
from link_catalog.processors.natural_sort import natural_key
from link_catalog.processors.stopwords import StopWordFilter

logger = logging.getLogger(__name__)

D = TypeVar("D")

# Letters and digits only: punctuation and "_" both act as separators.
_TOKEN_RE = re.compile(r"[^\W_]+")


def tokenize(text: str | None) -> list[str]:
    """NFKC-normalise, case-fold and split *text* into word tokens."""
    if not text:
        return []
    return _TOKEN_RE.findall(unicodedata.normalize("NFKC", text).casefold())


@dataclass(frozen=True)
class IndexField(Generic[D]):
    """One searchable field: how to extract its text and how much it counts."""

    name: str
    extract: Callable[[D], str | None]
    weight: float = 1.0


# ---------------------------------------------------------------------------
# Per-collection configurations
# ---------------------------------------------------------------------------

LINK_FIELDS: tuple[IndexField[Link], ...] = (
    IndexField("name", lambda link: link.name, 5.0),
    IndexField("description", lambda link: link.description, 1.0),
)

PERSON_FIELDS: tuple[IndexField[WithQuantity], ...] = (
    IndexField("name", lambda wq: wq.lookup.name, 5.0),
    IndexField("twitter", lambda wq: wq.lookup.twitter, 1.0),
    IndexField("github", lambda wq: wq.lookup.github, 1.0),
)

KEYWORD_FIELDS: tuple[IndexField[WithQuantity], ...] = (
    IndexField("name", lambda wq: wq.lookup.name, 5.0),
)


def link_ref(link: Link) -> str:
    return link.name


def entity_ref(wq: WithQuantity) -> str:
    return wq.lookup.name


# ---------------------------------------------------------------------------
# Index
# ---------------------------------------------------------------------------


class SearchIndex(Generic[D]):
    """Immutable inverted index over one collection.

    Use :meth:`build` rather than the constructor.  Postings map a token to
    ``{reference key: weighted term frequency}``.  Documents that produced
    no indexable token are listed in :attr:`skipped`; they stay reachable
    through :meth:`get` but can never match a query.
    """

    def __init__(
        self,
        name: str,
        postings: dict[str, dict[str, float]],
        documents: dict[str, D],
        skipped: Sequence[str],
        stop_words: StopWordFilter,
    ) -> None:
        self.name = name
        self._postings: Mapping[str, Mapping[str, float]] = MappingProxyType(
            {token: MappingProxyType(refs) for token, refs in postings.items()}
        )
        self._documents: Mapping[str, D] = MappingProxyType(documents)
        self._vocabulary: tuple[str, ...] = tuple(sorted(postings))
        self._skipped: tuple[str, ...] = tuple(skipped)
        self._stop_words = stop_words

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def build(
        cls,
        name: str,
        documents: Iterable[D],
        fields: Sequence[IndexField[D]],
        ref: Callable[[D], str],
        stop_words: StopWordFilter | None = None,
    ) -> SearchIndex[D]:
        """Index *documents* under the reference key returned by *ref*.

        Raises
        ------
        IndexKeyCollisionError
            If two documents produce the same reference key.
        """
        stop_words = stop_words or StopWordFilter()
        postings: dict[str, dict[str, float]] = {}
        by_ref: dict[str, D] = {}
        skipped: list[str] = []

        for doc in documents:
            key = ref(doc)
            if key in by_ref:
                raise IndexKeyCollisionError(name, key)
            by_ref[key] = doc

            indexed = False
            for index_field in fields:
                for token in tokenize(index_field.extract(doc)):
                    if stop_words(token):
                        continue
                    refs = postings.setdefault(token, {})
                    refs[key] = refs.get(key, 0.0) + index_field.weight
                    indexed = True

            if not indexed:
                skipped.append(key)
                logger.warning("%s index: no searchable text in %r, skipped", name, key)

        logger.info(
            "Built %s index: %d documents, %d terms, %d skipped",
            name,
            len(by_ref) - len(skipped),
            len(postings),
            len(skipped),
        )
        return cls(name, postings, by_ref, skipped, stop_words)

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def size(self) -> int:
        """Number of documents that can match a query."""
        return len(self._documents) - len(self._skipped)

    @property
    def skipped(self) -> tuple[str, ...]:
        return self._skipped

    @property
    def vocabulary(self) -> tuple[str, ...]:
        return self._vocabulary

    def document_frequency(self, term: str) -> int:
        return len(self._postings.get(term, {}))

    def idf(self, term: str) -> float:
        df = self.document_frequency(term)
        if df == 0:
            return 0.0
        return 1.0 + math.log(self.size / df)

    def get(self, key: str) -> D | None:
        """Return the document indexed under *key*, or ``None``."""
        return self._documents.get(key)

    def __len__(self) -> int:
        return len(self._documents)

    def __contains__(self, key: object) -> bool:
        return key in self._documents

    # ------------------------------------------------------------------
    # Query engine
    # ------------------------------------------------------------------

    def query_terms(self, query: str) -> list[str]:
        """Tokenise *query* exactly like indexed text, minus stop words and repeats."""
        terms: list[str] = []
        for token in tokenize(query):
            if not self._stop_words(token) and token not in terms:
                terms.append(token)
        return terms

    def search(self, query: str, *, expand_prefixes: bool = True) -> list[SearchHit]:
        """Return ranked hits for *query*.

        Raises
        ------
        QueryError
            If nothing but stop words (or nothing at all) is left of *query*.
        """
        terms = self.query_terms(query)
        if not terms:
            raise QueryError(query)

        scores: dict[str, float] = {}
        for token in terms:
            best: dict[str, float] = {}
            # A rarer expansion may not weigh more than the exact token.
            ceiling = self.idf(token) if token in self._postings else math.inf
            for term, boost in self._expand(token, expand_prefixes):
                weight = min(self.idf(term), ceiling) * boost
                for key, tf in self._postings[term].items():
                    contribution = tf * weight
                    if contribution > best.get(key, 0.0):
                        best[key] = contribution
            for key, contribution in best.items():
                scores[key] = scores.get(key, 0.0) + contribution

        ranked = sorted(scores.items(), key=lambda item: (-item[1], natural_key(item[0])))
        return [SearchHit(ref=key, score=score) for key, score in ranked if score > 0]

    def _expand(self, token: str, expand_prefixes: bool) -> list[tuple[str, float]]:
        """Return ``(term, boost)`` pairs of vocabulary terms matching *token*."""
        if not expand_prefixes:
            return [(token, 1.0)] if token in self._postings else []

        matches: list[tuple[str, float]] = []
        i = bisect_left(self._vocabulary, token)
        while i < len(self._vocabulary) and self._vocabulary[i].startswith(token):
            term = self._vocabulary[i]
            matches.append((term, len(token) / len(term)))
            i += 1
        return matches


def run_query(
    index: SearchIndex, query: str, *, expand_prefixes: bool = True
) -> list[SearchHit]:
    """Search *index*, degrading an unsearchable query to no results."""
    try:
        return index.search(query, expand_prefixes=expand_prefixes)
    except QueryError as exc:
        logger.debug("%s index: %s", index.name, exc)
        return []
