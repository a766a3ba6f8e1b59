"""Stop-word filtering shared by index construction and querying."""

from __future__ import annotations

from collections.abc import Iterable

# Low-information English words: articles, pronouns, conjunctions, auxiliaries.
ENGLISH_STOP_WORDS: frozenset[str] = frozenset(
    """
    a able about across after all almost also am among an and any are as at
    be because been but by can cannot could dear did do does either else ever
    every for from get got had has have he her hers him his how however i if
    in into is it its just least let like likely may me might most must my
    neither no nor not of off often on only or other our own rather said say
    says she should since so some than that the their them then there these
    they this tis to too twas us wants was we were what when where which while
    who whom why will with would yet you your
    """.split()
)

# Catalog-specific noise: fragments of URLs that end up in descriptions.
DOMAIN_STOP_WORDS: frozenset[str] = frozenset(
    {"http", "https", "www", "com", "org", "io", "html"}
)


class StopWordFilter:
    """Case-insensitive stop-word predicate.

    The same instance must be handed to the index builder and to the query
    engine so that a term dropped at index time is also dropped from queries.
    """

    def __init__(self, extra: Iterable[str] = ()) -> None:
        self._words = ENGLISH_STOP_WORDS | DOMAIN_STOP_WORDS | {
            w.casefold() for w in extra
        }

    def is_stop_word(self, token: str) -> bool:
        return token.casefold() in self._words

    __call__ = is_stop_word

    def __contains__(self, token: object) -> bool:
        return isinstance(token, str) and self.is_stop_word(token)

    def __len__(self) -> int:
        return len(self._words)
