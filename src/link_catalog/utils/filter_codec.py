"""Reversible URL encoding of the filter string.

The filter is the only piece of view state carried in the URL, as
``/<page>?filter=<percent-encoded text>``.  ``decode_filter`` is the strict
inverse of ``encode_filter``; anything it cannot decode becomes an empty
filter instead of an error.
"""

from __future__ import annotations

import logging
from urllib.parse import quote, unquote, urlsplit

from link_catalog.models.entities import COLLECTIONS, Collection

logger = logging.getLogger(__name__)

FILTER_PARAM = "filter"
DEFAULT_PAGE: Collection = "links"


def encode_filter(text: str) -> str:
    """Percent-encode *text* as UTF-8, leaving only unreserved characters bare.

    Lone surrogates are encoded as their UTF-8 bytes so any string round-trips.
    """
    return quote(text, safe="", errors="surrogatepass")


def decode_filter(encoded: str) -> str:
    """Decode a value produced by :func:`encode_filter`.

    Malformed input (invalid UTF-8 after unescaping) decodes to ``""``.
    """
    try:
        return unquote(encoded, errors="surrogatepass")
    except UnicodeDecodeError as exc:
        logger.warning("Ignoring undecodable filter %r: %s", encoded, exc)
        return ""


def filter_url(page: Collection, text: str) -> str:
    """Return the location that reproduces *page* filtered by *text*."""
    if not text:
        return f"/{page}"
    return f"/{page}?{FILTER_PARAM}={encode_filter(text)}"


def parse_url(url: str) -> tuple[Collection, str]:
    """Return ``(page, filter)`` for a location; unknown pages fall back to links."""
    parts = urlsplit(url)
    segment = parts.path.strip("/").split("/", 1)[0]
    page: Collection = segment if segment in COLLECTIONS else DEFAULT_PAGE  # type: ignore[assignment]

    for pair in parts.query.split("&"):
        name, sep, value = pair.partition("=")
        if sep and name == FILTER_PARAM:
            return page, decode_filter(value)
    return page, ""
