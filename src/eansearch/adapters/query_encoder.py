"""Query-string encoding for the EAN-Search API.

Free-text values (product names) are percent-encoded with the RFC 3986
unreserved set only: `A-Z a-z 0-9 - _ . ~` pass through, every other byte of
the UTF-8 encoding becomes `%XX` (uppercase hex). Barcodes, prefixes and
numbers are already query-safe and are sent as-is.
"""

from __future__ import annotations

from typing import Iterable
from urllib.parse import quote


def encode_query_value(value: str | bytes) -> str:
    """Percent-encode one query-parameter value."""

    if isinstance(value, bytes):
        return quote(value, safe="")
    # surrogatepass keeps the function total for lone surrogates.
    return quote(value, safe="", encoding="utf-8", errors="surrogatepass")


def build_query(pairs: Iterable[tuple[str, object]]) -> str:
    """Join `key=value` pairs with `&`, in the order given.

    Values must already be query-safe; `int` values are rendered with `str`.
    """

    return "&".join(f"{key}={value}" for key, value in pairs)
