"""URL splitting and deterministic query-string handling."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any
from urllib.parse import parse_qsl, quote, urlencode, urlsplit

# Characters left unescaped when re-serialising a query, as encodeURIComponent does
QUERY_SAFE_CHARS = "!*'()"


@dataclass(frozen=True)
class SplitUrl:
    """The parts of a request URL that make up its logged form."""

    base: str
    query: str


def split_url(url: str) -> SplitUrl:
    """Split a URL into ``scheme://host/path`` (or just the path) and its query.

    Relative URLs and URLs without a scheme are treated as path-only.
    """
    parts = urlsplit(url)
    if parts.scheme and parts.netloc:
        base = f"{parts.scheme}://{parts.netloc}{parts.path}"
    else:
        base = parts.path
    return SplitUrl(base=base, query=parts.query)


def parse_query(query: str) -> dict[str, Any]:
    """Parse a query string; keys that repeat collect their values in a list."""
    parsed: dict[str, Any] = {}
    for key, value in parse_qsl(query, keep_blank_values=True):
        if key not in parsed:
            parsed[key] = value
        elif isinstance(parsed[key], list):
            parsed[key].append(value)
        else:
            parsed[key] = [parsed[key], value]
    return parsed


def serialize_query(query: Mapping[str, Any]) -> str:
    """Serialize a query mapping in insertion order, without the leading ``?``."""
    return urlencode(list(query.items()), doseq=True, safe=QUERY_SAFE_CHARS, quote_via=quote)


def join_url(base: str, query: str) -> str:
    """Append a serialized query to a base URL when there is one."""
    return f"{base}?{query}" if query else base
