"""Uniform field access for request-like structures.

Framework adapters hand over either plain mappings or attribute-style
objects; both are read through ``get_field``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


def get_field(source: Any, name: str) -> Any:
    """Read ``name`` from a mapping or an object, returning None when absent."""
    if source is None:
        return None
    if isinstance(source, Mapping):
        return source.get(name)
    return getattr(source, name, None)


def first_field(sources: tuple[Any, ...], name: str) -> Any:
    """Return the first non-None ``name`` found across ``sources``."""
    for source in sources:
        value = get_field(source, name)
        if value is not None:
            return value
    return None


def first_string(candidates: tuple[tuple[Any, str], ...]) -> str | None:
    """Return the first non-empty string among ``(source, name)`` candidates."""
    for source, name in candidates:
        value = get_field(source, name)
        if isinstance(value, str) and value:
            return value
    return None
