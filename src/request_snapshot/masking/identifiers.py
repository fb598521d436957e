"""Heuristics that recognise identifiers so they are never redacted.

Identifiers look like secrets (long, random, sometimes all digits) but carry
no sensitive meaning and are what an operator needs to correlate a log line
with a record. Two kinds of evidence are used:

- the field name (``id``, ``_id`` or anything ending in ``_id`` once
  normalised to snake case);
- the value itself (ObjectId hex strings, CUIDs, UUID v1-5).
"""

from __future__ import annotations

import re

from bson import ObjectId

from request_snapshot.core.options import MaskOptions
from request_snapshot.observability.constants import ID_FIELD_NAMES

# UUID versions 1-5 with the RFC 4122 variant; the nil UUID never matches.
UUID_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[1-5][0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$",
    flags=re.IGNORECASE,
)

# Word boundaries used when normalising a field name to snake case.
_LOWER_UPPER_RE = re.compile(r"([a-z0-9])([A-Z])")
_ACRONYM_RE = re.compile(r"([A-Z]+)([A-Z][a-z])")
_SEPARATOR_RE = re.compile(r"[^A-Za-z0-9]+")

_ID_SUFFIX_RE = re.compile(r"_id$")

# Minimum length for the CUID heuristic.
CUID_MIN_LENGTH = 7


def to_snake_case(name: str) -> str:
    """Normalise camelCase, kebab-case and bracketed names to snake_case.

    >>> to_snake_case("productID"), to_snake_case("product[id]")
    ('product_id', 'product_id')
    """
    spaced = _ACRONYM_RE.sub(r"\1 \2", _LOWER_UPPER_RE.sub(r"\1 \2", name))
    words = [word for word in _SEPARATOR_RE.split(spaced) if word]
    return "_".join(words).lower()


def is_id_field(name: str) -> bool:
    """Return True if a field name denotes a primary or foreign identifier."""
    if name.lower() in ID_FIELD_NAMES:
        return True
    return bool(_ID_SUFFIX_RE.search(to_snake_case(name)))


def is_object_id(value: str) -> bool:
    """Return True for a 24-character hexadecimal ObjectId string."""
    return isinstance(value, str) and ObjectId.is_valid(value)


def is_cuid(value: str) -> bool:
    """Approximate CUID check: starts with ``c`` and is at least 7 characters.

    This accepts plenty of non-CUID strings; it is kept loose because a
    false positive only leaves a non-sensitive value readable.
    """
    return value.startswith("c") and len(value) >= CUID_MIN_LENGTH


def is_uuid(value: str) -> bool:
    """Return True for a valid, non-nil UUID of versions 1 through 5."""
    return bool(UUID_RE.match(value))


def is_identifier_value(value: str, options: MaskOptions) -> bool:
    """Apply the enabled value-based identifier heuristics."""
    if options.check_object_id and is_object_id(value):
        return True
    if options.check_cuid and is_cuid(value):
        return True
    return bool(options.check_uuid and is_uuid(value))
