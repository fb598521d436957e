"""Redact sensitive values by field name and by content.

Two modes share one traversal:

- header mode: case-insensitive field names, ``authorization`` keeps its
  scheme token, no content heuristics;
- body mode: identifier exemptions first, then credit-card detection, then
  the exact-match sensitive field list.

Only string leaves are ever rewritten; the output mirrors the input's shape.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from request_snapshot.core.options import MaskOptions
from request_snapshot.masking.classifier import ValueKind, classify, iter_fields
from request_snapshot.masking.credit_cards import is_credit_card, mask_card_digits
from request_snapshot.masking.identifiers import is_id_field, is_identifier_value
from request_snapshot.observability.constants import (
    AUTHORIZATION_HEADER,
    MASK_CHAR,
    REFERRER_ALIASES,
    TRUNCATED_VALUE,
)

DEFAULT_OPTIONS = MaskOptions()

# Traversal only: binary, stream and identifier nodes stay opaque leaves here.
_STRUCTURE_ONLY = MaskOptions(mask_buffers=False, mask_streams=False, check_object_id=False)


def mask_all(value: str) -> str:
    """Replace every character with the mask character."""
    return MASK_CHAR * len(value)


def mask_authorization(value: str) -> str:
    """Mask the credentials of ``<scheme> <credentials>``, keeping the scheme."""
    scheme, separator, credentials = value.partition(" ")
    if not separator:
        return mask_all(value)
    return f"{scheme} {mask_all(credentials)}"


def prepare_fields(fields: Iterable[str], is_headers: bool) -> frozenset[str]:
    """Normalise a field list for lookups in the given mode."""
    if not is_headers:
        return frozenset(fields)
    lowered = {field.lower() for field in fields}
    if lowered.intersection(REFERRER_ALIASES):
        lowered.update(REFERRER_ALIASES)
    return frozenset(lowered)


def mask_string(key: Any, value: str, fields: frozenset[str], options: MaskOptions) -> str:
    """Decide the masked form of one string leaf.

    Args:
        key: The field name the value is stored under (``None`` at the root).
        value: The string value.
        fields: Field list prepared by ``prepare_fields`` for this mode.
        options: Masking switches.

    Returns:
        The value unchanged, with card digits masked, or fully masked.
    """
    named = isinstance(key, str)

    if options.is_headers:
        if not named or key.lower() not in fields:
            return value
        if key.lower() == AUTHORIZATION_HEADER:
            return mask_authorization(value)
        return mask_all(value)

    listed = named and key in fields

    if named and options.check_id and is_id_field(key):
        return value

    # Identifier-shaped values win over card detection, not over the field list.
    if not listed and is_identifier_value(value, options):
        return value

    if options.mask_credit_cards and is_credit_card(value):
        return mask_card_digits(value, MASK_CHAR)

    if not listed:
        return value
    return mask_all(value)


def mask_props(tree: Any, fields: Iterable[str], options: MaskOptions | None = None) -> Any:
    """Return a redacted copy of ``tree``.

    Args:
        tree: A value tree (mapping, sequence, plain object or string).
        fields: Names of the fields to redact.
        options: Masking switches; ``is_headers`` selects the mode.

    Returns:
        A new tree with the same keys and sequence lengths. Non-string leaves
        are returned unchanged.
    """
    options = options or DEFAULT_OPTIONS
    prepared = prepare_fields(fields, options.is_headers)
    return _mask(None, tree, prepared, options, options.max_depth)


def _mask(key: Any, value: Any, fields: frozenset[str], options: MaskOptions, depth: int) -> Any:
    if isinstance(value, str):
        return mask_string(key, value, fields, options)

    kind = classify(value, _STRUCTURE_ONLY)
    if kind is ValueKind.PRIMITIVE:
        return value
    if depth <= 0:
        return TRUNCATED_VALUE
    if kind is ValueKind.ARRAY:
        # Elements inherit the enclosing field name, so ``{"password": ["a"]}`` is masked.
        return [_mask(key, item, fields, options, depth - 1) for item in value]
    return {
        child_key: _mask(child_key, child, fields, options, depth - 1)
        for child_key, child in iter_fields(value)
    }
