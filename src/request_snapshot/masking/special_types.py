"""Replace runtime-only values with serializable stand-ins.

Binary payloads and stream handles cannot be logged meaningfully (and a
stream may not be readable twice), so they are swapped for small descriptor
records. Identifier objects are swapped for their canonical string form.

Cyclic input is not supported. Recursion stops at ``options.max_depth``,
where the remaining subtree is replaced by ``TRUNCATED_VALUE``.
"""

from __future__ import annotations

from typing import Any

from request_snapshot.core.options import MaskOptions
from request_snapshot.masking.classifier import ValueKind, byte_length, classify, iter_fields
from request_snapshot.observability.constants import (
    ARRAY_BUFFER_TYPE,
    BUFFER_TYPE,
    STREAM_TYPE,
    TRUNCATED_VALUE,
)

DEFAULT_OPTIONS = MaskOptions()


def describe(value: Any, kind: ValueKind) -> dict[str, Any]:
    """Build the descriptor record for a binary or stream node."""
    if kind is ValueKind.STREAM:
        return {"type": STREAM_TYPE}
    type_name = BUFFER_TYPE if kind is ValueKind.BINARY_BUFFER else ARRAY_BUFFER_TYPE
    return {"type": type_name, "byteLength": byte_length(value)}


def mask_special_types(value: Any, options: MaskOptions | None = None) -> Any:
    """Return a copy of ``value`` with special runtime types replaced.

    Args:
        value: Any value tree.
        options: Masking switches; only ``mask_buffers``, ``mask_streams``,
            ``check_object_id`` and ``max_depth`` are read.

    Returns:
        A new tree of the same shape. Sequences come back as lists and plain
        objects as dicts; other leaves are passed through unchanged.
    """
    options = options or DEFAULT_OPTIONS
    return _mask(value, options, options.max_depth)


def _mask(value: Any, options: MaskOptions, depth: int) -> Any:
    kind = classify(value, options)

    if kind is ValueKind.PRIMITIVE:
        return value
    if kind is ValueKind.IDENTIFIER_OBJECT:
        return str(value)
    if kind in (ValueKind.STREAM, ValueKind.BINARY_BUFFER, ValueKind.ARRAY_BUFFER):
        return describe(value, kind)

    if depth <= 0:
        return TRUNCATED_VALUE
    if kind is ValueKind.ARRAY:
        return [_mask(item, options, depth - 1) for item in value]
    return {key: _mask(item, options, depth - 1) for key, item in iter_fields(value)}
