"""Cloning, cycle-safe JSON rendering and ISO-8601 timestamps."""

from __future__ import annotations

import copy
import json
import uuid
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any

from bson import ObjectId

from request_snapshot.masking.classifier import is_plain_object, iter_fields

CIRCULAR_VALUE = "[Circular]"


def clone(value: Any) -> Any:
    """Deep-copy a value tree."""
    return copy.deepcopy(value)


def _json_default(value: Any) -> Any:
    """Fallback encoder for values the json module cannot render."""
    if isinstance(value, datetime):
        return to_iso_string(value)
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    if isinstance(value, (set, frozenset)):
        return list(value)
    if isinstance(value, (ObjectId, uuid.UUID, Decimal)):
        return str(value)
    return repr(value)


def _decycle(value: Any, ancestors: set[int]) -> Any:
    """Copy containers, replacing references back to an ancestor."""
    is_sequence = isinstance(value, (list, tuple))
    if not is_sequence and not is_plain_object(value):
        return value

    marker = id(value)
    if marker in ancestors:
        return CIRCULAR_VALUE
    ancestors.add(marker)
    try:
        if is_sequence:
            return [_decycle(item, ancestors) for item in value]
        return {
            key if isinstance(key, (str, int, float, bool)) or key is None else str(key): _decycle(
                item, ancestors
            )
            for key, item in iter_fields(value)
        }
    finally:
        ancestors.discard(marker)


def safe_stringify(value: Any) -> str:
    """Render any value as compact JSON without raising.

    Circular references become ``"[Circular]"`` and unknown objects fall back
    to a string form, so the result is always a string.
    """
    return json.dumps(
        _decycle(value, set()),
        default=_json_default,
        separators=(",", ":"),
        ensure_ascii=False,
    )


def json_round_trip(value: Any) -> Any:
    """Rebuild a value from its safe JSON rendering."""
    return json.loads(safe_stringify(value))


def to_iso_string(moment: datetime) -> str:
    """Render a datetime as UTC ISO-8601 with milliseconds and a ``Z`` suffix.

    Naive datetimes are taken to be in UTC already.
    """
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return f"{moment.strftime('%Y-%m-%dT%H:%M:%S')}.{moment.microsecond // 1000:03d}Z"


def epoch_to_iso_string(seconds: float) -> str:
    """Render seconds since the Unix epoch as UTC ISO-8601."""
    return to_iso_string(datetime.fromtimestamp(seconds, tz=timezone.utc))
