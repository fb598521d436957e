"""Calling conventions kept for integrations written against older releases."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from request_snapshot.normalizer import normalize


def parse_request(req: Any = None, user_fields: Sequence[str] | None = None) -> dict[str, Any]:
    """Snapshot a bare request, keeping only ``user_fields`` of its user.

    This convention has no response support. ``user_fields=None`` keeps the
    default field list; an empty sequence keeps every user field.
    """
    if user_fields is None:
        return normalize(req=req)
    return normalize(req=req, user_fields=tuple(user_fields))


def normalize_context(ctx: Any, **overrides: Any) -> dict[str, Any]:
    """Snapshot a context-style request (``ctx.req``, ``ctx.request``, ``ctx.state``)."""
    return normalize(ctx=ctx, **overrides)
