"""Flatten a context-style (Koa-like) object into a request-like mapping.

A context carries request data in several places: on itself, on ``request``
(the framework's request wrapper), on ``req`` (the raw server request) and
on ``state`` (per-request middleware state). The core only understands the
flat request shape, so each field is looked up here in a fixed order.
"""

from __future__ import annotations

from typing import Any

from request_snapshot.observability.constants import (
    DISABLE_BODY_PARSING,
    DISABLE_FILE_PARSING,
    DISABLE_QUERY_PARSING,
    START_TIME_MARKERS,
)
from request_snapshot.utils.access import first_field, first_string, get_field

# Fields read straight from the raw server request
_RAW_REQUEST_FIELDS = (
    "headers",
    "http_version",
    "http_version_major",
    "http_version_minor",
    "connection",
    DISABLE_BODY_PARSING,
    DISABLE_QUERY_PARSING,
    DISABLE_FILE_PARSING,
    *(marker for marker, _ in START_TIME_MARKERS),
)


def request_from_context(ctx: Any) -> dict[str, Any]:
    """Build the request-like mapping the normalizer expects from a context."""
    raw = get_field(ctx, "req")
    wrapper = get_field(ctx, "request")
    state = get_field(ctx, "state")

    request: dict[str, Any] = {name: get_field(raw, name) for name in _RAW_REQUEST_FIELDS}

    request["method"] = get_field(ctx, "method")
    request["original_url"] = get_field(ctx, "original_url") or get_field(ctx, "url")
    request["ip"] = get_field(ctx, "ip")
    request["user"] = get_field(state, "user")
    request["original_body"] = get_field(wrapper, "original_body")
    request["body"] = get_field(wrapper, "body")
    request["id"] = first_string(
        (
            (ctx, "id"),
            (wrapper, "id"),
            (raw, "id"),
            (state, "req_id"),
            (state, "id"),
        )
    )
    request["file"] = first_field((ctx, wrapper, raw), "file")
    request["files"] = first_field((ctx, wrapper, raw), "files")

    return {name: value for name, value in request.items() if value is not None}
