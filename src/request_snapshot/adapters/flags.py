"""Translate per-request opt-out flags into explicit options."""

from __future__ import annotations

from typing import Any

from request_snapshot.core.options import NormalizeOptions
from request_snapshot.observability.constants import (
    DISABLE_BODY_PARSING,
    DISABLE_FILE_PARSING,
    DISABLE_QUERY_PARSING,
)
from request_snapshot.utils.access import get_field

_FLAG_OPTIONS = (
    (DISABLE_BODY_PARSING, "parse_body"),
    (DISABLE_QUERY_PARSING, "parse_query"),
    (DISABLE_FILE_PARSING, "parse_files"),
)


def apply_request_flags(request: Any, options: NormalizeOptions) -> NormalizeOptions:
    """Return options with sections switched off by flags on ``request``.

    The caller's options are not modified; a copy is returned when any flag
    is set.
    """
    update = {option: False for flag, option in _FLAG_OPTIONS if get_field(request, flag)}
    if not update:
        return options
    return options.model_copy(update=update)
