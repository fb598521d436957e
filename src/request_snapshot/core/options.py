"""Per-call options for the normalizer and the masking passes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from request_snapshot.core.config import DEFAULT_MAX_DEPTH, get_settings
from request_snapshot.observability.constants import SENSITIVE_FIELDS


@dataclass(frozen=True)
class MaskOptions:
    """Switches read by the classifier and both masking passes.

    ``is_headers`` selects header mode in ``mask_props``; the buffer and stream
    switches only affect ``mask_special_types``.
    """

    mask_credit_cards: bool = True
    mask_buffers: bool = True
    mask_streams: bool = True
    check_id: bool = True
    check_cuid: bool = True
    check_object_id: bool = True
    check_uuid: bool = True
    is_headers: bool = False
    max_depth: int = DEFAULT_MAX_DEPTH


def _default_sanitize_headers() -> tuple[str, ...]:
    return tuple(get_settings().sanitize_headers)


def _default_user_fields() -> tuple[str, ...]:
    return tuple(get_settings().user_fields)


def _default_max_depth() -> int:
    return get_settings().max_depth


class NormalizeOptions(BaseModel):
    """Immutable configuration record for one ``normalize`` call.

    ``req`` and ``ctx`` hold the caller's request-like structures by reference;
    they are read, never modified.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True, extra="forbid")

    # Inputs
    req: Any = None
    ctx: Any = None
    response_headers: Any = None

    # Field lists
    user_fields: tuple[str, ...] = Field(default_factory=_default_user_fields)
    sanitize_fields: tuple[str, ...] = SENSITIVE_FIELDS
    sanitize_headers: tuple[str, ...] = Field(default_factory=_default_sanitize_headers)

    # Masking switches
    mask_credit_cards: bool = True
    mask_buffers: bool = True
    mask_streams: bool = True
    check_id: bool = True
    check_cuid: bool = True
    check_object_id: bool = True
    check_uuid: bool = True

    # Section switches
    parse_body: bool = True
    parse_query: bool = True
    parse_files: bool = True

    max_depth: int = Field(default_factory=_default_max_depth, ge=1)

    def mask_options(self, is_headers: bool = False) -> MaskOptions:
        """Project the switches relevant to a masking pass."""
        return MaskOptions(
            mask_credit_cards=self.mask_credit_cards,
            mask_buffers=self.mask_buffers,
            mask_streams=self.mask_streams,
            check_id=self.check_id,
            check_cuid=self.check_cuid,
            check_object_id=self.check_object_id,
            check_uuid=self.check_uuid,
            is_headers=is_headers,
            max_depth=self.max_depth,
        )
