"""Masking engine: classification, special-type masking and field redaction."""

from request_snapshot.masking.classifier import ValueKind, classify
from request_snapshot.masking.credit_cards import is_credit_card
from request_snapshot.masking.identifiers import is_cuid, is_id_field, is_object_id, is_uuid
from request_snapshot.masking.sensitive_fields import mask_props
from request_snapshot.masking.special_types import mask_special_types

__all__ = [
    "ValueKind",
    "classify",
    "is_credit_card",
    "is_cuid",
    "is_id_field",
    "is_object_id",
    "is_uuid",
    "mask_props",
    "mask_special_types",
]
