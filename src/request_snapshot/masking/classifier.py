"""Runtime classification of value-tree nodes.

Every node is classified exactly once into a closed set of kinds, and the
masking passes branch on the kind instead of probing shapes themselves.
"""

from __future__ import annotations

import array
import dataclasses
import io
import uuid
from collections.abc import Iterator, Mapping
from enum import Enum
from typing import Any

from bson import ObjectId
from pydantic import BaseModel
from starlette.datastructures import UploadFile

from request_snapshot.core.options import MaskOptions


class ValueKind(str, Enum):
    """Kinds of nodes found in a value tree."""

    PRIMITIVE = "primitive"
    ARRAY = "array"
    PLAIN_OBJECT = "plain_object"
    BINARY_BUFFER = "binary_buffer"
    ARRAY_BUFFER = "array_buffer"
    STREAM = "stream"
    IDENTIFIER_OBJECT = "identifier_object"


_SCALAR_TYPES = (str, int, float, bool, type(None))
_IDENTIFIER_TYPES = (ObjectId, uuid.UUID)
_BINARY_TYPES = (bytes, bytearray)
_ARRAY_BUFFER_TYPES = (memoryview, array.array)
# Uploads are described by their metadata; the spooled file becomes a stream descriptor
_UPLOAD_FIELDS = ("filename", "content_type", "size", "headers", "file")


def is_stream(value: Any) -> bool:
    """Duck-typed check for a readable stream handle."""
    if isinstance(value, io.IOBase):
        return True
    if isinstance(value, (Mapping, UploadFile)) or isinstance(value, type):
        return False
    return callable(getattr(value, "read", None))


def is_plain_object(value: Any) -> bool:
    """Return True for objects whose fields should be traversed."""
    if isinstance(value, (Mapping, UploadFile)):
        return True
    if isinstance(value, BaseModel):
        return True
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return True
    return isinstance(value, BaseException)


def classify(value: Any, options: MaskOptions) -> ValueKind:
    """Classify a node. Checks run in priority order; the first match wins.

    Binary payloads, streams and identifier objects whose switch is disabled
    fall through to ``PRIMITIVE`` and are carried as opaque leaves.
    """
    if isinstance(value, _SCALAR_TYPES):
        return ValueKind.PRIMITIVE
    if isinstance(value, (list, tuple)):
        return ValueKind.ARRAY
    if isinstance(value, _IDENTIFIER_TYPES):
        return ValueKind.IDENTIFIER_OBJECT if options.check_object_id else ValueKind.PRIMITIVE
    if options.mask_streams and is_stream(value):
        return ValueKind.STREAM
    if isinstance(value, _BINARY_TYPES):
        return ValueKind.BINARY_BUFFER if options.mask_buffers else ValueKind.PRIMITIVE
    if isinstance(value, _ARRAY_BUFFER_TYPES):
        return ValueKind.ARRAY_BUFFER if options.mask_buffers else ValueKind.PRIMITIVE
    if is_plain_object(value):
        return ValueKind.PLAIN_OBJECT
    return ValueKind.PRIMITIVE


def iter_fields(value: Any) -> Iterator[tuple[Any, Any]]:
    """Yield ``(key, value)`` pairs of a plain object.

    Mappings yield their items, pydantic models and dataclasses their declared
    fields, uploads their metadata and file handle, exceptions their
    instance attributes.
    """
    if isinstance(value, Mapping):
        yield from value.items()
    elif isinstance(value, UploadFile):
        for name in _UPLOAD_FIELDS:
            yield name, getattr(value, name)
    elif isinstance(value, BaseModel):
        for name in type(value).model_fields:
            yield name, getattr(value, name)
    elif dataclasses.is_dataclass(value):
        for field in dataclasses.fields(value):
            yield field.name, getattr(value, field.name)
    else:
        yield from vars(value).items()


def byte_length(value: Any) -> int:
    """Size in bytes of a binary buffer or array buffer."""
    if isinstance(value, _BINARY_TYPES):
        return len(value)
    return memoryview(value).nbytes
