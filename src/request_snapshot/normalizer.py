"""Assemble a redacted snapshot of one HTTP request and, optionally, its response.

The snapshot is built from fresh copies of the caller's data; nothing handed
in (request, body, user, headers, options) is modified.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Mapping
from datetime import datetime
from typing import Any

from bson import ObjectId
from dateutil import parser as date_parser
from starlette.requests import cookie_parser

from request_snapshot.adapters.context import request_from_context
from request_snapshot.adapters.flags import apply_request_flags
from request_snapshot.core.options import MaskOptions, NormalizeOptions
from request_snapshot.domain.exceptions import ConflictingContextError
from request_snapshot.masking.classifier import is_plain_object, iter_fields
from request_snapshot.masking.sensitive_fields import mask_props
from request_snapshot.masking.special_types import mask_special_types
from request_snapshot.observability.constants import (
    BODYLESS_METHODS,
    COOKIE_HEADER,
    DATE_HEADER,
    DEFAULT_METHOD,
    REQUEST_ID_HEADER,
    RESPONSE_TIME_HEADER,
    START_TIME_MARKERS,
    LogEvents,
)
from request_snapshot.observability.logger import get_logger
from request_snapshot.utils.access import get_field
from request_snapshot.utils.duration import parse_duration
from request_snapshot.utils.http_headers import (
    ResponseHead,
    headers_to_lower_case,
    parse_response_head,
)
from request_snapshot.utils.serialization import (
    clone,
    epoch_to_iso_string,
    json_round_trip,
    safe_stringify,
    to_iso_string,
)
from request_snapshot.utils.urls import join_url, parse_query, serialize_query, split_url

logger = get_logger(__name__)

_SCALARS = (str, int, float, bool)

# Serialization methods tried on user objects, in order
USER_SERIALIZERS = ("model_dump", "to_dict", "_asdict")


def normalize(options: NormalizeOptions | None = None, **overrides: Any) -> dict[str, Any]:
    """Build a snapshot from a request and/or response.

    Args:
        options: A prepared options record. Defaults are used when omitted.
        **overrides: Option fields to set for this call (``req``, ``ctx``,
            ``response_headers``, ``sanitize_fields``...). They are applied to
            a copy; ``options`` itself is never changed.

    Returns:
        The snapshot dict: ``id``, ``timestamp``, ``duration``, ``user`` and,
        when supplied, ``request`` and ``response``.

    Raises:
        ConflictingContextError: If both ``req`` and ``ctx`` are given.
    """
    started = time.perf_counter()
    snapshot_id = ObjectId()

    if options is None:
        options = NormalizeOptions(**overrides)
    elif overrides:
        options = options.model_copy(update=overrides)

    if options.req is not None and options.ctx is not None:
        logger.warning(LogEvents.SNAPSHOT_REJECTED, reason="req_and_ctx")
        raise ConflictingContextError()

    request = request_from_context(options.ctx) if options.ctx is not None else options.req
    if request is not None:
        options = apply_request_flags(request, options)

    snapshot: dict[str, Any] = {
        "id": str(snapshot_id),
        "timestamp": to_iso_string(snapshot_id.generation_time),
    }

    if request is not None:
        snapshot["request"] = _resolve_request(request, options)

    snapshot["user"] = _resolve_user(request, options)

    response = _resolve_response(options.response_headers, options)
    if response is not None:
        snapshot["response"] = response

    snapshot["duration"] = (time.perf_counter() - started) * 1000
    logger.debug(
        LogEvents.SNAPSHOT_CREATED,
        snapshot_id=snapshot["id"],
        duration_ms=snapshot["duration"],
    )
    return snapshot


def _resolve_request(request: Any, options: NormalizeOptions) -> dict[str, Any]:
    body_options = options.mask_options()
    resolved: dict[str, Any] = {}

    method = get_field(request, "method")
    method = method if isinstance(method, str) and method else DEFAULT_METHOD
    resolved["method"] = method

    headers = _resolve_headers(get_field(request, "headers"), options)
    if headers is not None:
        resolved["headers"] = headers
        if headers.get(COOKIE_HEADER):
            resolved["cookies"] = {
                name: value for name, value in cookie_parser(headers[COOKIE_HEADER]).items() if name
            }

    url = get_field(request, "original_url") or get_field(request, "url")
    if isinstance(url, str) and url:
        resolved.update(_resolve_url(url, options, body_options))

    if options.parse_body and method.upper() not in BODYLESS_METHODS:
        body = _resolve_body(request, options, body_options)
        if body is not None:
            resolved["body"] = body

    if options.parse_files:
        for name in ("file", "files"):
            value = get_field(request, name)
            if value is not None and not isinstance(value, _SCALARS):
                resolved[name] = safe_stringify(mask_special_types(value, body_options))

    request_id = get_field(request, "id")
    if isinstance(request_id, str) and request_id:
        resolved["id"] = request_id
    elif headers and headers.get(REQUEST_ID_HEADER):
        resolved["id"] = headers[REQUEST_ID_HEADER]

    http_version = _resolve_http_version(request)
    if http_version is not None:
        resolved["http_version"] = http_version

    timestamp = _resolve_received_at(request)
    if timestamp is not None:
        resolved["timestamp"] = timestamp

    return resolved


def _resolve_headers(raw: Any, options: NormalizeOptions) -> dict[str, Any] | None:
    if not isinstance(raw, Mapping):
        return None
    return mask_props(
        headers_to_lower_case(raw),
        options.sanitize_headers,
        options.mask_options(is_headers=True),
    )


def _resolve_url(url: str, options: NormalizeOptions, body_options: MaskOptions) -> dict[str, Any]:
    parts = split_url(url)
    if not options.parse_query:
        resolved: dict[str, Any] = {"url": join_url(parts.base, parts.query)}
        if parts.query:
            resolved["query"] = parts.query
        return resolved

    query = mask_props(parse_query(parts.query), options.sanitize_fields, body_options)
    resolved = {"url": join_url(parts.base, serialize_query(query))}
    if parts.query:
        resolved["query"] = query
    return resolved


def _is_blank(value: Any) -> bool:
    """Return True for a missing body or a falsy scalar such as 0, "" or False."""
    return value is None or (isinstance(value, _SCALARS) and not value)


def _resolve_body(request: Any, options: NormalizeOptions, body_options: MaskOptions) -> Any:
    raw = get_field(request, "original_body")
    if _is_blank(raw):
        raw = get_field(request, "body")
    if _is_blank(raw):
        return None

    if options.mask_buffers or options.mask_streams:
        raw = mask_special_types(raw, body_options)
    body = mask_props(raw, options.sanitize_fields, body_options)
    return body if isinstance(body, str) else safe_stringify(body)


def _resolve_http_version(request: Any) -> str | None:
    version = get_field(request, "http_version")
    if isinstance(version, str):
        return version

    major = get_field(request, "http_version_major")
    minor = get_field(request, "http_version_minor")
    both_int = all(isinstance(part, int) and not isinstance(part, bool) for part in (major, minor))
    both_str = isinstance(major, str) and isinstance(minor, str)
    if both_int or both_str:
        return f"{major}.{minor}"
    return None


def _resolve_received_at(request: Any) -> str | None:
    for marker, accepts_datetime in START_TIME_MARKERS:
        value = get_field(request, marker)
        if accepts_datetime and isinstance(value, datetime):
            return to_iso_string(value)
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            try:
                return epoch_to_iso_string(value)
            except (OverflowError, OSError, ValueError) as exc:
                logger.debug(LogEvents.REQUEST_TIMESTAMP_INVALID, marker=marker, error=str(exc))
    return None


def _user_from_serializer(user: Any) -> Any:
    for name in USER_SERIALIZERS:
        method = getattr(user, name, None)
        if callable(method):
            return method()
    return None


def _user_from_clone(user: Any) -> Any:
    fields = dict(iter_fields(user)) if is_plain_object(user) else dict(vars(user))
    return clone(fields)


# Serializers tried in order; the first that yields a mapping wins
_USER_SERIALIZERS: tuple[tuple[str, Callable[[Any], Any]], ...] = (
    ("serializer", _user_from_serializer),
    ("clone", _user_from_clone),
    ("json", json_round_trip),
)


def serialize_user(user: Any) -> dict[str, Any]:
    """Turn a user object into a plain dict, or ``{}`` if every serializer fails."""
    for method, serializer in _USER_SERIALIZERS:
        try:
            result = serializer(user)
        except Exception as exc:
            logger.debug(LogEvents.USER_SERIALIZATION_FAILED, method=method, error=str(exc))
            continue
        if isinstance(result, Mapping):
            return dict(result)
    return {}


def _resolve_user(request: Any, options: NormalizeOptions) -> dict[str, Any]:
    raw = get_field(request, "user")
    user: dict[str, Any] = {}
    if raw is not None and not isinstance(raw, (*_SCALARS, list, tuple)):
        user = serialize_user(raw)

    ip = get_field(request, "ip") or get_field(get_field(request, "connection"), "remote_address")
    if ip and not isinstance(user.get("ip_address"), str):
        user["ip_address"] = ip

    if options.user_fields:
        user = {name: user[name] for name in options.user_fields if name in user}

    mask_options = options.mask_options()
    return mask_props(mask_special_types(user, mask_options), options.sanitize_fields, mask_options)


def _response_head(raw: Any) -> ResponseHead | None:
    if isinstance(raw, Mapping):
        if not raw:
            return None
        return ResponseHead(headers=headers_to_lower_case(raw))
    if isinstance(raw, str):
        head = parse_response_head(raw)
        if head.status_code is None and raw.startswith("HTTP/"):
            logger.debug(LogEvents.RESPONSE_STATUS_LINE_INVALID)
        return head
    return None


def _resolve_response(raw: Any, options: NormalizeOptions) -> dict[str, Any] | None:
    head = _response_head(raw)
    if head is None:
        return None

    headers = mask_props(
        head.headers,
        options.sanitize_headers,
        options.mask_options(is_headers=True),
    )
    if not headers:
        return None

    response: dict[str, Any] = {"headers": headers}
    if head.http_version is not None:
        response["http_version"] = head.http_version
    if head.status_code is not None:
        response["status_code"] = head.status_code
    if head.reason_phrase is not None:
        response["reason_phrase"] = head.reason_phrase

    date = headers.get(DATE_HEADER)
    if date:
        try:
            response["timestamp"] = to_iso_string(date_parser.parse(date))
        except (ValueError, OverflowError) as exc:
            logger.debug(LogEvents.RESPONSE_DATE_INVALID, value=date, error=str(exc))

    response_time = headers.get(RESPONSE_TIME_HEADER)
    if response_time:
        duration = parse_duration(response_time)
        if duration is None:
            logger.debug(LogEvents.RESPONSE_DURATION_INVALID, value=response_time)
        else:
            response["duration"] = duration

    return response
