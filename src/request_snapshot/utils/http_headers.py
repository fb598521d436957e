"""Header normalisation and raw HTTP response-head parsing."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

STATUS_LINE_RE = re.compile(r"^HTTP/(\d+)\.(\d+)\s+(\d{3})(?:\s+(.*))?$")


@dataclass
class ResponseHead:
    """Status line and headers parsed from a raw response head."""

    headers: dict[str, str] = field(default_factory=dict)
    http_version: str | None = None
    status_code: int | None = None
    reason_phrase: str | None = None


def _as_text(value: Any) -> str | None:
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("latin-1")
    return None


def headers_to_lower_case(headers: Any) -> dict[str, str]:
    """Copy string-valued headers with lower-cased names.

    Names that collide after lower-casing keep the last value. Byte names and
    values (as found in ASGI scopes) are decoded as latin-1; any other value
    type is dropped.
    """
    if not isinstance(headers, Mapping):
        return {}
    lowered: dict[str, str] = {}
    for name, value in headers.items():
        text_name = _as_text(name)
        text_value = _as_text(value)
        if text_name is not None and text_value is not None:
            lowered[text_name.lower()] = text_value
    return lowered


def parse_response_head(text: str) -> ResponseHead:
    """Parse ``HTTP/x.y code reason`` plus header lines.

    Parsing stops at the first blank line, so a trailing body is ignored. A
    missing or malformed status line leaves the status fields unset; repeated
    headers are joined with ``", "``.
    """
    head = ResponseHead()
    lines = text.splitlines()

    if lines:
        match = STATUS_LINE_RE.match(lines[0].strip())
        if match:
            major, minor, code, reason = match.groups()
            head.http_version = f"{major}.{minor}"
            head.status_code = int(code)
            head.reason_phrase = reason or ""
            lines = lines[1:]
        elif lines[0].startswith("HTTP/"):
            lines = lines[1:]

    for line in lines:
        if not line.strip():
            break
        name, separator, value = line.partition(":")
        if not separator or not name.strip():
            continue
        key = name.strip().lower()
        value = value.strip()
        head.headers[key] = f"{head.headers[key]}, {value}" if key in head.headers else value

    return head
