"""Parse human-readable durations such as ``"500 ms"`` or ``"1.5s"``."""

from __future__ import annotations

import re

DURATION_RE = re.compile(
    r"^(?P<amount>-?(?:\d+)?\.?\d+)\s*"
    r"(?P<unit>milliseconds?|msecs?|ms|seconds?|secs?|s|minutes?|mins?|m"
    r"|hours?|hrs?|h|days?|d|weeks?|w|years?|yrs?|y)?$",
    flags=re.IGNORECASE,
)

_SECOND = 1000.0
_MINUTE = _SECOND * 60
_HOUR = _MINUTE * 60
_DAY = _HOUR * 24
_WEEK = _DAY * 7
_YEAR = _DAY * 365.25

# Milliseconds per unit, listed with every accepted spelling
_UNIT_FACTORS = (
    (("milliseconds", "millisecond", "msecs", "msec", "ms"), 1.0),
    (("seconds", "second", "secs", "sec", "s"), _SECOND),
    (("minutes", "minute", "mins", "min", "m"), _MINUTE),
    (("hours", "hour", "hrs", "hr", "h"), _HOUR),
    (("days", "day", "d"), _DAY),
    (("weeks", "week", "w"), _WEEK),
    (("years", "year", "yrs", "yr", "y"), _YEAR),
)


def parse_duration(text: str) -> float | None:
    """Convert a duration string to milliseconds.

    A bare number is read as milliseconds. Returns None when the text is not a
    duration.
    """
    if not isinstance(text, str) or len(text) > 100:
        return None
    match = DURATION_RE.match(text.strip())
    if match is None:
        return None
    amount = float(match.group("amount"))
    unit = (match.group("unit") or "ms").lower()
    for names, factor in _UNIT_FACTORS:
        if unit in names:
            return amount * factor
    return None
