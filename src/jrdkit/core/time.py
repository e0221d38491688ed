from __future__ import annotations

"""
jrdkit.core.time
================

Timestamp handling for the JRD `expires` member:
- parse_rfc3339: lenient RFC 3339 decoder (any offset, optional fraction).
- format_rfc3339: strict encoder (UTC, whole seconds, literal "Z").
- normalize_utc: the canonical in-memory form used by the models.

Clock abstractions for expiry checks:
- Clock Protocol for dependency-injection and testing.
- SystemClock: production default implementation.
- ManualClock: deterministic time control for tests.
"""

import re
from datetime import UTC, datetime, timedelta, timezone
from typing import Protocol

__all__ = [
    "Clock",
    "ManualClock",
    "SystemClock",
    "format_rfc3339",
    "normalize_utc",
    "parse_rfc3339",
]

# RFC 3339 section 5.6 date-time. "T"/"Z" are case-insensitive per the RFC;
# a space separator is tolerated as the RFC's NOTE allows. ASCII digits only.
_RFC3339_RE = re.compile(
    r"(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})"
    r"[Tt ]"
    r"(?P<hour>\d{2}):(?P<minute>\d{2}):(?P<second>\d{2})"
    r"(?:\.(?P<fraction>\d+))?"
    r"(?P<offset>[Zz]|[+-]\d{2}:\d{2})",
    re.ASCII,
)


def normalize_utc(value: datetime) -> datetime:
    """
    Convert to UTC and drop sub-second precision.

    Naive datetimes are taken to already be UTC.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    try:
        return value.astimezone(UTC).replace(microsecond=0)
    except OverflowError as e:
        raise ValueError(f"{value.isoformat()} is out of range in UTC") from e


def parse_rfc3339(text: str) -> datetime:
    """
    Parse an RFC 3339 instant into an aware datetime (original offset kept).

    Raises ValueError for anything that is not a valid RFC 3339 date-time.
    """
    m = _RFC3339_RE.fullmatch(text)
    if not m:
        raise ValueError(f"not an RFC 3339 date-time: {text!r}")

    offset = m.group("offset")
    if offset in ("Z", "z"):
        tz = UTC
    else:
        sign = -1 if offset[0] == "-" else 1
        hours, minutes = int(offset[1:3]), int(offset[4:6])
        if hours > 23 or minutes > 59:
            raise ValueError(f"invalid UTC offset in {text!r}")
        tz = timezone(sign * timedelta(hours=hours, minutes=minutes))

    fraction = m.group("fraction") or ""
    # datetime holds microseconds; extra digits are truncated
    micro = int(fraction[:6].ljust(6, "0")) if fraction else 0

    # a leap second folds onto :59; datetime() rejects other out-of-range fields
    second = int(m.group("second"))
    if second == 60:
        second = 59
    return datetime(
        int(m.group("year")),
        int(m.group("month")),
        int(m.group("day")),
        int(m.group("hour")),
        int(m.group("minute")),
        second,
        micro,
        tzinfo=tz,
    )


def format_rfc3339(value: datetime) -> str:
    """Format as `YYYY-MM-DDTHH:MM:SSZ` in UTC, never with fractional seconds."""
    return normalize_utc(value).isoformat(timespec="seconds").replace("+00:00", "Z")


class Clock(Protocol):
    """Minimal clock protocol used for expiry checks."""

    def now_dt(self) -> datetime: ...


class SystemClock:
    """Default production clock backed by system time."""

    def now_dt(self) -> datetime:
        """UTC datetime for wall-clock comparisons."""
        return datetime.now(UTC)


class ManualClock(SystemClock):
    """
    Controllable clock for tests.

    - Wall time starts at `start` and advances only when you call `advance`.
    """

    def __init__(self, start: datetime) -> None:
        self._wall = normalize_utc(start)

    def now_dt(self) -> datetime:
        return self._wall

    def advance(self, seconds: float) -> None:
        self._wall += timedelta(seconds=max(0.0, seconds))
