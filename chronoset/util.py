"""Utility constants and helpers for chronoset.

Time unit constants are ``timedelta`` values. ``MIN`` and ``MAX`` are the
sentinels for the unbounded past and future; every point on the timeline is a
timezone-aware ``datetime`` between them, held in UTC.
"""

from datetime import date, datetime, time, timedelta, timezone
from typing import Any, Literal

from dateutil.parser import isoparse

from chronoset.zoned import ZonedInstant

# Time unit constants
SECOND = timedelta(seconds=1)
MINUTE = timedelta(minutes=1)
HOUR = timedelta(hours=1)
DAY = timedelta(days=1)
WEEK = timedelta(weeks=1)

# Unbounded past/future
MIN = datetime.min.replace(tzinfo=timezone.utc)
MAX = datetime.max.replace(tzinfo=timezone.utc)


def coerce_point(
    value: datetime | date | str | ZonedInstant | None,
    edge: Literal["start", "end", "point"] = "point",
) -> datetime:
    """Convert a bound to a ``datetime`` in UTC.

    Accepts:
    - datetime: Must be timezone-aware, converted to UTC
    - date: Midnight UTC of that day
    - str: ISO 8601 text with an offset (e.g. "2025-01-01T09:00+00:00")
    - ZonedInstant: Resolved to its instant in UTC
    - None: Unbounded (MIN for a start, MAX for an end)

    Aware values whose UTC instant lies beyond the representable range clamp
    to MIN or MAX.

    Raises:
        TypeError: If value is an unsupported type or a naive datetime
    """
    if value is None:
        if edge == "start":
            return MIN
        if edge == "end":
            return MAX
        raise TypeError(
            "A point on the timeline cannot be None.\n"
            "None is only accepted as an interval bound, where it means unbounded."
        )
    if isinstance(value, ZonedInstant):
        return _to_utc(value.instant)
    if isinstance(value, str):
        return _require_aware(isoparse(value), edge, value)
    if isinstance(value, datetime):
        return _require_aware(value, edge, value)
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    raise TypeError(
        f"Interval {edge} must be datetime, date, str, ZonedInstant, or None.\n"
        f"Got {type(value).__name__!r}: {value!r}\n"
        f"Examples:\n"
        f"  Interval(start=datetime(2025,1,1,tzinfo=timezone.utc), end=None)\n"
        f"  Interval(start=date(2025,1,1), end=date(2025,2,1))\n"
        f"  Interval(start='2025-01-01T09:00Z', end='2025-01-01T17:00Z')"
    )


def _require_aware(dt: datetime, edge: str, original: Any) -> datetime:
    if dt.tzinfo is None or dt.utcoffset() is None:
        raise TypeError(
            f"Interval {edge} must be a timezone-aware datetime.\n"
            f"Got naive value: {original!r}\n"
            f"Hint: Add timezone info:\n"
            f"  from zoneinfo import ZoneInfo\n"
            f"  dt = datetime(..., tzinfo=ZoneInfo('UTC'))  "
            f"# or 'US/Pacific', etc.\n"
            f"  # Or include an offset in ISO text: '2025-01-01T09:00+00:00'"
        )
    return _to_utc(dt)


def shift(point: datetime, delta: timedelta) -> datetime:
    """Move ``point`` by ``delta``, stopping at ``MIN``/``MAX``."""
    try:
        return point + delta
    except OverflowError:
        return MAX if delta > timedelta() else MIN


def _to_utc(dt: datetime) -> datetime:
    # Readings whose UTC instant falls outside datetime's range are unbounded
    try:
        return dt.astimezone(timezone.utc)
    except OverflowError:
        offset = dt.utcoffset() or timedelta()
        return MAX if offset < timedelta() else MIN
