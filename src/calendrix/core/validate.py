"""
calendrix.core.validate
-----------------------
Structural validation of proposed calendar fields.

Nothing here corrects a bad value: a day past the end of its month is
rejected, never rolled into the following month.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from .time import days_in_month

MAX_OFFSET_MINUTES = 18 * 60

_FIELDS = ("year", "month", "day", "hour", "minute", "second", "millisecond", "offset_minutes")

_TIME_LIMITS = (
    ("hour", 23),
    ("minute", 59),
    ("second", 59),
    ("millisecond", 999),
)


def _is_int(v: Any) -> bool:
    return isinstance(v, int) and not isinstance(v, bool)


def invalid_reason(
    year: int,
    month: int,
    day: int,
    hour: int = 0,
    minute: int = 0,
    second: int = 0,
    millisecond: int = 0,
    offset_minutes: int = 0,
) -> Optional[str]:
    """Return a message naming the first field out of range, or None if all fields are valid."""
    values = dict(
        year=year, month=month, day=day, hour=hour, minute=minute,
        second=second, millisecond=millisecond, offset_minutes=offset_minutes,
    )
    for name in _FIELDS:
        if not _is_int(values[name]):
            return f"{name} must be an integer, got {values[name]!r}"

    if not 1 <= month <= 12:
        return f"month must be in 1..12, got {month}"
    dim = days_in_month(year, month)
    if not 1 <= day <= dim:
        return f"day must be in 1..{dim} for {year:04d}-{month:02d}, got {day}"
    for name, hi in _TIME_LIMITS:
        v = values[name]
        if not 0 <= v <= hi:
            return f"{name} must be in 0..{hi}, got {v}"
    if abs(offset_minutes) > MAX_OFFSET_MINUTES:
        return f"offset_minutes must be within +/-{MAX_OFFSET_MINUTES}, got {offset_minutes}"
    return None


def is_valid_civil_date(candidate: Mapping[str, Any]) -> bool:
    """
    Check a mapping of calendar fields. Time fields and offset default to 0
    when absent; year, month and day are required.
    """
    if any(k not in candidate for k in ("year", "month", "day")):
        return False
    fields = {k: candidate.get(k, 0) for k in _FIELDS}
    return invalid_reason(**fields) is None
