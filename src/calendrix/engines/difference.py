"""
calendrix.engines.difference
----------------------------
Signed distances between instants and "relative time" buckets.

Fixed units (ms .. weeks) divide the millisecond delta. Months and years
vary in length, so they are counted by walking calendar fields: the number
of whole months that can be added to the earlier date (with month-end
clamping) without passing the later one.

Every result is truncated toward zero, which makes
``difference(a, b, u) == -difference(b, a, u)`` hold for every unit.
"""

from __future__ import annotations

from typing import Callable, Optional

from calendrix.core.interfaces import TimeZoneResolver
from calendrix.core.time import MS_PER_DAY, MS_PER_HOUR, MS_PER_MINUTE
from calendrix.core.types import BucketKind, CivilDate, Direction, Instant, RelativeBucket, Unit
from calendrix.engines.arithmetic import shift_months
from calendrix.engines.projection import DEFAULT_ZONE, to_civil
from calendrix.text.formatter import format_date

JUST_NOW_LIMIT = MS_PER_MINUTE
MINUTES_LIMIT = MS_PER_HOUR
HOURS_LIMIT = MS_PER_DAY
DAYS_LIMIT = 7 * MS_PER_DAY


def _trunc_div(n: int, d: int) -> int:
    q = abs(n) // d
    return -q if n < 0 else q


def month_difference(a: CivilDate, b: CivilDate) -> int:
    """Whole months from ``b`` to ``a`` (positive when a is later)."""
    if a.to_instant() < b.to_instant():
        return -month_difference(b, a)

    months = max((a.year * 12 + a.month) - (b.year * 12 + b.month), 0)
    target = a.wall_tuple
    while months > 0:
        y, m, d, _ = shift_months(b.year, b.month, b.day, months)
        anchor = (y, m, d, b.hour, b.minute, b.second, b.millisecond)
        if anchor <= target:
            break
        months -= 1
    return months


def difference(
    a: Instant,
    b: Instant,
    unit: "Unit | str" = Unit.MILLISECONDS,
    *,
    zone: str = DEFAULT_ZONE,
    resolver: Optional[TimeZoneResolver] = None,
) -> int:
    """
    ``a - b`` in whole ``unit``s, truncated toward zero.

    ``zone`` only matters for months and years, whose boundaries are
    calendar dates in that zone.
    """
    u = Unit.parse(unit)
    if u.is_calendar:
        months = month_difference(to_civil(a, zone, resolver), to_civil(b, zone, resolver))
        return months if u is Unit.MONTHS else _trunc_div(months, 12)
    return _trunc_div(a.millis - b.millis, u.millis)


def relative_bucket(target: Instant, reference: Instant) -> RelativeBucket:
    """
    Bucket the distance between ``target`` and ``reference``.

    Thresholds apply to the absolute delta, each closed below and open above:
    [0, 60s) just now, [60s, 1h) minutes, [1h, 1d) hours, [1d, 7d) days,
    otherwise absolute. ``direction`` is PAST when target <= reference.
    """
    delta = reference.millis - target.millis
    direction = Direction.PAST if delta >= 0 else Direction.FUTURE
    span = abs(delta)

    if span < JUST_NOW_LIMIT:
        return RelativeBucket(BucketKind.JUST_NOW, 0, direction)
    if span < MINUTES_LIMIT:
        return RelativeBucket(BucketKind.MINUTES, span // MS_PER_MINUTE, direction)
    if span < HOURS_LIMIT:
        return RelativeBucket(BucketKind.HOURS, span // MS_PER_HOUR, direction)
    if span < DAYS_LIMIT:
        return RelativeBucket(BucketKind.DAYS, span // MS_PER_DAY, direction)
    return RelativeBucket(BucketKind.ABSOLUTE, span // MS_PER_DAY, direction, instant=target)


_NOUNS = {
    BucketKind.MINUTES: "minute",
    BucketKind.HOURS: "hour",
    BucketKind.DAYS: "day",
}


def describe(bucket: RelativeBucket, absolute: Optional[Callable[[Instant], str]] = None) -> str:
    """
    English phrasing of a bucket ("just now", "5 minutes ago", "in 2 days").

    ABSOLUTE buckets are rendered by ``absolute``, by default the UTC date.
    """
    if bucket.kind is BucketKind.JUST_NOW:
        return "just now"
    if bucket.kind is BucketKind.ABSOLUTE:
        return (absolute or format_date)(bucket.instant)

    noun = _NOUNS[bucket.kind]
    phrase = f"{bucket.count} {noun}{'' if bucket.count == 1 else 's'}"
    return f"{phrase} ago" if bucket.direction is Direction.PAST else f"in {phrase}"
