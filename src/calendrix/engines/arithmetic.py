"""
calendrix.engines.arithmetic
----------------------------
Two families of arithmetic, never mixed implicitly:

- fixed-length: milliseconds added to an Instant (exact, invertible);
- calendar-unit: years/months/days added to a CivilDate.

Calendar addition applies years and months first (as one month count),
then days through epoch-day arithmetic. When the source day does not exist
in the target month the day is clamped to the month's last day and the
result says so (``was_clamped``). Because of that clamp, adding and then
subtracting a month is not always a round trip:

    Jan 31 + 1 month  -> Feb 28 (clamped)
    Feb 28 - 1 month  -> Jan 28
"""

from __future__ import annotations

from typing import Optional, Tuple

from loguru import logger

from calendrix.core.interfaces import TimeZoneResolver
from calendrix.core.time import MS_PER_DAY, MS_PER_MINUTE, days_from_civil, days_in_month, millis_of_day
from calendrix.core.types import CalendarResult, CivilDate, Duration, Instant, Unit
from calendrix.engines.projection import DEFAULT_ZONE, resolve_local, to_civil


def add_millis(instant: Instant, n: int) -> Instant:
    return instant.add_millis(n)


def shift_months(year: int, month: int, day: int, months: int) -> Tuple[int, int, int, bool]:
    """Move (year, month) by ``months``; returns (year, month, day, was_clamped)."""
    total = year * 12 + (month - 1) + months
    y, m0 = divmod(total, 12)
    m = m0 + 1
    dim = days_in_month(y, m)
    if day > dim:
        return y, m, dim, True
    return y, m, day, False


def _settle(
    local_millis: int,
    original: CivilDate,
    zone: Optional[str],
    resolver: Optional[TimeZoneResolver],
) -> CivilDate:
    """Give new wall-clock fields an offset: the original one, or ``zone``'s."""
    if zone is None:
        return CivilDate.from_local_millis(local_millis, original.offset_minutes, original.is_dst)
    inst, res = resolve_local(local_millis, zone, resolver)
    return CivilDate.from_local_millis(
        inst.millis + res.offset_minutes * MS_PER_MINUTE, res.offset_minutes, res.is_dst
    )


def _calendar_duration(duration: Optional[Duration], years: int, months: int, days: int) -> Duration:
    if duration is None:
        return Duration(years=years, months=months, days=days)
    if years or months or days:
        raise TypeError("pass either a Duration or years/months/days, not both")
    return duration


def add_calendar(
    civil: CivilDate,
    duration: Optional[Duration] = None,
    *,
    years: int = 0,
    months: int = 0,
    days: int = 0,
    zone: Optional[str] = None,
    resolver: Optional[TimeZoneResolver] = None,
) -> CalendarResult:
    """
    Add calendar units to ``civil``. Time of day is kept as wall-clock time.

    Without ``zone`` the result keeps ``civil``'s offset; with ``zone`` the
    new wall time is resolved in that zone (DST may change the offset).
    Raises RangeError if the result leaves the representable range.
    """
    dur = _calendar_duration(duration, years, months, days)
    if dur.millis:
        raise ValueError("add_calendar only takes calendar units; use add() for a fixed-length part")

    y, m, d, clamped = shift_months(civil.year, civil.month, civil.day, dur.total_months)
    local = (days_from_civil(y, m, d) + dur.days) * MS_PER_DAY + millis_of_day(
        civil.hour, civil.minute, civil.second, civil.millisecond
    )
    result = _settle(local, civil, zone, resolver)
    if clamped:
        logger.debug("clamped day {} to {:04d}-{:02d}-{:02d}", civil.day, y, m, d)
    return CalendarResult(civil=result, instant=result.to_instant(), was_clamped=clamped)


def subtract_calendar(
    civil: CivilDate,
    duration: Optional[Duration] = None,
    *,
    years: int = 0,
    months: int = 0,
    days: int = 0,
    zone: Optional[str] = None,
    resolver: Optional[TimeZoneResolver] = None,
) -> CalendarResult:
    dur = _calendar_duration(duration, years, months, days)
    return add_calendar(civil, -dur, zone=zone, resolver=resolver)


def add(
    civil: CivilDate,
    duration: Duration,
    *,
    zone: Optional[str] = None,
    resolver: Optional[TimeZoneResolver] = None,
) -> CalendarResult:
    """Apply the calendar part of ``duration``, then its fixed-length part."""
    step = add_calendar(civil, duration.calendar_part(), zone=zone, resolver=resolver)
    if not duration.millis:
        return step
    inst = step.instant.add_millis(duration.millis)
    if zone is None:
        off = step.civil.offset_minutes
        out = CivilDate.from_local_millis(inst.millis + off * MS_PER_MINUTE, off, step.civil.is_dst)
    else:
        out = to_civil(inst, zone, resolver)
    return CalendarResult(civil=out, instant=inst, was_clamped=step.was_clamped)


def add_to_instant(
    instant: Instant,
    duration: Duration,
    *,
    zone: str = DEFAULT_ZONE,
    resolver: Optional[TimeZoneResolver] = None,
) -> Instant:
    """Convenience: project ``instant`` into ``zone``, add, return the new instant."""
    if duration.calendar_part().is_zero:
        return instant.add_millis(duration.millis)
    civil = to_civil(instant, zone, resolver)
    return add(civil, duration, zone=zone, resolver=resolver).instant


def start_of(
    civil: CivilDate,
    unit: "Unit | str",
    *,
    week_starts_on: int = 0,
    zone: Optional[str] = None,
    resolver: Optional[TimeZoneResolver] = None,
) -> CivilDate:
    """Truncate ``civil`` to the start of the enclosing unit."""
    u = Unit.parse(unit)
    y, m, d = civil.year, civil.month, civil.day
    hh, mi, ss, ms = civil.hour, civil.minute, civil.second, civil.millisecond

    if u is Unit.YEARS:
        m, d, hh, mi, ss, ms = 1, 1, 0, 0, 0, 0
    elif u is Unit.MONTHS:
        d, hh, mi, ss, ms = 1, 0, 0, 0, 0
    elif u in (Unit.WEEKS, Unit.DAYS):
        hh, mi, ss, ms = 0, 0, 0, 0
    elif u is Unit.HOURS:
        mi, ss, ms = 0, 0, 0
    elif u is Unit.MINUTES:
        ss, ms = 0, 0
    elif u is Unit.SECONDS:
        ms = 0

    epoch_day = days_from_civil(y, m, d)
    if u is Unit.WEEKS:
        if not 0 <= week_starts_on <= 6:
            raise ValueError("week_starts_on must be in 0..6")
        epoch_day -= (civil.weekday - week_starts_on) % 7

    local = epoch_day * MS_PER_DAY + millis_of_day(hh, mi, ss, ms)
    return _settle(local, civil, zone, resolver)
