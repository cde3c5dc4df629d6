from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime, timedelta, timezone
from enum import Enum, IntEnum
from typing import TYPE_CHECKING, Any, Optional, Tuple

from .errors import InvalidCivilDate, RangeError
from .time import (
    MAX_EPOCH_MILLIS,
    MS_PER_DAY,
    MS_PER_HOUR,
    MS_PER_MINUTE,
    MS_PER_SECOND,
    civil_from_days,
    day_of_year,
    days_from_civil,
    millis_of_day,
    split_millis,
    time_of_day,
    weekday_from_days,
)
from .validate import invalid_reason

if TYPE_CHECKING:
    from .clock import Clock

_EPOCH_DT = datetime(1970, 1, 1, tzinfo=timezone.utc)


class Ordering(IntEnum):
    LESS = -1
    EQUAL = 0
    GREATER = 1


def _check_range(millis: int) -> int:
    if not -MAX_EPOCH_MILLIS <= millis <= MAX_EPOCH_MILLIS:
        raise RangeError(f"{millis} ms is outside the representable range of +/-{MAX_EPOCH_MILLIS} ms")
    return millis


@dataclass(frozen=True, order=True)
class Instant:
    """A point in time: milliseconds since 1970-01-01T00:00:00Z."""
    millis: int

    def __post_init__(self) -> None:
        if not isinstance(self.millis, int) or isinstance(self.millis, bool):
            raise TypeError(f"Instant millis must be an int, got {type(self.millis).__name__}")
        _check_range(self.millis)

    @classmethod
    def now(cls, clock: "Clock") -> Instant:
        return cls(clock.now_millis())

    @classmethod
    def from_epoch_millis(cls, n: int) -> Instant:
        return cls(n)

    def to_epoch_millis(self) -> int:
        return self.millis

    @staticmethod
    def compare(a: Instant, b: Instant) -> Ordering:
        if a.millis < b.millis:
            return Ordering.LESS
        if a.millis > b.millis:
            return Ordering.GREATER
        return Ordering.EQUAL

    def add_millis(self, n: int) -> Instant:
        """Exact fixed-length shift; raises RangeError instead of wrapping."""
        return Instant(_check_range(self.millis + n))

    @classmethod
    def from_datetime(cls, dt: datetime) -> Instant:
        if dt.tzinfo is None or dt.utcoffset() is None:
            raise ValueError("datetime must be timezone-aware")
        return cls((dt - _EPOCH_DT) // timedelta(milliseconds=1))

    def to_datetime(self) -> datetime:
        """Aware UTC datetime; only for instants inside datetime's year 1..9999 range."""
        try:
            return _EPOCH_DT + timedelta(milliseconds=self.millis)
        except OverflowError as e:
            raise RangeError(f"{self} is outside the datetime range") from e

    def __str__(self) -> str:
        return f"Instant({self.millis})"


@dataclass(frozen=True)
class CivilDate:
    """
    Calendar fields of an instant as seen at a given UTC offset.

    Always valid: construction rejects out-of-range fields with
    InvalidCivilDate. Use ``replace`` (or the arithmetic engine) to derive
    a new value.
    """
    year: int
    month: int
    day: int
    hour: int = 0
    minute: int = 0
    second: int = 0
    millisecond: int = 0
    offset_minutes: int = 0
    is_dst: bool = False

    def __post_init__(self) -> None:
        reason = invalid_reason(
            self.year, self.month, self.day, self.hour, self.minute,
            self.second, self.millisecond, self.offset_minutes,
        )
        if reason is not None:
            raise InvalidCivilDate(reason)
        if not isinstance(self.is_dst, bool):
            raise InvalidCivilDate(f"is_dst must be a bool, got {self.is_dst!r}")

    @classmethod
    def from_local_millis(cls, local_millis: int, offset_minutes: int = 0, is_dst: bool = False) -> CivilDate:
        """Build from wall-clock milliseconds (epoch-relative, offset already applied)."""
        days, ms = split_millis(local_millis)
        y, m, d = civil_from_days(days)
        hh, mi, ss, sss = time_of_day(ms)
        return cls(y, m, d, hh, mi, ss, sss, offset_minutes, is_dst)

    @property
    def epoch_day(self) -> int:
        return days_from_civil(self.year, self.month, self.day)

    @property
    def local_millis(self) -> int:
        """Wall-clock milliseconds since 1970-01-01T00:00 at this offset."""
        return self.epoch_day * MS_PER_DAY + millis_of_day(self.hour, self.minute, self.second, self.millisecond)

    def to_instant(self) -> Instant:
        return Instant(self.local_millis - self.offset_minutes * MS_PER_MINUTE)

    @property
    def weekday(self) -> int:
        """0=Sunday..6=Saturday."""
        return weekday_from_days(self.epoch_day)

    @property
    def day_of_year(self) -> int:
        return day_of_year(self.year, self.month, self.day)

    @property
    def date_tuple(self) -> Tuple[int, int, int]:
        return (self.year, self.month, self.day)

    @property
    def wall_tuple(self) -> Tuple[int, int, int, int, int, int, int]:
        return (self.year, self.month, self.day, self.hour, self.minute, self.second, self.millisecond)

    def replace(self, **changes: Any) -> CivilDate:
        return replace(self, **changes)


@dataclass(frozen=True)
class Duration:
    """
    Calendar deltas (years, months, days) plus a fixed-length delta (millis).

    The two parts are applied separately: the calendar part against a
    CivilDate, then ``millis`` against the resulting Instant.
    """
    years: int = 0
    months: int = 0
    days: int = 0
    millis: int = 0

    @classmethod
    def of(
        cls,
        *,
        years: int = 0,
        months: int = 0,
        weeks: int = 0,
        days: int = 0,
        hours: int = 0,
        minutes: int = 0,
        seconds: int = 0,
        millis: int = 0,
    ) -> Duration:
        return cls(
            years=years,
            months=months,
            days=days + 7 * weeks,
            millis=millis + seconds * MS_PER_SECOND + minutes * MS_PER_MINUTE + hours * MS_PER_HOUR,
        )

    @property
    def total_months(self) -> int:
        return self.years * 12 + self.months

    @property
    def is_zero(self) -> bool:
        return not (self.years or self.months or self.days or self.millis)

    def calendar_part(self) -> Duration:
        return Duration(self.years, self.months, self.days, 0)

    def fixed_part(self) -> Duration:
        return Duration(0, 0, 0, self.millis)

    def __neg__(self) -> Duration:
        return Duration(-self.years, -self.months, -self.days, -self.millis)

    def __add__(self, other: object) -> Duration:
        if not isinstance(other, Duration):
            return NotImplemented
        return Duration(
            self.years + other.years,
            self.months + other.months,
            self.days + other.days,
            self.millis + other.millis,
        )


@dataclass(frozen=True)
class ZoneResolution:
    offset_minutes: int
    is_dst: bool = False
    abbreviation: Optional[str] = None


class Unit(str, Enum):
    MILLISECONDS = "milliseconds"
    SECONDS = "seconds"
    MINUTES = "minutes"
    HOURS = "hours"
    DAYS = "days"
    WEEKS = "weeks"
    MONTHS = "months"
    YEARS = "years"

    @property
    def millis(self) -> Optional[int]:
        """Fixed length in ms, or None for calendar units."""
        return _UNIT_MILLIS.get(self)

    @property
    def is_calendar(self) -> bool:
        return self in (Unit.MONTHS, Unit.YEARS)

    @classmethod
    def parse(cls, value: "Unit | str") -> Unit:
        if isinstance(value, Unit):
            return value
        key = str(value).strip().lower()
        if not key.endswith("s"):
            key += "s"
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f"Unknown unit '{value}'. Available: {[u.value for u in cls]}") from None


_UNIT_MILLIS = {
    Unit.MILLISECONDS: 1,
    Unit.SECONDS: MS_PER_SECOND,
    Unit.MINUTES: MS_PER_MINUTE,
    Unit.HOURS: MS_PER_HOUR,
    Unit.DAYS: MS_PER_DAY,
    Unit.WEEKS: 7 * MS_PER_DAY,
}


class Direction(str, Enum):
    PAST = "past"
    FUTURE = "future"


class BucketKind(str, Enum):
    JUST_NOW = "just_now"
    MINUTES = "minutes"
    HOURS = "hours"
    DAYS = "days"
    ABSOLUTE = "absolute"


@dataclass(frozen=True)
class RelativeBucket:
    kind: BucketKind
    count: int
    direction: Direction
    instant: Optional[Instant] = None  # set for ABSOLUTE


@dataclass(frozen=True)
class CalendarResult:
    civil: CivilDate
    instant: Instant
    was_clamped: bool = False


@dataclass(frozen=True)
class Cell:
    """A month-grid cell: ``day`` is None for padding."""
    day: Optional[int] = None

    @property
    def is_empty(self) -> bool:
        return self.day is None


EMPTY = Cell()
