from __future__ import annotations
from typing import Tuple

MS_PER_SECOND = 1000
MS_PER_MINUTE = 60 * MS_PER_SECOND
MS_PER_HOUR = 60 * MS_PER_MINUTE
MS_PER_DAY = 24 * MS_PER_HOUR

# Instants are limited to +/- 10^8 days around the Unix epoch.
MAX_EPOCH_DAYS = 100_000_000
MAX_EPOCH_MILLIS = MAX_EPOCH_DAYS * MS_PER_DAY

_DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


def is_leap_year(year: int) -> bool:
    """Proleptic Gregorian rule: every 4th year, except centuries not divisible by 400."""
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_month(year: int, month: int) -> int:
    if not 1 <= month <= 12:
        raise ValueError(f"month must be in 1..12, got {month}")
    if month == 2 and is_leap_year(year):
        return 29
    return _DAYS_IN_MONTH[month - 1]


def days_from_civil(year: int, month: int, day: int) -> int:
    """
    Proleptic Gregorian (year, month, day) -> days since 1970-01-01.

    Works on 400-year eras with floor division so that negative years
    need no special casing. Days are not range-checked here.
    """
    y = year - 1 if month <= 2 else year
    era = y // 400
    yoe = y - era * 400                      # [0, 399]
    mp = (month + 9) % 12                    # March = 0
    doy = (153 * mp + 2) // 5 + day - 1      # [0, 365]
    doe = yoe * 365 + yoe // 4 - yoe // 100 + doy
    return era * 146097 + doe - 719468


def civil_from_days(days: int) -> Tuple[int, int, int]:
    """Inverse of days_from_civil."""
    z = days + 719468
    era = z // 146097
    doe = z - era * 146097
    yoe = (doe - doe // 1460 + doe // 36524 - doe // 146096) // 365
    doy = doe - (365 * yoe + yoe // 4 - yoe // 100)
    mp = (5 * doy + 2) // 153
    day = doy - (153 * mp + 2) // 5 + 1
    month = mp + 3 if mp < 10 else mp - 9
    year = yoe + era * 400 + (1 if month <= 2 else 0)
    return year, month, day


def weekday_from_days(days: int) -> int:
    """Day of week for an epoch day count. Convention: 0=Sunday..6=Saturday."""
    # 1970-01-01 was a Thursday
    return (days + 4) % 7


def day_of_year(year: int, month: int, day: int) -> int:
    return days_from_civil(year, month, day) - days_from_civil(year, 1, 1) + 1


def split_millis(millis: int) -> Tuple[int, int]:
    """Split an epoch-millisecond count into (epoch day, millisecond of day)."""
    return divmod(millis, MS_PER_DAY)


def time_of_day(ms_of_day: int) -> Tuple[int, int, int, int]:
    """Millisecond of day -> (hour, minute, second, millisecond)."""
    hour, rem = divmod(ms_of_day, MS_PER_HOUR)
    minute, rem = divmod(rem, MS_PER_MINUTE)
    second, millisecond = divmod(rem, MS_PER_SECOND)
    return hour, minute, second, millisecond


def millis_of_day(hour: int, minute: int, second: int, millisecond: int) -> int:
    return hour * MS_PER_HOUR + minute * MS_PER_MINUTE + second * MS_PER_SECOND + millisecond
