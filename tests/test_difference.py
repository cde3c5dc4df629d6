# tests/test_difference.py

import pytest
from hypothesis import given, settings
from hypothesis.strategies import integers, sampled_from

from calendrix.core.time import MS_PER_DAY, MS_PER_SECOND
from calendrix.core.types import BucketKind, CivilDate, Direction, Instant, RelativeBucket, Unit
from calendrix.engines.difference import describe, difference, month_difference, relative_bucket
from calendrix.text.parser import parse
from calendrix.zones.resolver import ZoneInfoResolver

# roughly years 1653..2286
instants = integers(min_value=-10**13, max_value=10**13).map(Instant)


@pytest.mark.parametrize(
    "unit, expected",
    [
        ("milliseconds", 93_784_005),
        ("seconds", 93_784),
        ("minutes", 1_563),
        ("hours", 26),
        ("days", 1),
        ("weeks", 0),
        (Unit.DAYS, 1),
        ("day", 1),
    ],
)
def test_fixed_units(unit, expected):
    a = Instant(93_784_005)  # 1 day 2h 3m 4s 5ms
    b = Instant(0)
    assert difference(a, b, unit) == expected
    assert difference(b, a, unit) == -expected


def test_truncates_toward_zero():
    assert difference(Instant(-1500), Instant(0), "seconds") == -1
    assert difference(Instant(1500), Instant(0), "seconds") == 1
    assert difference(Instant(-MS_PER_DAY + 1), Instant(0), "days") == 0


def test_unknown_unit():
    with pytest.raises(ValueError):
        difference(Instant(0), Instant(0), "fortnights")


@pytest.mark.parametrize(
    "a, b, months",
    [
        ("2023-02-28T00:00:00Z", "2023-01-31T00:00:00Z", 1),
        ("2023-02-27T00:00:00Z", "2023-01-31T00:00:00Z", 0),
        ("2023-03-15T00:00:00Z", "2023-01-15T00:00:00Z", 2),
        ("2023-03-15T00:00:00Z", "2023-01-15T00:00:01Z", 1),
        ("2021-02-28T00:00:00Z", "2020-02-29T00:00:00Z", 12),
        ("2023-01-15T00:00:00Z", "2023-03-15T00:00:00Z", -2),
    ],
)
def test_months(a, b, months):
    assert difference(parse(a), parse(b), "months") == months


def test_years():
    a = parse("2024-02-29T00:00:00Z")
    assert difference(parse("2025-02-28T00:00:00Z"), a, "years") == 1
    assert difference(parse("2025-02-27T23:59:59Z"), a, "years") == 0
    assert difference(a, parse("2000-03-01T00:00:00Z"), "years") == 23


def test_months_use_zone_calendar():
    tz = ZoneInfoResolver()
    # New York sees Jan 29 21:00 and Feb 27 22:00; Jan 29 + 1 month clamps to Feb 28
    a = parse("2023-02-28T03:00:00Z")
    b = parse("2023-01-30T02:00:00Z")
    assert difference(a, b, "months") == 1
    assert difference(a, b, "months", zone="America/New_York", resolver=tz) == 0


def test_month_difference_civil():
    assert month_difference(CivilDate(2023, 5, 31), CivilDate(2023, 4, 30)) == 1
    assert month_difference(CivilDate(2023, 4, 30), CivilDate(2023, 5, 31)) == -1


@settings(max_examples=300)
@given(instants, instants, sampled_from(list(Unit)))
def test_antisymmetry(a, b, unit):
    assert difference(a, b, unit) == -difference(b, a, unit)


@settings(max_examples=100)
@given(instants, instants, sampled_from(["months", "years"]))
def test_antisymmetry_in_dst_zone(a, b, unit):
    tz = ZoneInfoResolver()
    z = "Europe/London"
    assert difference(a, b, unit, zone=z, resolver=tz) == -difference(b, a, unit, zone=z, resolver=tz)


# ---------------------------------------------------------
# Relative buckets
# ---------------------------------------------------------

def _bucket(delta_ms: int) -> RelativeBucket:
    ref = Instant(1_700_000_000_000)
    return relative_bucket(ref.add_millis(-delta_ms), ref)


@pytest.mark.parametrize(
    "seconds, kind, count",
    [
        (0, BucketKind.JUST_NOW, 0),
        (59, BucketKind.JUST_NOW, 0),
        (60, BucketKind.MINUTES, 1),
        (3599, BucketKind.MINUTES, 59),
        (3600, BucketKind.HOURS, 1),
        (86399, BucketKind.HOURS, 23),
        (86400, BucketKind.DAYS, 1),
        (7 * 86400 - 1, BucketKind.DAYS, 6),
        (7 * 86400, BucketKind.ABSOLUTE, 7),
    ],
)
def test_bucket_thresholds(seconds, kind, count):
    b = _bucket(seconds * MS_PER_SECOND)
    assert (b.kind, b.count, b.direction) == (kind, count, Direction.PAST)


def test_bucket_boundary_in_milliseconds():
    assert _bucket(59_999).kind is BucketKind.JUST_NOW
    assert _bucket(60_000) == RelativeBucket(BucketKind.MINUTES, 1, Direction.PAST)


def test_bucket_future_direction():
    b = _bucket(-90 * MS_PER_SECOND)
    assert b == RelativeBucket(BucketKind.MINUTES, 1, Direction.FUTURE)


def test_absolute_bucket_carries_target():
    ref = parse("2023-10-20T00:00:00Z")
    target = parse("2023-10-01T12:00:00Z")
    b = relative_bucket(target, ref)
    assert b.kind is BucketKind.ABSOLUTE
    assert b.instant == target


def test_describe():
    assert describe(_bucket(5_000)) == "just now"
    assert describe(_bucket(60_000)) == "1 minute ago"
    assert describe(_bucket(5 * 3_600_000)) == "5 hours ago"
    assert describe(_bucket(-2 * MS_PER_DAY)) == "in 2 days"
    assert describe(relative_bucket(parse("2023-10-01T12:00:00Z"), parse("2023-10-20T00:00:00Z"))) == "2023-10-01"
    assert describe(_bucket(30 * MS_PER_DAY), absolute=lambda i: "long ago") == "long ago"
