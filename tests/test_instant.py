# tests/test_instant.py

from datetime import datetime, timedelta, timezone

import pytest
from hypothesis import assume, given
from hypothesis.strategies import integers

from calendrix.core.clock import FixedClock, SystemClock
from calendrix.core.errors import RangeError
from calendrix.core.time import MAX_EPOCH_MILLIS
from calendrix.core.types import Instant, Ordering

millis = integers(min_value=-MAX_EPOCH_MILLIS, max_value=MAX_EPOCH_MILLIS)


def test_now_reads_injected_clock():
    clock = FixedClock(1_700_000_000_000)
    assert Instant.now(clock) == Instant(1_700_000_000_000)
    clock.advance(60_000)
    assert Instant.now(clock).to_epoch_millis() == 1_700_000_060_000


def test_system_clock_is_plausible():
    # after 2020-01-01, before 2200-01-01
    assert 1_577_836_800_000 < SystemClock().now_millis() < 7_258_118_400_000


def test_epoch_millis_interchange():
    i = Instant.from_epoch_millis(-42)
    assert i.to_epoch_millis() == -42
    assert Instant.from_epoch_millis(0) == Instant(0)


def test_compare():
    a, b = Instant(1), Instant(2)
    assert Instant.compare(a, b) is Ordering.LESS
    assert Instant.compare(b, a) is Ordering.GREATER
    assert Instant.compare(a, Instant(1)) is Ordering.EQUAL
    assert a < b and sorted([b, a]) == [a, b]


def test_range_limits():
    Instant(MAX_EPOCH_MILLIS)
    Instant(-MAX_EPOCH_MILLIS)
    with pytest.raises(RangeError):
        Instant(MAX_EPOCH_MILLIS + 1)
    with pytest.raises(RangeError):
        Instant(MAX_EPOCH_MILLIS).add_millis(1)
    with pytest.raises(RangeError):
        Instant(-MAX_EPOCH_MILLIS).add_millis(-1)


def test_rejects_non_int():
    with pytest.raises(TypeError):
        Instant(1.5)
    with pytest.raises(TypeError):
        Instant(True)


@given(millis, millis)
def test_add_millis_exact_inverse(i, n):
    assume(-MAX_EPOCH_MILLIS <= i + n <= MAX_EPOCH_MILLIS)
    start = Instant(i)
    assert start.add_millis(n).add_millis(-n) == start


def test_datetime_interop():
    dt = datetime(2023, 11, 14, 22, 13, 20, 123000, tzinfo=timezone.utc)
    i = Instant.from_datetime(dt)
    assert i == Instant(1_700_000_000_123)
    assert i.to_datetime() == dt

    # other offsets describe the same instant
    assert Instant.from_datetime(dt.astimezone(timezone(timedelta(hours=5, minutes=30)))) == i

    # sub-millisecond precision is floored
    assert Instant.from_datetime(datetime(1969, 12, 31, 23, 59, 59, 999999, tzinfo=timezone.utc)) == Instant(-1)


def test_datetime_interop_errors():
    with pytest.raises(ValueError):
        Instant.from_datetime(datetime(2023, 1, 1))
    with pytest.raises(RangeError):
        Instant(MAX_EPOCH_MILLIS).to_datetime()
