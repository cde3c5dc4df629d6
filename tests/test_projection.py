# tests/test_projection.py

import pytest

from calendrix.core.errors import UnknownZone
from calendrix.core.time import MS_PER_HOUR
from calendrix.core.types import CivilDate, Instant
from calendrix.engines.projection import from_local, localize, project, to_civil, with_zone
from calendrix.text.parser import parse
from calendrix.zones.resolver import ZoneInfoResolver


@pytest.fixture
def tz():
    return ZoneInfoResolver()


def test_epoch_in_utc():
    assert to_civil(Instant(0)) == CivilDate(1970, 1, 1)
    assert to_civil(Instant(-1)) == CivilDate(1969, 12, 31, 23, 59, 59, 999)


def test_fixed_offset_projection():
    c = to_civil(Instant(0), "+05:30")
    assert c == CivilDate(1970, 1, 1, 5, 30, offset_minutes=330)
    assert c.to_instant() == Instant(0)


def test_projection_carries_dst_flag(tz):
    c, res = project(parse("2023-07-04T16:00:00Z"), "America/New_York", tz)
    assert c == CivilDate(2023, 7, 4, 12, 0, offset_minutes=-240, is_dst=True)
    assert res.abbreviation == "EDT"


def test_unknown_zone(tz):
    with pytest.raises(UnknownZone):
        to_civil(Instant(0), "Atlantis/Capital", tz)
    with pytest.raises(UnknownZone):
        to_civil(Instant(0), "Europe/Paris")  # default resolver knows only fixed offsets


def test_localize_plain_time(tz):
    c = localize(CivilDate(2023, 10, 4), "America/New_York", tz)
    assert c == CivilDate(2023, 10, 4, offset_minutes=-240, is_dst=True)
    assert c.to_instant() == parse("2023-10-04T04:00:00Z")


def test_localize_ignores_wall_offset(tz):
    wall = CivilDate(2023, 1, 15, 9, offset_minutes=600)
    assert from_local(wall, "Europe/London", tz) == parse("2023-01-15T09:00:00Z")


def test_gap_moves_forward(tz):
    # 02:30 does not exist in New York on 2023-03-12
    c = localize(CivilDate(2023, 3, 12, 2, 30), "America/New_York", tz)
    assert c.wall_tuple == (2023, 3, 12, 3, 30, 0, 0)
    assert c.offset_minutes == -240
    assert c.to_instant() == parse("2023-03-12T07:30:00Z")


def test_overlap_takes_earlier_instant(tz):
    # 01:30 happens twice in New York on 2023-11-05
    wall = CivilDate(2023, 11, 5, 1, 30)
    inst = from_local(wall, "America/New_York", tz)
    assert inst == parse("2023-11-05T05:30:00Z")
    assert to_civil(inst.add_millis(MS_PER_HOUR), "America/New_York", tz).wall_tuple == wall.wall_tuple


def test_with_zone_keeps_instant(tz):
    paris = CivilDate(2023, 6, 1, 9, offset_minutes=120, is_dst=True)
    tokyo = with_zone(paris, "Asia/Tokyo", tz)
    assert tokyo == CivilDate(2023, 6, 1, 16, offset_minutes=540)
    assert tokyo.to_instant() == paris.to_instant()


def test_far_dates_project_consistently():
    for ms in (-8_000_000_000_000_000, -62_135_596_800_001, 253_402_300_800_000, 8_640_000_000_000_000):
        c = to_civil(Instant(ms), "-03:00")
        assert c.to_instant() == Instant(ms)
