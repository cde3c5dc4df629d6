"""
calendrix.engines.projection
----------------------------
Moves between the two time representations:

  Instant --(zone resolution)--> CivilDate     (to_civil, always unambiguous)
  wall-clock fields --(zone)--> Instant        (localize / from_local)

The reverse direction has to cope with offset transitions. A wall time
that occurs twice (clocks turned back) maps to the earlier instant; a wall
time that never occurs (clocks turned forward) is read with the offset in
force before the transition, which lands it just after the gap.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from calendrix.core.interfaces import TimeZoneResolver
from calendrix.core.time import MAX_EPOCH_MILLIS, MS_PER_DAY, MS_PER_MINUTE
from calendrix.core.types import CivilDate, Instant, ZoneResolution
from calendrix.zones.resolver import FixedOffsetResolver

DEFAULT_ZONE = "UTC"
_FIXED = FixedOffsetResolver()


def _resolver(resolver: Optional[TimeZoneResolver]) -> TimeZoneResolver:
    return resolver if resolver is not None else _FIXED


def _probe(millis: int) -> Instant:
    return Instant(min(max(millis, -MAX_EPOCH_MILLIS), MAX_EPOCH_MILLIS))


def project(
    instant: Instant,
    zone: str = DEFAULT_ZONE,
    resolver: Optional[TimeZoneResolver] = None,
) -> Tuple[CivilDate, ZoneResolution]:
    """Calendar fields of ``instant`` in ``zone``, with the resolution used."""
    res = _resolver(resolver).resolve(zone, instant)
    local = instant.millis + res.offset_minutes * MS_PER_MINUTE
    return CivilDate.from_local_millis(local, res.offset_minutes, res.is_dst), res


def to_civil(
    instant: Instant,
    zone: str = DEFAULT_ZONE,
    resolver: Optional[TimeZoneResolver] = None,
) -> CivilDate:
    """Project an instant onto calendar fields in ``zone``."""
    return project(instant, zone, resolver)[0]


def resolve_local(
    local_millis: int,
    zone: str,
    resolver: Optional[TimeZoneResolver] = None,
) -> Tuple[Instant, ZoneResolution]:
    """Find the instant whose wall-clock time in ``zone`` is ``local_millis``."""
    r = _resolver(resolver)
    before = r.resolve(zone, _probe(local_millis - MS_PER_DAY))
    after = r.resolve(zone, _probe(local_millis + MS_PER_DAY))

    hits: List[Tuple[Instant, ZoneResolution]] = []
    for off in dict.fromkeys((before.offset_minutes, after.offset_minutes)):
        inst = Instant(local_millis - off * MS_PER_MINUTE)
        res = r.resolve(zone, inst)
        if res.offset_minutes == off:
            hits.append((inst, res))

    if hits:
        return min(hits, key=lambda h: h[0])

    # Skipped wall time
    inst = Instant(local_millis - before.offset_minutes * MS_PER_MINUTE)
    return inst, r.resolve(zone, inst)


def localize(
    wall: CivilDate,
    zone: str,
    resolver: Optional[TimeZoneResolver] = None,
) -> CivilDate:
    """
    Attach ``zone``'s offset to the wall-clock fields of ``wall`` (its own
    offset is ignored). The result may show a later wall time if the
    requested one falls in a gap.
    """
    inst, res = resolve_local(wall.local_millis, zone, resolver)
    return CivilDate.from_local_millis(
        inst.millis + res.offset_minutes * MS_PER_MINUTE, res.offset_minutes, res.is_dst
    )


def from_local(
    wall: CivilDate,
    zone: str,
    resolver: Optional[TimeZoneResolver] = None,
) -> Instant:
    return resolve_local(wall.local_millis, zone, resolver)[0]


def with_zone(
    civil: CivilDate,
    zone: str,
    resolver: Optional[TimeZoneResolver] = None,
) -> CivilDate:
    """Same instant, seen from another zone."""
    return to_civil(civil.to_instant(), zone, resolver)
