"""
calendrix.zones.resolver
------------------------
TimeZoneResolver implementations.

- FixedOffsetResolver: "UTC", "Z", "GMT" and literal offsets ("+05:30", "-0800").
- ZoneInfoResolver: literal offsets, otherwise the IANA database via ``zoneinfo``.
- CachingResolver: thread-safe memo of another resolver's answers per
  (zone_id, day bucket).
"""

from __future__ import annotations

import re
import threading
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Dict, Optional, Tuple
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from loguru import logger

from calendrix.core.errors import UnknownZone
from calendrix.core.interfaces import TimeZoneResolver
from calendrix.core.time import MAX_EPOCH_MILLIS, MS_PER_DAY, days_from_civil
from calendrix.core.types import Instant, ZoneResolution
from calendrix.core.validate import MAX_OFFSET_MINUTES

_UTC_NAMES = frozenset({"UTC", "Z", "GMT", "Etc/UTC", "Etc/GMT"})
_OFFSET_RE = re.compile(r"^(?:UTC|GMT)?([+-])(\d{2}):?(\d{2})$")

# zoneinfo works on datetime, which stops at years 1 and 9999.
# Keep a day of slack on both ends for the local-time conversion.
_DT_MIN_MS = days_from_civil(1, 1, 2) * MS_PER_DAY
_DT_MAX_MS = days_from_civil(9999, 12, 30) * MS_PER_DAY
_EPOCH_DT = datetime(1970, 1, 1, tzinfo=timezone.utc)


def fixed_offset_minutes(zone_id: str) -> Optional[int]:
    """Offset for a literal zone id, or None if ``zone_id`` is not one."""
    if zone_id in _UTC_NAMES:
        return 0
    m = _OFFSET_RE.match(zone_id)
    if m is None:
        return None
    sign, hh, mm = m.groups()
    if int(mm) > 59:
        return None
    minutes = int(hh) * 60 + int(mm)
    if minutes > MAX_OFFSET_MINUTES:
        return None
    return -minutes if sign == "-" else minutes


def offset_label(offset_minutes: int) -> str:
    """Render an offset as "UTC" or "UTC+05:30"."""
    if offset_minutes == 0:
        return "UTC"
    sign = "-" if offset_minutes < 0 else "+"
    hh, mm = divmod(abs(offset_minutes), 60)
    return f"UTC{sign}{hh:02d}:{mm:02d}"


class FixedOffsetResolver:
    """Resolves only literal offsets; never DST."""

    def resolve(self, zone_id: str, instant: Instant) -> ZoneResolution:
        off = fixed_offset_minutes(zone_id)
        if off is None:
            raise UnknownZone(zone_id)
        return ZoneResolution(offset_minutes=off, is_dst=False, abbreviation=offset_label(off))


@lru_cache(maxsize=256)
def _load_zone(zone_id: str) -> ZoneInfo:
    try:
        return ZoneInfo(zone_id)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise UnknownZone(zone_id) from e


class ZoneInfoResolver:
    """
    IANA zones through the standard ``zoneinfo`` module (data from the
    system or the ``tzdata`` package).

    Instants beyond datetime's range are looked up at the nearest
    representable instant, which yields the zone's earliest or latest rule.
    """

    def __init__(self) -> None:
        self._fixed = FixedOffsetResolver()

    def resolve(self, zone_id: str, instant: Instant) -> ZoneResolution:
        if fixed_offset_minutes(zone_id) is not None:
            return self._fixed.resolve(zone_id, instant)

        tz = _load_zone(zone_id)
        ms = min(max(instant.millis, _DT_MIN_MS), _DT_MAX_MS)
        local = (_EPOCH_DT + timedelta(milliseconds=ms)).astimezone(tz)
        offset = local.utcoffset()
        dst = local.dst()
        # Local mean time offsets carry seconds; those are floored to whole minutes.
        return ZoneResolution(
            offset_minutes=int(offset.total_seconds() // 60) if offset is not None else 0,
            is_dst=bool(dst),
            abbreviation=local.tzname(),
        )


class CachingResolver:
    """
    Memoises ``inner.resolve`` per (zone_id, UTC day bucket).

    A bucket is cached only when its first and last millisecond resolve
    identically; days containing a transition always go to ``inner``.
    Concurrent misses on the same key may compute it twice, which is harmless.
    """

    def __init__(self, inner: TimeZoneResolver, *, bucket_millis: int = MS_PER_DAY) -> None:
        if bucket_millis <= 0:
            raise ValueError("bucket_millis must be positive")
        self.inner = inner
        self.bucket_millis = bucket_millis
        self._cache: Dict[Tuple[str, int], ZoneResolution] = {}
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def resolve(self, zone_id: str, instant: Instant) -> ZoneResolution:
        bucket = instant.millis // self.bucket_millis
        key = (zone_id, bucket)
        with self._lock:
            cached = self._cache.get(key)
            if cached is not None:
                self.hits += 1
                return cached
            self.misses += 1

        start = max(bucket * self.bucket_millis, -MAX_EPOCH_MILLIS)
        end = min(bucket * self.bucket_millis + self.bucket_millis - 1, MAX_EPOCH_MILLIS)
        first = self.inner.resolve(zone_id, Instant(start))
        last = self.inner.resolve(zone_id, Instant(end))
        if first != last:
            logger.debug("zone {} changes offset inside bucket {}; not caching", zone_id, bucket)
            return self.inner.resolve(zone_id, instant)

        with self._lock:
            self._cache.setdefault(key, first)
        return first

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()
            self.hits = 0
            self.misses = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)
