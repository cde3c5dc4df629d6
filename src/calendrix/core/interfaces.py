"""
calendrix.core.interfaces
-------------------------
Narrow contracts for the two external collaborators. The arithmetic core
never embeds zone rules or locale tables; it only talks to these.
"""

from __future__ import annotations

from typing import Literal, Protocol

from .types import Instant, Ordering, ZoneResolution

NameStyle = Literal["long", "short"]


class TimeZoneResolver(Protocol):
    """
    Maps a zone identifier and an instant to a UTC offset and DST flag.
    Raises UnknownZone for unrecognised identifiers.
    """
    def resolve(self, zone_id: str, instant: Instant) -> ZoneResolution: ...


class LocaleProvider(Protocol):
    """Month/weekday names and collation; consumed only by the formatter."""

    def month_name(self, index: int, style: NameStyle = "long") -> str:
        """index: 1..12"""
        ...

    def weekday_name(self, index: int, style: NameStyle = "long") -> str:
        """index: 0..6, 0 = Sunday"""
        ...

    def locale_compare(self, a: str, b: str) -> Ordering: ...
