from __future__ import annotations
from typing import Optional

from calendrix.config import Settings
from calendrix.core.interfaces import TimeZoneResolver
from calendrix.zones.resolver import CachingResolver, ZoneInfoResolver

def build_resolver(settings: Optional[Settings] = None) -> TimeZoneResolver:
    settings = settings or Settings()
    resolver: TimeZoneResolver = ZoneInfoResolver()
    if settings.cache_resolutions:
        resolver = CachingResolver(resolver)
    return resolver
