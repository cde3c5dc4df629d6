from __future__ import annotations

from typing import Optional

from .config import Settings
from .core.clock import Clock, SystemClock
from .core.interfaces import LocaleProvider, TimeZoneResolver
from .core.types import CalendarResult, CivilDate, Duration, Instant, RelativeBucket, Unit
from .engines import arithmetic as _arith
from .engines import difference as _diff
from .engines import projection as _proj
from .engines.grid import MonthGrid, build_month_grid
from .text import formatter as _fmt
from .text import parser as _parser

_resolver: Optional[TimeZoneResolver] = None
_settings: Settings = Settings()

def set_resolver(resolver: TimeZoneResolver) -> None:
    global _resolver
    _resolver = resolver

def get_resolver() -> TimeZoneResolver:
    if _resolver is None:
        raise RuntimeError("Zone resolver not initialized")
    return _resolver

def set_settings(settings: Settings) -> None:
    global _settings
    _settings = settings

def get_settings() -> Settings:
    return _settings

def _zone(zone: Optional[str]) -> str:
    return zone if zone is not None else _settings.default_zone

# ============================================================
# Instants and projection
# ============================================================

def now(clock: Optional[Clock] = None) -> Instant:
    return Instant.now(clock if clock is not None else SystemClock())

def to_civil(instant: Instant, zone: Optional[str] = None) -> CivilDate:
    return _proj.to_civil(instant, _zone(zone), get_resolver())

def localize(wall: CivilDate, zone: Optional[str] = None) -> CivilDate:
    return _proj.localize(wall, _zone(zone), get_resolver())

def with_zone(civil: CivilDate, zone: str) -> CivilDate:
    return _proj.with_zone(civil, zone, get_resolver())

# ============================================================
# Text
# ============================================================

def parse(value: _parser.Parseable, *, zone: Optional[str] = None, strict: bool = True) -> Instant:
    """Date-only input requires ``zone``; the configured default zone is not applied to it."""
    return _parser.parse(value, zone=zone, resolver=get_resolver(), strict=strict)

def parse_civil(value: _parser.Parseable, *, zone: Optional[str] = None, strict: bool = True) -> CivilDate:
    return _parser.parse_civil(value, zone=zone, resolver=get_resolver(), strict=strict)

def format_instant(
    instant: Instant,
    pattern: Optional[str] = None,
    *,
    zone: Optional[str] = None,
    locale: Optional[LocaleProvider] = None,
) -> str:
    return _fmt.format_instant(instant, _zone(zone), pattern, locale, get_resolver())

# ============================================================
# Arithmetic and differences
# ============================================================

def add_calendar(
    civil: CivilDate,
    duration: Optional[Duration] = None,
    *,
    years: int = 0,
    months: int = 0,
    days: int = 0,
    zone: Optional[str] = None,
) -> CalendarResult:
    return _arith.add_calendar(
        civil, duration, years=years, months=months, days=days, zone=zone, resolver=get_resolver()
    )

def subtract_calendar(
    civil: CivilDate,
    duration: Optional[Duration] = None,
    *,
    years: int = 0,
    months: int = 0,
    days: int = 0,
    zone: Optional[str] = None,
) -> CalendarResult:
    return _arith.subtract_calendar(
        civil, duration, years=years, months=months, days=days, zone=zone, resolver=get_resolver()
    )

def add(instant: Instant, duration: Duration, *, zone: Optional[str] = None) -> Instant:
    return _arith.add_to_instant(instant, duration, zone=_zone(zone), resolver=get_resolver())

def difference(a: Instant, b: Instant, unit: "Unit | str" = Unit.MILLISECONDS, *, zone: Optional[str] = None) -> int:
    return _diff.difference(a, b, unit, zone=_zone(zone), resolver=get_resolver())

def relative_bucket(target: Instant, reference: Instant) -> RelativeBucket:
    return _diff.relative_bucket(target, reference)

def relative(target: Instant, reference: Optional[Instant] = None, *, clock: Optional[Clock] = None) -> str:
    """English phrase for ``target`` relative to ``reference`` (default: now on ``clock``)."""
    ref = reference if reference is not None else now(clock)
    return _diff.describe(_diff.relative_bucket(target, ref))

# ============================================================
# Grids
# ============================================================

def month_grid(year: int, month: int, week_starts_on: Optional[int] = None, *, fixed_rows: bool = False) -> MonthGrid:
    wso = _settings.week_starts_on if week_starts_on is None else week_starts_on
    return build_month_grid(year, month, wso, fixed_rows=fixed_rows)
