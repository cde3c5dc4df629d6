"""
calendrix.text.formatter
------------------------
CivilDate -> text through patterns.

Numeric tokens:  YYYY YY MM M DD D HH H mm ss SSS Z ZZ z
Textual tokens:  MMMM MMM (month name)  dddd ddd (weekday name)
Literal text goes in square brackets: "YYYY-MM-DD[T]HH:mm".
Any other character is copied as is.

Textual tokens need a LocaleProvider; without one the whole call fails
with MissingLocaleProvider before anything is rendered.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from calendrix.core.errors import MissingLocaleProvider
from calendrix.core.interfaces import LocaleProvider, TimeZoneResolver
from calendrix.core.types import CivilDate, Instant
from calendrix.engines.projection import DEFAULT_ZONE, project
from calendrix.zones.resolver import offset_label


@dataclass(frozen=True)
class FormatContext:
    civil: CivilDate
    locale: Optional[LocaleProvider] = None
    abbreviation: Optional[str] = None


TokenFunc = Callable[[FormatContext], str]


@dataclass(frozen=True)
class _Token:
    fn: TokenFunc
    textual: bool


_REGISTRY: Dict[str, _Token] = {}
_token_re: Optional["re.Pattern[str]"] = None


def register_token(name: str, fn: TokenFunc, *, textual: bool = False) -> None:
    """Add or replace a pattern token. ``textual`` tokens require a LocaleProvider."""
    global _token_re
    if not name or not name.isalpha():
        raise ValueError(f"token names must be letters, got {name!r}")
    _REGISTRY[name] = _Token(fn, textual)
    _token_re = None


def _pattern_re() -> "re.Pattern[str]":
    global _token_re
    if _token_re is None:
        names = sorted(_REGISTRY, key=len, reverse=True)
        _token_re = re.compile(r"\[([^\]]*)\]|" + "|".join(re.escape(n) for n in names))
    return _token_re


# ---------------------------------------------------------
# Field renderers
# ---------------------------------------------------------

def format_year(year: int) -> str:
    """Four digits inside 0000..9999, otherwise the expanded signed six-digit form."""
    if 0 <= year <= 9999:
        return f"{year:04d}"
    return f"{'-' if year < 0 else '+'}{abs(year):06d}"


def format_offset(offset_minutes: int, *, colon: bool = True) -> str:
    sign = "-" if offset_minutes < 0 else "+"
    hh, mm = divmod(abs(offset_minutes), 60)
    return f"{sign}{hh:02d}:{mm:02d}" if colon else f"{sign}{hh:02d}{mm:02d}"


def _month_name(style: str) -> TokenFunc:
    return lambda c: c.locale.month_name(c.civil.month, style)


def _weekday_name(style: str) -> TokenFunc:
    return lambda c: c.locale.weekday_name(c.civil.weekday, style)


register_token("YYYY", lambda c: format_year(c.civil.year))
register_token("YY", lambda c: f"{c.civil.year % 100:02d}")
register_token("MM", lambda c: f"{c.civil.month:02d}")
register_token("M", lambda c: str(c.civil.month))
register_token("DD", lambda c: f"{c.civil.day:02d}")
register_token("D", lambda c: str(c.civil.day))
register_token("HH", lambda c: f"{c.civil.hour:02d}")
register_token("H", lambda c: str(c.civil.hour))
register_token("mm", lambda c: f"{c.civil.minute:02d}")
register_token("ss", lambda c: f"{c.civil.second:02d}")
register_token("SSS", lambda c: f"{c.civil.millisecond:03d}")
register_token("Z", lambda c: format_offset(c.civil.offset_minutes))
register_token("ZZ", lambda c: format_offset(c.civil.offset_minutes, colon=False))
register_token("z", lambda c: c.abbreviation or offset_label(c.civil.offset_minutes))
register_token("MMMM", _month_name("long"), textual=True)
register_token("MMM", _month_name("short"), textual=True)
register_token("dddd", _weekday_name("long"), textual=True)
register_token("ddd", _weekday_name("short"), textual=True)


# ---------------------------------------------------------
# Public API
# ---------------------------------------------------------

def format_civil(
    civil: CivilDate,
    pattern: str,
    locale: Optional[LocaleProvider] = None,
    *,
    abbreviation: Optional[str] = None,
) -> str:
    rx = _pattern_re()
    pieces: List[object] = []
    pos = 0
    for m in rx.finditer(pattern):
        pieces.append(pattern[pos:m.start()])
        if m.group(1) is not None:
            pieces.append(m.group(1))
        else:
            tok = _REGISTRY[m.group(0)]
            if tok.textual and locale is None:
                raise MissingLocaleProvider(f"token '{m.group(0)}' needs a LocaleProvider")
            pieces.append(tok)
        pos = m.end()
    pieces.append(pattern[pos:])

    ctx = FormatContext(civil=civil, locale=locale, abbreviation=abbreviation)
    return "".join(p.fn(ctx) if isinstance(p, _Token) else p for p in pieces)


def format_iso(civil: CivilDate) -> str:
    """YYYY-MM-DDTHH:mm:ss.sssZ, or with +HH:mm for a non-zero offset."""
    head = format_civil(civil, "YYYY-MM-DD[T]HH:mm:ss.SSS")
    tail = "Z" if civil.offset_minutes == 0 else format_offset(civil.offset_minutes)
    return head + tail


def format_instant(
    instant: Instant,
    zone: str = DEFAULT_ZONE,
    pattern: Optional[str] = None,
    locale: Optional[LocaleProvider] = None,
    resolver: Optional[TimeZoneResolver] = None,
) -> str:
    """Render ``instant`` as seen in ``zone``; ISO form when no pattern is given."""
    civil, res = project(instant, zone, resolver)
    if pattern is None:
        return format_iso(civil)
    return format_civil(civil, pattern, locale, abbreviation=res.abbreviation)


def format_date(instant: Instant, zone: str = DEFAULT_ZONE, resolver: Optional[TimeZoneResolver] = None) -> str:
    """YYYY-MM-DD of ``instant`` in ``zone``."""
    return format_instant(instant, zone, "YYYY-MM-DD", resolver=resolver)
