"""
calendrix.text.parser
---------------------
Text -> Instant / CivilDate.

Accepted inputs, and nothing else:

1. ISO-8601 date-time with an explicit offset:
       YYYY-MM-DDTHH:mm:ss[.s{1,3}](Z|+HH:mm|-HH:mm)
   Years outside 0000..9999 use the expanded form +YYYYYY / -YYYYYY.
2. ISO-8601 date only, YYYY-MM-DD: local midnight in a zone the caller
   names. There is no implicit UTC.
3. Epoch milliseconds, as an int, or as a digit string that either carries
   a sign or is at least nine digits long. Shorter unsigned digit runs
   ("2023", "20231004") look like reduced ISO dates and are rejected.

With ``strict=False`` a few representational variants of (1) are also
accepted: a space or lowercase ``t`` as separator, lowercase ``z``,
omitted seconds, and offsets without a colon (+0530).

Slash dates such as 10/04/2023 are rejected on purpose: day-first and
month-first readings are indistinguishable.
"""

from __future__ import annotations

import re
from typing import Any, Dict, Optional, Union

from loguru import logger

from calendrix.core.errors import InvalidCivilDate, RangeError, UnparseableDate
from calendrix.core.interfaces import TimeZoneResolver
from calendrix.core.types import CivilDate, Instant
from calendrix.core.validate import invalid_reason
from calendrix.engines.projection import DEFAULT_ZONE, localize, to_civil

_YEAR = r"(?P<year>[+-]\d{6}|\d{4})"
_DATE = _YEAR + r"-(?P<month>\d{2})-(?P<day>\d{2})"

_STRICT_RE = re.compile(
    "^" + _DATE
    + r"T(?P<hour>\d{2}):(?P<minute>\d{2}):(?P<second>\d{2})(?:\.(?P<frac>\d{1,3}))?"
    + r"(?P<tz>Z|[+-]\d{2}:\d{2})$",
    re.ASCII,
)
_LENIENT_RE = re.compile(
    "^" + _DATE
    + r"[Tt ](?P<hour>\d{2}):(?P<minute>\d{2})(?::(?P<second>\d{2})(?:\.(?P<frac>\d{1,3}))?)?"
    + r"(?P<tz>[Zz]|[+-]\d{2}:?\d{2})$",
    re.ASCII,
)
_DATE_RE = re.compile("^" + _DATE + "$", re.ASCII)
_DIGITS_RE = re.compile(r"^[+-]?\d+$", re.ASCII)
# signed, or unsigned and longer than any ISO basic date
_EPOCH_RE = re.compile(r"^(?:[+-]\d{1,19}|\d{9,19})$", re.ASCII)
_EPOCH_MAX_DIGITS = 19

Parseable = Union[str, int]


def _year(text: str) -> Optional[int]:
    if text == "-000000":
        return None
    return int(text)


def _offset(tz: str) -> Optional[int]:
    if tz in ("Z", "z"):
        return 0
    sign = -1 if tz[0] == "-" else 1
    digits = tz[1:].replace(":", "")
    hh, mm = int(digits[:2]), int(digits[2:])
    if mm > 59:
        return None
    return sign * (hh * 60 + mm)


def _datetime_fields(text: str, strict: bool) -> Optional[Dict[str, int]]:
    m = _STRICT_RE.match(text)
    if m is None and not strict:
        m = _LENIENT_RE.match(text)
    if m is None:
        return None
    year = _year(m["year"])
    offset = _offset(m["tz"])
    if year is None or offset is None:
        return None
    frac = m["frac"] or "0"
    return dict(
        year=year,
        month=int(m["month"]),
        day=int(m["day"]),
        hour=int(m["hour"]),
        minute=int(m["minute"]),
        second=int(m["second"] or 0),
        millisecond=int(frac.ljust(3, "0")),
        offset_minutes=offset,
    )


def _date_fields(text: str) -> Optional[Dict[str, int]]:
    m = _DATE_RE.match(text)
    if m is None:
        return None
    year = _year(m["year"])
    if year is None:
        return None
    return dict(year=year, month=int(m["month"]), day=int(m["day"]))


def _build(fields: Dict[str, int]) -> CivilDate:
    reason = invalid_reason(**fields)
    if reason is not None:
        raise InvalidCivilDate(reason)
    return CivilDate(**fields)


def _reject(value: Any, why: str = "no accepted format matches") -> UnparseableDate:
    logger.debug("unparseable date {!r}: {}", value, why)
    return UnparseableDate(f"Cannot parse {value!r}: {why}")


# ---------------------------------------------------------
# Single-grammar entry points
# ---------------------------------------------------------

def parse_iso(text: str, *, strict: bool = True) -> CivilDate:
    """ISO date-time with offset -> CivilDate carrying that offset."""
    fields = _datetime_fields(text, strict)
    if fields is None:
        raise _reject(text)
    return _build(fields)


def try_parse_iso(text: str, *, strict: bool = True) -> Optional[CivilDate]:
    fields = _datetime_fields(text, strict)
    if fields is None or invalid_reason(**fields) is not None:
        return None
    return CivilDate(**fields)


def parse_date(text: str, zone: str, resolver: Optional[TimeZoneResolver] = None) -> CivilDate:
    """YYYY-MM-DD -> local midnight in ``zone``."""
    fields = _date_fields(text)
    if fields is None:
        raise _reject(text)
    return localize(_build(fields), zone, resolver)


def parse_epoch_millis(value: Parseable) -> Instant:
    if isinstance(value, bool):
        raise _reject(value, "booleans are not epoch milliseconds")
    if isinstance(value, int):
        return Instant.from_epoch_millis(value)
    if isinstance(value, str) and _EPOCH_RE.match(value):
        return Instant.from_epoch_millis(int(value))
    if isinstance(value, str) and _DIGITS_RE.match(value):
        if _too_long(value):
            raise RangeError(f"{value[:24]}... has more digits than any representable instant")
        raise _reject(value, "short unsigned digit runs are ambiguous; sign them or pass an int")
    raise _reject(value)


def _too_long(text: str) -> bool:
    return len(text.lstrip("+-")) > _EPOCH_MAX_DIGITS


def _is_epoch(value: Any) -> bool:
    """Ints and digit runs go to parse_epoch_millis, which accepts or rejects them."""
    return isinstance(value, int) or (isinstance(value, str) and _DIGITS_RE.match(value) is not None)


# ---------------------------------------------------------
# Dispatching entry points
# ---------------------------------------------------------

def parse_civil(
    value: Parseable,
    *,
    zone: Optional[str] = None,
    resolver: Optional[TimeZoneResolver] = None,
    strict: bool = True,
) -> CivilDate:
    """
    Parse any accepted input to a CivilDate.

    Date-times keep the offset written in the text. Date-only input needs
    ``zone``. Epoch milliseconds are projected into ``zone`` (UTC if omitted).
    """
    if _is_epoch(value):
        return to_civil(parse_epoch_millis(value), zone or DEFAULT_ZONE, resolver)
    if not isinstance(value, str):
        raise _reject(value, f"unsupported type {type(value).__name__}")

    fields = _datetime_fields(value, strict)
    if fields is not None:
        return _build(fields)

    if _DATE_RE.match(value):
        if zone is None:
            raise _reject(value, "a date without a time needs a zone")
        return parse_date(value, zone, resolver)

    raise _reject(value)


def parse(
    value: Parseable,
    *,
    zone: Optional[str] = None,
    resolver: Optional[TimeZoneResolver] = None,
    strict: bool = True,
) -> Instant:
    """Parse any accepted input to an Instant (see parse_civil)."""
    if _is_epoch(value):
        return parse_epoch_millis(value)
    return parse_civil(value, zone=zone, resolver=resolver, strict=strict).to_instant()


def try_parse(
    value: Parseable,
    *,
    zone: Optional[str] = None,
    resolver: Optional[TimeZoneResolver] = None,
    strict: bool = True,
) -> Optional[Instant]:
    """Like parse, but None for text that is not a date. Zone and range errors still raise."""
    if isinstance(value, bool):
        return None
    if isinstance(value, str) and _DIGITS_RE.match(value):
        if _EPOCH_RE.match(value) or _too_long(value):
            return parse_epoch_millis(value)
        return None
    if isinstance(value, int):
        return parse_epoch_millis(value)
    if not isinstance(value, str):
        return None
    civil = try_parse_iso(value, strict=strict)
    if civil is not None:
        return civil.to_instant()
    fields = _date_fields(value)
    if fields is None or zone is None or invalid_reason(**fields) is not None:
        return None
    return localize(CivilDate(**fields), zone, resolver).to_instant()
