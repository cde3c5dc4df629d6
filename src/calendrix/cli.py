from __future__ import annotations

import argparse
import importlib
import inspect
import sys
from typing import Callable, Dict, List, Optional

from loguru import logger


def _run_module_main(modpath: str, argv: list[str]) -> int:
    """
    Import module and run its main().

    Supports:
      - main(argv: list[str] | None = None) -> int|None
      - main() -> int|None
    """
    mod = importlib.import_module(modpath)
    if not hasattr(mod, "main"):
        raise SystemExit(f"Module {modpath} has no main()")
    fn = getattr(mod, "main")

    sig = inspect.signature(fn)
    if len(sig.parameters) == 0:
        rv = fn()
    else:
        rv = fn(argv)
    return int(rv or 0)


def _common(p: argparse.ArgumentParser) -> None:
    p.add_argument("--zone", default=None, help="zone id (default: CALENDRIX_DEFAULT_ZONE or UTC)")


def _emit(instant, zone: Optional[str]) -> None:
    import calendrix

    print(calendrix.format_instant(instant, zone=zone))
    print(instant.to_epoch_millis())


def cmd_now(argv: list[str]) -> int:
    import calendrix

    p = argparse.ArgumentParser(prog="calendrix now", description="Current instant")
    _common(p)
    p.add_argument("--pattern", default=None)
    args = p.parse_args(argv)

    print(calendrix.format_instant(calendrix.now(), args.pattern, zone=args.zone, locale=calendrix.ENGLISH))
    return 0


def cmd_parse(argv: list[str]) -> int:
    import calendrix

    p = argparse.ArgumentParser(prog="calendrix parse", description="Parse ISO-8601 text or epoch ms")
    p.add_argument("value")
    _common(p)
    p.add_argument("--lenient", action="store_true", help="accept the documented lenient variants")
    args = p.parse_args(argv)

    instant = calendrix.parse(args.value, zone=args.zone, strict=not args.lenient)
    _emit(instant, args.zone)
    return 0


def cmd_format(argv: list[str]) -> int:
    import calendrix

    p = argparse.ArgumentParser(prog="calendrix format", description="Format an instant with a pattern")
    p.add_argument("value")
    p.add_argument("pattern", nargs="?", default=None, help='e.g. "dddd, D MMMM YYYY HH:mm z"')
    _common(p)
    p.add_argument("--no-locale", action="store_true", help="format without a LocaleProvider")
    args = p.parse_args(argv)

    instant = calendrix.parse(args.value, zone=args.zone)
    locale = None if args.no_locale else calendrix.ENGLISH
    print(calendrix.format_instant(instant, args.pattern, zone=args.zone, locale=locale))
    return 0


def cmd_add(argv: list[str]) -> int:
    import calendrix

    p = argparse.ArgumentParser(prog="calendrix add", description="Add a duration (calendar part first, then fixed part)")
    p.add_argument("value")
    _common(p)
    for name in ("years", "months", "weeks", "days", "hours", "minutes", "seconds", "millis"):
        p.add_argument(f"--{name}", type=int, default=0)
    args = p.parse_args(argv)

    dur = calendrix.Duration.of(
        years=args.years, months=args.months, weeks=args.weeks, days=args.days,
        hours=args.hours, minutes=args.minutes, seconds=args.seconds, millis=args.millis,
    )
    civil = calendrix.to_civil(calendrix.parse(args.value, zone=args.zone), args.zone)
    from calendrix.engines.arithmetic import add

    res = add(civil, dur, zone=args.zone or calendrix.get_settings().default_zone, resolver=calendrix.get_resolver())
    print(calendrix.format_iso(res.civil))
    if res.was_clamped:
        print("(day clamped to end of month)")
    return 0


def cmd_diff(argv: list[str]) -> int:
    import calendrix

    p = argparse.ArgumentParser(prog="calendrix diff", description="a - b in whole units, truncated toward zero")
    p.add_argument("a")
    p.add_argument("b")
    p.add_argument("--unit", default="days", choices=[u.value for u in calendrix.Unit])
    _common(p)
    args = p.parse_args(argv)

    a = calendrix.parse(args.a, zone=args.zone)
    b = calendrix.parse(args.b, zone=args.zone)
    print(calendrix.difference(a, b, args.unit, zone=args.zone))
    return 0


def cmd_relative(argv: list[str]) -> int:
    import calendrix

    p = argparse.ArgumentParser(prog="calendrix relative", description="Relative-time phrase")
    p.add_argument("target")
    p.add_argument("--reference", default=None, help="defaults to now")
    _common(p)
    args = p.parse_args(argv)

    target = calendrix.parse(args.target, zone=args.zone)
    ref = calendrix.parse(args.reference, zone=args.zone) if args.reference else None
    print(calendrix.relative(target, ref))
    return 0


_COMMANDS: Dict[str, Callable[[list[str]], int]] = {
    "now": cmd_now,
    "parse": cmd_parse,
    "format": cmd_format,
    "add": cmd_add,
    "diff": cmd_diff,
    "relative": cmd_relative,
}


def main(argv: Optional[List[str]] = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    from calendrix.core.errors import CalendrixError
    from calendrix.api import get_settings
    from calendrix.logs import configure_logging

    p = argparse.ArgumentParser(prog="calendrix", description="Timestamp and calendar arithmetic toolkit CLI.")
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging to stderr")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("now", help="Print the current instant")
    sub.add_parser("parse", help="Parse ISO-8601 text or epoch ms")
    sub.add_parser("format", help="Format an instant with a pattern")
    sub.add_parser("add", help="Add a duration to an instant")
    sub.add_parser("diff", help="Difference between two instants")
    sub.add_parser("relative", help="Relative-time phrase for an instant")
    sub.add_parser("month", help="Print month grids")

    p_diag = sub.add_parser("diag", help="Diagnostics tools")
    p_diag.add_argument("tool", choices=["round-trip"], help="Which diagnostic to run")

    args, rest = p.parse_known_args(argv)
    configure_logging("DEBUG" if args.verbose else get_settings().log_level)

    try:
        if args.cmd in _COMMANDS:
            return _COMMANDS[args.cmd](rest)

        if args.cmd == "month":
            return _run_module_main("calendrix.diagnostics.pretty_month", rest)

        if args.cmd == "diag":
            tool_map = {
                "round-trip": "calendrix.diagnostics.round_trip",
            }
            return _run_module_main(tool_map[args.tool], rest)
    except CalendrixError as e:
        logger.debug("{} failed: {!r}", args.cmd, e)
        print(f"calendrix: {e}", file=sys.stderr)
        return 2

    raise RuntimeError("unreachable")


if __name__ == "__main__":
    raise SystemExit(main())
