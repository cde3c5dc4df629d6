from __future__ import annotations

import argparse
from typing import List, Optional

from calendrix.core.interfaces import LocaleProvider
from calendrix.engines.grid import MonthGrid, build_month_grid
from calendrix.text.locale import ENGLISH


def dow_header(grid: MonthGrid, locale: LocaleProvider = ENGLISH, w: int = 3) -> str:
    return " ".join(locale.weekday_name(i, "short")[:w].rjust(w) for i in grid.weekday_order())


def render_grid(grid: MonthGrid, locale: LocaleProvider = ENGLISH, w: int = 3) -> List[str]:
    title = f"{locale.month_name(grid.month)} {grid.year}"
    header = dow_header(grid, locale, w)
    lines = [title.center(len(header)).rstrip(), header]
    for row in grid:
        lines.append(" ".join(("" if c.is_empty else str(c.day)).rjust(w) for c in row))
    return lines


def print_grid(grid: MonthGrid, locale: LocaleProvider = ENGLISH) -> None:
    for line in render_grid(grid, locale):
        print(line)
    print()


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Print Gregorian month calendars.")
    p.add_argument("year", type=int)
    p.add_argument("month", type=int, nargs="?", help="1..12; all twelve months when omitted")
    p.add_argument("--week-start", type=int, default=0, help="0=Sunday..6=Saturday (default: 0)")
    p.add_argument("--fixed-rows", action="store_true", help="always print six rows")
    args = p.parse_args(argv)

    months = [args.month] if args.month else list(range(1, 13))
    for m in months:
        print_grid(build_month_grid(args.year, m, args.week_start, fixed_rows=args.fixed_rows))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
