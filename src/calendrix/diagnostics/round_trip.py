from __future__ import annotations

import argparse
import random
from typing import List, Optional

from calendrix.bootstrap import build_resolver
from calendrix.core.interfaces import TimeZoneResolver
from calendrix.core.types import Instant, Unit
from calendrix.engines.arithmetic import add_calendar, subtract_calendar
from calendrix.engines.difference import difference
from calendrix.engines.projection import to_civil
from calendrix.text.formatter import format_iso
from calendrix.text.parser import parse, parse_iso


def parse_zones(s: str) -> List[str]:
    # "UTC,Europe/Paris" -> ["UTC", "Europe/Paris"]
    return [x.strip() for x in s.split(",") if x.strip()]


def _fail(kind: str, **ctx: object) -> None:
    print(f"\nFAIL ({kind})")
    for k, v in ctx.items():
        print(f"{k}:", v)


def roundtrip_test(
    zone: str,
    N: int,
    lo: int,
    hi: int,
    seed: int,
    *,
    resolver: TimeZoneResolver,
    max_failures: int,
) -> int:
    rng = random.Random(seed)
    failures = 0

    for _ in range(N):
        i0 = Instant(rng.randint(lo, hi))
        j0 = Instant(rng.randint(lo, hi))
        civil = to_civil(i0, zone, resolver)

        text = format_iso(civil)
        back = parse(text)
        if back != i0 or format_iso(parse_iso(text)) != text:
            failures += 1
            _fail("iso", zone=zone, instant=i0, text=text, back=back)

        n = rng.randint(-10**12, 10**12)
        if i0.add_millis(n).add_millis(-n) != i0:
            failures += 1
            _fail("add_millis", instant=i0, n=n)

        for unit in Unit:
            d1 = difference(i0, j0, unit, zone=zone, resolver=resolver)
            d2 = difference(j0, i0, unit, zone=zone, resolver=resolver)
            if d1 != -d2:
                failures += 1
                _fail("antisymmetry", zone=zone, a=i0, b=j0, unit=unit.value, forward=d1, backward=d2)

        days = rng.randint(-5000, 5000)
        there = add_calendar(civil, days=days).civil
        if subtract_calendar(there, days=days).civil != civil:
            failures += 1
            _fail("add_days", civil=civil, days=days, there=there)

        if failures >= max_failures:
            return failures

    return failures


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Random round-trip checks: format/parse, add/subtract, difference symmetry.")
    p.add_argument("--zones", type=str, default="UTC,+05:30,America/New_York,Europe/London,Australia/Lord_Howe",
                   help="Comma-separated zone list.")
    p.add_argument("--N", type=int, default=2000, help="Trials per zone.")
    p.add_argument("--lo", type=int, default=-(10**13), help="Lowest epoch ms.")
    p.add_argument("--hi", type=int, default=10**13, help="Highest epoch ms.")
    p.add_argument("--seed", type=int, default=123, help="RNG seed.")
    p.add_argument("--max-failures", type=int, default=5, help="Stop after this many failures per zone.")
    args = p.parse_args(argv)

    resolver = build_resolver()
    total = 0
    for zone in parse_zones(args.zones):
        f = roundtrip_test(zone, args.N, args.lo, args.hi, args.seed, resolver=resolver, max_failures=args.max_failures)
        print(f"{zone}: {'OK' if f == 0 else f'{f} failure(s)'}")
        total += f
    return 1 if total else 0


if __name__ == "__main__":
    raise SystemExit(main())
