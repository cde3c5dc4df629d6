"""
calendrix.engines.grid
----------------------
Month layouts as rows of seven cells.

``build_month_grid`` returns a MonthGrid: iterating it computes the rows
from scratch every time, so it can be iterated any number of times and
never carries a cursor between iterations.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Tuple

from calendrix.core.errors import InvalidCivilDate
from calendrix.core.time import days_from_civil, days_in_month, weekday_from_days
from calendrix.core.types import EMPTY, Cell

Row = Tuple[Cell, ...]

WEEK_ROWS_MAX = 6


@dataclass(frozen=True)
class MonthGrid:
    year: int
    month: int
    week_starts_on: int = 0   # 0=Sunday..6=Saturday
    fixed_rows: bool = False  # pad to six rows

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise InvalidCivilDate(f"month must be in 1..12, got {self.month}")
        if not 0 <= self.week_starts_on <= 6:
            raise ValueError(f"week_starts_on must be in 0..6, got {self.week_starts_on}")

    @property
    def leading(self) -> int:
        """Number of empty cells before day 1."""
        first = weekday_from_days(days_from_civil(self.year, self.month, 1))
        return (first - self.week_starts_on) % 7

    @property
    def length(self) -> int:
        return days_in_month(self.year, self.month)

    def weekday_order(self) -> Tuple[int, ...]:
        """Weekday index (0=Sunday) of each column."""
        return tuple((self.week_starts_on + i) % 7 for i in range(7))

    def __iter__(self) -> Iterator[Row]:
        row = [EMPTY] * self.leading
        emitted = 0
        for day in range(1, self.length + 1):
            row.append(Cell(day))
            if len(row) == 7:
                yield tuple(row)
                emitted += 1
                row = []
        if row:
            row.extend([EMPTY] * (7 - len(row)))
            yield tuple(row)
            emitted += 1
        if self.fixed_rows:
            while emitted < WEEK_ROWS_MAX:
                yield (EMPTY,) * 7
                emitted += 1

    def rows(self) -> Tuple[Row, ...]:
        return tuple(self)

    def days(self) -> Tuple[int, ...]:
        """Non-empty cells in reading order."""
        return tuple(c.day for r in self for c in r if c.day is not None)


def build_month_grid(year: int, month: int, week_starts_on: int = 0, *, fixed_rows: bool = False) -> MonthGrid:
    return MonthGrid(year, month, week_starts_on, fixed_rows)
