# tests/test_grid.py

import random

import pytest

from calendrix.core.errors import InvalidCivilDate
from calendrix.core.time import days_in_month
from calendrix.core.types import EMPTY, Cell
from calendrix.engines.grid import WEEK_ROWS_MAX, MonthGrid, build_month_grid


def _flat(grid):
    return [c for row in grid for c in row]


def test_october_2023_sunday_start():
    g = build_month_grid(2023, 10)
    rows = g.rows()
    assert len(rows) == 5
    assert g.leading == 0
    assert rows[0] == tuple(Cell(d) for d in range(1, 8))
    assert rows[-1] == (Cell(29), Cell(30), Cell(31), EMPTY, EMPTY, EMPTY, EMPTY)
    assert g.days() == tuple(range(1, 32))


def test_october_2023_monday_start():
    g = build_month_grid(2023, 10, week_starts_on=1)
    rows = g.rows()
    assert g.leading == 6
    assert len(rows) == 6
    assert rows[0] == (EMPTY,) * 6 + (Cell(1),)
    assert g.weekday_order() == (1, 2, 3, 4, 5, 6, 0)


def test_february_2015_fits_four_rows():
    # starts on a Sunday, 28 days
    assert len(build_month_grid(2015, 2).rows()) == 4


def test_fixed_rows():
    g = build_month_grid(2015, 2, fixed_rows=True)
    rows = g.rows()
    assert len(rows) == WEEK_ROWS_MAX
    assert rows[4] == rows[5] == (EMPTY,) * 7
    assert g.days() == tuple(range(1, 29))


def test_grid_is_restartable():
    g = build_month_grid(2024, 2)
    first = list(g)
    second = list(g)
    assert first == second
    it1, it2 = iter(g), iter(g)
    assert next(it1) == next(it2)


def test_random_months():
    random.seed(42)
    for _ in range(500):
        year = random.randint(-5000, 5000)
        month = random.randint(1, 12)
        start = random.randint(0, 6)
        g = MonthGrid(year, month, start)
        cells = _flat(g)

        assert len(cells) % 7 == 0
        assert [c.day for c in cells if not c.is_empty] == list(range(1, days_in_month(year, month) + 1))
        assert all(c.is_empty for c in cells[: g.leading])
        assert 4 <= len(g.rows()) <= 6
        # every trailing row has at least one day
        assert not all(c.is_empty for c in g.rows()[-1])


def test_invalid_arguments():
    with pytest.raises(InvalidCivilDate):
        build_month_grid(2023, 13)
    with pytest.raises(InvalidCivilDate):
        build_month_grid(2023, 0)
    with pytest.raises(ValueError):
        build_month_grid(2023, 10, week_starts_on=7)
