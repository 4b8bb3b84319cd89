from __future__ import annotations
import math
from typing import Iterable

from dragonwatch.core.models import DEFAULT_ROWS, Axis, Grid, GridCell, Outcome

MIN_COLUMNS = 24


def _empty_column(rows: int) -> list[GridCell]:
    return [GridCell.empty() for _ in range(rows)]


def _close(column: list[GridCell], rows: int) -> list[GridCell]:
    return column + [GridCell.empty() for _ in range(rows - len(column))]


def build_trend_grid(outcomes: Iterable[Outcome], axis: Axis, rows: int = DEFAULT_ROWS) -> Grid:
    """Big road: a new column starts whenever the result flips.

    A run longer than `rows` wraps into a fresh column of the same value.
    """
    columns: Grid = []
    cur: list[GridCell] = []
    last = None
    for o in sorted(outcomes, key=lambda o: o.height):
        val = o.label(axis)
        if val != last or len(cur) >= rows:
            if cur:
                columns.append(_close(cur, rows))
            cur = []
            last = val
        cur.append(GridCell(type=val, value=o.result_value))
    if cur:
        columns.append(_close(cur, rows))

    while len(columns) < MIN_COLUMNS:
        columns.append(_empty_column(rows))
    return columns


def build_bead_grid(outcomes: Iterable[Outcome], axis: Axis, rows: int = DEFAULT_ROWS) -> Grid:
    """Bead road: plain top-to-bottom, column-by-column fill."""
    chrono = sorted(outcomes, key=lambda o: o.height)
    total = len(chrono)
    n_cols = max(MIN_COLUMNS, math.ceil(total / rows))
    columns: Grid = []
    for c in range(n_cols):
        column = []
        for r in range(rows):
            i = c * rows + r
            if i < total:
                column.append(GridCell(type=chrono[i].label(axis), value=chrono[i].result_value))
            else:
                column.append(GridCell.empty())
        columns.append(column)
    return columns
