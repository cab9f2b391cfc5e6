"""Turn a solved placement into the dense, player-facing grid."""

from __future__ import annotations

import math
from typing import Dict, List

from ..core.constants import EQUALS, MIN_BLANKS, CellKind
from ..core.models import (BlankCell, Cell, FixedCell, GridLayout, Placement, Position,
                           Solution)
from ..utils.logger import get_logger
from .prng import XorShift32


LOGGER = get_logger(__name__)


def blank_count(numeric_cells: int, fixed_ratio: float) -> int:
    """How many numeric cells to hide.

    At least ``MIN_BLANKS`` and never all of them, so one revealed number
    always anchors the puzzle. Halves round up.
    """
    target = math.floor(numeric_cells * (1 - fixed_ratio) + 0.5)
    return min(numeric_cells - 1, max(MIN_BLANKS, target))


def build_grid(
    placement: Placement,
    solution: Solution,
    fixed_ratio: float,
    rng: XorShift32,
) -> GridLayout:
    positions = list(placement.cells)
    min_r = min(r for r, _ in positions)
    max_r = max(r for r, _ in positions)
    min_c = min(c for _, c in positions)
    max_c = max(c for _, c in positions)
    rows = max_r - min_r + 1
    cols = max_c - min_c + 1

    numeric = placement.numeric_positions()
    hidden = rng.shuffled(numeric)[: blank_count(len(numeric), fixed_ratio)]
    blanks = set(hidden)
    tiles = sorted(solution.values[pos] for pos in hidden)

    grid: List[List[Cell]] = [[None] * cols for _ in range(rows)]
    for (r, c), meta in placement.cells.items():
        if meta.kind == CellKind.NUMERIC:
            value = solution.values[(r, c)]
            cell: Cell = BlankCell(answer=value) if (r, c) in blanks else FixedCell(value)
        elif meta.kind == CellKind.OPERATOR:
            cell = FixedCell(solution.operators[meta.segments[0]])
        else:
            cell = FixedCell(EQUALS)
        grid[r - min_r][c - min_c] = cell

    eq_lines: List[List[Position]] = [
        [(r - min_r, c - min_c) for r, c in segment.cells] for segment in placement.segments
    ]

    LOGGER.debug(
        "Built %sx%s grid with %s blanks out of %s numeric cells",
        rows, cols, len(hidden), len(numeric),
    )
    return GridLayout(
        rows=rows,
        cols=cols,
        grid=grid,
        tiles=tiles,
        eq_count=len(placement.segments),
        eq_lines=eq_lines,
    )


def answers_by_position(layout_grid: List[List[Cell]]) -> Dict[Position, int]:
    """Map every blank cell to its answer."""
    return {
        (r, c): cell.answer
        for r, row in enumerate(layout_grid)
        for c, cell in enumerate(row)
        if isinstance(cell, BlankCell)
    }
