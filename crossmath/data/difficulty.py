"""Level-number to generation parameter table."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from ..core.constants import Difficulty, Operator

_ADD: Tuple[Operator, ...] = (Operator.ADD,)
_ADD_SUB: Tuple[Operator, ...] = (Operator.ADD, Operator.SUBTRACT)
_NO_DIV: Tuple[Operator, ...] = (Operator.ADD, Operator.SUBTRACT, Operator.MULTIPLY)
_ALL: Tuple[Operator, ...] = tuple(Operator)


@dataclass(frozen=True)
class DifficultyParams:
    label: Difficulty
    equations: int
    operators: Tuple[Operator, ...]
    fixed_ratio: float
    max_grid: int


# (last level of bucket, params)
_BUCKETS = (
    (3, DifficultyParams(Difficulty.EASY, 2, _ADD, 0.55, 7)),
    (6, DifficultyParams(Difficulty.EASY, 3, _ADD_SUB, 0.40, 7)),
    (9, DifficultyParams(Difficulty.MEDIUM, 3, _ADD_SUB, 0.20, 9)),
    (12, DifficultyParams(Difficulty.MEDIUM, 4, _NO_DIV, 0.10, 9)),
    (15, DifficultyParams(Difficulty.HARD, 5, _NO_DIV, 0.0, 11)),
    (18, DifficultyParams(Difficulty.HARD, 5, _ALL, 0.0, 11)),
    (21, DifficultyParams(Difficulty.EXPERT, 6, _ALL, 0.0, 11)),
)

MAX_EQUATIONS = 10
MAX_GRID = 13


def get_difficulty(level: int) -> DifficultyParams:
    """Return generation parameters for ``level``.

    Past the table every third level adds an equation (up to
    ``MAX_EQUATIONS``) and every sixth widens the grid (up to ``MAX_GRID``).
    """
    for last_level, params in _BUCKETS:
        if level <= last_level:
            return params
    extra = (level - 22) // 3
    return DifficultyParams(
        label=Difficulty.EXPERT,
        equations=min(MAX_EQUATIONS, 6 + extra),
        operators=_ALL,
        fixed_ratio=0.0,
        max_grid=min(MAX_GRID, 11 + extra // 2),
    )


def shape_name(rows: int, cols: int, eq_count: int) -> str:
    """Display name derived from aspect ratio and equation count."""
    ratio = cols / rows
    if eq_count <= 2:
        return "L-Shape" if ratio > 1.5 else "Tower" if ratio < 0.7 else "Corner"
    if eq_count == 3:
        return "T-Shape" if ratio > 1.3 else "T-Stack" if ratio < 0.8 else "Plus"
    if eq_count == 4:
        return "H-Grid" if ratio > 1.5 else "V-Grid" if ratio < 0.7 else "Cross"
    if eq_count == 5:
        return "Wide Star" if ratio > 1.4 else "Star"
    if eq_count == 6:
        return "Double Cross"
    if eq_count == 7:
        return "Cluster"
    return "Web"
