"""Level generation orchestration.

Three stages run back to back with one shared RNG:
  1. Placement: lay segments out on the grid.
  2. Solving: pick operators and values satisfying every equation.
  3. Building: choose blanks and emit the dense grid plus tile bank.
A failed stage restarts the whole round with fresh randomness.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from ..core.constants import (LAYOUT_ATTEMPTS, PLACEMENT_ATTEMPTS, SEGMENT_LENGTH,
                              SOLVER_ATTEMPTS, Difficulty, Operator)
from ..core.models import GridLayout, LevelDescriptor
from ..data.difficulty import get_difficulty, shape_name
from ..utils.logger import get_logger
from .grid import build_grid
from .placement import place_segments
from .prng import XorShift32
from .solver import solve_constraints


LOGGER = get_logger(__name__)

_MASK32 = 0xFFFFFFFF


@dataclass
class LayoutConfig:
    num_equations: int
    operators: Tuple[Operator, ...]
    fixed_ratio: float
    max_grid: int
    layout_attempts: int = LAYOUT_ATTEMPTS
    placement_attempts: int = PLACEMENT_ATTEMPTS
    solver_attempts: int = SOLVER_ATTEMPTS


FALLBACK_CONFIG = LayoutConfig(
    num_equations=2,
    operators=(Operator.ADD,),
    fixed_ratio=0.4,
    max_grid=7,
)
FALLBACK_NAME = "L-Shape"


class LayoutGenerator:
    """Retries place -> solve -> build until one round succeeds."""

    def __init__(self, config: LayoutConfig, rng: XorShift32) -> None:
        self.config = config
        self.rng = rng

    def generate(self) -> Optional[GridLayout]:
        config = self.config
        if config.num_equations < 1 or config.max_grid < SEGMENT_LENGTH or not config.operators:
            LOGGER.warning(
                "Unusable layout config (%s equations, grid %s, operators %s)",
                config.num_equations,
                config.max_grid,
                [op.value for op in config.operators],
            )
            return None
        for attempt in range(1, config.layout_attempts + 1):
            placement = place_segments(
                config.num_equations, config.max_grid, self.rng, config.placement_attempts
            )
            if placement is None:
                LOGGER.debug("Layout attempt %s: placement failed", attempt)
                continue
            solution = solve_constraints(
                placement, config.operators, self.rng, config.solver_attempts
            )
            if solution is None:
                LOGGER.debug("Layout attempt %s: solving failed", attempt)
                continue
            layout = build_grid(placement, solution, config.fixed_ratio, self.rng)
            LOGGER.info(
                "Layout with %s equations ready after %s attempt(s)", layout.eq_count, attempt
            )
            return layout
        LOGGER.warning(
            "No layout with %s equations after %s attempts",
            config.num_equations,
            config.layout_attempts,
        )
        return None


def generate_layout(
    num_equations: int,
    operators: Sequence[Operator],
    fixed_ratio: float,
    max_grid: int,
    rng: XorShift32,
) -> Optional[GridLayout]:
    config = LayoutConfig(
        num_equations=num_equations,
        operators=tuple(operators),
        fixed_ratio=fixed_ratio,
        max_grid=max_grid,
    )
    return LayoutGenerator(config, rng).generate()


def level_seed(seed: int, level: int) -> int:
    """Mix the base seed and level number into a 32-bit RNG seed."""
    return ((seed * 0x9E3779B9) ^ (level * 2654435761)) & _MASK32


def fallback_seed(seed: int, level: int) -> int:
    return seed + level * 31337


def generate_level(level_num: int, seed: int) -> Optional[LevelDescriptor]:
    """Generate the level for ``level_num``; identical inputs give identical levels.

    When the level's own parameters yield nothing, a small addition-only
    layout is generated instead. ``None`` means even that failed.
    """
    params = get_difficulty(level_num)
    config = LayoutConfig(
        num_equations=params.equations,
        operators=params.operators,
        fixed_ratio=params.fixed_ratio,
        max_grid=params.max_grid,
    )
    layout = LayoutGenerator(config, XorShift32(level_seed(seed, level_num))).generate()
    if layout is not None:
        return LevelDescriptor.from_layout(
            layout,
            difficulty=params.label,
            level_num=level_num,
            seed=seed,
            name=shape_name(layout.rows, layout.cols, layout.eq_count),
        )

    LOGGER.warning("Level %s (seed %s) falling back to the minimal layout", level_num, seed)
    layout = LayoutGenerator(FALLBACK_CONFIG, XorShift32(fallback_seed(seed, level_num))).generate()
    if layout is None:
        LOGGER.error("Fallback layout failed for level %s (seed %s)", level_num, seed)
        return None
    return LevelDescriptor.from_layout(
        layout,
        difficulty=Difficulty.EASY,
        level_num=level_num,
        seed=seed,
        name=FALLBACK_NAME,
    )
