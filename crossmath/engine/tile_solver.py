"""CP-SAT tile-bank solver using OR-Tools.

Works from the player's side: only fixed cells and the tile bank are
visible, and blanks must receive tiles so every equation line holds. Used
to confirm a generated level is solvable from what is shown, and to count
alternative solutions.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Dict, List, Optional

from ortools.sat.python import cp_model

from ..core.constants import Operator
from ..core.models import BlankCell, FixedCell, LevelDescriptor, Position
from ..utils.logger import get_logger

LOGGER = get_logger(__name__)


@dataclass
class TileModel:
    model: cp_model.CpModel
    blank_vars: Dict[Position, cp_model.IntVar]


def build_tile_model(level: LevelDescriptor) -> Optional[TileModel]:
    """Encode ``level`` as a CP-SAT model, or ``None`` if a line is not an equation."""
    model = cp_model.CpModel()
    tile_counts = Counter(level.tiles)
    tile_values = sorted(tile_counts)
    blank_vars: Dict[Position, cp_model.IntVar] = {}
    picks: Dict[Position, Dict[int, cp_model.IntVar]] = {}

    # ------------------------------------------------------------------
    # Step 1: one variable per blank, tied to exactly one tile value
    # ------------------------------------------------------------------
    for r, c in level.blank_positions():
        var = model.new_int_var(min(tile_values), max(tile_values), f"B_{r}_{c}")
        choice = {v: model.new_bool_var(f"B_{r}_{c}_is_{v}") for v in tile_values}
        model.add_exactly_one(list(choice.values()))
        model.add(var == cp_model.LinearExpr.weighted_sum(list(choice.values()), tile_values))
        blank_vars[(r, c)] = var
        picks[(r, c)] = choice

    # ------------------------------------------------------------------
    # Step 2: each tile value is used exactly as often as it appears
    # ------------------------------------------------------------------
    for value, count in tile_counts.items():
        model.add(sum(choice[value] for choice in picks.values()) == count)

    # ------------------------------------------------------------------
    # Step 3: equation constraints, one per line
    # ------------------------------------------------------------------
    constants: Dict[int, cp_model.IntVar] = {}

    def operand(pos: Position) -> Optional[cp_model.IntVar]:
        cell = level.grid[pos[0]][pos[1]]
        if isinstance(cell, BlankCell):
            return blank_vars[pos]
        if isinstance(cell, FixedCell) and isinstance(cell.value, int):
            if cell.value not in constants:
                constants[cell.value] = model.new_constant(cell.value)
            return constants[cell.value]
        return None

    for line in level.eq_lines:
        left_pos, op_pos, right_pos, _, result_pos = line
        op_cell = level.grid[op_pos[0]][op_pos[1]]
        left, right, result = operand(left_pos), operand(right_pos), operand(result_pos)
        if not isinstance(op_cell, FixedCell) or not isinstance(op_cell.value, Operator):
            LOGGER.warning("Line %s has no operator cell", line)
            return None
        if left is None or right is None or result is None:
            LOGGER.warning("Line %s has a non-numeric operand cell", line)
            return None

        op = op_cell.value
        if op == Operator.ADD:
            model.add(left + right == result)
        elif op == Operator.SUBTRACT:
            model.add(left - right == result)
        elif op == Operator.MULTIPLY:
            model.add_multiplication_equality(result, [left, right])
        else:
            model.add_multiplication_equality(left, [result, right])

    return TileModel(model=model, blank_vars=blank_vars)


def solve_from_tiles(level: LevelDescriptor, timeout: float = 10.0) -> Optional[Dict[Position, int]]:
    """Place tiles into blanks so that every equation holds.

    Returns the chosen value per blank position, or ``None`` if CP-SAT finds
    no assignment within ``timeout`` seconds.
    """
    if not level.blank_positions():
        return {}
    tile_model = build_tile_model(level)
    if tile_model is None:
        return None

    solver = cp_model.CpSolver()
    solver.parameters.max_time_in_seconds = timeout
    solver.parameters.num_workers = 4
    status = solver.solve(tile_model.model)
    if status not in (cp_model.OPTIMAL, cp_model.FEASIBLE):
        LOGGER.warning("CP-SAT: no tile assignment (status=%s)", solver.status_name(status))
        return None

    LOGGER.info("CP-SAT: tile assignment found in %.2fs", solver.wall_time)
    return {pos: solver.value(var) for pos, var in tile_model.blank_vars.items()}


class _SolutionCounter(cp_model.CpSolverSolutionCallback):
    def __init__(self, blank_vars: List[cp_model.IntVar], limit: int) -> None:
        super().__init__()
        self._blank_vars = blank_vars
        self._limit = limit
        self.solutions: List[List[int]] = []

    def on_solution_callback(self) -> None:
        self.solutions.append([self.value(var) for var in self._blank_vars])
        if len(self.solutions) >= self._limit:
            self.stop_search()


def count_solutions(level: LevelDescriptor, limit: int = 2, timeout: float = 10.0) -> int:
    """Count distinct tile assignments, stopping at ``limit``."""
    if not level.blank_positions():
        return 1
    tile_model = build_tile_model(level)
    if tile_model is None:
        return 0

    counter = _SolutionCounter(list(tile_model.blank_vars.values()), limit)
    solver = cp_model.CpSolver()
    solver.parameters.max_time_in_seconds = timeout
    solver.parameters.enumerate_all_solutions = True
    solver.parameters.num_workers = 1
    solver.solve(tile_model.model, counter)
    LOGGER.debug("CP-SAT: %s tile assignment(s) found (limit %s)", len(counter.solutions), limit)
    return len(counter.solutions)
