"""Player-facing validation of a filled live grid."""

from __future__ import annotations

from dataclasses import replace
from typing import List, Optional, Sequence, Set

from ..core.constants import CellStatus
from ..core.models import BlankCell, Grid, LevelDescriptor, Position
from ..utils.logger import get_logger
from .checker import check_line


LOGGER = get_logger(__name__)


class GridValidator:
    """Checks each equation line of a live grid against its arithmetic."""

    def __init__(self, eq_lines: Sequence[Sequence[Position]]) -> None:
        self.eq_lines = eq_lines

    @staticmethod
    def is_complete(live_grid: Grid) -> bool:
        return not any(
            isinstance(cell, BlankCell) and cell.value is None
            for row in live_grid
            for cell in row
        )

    def validate(self, live_grid: Grid) -> Optional[Set[Position]]:
        """Return blank positions lying on a failing equation.

        ``None`` means some blank is still unfilled and nothing was checked;
        an empty set means the grid is solved.
        """
        if not self.is_complete(live_grid):
            return None

        wrong: Set[Position] = set()
        for line in self.eq_lines:
            result = check_line([live_grid[r][c] for r, c in line])
            if result.has and not result.ok:
                wrong.update(
                    (r, c) for r, c in line if isinstance(live_grid[r][c], BlankCell)
                )
        LOGGER.debug("Validated %s lines, %s wrong cells", len(self.eq_lines), len(wrong))
        return wrong


def validate_grid(live_grid: Grid, level: LevelDescriptor) -> Optional[Set[Position]]:
    return GridValidator(level.eq_lines).validate(live_grid)


def mark_statuses(live_grid: Grid, wrong: Set[Position]) -> Grid:
    """Return a copy of ``live_grid`` with every blank tagged ok or bad."""
    marked: Grid = []
    for r, row in enumerate(live_grid):
        new_row: List = []
        for c, cell in enumerate(row):
            if isinstance(cell, BlankCell):
                status = CellStatus.BAD if (r, c) in wrong else CellStatus.OK
                cell = replace(cell, status=status)
            new_row.append(cell)
        marked.append(new_row)
    return marked


def clear_statuses(live_grid: Grid) -> Grid:
    return [
        [replace(cell, status=None) if isinstance(cell, BlankCell) else cell for cell in row]
        for row in live_grid
    ]


def matches_structure(live_grid: Grid, level: LevelDescriptor) -> bool:
    """Whether a saved live grid still fits a freshly generated ``level``.

    A mismatch means saved progress cannot be resumed on this level.
    """
    return len(live_grid) == len(level.grid) and all(
        len(saved) == len(fresh) for saved, fresh in zip(live_grid, level.grid)
    )
