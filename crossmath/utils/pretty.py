"""Pretty-print helpers for generated levels."""

from __future__ import annotations

import sys
from collections import Counter
from typing import TYPE_CHECKING

from ..core.constants import Operator
from ..core.models import BlankCell, FixedCell

if TYPE_CHECKING:
    from ..core.models import Cell, Grid, LevelDescriptor


def cell_symbol(cell: Cell, reveal: bool = False) -> str:
    if cell is None:
        return "."
    if isinstance(cell, FixedCell):
        return cell.value.value if isinstance(cell.value, Operator) else str(cell.value)
    if isinstance(cell, BlankCell):
        if cell.value is not None:
            return str(cell.value)
        return f"[{cell.answer}]" if reveal else "_"
    return "?"


def format_grid(grid: Grid, *, reveal: bool = False) -> str:
    width = max((len(row) for row in grid), default=0)
    header_cells = [f"{c:>4}" for c in range(width)]
    lines = ["    " + "".join(header_cells)]
    lines.append("    " + "-" * (4 * width))
    for r, row in enumerate(grid):
        row_render = "".join(f"{cell_symbol(cell, reveal):>4}" for cell in row)
        lines.append(f"{r:>2} |{row_render}")
    return "\n".join(lines)


def pretty_print_level(level: LevelDescriptor, *, reveal: bool = False, stream=None) -> None:
    """Print the level grid, tile bank and a short summary."""

    stream = stream or sys.stdout
    print(
        f"Level {level.level_num} - {level.name} ({level.difficulty.value}), seed {level.seed}",
        file=stream,
    )
    print(format_grid(level.grid, reveal=reveal), file=stream)

    operators = Counter(
        cell.value.value
        for row in level.grid
        for cell in row
        if isinstance(cell, FixedCell) and isinstance(cell.value, Operator)
    )
    print(file=stream)
    print(f"  Size:        {level.rows} x {level.cols}", file=stream)
    print(f"  Equations:   {level.eq_count}", file=stream)
    print(f"  Blanks:      {len(level.tiles)}", file=stream)
    print(f"  Operators:   {' '.join(f'{op}:{n}' for op, n in sorted(operators.items()))}", file=stream)
    print(f"  Tiles:       {' '.join(str(v) for v in level.tiles)}", file=stream)
