"""Data models supporting level generation and checking."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

from .constants import (EQUALS, EQUALS_OFFSET, NUMERIC_OFFSETS, OPERATOR_OFFSET,
                        SEGMENT_LENGTH, CellKind, CellStatus, Difficulty, Operator,
                        Orientation)
from .exceptions import LevelFormatError

Position = Tuple[int, int]
Symbol = Union[int, Operator, str]


@dataclass(frozen=True)
class Segment:
    """One placed equation strip: num op num = num."""

    orientation: Orientation
    row: int
    col: int

    def offset(self, index: int) -> Position:
        if self.orientation == Orientation.HORIZONTAL:
            return (self.row, self.col + index)
        return (self.row + index, self.col)

    @property
    def cells(self) -> List[Position]:
        return [self.offset(i) for i in range(SEGMENT_LENGTH)]

    @property
    def numeric_positions(self) -> List[Position]:
        """Left operand, right operand and result, in role order."""
        return [self.offset(i) for i in NUMERIC_OFFSETS]

    @property
    def operator_position(self) -> Position:
        return self.offset(OPERATOR_OFFSET)

    @property
    def equals_position(self) -> Position:
        return self.offset(EQUALS_OFFSET)

    @property
    def result_position(self) -> Position:
        return self.offset(NUMERIC_OFFSETS[-1])


@dataclass
class CellMeta:
    """Placement metadata for one occupied grid position."""

    kind: CellKind
    segments: List[int] = field(default_factory=list)


@dataclass
class Placement:
    cells: Dict[Position, CellMeta]
    segments: List[Segment]

    def numeric_positions(self) -> List[Position]:
        return [pos for pos, meta in self.cells.items() if meta.kind == CellKind.NUMERIC]


@dataclass
class Solution:
    values: Dict[Position, int]
    operators: List[Operator]


@dataclass(frozen=True)
class FixedCell:
    """A revealed cell: a number, an operator or the equals sign."""

    value: Symbol


@dataclass
class BlankCell:
    """A numeric cell the player fills from the tile bank."""

    answer: int
    value: Optional[int] = None
    status: Optional[CellStatus] = None


Cell = Optional[Union[FixedCell, BlankCell]]
Grid = List[List[Cell]]


def cell_to_jsonable(cell: Cell) -> Optional[Dict[str, Any]]:
    if cell is None:
        return None
    if isinstance(cell, FixedCell):
        value = cell.value.value if isinstance(cell.value, Operator) else cell.value
        return {"t": "F", "v": value}
    payload: Dict[str, Any] = {"t": "B", "ans": cell.answer, "val": cell.value}
    if cell.status is not None:
        payload["status"] = cell.status.value
    return payload


def cell_from_jsonable(payload: Optional[Dict[str, Any]]) -> Cell:
    if payload is None:
        return None
    if not isinstance(payload, dict):
        raise LevelFormatError(f"Cell payload must be an object or null, got {payload!r}")
    kind = payload.get("t")
    try:
        if kind == "F":
            raw = payload["v"]
            if isinstance(raw, str) and raw != EQUALS:
                return FixedCell(Operator(raw))
            if not isinstance(raw, (int, str)) or isinstance(raw, bool):
                raise LevelFormatError(f"Invalid fixed cell value {raw!r}")
            return FixedCell(raw)
        if kind == "B":
            status = payload.get("status")
            return BlankCell(
                answer=int(payload["ans"]),
                value=None if payload.get("val") is None else int(payload["val"]),
                status=CellStatus(status) if status is not None else None,
            )
    except (KeyError, TypeError, ValueError) as exc:
        raise LevelFormatError(f"Malformed cell payload {payload!r}: {exc}") from exc
    raise LevelFormatError(f"Unknown cell type {kind!r}")


@dataclass
class GridLayout:
    """Output of the grid builder: everything needed to play and check."""

    rows: int
    cols: int
    grid: Grid
    tiles: List[int]
    eq_count: int
    eq_lines: List[List[Position]]


@dataclass
class LevelDescriptor:
    """A generated level. Treat as immutable; play on :meth:`live_copy`."""

    rows: int
    cols: int
    grid: Grid
    tiles: List[int]
    eq_count: int
    eq_lines: List[List[Position]]
    difficulty: Difficulty
    level_num: int
    seed: int
    name: str

    @classmethod
    def from_layout(
        cls,
        layout: GridLayout,
        *,
        difficulty: Difficulty,
        level_num: int,
        seed: int,
        name: str,
    ) -> "LevelDescriptor":
        return cls(
            rows=layout.rows,
            cols=layout.cols,
            grid=layout.grid,
            tiles=layout.tiles,
            eq_count=layout.eq_count,
            eq_lines=layout.eq_lines,
            difficulty=difficulty,
            level_num=level_num,
            seed=seed,
            name=name,
        )

    def live_copy(self) -> Grid:
        return copy.deepcopy(self.grid)

    def blank_positions(self) -> List[Position]:
        return [
            (r, c)
            for r, row in enumerate(self.grid)
            for c, cell in enumerate(row)
            if isinstance(cell, BlankCell)
        ]

    def to_jsonable(self) -> Dict[str, Any]:
        return {
            "cols": self.cols,
            "rows": self.rows,
            "grid": [[cell_to_jsonable(cell) for cell in row] for row in self.grid],
            "tiles": list(self.tiles),
            "eqCount": self.eq_count,
            "eqLines": [[[r, c] for r, c in line] for line in self.eq_lines],
            "difficulty": self.difficulty.value,
            "levelNum": self.level_num,
            "seed": self.seed,
            "name": self.name,
        }

    @classmethod
    def from_jsonable(cls, payload: Dict[str, Any]) -> "LevelDescriptor":
        try:
            grid = [[cell_from_jsonable(cell) for cell in row] for row in payload["grid"]]
            level = cls(
                rows=int(payload["rows"]),
                cols=int(payload["cols"]),
                grid=grid,
                tiles=[int(v) for v in payload["tiles"]],
                eq_count=int(payload["eqCount"]),
                eq_lines=[[(int(r), int(c)) for r, c in line] for line in payload["eqLines"]],
                difficulty=Difficulty(payload["difficulty"]),
                level_num=int(payload["levelNum"]),
                seed=int(payload["seed"]),
                name=str(payload["name"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise LevelFormatError(f"Malformed level payload: {exc}") from exc
        if len(grid) != level.rows or any(len(row) != level.cols for row in grid):
            raise LevelFormatError(
                f"Grid shape does not match declared size {level.rows}x{level.cols}"
            )
        return level
