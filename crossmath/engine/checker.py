"""Evaluate one row or column of the live grid as a chain of equations."""

from __future__ import annotations

from typing import List, NamedTuple, Optional, Sequence, Union

from ..core.constants import EQUALS, LINE_TOLERANCE, Operator
from ..core.models import BlankCell, Cell, FixedCell
from .arithmetic import apply_op

Token = Optional[Union[int, Operator, str]]


class LineCheck(NamedTuple):
    has: bool
    ok: bool


def cell_token(cell: Cell) -> Token:
    if cell is None:
        return None
    if isinstance(cell, FixedCell):
        return cell.value
    if isinstance(cell, BlankCell):
        return cell.value
    return None


def _is_number(token: Token) -> bool:
    return isinstance(token, int) and not isinstance(token, bool)


def evaluate_part(tokens: Sequence[Token]) -> Optional[int]:
    """Fold ``n op n op n ...`` left to right with no precedence.

    Empty tokens are skipped. Anything that does not strictly alternate
    number/operator, or contains an inexact division, gives ``None``.
    """
    items = [token for token in tokens if token is not None]
    if not items or len(items) % 2 == 0:
        return None
    if not all(_is_number(token) for token in items[::2]):
        return None
    if not all(isinstance(token, Operator) for token in items[1::2]):
        return None

    total = items[0]
    for i in range(1, len(items), 2):
        total = apply_op(total, items[i], items[i + 1])
        if total is None:
            return None
    return total


def split_parts(tokens: Sequence[Token]) -> List[List[Token]]:
    parts: List[List[Token]] = [[]]
    for token in tokens:
        if token == EQUALS:
            parts.append([])
        else:
            parts[-1].append(token)
    return parts


def check_line(cells: Sequence[Cell]) -> LineCheck:
    """Check every ``=``-separated part of a line evaluates to the same value.

    ``has`` is False when the line holds no complete equation or nothing to
    evaluate yet; ``ok`` is only meaningful when ``has`` is True.
    """
    parts = split_parts([cell_token(cell) for cell in cells])
    if len(parts) < 2:
        return LineCheck(has=False, ok=True)

    results = [evaluate_part(part) for part in parts]
    if all(result is None for result in results):
        return LineCheck(has=False, ok=True)
    if any(result is None for result in results):
        return LineCheck(has=True, ok=False)

    first = results[0]
    return LineCheck(
        has=True,
        ok=all(abs(result - first) < LINE_TOLERANCE for result in results),
    )
