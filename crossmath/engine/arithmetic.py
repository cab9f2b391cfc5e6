"""Exact integer arithmetic for equation cells."""

from __future__ import annotations

from typing import Optional

from ..core.constants import Operator


def apply_op(a: int, op: Operator, b: int) -> Optional[int]:
    """Apply ``op`` to ``a`` and ``b``.

    Returns ``None`` when division is by zero or leaves a remainder; callers
    treat that as a rejected candidate rather than an error.
    """
    if op == Operator.ADD:
        return a + b
    if op == Operator.SUBTRACT:
        return a - b
    if op == Operator.MULTIPLY:
        return a * b
    if op == Operator.DIVIDE:
        if b == 0 or a % b != 0:
            return None
        return a // b
    return None
