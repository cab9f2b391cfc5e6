"""Randomized constraint solver assigning values and operators to a placement."""

from __future__ import annotations

import math
from typing import Dict, List, Optional, Sequence

from ..core.constants import (FREE_VALUE_MAX, FREE_VALUE_MIN, MIN_DISTINCT_RATIO,
                              RESULT_VALUE_MAX, RESULT_VALUE_MIN, SOLVER_ATTEMPTS, Operator)
from ..core.models import Placement, Position, Segment, Solution
from ..utils.logger import get_logger
from .arithmetic import apply_op
from .prng import XorShift32

LOGGER = get_logger(__name__)


def evaluation_order(segments: Sequence[Segment]) -> List[int]:
    """Order segment indices so every chained operand is computed first.

    Segment ``j`` depends on segment ``i`` when ``i``'s result cell is one of
    ``j``'s operand cells. The traversal is a depth-first post-order driven
    by an explicit stack.
    """
    result_of: Dict[Position, int] = {}
    for index, segment in enumerate(segments):
        result_of[segment.result_position] = index

    deps: List[List[int]] = []
    for segment in segments:
        left, right, _ = segment.numeric_positions
        deps.append([result_of[pos] for pos in (left, right) if pos in result_of])

    order: List[int] = []
    seen = set()
    for root in range(len(segments)):
        if root in seen:
            continue
        seen.add(root)
        stack = [(root, iter(deps[root]))]
        while stack:
            node, pending = stack[-1]
            for dep in pending:
                if dep not in seen:
                    seen.add(dep)
                    stack.append((dep, iter(deps[dep])))
                    break
            else:
                stack.pop()
                order.append(node)
    return order


def _equations_hold(segments: Sequence[Segment], values: Dict[Position, int],
                    operators: Sequence[Operator]) -> bool:
    for segment, op in zip(segments, operators):
        left, right, result = (values[pos] for pos in segment.numeric_positions)
        if apply_op(left, op, right) != result:
            return False
    return True


def has_enough_diversity(values: Sequence[int]) -> bool:
    """At least half of the numeric cells must carry distinct values."""
    return len(set(values)) >= math.ceil(len(values) * MIN_DISTINCT_RATIO)


def solve_constraints(
    placement: Placement,
    operators: Sequence[Operator],
    rng: XorShift32,
    attempts: int = SOLVER_ATTEMPTS,
) -> Optional[Solution]:
    """Assign an operator per segment and a value per numeric cell.

    Each attempt starts from scratch. Returns ``None`` once ``attempts`` are
    exhausted.
    """
    if not operators:
        LOGGER.warning("Empty operator pool; nothing to solve with")
        return None

    segments = placement.segments
    numeric = placement.numeric_positions()
    result_cells = {segment.result_position for segment in segments}
    free_cells = [pos for pos in numeric if pos not in result_cells]
    order = evaluation_order(segments)
    pool = list(operators)

    for attempt in range(attempts):
        ops = [rng.choice(pool) for _ in segments]
        values: Dict[Position, int] = {}
        for pos in free_cells:
            values[pos] = rng.randint(FREE_VALUE_MIN, FREE_VALUE_MAX)

        consistent = True
        for index in order:
            left, right, result = segments[index].numeric_positions
            if left not in values:
                values[left] = rng.randint(FREE_VALUE_MIN, FREE_VALUE_MAX)
            if right not in values:
                values[right] = rng.randint(FREE_VALUE_MIN, FREE_VALUE_MAX)

            value = apply_op(values[left], ops[index], values[right])
            if value is None or not RESULT_VALUE_MIN <= value <= RESULT_VALUE_MAX:
                consistent = False
                break
            if result in values and values[result] != value:
                consistent = False
                break
            values[result] = value
        if not consistent:
            continue

        if not _equations_hold(segments, values, ops):
            continue
        if not has_enough_diversity([values[pos] for pos in numeric]):
            continue

        LOGGER.debug("Solved %s segments on attempt %s", len(segments), attempt + 1)
        return Solution(values=values, operators=ops)

    LOGGER.debug("Constraint solving exhausted %s attempts", attempts)
    return None
