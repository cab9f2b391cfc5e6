"""Random placement of equation segments on a bounded grid.

Each segment gets a fixed number of random anchor draws. The first draw
that passes every conflict rule is committed; if none does, the whole
placement is abandoned and the caller restarts from scratch.
"""

from __future__ import annotations

from collections import Counter
from typing import Dict, List, Optional

from ..core.constants import PLACEMENT_ATTEMPTS, SEGMENT_LENGTH, CellKind, Orientation
from ..core.models import CellMeta, Placement, Position, Segment
from ..utils.logger import get_logger
from .prng import XorShift32


LOGGER = get_logger(__name__)

_ORIENTATIONS = [Orientation.HORIZONTAL, Orientation.VERTICAL]


def random_segment(max_grid: int, rng: XorShift32) -> Segment:
    """Draw an orientation and an anchor that keeps the segment inside the grid.

    Vertical segments start on an even row and horizontal ones on an even
    column, so numeric cells of crossing segments line up on the same lattice.
    """
    orientation = rng.choice(_ORIENTATIONS)
    vertical = orientation == Orientation.VERTICAL
    row = rng.randint(0, max_grid - (SEGMENT_LENGTH if vertical else 1))
    col = rng.randint(0, max_grid - (1 if vertical else SEGMENT_LENGTH))
    if vertical:
        row -= row % 2
    else:
        col -= col % 2
    return Segment(orientation=orientation, row=row, col=col)


def find_conflict(
    cells: Dict[Position, CellMeta],
    segments: List[Segment],
    candidate: Segment,
) -> Optional[str]:
    """Return why ``candidate`` cannot join the placement, or ``None`` if it can."""

    for pos in (candidate.operator_position, candidate.equals_position):
        if pos in cells:
            return f"symbol cell {pos} already occupied"

    shared = 0
    shared_per_segment: Counter = Counter()
    for pos in candidate.numeric_positions:
        meta = cells.get(pos)
        if meta is None:
            continue
        if meta.kind != CellKind.NUMERIC:
            return f"numeric cell {pos} lands on a {meta.kind.value.lower()} cell"
        if any(segments[index].orientation == candidate.orientation for index in meta.segments):
            return f"numeric cell {pos} already used by a parallel segment"
        shared += 1
        shared_per_segment.update(meta.segments)

    if segments and shared == 0:
        return "segment is not connected to the placement"
    if any(count > 1 for count in shared_per_segment.values()):
        return "segment overlaps another segment on more than one numeric cell"

    for placed in segments:
        if placed.orientation != candidate.orientation:
            continue
        if candidate.orientation == Orientation.HORIZONTAL and placed.row == candidate.row:
            return f"row {candidate.row} already holds a horizontal segment"
        if candidate.orientation == Orientation.VERTICAL and placed.col == candidate.col:
            return f"column {candidate.col} already holds a vertical segment"
    return None


def _commit(cells: Dict[Position, CellMeta], index: int, segment: Segment) -> None:
    for pos, kind in (
        (segment.operator_position, CellKind.OPERATOR),
        (segment.equals_position, CellKind.EQUALS),
    ):
        cells.setdefault(pos, CellMeta(kind=kind)).segments.append(index)
    for pos in segment.numeric_positions:
        cells.setdefault(pos, CellMeta(kind=CellKind.NUMERIC)).segments.append(index)


def place_segments(
    count: int,
    max_grid: int,
    rng: XorShift32,
    attempts: int = PLACEMENT_ATTEMPTS,
) -> Optional[Placement]:
    """Place ``count`` connected segments inside a ``max_grid`` square.

    Returns ``None`` when ``count`` is not positive or some segment exhausts
    its attempts.
    """
    if max_grid < SEGMENT_LENGTH:
        LOGGER.debug("Grid size %s cannot fit a %s-cell segment", max_grid, SEGMENT_LENGTH)
        return None
    if count < 1:
        LOGGER.debug("Nothing to place for a count of %s", count)
        return None

    cells: Dict[Position, CellMeta] = {}
    segments: List[Segment] = []

    for index in range(count):
        placed = False
        for _ in range(attempts):
            candidate = random_segment(max_grid, rng)
            reason = find_conflict(cells, segments, candidate)
            if reason is not None:
                continue
            _commit(cells, index, candidate)
            segments.append(candidate)
            placed = True
            break
        if not placed:
            LOGGER.debug(
                "Segment %s/%s not placed after %s attempts", index + 1, count, attempts
            )
            return None

    LOGGER.debug("Placed %s segments over %s cells", len(segments), len(cells))
    return Placement(cells=cells, segments=segments)
