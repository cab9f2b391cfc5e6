"""Shared constants and enumerations for the arithmetic crossword."""

from __future__ import annotations

from enum import Enum
from typing import Tuple


class Difficulty(str, Enum):
    """Difficulty labels attached to generated levels."""

    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"
    EXPERT = "Expert"


class Operator(str, Enum):
    """Binary operators, valued by the symbol shown in the grid."""

    ADD = "+"
    SUBTRACT = "−"
    MULTIPLY = "×"
    DIVIDE = "÷"


class Orientation(str, Enum):
    """Segment orientations supported by the layout."""

    HORIZONTAL = "H"
    VERTICAL = "V"


class CellKind(str, Enum):
    """Kinds of cells a segment occupies."""

    NUMERIC = "NUMERIC"
    OPERATOR = "OPERATOR"
    EQUALS = "EQUALS"


class CellStatus(str, Enum):
    """Check outcome attached to a blank cell after validation."""

    OK = "ok"
    BAD = "bad"


EQUALS = "="

# A segment is num-op-num-eq-num; numeric roles sit at these offsets.
SEGMENT_LENGTH = 5
NUMERIC_OFFSETS: Tuple[int, ...] = (0, 2, 4)
OPERATOR_OFFSET = 1
EQUALS_OFFSET = 3

FREE_VALUE_MIN = 1
FREE_VALUE_MAX = 9
RESULT_VALUE_MIN = 1
RESULT_VALUE_MAX = 81
MIN_DISTINCT_RATIO = 0.5
MIN_BLANKS = 2
LINE_TOLERANCE = 1e-4

PLACEMENT_ATTEMPTS = 500
SOLVER_ATTEMPTS = 4000
LAYOUT_ATTEMPTS = 200
