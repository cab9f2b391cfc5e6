"""Arithmetic crossword level generator and solution checker.

This package exposes the public API surface via:

- ``crossmath.engine.generator.generate_level``: deterministic level generation.
- ``crossmath.engine.validator.validate_grid``: checks a player's filled grid.
- ``crossmath.engine.checker.check_line``: evaluates one chained equation line.
"""

from .core.models import BlankCell, FixedCell, LevelDescriptor
from .engine.checker import LineCheck, check_line
from .engine.generator import LayoutConfig, generate_layout, generate_level
from .engine.prng import XorShift32
from .engine.validator import validate_grid

__all__ = [
    "BlankCell",
    "FixedCell",
    "LayoutConfig",
    "LevelDescriptor",
    "LineCheck",
    "XorShift32",
    "check_line",
    "generate_layout",
    "generate_level",
    "validate_grid",
]

__version__ = "0.1.0"
