"""Custom exception hierarchy for level generation.

Search exhaustion and incomplete submissions are reported as ``None`` by
the engine; exceptions are reserved for malformed external input.
"""


class CrossMathError(Exception):
    """Base exception for the package."""


class LevelFormatError(CrossMathError):
    """Raised when a serialized level cannot be decoded."""


class GenerationError(CrossMathError):
    """Raised when no level could be produced, not even the fallback."""
