"""Exceptions raised by grid generation."""


class GridGenError(Exception):
    """Base exception for grid generation."""


class ConfigurationError(GridGenError, ValueError):
    """Raised when generation parameters cannot produce a valid grid."""


class AlgorithmInvariantViolation(GridGenError, AssertionError):
    """Raised when a generator computes a position outside the grid.

    This signals a defect, not a recoverable condition, and is never caught
    inside the package.
    """
