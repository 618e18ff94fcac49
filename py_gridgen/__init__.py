"""
py-gridgen: drunkard's-walk grid maps with diamond-square elevation.
"""

from .core import (
    AlgorithmInvariantViolation,
    Cell,
    CellType,
    ConfigurationError,
    GeneratorConfig,
    Grid,
    GridGenerator,
    generate,
)

__version__ = "0.1.0"

__all__ = [
    "AlgorithmInvariantViolation",
    "Cell",
    "CellType",
    "ConfigurationError",
    "GeneratorConfig",
    "Grid",
    "GridGenerator",
    "generate",
]
