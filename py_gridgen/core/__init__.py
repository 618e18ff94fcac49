"""
Core grid generation functionality.
"""

from .alea_prng import AleaPRNG
from .diamond_square import DiamondSquare
from .exceptions import AlgorithmInvariantViolation, ConfigurationError, GridGenError
from .generator import GeneratorConfig, GridGenerator, generate
from .grid import Cell, CellType, Grid, reset_grid
from .random_walk import Direction, RandomWalk, WalkStep

__all__ = ['AleaPRNG', 'DiamondSquare', 'AlgorithmInvariantViolation', 'ConfigurationError',
           'GridGenError', 'GeneratorConfig', 'GridGenerator', 'generate',
           'Cell', 'CellType', 'Grid', 'reset_grid', 'Direction', 'RandomWalk', 'WalkStep']
