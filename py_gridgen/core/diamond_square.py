"""
Diamond-square height synthesis.

Produces a fractal elevation field with the same dimensions as a grid. The
jitter amplitude stays at ``roughness / 4`` for every subdivision round, and
the square pass counts neighbors that fall outside the field as 0 while
still dividing by four. Both choices are kept so seeded output stays stable.
"""

from typing import Optional, Union

import numpy as np
import structlog

from .alea_prng import AleaPRNG
from .exceptions import AlgorithmInvariantViolation, ConfigurationError
from .grid import Grid

logger = structlog.get_logger()


def is_power_of_two(value: int) -> bool:
    return value > 0 and (value & (value - 1)) == 0


class DiamondSquare:
    """Midpoint-displacement height field generator."""

    def __init__(
        self,
        grid: Grid,
        roughness: float = 5.0,
        seed: Union[str, int, None] = None,
        prng: Optional[AleaPRNG] = None,
    ):
        """
        Copy the grid's elevations and re-randomize the four corners.

        Args:
            grid: Source grid, read for its current elevations
            roughness: Corner amplitude; per-round jitter is a quarter of it
            seed: Seed for a private PRNG; ignored when ``prng`` is given
            prng: Shared generator
        """
        if prng is None:
            if seed is None:
                raise ConfigurationError("DiamondSquare needs a seed or a PRNG")
            prng = AleaPRNG(seed)
        if not is_power_of_two(grid.dimension - 1):
            raise ConfigurationError(
                f"Height synthesis needs a 2^n+1 dimension, got {grid.dimension}"
            )
        self._prng = prng
        self.roughness = float(roughness)
        self.dimension = grid.dimension

        self.height_map = grid.elevations()

        last = self.dimension - 1
        for x, y in ((0, 0), (0, last), (last, 0), (last, last)):
            self.height_map[x, y] = self._prng.uniform(-self.roughness, self.roughness)

    def _jitter(self) -> float:
        amplitude = self.roughness / 4
        return self._prng.uniform(-amplitude, amplitude)

    def _write(self, x: int, y: int, value: float) -> None:
        if not (0 <= x < self.dimension and 0 <= y < self.dimension):
            raise AlgorithmInvariantViolation(
                f"Height write at ({x}, {y}) outside {self.dimension}x{self.dimension} field"
            )
        self.height_map[x, y] = value

    def _read_or_zero(self, x: int, y: int) -> float:
        if 0 <= x < self.dimension and 0 <= y < self.dimension:
            return float(self.height_map[x, y])
        return 0.0

    def generate_height_map(self, start_step_size: Optional[int] = None) -> np.ndarray:
        """
        Run diamond and square passes, halving the step each round.

        Args:
            start_step_size: Initial cell size, ``dimension - 1`` by default

        Returns:
            The synthesized height field
        """
        if start_step_size is None:
            start_step_size = self.dimension - 1
        if not is_power_of_two(start_step_size) or start_step_size > self.dimension - 1:
            raise ConfigurationError(
                f"start_step_size {start_step_size} must be a power of two "
                f"no larger than {self.dimension - 1}"
            )

        step_size = start_step_size
        rounds = 0
        while step_size > 1:
            half_step = step_size // 2

            for x in range(0, self.dimension - 1, step_size):
                for y in range(0, self.dimension - 1, step_size):
                    self._diamond_step(x, y, step_size, self._jitter())

            for x in range(0, self.dimension, half_step):
                for y in range(0, self.dimension, half_step):
                    self._square_step(x, y, half_step, self._jitter())

            step_size //= 2
            rounds += 1

        logger.debug(
            "Height map synthesized",
            dimension=self.dimension,
            rounds=rounds,
            min_height=float(self.height_map.min()),
            max_height=float(self.height_map.max()),
        )
        return self.height_map

    def _diamond_step(self, x: int, y: int, step_size: int, offset: float) -> None:
        """Set the midpoint of the square whose top-left corner is (x, y)."""
        h = self.height_map
        average = (
            h[x, y] + h[x + step_size, y] + h[x, y + step_size] + h[x + step_size, y + step_size]
        ) / 4
        half = step_size // 2
        self._write(x + half, y + half, float(average) + offset)

    def _square_step(self, x: int, y: int, half_step: int, offset: float) -> None:
        """Set (x, y) from its four axis neighbors at ``half_step``."""
        left = self._read_or_zero(x - half_step, y)
        right = self._read_or_zero(x + half_step, y)
        up = self._read_or_zero(x, y - half_step)
        down = self._read_or_zero(x, y + half_step)
        self._write(x, y, (left + right + up + down) / 4 + offset)

    def return_height_map(self) -> np.ndarray:
        """The current height field, shape ``(dimension, dimension)``."""
        return self.height_map
