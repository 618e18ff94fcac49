"""
Bounded drunkard's walk.

The walker starts away from the border, then repeatedly picks a cardinal
direction different from its previous one and moves 1..R-1 cells. Moves that
would leave the grid bounce: the offending axis is negated instead of being
clamped. Every visit increments the cell weight and consecutive cells are
connected in the grid's adjacency graph.
"""

from enum import IntEnum
from typing import List, NamedTuple, Optional, Tuple, Union

import structlog

from .alea_prng import AleaPRNG
from .exceptions import AlgorithmInvariantViolation, ConfigurationError
from .grid import Cell, Coord, Grid

logger = structlog.get_logger()

# Start positions are drawn from [START_MARGIN, dimension - START_MARGIN - 1)
START_MARGIN = 5
MIN_WALK_DIMENSION = 2 * START_MARGIN + 2


class Direction(IntEnum):
    """Cardinal step directions in draw order."""

    UP = 0
    RIGHT = 1
    DOWN = 2
    LEFT = 3

    def displacement(self, distance: int) -> Tuple[int, int]:
        """(dx, dy) for a move of ``distance`` cells."""
        if self is Direction.UP:
            return (0, distance)
        if self is Direction.RIGHT:
            return (distance, 0)
        if self is Direction.DOWN:
            return (0, -distance)
        return (-distance, 0)


class WalkStep(NamedTuple):
    """Record of one call to ``RandomWalk.step``."""

    direction: Direction
    distance: int
    raw_displacement: Tuple[int, int]
    displacement: Tuple[int, int]
    origin: Coord
    position: Coord

    @property
    def reflected(self) -> bool:
        return self.raw_displacement != self.displacement


class RandomWalk:
    """Carves one connected, weighted path across a grid."""

    def __init__(
        self,
        grid: Grid,
        seed: Union[str, int, None] = None,
        step_range: int = 5,
        prng: Optional[AleaPRNG] = None,
    ):
        """
        Initialize the walker and record the first visit.

        Args:
            grid: Grid to mutate in place
            seed: Seed for a private PRNG; ignored when ``prng`` is given
            step_range: Exclusive upper bound of the per-step distance
            prng: Shared generator, so callers can chain further draws
        """
        if grid.dimension < MIN_WALK_DIMENSION:
            raise ConfigurationError(
                f"Grid dimension {grid.dimension} leaves no room for the "
                f"{START_MARGIN}-cell start margin (need >= {MIN_WALK_DIMENSION})"
            )
        if step_range < 2:
            raise ConfigurationError(f"step_range must be >= 2, got {step_range}")
        if prng is None:
            if seed is None:
                raise ConfigurationError("RandomWalk needs a seed or a PRNG")
            prng = AleaPRNG(seed)

        self.grid = grid
        self.step_range = step_range
        self._prng = prng

        upper = grid.dimension - START_MARGIN - 1
        start_x = self._prng.randrange(START_MARGIN, upper)
        start_y = self._prng.randrange(START_MARGIN, upper)
        self.start: Coord = (start_x, start_y)
        self.current: Coord = self.start
        self.grid.increment_weight(start_x, start_y)

        self.last_direction = Direction(self._prng.randrange(0, 4))
        self.history: List[WalkStep] = []
        self._path: List[Coord] = []

        logger.debug(
            "Random walk started",
            start=self.start,
            direction=self.last_direction.name,
            step_range=step_range,
        )

    def _next_direction(self) -> Direction:
        # No cap on redraws: one of four directions is excluded
        direction = Direction(self._prng.randrange(0, 4))
        while direction == self.last_direction:
            direction = Direction(self._prng.randrange(0, 4))
        return direction

    def step(self) -> WalkStep:
        """Advance the walker by one bounded move."""
        direction = self._next_direction()
        distance = self._prng.randrange(1, self.step_range)

        raw_dx, raw_dy = direction.displacement(distance)
        x, y = self.current
        dx, dy = raw_dx, raw_dy

        # Bounce off the border on the offending axis
        if not 0 <= x + dx < self.grid.dimension:
            dx = -dx
        if not 0 <= y + dy < self.grid.dimension:
            dy = -dy

        new_position = (x + dx, y + dy)
        if not self.grid.in_bounds(*new_position):
            raise AlgorithmInvariantViolation(
                f"Reflected step from {self.current} by {(dx, dy)} left the grid"
            )

        previous = self.current
        self.current = new_position
        self._path.append(new_position)
        self.grid.increment_weight(*new_position)
        self.grid.connect(previous, new_position)
        self.last_direction = direction

        record = WalkStep(
            direction=direction,
            distance=distance,
            raw_displacement=(raw_dx, raw_dy),
            displacement=(dx, dy),
            origin=previous,
            position=new_position,
        )
        if record.reflected:
            logger.debug("Walk bounced off border", origin=previous, raw=record.raw_displacement)
        self.history.append(record)
        return record

    def walk(self, steps: int) -> List[WalkStep]:
        """Take ``steps`` consecutive steps."""
        return [self.step() for _ in range(steps)]

    def return_steps(self) -> Grid:
        """The mutated grid."""
        return self.grid

    def return_path(self) -> List[Cell]:
        """Visited cells in visitation order, excluding the start cell."""
        return [self.grid.get(x, y) for x, y in self._path]

    @property
    def path_coordinates(self) -> List[Coord]:
        return list(self._path)
