"""
Grid generation pipeline.

Resets the grid, carves the random walk, optionally synthesizes and merges
elevation, and optionally tags start and end cells. One seeded PRNG feeds
every stage in that order.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional, Union

import structlog

from ..utils.random import create_prng, resolve_seed
from .alea_prng import AleaPRNG
from .diamond_square import DiamondSquare, is_power_of_two
from .exceptions import ConfigurationError
from .grid import CellType, Coord, Grid, reset_grid
from .random_walk import MIN_WALK_DIMENSION, RandomWalk

if TYPE_CHECKING:
    from ..config.settings import Settings

logger = structlog.get_logger()


@dataclass
class GeneratorConfig:
    """Parameters for one generation pass."""

    dimension: int = 33
    steps: int = 25
    step_range: int = 5
    scale: float = 1.0  # rendering only
    use_random_seed: bool = True
    seed: Optional[Union[str, int]] = None
    generate_elevation: bool = True
    roughness: float = 5.0
    mark_endpoints: bool = False

    @classmethod
    def from_settings(cls, settings: "Settings") -> "GeneratorConfig":
        """Build a config from the environment-driven settings."""
        return cls(
            dimension=settings.default_dimension,
            steps=settings.default_steps,
            step_range=settings.default_step_range,
            scale=settings.default_scale,
            use_random_seed=settings.use_random_seed,
            seed=settings.default_seed,
            generate_elevation=settings.generate_elevation,
            roughness=settings.default_roughness,
            mark_endpoints=settings.mark_endpoints,
        )

    def validate(self) -> None:
        """Raise ConfigurationError if this config cannot produce a grid."""
        problems = []
        for name in ("dimension", "steps", "step_range"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                problems.append(f"{name} must be an integer, got {value!r}")
        if problems:
            logger.error("Invalid generator configuration", problems=problems)
            raise ConfigurationError("; ".join(problems))

        if self.dimension < 3 or not is_power_of_two(self.dimension - 1):
            problems.append(f"dimension must be 2^n+1 (5, 9, 17, 33, ...), got {self.dimension}")
        if self.dimension < MIN_WALK_DIMENSION:
            problems.append(
                f"dimension must be at least {MIN_WALK_DIMENSION} for the walk start margin"
            )
        if self.steps < 0:
            problems.append(f"steps must be >= 0, got {self.steps}")
        if self.step_range < 2:
            problems.append(f"step_range must be >= 2, got {self.step_range}")
        elif self.step_range - 1 > (self.dimension - 1) // 2:
            problems.append(
                f"step_range {self.step_range} allows steps longer than "
                f"{(self.dimension - 1) // 2} cells; the limit keeps a single "
                f"bounce off the border inside the grid"
            )
        if self.roughness < 0:
            problems.append(f"roughness must be >= 0, got {self.roughness}")
        if not self.use_random_seed and self.seed is None:
            problems.append("seed is required when use_random_seed is False")

        if problems:
            logger.error("Invalid generator configuration", problems=problems)
            raise ConfigurationError("; ".join(problems))


class GridGenerator:
    """
    Owns a configuration and produces a fresh grid on every ``generate`` call.

    Regeneration simply calls ``generate`` again; no state carries over
    between calls apart from the last result kept for inspection.
    """

    def __init__(self, config: Optional[GeneratorConfig] = None):
        self.config = config or GeneratorConfig()
        self.grid: Optional[Grid] = None
        self.path: List[Coord] = []
        self.seed: Optional[Union[str, int]] = self.config.seed

    def generate(self) -> Grid:
        """
        Run one full generation pass.

        Returns:
            The finished grid, with the walk path attached as ``grid.path``
        """
        config = self.config
        config.validate()

        seed = resolve_seed(config.use_random_seed, config.seed)
        self.seed = seed
        prng = create_prng(seed)

        logger.info(
            "Generating grid",
            dimension=config.dimension,
            steps=config.steps,
            step_range=config.step_range,
            seed=seed,
        )

        grid = reset_grid(config.dimension, config.scale)

        walk = RandomWalk(grid, step_range=config.step_range, prng=prng)
        for _ in range(config.steps):
            walk.step()

        grid = walk.return_steps()
        path = walk.path_coordinates

        if config.generate_elevation:
            synthesizer = DiamondSquare(grid, config.roughness, prng=prng)
            height_map = synthesizer.generate_height_map(config.dimension - 1)
            # Path entries are coordinates into the grid, so they see the same elevations
            grid.apply_elevations(height_map)

        if config.mark_endpoints:
            self._mark_endpoints(grid, prng)

        grid.path = path
        self.grid = grid
        self.path = path

        logger.info(
            "Grid generated",
            seed=seed,
            visited_cells=len(grid.visited_cells()),
            edges=grid.edge_count(),
            total_weight=grid.total_weight(),
            prng_calls=prng.call_count,
        )
        return grid

    def regenerate(self) -> Grid:
        """Discard the previous grid and build a new one."""
        self.grid = None
        self.path = []
        return self.generate()

    @staticmethod
    def _mark_endpoints(grid: Grid, prng: AleaPRNG) -> None:
        # Any cell may be chosen; a repeated cell ends up tagged END
        for cell_type in (CellType.START, CellType.END):
            x = prng.randrange(0, grid.dimension)
            y = prng.randrange(0, grid.dimension)
            grid.mark(x, y, cell_type)
            logger.debug("Marked endpoint", cell_type=cell_type.name, position=(x, y))


def generate(config: Optional[GeneratorConfig] = None) -> Grid:
    """Generate a grid for ``config`` (defaults when omitted)."""
    return GridGenerator(config).generate()
