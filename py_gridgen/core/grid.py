"""
Grid data model for walk-carved maps.

A ``Grid`` is a dense ``dimension x dimension`` array of ``Cell`` objects.
Adjacency is stored by coordinate: each cell keeps the ``(x, y)`` pairs of
the cells it was connected to, and the grid resolves them to live cells.
"""

from enum import IntEnum
from typing import Iterator, List, Set, Tuple

import numpy as np
import structlog

from .exceptions import AlgorithmInvariantViolation

logger = structlog.get_logger()

Coord = Tuple[int, int]


class CellType(IntEnum):
    """Type tag for downstream visualization and gameplay."""

    EMPTY = 0
    START = 1
    END = 2


class Cell:
    """One grid position.

    ``x`` and ``y`` are fixed at creation; everything else is mutable state
    written by the generators.
    """

    __slots__ = ("_x", "_y", "elevation", "visit_weight", "cell_type", "neighbors")

    def __init__(self, x: int, y: int) -> None:
        self._x = int(x)
        self._y = int(y)
        self.elevation = 0.0
        self.visit_weight = 0
        self.cell_type = CellType.EMPTY
        self.neighbors: Set[Coord] = set()

    @property
    def x(self) -> int:
        return self._x

    @property
    def y(self) -> int:
        return self._y

    @property
    def position(self) -> Coord:
        return (self._x, self._y)

    @property
    def visited(self) -> bool:
        return self.visit_weight > 0

    def __repr__(self) -> str:
        return (
            f"Cell(x={self._x}, y={self._y}, weight={self.visit_weight}, "
            f"elevation={self.elevation:.3f}, type={self.cell_type.name})"
        )


class Grid:
    """Square grid of cells addressed as ``(x, y)``."""

    def __init__(self, dimension: int, scale: float = 1.0) -> None:
        if dimension <= 0:
            raise ValueError("Grid dimension must be positive")
        self.dimension = int(dimension)
        self.scale = float(scale)
        # cells[x][y]
        self._cells: List[List[Cell]] = [
            [Cell(x, y) for y in range(self.dimension)] for x in range(self.dimension)
        ]
        self.path: List[Coord] = []

    @property
    def shape(self) -> Tuple[int, int]:
        return (self.dimension, self.dimension)

    def in_bounds(self, x: int, y: int) -> bool:
        """Check if coordinates are within the grid."""
        return 0 <= x < self.dimension and 0 <= y < self.dimension

    def _require(self, x: int, y: int) -> None:
        if not self.in_bounds(x, y):
            raise AlgorithmInvariantViolation(
                f"({x}, {y}) is outside a {self.dimension}x{self.dimension} grid"
            )

    def get(self, x: int, y: int) -> Cell:
        """Return the live cell at (x, y)."""
        self._require(x, y)
        return self._cells[x][y]

    def set(self, x: int, y: int, cell: Cell) -> None:
        """Replace the cell stored at (x, y).

        The cell must carry the same coordinates it is stored under.
        """
        self._require(x, y)
        if cell.position != (x, y):
            raise ValueError(f"Cell at {cell.position} cannot be stored at {(x, y)}")
        self._cells[x][y] = cell

    def __iter__(self) -> Iterator[Cell]:
        for column in self._cells:
            yield from column

    def __len__(self) -> int:
        return self.dimension * self.dimension

    def increment_weight(self, x: int, y: int) -> int:
        """Record one visit to (x, y) and return the new weight."""
        cell = self.get(x, y)
        cell.visit_weight += 1
        return cell.visit_weight

    def connect(self, a: Coord, b: Coord) -> bool:
        """
        Add an undirected edge between two cells.

        The edge is skipped when ``a`` is already a neighbor of ``b``.

        Returns:
            True if a new edge was recorded
        """
        cell_a = self.get(*a)
        cell_b = self.get(*b)
        if cell_a.position in cell_b.neighbors:
            return False
        cell_b.neighbors.add(cell_a.position)
        cell_a.neighbors.add(cell_b.position)
        return True

    def neighbors_of(self, x: int, y: int) -> List[Cell]:
        """Resolve the neighbor coordinates of (x, y) to live cells."""
        return [self.get(nx, ny) for nx, ny in sorted(self.get(x, y).neighbors)]

    def mark(self, x: int, y: int, cell_type: CellType) -> None:
        """Set the type tag of (x, y)."""
        self.get(x, y).cell_type = cell_type

    def find_cells(self, cell_type: CellType) -> List[Cell]:
        return [cell for cell in self if cell.cell_type == cell_type]

    def visited_cells(self) -> List[Cell]:
        return [cell for cell in self if cell.visited]

    def total_weight(self) -> int:
        return sum(cell.visit_weight for cell in self)

    def edge_count(self) -> int:
        """Number of undirected edges in the adjacency graph."""
        return sum(len(cell.neighbors) for cell in self) // 2

    def path_cells(self) -> List[Cell]:
        """Resolve the stored path to live cells, in visitation order."""
        return [self.get(x, y) for x, y in self.path]

    def weights(self) -> np.ndarray:
        """Visit weights as an int array indexed ``[x, y]``."""
        weights = np.zeros(self.shape, dtype=np.int64)
        for cell in self:
            weights[cell.x, cell.y] = cell.visit_weight
        return weights

    def elevations(self) -> np.ndarray:
        """Elevations as a float array indexed ``[x, y]``."""
        heights = np.zeros(self.shape, dtype=np.float64)
        for cell in self:
            heights[cell.x, cell.y] = cell.elevation
        return heights

    def apply_elevations(self, height_map: np.ndarray) -> None:
        """Copy a height field of matching shape into every cell."""
        height_map = np.asarray(height_map)
        if height_map.shape != self.shape:
            raise AlgorithmInvariantViolation(
                f"Height map shape {height_map.shape} does not match grid {self.shape}"
            )
        for cell in self:
            cell.elevation = float(height_map[cell.x, cell.y])

    def world_position(
        self, x: int, y: int, centered: bool = True
    ) -> Tuple[float, float, float]:
        """
        Position of a cell in render space.

        The horizontal plane is (x, z); the cell's elevation is the vertical
        component. When ``centered`` the grid is shifted so its middle cell
        sits at the origin. All components are multiplied by ``scale``.
        """
        cell = self.get(x, y)
        offset = self.dimension // 2 if centered else 0
        return (
            (cell.x - offset) * self.scale,
            cell.elevation * self.scale,
            (cell.y - offset) * self.scale,
        )


def reset_grid(dimension: int, scale: float = 1.0) -> Grid:
    """Allocate a fresh grid with every cell at its defaults."""
    logger.debug("Resetting grid", dimension=dimension, scale=scale)
    return Grid(dimension, scale)

