"""Tests for the grid data model."""

import pytest
import numpy as np
from py_gridgen.core.exceptions import AlgorithmInvariantViolation
from py_gridgen.core.grid import Cell, CellType, Grid, reset_grid


class TestReset:
    """Test grid allocation."""

    def test_defaults(self):
        """Test that every cell starts empty."""
        grid = reset_grid(5, scale=2.0)

        assert grid.dimension == 5
        assert grid.scale == 2.0
        assert len(grid) == 25
        for cell in grid:
            assert cell.visit_weight == 0
            assert cell.elevation == 0.0
            assert cell.cell_type == CellType.EMPTY
            assert cell.neighbors == set()
        assert grid.path == []

    def test_cells_on_lattice(self):
        """Test that cells sit at their integer coordinates."""
        grid = reset_grid(5)
        positions = {cell.position for cell in grid}
        assert positions == {(x, y) for x in range(5) for y in range(5)}
        assert grid.get(3, 1).x == 3
        assert grid.get(3, 1).y == 1

    def test_reset_is_fresh(self):
        """Test that resetting never reuses cells."""
        first = reset_grid(5)
        first.increment_weight(2, 2)
        second = reset_grid(5)
        assert second.get(2, 2).visit_weight == 0
        assert second.get(2, 2) is not first.get(2, 2)


class TestCell:
    """Test cell behavior."""

    def test_coordinates_read_only(self):
        """Test that coordinates cannot be reassigned."""
        cell = Cell(1, 2)
        with pytest.raises(AttributeError):
            cell.x = 5

    def test_visited(self):
        """Test the visited flag follows the weight."""
        cell = Cell(0, 0)
        assert not cell.visited
        cell.visit_weight = 1
        assert cell.visited


class TestGridAccess:
    """Test explicit index-based access."""

    def test_out_of_bounds(self):
        """Test that reads outside the grid are invariant violations."""
        grid = reset_grid(5)
        with pytest.raises(AlgorithmInvariantViolation):
            grid.get(5, 0)
        with pytest.raises(AlgorithmInvariantViolation):
            grid.get(0, -1)

    def test_set_replaces_cell(self):
        """Test storing a new cell at its own coordinates."""
        grid = reset_grid(5)
        cell = Cell(1, 1)
        cell.elevation = 3.5
        grid.set(1, 1, cell)
        assert grid.get(1, 1) is cell

    def test_set_rejects_mismatched_coordinates(self):
        """Test that a cell cannot be stored under another position."""
        grid = reset_grid(5)
        with pytest.raises(ValueError):
            grid.set(1, 1, Cell(2, 2))

    def test_increment_weight(self):
        """Test weight increments."""
        grid = reset_grid(5)
        assert grid.increment_weight(1, 3) == 1
        assert grid.increment_weight(1, 3) == 2
        assert grid.total_weight() == 2
        assert [c.position for c in grid.visited_cells()] == [(1, 3)]


class TestAdjacency:
    """Test coordinate-based adjacency."""

    def test_connect_is_undirected(self):
        """Test that an edge is recorded on both cells."""
        grid = reset_grid(5)
        assert grid.connect((1, 1), (1, 3))
        assert (1, 3) in grid.get(1, 1).neighbors
        assert (1, 1) in grid.get(1, 3).neighbors
        assert grid.edge_count() == 1

    def test_connect_deduplicates(self):
        """Test that repeated edges are skipped in either direction."""
        grid = reset_grid(5)
        grid.connect((1, 1), (1, 3))
        assert not grid.connect((1, 1), (1, 3))
        assert not grid.connect((1, 3), (1, 1))
        assert grid.edge_count() == 1

    def test_neighbors_resolve_to_live_cells(self):
        """Test that neighbor lookups see later mutations."""
        grid = reset_grid(5)
        grid.connect((0, 0), (0, 2))
        grid.get(0, 2).elevation = 4.0
        neighbors = grid.neighbors_of(0, 0)
        assert len(neighbors) == 1
        assert neighbors[0] is grid.get(0, 2)
        assert neighbors[0].elevation == 4.0


class TestArrays:
    """Test array views and elevation merge."""

    def test_weights_array(self):
        """Test weights are indexed [x, y]."""
        grid = reset_grid(5)
        grid.increment_weight(4, 1)
        weights = grid.weights()
        assert weights.shape == (5, 5)
        assert weights[4, 1] == 1
        assert weights.sum() == 1

    def test_apply_elevations(self):
        """Test merging a height field into every cell."""
        grid = reset_grid(5)
        heights = np.arange(25, dtype=np.float64).reshape(5, 5)
        grid.apply_elevations(heights)
        assert grid.get(2, 3).elevation == heights[2, 3]
        np.testing.assert_array_equal(grid.elevations(), heights)

    def test_apply_elevations_shape_mismatch(self):
        """Test that a mismatched field is rejected."""
        grid = reset_grid(5)
        with pytest.raises(AlgorithmInvariantViolation):
            grid.apply_elevations(np.zeros((9, 9)))

    def test_path_cells(self):
        """Test resolving the stored path."""
        grid = reset_grid(5)
        grid.path = [(1, 1), (1, 3), (1, 1)]
        cells = grid.path_cells()
        assert [c.position for c in cells] == [(1, 1), (1, 3), (1, 1)]
        assert cells[0] is cells[2]


class TestMarkers:
    """Test type tags."""

    def test_mark_and_find(self):
        """Test tagging cells."""
        grid = reset_grid(5)
        grid.mark(0, 4, CellType.START)
        grid.mark(4, 0, CellType.END)
        assert [c.position for c in grid.find_cells(CellType.START)] == [(0, 4)]
        assert [c.position for c in grid.find_cells(CellType.END)] == [(4, 0)]

    def test_last_write_wins(self):
        """Test that tagging the same cell twice keeps the last tag."""
        grid = reset_grid(5)
        grid.mark(2, 2, CellType.START)
        grid.mark(2, 2, CellType.END)
        assert grid.find_cells(CellType.START) == []
        assert grid.get(2, 2).cell_type == CellType.END


class TestWorldPosition:
    """Test render-space positions."""

    def test_centered_and_scaled(self):
        """Test that the grid is centered on the origin and scaled."""
        grid = reset_grid(5, scale=2.0)
        grid.get(0, 0).elevation = 1.5
        assert grid.world_position(0, 0) == (-4.0, 3.0, -4.0)
        assert grid.world_position(2, 2) == (0.0, 0.0, 0.0)

    def test_uncentered(self):
        """Test raw lattice positions."""
        grid = Grid(5)
        assert grid.world_position(3, 1, centered=False) == (3.0, 0.0, 1.0)
