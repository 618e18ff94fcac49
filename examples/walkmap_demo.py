#!/usr/bin/env python3
"""
Simple demo script showing walk-carved grid generation.
"""

import numpy as np
from py_gridgen import CellType, GeneratorConfig, GridGenerator
from py_gridgen.config import settings
from py_gridgen.log_config import configure_logging


def render_ascii(grid):
    """Draw visit weights as characters, row y from top to bottom."""
    symbols = " .:-=+*#%@"
    rows = []
    for y in reversed(range(grid.dimension)):
        row = []
        for x in range(grid.dimension):
            cell = grid.get(x, y)
            if cell.cell_type == CellType.START:
                row.append("S")
            elif cell.cell_type == CellType.END:
                row.append("E")
            else:
                row.append(symbols[min(cell.visit_weight, len(symbols) - 1)])
        rows.append("".join(row))
    return "\n".join(rows)


def main():
    """Demonstrate grid generation."""
    configure_logging(settings.log_level, settings.log_format)

    print("Py-GridGen Walk Map Demo")
    print("=" * 40)

    for seed in ["demo123", "meander", "canyon"]:
        config = GeneratorConfig(
            dimension=33,
            steps=60,
            step_range=5,
            use_random_seed=False,
            seed=seed,
            mark_endpoints=True,
        )
        generator = GridGenerator(config)
        grid = generator.generate()

        weights = grid.weights()
        heights = grid.elevations()

        print(f"\nSeed '{seed}':")
        print("-" * 30)
        print(f"  Visited cells: {np.count_nonzero(weights)} of {len(grid)}")
        print(f"  Total weight: {weights.sum()}")
        print(f"  Max weight: {weights.max()}")
        print(f"  Edges: {grid.edge_count()}")
        print(f"  Height range: {heights.min():.2f} to {heights.max():.2f}")
        print(render_ascii(grid))


if __name__ == "__main__":
    main()
