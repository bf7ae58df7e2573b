"""Top-level Sudoku solve interface.

Expose `solve_puzzle(puzzle)` that accepts a Grid, a flat list of cells, an
81-character puzzle string, or a raw puzzle record as produced by
`src.sudoku.loader.load_puzzles`.
"""

from typing import Any, Optional

from src.sudoku import solver_core
from src.sudoku.grid import Grid
from src.sudoku.loader import parse_puzzle


def solve_puzzle(puzzle: Any, **options: Any) -> Optional[Grid]:
    """
    Solve a puzzle and return the completed grid, or None if it has no solution.
    Accepts:
      - Grid instances (solved in place)
      - Flat lists of cell values (wrapped, solved in place)
      - Puzzle strings ('0' or '.' for blanks)
      - Raw puzzle dictionaries (parsed via `parse_puzzle`)
    Keyword options are passed through to `solver_core.solve`.
    """
    if isinstance(puzzle, Grid):
        grid = puzzle
    elif isinstance(puzzle, list):
        grid = Grid(cells=puzzle)
    elif isinstance(puzzle, str):
        grid = Grid.from_string(puzzle)
    elif isinstance(puzzle, dict):
        grid = parse_puzzle(puzzle)
    else:
        raise TypeError("solve_puzzle expects a Grid, list, puzzle string or puzzle dictionary")

    if solver_core.solve(grid, grid.dim, grid.n, **options):
        return grid
    return None


__all__ = ["solve_puzzle"]
