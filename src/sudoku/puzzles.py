"""Reference puzzles and seeded clue removal."""

import random
from typing import List, Optional

from .grid import Grid

# Skiena, The Algorithm Design Manual, 2nd ed., section 7.3.
SKIENA_PUZZLE: List[List[int]] = [
    [0, 0, 0, 0, 0, 0, 0, 1, 2],
    [0, 0, 0, 0, 3, 5, 0, 0, 0],
    [0, 0, 0, 6, 0, 0, 0, 7, 0],
    [7, 0, 0, 0, 0, 0, 3, 0, 0],
    [0, 0, 0, 4, 0, 0, 8, 0, 0],
    [1, 0, 0, 0, 0, 0, 0, 0, 0],
    [0, 0, 0, 1, 2, 0, 0, 0, 0],
    [0, 8, 0, 0, 0, 0, 0, 4, 0],
    [0, 5, 0, 0, 0, 0, 6, 0, 0],
]

SKIENA_SOLUTION: List[List[int]] = [
    [6, 7, 3, 8, 9, 4, 5, 1, 2],
    [9, 1, 2, 7, 3, 5, 4, 8, 6],
    [8, 4, 5, 6, 1, 2, 9, 7, 3],
    [7, 9, 8, 2, 6, 1, 3, 5, 4],
    [5, 2, 6, 4, 7, 3, 8, 9, 1],
    [1, 3, 4, 5, 8, 9, 2, 6, 7],
    [4, 6, 9, 1, 2, 8, 7, 3, 5],
    [2, 8, 7, 3, 5, 6, 1, 4, 9],
    [3, 5, 1, 9, 4, 7, 6, 2, 8],
]


def remove_cells(grid: Grid, m: int, seed: Optional[int] = None) -> List[int]:
    """
    Blank the first `m` cells of a random permutation of all indices.
    Returns the blanked indices. The same seed always blanks the same cells.
    """
    if m < 0:
        raise ValueError(f"m must be non-negative, got {m}")
    order = list(range(len(grid)))
    random.Random(seed).shuffle(order)
    removed = order[:m]
    for ix in removed:
        grid.cells[ix] = 0
    return removed


def make_puzzle(m: int, seed: Optional[int] = None) -> Grid:
    grid = Grid.from_rows(SKIENA_SOLUTION)
    remove_cells(grid, m, seed)
    return grid
