"""Constraint table: which values each cell may not take given the current placements."""

from dataclasses import dataclass
from typing import List

from .grid import DIM, N, Grid, GridShapeError, check_dimensions


@dataclass
class ConstraintTable:
    """
    Flat forbidden-flag table of length dim*dim*n.
    Entry (index * n + value - 1) is True when `value` already appears in the
    row, column or block of cell `index`.
    """

    flags: List[bool]
    dim: int = DIM
    n: int = N

    def cell_slice(self, index: int) -> List[bool]:
        start = index * self.n
        return self.flags[start:start + self.n]

    def is_forbidden(self, index: int, value: int) -> bool:
        return self.flags[index * self.n + value - 1]

    def candidates(self, index: int) -> List[int]:
        """Legal values for `index`, ascending."""
        return [offset + 1 for offset, used in enumerate(self.cell_slice(index)) if not used]

    def candidate_count(self, index: int) -> int:
        return self.cell_slice(index).count(False)


def _mark(flags: List[bool], grid: Grid, value: int, row: int, col: int) -> None:
    dim, n, block = grid.dim, grid.n, grid.block
    offset = value - 1

    for c in range(dim):
        flags[(row * dim + c) * n + offset] = True

    for r in range(dim):
        flags[(r * dim + col) * n + offset] = True

    top, left = row - row % block, col - col % block
    for r in range(top, top + block):
        for c in range(left, left + block):
            flags[(r * dim + c) * n + offset] = True


def build_constraints(grid: Grid, dim: int = DIM, n: int = N) -> ConstraintTable:
    """Derive the constraint table for the grid's current placements. The grid is not modified."""
    check_dimensions(dim, n)
    if grid.dim != dim or grid.n != n:
        raise GridShapeError(
            f"Grid is {grid.dim}x{grid.dim} over 1..{grid.n}, expected {dim}x{dim} over 1..{n}"
        )

    flags = [False] * (dim * dim * n)
    for row in range(dim):
        for col in range(dim):
            value = grid[row * dim + col]
            if value == 0:
                continue
            _mark(flags, grid, value, row, col)
    return ConstraintTable(flags=flags, dim=dim, n=n)
