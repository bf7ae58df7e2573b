"""Backtracking Sudoku solver with MRV cell ranking over a per-level constraint table."""

import time
from collections.abc import MutableSequence
from dataclasses import dataclass
from typing import List, Optional, Union

from .constraints import ConstraintTable, build_constraints
from .grid import DIM, N, Grid, GridShapeError, Move, has_conflicts, is_fully_solved, placed
from src.utils.trace import Tracer, get_tracer

GridLike = Union[Grid, MutableSequence]


class SearchLimitExceeded(RuntimeError):
    """Raised when a search runs past its step budget or deadline."""


@dataclass
class SearchLimits:
    max_steps: Optional[int] = None  # recursion levels entered
    timeout: Optional[float] = None  # seconds of wall-clock time


@dataclass
class Candidate:
    index: int
    count: int


class _Budget:
    def __init__(self, limits: SearchLimits, tracer: Tracer) -> None:
        self.limits = limits
        self.tracer = tracer
        self.steps = 0
        self.deadline = (
            time.monotonic() + limits.timeout if limits.timeout is not None else None
        )

    def check(self, filled_count: int) -> None:
        self.steps += 1
        if self.limits.max_steps is not None and self.steps > self.limits.max_steps:
            reason = f"Step limit of {self.limits.max_steps} reached"
        elif self.deadline is not None and time.monotonic() > self.deadline:
            reason = f"Timeout of {self.limits.timeout}s reached"
        else:
            return
        self.tracer.log_limit_exceeded(filled_count=filled_count, reason=reason)
        raise SearchLimitExceeded(reason)


def solve(
    grid: GridLike,
    dim: int = DIM,
    n: int = N,
    filled_count: Optional[int] = None,
    *,
    limits: Optional[SearchLimits] = None,
    strict_mrv: bool = False,
    tracer: Optional[Tracer] = None,
) -> bool:
    """
    Complete `grid` in place. Returns True with the grid solved, or False with
    the grid exactly as it was passed in.

    `grid` may be a Grid or a flat mutable list of ints; a list is edited in place.
    With `strict_mrv` only the most constrained cell is branched on per level.
    """
    tracer = tracer or get_tracer()
    board = _as_grid(grid, dim, n)

    actual = board.filled_count()
    if filled_count is None:
        filled_count = actual
    elif filled_count != actual:
        raise GridShapeError(f"filled_count is {filled_count} but the grid has {actual} filled cells")

    if has_conflicts(board):
        tracer.log_dead_end(
            row=None,
            col=None,
            filled_count=filled_count,
            reason="Givens repeat a value in a row, column or block",
        )
        return False

    budget = _Budget(limits or SearchLimits(), tracer)
    return _search(board, filled_count, strict_mrv, budget, tracer)


def _as_grid(grid: GridLike, dim: int, n: int) -> Grid:
    if isinstance(grid, Grid):
        if grid.dim != dim or grid.n != n:
            raise GridShapeError(
                f"Grid is {grid.dim}x{grid.dim} over 1..{grid.n}, expected {dim}x{dim} over 1..{n}"
            )
        return grid
    if not isinstance(grid, MutableSequence):
        raise TypeError("solve expects a Grid or a mutable sequence of ints")
    return Grid(cells=grid, dim=dim, n=n)


def _search(
    grid: Grid,
    filled_count: int,
    strict_mrv: bool,
    budget: _Budget,
    tracer: Tracer,
) -> bool:
    budget.check(filled_count)

    if filled_count == len(grid):
        if is_fully_solved(grid):
            tracer.log_solution_found(filled_count=filled_count)
            return True
        return False

    table = build_constraints(grid, grid.dim, grid.n)
    ranked = _rank_cells(grid, table)
    tracer.log_constraints_built(empty_cells=len(ranked), filled_count=filled_count)

    if not ranked or ranked[0].count == 0:
        row, col = grid.row_col(ranked[0].index) if ranked else (None, None)
        tracer.log_dead_end(row=row, col=col, filled_count=filled_count)
        return False

    cells = ranked[:1] if strict_mrv else ranked
    for cell in cells:
        row, col = grid.row_col(cell.index)
        for value in table.candidates(cell.index):
            with placed(grid, Move(cell.index, value)) as placement:
                tracer.log_assign(
                    row=row,
                    col=col,
                    value=value,
                    candidate_count=cell.count,
                    filled_count=filled_count + 1,
                )
                if _search(grid, filled_count + 1, strict_mrv, budget, tracer):
                    placement.commit()
                    return True
                tracer.log_revert(row=row, col=col, value=value, filled_count=filled_count)

    return False


def _rank_cells(grid: Grid, table: ConstraintTable) -> List[Candidate]:
    """Empty cells by ascending candidate count (MRV); ties keep cell order."""
    ranked = [Candidate(ix, table.candidate_count(ix)) for ix in grid.empty_indices()]
    ranked.sort(key=lambda c: c.count)
    return ranked
