"""Sudoku grid model, constraint table, and backtracking solver core."""

from .grid import Grid, GridShapeError, Move, format_grid, is_fully_solved
from .constraints import ConstraintTable, build_constraints
from .solver_core import SearchLimitExceeded, SearchLimits, solve

__all__ = [
    "Grid",
    "GridShapeError",
    "Move",
    "format_grid",
    "is_fully_solved",
    "ConstraintTable",
    "build_constraints",
    "SearchLimitExceeded",
    "SearchLimits",
    "solve",
]
