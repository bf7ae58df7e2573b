"""Sudoku grid data structures and validation helpers."""

from contextlib import contextmanager
from dataclasses import dataclass, field
from math import isqrt
from typing import Iterator, List, Optional, Sequence, Tuple

DIM = 9
N = 9
BLANKS = "0."


class GridShapeError(ValueError):
    """Raised when a grid, its dimensions, or a cell value break the board contract."""


def check_dimensions(dim: int, n: int) -> int:
    """Validate `dim`/`n` and return the block side length."""
    if dim != n:
        raise GridShapeError(f"dim ({dim}) must equal n ({n})")
    if dim <= 0:
        raise GridShapeError(f"dim must be positive, got {dim}")
    block = isqrt(dim)
    if block * block != dim:
        raise GridShapeError(f"dim ({dim}) must be a perfect square")
    return block


@dataclass(frozen=True)
class Move:
    index: int
    value: int


@dataclass
class Grid:
    """
    A dim x dim board stored as a flat list of cells (0 = empty).
    The list passed in is used as-is, so callers holding it see in-place edits.
    """

    cells: List[int]
    dim: int = DIM
    n: int = N
    block: int = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.block = check_dimensions(self.dim, self.n)
        if len(self.cells) != self.dim * self.dim:
            raise GridShapeError(
                f"Grid must have {self.dim * self.dim} cells, got {len(self.cells)}"
            )
        for ix, value in enumerate(self.cells):
            self._check_value(value, ix)

    @classmethod
    def empty(cls, dim: int = DIM, n: int = N) -> "Grid":
        return cls(cells=[0] * (dim * dim), dim=dim, n=n)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]], n: int = N) -> "Grid":
        cells = [int(v) for row in rows for v in row]
        return cls(cells=cells, dim=len(rows), n=n)

    @classmethod
    def from_string(cls, text: str, dim: int = DIM, n: int = N) -> "Grid":
        """Parse the one-line form: digits, with '0' or '.' for blanks. Whitespace is ignored."""
        compact = "".join(text.split())
        cells: List[int] = []
        for ch in compact:
            if ch in BLANKS:
                cells.append(0)
            elif ch in "0123456789":
                cells.append(int(ch))
            else:
                raise GridShapeError(f"Unexpected character {ch!r} in puzzle string")
        return cls(cells=cells, dim=dim, n=n)

    def _check_value(self, value: int, ix: Optional[int] = None) -> None:
        if not isinstance(value, int) or isinstance(value, bool) or not 0 <= value <= self.n:
            where = f" at index {ix}" if ix is not None else ""
            raise GridShapeError(f"Cell value {value!r}{where} outside 0..{self.n}")

    def _check_bounds(self, row: int, col: int) -> None:
        if not (0 <= row < self.dim and 0 <= col < self.dim):
            raise GridShapeError(f"Cell ({row}, {col}) outside a {self.dim}x{self.dim} grid")

    def index(self, row: int, col: int) -> int:
        self._check_bounds(row, col)
        return row * self.dim + col

    def row_col(self, index: int) -> Tuple[int, int]:
        if not 0 <= index < len(self.cells):
            raise GridShapeError(f"Index {index} outside 0..{len(self.cells) - 1}")
        return divmod(index, self.dim)

    def get(self, row: int, col: int) -> int:
        return self.cells[self.index(row, col)]

    def set(self, row: int, col: int, value: int) -> None:
        self._check_value(value)
        self.cells[self.index(row, col)] = value

    def __getitem__(self, index: int) -> int:
        return self.cells[index]

    def __len__(self) -> int:
        return len(self.cells)

    def apply(self, move: Move) -> None:
        self._check_value(move.value)
        self.cells[move.index] = move.value

    def revert(self, move: Move) -> None:
        self.cells[move.index] = 0

    def empty_indices(self) -> List[int]:
        return [ix for ix, v in enumerate(self.cells) if v == 0]

    def filled_count(self) -> int:
        return sum(1 for v in self.cells if v != 0)

    def rows(self) -> List[List[int]]:
        return [self.cells[r * self.dim:(r + 1) * self.dim] for r in range(self.dim)]

    def copy(self) -> "Grid":
        return Grid(cells=list(self.cells), dim=self.dim, n=self.n)

    def to_string(self) -> str:
        return "".join(str(v) for v in self.cells)

    # Units are lists of flat indices: rows, then columns, then blocks.
    def units(self) -> List[List[int]]:
        dim, block = self.dim, self.block
        units = [[r * dim + c for c in range(dim)] for r in range(dim)]
        units += [[r * dim + c for r in range(dim)] for c in range(dim)]
        for br in range(0, dim, block):
            for bc in range(0, dim, block):
                units.append(
                    [(br + r) * dim + (bc + c) for r in range(block) for c in range(block)]
                )
        return units


class _Placement:
    def __init__(self) -> None:
        self.committed = False

    def commit(self) -> None:
        self.committed = True


@contextmanager
def placed(grid: Grid, move: Move) -> Iterator[_Placement]:
    """Apply `move` for the duration of the block; revert on exit unless committed."""
    grid.apply(move)
    placement = _Placement()
    try:
        yield placement
    finally:
        if not placement.committed:
            grid.revert(move)


def is_fully_solved(grid: Grid) -> bool:
    """True iff every row, column and block holds each value 1..n exactly once."""
    expected = set(range(1, grid.n + 1))
    for unit in grid.units():
        values = [grid[ix] for ix in unit]
        if 0 in values or set(values) != expected:
            return False
    return True


def has_conflicts(grid: Grid) -> bool:
    """True if any row, column or block repeats a placed value."""
    for unit in grid.units():
        seen = set()
        for ix in unit:
            value = grid[ix]
            if value == 0:
                continue
            if value in seen:
                return True
            seen.add(value)
    return False


def format_grid(grid: Grid) -> str:
    """Render the boxed text board, blanks shown as spaces."""
    delim = "+" + "+".join("-" * grid.block for _ in range(grid.dim // grid.block)) + "+"
    lines = [delim]
    for r, row in enumerate(grid.rows()):
        parts = []
        for start in range(0, grid.dim, grid.block):
            parts.append("".join(" " if v == 0 else str(v) for v in row[start:start + grid.block]))
        lines.append("|" + "|".join(parts) + "|")
        if (r + 1) % grid.block == 0:
            lines.append(delim)
    return "\n".join(lines)
