"""Binero grid data structures: tri-state cells and the square grid."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, List, Optional, Tuple

from .errors import GridFormatError, OutOfBounds

Coord = Tuple[int, int]


class Cell(Enum):
    EMPTY = "-"
    ZERO = "0"
    ONE = "1"

    @classmethod
    def from_char(cls, char: str, line: Optional[int] = None) -> "Cell":
        try:
            return cls(char)
        except ValueError:
            raise GridFormatError(f"invalid character {char!r}", line=line) from None

    @classmethod
    def from_value(cls, value: Any) -> "Cell":
        """Accept a Cell, 0/1/None, or one of the characters '0', '1', '-'."""
        if isinstance(value, Cell):
            return value
        if value is None:
            return cls.EMPTY
        if isinstance(value, bool):
            raise GridFormatError(f"invalid cell value {value!r}")
        if isinstance(value, int):
            if value in (0, 1):
                return cls.ZERO if value == 0 else cls.ONE
            raise GridFormatError(f"invalid cell value {value!r}")
        if isinstance(value, str) and len(value) == 1:
            return cls.from_char(value)
        raise GridFormatError(f"invalid cell value {value!r}")

    @classmethod
    def values(cls) -> Tuple["Cell", "Cell"]:
        # Candidate order used by the search.
        return (cls.ZERO, cls.ONE)

    @property
    def is_empty(self) -> bool:
        return self is Cell.EMPTY

    @property
    def is_filled(self) -> bool:
        return self is not Cell.EMPTY

    def to_int(self) -> Optional[int]:
        if self is Cell.EMPTY:
            return None
        return 0 if self is Cell.ZERO else 1

    def __invert__(self) -> "Cell":
        if self is Cell.ZERO:
            return Cell.ONE
        if self is Cell.ONE:
            return Cell.ZERO
        return Cell.EMPTY

    def __str__(self) -> str:
        return self.value


Lane = Tuple[Cell, ...]


@dataclass
class Grid:
    """
    Square grid of tri-state cells.
    Access is bounds-checked; no rule checking happens here.
    """

    size: int
    cells: List[List[Cell]] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not isinstance(self.size, int) or self.size < 0:
            raise GridFormatError(f"grid size must be a non-negative integer, got {self.size!r}")
        if not self.cells:
            self.cells = [[Cell.EMPTY] * self.size for _ in range(self.size)]
        elif len(self.cells) != self.size or any(len(r) != self.size for r in self.cells):
            raise GridFormatError(f"cells do not form a {self.size}x{self.size} grid")

    @classmethod
    def empty(cls, size: int) -> "Grid":
        return cls(size=size)

    @classmethod
    def from_rows(cls, rows: Iterable[Iterable[Any]]) -> "Grid":
        cells = [[Cell.from_value(v) for v in row] for row in rows]
        size = len(cells)
        for i, row in enumerate(cells):
            if len(row) != size:
                raise GridFormatError(
                    f"row {i} has {len(row)} cells, expected {size} for a square grid"
                )
        return cls(size=size, cells=cells)

    def _check_bounds(self, row: int, col: int) -> None:
        if not (0 <= row < self.size and 0 <= col < self.size):
            raise OutOfBounds(row, col, self.size)

    def get(self, row: int, col: int) -> Cell:
        self._check_bounds(row, col)
        return self.cells[row][col]

    def set(self, row: int, col: int, value: Cell) -> None:
        self._check_bounds(row, col)
        self.cells[row][col] = Cell.from_value(value)

    def row(self, i: int) -> Lane:
        if not 0 <= i < self.size:
            raise OutOfBounds(i, 0, self.size)
        return tuple(self.cells[i])

    def column(self, j: int) -> Lane:
        if not 0 <= j < self.size:
            raise OutOfBounds(0, j, self.size)
        return tuple(r[j] for r in self.cells)

    def rows(self) -> List[Lane]:
        return [tuple(r) for r in self.cells]

    def columns(self) -> List[Lane]:
        return [self.column(j) for j in range(self.size)]

    def empty_cells(self) -> List[Coord]:
        """Coordinates of empty cells, row-major."""
        return [
            (i, j)
            for i in range(self.size)
            for j in range(self.size)
            if self.cells[i][j] is Cell.EMPTY
        ]

    def is_complete(self) -> bool:
        return all(cell is not Cell.EMPTY for r in self.cells for cell in r)

    def copy(self) -> "Grid":
        return Grid(size=self.size, cells=[list(r) for r in self.cells])

    def to_rows(self) -> List[List[Optional[int]]]:
        return [[cell.to_int() for cell in r] for r in self.cells]

    def __str__(self) -> str:
        return "\n".join(" ".join(str(cell) for cell in r) for r in self.cells)
