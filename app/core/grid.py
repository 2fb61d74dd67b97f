"""
Grid model for the Labyrinth maze engine.

A grid is an immutable rectangle of single characters. Cells are read
through the Cell enum for traversal, but the original characters are kept
so a grid can be written back to storage unchanged.

Grid Format:
    # = Wall (impassable)
    S = Start position
    E = End (exit)
    ' ' = Open path (any other character is also treated as a path)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional


class Cell(Enum):
    """Types of cells in a labyrinth grid."""
    WALL = "#"
    PATH = " "
    START = "S"
    END = "E"

    @classmethod
    def from_char(cls, char: str) -> "Cell":
        """Convert character to Cell. Unknown characters are paths."""
        mapping = {
            "#": cls.WALL,
            "S": cls.START,
            "E": cls.END,
        }
        return mapping.get(char, cls.PATH)


class GridFormat(str, Enum):
    """How traversable cells are laid out in a grid.

    DENSE grids move one cell at a time. LATTICE grids keep rooms on
    odd/odd coordinates with walls in the cells between them, so a move
    covers two cells and checks the one in the middle.
    """
    DENSE = "dense"
    LATTICE = "lattice"


@dataclass(frozen=True)
class Position:
    """2D position in a grid."""
    x: int
    y: int

    def offset(self, dx: int, dy: int) -> "Position":
        """Return the position shifted by (dx, dy)."""
        return Position(self.x + dx, self.y + dy)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {"x": self.x, "y": self.y}


class Grid:
    """Immutable rectangular character grid.

    Short rows are right-padded with ``fill`` so every row is exactly
    ``width`` characters long.
    """

    __slots__ = ("_rows", "width", "height")

    def __init__(self, rows: list[str] | tuple[str, ...], fill: str = " "):
        if not rows:
            raise ValueError("Grid must have at least one row")

        width = max(max(len(row) for row in rows), 1)
        self._rows: tuple[str, ...] = tuple(row.ljust(width, fill) for row in rows)
        self.width: int = width
        self.height: int = len(self._rows)

    @property
    def rows(self) -> tuple[str, ...]:
        return self._rows

    @property
    def area(self) -> int:
        return self.width * self.height

    def in_bounds(self, pos: Position) -> bool:
        """Check that a position lies inside the grid."""
        return 0 <= pos.x < self.width and 0 <= pos.y < self.height

    def char_at(self, pos: Position) -> str:
        """Get the raw character at a position."""
        return self._rows[pos.y][pos.x]

    def cell_at(self, pos: Position) -> Cell:
        """Get the cell type at a position. Out of bounds reads as wall."""
        if not self.in_bounds(pos):
            return Cell.WALL
        return Cell.from_char(self._rows[pos.y][pos.x])

    def is_wall(self, pos: Position) -> bool:
        return self.cell_at(pos) == Cell.WALL

    def positions(self) -> Iterator[Position]:
        """Iterate over every position in row-major order."""
        for y in range(self.height):
            for x in range(self.width):
                yield Position(x, y)

    def find(self, char: str) -> Optional[Position]:
        """Find the last occurrence of a character in scan order."""
        found = None
        for y, row in enumerate(self._rows):
            x = row.rfind(char)
            if x != -1:
                found = Position(x, y)
        return found

    def with_cells(self, changes: dict[Position, str]) -> "Grid":
        """Return a new grid with the given characters replaced."""
        rows = [list(row) for row in self._rows]
        for pos, char in changes.items():
            if not self.in_bounds(pos):
                raise ValueError(f"Position out of bounds: ({pos.x}, {pos.y})")
            if len(char) != 1:
                raise ValueError(f"Cell value must be a single character, got {char!r}")
            rows[pos.y][pos.x] = char
        return Grid(["".join(row) for row in rows])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self._rows == other._rows

    def __hash__(self) -> int:
        return hash(self._rows)

    def __repr__(self) -> str:
        return f"<Grid {self.width}x{self.height}>"

    def __str__(self) -> str:
        return "\n".join(self._rows)


@dataclass(frozen=True)
class SolveResult:
    """Outcome of a shortest-path search."""
    solvable: bool
    path: tuple[Position, ...] = ()
    step_count: int = 0

    @classmethod
    def unsolvable(cls) -> "SolveResult":
        return cls(solvable=False, path=(), step_count=0)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "solvable": self.solvable,
            "path": [pos.to_dict() for pos in self.path],
            "step_count": self.step_count,
        }
