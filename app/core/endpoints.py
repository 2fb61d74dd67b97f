"""Start/end discovery for labyrinth grids."""

from dataclasses import dataclass
from typing import Optional

from .grid import Cell, Grid, GridFormat, Position


@dataclass(frozen=True)
class Endpoints:
    """Start and end positions of a grid.

    ``inferred`` is set when the markers were missing and the positions
    were taken from the first and last accessible cells instead.
    """
    start: Optional[Position]
    end: Optional[Position]
    inferred: bool = False

    @property
    def complete(self) -> bool:
        return self.start is not None and self.end is not None

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "start": self.start.to_dict() if self.start else None,
            "end": self.end.to_dict() if self.end else None,
            "inferred": self.inferred,
        }


def find_accessible_positions(grid: Grid, fmt: GridFormat) -> list[Position]:
    """
    List the cells that may serve as a fallback start or end.

    LATTICE grids only offer the interior odd/odd rooms; DENSE grids offer
    every non-wall cell. Positions come back in row-major order.
    """
    if fmt == GridFormat.LATTICE:
        return [
            Position(x, y)
            for y in range(1, grid.height - 1, 2)
            for x in range(1, grid.width - 1, 2)
            if not grid.is_wall(Position(x, y))
        ]

    return [pos for pos in grid.positions() if not grid.is_wall(pos)]


def locate_endpoints(grid: Grid, fmt: GridFormat) -> Endpoints:
    """
    Find the start (S) and end (E) markers of a grid.

    When several markers of a kind exist, the last one in scan order wins.
    If either marker is missing, both are replaced by the first and last
    accessible positions; with fewer than two accessible positions both
    come back as None.
    """
    start = grid.find(Cell.START.value)
    end = grid.find(Cell.END.value)

    if start is not None and end is not None:
        return Endpoints(start=start, end=end)

    accessible = find_accessible_positions(grid, fmt)
    if len(accessible) >= 2:
        return Endpoints(start=accessible[0], end=accessible[-1], inferred=True)

    return Endpoints(start=None, end=None, inferred=True)


def mark_endpoints(grid: Grid, start: Position, end: Position) -> Grid:
    """
    Return a copy of the grid with S and E written at the given positions.

    Any other S or E characters are cleared to open path so the copy holds
    exactly one marker of each kind.
    """
    markers = (Cell.START.value, Cell.END.value)
    changes = {
        pos: Cell.PATH.value
        for pos in grid.positions()
        if grid.char_at(pos) in markers
    }
    changes[start] = Cell.START.value
    changes[end] = Cell.END.value
    return grid.with_cells(changes)
