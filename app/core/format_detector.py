"""
Grid format detection.

Classifies a grid as DENSE or LATTICE by sampling its top-left corner.
This is a best-effort heuristic: small or sparsely walled grids can be
misclassified, and callers that know the format should pass it explicitly.
"""

from dataclasses import dataclass

from .grid import Cell, Grid, GridFormat, Position

# Rows/columns 1..SAMPLE_SIZE-1 are inspected; row and column 0 are border
SAMPLE_SIZE = 5
LATTICE_THRESHOLD = 0.3


@dataclass(frozen=True)
class FormatSample:
    """Counts gathered from the sampled window."""
    odd_path_hits: int
    even_wall_hits: int
    total: int

    @property
    def odd_path_ratio(self) -> float:
        if self.total == 0:
            return 0.0
        return self.odd_path_hits / self.total


def format_stats(grid: Grid) -> FormatSample:
    """Sample the top-left window of the grid."""
    odd_path = 0
    even_wall = 0
    total = 0

    for y in range(1, min(grid.height, SAMPLE_SIZE)):
        for x in range(1, min(grid.width, SAMPLE_SIZE)):
            total += 1
            cell = grid.cell_at(Position(x, y))
            if x % 2 == 1 and y % 2 == 1 and cell != Cell.WALL:
                odd_path += 1
            if x % 2 == 0 and y % 2 == 0 and cell == Cell.WALL:
                even_wall += 1

    return FormatSample(odd_path_hits=odd_path, even_wall_hits=even_wall, total=total)


def detect_format(grid: Grid) -> GridFormat:
    """Guess the grid format from the share of open odd/odd cells."""
    sample = format_stats(grid)
    if sample.odd_path_ratio > LATTICE_THRESHOLD:
        return GridFormat.LATTICE
    return GridFormat.DENSE
