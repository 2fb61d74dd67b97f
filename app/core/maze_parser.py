"""
Grid parser for Labyrinth.

Turns raw maze text into a rectangular Grid and back, and loads maze files
from the filesystem for seeding.

Two text encodings reach the parser:
    dense   - one character per cell, walls and paths interleaved singly
    compact - three characters per cell column (as drawn by the classic
              ASCII maze generators); every third column is dropped so the
              result can be walked as a lattice grid
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .grid import Cell, Grid

logger = logging.getLogger(__name__)


class MazeError(Exception):
    """Base exception for maze engine errors."""

    pass


class MazeParseError(MazeError):
    """Exception raised when maze text or a maze file cannot be read."""

    pass


class GridTooLargeError(MazeError):
    """Exception raised when a grid exceeds the configured area bound."""

    def __init__(self, width: int, height: int, max_area: int):
        self.width = width
        self.height = height
        self.max_area = max_area
        super().__init__(
            f"Grid of {width} x {height} ({width * height} cells) "
            f"exceeds the maximum of {max_area} cells"
        )


def drop_every_third_column(rows: list[str]) -> list[str]:
    """Remove columns 2, 5, 8, ... (0-based) from every row."""
    return ["".join(ch for x, ch in enumerate(row) if x % 3 != 2) for row in rows]


def parse_grid(
    text: Optional[str],
    compact: bool = False,
    max_area: Optional[int] = None,
) -> Grid:
    """
    Parse raw maze text into a rectangular grid.

    Args:
        text: Multi-line string representing the maze.
        compact: Collapse the three-characters-per-cell encoding by dropping
            every third column. This is one-way; the dropped columns are lost.
        max_area: Optional upper bound on width * height.

    Returns:
        Grid with every row padded to the widest line. Empty or
        whitespace-only text yields a 1x1 wall grid.

    Raises:
        GridTooLargeError: If the grid area exceeds max_area.
    """
    if not text or not text.strip():
        return Grid([Cell.WALL.value])

    # Only the trailing run of newlines goes; leading rows are part of the maze
    lines = text.replace("\r\n", "\n").rstrip("\n").split("\n")

    width = max(max(len(line) for line in lines), 1)
    rows = [line.ljust(width, " ") for line in lines]

    if compact:
        rows = drop_every_third_column(rows)
        width = len(rows[0])

    height = len(rows)
    if max_area is not None and width * height > max_area:
        raise GridTooLargeError(width, height, max_area)

    return Grid(rows)


def serialize_grid(grid: Grid) -> str:
    """Write a grid back to text, one row per line."""
    return "\n".join(grid.rows)


@dataclass
class MazeFile:
    """Maze text loaded from disk with its inferred metadata."""

    name: str
    difficulty: int
    text: str
    compact: bool = False


DIFFICULTY_KEYWORDS = {
    "easy": 1,
    "medium": 3,
    "hard": 5,
}


def load_grid_file(
    file_path: Path | str,
    name: Optional[str] = None,
    difficulty: Optional[int] = None,
    compact: Optional[bool] = None,
) -> MazeFile:
    """
    Load maze text from the filesystem.

    Args:
        file_path: Path to the maze file.
        name: Optional name override. If not provided, uses filename.
        difficulty: Optional difficulty override (1-5). If not provided,
            infers from keywords in the filename.
        compact: Optional encoding override. If not provided, files named
            ``*.compact.txt`` are treated as the compact encoding.

    Returns:
        MazeFile with the raw text and metadata.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        MazeParseError: If the path is not a readable file.
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"Maze file not found: {file_path}")

    if not file_path.is_file():
        raise MazeParseError(f"Path is not a file: {file_path}")

    try:
        text = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise MazeParseError(f"Failed to read maze file: {e}") from e

    stem = file_path.name.split(".")[0]

    if name is None:
        name = stem.replace("_", " ").replace("-", " ").title()

    if difficulty is None:
        difficulty = 1
        for keyword, stars in DIFFICULTY_KEYWORDS.items():
            if keyword in stem.lower():
                difficulty = stars
                break

    if compact is None:
        compact = file_path.name.endswith(".compact.txt")

    return MazeFile(name=name, difficulty=difficulty, text=text, compact=compact)


def load_grid_files(mazes_dir: Path | str) -> list[MazeFile]:
    """
    Load all ``*.txt`` maze files from a directory, sorted by filename.

    Raises:
        FileNotFoundError: If the directory doesn't exist.
        MazeParseError: If the path is not a directory.
    """
    mazes_dir = Path(mazes_dir)

    if not mazes_dir.exists():
        raise FileNotFoundError(f"Mazes directory not found: {mazes_dir}")

    if not mazes_dir.is_dir():
        raise MazeParseError(f"Path is not a directory: {mazes_dir}")

    mazes = []
    for maze_file in sorted(mazes_dir.glob("*.txt")):
        try:
            mazes.append(load_grid_file(maze_file))
        except MazeParseError as e:
            # Keep loading the rest of the directory
            logger.warning(f"Failed to load {maze_file}: {e}")

    return mazes
