"""
End-to-end maze validation.

Runs raw text through parse -> detect format -> locate endpoints -> solve
and reports the outcome as a ValidationResult. Failures are returned, never
raised, so callers decide how to present them.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .endpoints import Endpoints, locate_endpoints, mark_endpoints
from .format_detector import detect_format
from .grid import Grid, GridFormat, SolveResult
from .maze_parser import GridTooLargeError, parse_grid, serialize_grid
from .maze_solver import solve_maze

logger = logging.getLogger(__name__)


class ErrorKind(str, Enum):
    """Reasons a maze can fail validation."""
    EMPTY_INPUT = "empty_input"
    MISSING_ENDPOINTS = "missing_endpoints"
    UNSOLVABLE = "unsolvable"
    GRID_TOO_LARGE = "grid_too_large"


ERROR_MESSAGES = {
    ErrorKind.EMPTY_INPUT: "Maze text is empty",
    ErrorKind.MISSING_ENDPOINTS: "Could not identify valid entrance and exit positions in the maze",
    ErrorKind.UNSOLVABLE: "This labyrinth has no valid solution",
    ErrorKind.GRID_TOO_LARGE: "Maze is too large",
}


@dataclass
class ValidationResult:
    """Outcome of validating a maze."""
    ok: bool
    grid: Optional[Grid] = None
    solution: Optional[SolveResult] = None
    reason: Optional[ErrorKind] = None
    fmt: Optional[GridFormat] = None
    endpoints: Optional[Endpoints] = None
    message: Optional[str] = None

    @property
    def solution_length(self) -> int:
        return self.solution.step_count if self.solution else 0

    @property
    def size(self) -> Optional[str]:
        """Human readable size, e.g. "10 x 10"."""
        if self.grid is None or self.fmt is None:
            return None
        width, height = maze_dimensions(self.grid, self.fmt)
        return f"{width} x {height}"

    def serialized_grid(self) -> Optional[str]:
        return serialize_grid(self.grid) if self.grid is not None else None

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "ok": self.ok,
            "reason": self.reason.value if self.reason else None,
            "message": self.message,
            "format": self.fmt.value if self.fmt else None,
            "size": self.size,
            "grid": self.serialized_grid(),
            "endpoints": self.endpoints.to_dict() if self.endpoints else None,
            "solution": self.solution.to_dict() if self.solution else None,
        }


def maze_dimensions(grid: Grid, fmt: GridFormat) -> tuple[int, int]:
    """
    Report maze dimensions as (width, height).

    DENSE grids report their character dimensions. LATTICE grids report
    rooms: each room plus the wall after it spans two cells, past the
    leading border.
    """
    if fmt == GridFormat.LATTICE:
        return max(1, (grid.width - 1) // 2), max(1, (grid.height - 1) // 2)
    return grid.width, grid.height


def _failure(
    reason: ErrorKind,
    *,
    grid: Optional[Grid] = None,
    fmt: Optional[GridFormat] = None,
    endpoints: Optional[Endpoints] = None,
    message: Optional[str] = None,
) -> ValidationResult:
    return ValidationResult(
        ok=False,
        grid=grid,
        reason=reason,
        fmt=fmt,
        endpoints=endpoints,
        message=message or ERROR_MESSAGES[reason],
    )


def validate_maze(
    raw_text: Optional[str],
    compact: bool = False,
    *,
    fmt: Optional[GridFormat] = None,
    max_area: Optional[int] = None,
    require_markers: bool = False,
) -> ValidationResult:
    """
    Validate raw maze text end to end.

    Args:
        raw_text: Maze text as uploaded or loaded from storage.
        compact: Text uses the three-characters-per-cell encoding.
        fmt: Known grid format. Detected from the grid when omitted.
        max_area: Optional upper bound on the grid area.
        require_markers: Reject grids without explicit S and E markers
            instead of inferring them.

    Returns:
        ValidationResult. On success the grid carries exactly one S and
        one E and the solution is attached.
    """
    try:
        grid = parse_grid(raw_text, compact=compact, max_area=max_area)
    except GridTooLargeError as e:
        logger.info(f"Rejected maze: {e}")
        return _failure(ErrorKind.GRID_TOO_LARGE, message=str(e))

    if fmt is None:
        fmt = detect_format(grid)

    endpoints = locate_endpoints(grid, fmt)

    if not endpoints.complete or (require_markers and endpoints.inferred):
        # Empty text parses to a 1x1 wall grid and lands here
        message = None
        if not raw_text or not raw_text.strip():
            message = ERROR_MESSAGES[ErrorKind.EMPTY_INPUT]
        return _failure(
            ErrorKind.MISSING_ENDPOINTS,
            grid=grid,
            fmt=fmt,
            endpoints=endpoints,
            message=message,
        )

    solution = solve_maze(grid, endpoints.start, endpoints.end, fmt)

    if not solution.solvable:
        return _failure(ErrorKind.UNSOLVABLE, grid=grid, fmt=fmt, endpoints=endpoints)

    marked = mark_endpoints(grid, endpoints.start, endpoints.end)

    return ValidationResult(
        ok=True,
        grid=marked,
        solution=solution,
        fmt=fmt,
        endpoints=endpoints,
    )
