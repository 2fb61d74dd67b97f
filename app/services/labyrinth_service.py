"""Labyrinth service connecting stored labyrinths to the maze engine."""

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from app.config import get_settings
from app.core.endpoints import Endpoints, locate_endpoints
from app.core.grid import Grid, GridFormat, Position, SolveResult
from app.core.maze_parser import parse_grid
from app.core.maze_solver import PathReplay, replay_path, solve_maze
from app.core.maze_validator import ValidationResult, validate_maze
from app.models.labyrinth import Labyrinth
from app.schemas.labyrinth import (
    EndpointsResponse,
    GridPosition,
    SolutionResponse,
    ValidateResponse,
)

logger = logging.getLogger(__name__)


@dataclass
class LoadedLabyrinth:
    """A stored labyrinth parsed back into engine types."""

    grid: Grid
    grid_format: GridFormat
    endpoints: Endpoints


def validate_upload(
    data: str,
    compact: bool = False,
    grid_format: Optional[GridFormat] = None,
) -> ValidationResult:
    """
    Validate uploaded maze text against the configured area bound.

    The compact encoding only comes from lattice mazes, so it declares the
    format instead of leaving it to detection.
    """
    settings = get_settings()
    if compact and grid_format is None:
        grid_format = GridFormat.LATTICE

    result = validate_maze(
        data,
        compact=compact,
        fmt=grid_format,
        max_area=settings.max_grid_area,
    )
    if not result.ok:
        logger.info(f"Maze rejected: {result.reason.value} ({result.message})")
    return result


def load_labyrinth(
    labyrinth: Labyrinth,
    grid_format: Optional[GridFormat] = None,
) -> LoadedLabyrinth:
    """
    Parse a stored labyrinth.

    Stored text is already canonical, so it is never compacted again. The
    format saved at upload time is used unless an override is given.
    """
    grid = parse_grid(labyrinth.data)
    fmt = grid_format or GridFormat(labyrinth.grid_format)
    return LoadedLabyrinth(grid=grid, grid_format=fmt, endpoints=locate_endpoints(grid, fmt))


def solve_labyrinth(loaded: LoadedLabyrinth) -> SolveResult:
    """Compute the shortest path through a stored labyrinth."""
    return solve_maze(
        loaded.grid,
        loaded.endpoints.start,
        loaded.endpoints.end,
        loaded.grid_format,
    )


def replay_attempt(loaded: LoadedLabyrinth, moves: Iterable[Position]) -> Optional[PathReplay]:
    """Replay a player's route. Returns None if the labyrinth has no endpoints."""
    if not loaded.endpoints.complete:
        return None
    return replay_path(
        loaded.grid,
        loaded.endpoints.start,
        loaded.endpoints.end,
        moves,
        loaded.grid_format,
    )


def to_grid_position(pos: Optional[Position]) -> Optional[GridPosition]:
    if pos is None:
        return None
    return GridPosition(x=pos.x, y=pos.y)


def to_solution_response(solution: SolveResult) -> SolutionResponse:
    return SolutionResponse(
        solvable=solution.solvable,
        path=[to_grid_position(pos) for pos in solution.path],
        step_count=solution.step_count,
    )


def to_validate_response(result: ValidationResult) -> ValidateResponse:
    """Convert a validation result into its API schema."""
    width = height = None
    if result.grid is not None:
        width, height = result.grid.width, result.grid.height

    endpoints = None
    if result.endpoints is not None:
        endpoints = EndpointsResponse(
            start=to_grid_position(result.endpoints.start),
            end=to_grid_position(result.endpoints.end),
            inferred=result.endpoints.inferred,
        )

    return ValidateResponse(
        ok=result.ok,
        reason=result.reason.value if result.reason else None,
        message=result.message,
        grid_format=result.fmt,
        size=result.size,
        width=width,
        height=height,
        data=result.serialized_grid() if result.ok else None,
        endpoints=endpoints,
        solution=to_solution_response(result.solution) if result.solution else None,
    )
