# Core module
from .grid import Cell, Grid, GridFormat, Position, SolveResult
from .maze_parser import (
    GridTooLargeError,
    MazeError,
    MazeFile,
    MazeParseError,
    load_grid_file,
    load_grid_files,
    parse_grid,
    serialize_grid,
)
from .format_detector import FormatSample, detect_format, format_stats
from .endpoints import Endpoints, find_accessible_positions, locate_endpoints, mark_endpoints
from .maze_solver import PathReplay, ReplayStatus, is_valid_move, replay_path, solve_maze
from .maze_validator import ErrorKind, ValidationResult, maze_dimensions, validate_maze

__all__ = [
    "Cell",
    "Grid",
    "GridFormat",
    "Position",
    "SolveResult",
    "GridTooLargeError",
    "MazeError",
    "MazeFile",
    "MazeParseError",
    "load_grid_file",
    "load_grid_files",
    "parse_grid",
    "serialize_grid",
    "FormatSample",
    "detect_format",
    "format_stats",
    "Endpoints",
    "find_accessible_positions",
    "locate_endpoints",
    "mark_endpoints",
    "PathReplay",
    "ReplayStatus",
    "is_valid_move",
    "replay_path",
    "solve_maze",
    "ErrorKind",
    "ValidationResult",
    "maze_dimensions",
    "validate_maze",
]
