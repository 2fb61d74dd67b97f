"""
Labyrinth Maze Solver

Breadth-first shortest-path search over a Grid, shared by every flow that
needs a solution (upload validation, auto-solve, re-validation on edit).

Movement rules:
    DENSE   - step one cell to an orthogonal non-wall neighbour
    LATTICE - step two cells to an orthogonal non-wall room, provided the
              cell in between is not a wall

Neighbours are always explored Up, Right, Down, Left so equal-length
solutions resolve the same way on every call.
"""

from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional

from .grid import Grid, GridFormat, Position, SolveResult


# (dx, dy) in exploration order: up, right, down, left
DIRECTIONS: tuple[tuple[int, int], ...] = ((0, -1), (1, 0), (0, 1), (-1, 0))


def step_size(fmt: GridFormat) -> int:
    """Distance covered by a single move in the given format."""
    return 2 if fmt == GridFormat.LATTICE else 1


def is_valid_move(
    grid: Grid,
    current: Position,
    target: Position,
    fmt: GridFormat,
) -> bool:
    """
    Check a single move between two positions.

    The target must be in bounds, not a wall, and exactly one step away
    along an axis. LATTICE moves also require the cell between current and
    target to be open.
    """
    if not grid.in_bounds(target) or grid.is_wall(target):
        return False

    dx = target.x - current.x
    dy = target.y - current.y
    size = step_size(fmt)

    if (abs(dx), abs(dy)) not in ((size, 0), (0, size)):
        return False

    if fmt == GridFormat.LATTICE:
        middle = Position(current.x + dx // 2, current.y + dy // 2)
        if grid.is_wall(middle):
            return False

    return True


def solve_maze(
    grid: Grid,
    start: Optional[Position],
    end: Optional[Position],
    fmt: GridFormat,
) -> SolveResult:
    """
    Find the shortest path from start to end.

    Args:
        grid: Grid to search.
        start: Start position, or None if unknown.
        end: End position, or None if unknown.
        fmt: Movement rules to apply.

    Returns:
        SolveResult with the path (start first, end last) and its step
        count, or an unsolvable result with an empty path.
    """
    if start is None or end is None:
        return SolveResult.unsolvable()

    if not grid.in_bounds(start) or not grid.in_bounds(end):
        return SolveResult.unsolvable()

    if grid.is_wall(start) or grid.is_wall(end):
        return SolveResult.unsolvable()

    size = step_size(fmt)
    visited = [[False] * grid.width for _ in range(grid.height)]
    parent: list[list[Optional[Position]]] = [[None] * grid.width for _ in range(grid.height)]

    queue: deque[Position] = deque([start])
    visited[start.y][start.x] = True
    found = False

    while queue:
        current = queue.popleft()

        # Stop on dequeue so end's parent is its shortest-path predecessor
        if current == end:
            found = True
            break

        for dx, dy in DIRECTIONS:
            target = current.offset(dx * size, dy * size)
            if not grid.in_bounds(target) or visited[target.y][target.x]:
                continue
            if not is_valid_move(grid, current, target, fmt):
                continue

            visited[target.y][target.x] = True
            parent[target.y][target.x] = current
            queue.append(target)

    if not found:
        return SolveResult.unsolvable()

    path = _reconstruct_path(parent, start, end)
    return SolveResult(solvable=True, path=path, step_count=len(path) - 1)


def _reconstruct_path(
    parent: list[list[Optional[Position]]],
    start: Position,
    end: Position,
) -> tuple[Position, ...]:
    """Walk parent pointers back from end to start."""
    path = [end]
    current = end
    while current != start:
        current = parent[current.y][current.x]
        path.append(current)
    path.reverse()
    return tuple(path)


class ReplayStatus(str, Enum):
    """Outcome of replaying a player's route."""
    COMPLETED = "completed"
    BLOCKED = "blocked"
    INVALID = "invalid"
    INCOMPLETE = "incomplete"


@dataclass
class PathReplay:
    """Result of replaying a player-drawn route over a grid."""
    status: ReplayStatus
    position: Position
    path: list[Position] = field(default_factory=list)
    message: Optional[str] = None
    fmt: GridFormat = GridFormat.DENSE

    @property
    def cell_count(self) -> int:
        """Unit cells walked, including any backtracking."""
        return max(len(self.path) - 1, 0)

    @property
    def step_count(self) -> int:
        """Moves in the solver's unit: cells for DENSE, rooms for LATTICE."""
        return self.cell_count // step_size(self.fmt)


def replay_path(
    grid: Grid,
    start: Position,
    end: Position,
    moves: Iterable[Position],
    fmt: GridFormat = GridFormat.DENSE,
) -> PathReplay:
    """
    Replay a route drawn cell by cell by a player.

    Players draw on the raw grid, so every move is a unit orthogonal step
    regardless of the grid format. Step counts are reported in the
    solver's unit so they compare with the shortest solution: LATTICE
    routes count one step per two cells. A leading move equal to the start
    is accepted and skipped. Moves after the end is reached are ignored.

    Args:
        grid: Grid being played.
        start: Position the route begins at.
        end: Position that completes the route.
        moves: Successive positions visited after the start.
        fmt: Grid format, used for step counting.

    Returns:
        PathReplay describing how far the route got.
    """
    path = [start]
    current = start

    if current == end:
        return PathReplay(status=ReplayStatus.COMPLETED, position=current, path=path, fmt=fmt)

    for index, target in enumerate(moves):
        if index == 0 and target == start:
            continue

        if abs(target.x - current.x) + abs(target.y - current.y) != 1:
            return PathReplay(
                status=ReplayStatus.INVALID,
                position=current,
                path=path,
                fmt=fmt,
                message=f"Move to ({target.x}, {target.y}) is not adjacent to "
                        f"({current.x}, {current.y})",
            )

        if not grid.in_bounds(target) or grid.is_wall(target):
            return PathReplay(
                status=ReplayStatus.BLOCKED,
                position=current,
                path=path,
                fmt=fmt,
                message=f"Hit a wall at ({target.x}, {target.y})",
            )

        current = target
        path.append(current)

        if current == end:
            return PathReplay(status=ReplayStatus.COMPLETED, position=current, path=path, fmt=fmt)

    return PathReplay(
        status=ReplayStatus.INCOMPLETE,
        position=current,
        path=path,
        fmt=fmt,
        message="Route ended before reaching the exit",
    )
