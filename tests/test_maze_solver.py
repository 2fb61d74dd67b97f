"""Tests for the BFS maze solver and path replay."""

import random

import pytest

from app.core.grid import Grid, GridFormat, Position, SolveResult
from app.core.maze_parser import parse_grid
from app.core.maze_solver import (
    ReplayStatus,
    is_valid_move,
    replay_path,
    solve_maze,
)


CORRIDOR = "#####\n#S E#\n#####"
BLOCKED_CORRIDOR = "#####\n#S#E#\n#####"

SPIRAL = """##########
#S       #
# ###### #
# #    # #
# # ## # #
# # ## # #
# #    # #
# ###### #
#       E#
##########"""

LATTICE_ROOMS = """#######
#S#   #
# # ###
#    E#
#######"""


def _assert_valid_path(grid: Grid, result: SolveResult, fmt: GridFormat) -> None:
    for current, target in zip(result.path, result.path[1:]):
        assert is_valid_move(grid, current, target, fmt)


def _relaxation_distance(grid: Grid, start: Position, end: Position) -> int | None:
    """Shortest dense distance by repeated relaxation over every cell."""
    infinity = grid.area + 1
    dist = {pos: infinity for pos in grid.positions() if not grid.is_wall(pos)}
    dist[start] = 0
    changed = True
    while changed:
        changed = False
        for pos in dist:
            for dx, dy in ((1, 0), (-1, 0), (0, 1), (0, -1)):
                neighbour = pos.offset(dx, dy)
                if neighbour in dist and dist[neighbour] + 1 < dist[pos]:
                    dist[pos] = dist[neighbour] + 1
                    changed = True
    return dist[end] if dist[end] < infinity else None


class TestSolveDense:
    """Tests for one-cell moves."""

    def test_corridor(self):
        grid = parse_grid(CORRIDOR)
        result = solve_maze(grid, Position(1, 1), Position(3, 1), GridFormat.DENSE)

        assert result.solvable is True
        assert result.path == (Position(1, 1), Position(2, 1), Position(3, 1))
        assert result.step_count == 2

    def test_blocked_corridor(self):
        grid = parse_grid(BLOCKED_CORRIDOR)
        result = solve_maze(grid, Position(1, 1), Position(3, 1), GridFormat.DENSE)

        assert result.solvable is False
        assert result.path == ()
        assert result.step_count == 0

    def test_spiral(self):
        grid = parse_grid(SPIRAL)
        result = solve_maze(grid, Position(1, 1), Position(8, 8), GridFormat.DENSE)

        assert result.solvable is True
        assert result.step_count == 14
        assert result.path[0] == Position(1, 1)
        assert result.path[-1] == Position(8, 8)
        _assert_valid_path(grid, result, GridFormat.DENSE)

    def test_start_enclosed_by_walls(self):
        grid = parse_grid("#######\n#S#   #\n###  E#\n#######")
        result = solve_maze(grid, Position(1, 1), Position(5, 2), GridFormat.DENSE)
        assert result == SolveResult.unsolvable()

    def test_start_equals_end(self):
        grid = parse_grid(CORRIDOR)
        result = solve_maze(grid, Position(2, 1), Position(2, 1), GridFormat.DENSE)

        assert result.solvable is True
        assert result.path == (Position(2, 1),)
        assert result.step_count == 0

    def test_missing_endpoints(self):
        grid = parse_grid(CORRIDOR)
        assert solve_maze(grid, None, Position(3, 1), GridFormat.DENSE).solvable is False
        assert solve_maze(grid, Position(1, 1), None, GridFormat.DENSE).solvable is False

    def test_endpoint_outside_grid(self):
        grid = parse_grid(CORRIDOR)
        result = solve_maze(grid, Position(1, 1), Position(10, 1), GridFormat.DENSE)
        assert result.solvable is False

    def test_endpoint_on_wall(self):
        grid = parse_grid(CORRIDOR)
        result = solve_maze(grid, Position(0, 0), Position(3, 1), GridFormat.DENSE)
        assert result.solvable is False

    def test_deterministic_among_equal_paths(self):
        grid = parse_grid("#####\n#S  #\n#   #\n#  E#\n#####")
        results = {
            solve_maze(grid, Position(1, 1), Position(3, 3), GridFormat.DENSE)
            for _ in range(5)
        }

        assert len(results) == 1
        result = results.pop()
        assert result.step_count == 4
        # Right is explored before Down, so the route goes right first
        assert result.path[1] == Position(2, 1)

    def test_to_dict(self):
        grid = parse_grid(CORRIDOR)
        result = solve_maze(grid, Position(1, 1), Position(3, 1), GridFormat.DENSE)
        assert result.to_dict() == {
            "solvable": True,
            "path": [{"x": 1, "y": 1}, {"x": 2, "y": 1}, {"x": 3, "y": 1}],
            "step_count": 2,
        }

    @pytest.mark.parametrize("seed", range(25))
    def test_matches_exhaustive_distance(self, seed):
        rng = random.Random(seed)
        width, height = rng.randint(2, 8), rng.randint(2, 8)
        rows = [
            "".join("#" if rng.random() < 0.3 else " " for _ in range(width))
            for _ in range(height)
        ]
        grid = Grid(rows)
        open_cells = [pos for pos in grid.positions() if not grid.is_wall(pos)]
        if len(open_cells) < 2:
            pytest.skip("not enough open cells")

        start, end = open_cells[0], open_cells[-1]
        result = solve_maze(grid, start, end, GridFormat.DENSE)
        expected = _relaxation_distance(grid, start, end)

        if expected is None:
            assert result.solvable is False
        else:
            assert result.solvable is True
            assert result.step_count == expected
            _assert_valid_path(grid, result, GridFormat.DENSE)


class TestSolveLattice:
    """Tests for two-cell moves with a wall check in between."""

    def test_wall_between_rooms_blocks(self):
        grid = parse_grid(BLOCKED_CORRIDOR)
        result = solve_maze(grid, Position(1, 1), Position(3, 1), GridFormat.LATTICE)

        assert result.solvable is False
        assert result.path == ()

    def test_open_gap_between_rooms(self):
        grid = parse_grid(CORRIDOR)
        result = solve_maze(grid, Position(1, 1), Position(3, 1), GridFormat.LATTICE)

        assert result.solvable is True
        assert result.path == (Position(1, 1), Position(3, 1))
        assert result.step_count == 1

    def test_format_changes_outcome(self):
        grid = parse_grid("#####\n#S#E#\n# # #\n#   #\n#####")
        start, end = Position(1, 1), Position(3, 1)

        dense = solve_maze(grid, start, end, GridFormat.DENSE)
        lattice = solve_maze(grid, start, end, GridFormat.LATTICE)

        assert dense.step_count == 6
        assert lattice.step_count == 3

    def test_routes_around_walls(self):
        grid = parse_grid(LATTICE_ROOMS)
        result = solve_maze(grid, Position(1, 1), Position(5, 3), GridFormat.LATTICE)

        assert result.solvable is True
        assert result.path == (
            Position(1, 1),
            Position(1, 3),
            Position(3, 3),
            Position(5, 3),
        )
        assert result.step_count == 3
        _assert_valid_path(grid, result, GridFormat.LATTICE)

    def test_start_equals_end(self):
        grid = parse_grid("###\n#S#\n###")
        result = solve_maze(grid, Position(1, 1), Position(1, 1), GridFormat.LATTICE)
        assert result.step_count == 0


class TestIsValidMove:
    """Tests for the single move rule."""

    def test_dense_unit_step(self):
        grid = parse_grid(CORRIDOR)
        assert is_valid_move(grid, Position(1, 1), Position(2, 1), GridFormat.DENSE)

    def test_dense_rejects_long_step(self):
        grid = parse_grid(CORRIDOR)
        assert not is_valid_move(grid, Position(1, 1), Position(3, 1), GridFormat.DENSE)

    def test_dense_rejects_diagonal(self):
        grid = parse_grid("####\n#  #\n#  #\n####")
        assert not is_valid_move(grid, Position(1, 1), Position(2, 2), GridFormat.DENSE)

    def test_rejects_wall_target(self):
        grid = parse_grid(BLOCKED_CORRIDOR)
        assert not is_valid_move(grid, Position(1, 1), Position(2, 1), GridFormat.DENSE)

    def test_rejects_out_of_bounds(self):
        grid = parse_grid(" ")
        assert not is_valid_move(grid, Position(0, 0), Position(-1, 0), GridFormat.DENSE)

    def test_lattice_checks_middle_cell(self):
        grid = parse_grid(BLOCKED_CORRIDOR)
        assert not is_valid_move(grid, Position(1, 1), Position(3, 1), GridFormat.LATTICE)

    def test_lattice_rejects_unit_step(self):
        grid = parse_grid(CORRIDOR)
        assert not is_valid_move(grid, Position(1, 1), Position(2, 1), GridFormat.LATTICE)


class TestReplayPath:
    """Tests for replaying player-drawn routes."""

    def test_completed_route(self):
        grid = parse_grid(CORRIDOR)
        replay = replay_path(grid, Position(1, 1), Position(3, 1), [Position(2, 1), Position(3, 1)])

        assert replay.status == ReplayStatus.COMPLETED
        assert replay.step_count == 2
        assert replay.position == Position(3, 1)

    def test_leading_start_is_skipped(self):
        grid = parse_grid(CORRIDOR)
        moves = [Position(1, 1), Position(2, 1), Position(3, 1)]
        replay = replay_path(grid, Position(1, 1), Position(3, 1), moves)

        assert replay.status == ReplayStatus.COMPLETED
        assert replay.step_count == 2

    def test_moves_after_exit_ignored(self):
        grid = parse_grid(CORRIDOR)
        moves = [Position(2, 1), Position(3, 1), Position(2, 1)]
        replay = replay_path(grid, Position(1, 1), Position(3, 1), moves)

        assert replay.status == ReplayStatus.COMPLETED
        assert replay.step_count == 2

    def test_hitting_a_wall(self):
        grid = parse_grid(CORRIDOR)
        replay = replay_path(grid, Position(1, 1), Position(3, 1), [Position(1, 0)])

        assert replay.status == ReplayStatus.BLOCKED
        assert replay.position == Position(1, 1)
        assert "wall" in replay.message

    def test_jump_is_invalid(self):
        grid = parse_grid(CORRIDOR)
        replay = replay_path(grid, Position(1, 1), Position(3, 1), [Position(3, 1)])

        assert replay.status == ReplayStatus.INVALID
        assert replay.step_count == 0

    def test_incomplete_route(self):
        grid = parse_grid(CORRIDOR)
        replay = replay_path(grid, Position(1, 1), Position(3, 1), [Position(2, 1)])

        assert replay.status == ReplayStatus.INCOMPLETE
        assert replay.position == Position(2, 1)
        assert replay.step_count == 1
        assert replay.message == "Route ended before reaching the exit"

    def test_backtracking_counts_steps(self):
        grid = parse_grid(CORRIDOR)
        moves = [Position(2, 1), Position(1, 1), Position(2, 1), Position(3, 1)]
        replay = replay_path(grid, Position(1, 1), Position(3, 1), moves)

        assert replay.status == ReplayStatus.COMPLETED
        assert replay.step_count == 4

    def test_lattice_route_counts_rooms(self):
        grid = parse_grid(LATTICE_ROOMS)
        moves = [
            Position(1, 2),
            Position(1, 3),
            Position(2, 3),
            Position(3, 3),
            Position(4, 3),
            Position(5, 3),
        ]
        replay = replay_path(grid, Position(1, 1), Position(5, 3), moves, GridFormat.LATTICE)
        optimal = solve_maze(grid, Position(1, 1), Position(5, 3), GridFormat.LATTICE)

        assert replay.status == ReplayStatus.COMPLETED
        assert replay.cell_count == 6
        assert replay.step_count == optimal.step_count == 3

    def test_lattice_corridor_is_one_step(self):
        grid = parse_grid(CORRIDOR)
        replay = replay_path(
            grid, Position(1, 1), Position(3, 1), [Position(2, 1), Position(3, 1)], GridFormat.LATTICE
        )

        assert replay.status == ReplayStatus.COMPLETED
        assert replay.step_count == 1

    def test_lattice_partial_room_rounds_down(self):
        grid = parse_grid(LATTICE_ROOMS)
        moves = [Position(1, 2), Position(1, 3), Position(2, 3)]
        replay = replay_path(grid, Position(1, 1), Position(5, 3), moves, GridFormat.LATTICE)

        assert replay.status == ReplayStatus.INCOMPLETE
        assert replay.cell_count == 3
        assert replay.step_count == 1
