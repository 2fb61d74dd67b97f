"""Tests for grid format detection."""

from app.core.format_detector import detect_format, format_stats
from app.core.grid import GridFormat
from app.core.maze_parser import parse_grid


class TestFormatDetector:
    """Tests for the dense/lattice heuristic."""

    def test_walled_corridor_is_dense(self):
        grid = parse_grid("#####\n#S E#\n#####")
        sample = format_stats(grid)

        # rows 1-2, columns 1-4
        assert sample.total == 8
        assert sample.odd_path_hits == 2
        assert detect_format(grid) == GridFormat.DENSE

    def test_open_odd_cells_in_small_window_is_lattice(self):
        grid = parse_grid("#####\n# # #")
        sample = format_stats(grid)

        assert sample.total == 4
        assert sample.odd_path_hits == 2
        assert sample.odd_path_ratio == 0.5
        assert detect_format(grid) == GridFormat.LATTICE

    def test_even_wall_hits_counted(self):
        grid = parse_grid("#####\n# # #\n#####\n# # #\n#####")
        sample = format_stats(grid)

        assert sample.even_wall_hits == 4
        assert sample.odd_path_hits == 4

    def test_sample_window_is_bounded(self):
        grid = parse_grid("\n".join(["#" * 40] * 40))
        assert format_stats(grid).total == 16

    def test_large_grids_read_as_dense(self):
        # At most 4 of the 16 sampled cells are odd/odd
        rows = ["#" * 20] + ["#" + " " * 18 + "#"] * 18 + ["#" * 20]
        grid = parse_grid("\n".join(rows))
        assert grid.width == 20
        assert grid.height == 20
        assert format_stats(grid).odd_path_ratio == 0.25
        assert detect_format(grid) == GridFormat.DENSE

    def test_single_cell_grid(self):
        grid = parse_grid("")
        sample = format_stats(grid)

        assert sample.total == 0
        assert sample.odd_path_ratio == 0.0
        assert detect_format(grid) == GridFormat.DENSE

    def test_walls_everywhere_is_dense(self):
        grid = parse_grid("###\n###\n###")
        assert detect_format(grid) == GridFormat.DENSE
