"""Tests for the Grid class."""

import numpy as np
import pytest

from gridlife.core.grid import SIZE, Grid, InvalidPattern, next_state


def empty_pattern():
    return [[False] * SIZE for _ in range(SIZE)]


def full_pattern():
    return [[True] * SIZE for _ in range(SIZE)]


def checkerboard_pattern():
    return [[(r + c) % 2 == 0 for c in range(SIZE)] for r in range(SIZE)]


def pattern_with(cells):
    pattern = empty_pattern()
    for r, c in cells:
        pattern[r][c] = True
    return pattern


BLOCK = pattern_with([(1, 1), (1, 2), (2, 1), (2, 2)])
VERTICAL_BLINKER = pattern_with([(1, 2), (2, 2), (3, 2)])
HORIZONTAL_BLINKER = pattern_with([(2, 1), (2, 2), (2, 3)])


class TestConstruction:
    """Test cases for building grids."""

    def test_size(self):
        """Test the grid size is a fixed constant."""
        assert SIZE == 5
        assert Grid.SIZE == 5
        assert Grid.default().shape == (5, 5)

    def test_default_pattern(self):
        """Test that the default pattern is set correctly."""
        grid = Grid.default()

        assert grid.get_cell(0, 2)
        assert grid.get_cell(1, 1)
        assert grid.get_cell(1, 3)
        assert grid.get_cell(2, 2)
        assert not grid.get_cell(0, 0)
        assert grid.population == 4

    def test_constructor_without_pattern_is_default(self):
        """Test Grid() and Grid.default() agree."""
        assert Grid() == Grid.default()

    def test_from_pattern(self):
        """Test that a custom pattern is reproduced exactly."""
        pattern = checkerboard_pattern()
        grid = Grid.from_pattern(pattern)

        for r in range(SIZE):
            for c in range(SIZE):
                assert grid.get_cell(r, c) == pattern[r][c]

    def test_from_numpy_pattern(self):
        """Test building a grid from a numpy array."""
        pattern = np.zeros((SIZE, SIZE), dtype=bool)
        pattern[4, 0] = True

        grid = Grid.from_pattern(pattern)

        assert grid.get_cell(4, 0)
        assert grid.population == 1

    def test_from_pattern_accepts_integers(self):
        """Test that 0/1 values are read as dead/alive."""
        grid = Grid.from_pattern([[1, 0, 0, 0, 1]] + [[0] * SIZE for _ in range(SIZE - 1)])

        assert grid.get_cell(0, 0)
        assert grid.get_cell(0, 4)
        assert grid.population == 2
        assert all(type(cell) is bool for row in grid.rows() for cell in row)

    def test_from_pattern_copies_input(self):
        """Test that the grid does not alias the caller's matrix."""
        pattern = empty_pattern()
        grid = Grid.from_pattern(pattern)

        pattern[0][0] = True

        assert not grid.get_cell(0, 0)

    def test_cells_property_is_a_copy(self):
        """Test that modifying the exposed cells leaves the grid alone."""
        grid = Grid.default()
        cells = grid.cells
        cells[0, 0] = True

        assert not grid.get_cell(0, 0)

    @pytest.mark.parametrize(
        "pattern",
        [
            None,
            [],
            [[True, False], [False, True]],
            empty_pattern()[:4],
            empty_pattern() + [[False] * SIZE],
            empty_pattern()[:4] + [[False] * 4],
            empty_pattern()[:4] + [[False] * 6],
            [False] * SIZE,
            np.zeros((4, SIZE), dtype=bool),
            np.zeros((SIZE, 6), dtype=bool),
            np.zeros((SIZE, SIZE, 1), dtype=bool),
            np.ones((SIZE, SIZE, 2), dtype=bool),
            [[[True]] * SIZE for _ in range(SIZE)],
            [["1"] * SIZE for _ in range(SIZE)],
            [[None] * SIZE for _ in range(SIZE)],
            42,
        ],
    )
    def test_invalid_pattern(self, pattern):
        """Test that missing, wrongly sized or non-boolean patterns are rejected."""
        with pytest.raises(InvalidPattern):
            Grid.from_pattern(pattern)

    @pytest.mark.parametrize("rows", [["00000"] * SIZE, ["00100"] * SIZE, "0000000000000000000000000"])
    def test_text_rows_rejected(self, rows):
        """Test rows given as '0'/'1' text are not read as truthy strings."""
        with pytest.raises(InvalidPattern, match="parse_pattern_rows"):
            Grid.from_pattern(rows)

    def test_invalid_pattern_is_value_error(self):
        """Test that InvalidPattern can be caught as ValueError."""
        with pytest.raises(ValueError):
            Grid.from_pattern([[True]])


class TestCellAccess:
    """Test cases for cell queries and construction-time mutation."""

    def test_out_of_bounds_cells_are_dead(self):
        """Test that every position outside the grid reads as dead."""
        grid = Grid.from_pattern(full_pattern())

        for r in range(-3, SIZE + 3):
            for c in range(-3, SIZE + 3):
                inside = 0 <= r < SIZE and 0 <= c < SIZE
                assert grid.get_cell(r, c) is inside

    def test_set_cell(self):
        """Test setting cells."""
        grid = Grid.default()

        grid.set_cell(0, 0, True)
        assert grid.get_cell(0, 0)

        grid.set_cell(0, 0, False)
        assert not grid.get_cell(0, 0)

    def test_set_cell_out_of_bounds_is_ignored(self):
        """Test that writes outside the grid change nothing and do not raise."""
        grid = Grid.default()
        before = grid.cells

        grid.set_cell(10, 10, True)
        grid.set_cell(-1, 0, True)
        grid.set_cell(0, -1, True)
        grid.set_cell(SIZE, 2, True)
        grid.set_cell(2, SIZE, True)

        assert np.array_equal(grid.cells, before)
        assert not grid.get_cell(10, 10)

    def test_read_only_enumeration(self):
        """Test rows(), to_list() and population."""
        grid = Grid.from_pattern(VERTICAL_BLINKER)

        rows = list(grid.rows())
        assert len(rows) == SIZE
        assert rows[1] == (False, False, True, False, False)
        assert grid.to_list() == VERTICAL_BLINKER
        assert grid.population == 3


class TestNeighborCounting:
    """Test cases for neighbor counting."""

    def test_row_of_three(self):
        """Test neighbor counts around a horizontal line of three."""
        grid = Grid.from_pattern(pattern_with([(1, 1), (1, 2), (1, 3)]))

        assert grid.count_neighbors(1, 1) == 1
        assert grid.count_neighbors(1, 2) == 2
        assert grid.count_neighbors(1, 3) == 1
        assert grid.count_neighbors(1, 0) == 1
        assert grid.count_neighbors(0, 2) == 3
        assert grid.count_neighbors(2, 2) == 3
        assert grid.count_neighbors(4, 4) == 0

    def test_default_pattern_counts(self):
        """Test counts on the default pattern, including edges."""
        grid = Grid.default()

        assert grid.count_neighbors(0, 0) == 1
        assert grid.count_neighbors(0, 2) == 2
        assert grid.count_neighbors(1, 2) == 4
        assert grid.count_neighbors(2, 0) == 1
        assert grid.count_neighbors(4, 4) == 0

    def test_full_grid_counts(self):
        """Test that off-grid neighbors never count."""
        grid = Grid.from_pattern(full_pattern())

        assert grid.count_neighbors(0, 0) == 3
        assert grid.count_neighbors(0, 2) == 5
        assert grid.count_neighbors(2, 2) == 8
        assert grid.count_neighbors(4, 4) == 3

    def test_out_of_bounds_centre(self):
        """Test counting around positions outside the grid."""
        grid = Grid.from_pattern(full_pattern())

        assert grid.count_neighbors(-1, -1) == 1
        assert grid.count_neighbors(-1, 2) == 3
        assert grid.count_neighbors(SIZE, 2) == 3
        assert grid.count_neighbors(-1, SIZE) == 1
        assert grid.count_neighbors(10, 10) == 0

    @pytest.mark.parametrize(
        "pattern",
        [empty_pattern(), full_pattern(), checkerboard_pattern(), BLOCK, VERTICAL_BLINKER],
    )
    def test_counts_match_cell_queries(self, pattern):
        """Test counts equal the live Moore neighbors seen through get_cell."""
        grid = Grid.from_pattern(pattern)

        for r in range(-2, SIZE + 2):
            for c in range(-2, SIZE + 2):
                expected = sum(
                    grid.get_cell(r + dr, c + dc)
                    for dr in (-1, 0, 1)
                    for dc in (-1, 0, 1)
                    if (dr, dc) != (0, 0)
                )
                count = grid.count_neighbors(r, c)
                assert count == expected
                assert 0 <= count <= 8

    @pytest.mark.parametrize(
        "pattern",
        [empty_pattern(), full_pattern(), checkerboard_pattern(), BLOCK, VERTICAL_BLINKER],
    )
    def test_count_all_neighbors(self, pattern):
        """Test vectorized counting agrees with per-cell counting."""
        grid = Grid.from_pattern(pattern)
        counts = grid.count_all_neighbors()

        assert counts.shape == (SIZE, SIZE)
        for r in range(SIZE):
            for c in range(SIZE):
                assert counts[r, c] == grid.count_neighbors(r, c)


class TestRules:
    """Test cases for the transition rule."""

    @pytest.mark.parametrize("neighbors", range(9))
    def test_next_state_table(self, neighbors):
        """Test survival on 2-3 neighbors and birth on exactly 3."""
        assert next_state(True, neighbors) == (neighbors in (2, 3))
        assert next_state(False, neighbors) == (neighbors == 3)

    def test_next_state_elementwise(self):
        """Test the rule applied to whole arrays."""
        alive = np.array([True, True, True, False, False])
        neighbors = np.array([1, 2, 4, 3, 2])

        result = next_state(alive, neighbors)

        assert result.tolist() == [False, True, False, True, False]

    def test_get_next_state(self):
        """Test per-cell next state on the blinker."""
        grid = Grid.from_pattern(VERTICAL_BLINKER)

        assert grid.get_next_state(2, 2) is True
        assert grid.get_next_state(2, 1) is True
        assert grid.get_next_state(2, 3) is True
        assert grid.get_next_state(1, 2) is False
        assert grid.get_next_state(3, 2) is False
        assert grid.get_next_state(-1, -1) is False


class TestGenerations:
    """Test cases for whole-grid generation advance."""

    def test_block_is_still_life(self):
        """Test a 2x2 block remains unchanged."""
        grid = Grid.from_pattern(BLOCK)
        assert grid.equals(grid.next_generation())

    def test_default_pattern_is_still_life(self):
        """Test the default pattern (a tub) remains unchanged."""
        grid = Grid.default()
        assert grid.next_generation() == grid

    def test_blinker_oscillates(self):
        """Test the blinker flips to horizontal and back."""
        grid = Grid.from_pattern(VERTICAL_BLINKER)

        first = grid.next_generation()
        assert first == Grid.from_pattern(HORIZONTAL_BLINKER)

        second = first.next_generation()
        assert second == grid

    def test_full_grid_keeps_corners(self):
        """Test a fully alive grid: corners survive, everything else dies."""
        grid = Grid.from_pattern(full_pattern())
        expected = Grid.from_pattern(pattern_with([(0, 0), (0, 4), (4, 0), (4, 4)]))

        assert grid.next_generation() == expected

    def test_lonely_cell_dies(self):
        """Test a single cell dies of underpopulation."""
        grid = Grid.from_pattern(pattern_with([(2, 2)]))
        assert grid.next_generation().population == 0

    def test_receiver_is_not_mutated(self):
        """Test next_generation leaves the original grid untouched."""
        grid = Grid.from_pattern(VERTICAL_BLINKER)
        before = grid.cells

        result = grid.next_generation()

        assert result is not grid
        assert np.array_equal(grid.cells, before)

    def test_depends_only_on_cells(self):
        """Test equal grids advance to equal grids."""
        a = Grid.from_pattern(checkerboard_pattern())
        b = Grid.from_pattern(checkerboard_pattern())

        assert a is not b
        assert a.next_generation().equals(b.next_generation())

    def test_matches_per_cell_rule(self):
        """Test the whole-grid advance agrees with get_next_state everywhere."""
        for pattern in [checkerboard_pattern(), full_pattern(), Grid.default().to_list()]:
            grid = Grid.from_pattern(pattern)
            result = grid.next_generation()

            for r in range(SIZE):
                for c in range(SIZE):
                    assert result.get_cell(r, c) == grid.get_next_state(r, c)


class TestEqualityAndRendering:
    """Test cases for equality and text output."""

    def test_equality(self):
        """Test grid equality comparison."""
        grid1 = Grid.default()
        grid2 = Grid.default()

        assert grid1.equals(grid2)
        assert grid1 == grid2

        grid1.set_cell(0, 0, True)
        assert not grid1.equals(grid2)
        assert grid1 != grid2

    def test_equality_with_none_and_other_types(self):
        """Test comparison against absent or non-grid values."""
        grid = Grid.default()

        assert not grid.equals(None)
        assert grid != "not a grid"
        assert grid != Grid.default().to_list()

    @pytest.mark.parametrize("other", [None, "not a grid", 0, Grid.default(), Grid.from_pattern(BLOCK)])
    def test_eq_operator_matches_equals(self, other):
        grid = Grid.default()

        assert (grid == other) is grid.equals(other)

    def test_each_single_cell_difference(self):
        """Test that flipping any one cell breaks equality."""
        base = Grid.default()
        for r in range(SIZE):
            for c in range(SIZE):
                other = Grid.default()
                other.set_cell(r, c, not other.get_cell(r, c))
                assert not base.equals(other)

    def test_render(self):
        """Test the labelled text rendering."""
        expected = "\n".join(
            [
                "Generation 0:",
                "░░█░░",
                "░█░█░",
                "░░█░░",
                "░░░░░",
                "░░░░░",
            ]
        )
        assert Grid.default().render(0) == expected

    def test_render_custom_glyphs(self):
        """Test rendering with caller-chosen glyphs."""
        grid = Grid.from_pattern(HORIZONTAL_BLINKER)
        lines = grid.render(7, alive="*", dead=".").splitlines()

        assert lines[0] == "Generation 7:"
        assert lines[3] == ".***."
        assert len(lines) == SIZE + 1

    def test_string_representation(self):
        """Test str() shows the glyph block without a label."""
        grid = Grid.default()
        assert str(grid) == "\n".join(grid.render(0).splitlines()[1:])
