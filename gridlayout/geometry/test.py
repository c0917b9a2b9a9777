"""Unit tests for selection geometry."""

import random

import pytest

from gridlayout.schema import GridCell

from .lib import (
    bounding_box,
    cell_key,
    cell_key_set,
    expand_to_bounding_box,
    is_rectangular_selection,
    split_into_rectangles,
)


def _cells(*pairs: tuple[int, int]) -> list[GridCell]:
    return [GridCell(row=r, column=c) for r, c in pairs]


def _block(rows: range, cols: range) -> list[GridCell]:
    return [GridCell(row=r, column=c) for r in rows for c in cols]


L_SHAPE = _cells((0, 0), (1, 0), (2, 0), (2, 1), (2, 2))
PLUS_SHAPE = _cells((0, 1), (1, 0), (1, 1), (1, 2), (2, 1))
DIAGONAL = _cells((0, 0), (1, 1), (2, 2))


class TestCellKeys:
    """Tests for cell identity helpers."""

    @pytest.mark.unit
    def test_cell_key_is_row_column_pair(self):
        """Keys are (row, column) tuples."""
        assert cell_key(GridCell(row=3, column=7)) == (3, 7)

    @pytest.mark.unit
    def test_keys_do_not_collide(self):
        """(1, 12) and (11, 2) stay distinct."""
        assert cell_key(GridCell(row=1, column=12)) != cell_key(GridCell(row=11, column=2))

    @pytest.mark.unit
    def test_key_set_collapses_duplicates(self):
        """Duplicate cells produce a single key."""
        keys = cell_key_set(_cells((0, 0), (0, 0), (0, 1)))
        assert keys == {(0, 0), (0, 1)}


class TestBoundingBox:
    """Tests for bounding_box."""

    @pytest.mark.unit
    def test_bounds(self):
        """Min and max per axis."""
        assert bounding_box(_cells((2, 5), (0, 3), (1, 4))) == (0, 2, 3, 5)

    @pytest.mark.unit
    def test_empty_raises(self):
        """Empty input has no bounding box."""
        with pytest.raises(ValueError):
            bounding_box([])


class TestIsRectangularSelection:
    """Tests for is_rectangular_selection."""

    @pytest.mark.unit
    def test_empty_is_not_rectangular(self):
        """Empty selections are rejected."""
        assert is_rectangular_selection([]) is False

    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("rows", "cols"),
        [(range(0, 1), range(0, 1)), (range(0, 2), range(0, 2)), (range(1, 4), range(2, 3)), (range(2, 5), range(0, 6))],
    )
    def test_full_blocks_are_rectangular(self, rows, cols):
        """Every complete block is a rectangle, in any order."""
        cells = _block(rows, cols)
        random.Random(7).shuffle(cells)
        assert is_rectangular_selection(cells) is True

    @pytest.mark.unit
    def test_missing_interior_cell(self):
        """A hole in the bounding box breaks rectangularity."""
        cells = [c for c in _block(range(3), range(3)) if cell_key(c) != (1, 1)]
        assert is_rectangular_selection(cells) is False

    @pytest.mark.unit
    @pytest.mark.parametrize("shape", [L_SHAPE, PLUS_SHAPE, DIAGONAL])
    def test_irregular_shapes(self, shape):
        """Irregular shapes are not rectangles."""
        assert is_rectangular_selection(shape) is False


class TestExpandToBoundingBox:
    """Tests for expand_to_bounding_box."""

    @pytest.mark.unit
    def test_empty(self):
        """Empty input expands to nothing."""
        assert expand_to_bounding_box([]) == []

    @pytest.mark.unit
    def test_non_contiguous_row(self):
        """(0,0) and (0,2) fill in (0,1)."""
        assert expand_to_bounding_box(_cells((0, 0), (0, 2))) == _cells((0, 0), (0, 1), (0, 2))

    @pytest.mark.unit
    def test_row_major_order(self):
        """Result enumerates rows, then columns."""
        result = expand_to_bounding_box(_cells((1, 1), (0, 0)))
        assert [cell_key(c) for c in result] == [(0, 0), (0, 1), (1, 0), (1, 1)]

    @pytest.mark.unit
    @pytest.mark.parametrize("shape", [L_SHAPE, PLUS_SHAPE, DIAGONAL, _cells((4, 4))])
    def test_idempotent_and_rectangular(self, shape):
        """Expanding twice equals expanding once, and the result is a rectangle."""
        once = expand_to_bounding_box(shape)
        assert expand_to_bounding_box(once) == once
        assert is_rectangular_selection(once) is True


class TestSplitIntoRectangles:
    """Tests for split_into_rectangles."""

    @staticmethod
    def _assert_partition(cells, rectangles):
        seen: list[tuple[int, int]] = []
        for rect in rectangles:
            assert is_rectangular_selection(rect)
            seen.extend(cell_key(c) for c in rect)
        assert len(seen) == len(set(seen)), "rectangles overlap"
        assert set(seen) == cell_key_set(cells)

    @pytest.mark.unit
    def test_empty(self):
        """No cells, no rectangles."""
        assert split_into_rectangles([]) == []

    @pytest.mark.unit
    def test_rectangle_stays_whole(self):
        """A rectangle is returned as a single region."""
        block = _block(range(1, 3), range(0, 3))
        assert split_into_rectangles(block) == [block]

    @pytest.mark.unit
    def test_l_shape(self):
        """An L splits into its full stem and the remaining foot."""
        rects = split_into_rectangles(L_SHAPE)
        assert rects == [_cells((0, 0), (1, 0), (2, 0)), _cells((2, 1), (2, 2))]

    @pytest.mark.unit
    def test_deterministic_regardless_of_input_order(self):
        """Seed order does not depend on input order."""
        shuffled = list(PLUS_SHAPE)
        random.Random(3).shuffle(shuffled)
        assert split_into_rectangles(shuffled) == split_into_rectangles(PLUS_SHAPE)

    @pytest.mark.unit
    def test_duplicates_ignored(self):
        """Repeated cells do not produce repeated regions."""
        rects = split_into_rectangles(_cells((0, 0), (0, 0), (0, 1)))
        assert rects == [_cells((0, 0), (0, 1))]

    @pytest.mark.unit
    @pytest.mark.parametrize("shape", [L_SHAPE, PLUS_SHAPE, DIAGONAL])
    def test_known_shapes_partition(self, shape):
        """Union of regions reproduces the input exactly."""
        self._assert_partition(shape, split_into_rectangles(shape))

    @pytest.mark.unit
    @pytest.mark.parametrize("seed", range(10))
    def test_random_sets_partition(self, seed):
        """Random cell sets are partitioned without loss or overlap."""
        rng = random.Random(seed)
        cells = [
            GridCell(row=r, column=c)
            for r in range(6)
            for c in range(6)
            if rng.random() < 0.55
        ]
        self._assert_partition(cells, split_into_rectangles(cells))
