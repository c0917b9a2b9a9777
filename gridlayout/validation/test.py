"""Unit tests for validation module."""

import pytest

from gridlayout.schema import (
    BreakpointConfig,
    BreakpointId,
    GridCell,
    GridChild,
    default_grid_definition,
    default_layout_state,
)
from gridlayout.validation import (
    ValidationError,
    is_valid,
    validate_config,
    validate_layout,
)


def _child(child_id: str, *pairs: tuple[int, int]) -> GridChild:
    return GridChild(
        id=child_id,
        name=child_id,
        cells=[GridCell(row=r, column=c) for r, c in pairs],
    )


def _config(*children: GridChild) -> BreakpointConfig:
    return BreakpointConfig(grid=default_grid_definition(3, 4), children=children)


class TestValidateConfig:
    """Tests for validate_config."""

    @pytest.mark.unit
    def test_valid_config(self):
        """Disjoint rectangles inside the grid pass."""
        config = _config(_child("a", (0, 0), (0, 1)), _child("b", (1, 0)))
        assert validate_config(config) == []

    @pytest.mark.unit
    def test_duplicate_ids(self):
        """Duplicate IDs are detected once per ID."""
        config = _config(_child("dupe", (0, 0)), _child("dupe", (2, 2)))
        errors = validate_config(config)
        assert [e.error_type for e in errors] == ["duplicate_id"]
        assert "dupe" in errors[0].message

    @pytest.mark.unit
    def test_empty_cells(self):
        """A child with no cells is reported."""
        errors = validate_config(_config(_child("ghost")))
        assert [e.error_type for e in errors] == ["empty_cells"]

    @pytest.mark.unit
    def test_non_rectangular(self):
        """L-shaped cells are reported."""
        errors = validate_config(_config(_child("l", (0, 0), (1, 0), (1, 1))))
        assert [e.error_type for e in errors] == ["non_rectangular"]
        assert errors[0].child_id == "l"

    @pytest.mark.unit
    def test_duplicated_cells_are_not_rectangular(self):
        """Duplicate cells cannot pass the count-based rectangle test."""
        errors = validate_config(_config(_child("d", (0, 0), (0, 1), (0, 1), (0, 0))))
        assert [e.error_type for e in errors] == ["non_rectangular"]

    @pytest.mark.unit
    def test_out_of_bounds(self):
        """Cells beyond the grid are reported."""
        errors = validate_config(_config(_child("wide", (2, 3), (2, 4), (3, 3), (3, 4))))
        assert [e.error_type for e in errors] == ["out_of_bounds"]
        assert "3 cell(s)" in errors[0].message

    @pytest.mark.unit
    def test_overlap_reported_on_later_child(self):
        """Overlaps are attributed to the child that comes later."""
        config = _config(_child("a", (0, 0), (0, 1)), _child("b", (0, 1)))
        errors = validate_config(config)
        assert len(errors) == 1
        assert errors[0].error_type == "overlap"
        assert errors[0].child_id == "b"

    @pytest.mark.unit
    def test_track_mismatch(self):
        """Size lists shorter than the count are reported per axis."""
        grid = default_grid_definition(3, 4).model_copy(update={"row_count": 4})
        errors = validate_config(BreakpointConfig(grid=grid))
        assert [e.error_type for e in errors] == ["track_mismatch"]
        assert "repeat(4, 1fr)" in errors[0].message
        assert errors[0].child_id is None

    @pytest.mark.unit
    def test_breakpoint_label(self):
        """Findings carry the breakpoint they were found in."""
        errors = validate_config(_config(_child("ghost")), BreakpointId.TABLET)
        assert errors[0].breakpoint == "tablet"


class TestValidateLayout:
    """Tests for whole-layout validation."""

    @pytest.mark.unit
    def test_default_layout_is_valid(self):
        """The default layout has no findings."""
        assert is_valid(default_layout_state())

    @pytest.mark.unit
    def test_findings_from_every_breakpoint(self):
        """Each breakpoint is checked independently."""
        state = default_layout_state()
        state = state.with_config(_config(_child("ghost")), BreakpointId.MOBILE)
        errors = validate_layout(state)
        assert len(errors) == 1
        assert isinstance(errors[0], ValidationError)
        assert errors[0].breakpoint == "mobile"
        assert not is_valid(state)
