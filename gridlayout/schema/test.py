"""Tests for the layout model and export envelope."""

import json
from datetime import UTC

import pytest
from pydantic import ValidationError

from .lib import (
    AutoTrack,
    BreakpointConfig,
    BreakpointId,
    FrTrack,
    GridCell,
    GridChild,
    GridDefinition,
    HistoryEntry,
    LayoutImportError,
    LayoutState,
    MinMaxTrack,
    PlaceItems,
    PxTrack,
    default_grid_definition,
    default_layout_state,
    export_layout_json,
    fr,
    minmax,
    parse_layout_export,
    px,
)


def _export_dict(state: LayoutState) -> dict:
    return json.loads(export_layout_json(state, exported_at="2026-01-01T00:00:00.000Z"))


# =============================================================================
# Defaults
# =============================================================================


class TestDefaults:
    """Tests for default factories."""

    @pytest.mark.unit
    def test_default_grid_definition(self):
        """Default grid is 3x4 with 1fr tracks and 16px gaps."""
        grid = default_grid_definition()
        assert (grid.row_count, grid.column_count) == (3, 4)
        assert grid.row_sizes == (fr(1),) * 3
        assert grid.column_sizes == (fr(1),) * 4
        assert (grid.gap, grid.row_gap, grid.column_gap) == (16, 16, 16)
        assert grid.place_items == PlaceItems.STRETCH

    @pytest.mark.unit
    def test_default_layout_state_breakpoints(self):
        """Each breakpoint gets its own grid dimensions and no children."""
        state = default_layout_state()
        assert state.active_breakpoint == BreakpointId.DESKTOP
        dims = {
            bp: (state.breakpoints.get(bp).grid.row_count, state.breakpoints.get(bp).grid.column_count)
            for bp in BreakpointId
        }
        assert dims == {
            BreakpointId.DESKTOP: (3, 4),
            BreakpointId.TABLET: (3, 3),
            BreakpointId.MOBILE: (4, 2),
        }
        assert all(not state.breakpoints.get(bp).children for bp in BreakpointId)

    @pytest.mark.unit
    def test_active_config_follows_active_breakpoint(self):
        """active_config resolves the active breakpoint."""
        state = default_layout_state().with_active_breakpoint("mobile")
        assert state.active_breakpoint == "mobile"
        assert state.active_config is state.breakpoints.mobile


# =============================================================================
# Immutability
# =============================================================================


class TestImmutability:
    """Models are frozen values updated by replacement."""

    @pytest.mark.unit
    def test_models_are_frozen(self):
        """Attribute assignment is rejected."""
        grid = default_grid_definition()
        with pytest.raises(ValidationError):
            grid.row_count = 5

    @pytest.mark.unit
    def test_cells_are_hashable_values(self):
        """Equal coordinates compare and hash equal."""
        assert GridCell(row=1, column=2) == GridCell(row=1, column=2)
        assert len({GridCell(row=1, column=2), GridCell(row=1, column=2)}) == 1

    @pytest.mark.unit
    def test_negative_coordinates_rejected(self):
        """Cells are zero-based and non-negative."""
        with pytest.raises(ValidationError):
            GridCell(row=-1, column=0)

    @pytest.mark.unit
    def test_with_config_shares_untouched_branches(self):
        """Replacing one breakpoint keeps the others by reference."""
        state = default_layout_state()
        new_config = BreakpointConfig(grid=default_grid_definition(1, 1))
        updated = state.with_config(new_config)

        assert updated.breakpoints.desktop is new_config
        assert updated.breakpoints.tablet is state.breakpoints.tablet
        assert updated.breakpoints.mobile is state.breakpoints.mobile
        assert state.breakpoints.desktop.grid.row_count == 3

    @pytest.mark.unit
    def test_child_create_generates_unique_ids(self):
        """Factory assigns fresh identifiers."""
        a = GridChild.create("child1", [GridCell(row=0, column=0)])
        b = GridChild.create("child1", [GridCell(row=0, column=0)])
        assert a.id != b.id
        assert a.cells == (GridCell(row=0, column=0),)
        assert a.locked is False

    @pytest.mark.unit
    def test_find_child(self):
        """Children are looked up by id."""
        child = GridChild.create("hero", [])
        config = BreakpointConfig(grid=default_grid_definition(), children=[child])
        assert config.find_child(child.id) is child
        assert config.find_child("missing") is None

    @pytest.mark.unit
    def test_history_entry_timestamp_is_utc(self):
        """Snapshots are stamped with an aware UTC datetime."""
        entry = HistoryEntry(state=default_layout_state())
        assert entry.timestamp.tzinfo is UTC


# =============================================================================
# Track sizes
# =============================================================================


class TestTrackSizes:
    """Tests for the track size union."""

    @pytest.mark.unit
    def test_discriminated_union_parses_each_variant(self):
        """Each wire variant maps to its model."""
        grid = GridDefinition.model_validate(
            {
                "rowCount": 1,
                "columnCount": 5,
                "rowSizes": [{"type": "fr", "value": 2}],
                "columnSizes": [
                    {"type": "fr", "value": 1},
                    {"type": "px", "value": 200},
                    {"type": "percent", "value": 25},
                    {"type": "auto"},
                    {"type": "minmax", "min": "100px", "max": "1fr"},
                ],
            }
        )
        kinds = [type(size) for size in grid.column_sizes]
        assert kinds[0] is FrTrack
        assert kinds[1] is PxTrack
        assert kinds[3] is AutoTrack
        assert grid.column_sizes[4] == minmax("100px", "1fr")
        assert isinstance(grid.column_sizes[4], MinMaxTrack)

    @pytest.mark.unit
    def test_corrupt_track_is_replaced_with_one_fr(self, caplog):
        """Unknown track variants heal to 1fr with a warning."""
        grid = GridDefinition.model_validate(
            {
                "rowCount": 2,
                "columnCount": 1,
                "rowSizes": [{"type": "vh", "value": 3}, {"type": "px"}],
                "columnSizes": [{"type": "px", "value": 10}],
            }
        )
        assert grid.row_sizes == (fr(1), fr(1))
        assert grid.column_sizes == (px(10),)
        assert "Replacing unrecognized track size" in caplog.text


# =============================================================================
# Export / import
# =============================================================================


class TestExportImport:
    """Tests for the export envelope."""

    @pytest.mark.unit
    def test_export_uses_camel_case_keys(self):
        """Wire format matches the browser tool's field names."""
        data = _export_dict(default_layout_state())
        assert data["version"] == 1
        assert data["exportedAt"] == "2026-01-01T00:00:00.000Z"
        assert data["layout"]["activeBreakpoint"] == "desktop"
        grid = data["layout"]["breakpoints"]["desktop"]["grid"]
        assert grid["rowCount"] == 3
        assert grid["columnGap"] == 16
        assert grid["placeItems"] == "stretch"
        assert grid["rowSizes"][0] == {"type": "fr", "value": 1}

    @pytest.mark.unit
    def test_export_omits_unset_optional_fields(self):
        """Optional child fields are left out rather than written as null."""
        child = GridChild.create("nav", [GridCell(row=0, column=0)])
        state = default_layout_state()
        state = state.with_config(
            state.active_config.model_copy(update={"children": (child,)})
        )
        exported = _export_dict(state)["layout"]["breakpoints"]["desktop"]["children"][0]
        assert "areaName" not in exported
        assert "justifySelf" not in exported
        assert exported["cells"] == [{"row": 0, "column": 0}]

    @pytest.mark.unit
    def test_round_trip(self):
        """Parsing an export restores an equal state."""
        state = default_layout_state().with_active_breakpoint(BreakpointId.TABLET)
        child = GridChild.create(
            "hero",
            [GridCell(row=0, column=0), GridCell(row=0, column=1)],
            locked=True,
            area_name="hero",
            justify_self="center",
        )
        state = state.with_config(
            state.active_config.model_copy(update={"children": (child,)})
        )
        restored = parse_layout_export(export_layout_json(state)).layout
        assert restored == state

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "text",
        [
            "not json",
            "",
            "[]",
            '{"version": 2, "layout": {}}',
            '{"version": "1", "layout": {}}',
            '{"version": true, "layout": {}}',
        ],
    )
    def test_malformed_documents_rejected(self, text):
        """Broken JSON and unknown versions raise LayoutImportError."""
        with pytest.raises(LayoutImportError):
            parse_layout_export(text)

    @pytest.mark.unit
    def test_missing_breakpoints_rejected(self):
        """A layout without breakpoints is rejected."""
        text = json.dumps({"version": 1, "layout": {"activeBreakpoint": "desktop"}})
        with pytest.raises(LayoutImportError, match="breakpoints"):
            parse_layout_export(text)

    @pytest.mark.unit
    def test_unknown_active_breakpoint_rejected(self):
        """activeBreakpoint must be desktop, tablet or mobile."""
        data = _export_dict(default_layout_state())
        data["layout"]["activeBreakpoint"] = "watch"
        with pytest.raises(LayoutImportError, match="activeBreakpoint"):
            parse_layout_export(json.dumps(data))

    @pytest.mark.unit
    def test_missing_single_breakpoint_rejected(self):
        """All three breakpoints must be present."""
        data = _export_dict(default_layout_state())
        del data["layout"]["breakpoints"]["mobile"]
        with pytest.raises(LayoutImportError):
            parse_layout_export(json.dumps(data))
