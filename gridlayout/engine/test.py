"""Unit tests for the layout engine and designer facade."""

import json
import logging

import pytest

from gridlayout.schema import (
    BreakpointId,
    GridCell,
    default_layout_state,
    export_layout_json,
    px,
)

from .lib import LayoutEngine, LayoutHistory, next_child_name
from .session import GridDesigner, InteractionSession


def _cell(row: int, column: int) -> GridCell:
    return GridCell(row=row, column=column)


def _block(rows: range, cols: range) -> list[GridCell]:
    return [_cell(r, c) for r in rows for c in cols]


# =============================================================================
# LayoutHistory
# =============================================================================


class TestLayoutHistory:
    """Tests for the bounded two-stack history."""

    @pytest.mark.unit
    def test_empty_history(self):
        """Nothing to undo or redo initially."""
        history = LayoutHistory(limit=5)
        state = default_layout_state()
        assert history.undo(state) is None
        assert history.redo(state) is None
        assert not history.can_undo and not history.can_redo

    @pytest.mark.unit
    def test_undo_then_redo(self):
        """Undo returns the snapshot; redo returns the parked state."""
        history = LayoutHistory(limit=5)
        before = default_layout_state()
        after = before.with_active_breakpoint(BreakpointId.TABLET)

        history.push(before)
        assert history.undo(after) is before
        assert history.redo_depth == 1
        assert history.redo(before) is after
        assert history.undo_depth == 1

    @pytest.mark.unit
    def test_push_clears_redo(self):
        """A new edit invalidates the redo stack."""
        history = LayoutHistory(limit=5)
        state = default_layout_state()
        history.push(state)
        history.undo(state)
        assert history.can_redo
        history.push(state)
        assert not history.can_redo

    @pytest.mark.unit
    def test_limit_evicts_oldest(self):
        """Only the newest snapshots are kept."""
        history = LayoutHistory(limit=3)
        states = [
            default_layout_state().with_active_breakpoint(bp)
            for bp in (BreakpointId.DESKTOP, BreakpointId.TABLET, BreakpointId.MOBILE)
        ]
        base = default_layout_state()
        history.push(base)
        for state in states:
            history.push(state)
        assert history.undo_depth == 3
        restored = [history.undo(base) for _ in range(3)]
        assert restored == list(reversed(states))
        assert history.undo(base) is None

    @pytest.mark.unit
    def test_limit_never_below_one(self):
        """A zero limit still keeps one snapshot."""
        assert LayoutHistory(limit=0).limit == 1

    @pytest.mark.unit
    def test_clear(self):
        """clear() empties both stacks."""
        history = LayoutHistory(limit=5)
        state = default_layout_state()
        history.push(state)
        history.push(state)
        history.undo(state)
        history.clear()
        assert history.undo_depth == history.redo_depth == 0


# =============================================================================
# LayoutEngine
# =============================================================================


class TestNextChildName:
    """Tests for child name allocation."""

    @pytest.mark.unit
    def test_fills_lowest_gap(self, engine):
        """The lowest unused number is chosen."""
        engine.commit_selection([_cell(0, 0)])
        second = engine.commit_selection([_cell(0, 1)])[0]
        engine.commit_selection([_cell(0, 2)])
        engine.delete_child(second.id)
        assert next_child_name(engine.active_config.children) == "child2"
        assert engine.commit_selection([_cell(1, 0)])[0].name == "child2"

    @pytest.mark.unit
    def test_ignores_custom_names(self, engine):
        """Renamed children free their childN name."""
        child = engine.commit_selection([_cell(0, 0)])[0]
        engine.set_child_name(child.id, "header")
        assert engine.commit_selection([_cell(1, 1)])[0].name == "child1"


class TestCommitSelection:
    """Tests for turning selections into children."""

    @pytest.mark.unit
    def test_two_by_two_block(self, engine):
        """A 2x2 drag creates child1 spanning lines 1 to 3."""
        [child] = engine.commit_selection(_block(range(2), range(2)))
        assert child.name == "child1"
        assert not child.locked
        assert child.area_name is None
        assert ".child1 {\n  grid-row: 1 / 3;\n  grid-column: 1 / 3;\n}" in engine.generate_css()
        assert engine.history.undo_depth == 1

    @pytest.mark.unit
    def test_non_contiguous_selection_expands(self, engine):
        """(0,0) and (0,2) become the three-cell row."""
        [child] = engine.commit_selection([_cell(0, 0), _cell(0, 2)])
        assert [(c.row, c.column) for c in child.cells] == [(0, 0), (0, 1), (0, 2)]

    @pytest.mark.unit
    def test_empty_selection(self, engine):
        """Nothing selected, nothing recorded."""
        assert engine.commit_selection([]) == []
        assert not engine.can_undo

    @pytest.mark.unit
    def test_locked_overlap_rejected(self, engine, caplog):
        """Selections touching a locked child are refused without history."""
        [locked] = engine.commit_selection(_block(range(1), range(2)))
        engine.set_child_lock(locked.id, True)
        before = engine.state
        depth = engine.history.undo_depth

        with caplog.at_level(logging.WARNING, logger="gridlayout.engine.lib"):
            assert engine.commit_selection([_cell(0, 1), _cell(1, 3)]) == []

        assert engine.state is before
        assert engine.history.undo_depth == depth
        assert "locked" in caplog.text

    @pytest.mark.unit
    def test_unlocked_overlap_allowed(self, engine):
        """Only locked children block a selection."""
        engine.commit_selection(_block(range(2), range(2)))
        created = engine.commit_selection([_cell(1, 1), _cell(2, 2)])
        assert len(created) == 1
        assert len(engine.active_config.children) == 2

    @pytest.mark.unit
    def test_split_creates_one_child_per_rectangle(self, engine):
        """An L split yields two children under a single history entry."""
        cells = [_cell(0, 0), _cell(1, 0), _cell(2, 0), _cell(2, 1), _cell(2, 2)]
        created = engine.commit_selection(cells, split=True)
        assert [c.name for c in created] == ["child1", "child2"]
        assert len(created[0].cells) == 3
        assert len(created[1].cells) == 2
        assert engine.history.undo_depth == 1
        assert len({c.id for c in created}) == 2

    @pytest.mark.unit
    def test_named_areas_set_area_name(self):
        """With named areas on, new children carry their area name."""
        engine = LayoutEngine(use_named_areas=True)
        [child] = engine.commit_selection([_cell(0, 0)])
        assert child.area_name == "child1"
        assert "grid-area: child1;" in engine.generate_css()


class TestResize:
    """Tests for row/column resizing."""

    @pytest.mark.unit
    def test_grow_appends_fr_tracks(self, engine):
        """New tracks default to 1fr; existing sizes are kept."""
        engine.mutate_grid_definition(
            lambda g: g.model_copy(update={"row_sizes": (px(50),) + g.row_sizes[1:]})
        )
        assert engine.resize_rows(2) == 5
        grid = engine.active_config.grid
        assert grid.row_count == 5
        assert [s.type for s in grid.row_sizes] == ["px", "fr", "fr", "fr", "fr"]

    @pytest.mark.unit
    def test_shrink_truncates(self, engine):
        """Removing columns drops trailing sizes."""
        assert engine.resize_columns(-2) == 2
        assert len(engine.active_config.grid.column_sizes) == 2

    @pytest.mark.unit
    def test_clamped_to_max(self, engine):
        """Rows never exceed the maximum."""
        assert engine.resize_rows(100) == 20
        assert engine.resize_rows(1) == 20
        assert len(engine.active_config.grid.row_sizes) == 20

    @pytest.mark.unit
    def test_clamped_to_one(self, engine):
        """Rows never drop below one."""
        assert engine.resize_rows(-100) == 1
        assert len(engine.active_config.grid.row_sizes) == 1

    @pytest.mark.unit
    def test_custom_max_tracks(self):
        """max_tracks overrides the configured clamp."""
        engine = LayoutEngine(max_tracks=6)
        assert engine.resize_columns(10) == 6

    @pytest.mark.unit
    def test_resize_is_undoable(self, engine):
        """Each resize pushes one snapshot."""
        engine.resize_rows(1)
        assert engine.undo()
        assert engine.active_config.grid.row_count == 3

    @pytest.mark.unit
    def test_mutate_grid_definition_not_tracked(self, engine):
        """Direct grid edits skip history unless snapshot() is called."""
        engine.mutate_grid_definition(lambda g: g.model_copy(update={"gap": 8}))
        assert not engine.can_undo
        engine.snapshot()
        engine.mutate_grid_definition(lambda g: g.model_copy(update={"gap": 4}))
        assert engine.undo()
        assert engine.active_config.grid.gap == 8


class TestChildEdits:
    """Tests for delete, rename and lock."""

    @pytest.mark.unit
    def test_delete(self, engine):
        """Deleting removes the child and is undoable."""
        [child] = engine.commit_selection([_cell(0, 0)])
        assert engine.delete_child(child.id)
        assert engine.active_config.children == ()
        assert engine.undo()
        assert engine.active_config.find_child(child.id) is not None

    @pytest.mark.unit
    def test_delete_unknown(self, engine):
        """Unknown IDs are ignored without a history entry."""
        assert engine.delete_child("missing") is False
        assert not engine.can_undo

    @pytest.mark.unit
    def test_rename_trims_and_ignores_blank(self, engine):
        """Names are trimmed; blank names keep the old name."""
        [child] = engine.commit_selection([_cell(0, 0)])
        engine.set_child_name(child.id, "  hero  ")
        assert engine.active_config.children[0].name == "hero"
        engine.set_child_name(child.id, "   ")
        assert engine.active_config.children[0].name == "hero"

    @pytest.mark.unit
    def test_rename_tracks_area_name(self, engine):
        """Area name follows the name only with named areas on."""
        [child] = engine.commit_selection([_cell(0, 0)])
        engine.set_use_named_areas(True)
        engine.set_child_name(child.id, "nav")
        assert engine.active_config.children[0].area_name == "nav"
        engine.set_use_named_areas(False)
        engine.set_child_name(child.id, "menu")
        assert engine.active_config.children[0].area_name is None

    @pytest.mark.unit
    def test_lock_not_tracked(self, engine):
        """Lock toggles do not create history entries."""
        [child] = engine.commit_selection([_cell(0, 0)])
        engine.set_child_lock(child.id, True)
        assert engine.active_config.children[0].locked
        assert engine.history.undo_depth == 1


class TestUndoRedo:
    """Tests for engine-level undo and redo."""

    @pytest.mark.unit
    def test_undo_redo_round_trip(self, engine):
        """Undo restores the previous layout, redo the newer one."""
        initial = engine.state
        engine.commit_selection([_cell(0, 0)])
        edited = engine.state

        assert engine.undo()
        assert engine.state == initial
        assert engine.redo()
        assert engine.state == edited

    @pytest.mark.unit
    def test_new_edit_clears_redo(self, engine):
        """Redo is impossible after a fresh edit."""
        engine.commit_selection([_cell(0, 0)])
        engine.undo()
        engine.resize_rows(1)
        assert engine.redo() is False

    @pytest.mark.unit
    def test_nothing_to_undo(self, engine):
        """Undo on a fresh engine reports False."""
        assert engine.undo() is False
        assert engine.redo() is False

    @pytest.mark.unit
    def test_history_bounded(self):
        """At most history_limit undos are available."""
        engine = LayoutEngine(history_limit=50)
        for _ in range(60):
            engine.resize_rows(1)
        assert engine.history.undo_depth == 50
        undone = 0
        while engine.undo():
            undone += 1
        assert undone == 50

    @pytest.mark.unit
    def test_snapshots_are_independent(self, engine):
        """Later edits never leak into stored snapshots."""
        engine.commit_selection([_cell(0, 0)])
        engine.resize_columns(3)
        engine.undo()
        assert engine.active_config.grid.column_count == 4
        assert len(engine.active_config.children) == 1


class TestBreakpoints:
    """Tests for per-breakpoint isolation."""

    @pytest.mark.unit
    def test_edits_stay_on_active_breakpoint(self, engine):
        """Children and resizes only touch the active breakpoint."""
        engine.set_active_breakpoint(BreakpointId.MOBILE)
        engine.commit_selection([_cell(0, 0)])
        engine.resize_rows(1)

        breakpoints = engine.state.breakpoints
        assert len(breakpoints.mobile.children) == 1
        assert breakpoints.mobile.grid.row_count == 5
        assert breakpoints.desktop.children == ()
        assert breakpoints.desktop.grid.row_count == 3
        assert breakpoints.tablet.children == ()

    @pytest.mark.unit
    def test_switch_not_tracked(self, engine):
        """Switching breakpoints is not an undoable edit."""
        engine.set_active_breakpoint("tablet")
        assert engine.active_breakpoint == BreakpointId.TABLET
        assert not engine.can_undo


class TestPersistence:
    """Tests for export and import."""

    @pytest.mark.unit
    def test_round_trip(self, engine):
        """An exported layout imports to an equal state."""
        engine.commit_selection(_block(range(2), range(2)))
        engine.set_active_breakpoint(BreakpointId.TABLET)
        exported = engine.export_layout()

        other = LayoutEngine()
        assert other.import_layout(exported)
        assert other.state == engine.state

    @pytest.mark.unit
    def test_import_clears_history(self, engine):
        """Both stacks are emptied by a successful import."""
        engine.commit_selection([_cell(0, 0)])
        engine.resize_rows(1)
        engine.undo()
        assert engine.import_layout(export_layout_json(default_layout_state()))
        assert not engine.can_undo and not engine.can_redo

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "mutate",
        [
            lambda d: d.update(version=2),
            lambda d: d["layout"]["breakpoints"].pop("mobile"),
            lambda d: d["layout"].update(activeBreakpoint="watch"),
        ],
    )
    def test_invalid_import_keeps_state(self, engine, caplog, mutate):
        """Rejected documents leave the state and history untouched."""
        engine.commit_selection([_cell(0, 0)])
        before = engine.state
        document = json.loads(engine.export_layout())
        mutate(document)

        with caplog.at_level(logging.WARNING, logger="gridlayout.engine.lib"):
            assert engine.import_layout(json.dumps(document)) is False

        assert engine.state is before
        assert engine.can_undo
        assert "rejected" in caplog.text

    @pytest.mark.unit
    def test_malformed_json(self, engine):
        """Non-JSON input is rejected."""
        assert engine.import_layout("{not json") is False


class TestGeneration:
    """Tests for on-demand output."""

    @pytest.mark.unit
    def test_parent_class_override(self, engine):
        """The container class can be chosen per call."""
        assert engine.generate_css(parent_class="page").startswith(".page {")
        assert engine.generate_html(parent_class="page") == '<div class="page">\n</div>'

    @pytest.mark.unit
    def test_responsive(self, engine):
        """Responsive output contains both media blocks."""
        css = engine.generate_css(responsive=True)
        assert "@media (min-width: 768px)" in css
        assert "@media (min-width: 1200px)" in css


# =============================================================================
# InteractionSession and GridDesigner
# =============================================================================


class TestInteractionSession:
    """Tests for the transient session value."""

    @pytest.mark.unit
    def test_add_is_idempotent(self):
        """Re-entering a cell does not duplicate it."""
        session = InteractionSession().start(_cell(0, 0)).add(_cell(0, 1)).add(_cell(0, 0))
        assert session.pending_cells == (_cell(0, 0), _cell(0, 1))
        assert session.is_selecting

    @pytest.mark.unit
    def test_finish_keeps_selected_child(self):
        """Ending a drag leaves the child selection alone."""
        session = InteractionSession().select("abc").start(_cell(1, 1)).finish()
        assert session.pending_cells == ()
        assert not session.is_selecting
        assert session.selected_child_id == "abc"

    @pytest.mark.unit
    def test_cleared(self):
        """cleared() resets everything."""
        session = InteractionSession().select("abc").start(_cell(1, 1)).cleared()
        assert session == InteractionSession()


class TestGridDesigner:
    """Tests for the designer facade."""

    @pytest.mark.unit
    def test_drag_creates_child(self, designer):
        """start, add and end produce a child and clear the drag."""
        designer.start_selection(_cell(0, 0))
        designer.add_to_selection(_cell(1, 1))
        [child] = designer.end_selection()
        assert child.name == "child1"
        assert designer.pending_selection == ()
        assert not designer.is_selecting

    @pytest.mark.unit
    def test_rejected_drag_still_clears(self, designer):
        """A refused commit also resets the pending selection."""
        designer.start_selection(_cell(0, 0))
        [child] = designer.end_selection()
        designer.set_child_lock(child.id, True)

        designer.start_selection(_cell(0, 0))
        assert designer.end_selection() == []
        assert designer.pending_selection == ()

    @pytest.mark.unit
    def test_clear_selection(self, designer):
        """Cancelling a drag creates nothing."""
        designer.start_selection(_cell(0, 0))
        designer.clear_selection()
        assert designer.end_selection() == []
        assert not designer.can_undo

    @pytest.mark.unit
    def test_breakpoint_switch_resets_session(self, designer):
        """Selection context never crosses breakpoints."""
        designer.start_selection(_cell(0, 0))
        designer.select_child("x")
        designer.set_active_breakpoint(BreakpointId.MOBILE)
        assert designer.pending_selection == ()
        assert designer.selected_child_id is None

    @pytest.mark.unit
    def test_delete_selected_child(self, designer):
        """Deleting the selected child clears the selection."""
        designer.start_selection(_cell(0, 0))
        [first] = designer.end_selection()
        designer.start_selection(_cell(1, 1))
        [second] = designer.end_selection()

        designer.select_child(first.id)
        designer.delete_child(second.id)
        assert designer.selected_child_id == first.id
        designer.delete_child(first.id)
        assert designer.selected_child_id is None

    @pytest.mark.unit
    def test_undo_clears_selection_redo_keeps_it(self, designer):
        """Undo drops the selected child; redo does not touch it."""
        designer.start_selection(_cell(0, 0))
        [child] = designer.end_selection()
        designer.select_child(child.id)

        assert designer.undo()
        assert designer.selected_child_id is None

        designer.select_child(child.id)
        assert designer.redo()
        assert designer.selected_child_id == child.id
        assert designer.selected_child == child

    @pytest.mark.unit
    def test_import_clears_selection(self, designer):
        """A successful import drops the selected child."""
        designer.select_child("x")
        assert designer.import_layout(export_layout_json(default_layout_state()))
        assert designer.selected_child_id is None

    @pytest.mark.unit
    def test_failed_import_keeps_selection(self, designer):
        """A rejected import leaves the session alone."""
        designer.select_child("x")
        assert designer.import_layout("[]") is False
        assert designer.selected_child_id == "x"
