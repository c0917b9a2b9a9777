"""Integration tests for the designer workflow.

Tests the full editing lifecycle across modules:
1. Drag selections into children -> CSS and HTML reflect them
2. Edit other breakpoints -> responsive CSS carries each one
3. Export, import into a fresh designer -> identical output
4. Undo/redo across all of the above
"""

import pytest

from gridlayout import GridCell, GridDesigner, LayoutEngine
from gridlayout.providers import get_provider
from gridlayout.schema import BreakpointId
from gridlayout.validation import is_valid


def _drag(designer: GridDesigner, start: tuple[int, int], end: tuple[int, int]):
    designer.start_selection(GridCell(row=start[0], column=start[1]))
    designer.add_to_selection(GridCell(row=end[0], column=end[1]))
    return designer.end_selection()


@pytest.mark.integration
def test_build_holy_grail_layout(designer):
    """Four drags produce a named, valid, responsive layout."""
    for start, end, name in [
        ((0, 0), (0, 3), "header"),
        ((1, 0), (1, 0), "sidebar"),
        ((1, 1), (1, 3), "content"),
        ((2, 0), (2, 3), "footer"),
    ]:
        [child] = _drag(designer, start, end)
        designer.set_child_name(child.id, name)

    css = designer.generate_css()
    assert ".header {\n  grid-row: 1;\n  grid-column: 1 / 5;\n}" in css
    assert ".sidebar {\n  grid-row: 2;\n  grid-column: 1;\n}" in css
    assert ".content {\n  grid-row: 2;\n  grid-column: 2 / 5;\n}" in css
    assert designer.generate_html().count("<div") == 5
    assert is_valid(designer.state)

    designer.set_use_named_areas(True)
    areas = designer.generate_css()
    assert '"sidebar content content content"' in areas


@pytest.mark.integration
def test_breakpoints_are_independent(designer):
    """Mobile edits show up only inside the mobile rules."""
    _drag(designer, (0, 0), (1, 1))
    designer.set_active_breakpoint(BreakpointId.MOBILE)
    _drag(designer, (0, 0), (0, 1))
    designer.resize_rows(-1)

    css = designer.generate_css(responsive=True)
    mobile, rest = css.split("@media (min-width: 768px)", 1)
    assert "grid-template-rows: 1fr 1fr 1fr;" in mobile
    assert ".child1 {\n  grid-row: 1;\n  grid-column: 1 / 3;\n}" in mobile
    assert ".child1 {\n  grid-row: 1 / 3;\n  grid-column: 1 / 3;\n}" in rest.split(
        "@media (min-width: 1200px)"
    )[1]


@pytest.mark.integration
def test_export_import_reproduces_output(designer, sample_state):
    """A layout survives a round trip through the export format."""
    designer.engine.state = sample_state
    designer.set_active_breakpoint(BreakpointId.TABLET)
    _drag(designer, (0, 0), (2, 0))
    exported = designer.export_layout()

    restored = GridDesigner(LayoutEngine(use_named_areas=False))
    assert restored.import_layout(exported)
    assert restored.state == designer.state
    assert restored.generate_css(responsive=True) == designer.generate_css(responsive=True)
    assert not restored.can_undo


@pytest.mark.integration
def test_undo_whole_session(designer):
    """Undoing every edit returns to the initial layout; redo replays it."""
    initial = designer.state
    _drag(designer, (0, 0), (1, 1))
    designer.resize_columns(2)
    [child] = _drag(designer, (2, 4), (2, 5))
    designer.delete_child(child.id)
    final = designer.state

    steps = 0
    while designer.undo():
        steps += 1
    assert steps == 4
    assert designer.state == initial

    while designer.redo():
        pass
    assert designer.state == final


@pytest.mark.integration
def test_provider_output_matches_engine(designer):
    """Providers and the engine render the same CSS."""
    _drag(designer, (0, 0), (1, 1))
    provider = get_provider("css")
    assert provider.transpile_state(designer.state) == designer.generate_css()
