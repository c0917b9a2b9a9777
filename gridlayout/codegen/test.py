"""Unit tests for CSS and HTML generation."""

from types import SimpleNamespace

import pytest

from gridlayout.schema import (
    BreakpointConfig,
    BreakpointId,
    GridCell,
    GridChild,
    PlaceItems,
    SelfAlignment,
    auto,
    default_grid_definition,
    default_layout_state,
    fr,
    minmax,
    percent,
    px,
)

from .lib import (
    format_track_size,
    generate_child_css,
    generate_child_css_area,
    generate_full_css,
    generate_html,
    generate_parent_grid_css,
    generate_parent_grid_css_with_areas,
    generate_responsive_css,
    generate_template_areas,
    get_child_placement,
    resolve_area_name,
    to_class_name,
)


def _child(name: str, rows: range, cols: range, **kwargs) -> GridChild:
    cells = [GridCell(row=r, column=c) for r in rows for c in cols]
    return GridChild(id=f"id-{name}", name=name, cells=cells, **kwargs)


DEFAULT_PARENT = """.parent {
  display: grid;
  grid-template-rows: 1fr 1fr 1fr;
  grid-template-columns: 1fr 1fr 1fr 1fr;
  gap: 16px;
}"""


class TestFormatting:
    """Tests for small formatting helpers."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("size", "expected"),
        [
            (fr(1), "1fr"),
            (fr(2.5), "2.5fr"),
            (fr(2.0), "2fr"),
            (px(200), "200px"),
            (percent(25), "25%"),
            (auto(), "auto"),
            (minmax("100px", "1fr"), "minmax(100px, 1fr)"),
        ],
    )
    def test_format_track_size(self, size, expected):
        """Each variant renders its CSS form."""
        assert format_track_size(size) == expected

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "corrupt",
        [None, {"type": "fr", "value": 3}, SimpleNamespace(type="vh", value=10), "2fr"],
    )
    def test_unknown_track_defaults_to_one_fr(self, corrupt):
        """Unrecognized values never raise."""
        assert format_track_size(corrupt) == "1fr"

    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("header", "header"),
            ("  main   content ", "main-content"),
            ("side\tbar\nleft", "side-bar-left"),
            ("", "child"),
            ("   ", "child"),
            (None, "child"),
        ],
    )
    def test_to_class_name(self, name, expected):
        """Whitespace collapses to hyphens; blank names become 'child'."""
        assert to_class_name(name) == expected

    @pytest.mark.unit
    def test_resolve_area_name(self):
        """area_name wins over name; blank stays blank."""
        assert resolve_area_name(_child("main content", range(1), range(1))) == "main-content"
        assert resolve_area_name(_child("x", range(1), range(1), area_name="hero")) == "hero"
        assert resolve_area_name(_child("x", range(1), range(1), area_name="  ")) == ""


class TestPlacement:
    """Tests for get_child_placement."""

    @pytest.mark.unit
    def test_empty_is_auto(self):
        """No cells places the child automatically."""
        placement = get_child_placement([])
        assert (placement.row, placement.column) == ("auto", "auto")

    @pytest.mark.unit
    def test_single_cell_uses_single_line(self):
        """A one-track span is written as its start line only."""
        assert get_child_placement([GridCell(row=2, column=0)]) == ("3", "1")

    @pytest.mark.unit
    def test_span(self):
        """Spans use inclusive-exclusive lines."""
        cells = _child("a", range(0, 2), range(1, 4)).cells
        assert get_child_placement(cells) == ("1 / 3", "2 / 5")


class TestParentCSS:
    """Tests for the grid container rule."""

    @pytest.mark.unit
    def test_default_grid(self):
        """Default grid renders tracks and gap shorthand."""
        assert generate_parent_grid_css(default_grid_definition()) == DEFAULT_PARENT

    @pytest.mark.unit
    def test_gap_split_when_axes_differ(self):
        """Differing gaps produce row-gap and column-gap lines."""
        grid = default_grid_definition().model_copy(update={"column_gap": 8})
        css = generate_parent_grid_css(grid)
        assert "  row-gap: 16px;\n  column-gap: 8px;" in css
        assert "  gap:" not in css

    @pytest.mark.unit
    def test_place_items_omitted_for_stretch(self):
        """stretch is the default and is not written."""
        assert "place-items" not in generate_parent_grid_css(default_grid_definition())

    @pytest.mark.unit
    @pytest.mark.parametrize("value", [PlaceItems.CENTER, "center"])
    def test_place_items_written_otherwise(self, value):
        """Non-default alignment is the last declaration."""
        grid = default_grid_definition().model_copy(update={"place_items": value})
        css = generate_parent_grid_css(grid, "layout")
        assert css.startswith(".layout {")
        assert css.endswith("  gap: 16px;\n  place-items: center;\n}")

    @pytest.mark.unit
    def test_mismatched_sizes_fall_back_to_repeat(self):
        """A track list that doesn't match the count is treated as unspecified."""
        grid = default_grid_definition().model_copy(
            update={"row_count": 5, "column_sizes": (px(100), auto(), fr(2), fr(1))}
        )
        css = generate_parent_grid_css(grid)
        assert "grid-template-rows: repeat(5, 1fr);" in css
        assert "grid-template-columns: 100px auto 2fr 1fr;" in css


class TestChildCSS:
    """Tests for line-based child rules."""

    @pytest.mark.unit
    def test_two_by_two_child(self):
        """A 2x2 block at the origin spans lines 1 to 3."""
        child = _child("child1", range(2), range(2))
        assert generate_child_css(child) == (
            ".child1 {\n  grid-row: 1 / 3;\n  grid-column: 1 / 3;\n}"
        )

    @pytest.mark.unit
    def test_self_alignment_and_class_override(self):
        """Self alignment lines follow placement; class can be overridden."""
        child = _child(
            "card",
            range(1, 2),
            range(0, 1),
            justify_self=SelfAlignment.END,
            align_self="center",
        )
        assert generate_child_css(child, "My Card") == (
            ".My-Card {\n  grid-row: 2;\n  grid-column: 1;\n"
            "  justify-self: end;\n  align-self: center;\n}"
        )


class TestTemplateAreas:
    """Tests for grid-template-areas generation."""

    @pytest.mark.unit
    def test_matrix(self):
        """Children paint their boxes; uncovered cells stay '.'."""
        children = [
            _child("header", range(0, 1), range(0, 3)),
            _child("side bar", range(1, 3), range(0, 1)),
        ]
        assert generate_template_areas(3, 3, children) == (
            '"header header header"\n  "side-bar . ."\n  "side-bar . ."'
        )

    @pytest.mark.unit
    def test_later_child_overwrites_overlap(self):
        """Overlapping boxes are last-write-wins by list order."""
        children = [
            _child("a", range(0, 1), range(0, 2)),
            _child("b", range(0, 1), range(1, 2)),
        ]
        assert generate_template_areas(1, 2, children) == '"a b"'

    @pytest.mark.unit
    def test_blank_area_and_empty_children_skipped(self):
        """Blank names and cell-less children leave cells empty."""
        children = [
            _child("x", range(0, 1), range(0, 1), area_name=" "),
            GridChild(id="empty", name="ghost"),
        ]
        assert generate_template_areas(1, 2, children) == '". ."'

    @pytest.mark.unit
    def test_cells_outside_grid_ignored(self):
        """Boxes are clipped to the grid after a shrink."""
        children = [_child("wide", range(0, 3), range(1, 5))]
        assert generate_template_areas(2, 2, children) == '". wide"\n  ". wide"'


class TestAreaCSS:
    """Tests for named-area rules."""

    @pytest.mark.unit
    def test_parent_with_areas(self):
        """Areas block precedes the track declarations."""
        grid = default_grid_definition(2, 2)
        children = [_child("nav", range(0, 1), range(0, 2))]
        assert generate_parent_grid_css_with_areas(grid, children) == (
            ".parent {\n"
            "  display: grid;\n"
            "  grid-template-areas:\n"
            '  "nav nav"\n'
            '  ". .";\n'
            "  grid-template-rows: 1fr 1fr;\n"
            "  grid-template-columns: 1fr 1fr;\n"
            "  gap: 16px;\n"
            "}"
        )

    @pytest.mark.unit
    def test_parent_without_children_falls_back(self):
        """No children means no areas block."""
        grid = default_grid_definition()
        assert generate_parent_grid_css_with_areas(grid, []) == generate_parent_grid_css(grid)

    @pytest.mark.unit
    def test_child_area_rule(self):
        """Children reference their area by name."""
        child = _child("main", range(1), range(1), area_name="content", align_self="end")
        assert generate_child_css_area(child) == (
            ".main {\n  grid-area: content;\n  align-self: end;\n}"
        )

    @pytest.mark.unit
    def test_child_blank_area_falls_back_to_lines(self):
        """A blank area name produces a line-based rule for that child."""
        child = _child("main", range(0, 2), range(0, 1), area_name="")
        assert generate_child_css_area(child) == generate_child_css(child)


class TestFullOutput:
    """Tests for whole-breakpoint and whole-layout output."""

    @pytest.mark.unit
    def test_empty_child_list_is_parent_only(self):
        """No children, no child rules, in both strategies."""
        config = BreakpointConfig(grid=default_grid_definition())
        assert generate_full_css(config, use_areas=False) == DEFAULT_PARENT
        assert generate_full_css(config, use_areas=True) == DEFAULT_PARENT

    @pytest.mark.unit
    def test_rules_separated_by_blank_lines(self):
        """Container and child rules are joined with blank lines."""
        config = BreakpointConfig(
            grid=default_grid_definition(),
            children=[_child("a", range(1), range(1)), _child("b", range(1), range(1, 2))],
        )
        blocks = generate_full_css(config, use_areas=False).split("\n\n")
        assert len(blocks) == 3
        assert blocks[1].startswith(".a {")
        assert blocks[2].startswith(".b {")

    @pytest.mark.unit
    def test_area_strategy_dispatch(self):
        """use_areas switches both container and child generators."""
        config = BreakpointConfig(
            grid=default_grid_definition(1, 1),
            children=[_child("solo", range(1), range(1))],
        )
        css = generate_full_css(config, use_areas=True, parent_class="wrap")
        assert css.startswith(".wrap {")
        assert 'grid-template-areas:\n  "solo";' in css
        assert css.endswith(".solo {\n  grid-area: solo;\n}")

    @pytest.mark.unit
    def test_html(self):
        """One wrapper with one empty div per child, in order."""
        children = [_child("site header", range(1), range(1)), _child("main", range(1), range(1))]
        assert generate_html(children) == (
            '<div class="parent">\n'
            '  <div class="site-header"></div>\n'
            '  <div class="main"></div>\n'
            "</div>"
        )

    @pytest.mark.unit
    def test_html_without_children(self):
        """An empty layout still renders the wrapper."""
        assert generate_html([], "grid") == '<div class="grid">\n</div>'

    @pytest.mark.unit
    def test_responsive_order_and_media(self):
        """Mobile unwrapped, then tablet and desktop media blocks."""
        state = default_layout_state()
        css = generate_responsive_css(state, use_areas=False)

        mobile = generate_full_css(state.breakpoints.get(BreakpointId.MOBILE), False)
        tablet = generate_full_css(state.breakpoints.get(BreakpointId.TABLET), False)
        desktop = generate_full_css(state.breakpoints.get(BreakpointId.DESKTOP), False)
        assert css == (
            f"{mobile}\n\n"
            f"@media (min-width: 768px) {{\n{tablet}\n}}\n\n"
            f"@media (min-width: 1200px) {{\n{desktop}\n}}"
        )
        assert "min-width: 0px" not in css
