"""Unit tests for the CSS providers."""

import pytest

from gridlayout.codegen import generate_full_css, generate_responsive_css
from gridlayout.schema import BreakpointConfig, GridCell, GridChild, default_grid_definition, default_layout_state

from .lib import CSSAreasProvider, CSSProvider


@pytest.fixture
def config() -> BreakpointConfig:
    cells = [GridCell(row=r, column=c) for r in range(2) for c in range(2)]
    return BreakpointConfig(
        grid=default_grid_definition(2, 2),
        children=[GridChild(id="a", name="child1", cells=cells)],
    )


class TestCSSProvider:
    """Tests for line-based CSS output."""

    @pytest.mark.unit
    def test_transpile(self, config):
        """Output matches the line-based generator."""
        css = CSSProvider().transpile(config, "wrap")
        assert css == generate_full_css(config, use_areas=False, parent_class="wrap")
        assert "grid-row: 1 / 3;\n  grid-column: 1 / 3;" in css

    @pytest.mark.unit
    def test_responsive(self):
        """Responsive output carries media queries."""
        state = default_layout_state()
        assert CSSProvider().transpile_state(state, responsive=True) == (
            generate_responsive_css(state, use_areas=False)
        )


class TestCSSAreasProvider:
    """Tests for named-area CSS output."""

    @pytest.mark.unit
    def test_transpile(self, config):
        """Output uses grid-template-areas and grid-area."""
        css = CSSAreasProvider().transpile(config)
        assert '"child1 child1"' in css
        assert "grid-area: child1;" in css

    @pytest.mark.unit
    def test_non_responsive_uses_active_config(self, config):
        """Single-breakpoint output renders the active configuration."""
        state = default_layout_state().with_config(config)
        assert CSSAreasProvider().transpile_state(state) == (
            generate_full_css(config, use_areas=True)
        )
