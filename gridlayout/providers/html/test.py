"""Unit tests for the HTML provider."""

import pytest

from gridlayout.schema import BreakpointId, GridChild, default_breakpoint_config, default_layout_state

from .lib import HTMLProvider


class TestHTMLProvider:
    """Tests for markup skeleton output."""

    @pytest.mark.unit
    def test_transpile(self):
        """One div per child inside the wrapper."""
        config = default_breakpoint_config().model_copy(
            update={"children": (GridChild(id="1", name="nav bar"),)}
        )
        assert HTMLProvider().transpile(config, "page") == (
            '<div class="page">\n  <div class="nav-bar"></div>\n</div>'
        )

    @pytest.mark.unit
    def test_responsive_flag_ignored(self):
        """Markup is the same with or without responsive output."""
        state = default_layout_state().with_active_breakpoint(BreakpointId.TABLET)
        provider = HTMLProvider()
        assert provider.transpile_state(state, responsive=True) == provider.transpile_state(state)
        assert provider.transpile_state(state) == '<div class="parent">\n</div>'
