"""Unit tests for the providers module.

Tests for:
- LayoutProvider abstract base class
- Provider registry (register_provider, get_provider, list_providers)
- Warning collection
"""

import pytest

from gridlayout.providers import (
    LayoutProvider,
    TranspilationResult,
    get_provider,
    list_providers,
)
from gridlayout.schema import (
    BreakpointConfig,
    BreakpointId,
    GridChild,
    default_grid_definition,
    default_layout_state,
)


class TestLayoutProviderContract:
    """Tests for LayoutProvider abstract base class contract."""

    @pytest.mark.unit
    def test_layout_provider_is_abstract(self):
        """LayoutProvider cannot be instantiated directly."""
        with pytest.raises(TypeError, match="abstract"):
            LayoutProvider()  # type: ignore

    @pytest.mark.unit
    def test_concrete_provider_requires_transpile(self):
        """Concrete providers must implement transpile method."""

        class IncompleteProvider(LayoutProvider):
            @property
            def name(self) -> str:
                return "incomplete"

            @property
            def file_extension(self) -> str:
                return ".test"

        with pytest.raises(TypeError, match="abstract"):
            IncompleteProvider()

    @pytest.mark.unit
    def test_default_transpile_state_uses_active_breakpoint(self):
        """Providers without a responsive form render the active config."""

        class SizeProvider(LayoutProvider):
            @property
            def name(self) -> str:
                return "size"

            @property
            def file_extension(self) -> str:
                return ".txt"

            def transpile(self, config, parent_class="parent") -> str:
                return f"{config.grid.row_count}x{config.grid.column_count}"

        state = default_layout_state().with_active_breakpoint(BreakpointId.MOBILE)
        assert SizeProvider().transpile_state(state, responsive=True) == "4x2"


class TestProviderRegistry:
    """Tests for provider registry functions."""

    @pytest.mark.unit
    def test_list_providers(self):
        """Built-in providers are discovered."""
        assert list_providers() == ["css", "css-areas", "html"]

    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("name", "extension"),
        [("css", ".css"), ("css-areas", ".css"), ("html", ".html")],
    )
    def test_get_provider(self, name, extension):
        """Each provider is returned by name."""
        provider = get_provider(name)
        assert isinstance(provider, LayoutProvider)
        assert provider.name == name
        assert provider.file_extension == extension

    @pytest.mark.unit
    def test_get_provider_unknown_raises(self):
        """Unknown provider names raise KeyError listing what exists."""
        with pytest.raises(KeyError, match="Available: css, css-areas, html"):
            get_provider("scss")


class TestTranspileWithWarnings:
    """Tests for TranspilationResult and warning collection."""

    @pytest.mark.unit
    def test_clean_layout_has_no_warnings(self):
        """The default layout renders without findings."""
        result = get_provider("css").transpile_with_warnings(default_layout_state())
        assert isinstance(result, TranspilationResult)
        assert result.provider == "css"
        assert result.code.startswith(".parent {")
        assert not result.has_warnings

    @pytest.mark.unit
    def test_warnings_scoped_to_rendered_breakpoints(self):
        """Only the active breakpoint is checked unless responsive."""
        broken = BreakpointConfig(
            grid=default_grid_definition(4, 2),
            children=[GridChild(id="ghost", name="ghost")],
        )
        state = default_layout_state().with_config(broken, BreakpointId.MOBILE)
        provider = get_provider("css")

        assert not provider.transpile_with_warnings(state).has_warnings

        result = provider.transpile_with_warnings(state, responsive=True)
        assert [w.error_type for w in result.warnings] == ["empty_cells"]
        assert result.warnings[0].breakpoint == "mobile"
