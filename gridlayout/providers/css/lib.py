"""CSS providers for grid layouts.

Two flavours share one implementation:
- ``css``: line-based placement (``grid-row`` / ``grid-column``)
- ``css-areas``: named areas (``grid-template-areas`` / ``grid-area``)

Example output (``css``):
    ```css
    .parent {
      display: grid;
      grid-template-rows: 1fr 1fr;
      grid-template-columns: 1fr 1fr;
      gap: 16px;
    }

    .child1 {
      grid-row: 1 / 3;
      grid-column: 1 / 3;
    }
    ```
"""

from gridlayout.codegen import (
    DEFAULT_PARENT_CLASS,
    generate_full_css,
    generate_responsive_css,
)
from gridlayout.providers.lib import LayoutProvider, register_provider
from gridlayout.schema import BreakpointConfig, LayoutState


@register_provider
class CSSProvider(LayoutProvider):
    """Line-based CSS output."""

    use_areas = False

    @property
    def name(self) -> str:
        return "css"

    @property
    def file_extension(self) -> str:
        return ".css"

    def transpile(
        self, config: BreakpointConfig, parent_class: str = DEFAULT_PARENT_CLASS
    ) -> str:
        return generate_full_css(config, self.use_areas, parent_class)

    def transpile_state(
        self,
        state: LayoutState,
        parent_class: str = DEFAULT_PARENT_CLASS,
        responsive: bool = False,
    ) -> str:
        """Render the active breakpoint, or all three behind media queries."""
        if responsive:
            return generate_responsive_css(state, self.use_areas, parent_class)
        return self.transpile(state.active_config, parent_class)


@register_provider
class CSSAreasProvider(CSSProvider):
    """Named-area CSS output."""

    use_areas = True

    @property
    def name(self) -> str:
        return "css-areas"


__all__ = ["CSSProvider", "CSSAreasProvider"]
