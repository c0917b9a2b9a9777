"""HTML skeleton provider.

Emits the wrapper element and one empty ``div`` per child of the active
breakpoint. Markup does not vary per breakpoint, so responsive output is
the same as single-breakpoint output.
"""

from gridlayout.codegen import DEFAULT_PARENT_CLASS, generate_html
from gridlayout.providers.lib import LayoutProvider, register_provider
from gridlayout.schema import BreakpointConfig


@register_provider
class HTMLProvider(LayoutProvider):
    """Markup skeleton output."""

    @property
    def name(self) -> str:
        return "html"

    @property
    def file_extension(self) -> str:
        return ".html"

    def transpile(
        self, config: BreakpointConfig, parent_class: str = DEFAULT_PARENT_CLASS
    ) -> str:
        return generate_html(config.children, parent_class)


__all__ = ["HTMLProvider"]
