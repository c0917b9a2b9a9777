"""Provider abstraction for layout code generation.

This module defines the abstract base class for output providers and
provides a registry/factory for accessing them by name.
"""

import importlib
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from gridlayout.codegen import DEFAULT_PARENT_CLASS
from gridlayout.schema import BreakpointConfig, LayoutState
from gridlayout.validation import ValidationError, validate_config, validate_layout


@dataclass
class TranspilationResult:
    """Result of generation including code and any validation warnings.

    Attributes:
        code: The generated source text.
        warnings: Advisory findings about the rendered layout.
        provider: Name of the provider that generated this result.
    """

    code: str
    warnings: list[ValidationError] = field(default_factory=list)
    provider: str = ""

    @property
    def has_warnings(self) -> bool:
        """Check if any warnings were emitted."""
        return len(self.warnings) > 0


class LayoutProvider(ABC):
    """Abstract base class for layout output providers.

    Each provider renders a breakpoint configuration (or a whole layout)
    into one output language.

    Subclasses must implement:
        - name: Provider identifier string
        - file_extension: Output file extension
        - transpile: Breakpoint configuration to source text

    Optionally override transpile_state for multi-breakpoint output.

    Example:
        >>> class MyProvider(LayoutProvider):
        ...     name = "txt"
        ...     file_extension = ".txt"
        ...     def transpile(self, config, parent_class="parent") -> str:
        ...         return f"{config.grid.row_count}x{config.grid.column_count}"
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider identifier string."""
        ...

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Output file extension (e.g., '.css', '.html')."""
        ...

    @abstractmethod
    def transpile(
        self, config: BreakpointConfig, parent_class: str = DEFAULT_PARENT_CLASS
    ) -> str:
        """Render one breakpoint configuration.

        Args:
            config: Configuration to render.
            parent_class: Class name of the grid container.

        Returns:
            str: Generated source text.
        """
        ...

    def transpile_state(
        self,
        state: LayoutState,
        parent_class: str = DEFAULT_PARENT_CLASS,
        responsive: bool = False,
    ) -> str:
        """Render a whole layout.

        Default implementation renders the active breakpoint only;
        providers with a responsive form override this.
        """
        return self.transpile(state.active_config, parent_class)

    def transpile_with_warnings(
        self,
        state: LayoutState,
        parent_class: str = DEFAULT_PARENT_CLASS,
        responsive: bool = False,
    ) -> TranspilationResult:
        """Render and collect validation warnings for the rendered breakpoints.

        Args:
            state: Layout to render.
            parent_class: Class name of the grid container.
            responsive: Render every breakpoint, where supported.

        Returns:
            TranspilationResult with code and warnings.
        """
        code = self.transpile_state(state, parent_class, responsive)
        if responsive:
            warnings = validate_layout(state)
        else:
            warnings = validate_config(state.active_config, state.active_breakpoint)
        return TranspilationResult(code=code, warnings=warnings, provider=self.name)


# Provider registry - populated by provider modules on import
_registry: dict[str, type[LayoutProvider]] = {}

_PROVIDER_MODULES = ("css", "html")


def register_provider(provider_cls: type[LayoutProvider]) -> type[LayoutProvider]:
    """Register a provider class in the registry.

    Uses a temporary instance to retrieve the provider name.

    Args:
        provider_cls: The provider class to register.

    Returns:
        The provider class (for decorator chaining).
    """
    _registry[provider_cls().name] = provider_cls
    return provider_cls


def get_provider(name: str) -> LayoutProvider:
    """Get a provider instance by name.

    Args:
        name: The provider identifier (e.g., "css", "html").

    Returns:
        LayoutProvider: An instance of the requested provider.

    Raises:
        KeyError: If no provider with the given name is registered.

    Example:
        >>> provider = get_provider("css-areas")
        >>> provider.transpile(state.active_config)
    """
    if name not in _registry:
        _import_providers()
        if name not in _registry:
            available = ", ".join(sorted(_registry)) or "(none)"
            raise KeyError(f"Unknown provider '{name}'. Available: {available}")
    return _registry[name]()


def list_providers() -> list[str]:
    """List all registered provider names.

    Example:
        >>> list_providers()
        ['css', 'css-areas', 'html']
    """
    _import_providers()
    return sorted(_registry)


def _import_providers() -> None:
    """Import provider modules to trigger registration."""
    for module_name in _PROVIDER_MODULES:
        importlib.import_module(f"gridlayout.providers.{module_name}")


__all__ = [
    "LayoutProvider",
    "TranspilationResult",
    "register_provider",
    "get_provider",
    "list_providers",
]
