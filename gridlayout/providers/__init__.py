"""Layout provider abstraction and registry."""

from .lib import (
    LayoutProvider,
    TranspilationResult,
    get_provider,
    list_providers,
    register_provider,
)

__all__ = [
    "LayoutProvider",
    "TranspilationResult",
    "get_provider",
    "list_providers",
    "register_provider",
]
