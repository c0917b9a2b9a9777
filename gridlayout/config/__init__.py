"""Centralized configuration management for gridlayout.

Provides unified access to all configuration via the `get_environment()` function.

Example:
    >>> from gridlayout.config import EnvVar, get_environment
    >>>
    >>> limit = get_environment(EnvVar.GRID_HISTORY_LIMIT)  # Returns int: 50
    >>> limit = get_environment(EnvVar.GRID_HISTORY_LIMIT, override=10)

Environment Variable Categories:
    grid: Editing limits (track clamp, undo depth)
    output: Code generation defaults (parent class, placement strategy)
    runtime: Log level and default layout file
"""

from .lib import (
    # Core types
    EnvConfig,
    EnvVar,
    # Main interface
    get_environment,
    get_environment_info,
    get_history_limit,
    get_max_tracks,
    get_parent_class,
    # Introspection
    list_environment_variables,
)

__all__ = [
    # Core types
    "EnvConfig",
    "EnvVar",
    # Main interface
    "get_environment",
    "get_environment_info",
    # Convenience functions
    "get_max_tracks",
    "get_history_limit",
    "get_parent_class",
    # Introspection
    "list_environment_variables",
]
