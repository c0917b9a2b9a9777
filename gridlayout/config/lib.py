"""Environment configuration for gridlayout.

Every tunable lives in the `EnvVar` registry and is read through
`get_environment()`, which converts the raw string to the declared type.
An explicit override beats the process environment, which beats the
declared default.

Example:
    >>> from gridlayout.config import EnvVar, get_environment
    >>> get_environment(EnvVar.GRID_HISTORY_LIMIT)
    50
    >>> get_environment(EnvVar.GRID_HISTORY_LIMIT, override=10)
    10
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, overload

# =============================================================================
# Environment Variable Configuration
# =============================================================================


@dataclass(frozen=True)
class EnvConfig:
    """Declaration of one configuration variable.

    Attributes:
        name: Variable name in the process environment.
        default: Value used when the variable is unset or unparseable.
        var_type: Target type of the conversion (str, int, bool or Path).
        description: One-line explanation, shown by `gridlayout env`.
        category: Group used by `list_environment_variables()`.
    """

    name: str
    default: Any
    var_type: type
    description: str = ""
    category: str = "general"


class EnvVar(Enum):
    """All environment variables used by gridlayout.

    Member values are `EnvConfig` declarations.

    Categories:
        - grid: Editing limits of the layout engine
        - output: Code generation defaults
        - runtime: Logging and file locations
    """

    # -------------------------------------------------------------------------
    # Editing limits
    # -------------------------------------------------------------------------
    GRID_MAX_TRACKS = EnvConfig(
        name="GRID_MAX_TRACKS",
        default=20,
        var_type=int,
        description="Upper clamp for row and column counts",
        category="grid",
    )
    GRID_HISTORY_LIMIT = EnvConfig(
        name="GRID_HISTORY_LIMIT",
        default=50,
        var_type=int,
        description="Number of undo snapshots kept (oldest evicted first)",
        category="grid",
    )

    # -------------------------------------------------------------------------
    # Code generation
    # -------------------------------------------------------------------------
    GRID_PARENT_CLASS = EnvConfig(
        name="GRID_PARENT_CLASS",
        default="parent",
        var_type=str,
        description="Class name of the generated grid container",
        category="output",
    )
    GRID_USE_AREAS = EnvConfig(
        name="GRID_USE_AREAS",
        default=False,
        var_type=bool,
        description="Start new engines in named-area placement mode",
        category="output",
    )

    # -------------------------------------------------------------------------
    # Runtime
    # -------------------------------------------------------------------------
    GRID_LOG_LEVEL = EnvConfig(
        name="GRID_LOG_LEVEL",
        default="INFO",
        var_type=str,
        description="Log level for the command line tool",
        category="runtime",
    )
    GRID_LAYOUT_FILE = EnvConfig(
        name="GRID_LAYOUT_FILE",
        default=None,
        var_type=Path,
        description="Default layout export file used by the CLI",
        category="runtime",
    )


# =============================================================================
# Type Conversion Helpers
# =============================================================================


def _parse_bool(value: str) -> bool | None:
    """Parse string to boolean.

    Recognizes: true/false, 1/0, yes/no (case-insensitive).
    Returns None for unrecognized values.
    """
    normalized = value.lower().strip()
    if normalized in ("true", "1", "yes"):
        return True
    if normalized in ("false", "0", "no"):
        return False
    return None


def _convert_value(value: str | None, var_type: type, default: Any) -> Any:
    """Convert string value to target type.

    Args:
        value: Raw string value from environment (or None).
        var_type: Target Python type.
        default: Default value if conversion fails or value is None.

    Returns:
        Converted value or default.
    """
    if value is None:
        return default

    if var_type is str:
        return value

    if var_type is int:
        try:
            return int(value)
        except ValueError:
            return default

    if var_type is bool:
        result = _parse_bool(value)
        return result if result is not None else default

    if var_type is Path:
        return Path(value)

    # Unknown type, return as-is
    return value


# =============================================================================
# Main Interface
# =============================================================================


@overload
def get_environment(env_var: EnvVar, override: int) -> int: ...
@overload
def get_environment(env_var: EnvVar, override: str) -> str: ...
@overload
def get_environment(env_var: EnvVar, override: bool) -> bool: ...
@overload
def get_environment(env_var: EnvVar, override: Path) -> Path: ...
@overload
def get_environment(env_var: EnvVar, override: None = None) -> Any: ...


def get_environment(env_var: EnvVar, override: Any = None) -> Any:
    """Get environment variable value with type conversion.

    Resolution priority:
        1. Explicit override parameter (highest)
        2. Environment variable value
        3. Default from EnvConfig (lowest)

    Args:
        env_var: Environment variable enum member.
        override: Optional override value (bypasses env lookup).

    Returns:
        Value converted to the appropriate type (str, int, bool, or Path).

    Example:
        >>> get_environment(EnvVar.GRID_MAX_TRACKS)
        20
        >>> get_environment(EnvVar.GRID_MAX_TRACKS, override=12)
        12
    """
    config: EnvConfig = env_var.value

    if override is not None:
        return override

    raw_value = os.environ.get(config.name)
    return _convert_value(raw_value, config.var_type, config.default)


def get_environment_info(env_var: EnvVar) -> EnvConfig:
    """Get metadata for an environment variable."""
    return env_var.value


def list_environment_variables(category: str | None = None) -> list[EnvVar]:
    """List all environment variables, optionally filtered by category.

    Args:
        category: Filter by category (grid, output, runtime).
                 None returns all variables.

    Returns:
        List of EnvVar enum members.
    """
    if category is None:
        return list(EnvVar)

    return [var for var in EnvVar if var.value.category == category]


# =============================================================================
# Convenience Functions
# =============================================================================


def get_max_tracks(override: int | None = None) -> int:
    """Get the row/column clamp, never below 1."""
    return max(1, get_environment(EnvVar.GRID_MAX_TRACKS, override=override))


def get_history_limit(override: int | None = None) -> int:
    """Get the undo stack bound, never below 1."""
    return max(1, get_environment(EnvVar.GRID_HISTORY_LIMIT, override=override))


def get_parent_class(override: str | None = None) -> str:
    """Get the grid container class name."""
    return get_environment(EnvVar.GRID_PARENT_CLASS, override=override or None)


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
