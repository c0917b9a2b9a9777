"""Layout validation utilities."""

from .lib import ValidationError, is_valid, validate_config, validate_layout

__all__ = [
    "ValidationError",
    "validate_config",
    "validate_layout",
    "is_valid",
]
