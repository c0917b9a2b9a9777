"""HTML output provider."""

from .lib import HTMLProvider

__all__ = ["HTMLProvider"]
