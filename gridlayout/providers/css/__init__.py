"""CSS output providers."""

from .lib import CSSAreasProvider, CSSProvider

__all__ = ["CSSProvider", "CSSAreasProvider"]
