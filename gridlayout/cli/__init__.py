"""Command line interface for gridlayout."""

from .lib import main, show_help

__all__ = ["main", "show_help"]
