"""Core utilities shared across gridlayout packages."""

from .log import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
