"""Shared helpers for blogstore"""

from blogstore.utils.logging import configure_logging, get_logger
from blogstore.utils.text import slugify

__all__ = ["configure_logging", "get_logger", "slugify"]
