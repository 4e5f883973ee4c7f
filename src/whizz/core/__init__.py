"""Whizz core functionality."""

from whizz.core.config import WhizzSettings
from whizz.core.config import get_settings

__all__ = ["WhizzSettings", "get_settings"]
