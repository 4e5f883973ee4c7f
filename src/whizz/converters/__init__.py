"""Whizz Data conversion API."""

from whizz.converters.xyz import default_whizz_path
from whizz.converters.xyz import xyz_to_whizz

__all__ = ["default_whizz_path", "xyz_to_whizz"]
