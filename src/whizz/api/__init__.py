"""Public API for reading Whizz datasets."""

from whizz.api.io import list_lines
from whizz.api.io import open_whizz
from whizz.api.io import open_whizz_line
from whizz.api.io import read_metadata

__all__ = ["list_lines", "open_whizz", "open_whizz_line", "read_metadata"]
