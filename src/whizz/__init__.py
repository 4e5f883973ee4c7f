"""geoWhizz library."""

from __future__ import annotations

from importlib import metadata

from whizz.api.io import open_whizz
from whizz.api.io import open_whizz_line
from whizz.converters import xyz_to_whizz
from whizz.reporting import report_flights
from whizz.reporting import report_sampling
from whizz.reporting import report_whizz

try:
    __version__ = metadata.version("geowhizz")
except metadata.PackageNotFoundError:
    __version__ = "unknown"


__all__ = [
    "__version__",
    "open_whizz",
    "open_whizz_line",
    "report_flights",
    "report_sampling",
    "report_whizz",
    "xyz_to_whizz",
]
