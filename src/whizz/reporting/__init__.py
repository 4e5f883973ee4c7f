"""Reports on materialized Whizz datasets."""

from whizz.reporting.geometry import linelength
from whizz.reporting.summary import DistanceFlown
from whizz.reporting.summary import SamplingStats
from whizz.reporting.summary import WhizzReport
from whizz.reporting.summary import distance_flown
from whizz.reporting.summary import report_flights
from whizz.reporting.summary import report_sampling
from whizz.reporting.summary import report_whizz
from whizz.reporting.summary import title_string

__all__ = [
    "DistanceFlown",
    "SamplingStats",
    "WhizzReport",
    "distance_flown",
    "linelength",
    "report_flights",
    "report_sampling",
    "report_whizz",
    "title_string",
]
