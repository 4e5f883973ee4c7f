"""Summaries of a materialized Whizz dataset.

Reports only read the dataset. They return pydantic models, rendering is left to the caller.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from typing import Any

import numpy as np
from pydantic import BaseModel
from pydantic import Field

from whizz.api.io import list_lines
from whizz.api.io import open_whizz
from whizz.api.io import open_whizz_line
from whizz.api.io import read_metadata
from whizz.constants import LINES_GROUP
from whizz.exceptions import WhizzNotFoundError
from whizz.reporting.geometry import linelength
from whizz.reporting.geometry import mask_missing
from whizz.schemas.metadata import WhizzMetadata

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from upath import UPath


class DistanceFlown(BaseModel):
    """Number of lines and their cumulative length."""

    num_lines: int
    distance_km: float | None = None

    def __str__(self) -> str:
        if self.distance_km is None:
            return f"{self.num_lines} lines: total distance flown unknown (no easting/northing)."
        return f"{self.num_lines} lines: total distance flown = {self.distance_km:.3f} km."


class WhizzReport(BaseModel):
    """Overview of a Whizz dataset and one of its lines."""

    filename: str
    metadata: WhizzMetadata
    line_ids: list[str]
    distance: DistanceFlown
    line: str | None = None
    line_attributes: dict[str, Any] = Field(default_factory=dict)
    channels: list[str] = Field(default_factory=list)
    channel: str | None = None
    channel_attributes: dict[str, Any] = Field(default_factory=dict)


class SamplingStats(BaseModel):
    """Statistics of the time and distance between consecutive fiducials."""

    min_dt: float
    max_dt: float
    mean_dt: float
    min_dd: float
    max_dd: float
    mean_dd: float

    def __str__(self) -> str:
        return (
            "Sample time and distance statistics\n"
            f"  Min  = {self.min_dt:.3f} s, {self.min_dd:.1f} m\n"
            f"  Max  = {self.max_dt:.3f} s, {self.max_dd:.1f} m\n"
            f"  Mean = {self.mean_dt:.3f} s, {self.mean_dd:.1f} m"
        )


def title_string(metadata: WhizzMetadata) -> str:
    """Plot or report title built from the project attributes of a dataset."""
    title = ""
    join = ""
    if metadata.project_name:
        title = f"Project {metadata.project_name}"
        join = ", "
    if metadata.block_name:
        title += f"{join}Block {metadata.block_name}"
    join = "\n    "
    if metadata.acquirer:
        title += f"{join}Acquired by {metadata.acquirer}"
        join = ", "
    if metadata.acquirer_project_id:
        title += f"{join}Acquirer project ID: {metadata.acquirer_project_id}"
    return title


def distance_flown(input_path: UPath | Path | str) -> DistanceFlown:
    """Count the lines of a dataset and sum their lengths in km.

    The length needs the ``northing`` and ``easting`` attributes of the dataset to name existing
    channels. Otherwise only the line count is returned.
    """
    root = open_whizz(input_path)
    metadata = read_metadata(root)
    lines = list_lines(root)

    if not (metadata.northing and metadata.easting):
        return DistanceFlown(num_lines=len(lines))

    total = 0.0
    for line_id in lines:
        line_ds = open_whizz_line(input_path, line_id)
        northing = mask_missing(line_ds[metadata.northing].values, metadata.missing_value)
        easting = mask_missing(line_ds[metadata.easting].values, metadata.missing_value)
        total += linelength(easting, northing)

    return DistanceFlown(num_lines=len(lines), distance_km=total / 1000.0)


def report_whizz(
    input_path: UPath | Path | str,
    line: str | None = None,
    channel: str | None = None,
) -> WhizzReport:
    """Summarize the contents of a Whizz dataset.

    Args:
        input_path: Universal path of the Whizz dataset.
        line: Survey line to report the attributes and channels of. Defaults to the first line.
        channel: Channel of that line to report the attributes of.

    Returns:
        The report.

    Raises:
        WhizzNotFoundError: If the line or channel doesn't exist.
    """
    root = open_whizz(input_path)
    metadata = read_metadata(root)
    line_ids = list_lines(root)
    report = WhizzReport(
        filename=str(input_path).rstrip("/").split("/")[-1],
        metadata=metadata,
        line_ids=line_ids,
        distance=distance_flown(input_path),
    )
    if not line_ids:
        return report

    if line is None:
        line = line_ids[0]
    if line not in line_ids:
        msg = f"Line {line} not found, available lines: {line_ids}"
        raise WhizzNotFoundError(msg)

    line_group = root[LINES_GROUP][line]
    report.line = line
    report.line_attributes = dict(line_group.attrs)
    report.channels = list(line_group.attrs.get("channels") or sorted(line_group.array_keys()))

    if channel is not None:
        if channel not in report.channels:
            msg = f"Channel {channel} not found in line {line}"
            raise WhizzNotFoundError(msg)
        report.channel = channel
        report.channel_attributes = dict(line_group[channel].attrs)

    return report


def _flight_label(value: Any) -> str:  # noqa: ANN401
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def report_flights(
    input_path: UPath | Path | str,
    flight_channel: str = "FLIGHT",
    lines: Sequence[str] | None = None,
) -> dict[str, list[str]]:
    """Group the lines of a dataset by flight.

    The flight of a line is the first value of its ``flight_channel``. Lines without that
    channel fall back to the flight number taken from ``//FLIGHT`` annotations.

    Returns:
        Line identifiers of each flight, flights in order of first appearance.
    """
    root = open_whizz(input_path)
    metadata = read_metadata(root)
    if lines is None:
        lines = list_lines(root)

    flights: dict[str, list[str]] = {}
    for line_id in lines:
        line_group = root[LINES_GROUP][line_id]
        flight: Any = None
        if flight_channel in line_group and line_group[flight_channel].shape[0] > 0:
            first = float(line_group[flight_channel][0])
            if first != metadata.missing_value:
                flight = first
        if flight is None:
            flight = line_group.attrs.get("flight")
        label = "unknown" if flight is None else _flight_label(flight)
        flights.setdefault(label, []).append(line_id)

    return flights


def report_sampling(
    input_path: UPath | Path | str,
    time_channel: str | None = None,
    northing: str | None = None,
    easting: str | None = None,
    lines: Sequence[str] | None = None,
) -> SamplingStats:
    """Time and distance statistics between consecutive fiducials.

    Channel names default to the ``time``, ``northing`` and ``easting`` attributes of the
    dataset. Missing values are left out.

    Raises:
        ValueError: If a channel name is not given and not set on the dataset, or no line has
            two valid consecutive fiducials.
    """
    root = open_whizz(input_path)
    metadata = read_metadata(root)
    time_channel = time_channel or metadata.time
    northing = northing or metadata.northing
    easting = easting or metadata.easting
    if not (time_channel and northing and easting):
        err = "Time, northing and easting channels are required, set them on the dataset or pass them."
        raise ValueError(err)
    if lines is None:
        lines = list_lines(root)

    time_deltas = []
    distance_deltas = []
    for line_id in lines:
        line_ds = open_whizz_line(input_path, line_id)
        t = mask_missing(line_ds[time_channel].values, metadata.missing_value)
        n = mask_missing(line_ds[northing].values, metadata.missing_value)
        e = mask_missing(line_ds[easting].values, metadata.missing_value)
        time_deltas.append(np.diff(t))
        distance_deltas.append(np.hypot(np.diff(n), np.diff(e)))

    dt = np.concatenate(time_deltas) if time_deltas else np.empty(0)
    dd = np.concatenate(distance_deltas) if distance_deltas else np.empty(0)
    dt = dt[np.isfinite(dt)]
    dd = dd[np.isfinite(dd)]
    if dt.size == 0 or dd.size == 0:
        err = "No consecutive valid fiducials to compute sampling statistics from."
        raise ValueError(err)

    return SamplingStats(
        min_dt=float(dt.min()),
        max_dt=float(dt.max()),
        mean_dt=float(dt.mean()),
        min_dd=float(dd.min()),
        max_dd=float(dd.max()),
        mean_dd=float(dd.mean()),
    )
