"""Reports on converted Whizz datasets."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from whizz import report_flights
from whizz import report_sampling
from whizz import report_whizz
from whizz import xyz_to_whizz
from whizz.exceptions import WhizzNotFoundError
from whizz.reporting import distance_flown
from whizz.reporting import title_string
from whizz.schemas.metadata import WhizzMetadata

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def flight_whizz(flight_xyz: Path, tmp_path: Path) -> Path:
    """Flight survey converted with position and time channels set."""
    output = tmp_path / "flight.whizz"
    metadata = WhizzMetadata(project_name="P1", block_name="B2", northing="Y", easting="X", time="TIME")
    xyz_to_whizz(flight_xyz, output, metadata=metadata)
    return output


@pytest.fixture
def survey_whizz(survey_xyz: Path, tmp_path: Path) -> Path:
    """Two line survey converted without position channels."""
    output = tmp_path / "survey.whizz"
    xyz_to_whizz(survey_xyz, output)
    return output


class TestDistanceFlown:
    """Test line counts and lengths."""

    def test_distance(self, flight_whizz: Path) -> None:
        """Line 10 is 11 m long and tie 900 is 100 m long."""
        distance = distance_flown(flight_whizz)

        assert distance.num_lines == 2
        assert distance.distance_km == pytest.approx(0.111)
        assert str(distance) == "2 lines: total distance flown = 0.111 km."

    def test_without_positions(self, survey_whizz: Path) -> None:
        """Only lines are counted without northing and easting."""
        distance = distance_flown(survey_whizz)

        assert distance.distance_km is None
        assert "unknown" in str(distance)


class TestReportWhizz:
    """Test the dataset overview."""

    def test_first_line(self, flight_whizz: Path) -> None:
        """The first line is reported by default."""
        report = report_whizz(flight_whizz)

        assert report.filename == "flight.whizz"
        assert report.metadata.project_name == "P1"
        assert report.line_ids == ["10", "900"]
        assert report.line == "10"
        assert report.line_attributes["num_fiducials"] == 3
        assert report.channels == ["FLIGHT", "TIME", "X", "Y", "MAG"]
        assert report.channel is None

    def test_channel(self, flight_whizz: Path) -> None:
        """Channel attributes of the requested line."""
        report = report_whizz(flight_whizz, line="900", channel="MAG")

        assert report.line == "900"
        assert report.line_attributes["is_tie"] is True
        assert report.channel_attributes["precision"] == 1

    def test_unknown_line(self, flight_whizz: Path) -> None:
        """Lines must exist."""
        with pytest.raises(WhizzNotFoundError, match="Line 11 not found"):
            report_whizz(flight_whizz, line="11")

    def test_unknown_channel(self, flight_whizz: Path) -> None:
        """Channels must exist."""
        with pytest.raises(WhizzNotFoundError, match="Channel GRAV not found"):
            report_whizz(flight_whizz, channel="GRAV")

    def test_lines_in_file_order(self, write_xyz, tmp_path: Path) -> None:  # noqa: ANN001
        """Lines are reported in file order, the first one in the file by default."""
        path = write_xyz("/ A B\nLINE 200\n1 2\nLINE 1000\n3 4\nLINE 30\n5 6\n")
        output = tmp_path / "order.whizz"
        xyz_to_whizz(path, output)

        report = report_whizz(output)
        assert report.line_ids == ["200", "1000", "30"]
        assert report.line == "200"
        assert report_flights(output) == {"unknown": ["200", "1000", "30"]}


class TestReportFlights:
    """Test grouping of lines by flight."""

    def test_flight_channel(self, flight_whizz: Path) -> None:
        """Flights come from the first value of the flight channel."""
        assert report_flights(flight_whizz) == {"12": ["10", "900"]}

    def test_flight_annotation(self, flight_whizz: Path) -> None:
        """Without the channel the flight annotation is used."""
        assert report_flights(flight_whizz, flight_channel="FLT", lines=["900"]) == {"12": ["900"]}

    def test_unknown_flight(self, survey_whizz: Path) -> None:
        """Lines without any flight information are grouped as unknown."""
        assert report_flights(survey_whizz) == {"unknown": ["100", "200"]}


class TestReportSampling:
    """Test time and distance sampling statistics."""

    def test_statistics(self, flight_whizz: Path) -> None:
        """Deltas within each line, missing values left out."""
        stats = report_sampling(flight_whizz)

        assert stats.min_dt == 1.0
        assert stats.max_dt == 1.0
        assert stats.mean_dt == 1.0
        assert stats.min_dd == 5.0
        assert stats.max_dd == 100.0
        assert stats.mean_dd == pytest.approx(37.0)
        assert "Mean = 1.000 s, 37.0 m" in str(stats)

    def test_channels_required(self, survey_whizz: Path) -> None:
        """Channels must be passed when the dataset doesn't name them."""
        with pytest.raises(ValueError, match="required"):
            report_sampling(survey_whizz)

    def test_explicit_channels(self, survey_whizz: Path) -> None:
        """Any channel can serve as time or position."""
        stats = report_sampling(survey_whizz, time_channel="MAG", northing="Y", easting="X", lines=["100"])

        assert stats.min_dt == 3.0
        assert stats.min_dd == pytest.approx(18.0**0.5)

    def test_no_deltas(self, survey_whizz: Path) -> None:
        """A single fiducial has no deltas."""
        with pytest.raises(ValueError, match="No consecutive valid fiducials"):
            report_sampling(survey_whizz, time_channel="MAG", northing="Y", easting="X", lines=["200"])


@pytest.mark.parametrize(
    ("metadata", "expected"),
    [
        (WhizzMetadata(), ""),
        (WhizzMetadata(project_name="P1"), "Project P1"),
        (WhizzMetadata(project_name="P1", block_name="B2"), "Project P1, Block B2"),
        (
            WhizzMetadata(project_name="P1", acquirer="Air Co", acquirer_project_id="A-7"),
            "Project P1\n    Acquired by Air Co, Acquirer project ID: A-7",
        ),
    ],
)
def test_title_string(metadata: WhizzMetadata, expected: str) -> None:
    """Titles join the project attributes that are set."""
    assert title_string(metadata) == expected
