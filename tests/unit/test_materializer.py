"""Tests for the streaming writer of XYZ data records."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np
import pytest

from whizz.constants import DEFAULT_MISSING_VALUE
from whizz.exceptions import ColumnCountMismatchError
from whizz.exceptions import IncompleteLineWarning
from whizz.exceptions import InventoryMismatchError
from whizz.exceptions import NumericParseError
from whizz.ingestion.pipeline import analyze_xyz
from whizz.ingestion.pipeline import build_dataset
from whizz.ingestion.session import ConversionSession
from whizz.store.sink import WhizzSink
from whizz.xyz.channels import build_channel_schema
from whizz.xyz.inventory import LineInventory
from whizz.xyz.inventory import LineRecord
from whizz.xyz.materializer import materialize_records
from whizz.xyz.scanner import scan_structure

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from numpy.typing import NDArray

    from whizz.schemas.metadata import LineAttributes


class RecordingSink:
    """In-memory sink that keeps everything it is given."""

    def __init__(self) -> None:
        self.lines: dict[str, int] = {}
        self.channels: dict[str, list[tuple[str, int]]] = {}
        self.written: dict[str, NDArray] = {}
        self.channel_names: list[str] = []

    def create_line(self, line_id: str, num_fiducials: int, attributes: LineAttributes | None = None) -> None:
        self.lines[line_id] = num_fiducials
        self.channels[line_id] = []

    def create_channel(self, line_id: str, channel_name: str, precision: int) -> None:
        self.channels[line_id].append((channel_name, precision))

    def write_channel_data(self, line_id: str, matrix: NDArray, channel_names: Sequence[str]) -> None:
        assert line_id not in self.written
        self.written[line_id] = matrix.copy()
        self.channel_names = list(channel_names)


def _session_with_inventory(path: Path, lines: list[LineRecord]) -> ConversionSession:
    structure = scan_structure(path)
    return ConversionSession(
        structure=structure,
        channels=build_channel_schema(path, structure),
        inventory=LineInventory(lines),
    )


def test_recording_sink_is_a_sink() -> None:
    """The in-memory sink satisfies the sink protocol."""
    assert isinstance(RecordingSink(), WhizzSink)


class TestMaterializeRecords:
    """Test writing lines to a sink."""

    def test_survey(self, survey_xyz) -> None:  # noqa: ANN001
        """Every line is written once with dummies replaced."""
        session = analyze_xyz(survey_xyz, missing_value=-99999.0)
        sink = RecordingSink()
        build_dataset(session, sink)
        materialize_records(survey_xyz, session, sink)

        assert sink.lines == {"100": 2, "200": 1}
        assert sink.channels["100"] == [("X", 1), ("Y", 2), ("MAG", 1)]
        assert sink.channel_names == ["X", "Y", "MAG"]
        np.testing.assert_array_equal(sink.written["100"], [[1.0, 2.0, 3.5], [4.0, 5.0, 6.5]])
        np.testing.assert_array_equal(sink.written["200"], [[7.0, -99999.0, 9.5]])

        assert session.lines_saved == 2
        assert session.records_written == 3
        assert session.is_complete
        assert not session.stopped_early
        assert session.incomplete_lines == []

    def test_default_missing_value(self, survey_xyz) -> None:  # noqa: ANN001
        """Dummies become the default missing value, bit for bit."""
        session = analyze_xyz(survey_xyz)
        sink = RecordingSink()
        materialize_records(survey_xyz, session, sink)

        assert sink.written["200"][0, 1] == DEFAULT_MISSING_VALUE

    def test_column_count_mismatch(self, write_xyz) -> None:  # noqa: ANN001
        """A short or long record stops the pass, earlier lines stay written."""
        path = write_xyz("/ A B\nLINE 1\n1 2\nLINE 2\n1 2\n1 2 3\n")
        session = analyze_xyz(path)
        sink = RecordingSink()

        with pytest.raises(ColumnCountMismatchError) as exc_info:
            materialize_records(path, session, sink)

        err = exc_info.value
        assert err.line_id == "2"
        assert err.record_index == 1
        assert err.source_line == 6
        assert err.expected == 2
        assert err.actual == 3
        assert "Line 2, record 1 (file line 6)" in str(err)
        assert list(sink.written) == ["1"]

    def test_numeric_parse_error(self, write_xyz) -> None:  # noqa: ANN001
        """Values must be numbers or dummies."""
        path = write_xyz("/ A B\nLINE 1\n1 2\n1 abc\n")
        session = analyze_xyz(path)

        with pytest.raises(NumericParseError) as exc_info:
            materialize_records(path, session, RecordingSink())

        assert exc_info.value.channel == "B"
        assert exc_info.value.token == "abc"
        assert exc_info.value.record_index == 1

    @pytest.mark.parametrize("token", ["1_000", "nan", "infinity"])
    def test_lenient_float_tokens(self, write_xyz, token: str) -> None:  # noqa: ANN001
        """Tokens Python's float would take but aren't plain decimals are rejected."""
        path = write_xyz(f"/ A B\nLINE 1\n1 2\n{token} 2\n")
        session = analyze_xyz(path)

        with pytest.raises(NumericParseError) as exc_info:
            materialize_records(path, session, RecordingSink())

        assert exc_info.value.channel == "A"
        assert exc_info.value.token == token

    def test_incomplete_line(self, write_xyz) -> None:  # noqa: ANN001
        """A line that ends early is skipped with a warning, later lines are written."""
        path = write_xyz("/ A B\nLINE 1\n1 2\n3 4\nLINE 2\n5 6\n")
        session = _session_with_inventory(path, [LineRecord("1", 3), LineRecord("2", 1)])
        sink = RecordingSink()

        with pytest.warns(IncompleteLineWarning, match="Line 1 ended after 2 of 3 records"):
            materialize_records(path, session, sink)

        assert list(sink.written) == ["2"]
        assert session.incomplete_lines == ["1"]
        assert session.lines_saved == 1
        assert not session.is_complete

    def test_incomplete_last_line(self, write_xyz) -> None:  # noqa: ANN001
        """End of file in the middle of a line is reported too."""
        path = write_xyz("/ A B\nLINE 1\n1 2\n")
        session = _session_with_inventory(path, [LineRecord("1", 2)])

        with pytest.warns(IncompleteLineWarning):
            materialize_records(path, session, RecordingSink())

        assert session.incomplete_lines == ["1"]

    def test_unknown_line(self, write_xyz) -> None:  # noqa: ANN001
        """A marker for a line outside the inventory is a mismatch."""
        path = write_xyz("/ A B\nLINE 1\n1 2\nLINE 2\n3 4\n")
        session = _session_with_inventory(path, [LineRecord("1", 1), LineRecord("3", 1)])

        with pytest.raises(InventoryMismatchError, match="Line 2"):
            materialize_records(path, session, RecordingSink())

    def test_too_many_records(self, write_xyz) -> None:  # noqa: ANN001
        """A line can't hold more records than the inventory says."""
        path = write_xyz("/ A B\nLINE 1\n1 2\n3 4\nLINE 2\n5 6\n")
        session = _session_with_inventory(path, [LineRecord("1", 1), LineRecord("2", 1)])

        with pytest.raises(InventoryMismatchError, match="more records"):
            materialize_records(path, session, RecordingSink())

    def test_empty_line_is_saved_without_write(self, write_xyz) -> None:  # noqa: ANN001
        """Lines without fiducials count as saved but are never written."""
        path = write_xyz("/ A B\nLINE 1\nLINE 2\n1 2\n")
        session = analyze_xyz(path)
        sink = RecordingSink()
        materialize_records(path, session, sink)

        assert list(sink.written) == ["2"]
        assert session.lines_saved == 2
        assert session.is_complete

    def test_orphan_data_is_ignored(self, write_xyz) -> None:  # noqa: ANN001
        """Data before the first marker is not written anywhere."""
        path = write_xyz("/ A B\n9 9\nLINE 1\n1 2\n")
        session = analyze_xyz(path)
        sink = RecordingSink()
        materialize_records(path, session, sink)

        np.testing.assert_array_equal(sink.written["1"], [[1.0, 2.0]])

    def test_stops_early(self, write_xyz, caplog: pytest.LogCaptureFixture) -> None:  # noqa: ANN001
        """Records after the last line are not read."""
        path = write_xyz("/ A B\nLINE 1\n1 2\n/ end of survey\n\n")
        session = analyze_xyz(path)
        with caplog.at_level(logging.INFO, logger="whizz.xyz.materializer"):
            materialize_records(path, session, RecordingSink())

        assert session.stopped_early
        assert "ignoring the rest of the file from line 4" in caplog.text

    def test_trailing_blank_records_are_not_early_stop(self, write_xyz) -> None:  # noqa: ANN001
        """Blank records at the end of a file are not content."""
        path = write_xyz("/ A B\nLINE 1\n1 2\n\n\n")
        session = analyze_xyz(path)
        materialize_records(path, session, RecordingSink())

        assert session.is_complete
        assert not session.stopped_early

    def test_precision_warning(self, write_xyz, caplog: pytest.LogCaptureFixture) -> None:  # noqa: ANN001
        """More decimals than inferred is logged once per channel."""
        path = write_xyz("/ A B\nLINE 1\n1.0 2\n1.25 3\n1.125 4\n")
        session = analyze_xyz(path)
        with caplog.at_level(logging.WARNING, logger="whizz.xyz.materializer"):
            materialize_records(path, session, RecordingSink())

        assert session.precision_warnings == {"A"}
        assert caplog.text.count("Channel A has") == 1
