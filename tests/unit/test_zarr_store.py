"""Tests for writing Whizz datasets to Zarr."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
import pytest
import zarr

from whizz.api.io import list_lines
from whizz.constants import DEFAULT_MISSING_VALUE
from whizz.exceptions import ShapeError
from whizz.schemas.metadata import LineAttributes
from whizz.schemas.metadata import WhizzMetadata
from whizz.store.sink import WhizzSink
from whizz.store.zarr_store import create_whizz

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def whizz_path(tmp_path: Path) -> Path:
    """Location of a Whizz dataset in the test's temp directory."""
    return tmp_path / "test.whizz"


class TestCreateWhizz:
    """Test creation of an empty dataset."""

    def test_root_attributes(self, whizz_path: Path) -> None:
        """Global attributes are written with their aliases."""
        metadata = WhizzMetadata(project_name="P1", acquirer_project_id="A-7", missing_value=-99.0)
        store = create_whizz(whizz_path, metadata)

        assert isinstance(store, WhizzSink)
        root = zarr.open_group(whizz_path, mode="r")
        assert root.attrs["Whizz_Version"] == "1.0"
        assert root.attrs["project_name"] == "P1"
        assert root.attrs["acquirer_projectID"] == "A-7"
        assert root.attrs["missing_value"] == -99.0
        assert "Lines" in root

    def test_exists(self, whizz_path: Path) -> None:
        """Existing datasets are only replaced on request."""
        create_whizz(whizz_path)
        with pytest.raises(FileExistsError, match="overwrite=True"):
            create_whizz(whizz_path)

        store = create_whizz(whizz_path, overwrite=True)
        assert list(store.lines_group.group_keys()) == []


class TestWhizzStore:
    """Test lines and channels of a dataset."""

    def test_line_and_channels(self, whizz_path: Path) -> None:
        """Channels are float64 arrays over the fiducial dimension."""
        store = create_whizz(whizz_path, WhizzMetadata(line_style="L"))
        store.create_line("100", 3)
        store.create_channel("100", "X", 2)
        store.create_channel("100", "Y", 0)

        matrix = np.array([[1.0, 10.0], [2.0, 20.0], [3.0, DEFAULT_MISSING_VALUE]])
        store.write_channel_data("100", matrix, ["X", "Y"])

        line = zarr.open_group(whizz_path, mode="r")["Lines"]["100"]
        assert line.attrs["line_id"] == "100"
        assert line.attrs["num_fiducials"] == 3
        assert line.attrs["line_style"] == "L"

        x = line["X"]
        assert x.dtype == np.dtype("float64")
        assert x.metadata.dimension_names == ("fiducial",)
        assert x.attrs["precision"] == 2
        np.testing.assert_array_equal(x[:], [1.0, 2.0, 3.0])
        assert line["Y"][2] == DEFAULT_MISSING_VALUE

    def test_line_order(self, whizz_path: Path) -> None:
        """Lines are listed in the order they were created, not by name."""
        store = create_whizz(whizz_path)
        for line_id in ("200", "1000", "30"):
            store.create_line(line_id, 1)

        root = zarr.open_group(whizz_path, mode="r")
        assert root.attrs["line_ids"] == ["200", "1000", "30"]
        assert list_lines(root) == ["200", "1000", "30"]

    def test_unwritten_channel_is_missing(self, whizz_path: Path) -> None:
        """Channels read as the missing value until written."""
        store = create_whizz(whizz_path, WhizzMetadata(missing_value=-5.0))
        store.create_line("1", 2)
        store.create_channel("1", "X", 0)

        x = zarr.open_group(whizz_path, mode="r")["Lines"]["1"]["X"]
        np.testing.assert_array_equal(x[:], [-5.0, -5.0])

    def test_chunk_size(self, whizz_path: Path) -> None:
        """Channel chunks are no longer than the chunk size."""
        store = create_whizz(whizz_path, chunk_size=4)
        store.create_line("1", 10)
        store.create_line("2", 0)
        store.create_channel("1", "X", 0)
        store.create_channel("2", "X", 0)

        assert store.lines_group["1"]["X"].chunks == (4,)
        assert store.lines_group["2"]["X"].shape == (0,)

    def test_attributes_length_mismatch(self, whizz_path: Path) -> None:
        """Line attributes must agree with the line length."""
        store = create_whizz(whizz_path)
        attributes = LineAttributes(line_id="1", num_fiducials=5)
        with pytest.raises(ShapeError, match="attributes: \\(5,\\) <> line: \\(3,\\)"):
            store.create_line("1", 3, attributes)

    def test_matrix_shape_mismatch(self, whizz_path: Path) -> None:
        """Matrices need one row per fiducial and one column per channel."""
        store = create_whizz(whizz_path)
        store.create_line("1", 2)
        store.create_channel("1", "X", 0)

        with pytest.raises(ShapeError, match="Can't write line 1"):
            store.write_channel_data("1", np.zeros((3, 1)), ["X"])
