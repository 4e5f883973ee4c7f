"""Utils for reading Whizz datasets."""

from __future__ import annotations

from typing import TYPE_CHECKING
from typing import Any

import zarr
from upath import UPath
from xarray import open_zarr as xr_open_zarr

from whizz.constants import LINES_GROUP
from whizz.exceptions import WhizzNotFoundError
from whizz.schemas.metadata import WhizzMetadata

if TYPE_CHECKING:
    from pathlib import Path

    from xarray import Dataset
    from xarray.core.types import T_Chunks


def _normalize_path(path: UPath | Path | str) -> UPath:
    """Normalize a path to a UPath."""
    return UPath(path)


def _normalize_storage_options(path: UPath) -> dict[str, Any] | None:
    return None if len(path.storage_options) == 0 else dict(path.storage_options)


def open_whizz(input_path: UPath | Path | str) -> zarr.Group:
    """Open the root group of a Whizz dataset for reading.

    Args:
        input_path: Universal input path of the Whizz dataset.

    Returns:
        Read-only root group of the dataset.

    Raises:
        WhizzNotFoundError: If there is no Whizz dataset at the location.
    """
    input_path = _normalize_path(input_path)
    try:
        root = zarr.open_group(
            input_path.as_posix(),
            mode="r",
            storage_options=_normalize_storage_options(input_path),
        )
    except FileNotFoundError as err:
        msg = f"No Whizz dataset at '{input_path.as_posix()}'"
        raise WhizzNotFoundError(msg) from err

    if LINES_GROUP not in root:
        msg = f"'{input_path.as_posix()}' is a Zarr group without a '{LINES_GROUP}' group"
        raise WhizzNotFoundError(msg)
    return root


def read_metadata(root: zarr.Group) -> WhizzMetadata:
    """Global attributes of an open Whizz dataset."""
    return WhizzMetadata.model_validate(dict(root.attrs))


def list_lines(root: zarr.Group) -> list[str]:
    """Identifiers of the survey lines of an open Whizz dataset, in file order.

    Datasets without a stored line order list their line groups sorted by name.
    """
    line_ids = root.attrs.get("line_ids")
    if line_ids:
        return list(line_ids)
    return sorted(root[LINES_GROUP].group_keys())


def open_whizz_line(input_path: UPath | Path | str, line_id: str, chunks: T_Chunks = None) -> Dataset:
    """Open one survey line of a Whizz dataset as an Xarray dataset.

    Channels become data variables over the ``fiducial`` dimension. Values are not masked, so
    dummies read back as the dataset's missing value.

    Args:
        input_path: Universal input path of the Whizz dataset.
        line_id: Identifier of the survey line.
        chunks: If provided, loads data into dask arrays with new chunking. ``None`` (default)
            skips using dask, which is generally faster for survey lines.

    Returns:
        An Xarray dataset with the channels of the line.

    Raises:
        WhizzNotFoundError: If the dataset or line doesn't exist.
    """
    input_path = _normalize_path(input_path)
    root = open_whizz(input_path)
    if line_id not in root[LINES_GROUP]:
        msg = f"Line {line_id} not found in '{input_path.as_posix()}'"
        raise WhizzNotFoundError(msg)

    return xr_open_zarr(
        input_path.as_posix(),
        group=f"{LINES_GROUP}/{line_id}",
        chunks=chunks,
        storage_options=_normalize_storage_options(input_path),
        mask_and_scale=False,
        consolidated=False,
        zarr_format=3,
    )
