"""Whizz datasets stored as Zarr v3 hierarchies.

Layout of a Whizz dataset::

    /                       global attributes (WhizzMetadata)
    /Lines                  one group per survey line
    /Lines/<line_id>        line attributes (LineAttributes)
    /Lines/<line_id>/<ch>   one float64 array per channel, dimension "fiducial"
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np
import zarr

from whizz.api.io import _normalize_path
from whizz.api.io import _normalize_storage_options
from whizz.constants import CHANNEL_DTYPE
from whizz.constants import DEFAULT_CHUNK_SIZE
from whizz.constants import FIDUCIAL_DIM
from whizz.constants import LINES_GROUP
from whizz.exceptions import ShapeError
from whizz.schemas.metadata import ChannelAttributes
from whizz.schemas.metadata import LineAttributes
from whizz.schemas.metadata import WhizzMetadata

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from numpy.typing import NDArray
    from upath import UPath


logger = logging.getLogger(__name__)


class WhizzStore:
    """Writer of a Whizz dataset, implements :class:`~whizz.store.sink.WhizzSink`.

    Use :func:`create_whizz` to make one.

    Args:
        root: Open root group of the dataset.
        metadata: Global attributes written to the root group.
        chunk_size: Maximum chunk length of channel arrays.
    """

    def __init__(self, root: zarr.Group, metadata: WhizzMetadata, chunk_size: int = DEFAULT_CHUNK_SIZE):
        self.root = root
        self.metadata = metadata
        self.chunk_size = chunk_size
        self._num_fiducials: dict[str, int] = {}

    @property
    def lines_group(self) -> zarr.Group:
        """Group holding one sub-group per survey line."""
        return self.root[LINES_GROUP]

    def create_line(self, line_id: str, num_fiducials: int, attributes: LineAttributes | None = None) -> None:
        """Create the group of a survey line.

        Args:
            line_id: Identifier of the line, used as the group name.
                Lines are listed in the order they are created.
            num_fiducials: Length of every channel of the line.
            attributes: Line attributes. Defaults to identifier and length only.
        """
        if attributes is None:
            attributes = LineAttributes(line_id=line_id, num_fiducials=num_fiducials)
        if attributes.num_fiducials != num_fiducials:
            msg = f"Line {line_id} attributes disagree with its length"
            raise ShapeError(msg, ("attributes", "line"), ((attributes.num_fiducials,), (num_fiducials,)))
        if not attributes.line_style:
            attributes = attributes.model_copy(update={"line_style": self.metadata.line_style})

        self.lines_group.create_group(line_id, attributes=attributes.to_attributes())
        self._num_fiducials[line_id] = num_fiducials
        if line_id not in self.metadata.line_ids:
            self.metadata.line_ids.append(line_id)
            self.root.attrs["line_ids"] = list(self.metadata.line_ids)

    def create_channel(self, line_id: str, channel_name: str, precision: int) -> None:
        """Create an empty channel array, filled with the missing value."""
        num_fiducials = self._num_fiducials[line_id]
        chunk_len = max(1, min(num_fiducials, self.chunk_size))
        attributes = ChannelAttributes(precision=precision, missing_value=self.metadata.missing_value)

        line_group = self.lines_group[line_id]
        line_group.create_array(
            name=channel_name,
            shape=(num_fiducials,),
            chunks=(chunk_len,),
            dtype=CHANNEL_DTYPE,
            fill_value=self.metadata.missing_value,
            attributes=attributes.to_attributes(),
            dimension_names=(FIDUCIAL_DIM,),
        )

    def write_channel_data(self, line_id: str, matrix: NDArray, channel_names: Sequence[str]) -> None:
        """Write all channels of a line, one matrix column per channel.

        Raises:
            ShapeError: If the matrix doesn't have one row per fiducial and one column per channel.
        """
        expected = (self._num_fiducials[line_id], len(channel_names))
        if matrix.shape != expected:
            msg = f"Can't write line {line_id}"
            raise ShapeError(msg, ("matrix", "line"), (matrix.shape, expected))

        line_group = self.lines_group[line_id]
        for column, channel_name in enumerate(channel_names):
            line_group[channel_name][:] = np.ascontiguousarray(matrix[:, column], dtype=CHANNEL_DTYPE)

        logger.debug("Wrote %d fiducials of line %s", expected[0], line_id)


def create_whizz(
    output_path: UPath | Path | str,
    metadata: WhizzMetadata | None = None,
    overwrite: bool = False,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> WhizzStore:
    """Create an empty Whizz dataset.

    Args:
        output_path: Universal path of the dataset.
        metadata: Global attributes. Defaults to empty project information.
        overwrite: Whether to replace an existing dataset at the location.
        chunk_size: Maximum chunk length of channel arrays.

    Returns:
        A store ready to receive lines and channels.

    Raises:
        FileExistsError: If the output location already exists and overwrite is False.
    """
    output_path = _normalize_path(output_path)
    if metadata is None:
        metadata = WhizzMetadata()

    if not overwrite and output_path.exists():
        err = f"Output location '{output_path.as_posix()}' exists. Set `overwrite=True` if intended."
        raise FileExistsError(err)

    root = zarr.open_group(
        output_path.as_posix(),
        mode="w",
        zarr_format=3,
        storage_options=_normalize_storage_options(output_path),
        attributes=metadata.to_attributes(),
    )
    root.create_group(LINES_GROUP)
    logger.info("Created Whizz dataset at %s", output_path.as_posix())
    return WhizzStore(root, metadata, chunk_size=chunk_size)
