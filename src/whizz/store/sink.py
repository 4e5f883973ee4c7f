"""Interface between the XYZ reader and the dataset being written."""

from __future__ import annotations

from typing import TYPE_CHECKING
from typing import Protocol
from typing import runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from numpy.typing import NDArray

    from whizz.schemas.metadata import LineAttributes


@runtime_checkable
class WhizzSink(Protocol):
    """Destination of an XYZ conversion.

    Lines and channels are all created before the first write. Each line is then written once,
    with a matrix of shape ``(num_fiducials, num_channels)``.
    """

    def create_line(self, line_id: str, num_fiducials: int, attributes: LineAttributes | None = None) -> None:
        """Create the group of a survey line."""

    def create_channel(self, line_id: str, channel_name: str, precision: int) -> None:
        """Create an empty channel in the group of a survey line."""

    def write_channel_data(self, line_id: str, matrix: NDArray, channel_names: Sequence[str]) -> None:
        """Write all channels of a survey line, one matrix column per channel."""
