"""State shared by the passes of one XYZ conversion."""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from typing import TYPE_CHECKING

from pydantic import BaseModel

from whizz.constants import DEFAULT_MISSING_VALUE

if TYPE_CHECKING:
    from whizz.xyz.channels import ChannelSchema
    from whizz.xyz.inventory import LineInventory
    from whizz.xyz.scanner import XYZStructure


class ConversionSummary(BaseModel):
    """What an XYZ conversion found and wrote."""

    num_header_records: int
    num_lines: int
    num_channels: int
    channel_names: list[str]
    channel_names_resolved: bool
    precisions: list[int]
    line_ids: list[str]
    fiducial_counts: list[int]
    lines_saved: int
    incomplete_lines: list[str]
    stopped_early: bool


@dataclass
class ConversionSession:
    """Schema, inventory and running counters of a single conversion.

    The analysis passes fill in the schema and inventory; the writing pass then updates the
    counters. A session is used by one conversion only.
    """

    structure: XYZStructure
    channels: ChannelSchema
    inventory: LineInventory
    missing_value: float = DEFAULT_MISSING_VALUE
    line_style: str = ""

    lines_saved: int = 0
    records_written: int = 0
    incomplete_lines: list[str] = field(default_factory=list)
    precision_warnings: set[str] = field(default_factory=set)
    stopped_early: bool = False

    @property
    def num_channels(self) -> int:
        """Number of values in every data record."""
        return len(self.channels)

    @property
    def num_lines(self) -> int:
        """Number of lines to write."""
        return len(self.inventory)

    @property
    def is_complete(self) -> bool:
        """True once every line of the inventory was written."""
        return self.lines_saved == self.num_lines

    def summary(self) -> ConversionSummary:
        """Summarize the session for reports."""
        return ConversionSummary(
            num_header_records=self.structure.num_header_records,
            num_lines=self.structure.num_lines,
            num_channels=self.num_channels,
            channel_names=list(self.channels.names),
            channel_names_resolved=self.channels.resolved,
            precisions=list(self.channels.precisions),
            line_ids=self.inventory.line_ids,
            fiducial_counts=self.inventory.fiducial_counts,
            lines_saved=self.lines_saved,
            incomplete_lines=list(self.incomplete_lines),
            stopped_early=self.stopped_early,
        )
