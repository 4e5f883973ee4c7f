"""Channel names of a Geosoft XYZ file.

XYZ files don't label their columns. By convention one of the header comments lists the channel
names, so the header record with exactly one name per channel is taken as the name list.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from upath import UPath

from whizz.constants import COMMENT_MARKER
from whizz.constants import PLACEHOLDER_CHANNEL_PREFIX
from whizz.exceptions import ChannelNameNotFoundError
from whizz.xyz.records import RecordKind
from whizz.xyz.records import check_node_name
from whizz.xyz.records import iter_records

if TYPE_CHECKING:
    from pathlib import Path

    from whizz.xyz.scanner import XYZStructure


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChannelSchema:
    """Ordered channel names with their decimal precision.

    Attributes:
        names: Channel names, unique within the file.
        precisions: Number of decimals of each channel.
        resolved: False if the names are placeholders because the header had no name list.

    Raises:
        ValueError: If the names and precisions differ in length or a name is repeated.
        InvalidNameError: If a name can't name a channel array.
    """

    names: tuple[str, ...]
    precisions: tuple[int, ...]
    resolved: bool = True

    def __post_init__(self) -> None:
        if len(self.names) != len(self.precisions):
            err = f"Got {len(self.names)} channel names for {len(self.precisions)} precisions"
            raise ValueError(err)
        if len(set(self.names)) != len(self.names):
            err = f"Channel names must be unique, got {self.names}"
            raise ValueError(err)
        for name in self.names:
            check_node_name(name, "channel")

    def __len__(self) -> int:
        return len(self.names)

    def items(self) -> zip[tuple[str, int]]:
        """Pairs of channel name and precision, in channel order."""
        return zip(self.names, self.precisions, strict=True)


def resolve_channel_names(
    path: UPath | Path | str,
    num_header_records: int,
    num_channels: int,
) -> list[str]:
    """Find the channel names among the header records of an XYZ file.

    Only the first ``num_header_records + 1`` comment records before the first marker or data
    record are searched. Blank and malformed records are not counted. Flight and date annotations
    are skipped. The first comment whose token count equals ``num_channels`` (with no repeated
    token) wins.

    Args:
        path: Location of the XYZ file.
        num_header_records: Number of header records found by the structural scan.
        num_channels: Number of channels found by the structural scan.

    Returns:
        Channel names, in column order.

    Raises:
        ChannelNameNotFoundError: If no header record matches the channel count.
    """
    path = UPath(path)
    num_comments = 0
    with path.open("r") as stream:
        for source_line, record in iter_records(stream):
            if record.kind in (RecordKind.LINE_MARKER, RecordKind.DATA):
                break
            if record.kind is not RecordKind.COMMENT:
                continue
            num_comments += 1
            if num_comments > num_header_records + 1:
                break
            if record.annotation is not None:
                continue

            names = record.text.lstrip().lstrip(COMMENT_MARKER).split()
            if len(names) != num_channels:
                continue
            if len(set(names)) != len(names):
                logger.debug("Header record %d has repeated names, skipping it", source_line)
                continue

            logger.debug("Channel names found in header record %d", source_line)
            return names

    raise ChannelNameNotFoundError(num_channels, num_header_records)


def placeholder_channel_names(num_channels: int) -> list[str]:
    """Names used when a file has no channel name header, ``CH001`` and so on."""
    width = max(3, len(str(num_channels)))
    return [f"{PLACEHOLDER_CHANNEL_PREFIX}{idx:0{width}d}" for idx in range(1, num_channels + 1)]


def build_channel_schema(path: UPath | Path | str, structure: XYZStructure) -> ChannelSchema:
    """Resolve channel names and pair them with the scanned precisions.

    A missing name list doesn't stop the conversion. An error is logged and placeholder names
    are used instead, with ``resolved`` set to False on the returned schema.
    """
    try:
        names = resolve_channel_names(path, structure.num_header_records, structure.num_channels)
    except ChannelNameNotFoundError as err:
        names = placeholder_channel_names(structure.num_channels)
        logger.error("%s Using placeholder names %s to %s.", err.message, names[0], names[-1])
        return ChannelSchema(names=tuple(names), precisions=structure.precisions, resolved=False)

    return ChannelSchema(names=tuple(names), precisions=structure.precisions)
