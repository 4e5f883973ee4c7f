"""Structural scan of a Geosoft XYZ file.

The scan runs before anything is written. It counts header records and survey lines, and infers
the channel count and per channel decimal precision from the first clean data record.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from upath import UPath

from whizz.constants import DEFAULT_PREVIEW_RECORDS
from whizz.exceptions import SchemaInferenceError
from whizz.xyz.records import RecordKind
from whizz.xyz.records import decimal_places
from whizz.xyz.records import iter_records

if TYPE_CHECKING:
    from pathlib import Path


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class XYZStructure:
    """Layout of an XYZ file found by :func:`scan_structure`."""

    num_header_records: int
    num_lines: int
    num_channels: int
    precisions: tuple[int, ...]


def scan_structure(
    path: UPath | Path | str,
    preview_records: int = DEFAULT_PREVIEW_RECORDS,
) -> XYZStructure:
    """Count header records, lines and channels of an XYZ file.

    Channel count and precisions come from the first data record that follows a line marker
    and holds no dummies. Precision is sampled once; later records are not re-checked here.

    Args:
        path: Location of the XYZ file.
        preview_records: Number of leading records to log, for a quick look at the file.

    Returns:
        The structure of the file.

    Raises:
        SchemaInferenceError: If no clean data record is found.
    """
    path = UPath(path)
    num_header_records = 0
    num_lines = 0
    precisions: tuple[int, ...] | None = None
    num_orphans = 0
    num_malformed = 0

    logger.info("Accessing XYZ data in %s", path.name)
    with path.open("r") as stream:
        for source_line, record in iter_records(stream):
            if source_line <= preview_records:
                logger.info("  %s", record.text)

            kind = record.kind
            if kind is RecordKind.COMMENT:
                num_header_records += 1
            elif kind is RecordKind.LINE_MARKER:
                num_lines += 1
            elif kind is RecordKind.DATA:
                if num_lines == 0:
                    num_orphans += 1
                elif precisions is None and record.is_clean:
                    precisions = tuple(decimal_places(token) for token in record.tokens)
            elif kind is RecordKind.MALFORMED:
                num_malformed += 1
            else:
                err = f"Unhandled record kind {kind}"
                raise ValueError(err)

    if num_orphans:
        logger.warning("Found %d data records before the first line marker, they will be ignored", num_orphans)
    if num_malformed:
        logger.debug("Skipped %d blank or malformed records", num_malformed)

    if precisions is None:
        raise SchemaInferenceError(path.as_posix(), num_lines)

    structure = XYZStructure(
        num_header_records=num_header_records,
        num_lines=num_lines,
        num_channels=len(precisions),
        precisions=precisions,
    )
    logger.info("Found %d header records", structure.num_header_records)
    logger.info("Found %d lines", structure.num_lines)
    logger.info("Found %d channels", structure.num_channels)
    return structure
