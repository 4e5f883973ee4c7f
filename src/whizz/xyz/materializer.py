"""Streaming conversion of XYZ data records into a Whizz sink.

This is the last pass over the XYZ file. Records of one survey line are collected in a matrix of
shape ``(num_fiducials, num_channels)`` that is handed to the sink once the line is full, so only
one line is held in memory at a time.
"""

from __future__ import annotations

import logging
import warnings
from typing import TYPE_CHECKING

import numpy as np
from tqdm.auto import tqdm
from upath import UPath

from whizz.constants import CHANNEL_DTYPE
from whizz.constants import DUMMY_MARKER
from whizz.exceptions import ColumnCountMismatchError
from whizz.exceptions import IncompleteLineWarning
from whizz.exceptions import InventoryMismatchError
from whizz.exceptions import NumericParseError
from whizz.xyz.records import RecordKind
from whizz.xyz.records import decimal_places
from whizz.xyz.records import is_number
from whizz.xyz.records import iter_records

if TYPE_CHECKING:
    from pathlib import Path

    from numpy.typing import NDArray

    from whizz.ingestion.session import ConversionSession
    from whizz.store.sink import WhizzSink
    from whizz.xyz.inventory import LineRecord


logger = logging.getLogger(__name__)


class _OpenLine:
    """Matrix of the line currently being read."""

    def __init__(self, line: LineRecord, num_channels: int, missing_value: float):
        self.line_id = line.line_id
        self.expected = line.num_fiducials
        self.rows_filled = 0
        self.matrix: NDArray | None = np.full((self.expected, num_channels), missing_value, dtype=CHANNEL_DTYPE)

    @property
    def is_full(self) -> bool:
        return self.rows_filled >= self.expected


def _parse_row(
    tokens: tuple[str, ...],
    session: ConversionSession,
    line: _OpenLine,
    source_line: int,
) -> list[float]:
    channels = session.channels
    row = []
    for column, token in enumerate(tokens):
        if token == DUMMY_MARKER:
            row.append(session.missing_value)
            continue

        name = channels.names[column]
        if not is_number(token):
            raise NumericParseError(line.line_id, line.rows_filled, source_line, name, token)
        row.append(float(token))

        if name not in session.precision_warnings and decimal_places(token) > channels.precisions[column]:
            session.precision_warnings.add(name)
            logger.warning(
                "Channel %s has %d decimals at line %s (file line %d), more than the %d inferred "
                "from the first data record",
                name,
                decimal_places(token),
                line.line_id,
                source_line,
                channels.precisions[column],
            )
    return row


def _report_incomplete(line: _OpenLine, session: ConversionSession) -> None:
    session.incomplete_lines.append(line.line_id)
    msg = (
        f"Line {line.line_id} ended after {line.rows_filled} of {line.expected} records, "
        "it was not written. Continuing with the next line."
    )
    logger.warning(msg)
    warnings.warn(msg, IncompleteLineWarning, stacklevel=3)


def materialize_records(
    path: UPath | Path | str,
    session: ConversionSession,
    sink: WhizzSink,
    progress: bool = False,
) -> None:
    """Read data records of an XYZ file and write them line by line to a sink.

    The sink must already hold every line and channel of the session's inventory and schema.
    Dummies are replaced by the session's missing value. The pass stops as soon as all lines of
    the inventory are written; anything after that in the file is ignored and flagged with
    ``session.stopped_early``.

    Args:
        path: Location of the XYZ file.
        session: Conversion session with channel schema and line inventory.
        sink: Destination of the line matrices.
        progress: Whether to show a progress bar.

    Raises:
        ColumnCountMismatchError: If a data record doesn't have one value per channel.
        NumericParseError: If a value isn't a number or a dummy.
        InventoryMismatchError: If a line or record isn't in the inventory.
    """
    path = UPath(path)
    channel_names = list(session.channels.names)
    current: _OpenLine | None = None

    with path.open("r") as stream, tqdm(
        total=session.num_lines,
        unit="line",
        desc="Writing lines",
        disable=not progress,
    ) as progress_bar:
        records = iter_records(stream)
        for source_line, record in records:
            kind = record.kind
            if kind in (RecordKind.COMMENT, RecordKind.MALFORMED):
                continue

            if kind is RecordKind.LINE_MARKER:
                if current is not None and not current.is_full:
                    _report_incomplete(current, session)
                current = _OpenLine(session.inventory[record.line_id], session.num_channels, session.missing_value)
                if current.expected == 0:
                    logger.warning("Line %s has no data records", current.line_id)
                    current.matrix = None
                    session.lines_saved += 1
                    progress_bar.update(1)

            elif kind is RecordKind.DATA:
                if current is None:
                    continue
                if current.is_full:
                    err = (
                        f"Line {current.line_id} has more records than the {current.expected} in the "
                        f"line inventory (file line {source_line})"
                    )
                    raise InventoryMismatchError(err)

                num_values = len(record.tokens)
                if num_values != session.num_channels:
                    raise ColumnCountMismatchError(
                        current.line_id,
                        current.rows_filled,
                        source_line,
                        session.num_channels,
                        num_values,
                    )

                current.matrix[current.rows_filled] = _parse_row(record.tokens, session, current, source_line)
                current.rows_filled += 1
                session.records_written += 1

                if current.is_full:
                    sink.write_channel_data(current.line_id, current.matrix, channel_names)
                    current.matrix = None
                    session.lines_saved += 1
                    progress_bar.update(1)

            else:
                err = f"Unhandled record kind {kind}"
                raise ValueError(err)

            if session.is_complete:
                trailing = next((item for item in records if item[1].kind is not RecordKind.MALFORMED), None)
                if trailing is not None:
                    session.stopped_early = True
                    logger.info(
                        "All %d lines written, ignoring the rest of the file from line %d",
                        session.num_lines,
                        trailing[0],
                    )
                break

        else:
            if current is not None and not current.is_full:
                _report_incomplete(current, session)

    logger.info("Saved %d of %d lines", session.lines_saved, session.num_lines)
