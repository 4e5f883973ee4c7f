"""Inventory of the survey lines of a Geosoft XYZ file."""

from __future__ import annotations

import datetime
import logging
from dataclasses import dataclass
from dataclasses import replace
from typing import TYPE_CHECKING

from upath import UPath

from whizz.constants import AnnotationKind
from whizz.exceptions import InventoryMismatchError
from whizz.xyz.records import RecordKind
from whizz.xyz.records import check_node_name
from whizz.xyz.records import iter_records

if TYPE_CHECKING:
    from collections.abc import Iterable
    from collections.abc import Iterator
    from pathlib import Path

    from whizz.xyz.records import Annotation


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LineRecord:
    """A survey line and the number of fiducials it holds.

    Attributes:
        line_id: Identifier following the LINE or TIE keyword.
        num_fiducials: Number of data records between this marker and the next one.
        is_tie: True for tie lines.
        flight: Flight number from the last ``//FLIGHT`` annotation before the marker.
        date: Flight date from the last ``//DATE`` annotation before the marker.
    """

    line_id: str
    num_fiducials: int = 0
    is_tie: bool = False
    flight: int | None = None
    date: datetime.date | None = None


class LineInventory:
    """Ordered survey lines of an XYZ file, with lookup by line identifier."""

    def __init__(self, lines: Iterable[LineRecord] = ()):
        self._lines: list[LineRecord] = []
        self._index: dict[str, int] = {}
        for line in lines:
            self.append(line)

    def append(self, line: LineRecord) -> None:
        """Add a line at the end of the inventory.

        Raises:
            InvalidNameError: If the identifier can't name a line group.
            InventoryMismatchError: If a line with the same identifier exists.
        """
        check_node_name(line.line_id, "line")
        if line.line_id in self._index:
            err = f"Line {line.line_id} appears more than once in the XYZ file"
            raise InventoryMismatchError(err)
        self._index[line.line_id] = len(self._lines)
        self._lines.append(line)

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[LineRecord]:
        return iter(self._lines)

    def __contains__(self, line_id: object) -> bool:
        return line_id in self._index

    def __getitem__(self, line_id: str) -> LineRecord:
        """Look up a line by identifier.

        Raises:
            InventoryMismatchError: If the line isn't in the inventory.
        """
        try:
            return self._lines[self._index[line_id]]
        except KeyError:
            err = f"Line {line_id} is not in the line inventory"
            raise InventoryMismatchError(err) from None

    @property
    def line_ids(self) -> list[str]:
        """Line identifiers in file order."""
        return [line.line_id for line in self._lines]

    @property
    def fiducial_counts(self) -> list[int]:
        """Number of fiducials of each line, in file order."""
        return [line.num_fiducials for line in self._lines]

    def __repr__(self) -> str:
        pairs = ", ".join(f"({line.line_id}, {line.num_fiducials})" for line in self._lines)
        return f"LineInventory([{pairs}])"


def parse_flight_date(value: str) -> datetime.date:
    """Parse a ``//DATE`` value, either ``yyyy/mm/dd`` or ``dd/mm/yyyy``.

    >>> parse_flight_date("2019/03/21")
    datetime.date(2019, 3, 21)
    >>> parse_flight_date("21/03/2019")
    datetime.date(2019, 3, 21)
    """
    parts = value.split("/")
    if len(parts) != 3:  # noqa: PLR2004
        err = f"Expected a date with three '/' separated parts, got {value!r}"
        raise ValueError(err)
    if len(parts[0]) == 4:  # noqa: PLR2004
        year, month, day = parts
    else:
        day, month, year = parts
    return datetime.date(int(year), int(month), int(day))


class _PendingFlight:
    """Flight number and date waiting to be stamped on the next line."""

    def __init__(self) -> None:
        self.flight: int | None = None
        self.date: datetime.date | None = None

    def update(self, annotation: Annotation, source_line: int) -> None:
        try:
            if annotation.kind is AnnotationKind.FLIGHT:
                self.flight = int(annotation.value)
            elif annotation.kind is AnnotationKind.DATE:
                self.date = parse_flight_date(annotation.value)
        except ValueError:
            logger.warning(
                "Ignoring unreadable %s annotation %r at line %d",
                annotation.kind.value.upper(),
                annotation.value,
                source_line,
            )


def build_line_inventory(path: UPath | Path | str) -> LineInventory:
    """Record every survey line of an XYZ file and count its fiducials.

    Data records with dummies count as fiducials. Data records before the first line marker
    belong to no line and are only reported.

    Args:
        path: Location of the XYZ file.

    Returns:
        Lines in file order.

    Raises:
        InventoryMismatchError: If a line identifier is repeated.
    """
    path = UPath(path)
    inventory = LineInventory()
    pending = _PendingFlight()
    current: LineRecord | None = None
    num_fiducials = 0
    num_orphans = 0

    with path.open("r") as stream:
        for source_line, record in iter_records(stream):
            kind = record.kind
            if kind is RecordKind.LINE_MARKER:
                if current is not None:
                    inventory.append(replace(current, num_fiducials=num_fiducials))
                current = LineRecord(
                    line_id=record.line_id,
                    is_tie=record.is_tie,
                    flight=pending.flight,
                    date=pending.date,
                )
                num_fiducials = 0
            elif kind is RecordKind.DATA:
                if current is None:
                    num_orphans += 1
                else:
                    num_fiducials += 1
            elif kind is RecordKind.COMMENT:
                if record.annotation is not None:
                    pending.update(record.annotation, source_line)
            elif kind is RecordKind.MALFORMED:
                continue
            else:
                err = f"Unhandled record kind {kind}"
                raise ValueError(err)

    if current is not None:
        inventory.append(replace(current, num_fiducials=num_fiducials))

    if num_orphans:
        logger.warning("%d data records precede the first line marker and belong to no line", num_orphans)

    logger.info("Inventoried %d lines with %d fiducials", len(inventory), sum(inventory.fiducial_counts))
    return inventory
