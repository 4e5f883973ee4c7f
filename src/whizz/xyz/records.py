"""Classification of single Geosoft XYZ records.

Every pass over an XYZ file sees the file through :func:`classify_record`, so all passes agree
on what is a header comment, a line marker, or a data record.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from enum import auto
from typing import TYPE_CHECKING

from whizz.constants import ANNOTATION_MARKER
from whizz.constants import COMMENT_MARKER
from whizz.constants import DUMMY_MARKER
from whizz.constants import LINE_KEYWORD
from whizz.constants import MIN_RECORD_LENGTH
from whizz.constants import TIE_KEYWORD
from whizz.constants import AnnotationKind
from whizz.exceptions import InvalidNameError

if TYPE_CHECKING:
    from collections.abc import Iterator
    from typing import TextIO


# Plain ASCII decimal number, optionally signed with an exponent
NUMBER_PATTERN = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


class RecordKind(Enum):
    """Kinds of records found in a Geosoft XYZ file.

    COMMENT: Header or annotation record, starts with the comment marker.
    LINE_MARKER: Start of a survey line (``LINE``) or tie line (``TIE``).
    DATA: One fiducial worth of channel values.
    MALFORMED: Blank, too short, or a marker without an identifier.
    """

    COMMENT = auto()
    LINE_MARKER = auto()
    DATA = auto()
    MALFORMED = auto()


@dataclass(frozen=True)
class Annotation:
    """Structured ``//FLIGHT`` or ``//DATE`` annotation, value kept as raw text."""

    kind: AnnotationKind
    value: str


@dataclass(frozen=True)
class XYZRecord:
    """A classified record of an XYZ file.

    Attributes:
        kind: Classification of the record.
        text: Record text without the line terminator.
        tokens: Whitespace separated tokens of the record.
        line_id: Survey line identifier, only for line markers.
        is_tie: True if the line marker starts a tie line.
        annotation: Structured annotation, only for doubled comment markers.
        has_dummy: True if a data record holds at least one dummy value.
    """

    kind: RecordKind
    text: str
    tokens: tuple[str, ...] = ()
    line_id: str | None = None
    is_tie: bool = False
    annotation: Annotation | None = None
    has_dummy: bool = False

    @property
    def is_clean(self) -> bool:
        """Data record usable for inferring the channel layout."""
        return self.kind is RecordKind.DATA and not self.has_dummy


def _parse_annotation(tokens: tuple[str, ...]) -> Annotation | None:
    if len(tokens) < 2:  # noqa: PLR2004
        return None
    keyword = tokens[0][len(ANNOTATION_MARKER) :].casefold()
    for kind in AnnotationKind:
        if keyword == kind.value:
            return Annotation(kind=kind, value=tokens[1])
    return None


def classify_record(text: str) -> XYZRecord:
    """Classify a single record of a Geosoft XYZ file.

    Rules are checked in order:

    1. Blank or shorter than ``MIN_RECORD_LENGTH``: malformed.
    2. Starts with ``/``: comment. ``//FLIGHT n`` and ``//DATE d`` carry an annotation.
    3. First token is ``LINE`` or ``TIE`` (any case): line marker, the second token is the
       line identifier.
    4. Anything else: data record.

    Leading whitespace is ignored.

    Args:
        text: One record of the file, with or without its line terminator.

    Returns:
        The classified record.
    """
    text = text.rstrip("\r\n")
    stripped = text.lstrip()
    if len(stripped.rstrip()) < MIN_RECORD_LENGTH:
        return XYZRecord(kind=RecordKind.MALFORMED, text=text)

    tokens = tuple(stripped.split())

    if stripped.startswith(COMMENT_MARKER):
        annotation = None
        if stripped.startswith(ANNOTATION_MARKER):
            annotation = _parse_annotation(tokens)
        return XYZRecord(kind=RecordKind.COMMENT, text=text, tokens=tokens, annotation=annotation)

    keyword = tokens[0].casefold()
    if keyword in (LINE_KEYWORD, TIE_KEYWORD):
        if len(tokens) < 2:  # noqa: PLR2004
            return XYZRecord(kind=RecordKind.MALFORMED, text=text, tokens=tokens)
        return XYZRecord(
            kind=RecordKind.LINE_MARKER,
            text=text,
            tokens=tokens,
            line_id=tokens[1],
            is_tie=keyword == TIE_KEYWORD,
        )

    has_dummy = DUMMY_MARKER in tokens
    return XYZRecord(kind=RecordKind.DATA, text=text, tokens=tokens, has_dummy=has_dummy)


def iter_records(stream: TextIO) -> Iterator[tuple[int, XYZRecord]]:
    """Classify every record of an open XYZ stream.

    Args:
        stream: Text stream positioned at the start of the file.

    Yields:
        One based source line number and the classified record.
    """
    for source_line, text in enumerate(stream, start=1):
        yield source_line, classify_record(text)


def decimal_places(token: str) -> int:
    """Number of digits after the decimal point of a numeric token.

    >>> decimal_places("12.345")
    3
    >>> decimal_places("6")
    0
    >>> decimal_places("-1.25e3")
    2
    """
    _, point, fraction = token.partition(".")
    if not point:
        return 0
    count = 0
    for char in fraction:
        if not char.isdigit():
            break
        count += 1
    return count


def is_number(token: str) -> bool:
    """Whether a data token is a plain decimal number.

    Python's ``float`` is more lenient, it also takes ``1_000``, ``nan`` or non-ASCII digits.

    >>> is_number("-1.25e3")
    True
    >>> is_number("1_000")
    False
    """
    return NUMBER_PATTERN.fullmatch(token) is not None


def check_node_name(name: str, kind: str) -> None:
    """Check that a line identifier or channel name can name a dataset node.

    Names become Zarr group and array names, so they can't be empty, contain ``/``, consist
    only of periods or start with ``__``.

    Args:
        name: Line identifier or channel name.
        kind: What is named, used in the error message.

    Raises:
        InvalidNameError: If the name can't be used.
    """
    if not name:
        reason = "names can't be empty"
    elif "/" in name:
        reason = "names can't contain '/'"
    elif set(name) == {"."}:
        reason = "names can't consist only of periods"
    elif name.startswith("__"):
        reason = "names starting with '__' are reserved"
    else:
        return
    raise InvalidNameError(kind, name, reason)
