"""Custom exceptions related to Whizz functionality."""

from __future__ import annotations


class WhizzError(Exception):
    """Base exceptions class."""


class ShapeError(WhizzError):
    """Raised when shapes of two or more things don't match.

    Args:
        message: Message to show with the exception.
        names: Names of the variables for the `message`.
        shapes: Shapes of the variables for the `message`.
    """

    def __init__(
        self,
        message: str,
        names: tuple[str, str] | None = None,
        shapes: tuple[tuple[int, ...], tuple[int, ...]] | None = None,
    ):
        if names is not None and shapes is not None:
            shape_dict = zip(names, shapes, strict=True)
            extras = [f"{name}: {shape}" for name, shape in shape_dict]
            extras = " <> ".join(extras)

            message = f"{message} - {extras}"

        super().__init__(message)


class EnvironmentFormatError(WhizzError):
    """Raised when environment variable is of the wrong format."""

    def __init__(self, name: str, format: str, msg: str = ""):  # noqa: A002
        self.message = f"Environment variable: {name} not of expected format: {format}. "
        self.message += f"\n{msg}" if msg else ""
        super().__init__(self.message)


class WhizzNotFoundError(WhizzError):
    """Raised when a Whizz dataset doesn't exist at the given location."""


class XYZFormatError(WhizzError):
    """Base class for problems found while reading a Geosoft XYZ file."""


class SchemaInferenceError(XYZFormatError):
    """Raised when no clean data record exists to infer the channel layout from.

    Args:
        path: Location of the XYZ file that was scanned.
        num_lines: Number of line markers seen during the scan.
    """

    def __init__(self, path: str, num_lines: int):
        self.path = path
        self.num_lines = num_lines
        self.message = (
            f"Can't infer channels of '{path}': no data record without dummies "
            f"follows a LINE/TIE marker ({num_lines} markers found)."
        )
        super().__init__(self.message)


class ChannelNameNotFoundError(XYZFormatError):
    """Raised when no header record has as many names as there are channels.

    Args:
        num_channels: Channel count inferred from the first clean data record.
        num_header_records: Number of header records searched.
    """

    def __init__(self, num_channels: int, num_header_records: int):
        self.num_channels = num_channels
        self.num_header_records = num_header_records
        self.message = (
            f"Can't find a header record with {num_channels} channel names "
            f"in the first {num_header_records} header records."
        )
        super().__init__(self.message)


class RecordError(XYZFormatError):
    """Base class for errors tied to a single data record.

    Args:
        message: Description of the problem.
        line_id: Survey line the record belongs to.
        record_index: Zero based position of the record within its line.
        source_line: One based line number in the XYZ file.
    """

    def __init__(self, message: str, line_id: str | None, record_index: int, source_line: int):
        self.line_id = line_id
        self.record_index = record_index
        self.source_line = source_line
        self.message = f"Line {line_id}, record {record_index} (file line {source_line}): {message}"
        super().__init__(self.message)


class ColumnCountMismatchError(RecordError):
    """Raised when a data record doesn't have one value per channel."""

    def __init__(self, line_id: str | None, record_index: int, source_line: int, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        message = f"record has {actual} values but there are {expected} channels"
        super().__init__(message, line_id, record_index, source_line)


class NumericParseError(RecordError):
    """Raised when a value that isn't a dummy can't be parsed as a number."""

    def __init__(self, line_id: str | None, record_index: int, source_line: int, channel: str, token: str):
        self.channel = channel
        self.token = token
        message = f"value {token!r} of channel {channel!r} is not a number"
        super().__init__(message, line_id, record_index, source_line)


class InvalidNameError(XYZFormatError):
    """Raised when a line identifier or channel name can't name a node of the dataset.

    Args:
        kind: What is named, "line" or "channel".
        name: The offending name.
        reason: Why the name is rejected.
    """

    def __init__(self, kind: str, name: str, reason: str):
        self.kind = kind
        self.name = name
        self.message = f"Invalid {kind} name {name!r}: {reason}"
        super().__init__(self.message)


class InventoryMismatchError(XYZFormatError):
    """Raised when the line inventory and the data stream disagree."""


class IncompleteLineWarning(UserWarning):
    """Issued when a line ends before all of its fiducials were read."""
