"""Attribute models of a Whizz dataset."""

from __future__ import annotations

import datetime  # noqa: TC003 - pydantic needs it at runtime
from typing import Any

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import NonNegativeInt

from whizz.constants import DEFAULT_MISSING_VALUE
from whizz.constants import WHIZZ_VERSION


class StrictModel(BaseModel):
    """A model with forbidden extras that validates by name and alias."""

    model_config = ConfigDict(
        validate_by_name=True,
        serialize_by_alias=True,
        validate_assignment=True,
        extra="forbid",
    )

    def to_attributes(self) -> dict[str, Any]:
        """JSON compatible attributes for the Zarr store."""
        return self.model_dump(mode="json", by_alias=True)


class WhizzMetadata(StrictModel):
    """Global (project level) attributes of a Whizz dataset.

    The ``northing``, ``easting`` and ``time`` fields name the channels that hold positions and
    time. They are optional, but reports on distance and sampling need them.
    """

    whizz_version: str = Field(default=WHIZZ_VERSION, alias="Whizz_Version")
    project_name: str = ""
    block_name: str = ""
    customer: str = ""
    acquirer: str = ""
    acquirer_project_id: str = Field(default="", alias="acquirer_projectID")
    line_style: str = Field(default="", description="Line numbering style used by the data acquirer.")
    missing_value: float = DEFAULT_MISSING_VALUE
    northing: str = ""
    easting: str = ""
    time: str = ""
    source_file: str = ""
    line_ids: list[str] = Field(default_factory=list, description="Survey line identifiers in file order.")


class LineAttributes(StrictModel):
    """Attributes of a survey line group."""

    line_id: str
    num_fiducials: NonNegativeInt
    is_tie: bool = False
    flight: int | None = None
    date: datetime.date | None = None
    line_style: str = ""
    channels: list[str] = Field(default_factory=list, description="Channel names in column order.")


class ChannelAttributes(StrictModel):
    """Attributes of a channel array."""

    precision: NonNegativeInt = 0
    missing_value: float = DEFAULT_MISSING_VALUE
