"""Click parameter types of the Whizz CLI."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING
from typing import Any

import click
from upath import UPath

if TYPE_CHECKING:
    from click.core import Context
    from click.core import Parameter


class UPathParamType(click.ParamType):
    """Local path or fsspec URL, as a UPath. Local paths have ``~`` expanded."""

    name = "PATH"

    def convert(self, value: str | UPath, param: Parameter | None, ctx: Context | None) -> UPath:
        """Build the UPath of a command line value."""
        if isinstance(value, UPath):
            return value
        try:
            path = UPath(value)
        except ValueError as err:
            self.fail(f"{value!r} is not a path or a supported URL: {err}", param, ctx)
        if not path.protocol:
            path = path.expanduser()
        return path


class StorageOptionsParamType(click.ParamType):
    """fsspec storage options given as a JSON object."""

    name = "JSON"

    def convert(self, value: str | dict, param: Parameter | None, ctx: Context | None) -> dict[str, Any]:
        """Parse the JSON object of a command line value."""
        if isinstance(value, dict):
            return value
        try:
            options = json.loads(value)
        except json.JSONDecodeError as err:
            self.fail(f"Storage options must be JSON, got {value!r}: {err.msg}", param, ctx)
        if not isinstance(options, dict):
            self.fail(f"Storage options must be a JSON object, got {value!r}", param, ctx)
        return options
