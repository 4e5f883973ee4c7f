"""Command-line interface."""

from __future__ import annotations

import logging
from typing import Annotated

import typer
from rich.logging import RichHandler

from whizz.commands import report
from whizz.commands import version
from whizz.commands import xyz

app = typer.Typer(no_args_is_help=True)
app.add_typer(xyz.app, name="xyz")
app.add_typer(report.app)
app.add_typer(version.app)


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log ingestion progress.")] = False,
) -> None:
    """Welcome to geoWhizz!

    geoWhizz converts Geosoft XYZ airborne survey files into Whizz datasets
    organized by survey line and channel, and reports on their contents.
    """
    if verbose:
        logging.basicConfig(level=logging.INFO, format="%(message)s", handlers=[RichHandler(show_path=False)])
