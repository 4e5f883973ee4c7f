"""Report commands on Whizz datasets."""

from __future__ import annotations

from typing import Annotated

import typer
from rich import print  # noqa: A004
from upath import UPath

from whizz.commands.params import UPathParamType
from whizz.exceptions import WhizzError

app = typer.Typer()


WhizzInType = Annotated[UPath, typer.Argument(help="Path to the Whizz dataset.", click_type=UPathParamType())]
DetailedType = Annotated[bool, typer.Option(help="Show all global attributes / lines of each flight.")]


def _print_header(path: UPath, detailed: bool) -> None:
    from whizz.api.io import open_whizz
    from whizz.api.io import read_metadata

    root = open_whizz(path)
    metadata = read_metadata(root)
    print("The geoWhizz Filename:")
    print(f"    {path.name}")
    print("Global Attributes:")
    if detailed:
        print(dict(root.attrs))
    else:
        print(f"    Whizz Version: {metadata.whizz_version}")
        print(f"    Project Name: {metadata.project_name}")
        print(f"    Block Name: {metadata.block_name}")
        print(f"    Customer: {metadata.customer}")
        print(f"    Acquirer: {metadata.acquirer}")
    print()


@app.command()
def report(
    input_path: WhizzInType,
    line: Annotated[str | None, typer.Option(help="Survey line to report. Defaults to the first line.")] = None,
    channel: Annotated[str | None, typer.Option(help="Channel of the line to report.")] = None,
    detailed: DetailedType = False,
) -> None:
    """Print a summary of the contents of a Whizz dataset."""
    from whizz.reporting import report_whizz

    try:
        _print_header(input_path, detailed)
        summary = report_whizz(input_path, line=line, channel=channel)
    except WhizzError as err:
        typer.secho(str(err), fg="red", err=True)
        raise typer.Abort from None

    print(str(summary.distance))
    print(f"\n{len(summary.line_ids)} Lines:")
    print(summary.line_ids)
    if summary.line is None:
        return

    print("\nLine attributes")
    print(summary.line_attributes)
    print(f"Line {summary.line}; {len(summary.channels)} channels:")
    print(summary.channels)
    if summary.channel is not None:
        print(f"Channel {summary.channel} attributes")
        print(summary.channel_attributes)


@app.command()
def flights(
    input_path: WhizzInType,
    flight_channel: Annotated[str, typer.Option(help="Channel holding the flight number.")] = "FLIGHT",
    detailed: DetailedType = False,
) -> None:
    """Print the flights of a Whizz dataset."""
    from whizz.reporting import report_flights

    try:
        _print_header(input_path, detailed)
        flight_lines = report_flights(input_path, flight_channel=flight_channel)
    except WhizzError as err:
        typer.secho(str(err), fg="red", err=True)
        raise typer.Abort from None

    print("Flights")
    for flight, lines in flight_lines.items():
        print(f"    {flight}")
        if detailed:
            print("  ".join(f"L{line}" for line in lines))


@app.command()
def sampling(
    input_path: WhizzInType,
    time_channel: Annotated[str | None, typer.Option(help="Time channel (default: dataset 'time')")] = None,
    northing: Annotated[str | None, typer.Option(help="Northing channel (default: dataset 'northing')")] = None,
    easting: Annotated[str | None, typer.Option(help="Easting channel (default: dataset 'easting')")] = None,
) -> None:
    """Print sample time and distance statistics of a Whizz dataset."""
    from whizz.reporting import report_sampling

    try:
        stats = report_sampling(input_path, time_channel=time_channel, northing=northing, easting=easting)
    except (WhizzError, ValueError) as err:
        typer.secho(str(err), fg="red", err=True)
        raise typer.Abort from None

    print(str(stats))
