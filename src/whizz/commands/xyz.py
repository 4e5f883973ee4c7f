"""XYZ CLI subcommands for importing Geosoft XYZ files into Whizz datasets.

This sub-app is available under the main CLI as: whizz xyz <command>.
Run: whizz xyz --help or whizz xyz import --help for usage and examples.
"""

from __future__ import annotations

from typing import Annotated

import typer
from rich import print  # noqa: A004
from upath import UPath

from whizz.commands.params import StorageOptionsParamType
from whizz.commands.params import UPathParamType
from whizz.exceptions import WhizzError

app = typer.Typer(help="Convert Geosoft XYZ files to Whizz datasets.")


XyzInType = Annotated[UPath, typer.Argument(help="Path to the input XYZ file.", click_type=UPathParamType())]
WhizzOutType = Annotated[
    UPath | None,
    typer.Argument(
        help="Path to the output Whizz dataset (default: input with .whizz suffix).",
        click_type=UPathParamType(),
    ),
]
LineStyleType = Annotated[str, typer.Option(help="Line numbering style used by the data acquirer.")]
MissingValueType = Annotated[float | None, typer.Option(help="Value written in place of '*' dummies.")]
TextOptionType = Annotated[str, typer.Option()]
StorageOptionType = Annotated[
    dict | None,
    typer.Option(help="fsspec storage options as JSON.", click_type=StorageOptionsParamType()),
]
OverwriteType = Annotated[bool, typer.Option(help="Overwrite the Whizz dataset if it exists.")]


@app.command(name="import")
def xyz_import(  # noqa: PLR0913
    input_path: XyzInType,
    output_path: WhizzOutType = None,
    line_style: LineStyleType = "",
    missing_value: MissingValueType = None,
    project_name: TextOptionType = "",
    block_name: TextOptionType = "",
    customer: TextOptionType = "",
    acquirer: TextOptionType = "",
    acquirer_project_id: TextOptionType = "",
    northing: Annotated[str, typer.Option(help="Name of the northing channel.")] = "",
    easting: Annotated[str, typer.Option(help="Name of the easting channel.")] = "",
    time: Annotated[str, typer.Option(help="Name of the time channel.")] = "",
    storage_input: StorageOptionType = None,
    storage_output: StorageOptionType = None,
    overwrite: OverwriteType = False,
) -> None:
    """Convert a Geosoft XYZ file into a Whizz dataset.

    \b
    Examples:
    - Local file, output next to the input (survey.whizz):
      whizz xyz import survey.xyz
    - With project information and position channels:
      whizz xyz import survey.xyz out.whizz --project-name P1 --northing Y --easting X --time TIME

    \b
    Notes:
    - Storage options are fsspec-compatible JSON passed to --storage-input/--storage-output.
    - The command fails if output exists unless --overwrite is provided.
    """
    from whizz.converters import default_whizz_path
    from whizz.converters import xyz_to_whizz
    from whizz.schemas.metadata import WhizzMetadata

    if storage_input is not None:
        input_path = UPath(input_path, **storage_input)

    if output_path is None:
        output_path = default_whizz_path(input_path)

    if storage_output is not None:
        output_path = UPath(output_path, **storage_output)

    if not input_path.is_file():
        typer.secho(f"Input file '{input_path}' does not exist.", fg="red", err=True)
        raise typer.Abort from None

    metadata = WhizzMetadata(
        project_name=project_name,
        block_name=block_name,
        customer=customer,
        acquirer=acquirer,
        acquirer_project_id=acquirer_project_id,
        northing=northing,
        easting=easting,
        time=time,
    )

    try:
        summary = xyz_to_whizz(
            input_path,
            output_path,
            line_style=line_style,
            missing_value=missing_value,
            metadata=metadata,
            overwrite=overwrite,
        )
    except FileExistsError:
        typer.secho(f"Output location '{output_path}' exists. Use `--overwrite` flag to overwrite.", fg="red", err=True)
        raise typer.Abort from None
    except WhizzError as err:
        typer.secho(str(err), fg="red", err=True)
        raise typer.Abort from None

    print(f"Added {summary.lines_saved} lines, each of {summary.num_channels} channels.")
    print(f"Lines: {summary.line_ids}")
    print(f"Channels: {summary.channel_names}")
    if not summary.channel_names_resolved:
        typer.secho("No header record named the channels, placeholder names were used.", fg="yellow", err=True)
    if summary.incomplete_lines:
        typer.secho(f"Incomplete lines not written: {summary.incomplete_lines}", fg="yellow", err=True)
    print(f"XYZ to Whizz conversion successful: {input_path} -> {output_path}")
