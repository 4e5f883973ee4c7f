"""Version command."""

import typer

from whizz import __version__

app = typer.Typer()


@app.command()
def version() -> None:
    """Print the version of the CLI."""
    print(f"Whizz CLI Version {__version__}")
