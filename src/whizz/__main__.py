"""Entrypoint to the Whizz command line interface (CLI)."""

from whizz.cli import app

if __name__ == "__main__":
    app()
