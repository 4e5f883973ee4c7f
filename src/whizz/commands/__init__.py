"""Whizz CLI subcommands."""
