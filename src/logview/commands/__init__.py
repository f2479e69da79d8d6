"""Subcommands run by the logview CLI."""
