"""Subcommands of the ``minlog`` CLI."""
