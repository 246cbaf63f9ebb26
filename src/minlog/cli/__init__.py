"""CLI utilities for minlog.

This package provides the context object, exit codes, output formatting and
the subcommands registered on the ``minlog`` click group.
"""

from __future__ import annotations

from minlog.cli.context import CLIContext, ExitCode
from minlog.cli.output import OutputFormat

__all__ = [
    "CLIContext",
    "ExitCode",
    "OutputFormat",
]
