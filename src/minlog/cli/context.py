"""CLI context and exit codes for minlog."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from minlog.config import MinlogConfig

__all__ = [
    "ExitCode",
    "CLIContext",
]


class ExitCode(IntEnum):
    """Exit codes for the minlog CLI.

    - 0 for success
    - 1 for expression/config errors, or a false result with --exit-status

    Usage errors exit with 2, raised by click itself.
    """

    SUCCESS = 0
    FAILURE = 1


@dataclass(frozen=True, slots=True)
class CLIContext:
    """Type-safe CLI context containing global options and configuration.

    Attributes:
        config: Loaded minlog configuration.
        quiet: Suppress non-essential output.
    """

    config: MinlogConfig
    quiet: bool = False
