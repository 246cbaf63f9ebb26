"""CLI entry point for minlog.

This module defines the Click-based command-line interface.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click
from dotenv import load_dotenv

from minlog import __version__
from minlog.cli.commands.check import check_command
from minlog.cli.commands.config import config
from minlog.cli.commands.eval import eval_command
from minlog.cli.commands.parse import parse_command
from minlog.cli.context import CLIContext, ExitCode
from minlog.cli.output import format_error
from minlog.config import load_config
from minlog.exceptions import ConfigError
from minlog.logging import configure_logging

_VERBOSITY_LEVELS = {
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}

_CONFIG_SUGGESTION = (
    "Check minlog.yaml (or the --config file), ~/.config/minlog/config.yaml "
    "and MINLOG_* environment variables."
)


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="minlog")
@click.option(
    "-c",
    "--config",
    "config_file",
    type=click.Path(exists=False, path_type=str),
    default=None,
    help="Path to config file (overrides ./minlog.yaml).",
)
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="Increase verbosity (-v for INFO, -vv for DEBUG).",
)
@click.option(
    "-q",
    "--quiet",
    is_flag=True,
    default=False,
    help="Suppress non-essential output (ERROR level only).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config_file: str | None,
    verbose: int,
    quiet: bool,
) -> None:
    """minlog - evaluate boolean flag expressions like 'a AND (b OR NOT(c))'."""
    ctx.ensure_object(dict)

    # MINLOG_* variables from ./.env, without overriding the real environment
    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)

    config_path = Path(config_file) if config_file else None
    try:
        config = load_config(config_path)
    except ConfigError as e:
        details = []
        if e.field:
            details.append(f"Field: {e.field}")
        if e.value is not None:
            details.append(f"Value: {e.value}")
        click.echo(
            format_error(
                e.message,
                details=details,
                suggestion=_CONFIG_SUGGESTION,
            ),
            err=True,
        )
        ctx.exit(ExitCode.FAILURE)

    ctx.obj["cli_ctx"] = CLIContext(config=config, quiet=quiet)

    # Priority: quiet > verbose > config
    if quiet:
        level = logging.ERROR
    elif verbose > 0:
        level = logging.INFO if verbose == 1 else logging.DEBUG
    else:
        level = _VERBOSITY_LEVELS.get(config.verbosity, logging.WARNING)

    configure_logging(level=level)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


cli.add_command(eval_command)
cli.add_command(parse_command)
cli.add_command(check_command)
cli.add_command(config)

if __name__ == "__main__":
    cli()
