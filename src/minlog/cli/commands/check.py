from __future__ import annotations

import click

from minlog.cli.context import CLIContext, ExitCode
from minlog.cli.output import OutputFormat, format_expression_error
from minlog.expressions import ExpressionError, parse_expression, settings_in


@click.command("check")
@click.argument("expression")
@click.pass_context
def check_command(ctx: click.Context, expression: str) -> None:
    """Validate EXPRESSION and list the settings it references.

    Settings that have no value in the configured ``settings`` are marked.

    Examples:
        minlog check "beta AND NOT(banned)"
    """
    cli_ctx: CLIContext = ctx.obj["cli_ctx"]
    config = cli_ctx.config

    try:
        tree = parse_expression(
            expression,
            operation_limit=config.parser.operation_limit,
            max_depth=config.parser.max_depth,
        )
    except ExpressionError as e:
        click.echo(format_expression_error(e, OutputFormat.TEXT), err=True)
        ctx.exit(ExitCode.FAILURE)

    names = settings_in(tree)
    if not cli_ctx.quiet:
        click.echo("OK")
        for name in names:
            marker = "" if name in config.settings else "  (no configured value)"
            click.echo(f"  {name}{marker}")
