from __future__ import annotations

import click

from minlog.cli.context import CLIContext, ExitCode
from minlog.cli.output import OutputFormat, format_expression_error, format_json
from minlog.expressions import ExpressionError, format_expression, parse_expression


@click.command("parse")
@click.argument("expression")
@click.option(
    "--format",
    "fmt",
    type=click.Choice([f.value for f in OutputFormat]),
    default=OutputFormat.TEXT.value,
    help="Output format: canonical text or the JSON tree.",
)
@click.pass_context
def parse_command(ctx: click.Context, expression: str, fmt: str) -> None:
    """Parse EXPRESSION and print its tree.

    Text output is the canonical form with every nested AND/OR
    parenthesized, which makes the left-to-right fold order explicit.

    Examples:
        minlog parse "a AND b OR c"            # (a AND b) OR c
        minlog parse "NOT(a)" --format json
    """
    cli_ctx: CLIContext = ctx.obj["cli_ctx"]
    output_format = OutputFormat(fmt)

    try:
        tree = parse_expression(
            expression,
            operation_limit=cli_ctx.config.parser.operation_limit,
            max_depth=cli_ctx.config.parser.max_depth,
        )
    except ExpressionError as e:
        click.echo(format_expression_error(e, output_format), err=True)
        ctx.exit(ExitCode.FAILURE)

    if output_format is OutputFormat.JSON:
        click.echo(format_json(tree.to_dict()))
    else:
        click.echo(format_expression(tree))
