from __future__ import annotations

from pathlib import Path
from typing import Any

import click
import yaml
from pydantic import TypeAdapter, ValidationError

from minlog.cli.context import CLIContext, ExitCode
from minlog.cli.output import (
    OutputFormat,
    format_bool,
    format_expression_error,
    format_json,
)
from minlog.expressions import (
    ExpressionError,
    MissingSetting,
    evaluate,
    format_expression,
    parse_expression,
)
from minlog.logging import get_logger

logger = get_logger(__name__)

_SETTINGS_ADAPTER: TypeAdapter[dict[str, bool]] = TypeAdapter(dict[str, bool])
_BOOL_ADAPTER: TypeAdapter[bool] = TypeAdapter(bool)


def _parse_assignment(assignment: str) -> tuple[str, bool]:
    """Split ``NAME=VALUE`` on the last ``=`` so names like ``x == 5`` survive."""
    name, sep, raw_value = assignment.rpartition("=")
    name = name.strip()
    if not sep or not name:
        raise click.BadParameter(
            f"expected NAME=VALUE, got {assignment!r}", param_hint="--set"
        )
    try:
        return name, _BOOL_ADAPTER.validate_python(raw_value.strip())
    except ValidationError as e:
        raise click.BadParameter(
            f"{raw_value.strip()!r} is not a boolean", param_hint="--set"
        ) from e


def _load_settings_file(path: Path) -> dict[str, bool]:
    """Load a YAML (or JSON) mapping of setting name to boolean."""
    try:
        loaded: Any = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        raise click.BadParameter(
            f"invalid YAML in {path}: {e}", param_hint="--settings-file"
        ) from e
    if loaded is None:
        return {}
    try:
        return _SETTINGS_ADAPTER.validate_python(loaded)
    except ValidationError as e:
        raise click.BadParameter(
            f"{path} must map setting names to booleans", param_hint="--settings-file"
        ) from e


@click.command("eval")
@click.argument("expression")
@click.option(
    "-s",
    "--set",
    "assignments",
    multiple=True,
    metavar="NAME=VALUE",
    help="Set a flag value (repeatable). Overrides config and settings file.",
)
@click.option(
    "-f",
    "--settings-file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="YAML or JSON file mapping setting names to booleans.",
)
@click.option(
    "--strict",
    is_flag=True,
    default=False,
    help="Fail on settings that have no value instead of treating them as false.",
)
@click.option(
    "--format",
    "fmt",
    type=click.Choice([f.value for f in OutputFormat]),
    default=OutputFormat.TEXT.value,
    help="Output format.",
)
@click.option(
    "--exit-status",
    is_flag=True,
    default=False,
    help="Exit with status 1 when the expression is false.",
)
@click.pass_context
def eval_command(
    ctx: click.Context,
    expression: str,
    assignments: tuple[str, ...],
    settings_file: Path | None,
    strict: bool,
    fmt: str,
    exit_status: bool,
) -> None:
    """Evaluate EXPRESSION against flag values.

    Flag values come from the ``settings`` section of the configuration,
    then the settings file, then --set options (later sources win).

    Examples:
        minlog eval "beta AND NOT(banned)" -s beta=true -s banned=false
        minlog eval "x > 5 AND (x == 56 OR x < 26)" -f flags.yaml
    """
    cli_ctx: CLIContext = ctx.obj["cli_ctx"]
    config = cli_ctx.config
    output_format = OutputFormat(fmt)

    environment: dict[str, bool] = dict(config.settings)
    if settings_file is not None:
        environment.update(_load_settings_file(settings_file))
    environment.update(_parse_assignment(a) for a in assignments)

    missing = MissingSetting.ERROR if strict else config.evaluation.missing_setting

    try:
        tree = parse_expression(
            expression,
            operation_limit=config.parser.operation_limit,
            max_depth=config.parser.max_depth,
        )
        result = evaluate(tree, environment, missing=missing)
    except ExpressionError as e:
        logger.debug("eval_failed", expression=expression, error=e.message)
        click.echo(format_expression_error(e, output_format), err=True)
        ctx.exit(ExitCode.FAILURE)

    if output_format is OutputFormat.JSON:
        click.echo(
            format_json(
                {
                    "expression": format_expression(tree),
                    "result": result,
                }
            )
        )
    else:
        click.echo(format_bool(result))

    if exit_status and not result:
        ctx.exit(ExitCode.FAILURE)
