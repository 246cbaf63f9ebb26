"""Output formatting utilities for the minlog CLI."""

from __future__ import annotations

import json
from dataclasses import asdict
from enum import Enum
from typing import Any

from minlog.expressions import ExpressionError, ExpressionErrorInfo

__all__ = [
    "OutputFormat",
    "format_error",
    "format_json",
    "format_bool",
    "format_expression_error",
]


class OutputFormat(str, Enum):
    """Supported output formats for CLI commands."""

    TEXT = "text"
    JSON = "json"


def format_error(
    message: str, details: list[str] | None = None, suggestion: str | None = None
) -> str:
    """Format an error message with optional details and suggestion.

    Example:
        >>> print(format_error("Bad config", details=["Field: parser"]))
        Error: Bad config
          Field: parser
    """
    lines = [f"Error: {message}"]

    if details:
        for detail in details:
            lines.append(f"  {detail}")

    if suggestion:
        lines.append(f"Suggestion: {suggestion}")

    return "\n".join(lines)


def format_json(data: Any) -> str:
    """Format data as indented JSON.

    Example:
        >>> format_json({"result": True})
        '{\\n  "result": true\\n}'
    """
    return json.dumps(data, indent=2)


def format_bool(value: bool) -> str:
    """Render a result the way expressions spell literals (lowercased)."""
    return "true" if value else "false"


def format_expression_error(error: ExpressionError, fmt: OutputFormat) -> str:
    """Render an expression error for stderr in the requested format."""
    if fmt is OutputFormat.JSON:
        return format_json({"error": asdict(ExpressionErrorInfo.from_error(error))})
    return format_error(error.message)
