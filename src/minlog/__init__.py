"""minlog - a minimal logical language for combining boolean flags.

Usage:
    import minlog

    tree = minlog.parse("beta AND NOT(banned)")
    minlog.evaluate(tree, {"beta": True, "banned": False})  # True
    minlog.evaluate("a OR b", lambda name: name == "b")     # True
"""

from __future__ import annotations

from minlog.exceptions import MinlogError
from minlog.expressions import (
    ExpressionError,
    ExpressionEvaluationError,
    ExpressionLimitError,
    ExpressionSyntaxError,
    MalformedSequenceError,
    MissingSetting,
    Node,
    UndefinedSettingError,
    evaluate,
    format_expression,
)
from minlog.expressions import parse_expression as parse

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "parse",
    "evaluate",
    "format_expression",
    "MissingSetting",
    "Node",
    "MinlogError",
    "ExpressionError",
    "ExpressionSyntaxError",
    "MalformedSequenceError",
    "ExpressionLimitError",
    "ExpressionEvaluationError",
    "UndefinedSettingError",
]
