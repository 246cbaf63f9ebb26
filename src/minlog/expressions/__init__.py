"""Flag expression parsing and evaluation.

This package implements a small boolean language for combining named flags
("settings") supplied by a host application:

    x > 5 AND (x == 56 OR x < 26)
    NOT(BannedForever)
    beta OR TRUE

Expression Syntax
-----------------
- Settings: any other text, trimmed, e.g. ``dark_mode`` or ``x > 5``
- Literals: ``TRUE``, ``FALSE``
- Binary operators: ``AND``, ``OR`` with whitespace before the keyword;
  equal precedence, folded left to right (``a AND b OR c`` means
  ``(a AND b) OR c``)
- Negation: ``NOT(expression)`` with no space before the parenthesis
- Grouping: ``(expression)``

Keywords are case-insensitive.

Module Structure
----------------
- tokens.py: Tokenizer (text -> tokens)
- sequencer.py: Sequencer (tokens -> postfix-ordered nodes)
- builder.py: Tree builder (nodes -> tree)
- parser.py: ``parse_expression`` running the three stages above
- evaluator.py: Evaluation against a mapping or callback environment
- nodes.py: Node models and rendering helpers
- errors.py: Expression-specific error types

Parsed trees are immutable; evaluation is stateless and thread-safe.
"""

from __future__ import annotations

from minlog.expressions.builder import build_tree
from minlog.expressions.errors import (
    ExpressionError,
    ExpressionErrorInfo,
    ExpressionEvaluationError,
    ExpressionLimitError,
    ExpressionSyntaxError,
    MalformedSequenceError,
    UndefinedSettingError,
)
from minlog.expressions.evaluator import (
    Environment,
    ExpressionEvaluator,
    MissingSetting,
    evaluate,
)
from minlog.expressions.nodes import (
    And,
    Literal,
    Node,
    Not,
    Or,
    Setting,
    format_expression,
    settings_in,
)
from minlog.expressions.parser import parse_expression
from minlog.expressions.sequencer import sequence
from minlog.expressions.tokens import Token, TokenKind, tokenize

__all__: list[str] = [
    # Error types
    "ExpressionError",
    "ExpressionSyntaxError",
    "MalformedSequenceError",
    "ExpressionLimitError",
    "ExpressionEvaluationError",
    "UndefinedSettingError",
    "ExpressionErrorInfo",
    # Tokens
    "Token",
    "TokenKind",
    # Nodes
    "Node",
    "Literal",
    "Setting",
    "And",
    "Or",
    "Not",
    # Pipeline
    "tokenize",
    "sequence",
    "build_tree",
    "parse_expression",
    # Evaluation
    "Environment",
    "ExpressionEvaluator",
    "MissingSetting",
    "evaluate",
    # Helpers
    "format_expression",
    "settings_in",
]
