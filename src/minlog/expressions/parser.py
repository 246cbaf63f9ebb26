"""Expression parser entry point.

Runs the full pipeline ``tokenize -> sequence -> build_tree`` on expression
text and returns an immutable tree that can be evaluated any number of times
against different environments.
"""

from __future__ import annotations

from minlog.constants import DEFAULT_MAX_DEPTH, DEFAULT_OPERATION_LIMIT
from minlog.expressions.builder import build_tree
from minlog.expressions.errors import ExpressionSyntaxError, MalformedSequenceError
from minlog.expressions.nodes import Node
from minlog.expressions.sequencer import sequence
from minlog.expressions.tokens import TokenKind, tokenize
from minlog.logging import get_logger

__all__ = ["parse_expression"]

logger = get_logger(__name__)


def parse_expression(
    text: str,
    *,
    operation_limit: int = DEFAULT_OPERATION_LIMIT,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Node:
    """Parse expression text into a tree.

    Args:
        text: Expression such as ``"x AND (y OR NOT(z))"``.
        operation_limit: Node ceiling passed to the tree builder.
        max_depth: Nesting bound passed to the sequencer.

    Returns:
        Root node of the parsed tree.

    Raises:
        ExpressionSyntaxError: For malformed text, including blank input,
            a dangling ``AND``/``OR`` and adjacent operands with no operator.
        ExpressionLimitError: If a parser bound is exceeded.

    Examples:
        >>> parse_expression("a AND b OR c")  # doctest: +ELLIPSIS
        Or(left=And(...), right=Setting(name='c'))
    """
    if not isinstance(text, str):
        raise TypeError(f"Expected string expression, got {type(text).__name__}")

    tokens = tokenize(text)
    nodes = sequence(tokens, max_depth=max_depth, expression=text)

    try:
        tree = build_tree(nodes, operation_limit=operation_limit, expression=text)
    except MalformedSequenceError as e:
        # Anything that fails to fold here came from the user's text
        position = 0
        message = e.message
        if e.reason == "missing_operand" and tokens:
            last = tokens[-1]
            if last.kind in (TokenKind.AND, TokenKind.OR):
                message = f"Missing operand after {last.text}"
                position = last.position
        elif e.reason == "multiple_roots":
            message = "Missing AND/OR between expressions"
        raise ExpressionSyntaxError(message, expression=text, position=position) from e

    logger.debug("expression_parsed", expression=text, node_count=len(nodes))
    return tree
