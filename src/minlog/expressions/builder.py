"""Tree builder for sequenced expression nodes.

Folds the sequencer's postfix-ordered node list into a single tree with an
explicit operand stack. Each node pops as many operands as its arity (the
most recent becomes the right operand), receives them as children and is
pushed back. The sole remaining element is the root.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace

from minlog.constants import DEFAULT_OPERATION_LIMIT
from minlog.expressions.errors import ExpressionLimitError, MalformedSequenceError
from minlog.expressions.nodes import Node, format_expression
from minlog.logging import get_logger

__all__ = ["build_tree"]

logger = get_logger(__name__)


def build_tree(
    nodes: Sequence[Node],
    *,
    operation_limit: int = DEFAULT_OPERATION_LIMIT,
    expression: str | None = None,
) -> Node:
    """Fold an ordered node sequence into an expression tree.

    The input nodes are not modified; operator nodes are copied with their
    children filled in.

    Args:
        nodes: Nodes in fold order, as returned by ``sequence``.
        operation_limit: Node count at which folding aborts.
        expression: Source text, used only for error messages.

    Returns:
        The root node of the finished tree.

    Raises:
        MalformedSequenceError: If the sequence is empty, an operator lacks
            operands, or more than one root remains.
        ExpressionLimitError: If the sequence holds ``operation_limit``
            nodes or more.

    Examples:
        >>> from minlog.expressions.nodes import And, Setting
        >>> build_tree([Setting("a"), Setting("b"), And()])
        And(left=Setting(name='a'), right=Setting(name='b'))
    """
    if not nodes:
        raise MalformedSequenceError(
            "Empty expression",
            reason="empty",
            expression=expression,
        )

    stack: list[Node] = []
    operations = 0

    for node in nodes:
        operations += 1
        if operations >= operation_limit:
            raise ExpressionLimitError(
                f"Operation limit of {operation_limit} reached, too many operations",
                limit=operation_limit,
                expression=expression,
            )

        arity = node.arity
        if len(stack) < arity:
            raise MalformedSequenceError(
                f"Missing operand for {node.keyword}",  # type: ignore[union-attr]
                reason="missing_operand",
                expression=expression,
            )

        if arity == 2:
            right = stack.pop()
            left = stack.pop()
            node = replace(node, left=left, right=right)  # type: ignore[arg-type]
        elif arity == 1:
            node = replace(node, operand=stack.pop())  # type: ignore[arg-type]
        stack.append(node)

    if len(stack) != 1:
        roots = ", ".join(format_expression(root) for root in stack)
        raise MalformedSequenceError(
            f"Expected a single expression but found {len(stack)}: {roots}",
            reason="multiple_roots",
            expression=expression,
        )

    root = stack[0]
    logger.debug("expression_tree_built", expression=expression, node_count=operations)
    return root
