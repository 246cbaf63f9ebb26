"""Token-to-node sequencer.

Converts the token stream into a flat, operator-follows-operands node list
that the tree builder folds. AND and OR have equal precedence and combine
strictly left to right: a binary operator waits in a single pending slot
and is emitted right after its right operand, so

    a AND b OR c   ->   [a, b, AND, c, OR]   ==   (a AND b) OR c

Parenthesized groups and ``NOT(...)`` are sequenced recursively and spliced
in place; a NOT node follows its spliced operand.
"""

from __future__ import annotations

from collections.abc import Sequence

from minlog.constants import DEFAULT_MAX_DEPTH
from minlog.expressions.errors import ExpressionLimitError, ExpressionSyntaxError
from minlog.expressions.nodes import And, BinaryNode, Literal, Node, Not, Or, Setting
from minlog.expressions.tokens import Token, TokenKind
from minlog.logging import get_logger

__all__ = ["sequence"]

logger = get_logger(__name__)


def sequence(
    tokens: Sequence[Token],
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
    expression: str | None = None,
) -> list[Node]:
    """Order tokens into a node sequence for the tree builder.

    A trailing operator with no right operand is appended as-is; the tree
    builder reports it.

    Args:
        tokens: Tokens produced by :func:`minlog.expressions.tokens.tokenize`.
        max_depth: Maximum parenthesis nesting to recurse into.
        expression: Source text, used only for error messages.

    Returns:
        Nodes in fold order. Operator nodes have no children.

    Raises:
        ExpressionSyntaxError: On an unmatched ``)``, a group that is never
            closed, or an unrecognized token kind.
        ExpressionLimitError: If nesting exceeds ``max_depth``.
    """
    source = expression if expression is not None else _render(tokens)
    nodes = _sequence(tokens, depth=0, max_depth=max_depth, source=source)
    logger.debug("expression_sequenced", expression=source, node_count=len(nodes))
    return nodes


def _sequence(
    tokens: Sequence[Token],
    *,
    depth: int,
    max_depth: int,
    source: str,
) -> list[Node]:
    args: list[Node] = []
    pending: BinaryNode | None = None

    def flush_pending() -> None:
        nonlocal pending
        if pending is not None:
            args.append(pending)
            pending = None

    i = 0
    while i < len(tokens):
        token = tokens[i]
        kind = token.kind

        if kind is TokenKind.AND or kind is TokenKind.OR:
            if pending is not None:
                raise ExpressionSyntaxError(
                    f"Missing operand between {pending.keyword} and {token.text}",
                    expression=source,
                    position=token.position,
                )
            pending = And() if kind is TokenKind.AND else Or()
        elif kind is TokenKind.NAME:
            args.append(Setting(token.value or ""))
            flush_pending()
        elif kind is TokenKind.TRUE or kind is TokenKind.FALSE:
            args.append(Literal(kind is TokenKind.TRUE))
            flush_pending()
        elif kind is TokenKind.OPEN or kind is TokenKind.NOT:
            if depth >= max_depth:
                raise ExpressionLimitError(
                    f"Parentheses nested deeper than {max_depth} levels",
                    limit=max_depth,
                    expression=source,
                )
            negated = kind is TokenKind.NOT
            if negated and (
                i + 1 >= len(tokens) or tokens[i + 1].kind is not TokenKind.OPEN
            ):
                raise ExpressionSyntaxError(
                    "Expected ( after NOT",
                    expression=source,
                    position=token.position,
                )
            # Skip NOT's synthetic OPEN as well
            body_start = i + 2 if negated else i + 1
            close = _find_close(tokens, body_start, opener=token, source=source)
            args.extend(
                _sequence(
                    tokens[body_start:close],
                    depth=depth + 1,
                    max_depth=max_depth,
                    source=source,
                )
            )
            if negated:
                args.append(Not())
            flush_pending()
            i = close
        elif kind is TokenKind.CLOSE:
            raise ExpressionSyntaxError(
                "Unexpected token )",
                expression=source,
                position=token.position,
            )
        else:
            raise ExpressionSyntaxError(
                f"Unknown token {kind!r}",
                expression=source,
                position=token.position,
            )
        i += 1

    # Dangling operator: left for the tree builder to reject
    flush_pending()
    return args


def _find_close(
    tokens: Sequence[Token],
    start: int,
    *,
    opener: Token,
    source: str,
) -> int:
    """Return the index of the CLOSE matching a group whose body starts at ``start``."""
    balance = 1
    for j in range(start, len(tokens)):
        kind = tokens[j].kind
        if kind is TokenKind.OPEN:
            balance += 1
        elif kind is TokenKind.CLOSE:
            balance -= 1
            if balance == 0:
                return j
    raise ExpressionSyntaxError(
        "Expected closing parenthesis",
        expression=source,
        position=opener.position,
    )


def _render(tokens: Sequence[Token]) -> str:
    return " ".join(token.text for token in tokens)
