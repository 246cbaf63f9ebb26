"""Expression evaluator for minlog.

Evaluates parsed trees against a host-supplied environment that resolves
setting names to booleans:

- a callable ``environment(name) -> bool``, or
- a mapping ``environment[name] -> bool``.

AND and OR short-circuit, so the right operand's settings are never looked
up when the left operand already decides the result. Evaluation is a pure
walk over an immutable tree; one tree may be evaluated concurrently against
different environments.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from enum import Enum
from typing import Any

from minlog.constants import DEFAULT_MAX_DEPTH, DEFAULT_OPERATION_LIMIT
from minlog.expressions.errors import (
    ExpressionEvaluationError,
    UndefinedSettingError,
)
from minlog.expressions.nodes import (
    And,
    Literal,
    Node,
    Not,
    Or,
    Setting,
    format_expression,
)
from minlog.expressions.parser import parse_expression
from minlog.logging import get_logger

__all__ = [
    "Environment",
    "ExpressionEvaluator",
    "MissingSetting",
    "evaluate",
]

logger = get_logger(__name__)

Environment = Callable[[str], Any] | Mapping[str, Any]


class MissingSetting(str, Enum):
    """What a mapping environment does for a setting it does not contain."""

    FALSE = "false"  # treat as false
    ERROR = "error"  # raise UndefinedSettingError


class ExpressionEvaluator:
    """Evaluates expression trees against one environment.

    Attributes:
        missing: Policy for settings absent from a mapping environment.
            Callback environments decide this themselves.

    Example:
        ```python
        evaluator = ExpressionEvaluator({"beta": True, "banned": False})
        tree = parse_expression("beta AND NOT(banned)")
        evaluator.evaluate(tree)  # True
        ```
    """

    def __init__(
        self,
        environment: Environment,
        *,
        missing: MissingSetting | str = MissingSetting.FALSE,
    ) -> None:
        """Initialize the ExpressionEvaluator.

        Args:
            environment: Mapping or callable resolving setting names.
            missing: Policy for names absent from a mapping environment.

        Raises:
            TypeError: If ``environment`` is neither a mapping nor callable.
        """
        if not isinstance(environment, Mapping) and not callable(environment):
            raise TypeError(
                "Environment must be a mapping or a callable, "
                f"got {type(environment).__name__}"
            )
        self._environment = environment
        self.missing = MissingSetting(missing)

    def evaluate(self, tree: Node) -> bool:
        """Evaluate a tree.

        Args:
            tree: Root node returned by ``parse_expression``.

        Returns:
            The boolean result.

        Raises:
            UndefinedSettingError: If a mapping lacks a setting and the
                policy is ``MissingSetting.ERROR``.
            ExpressionEvaluationError: If the tree has an operator node
                without children.
        """
        return self._evaluate(tree)

    def _evaluate(self, root: Node) -> bool:
        # Operators whose operands are still being evaluated, each flagged
        # once its right operand has been entered
        stack: list[tuple[And | Or | Not, bool]] = []
        node: Node | None = root

        while True:
            # Descend along left operands until a leaf yields a value
            while True:
                if isinstance(node, Literal):
                    result = node.value
                    break
                if isinstance(node, Setting):
                    result = self._lookup(node.name, root)
                    break
                if isinstance(node, (And, Or)):
                    self._require(node.left, node, root)
                    self._require(node.right, node, root)
                    stack.append((node, False))
                    node = node.left
                elif isinstance(node, Not):
                    self._require(node.operand, node, root)
                    stack.append((node, False))
                    node = node.operand
                else:
                    raise ExpressionEvaluationError(
                        f"Unknown node type {type(node).__name__}",
                        expression=repr(node),
                    )

            # Climb until an operator still needs its right operand
            while stack:
                parent, entered_right = stack.pop()
                if isinstance(parent, Not):
                    result = not result
                    continue
                if entered_right:
                    continue
                # FALSE decides an AND, TRUE decides an OR
                if result == isinstance(parent, Or):
                    continue
                stack.append((parent, True))
                node = parent.right
                break
            else:
                return result

    def _lookup(self, name: str, root: Node) -> bool:
        environment = self._environment
        if not isinstance(environment, Mapping):
            return bool(environment(name))

        if name in environment:
            return bool(environment[name])
        if self.missing is MissingSetting.ERROR:
            raise UndefinedSettingError(
                name,
                expression=format_expression(root),
                context_vars=tuple(str(key) for key in environment),
            )
        logger.debug("setting_undefined", setting=name)
        return False

    @staticmethod
    def _require(child: Node | None, parent: Node, root: Node) -> None:
        if child is None:
            raise ExpressionEvaluationError(
                f"Incomplete {parent.keyword} node",  # type: ignore[union-attr]
                expression=format_expression(root),
            )


def evaluate(
    tree_or_text: Node | str,
    environment: Environment,
    *,
    missing: MissingSetting | str = MissingSetting.FALSE,
    operation_limit: int = DEFAULT_OPERATION_LIMIT,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> bool:
    """Evaluate a tree, or expression text, against an environment.

    Text is parsed first; the result is identical to parsing once with
    ``parse_expression`` and evaluating the returned tree.

    Args:
        tree_or_text: A parsed tree or raw expression text.
        environment: Mapping or callable resolving setting names.
        missing: Policy for names absent from a mapping environment.
        operation_limit: Node ceiling used when parsing text.
        max_depth: Nesting bound used when parsing text.

    Returns:
        The boolean result.

    Examples:
        >>> evaluate("NOT(BannedForever)", {"BannedForever": True})
        False
        >>> evaluate("TRUE OR FALSE", {})
        True
    """
    if isinstance(tree_or_text, str):
        tree = parse_expression(
            tree_or_text,
            operation_limit=operation_limit,
            max_depth=max_depth,
        )
    else:
        tree = tree_or_text
    return ExpressionEvaluator(environment, missing=missing).evaluate(tree)
