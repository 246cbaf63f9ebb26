"""Expression-specific error types for minlog.

This module defines the exceptions raised while tokenizing, sequencing,
building and evaluating flag expressions. All of them derive from
:class:`minlog.exceptions.MinlogError`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from minlog.exceptions import MinlogError

__all__ = [
    "ExpressionError",
    "ExpressionSyntaxError",
    "MalformedSequenceError",
    "ExpressionLimitError",
    "ExpressionEvaluationError",
    "UndefinedSettingError",
    "ExpressionErrorInfo",
    "MalformedReason",
]

MalformedReason = Literal["empty", "missing_operand", "multiple_roots"]


class ExpressionError(MinlogError):
    """Base exception for all expression-related errors.

    Attributes:
        message: Human-readable error message.
        expression: The expression that caused the error (if known).
    """

    def __init__(
        self,
        message: str,
        expression: str | None = None,
    ) -> None:
        """Initialize the ExpressionError.

        Args:
            message: Human-readable error message.
            expression: The expression that caused the error.
        """
        self.expression = expression
        super().__init__(message)


class ExpressionSyntaxError(ExpressionError):
    """Exception raised when expression text cannot be parsed.

    Raised for text fused in front of ``NOT(``, an unmatched closing
    parenthesis, a group that is never closed, an unknown token kind, and
    (when going through ``parse_expression``) any token stream that does not
    fold into a single tree, such as a dangling ``AND``.

    Attributes:
        message: Human-readable error message (with caret when positioned).
        expression: The expression that failed to parse.
        position: Character offset in the expression where the error occurred.
    """

    def __init__(
        self,
        message: str,
        expression: str,
        position: int = 0,
    ) -> None:
        """Initialize the ExpressionSyntaxError.

        Args:
            message: Human-readable error message.
            expression: The expression that failed to parse.
            position: Character offset where the error occurred.
        """
        self.position = position
        if position > 0 and expression:
            error_line = f"{expression}\n{' ' * position}^"
            full_message = f"{message} at position {position}:\n{error_line}"
        else:
            full_message = f"{message}: {expression}"
        super().__init__(full_message, expression=expression)


class MalformedSequenceError(ExpressionError):
    """Exception raised when a node sequence does not reduce to one root.

    This is raised by the tree builder itself and indicates that the ordered
    node sequence it was handed is inconsistent: it was empty, an operator
    found fewer operands on the stack than its arity, or more than one
    disjoint root remained at the end.

    Attributes:
        message: Human-readable error message.
        expression: The expression the sequence came from (if known).
        reason: Short machine-readable classification of the failure.
    """

    def __init__(
        self,
        message: str,
        reason: MalformedReason,
        expression: str | None = None,
    ) -> None:
        self.reason = reason
        super().__init__(message, expression=expression)


class ExpressionLimitError(ExpressionError):
    """Exception raised when a defensive parser bound is exceeded.

    Covers both the tree builder's operation ceiling and the sequencer's
    nesting bound. Never retried.

    Attributes:
        message: Human-readable error message.
        expression: The expression being processed (if known).
        limit: The bound that was reached.
    """

    def __init__(
        self,
        message: str,
        limit: int,
        expression: str | None = None,
    ) -> None:
        self.limit = limit
        super().__init__(message, expression=expression)


class ExpressionEvaluationError(ExpressionError):
    """Exception raised when a parsed tree cannot be evaluated.

    Attributes:
        message: Human-readable error message.
        expression: Canonical text of the tree being evaluated.
        context_vars: Names available in the environment (for debugging).
    """

    def __init__(
        self,
        message: str,
        expression: str,
        context_vars: tuple[str, ...] = (),
    ) -> None:
        """Initialize the ExpressionEvaluationError.

        Args:
            message: Human-readable error message.
            expression: The expression that failed to evaluate.
            context_vars: Names of settings available in the environment.
        """
        self.context_vars = context_vars
        if context_vars:
            available = ", ".join(sorted(context_vars))
            full_message = (
                f"{message} in expression: {expression}\n"
                f"Available settings: {available}"
            )
        else:
            full_message = f"{message} in expression: {expression}"
        super().__init__(full_message, expression=expression)


class UndefinedSettingError(ExpressionEvaluationError):
    """Raised when a mapping environment lacks a setting under the strict policy.

    Attributes:
        setting: Name of the setting that was not found.
    """

    def __init__(
        self,
        setting: str,
        expression: str,
        context_vars: tuple[str, ...] = (),
    ) -> None:
        self.setting = setting
        super().__init__(
            f"Setting '{setting}' is not defined",
            expression=expression,
            context_vars=context_vars,
        )


@dataclass(frozen=True, slots=True)
class ExpressionErrorInfo:
    """Expression parsing or evaluation error information.

    Immutable summary of an expression error for structured output (the CLI
    renders it as JSON).

    Attributes:
        expression: The expression that failed.
        message: Human-readable error message.
        position: Character position in expression (0 if not applicable).
        kind: Name of the exception class.
    """

    expression: str
    message: str
    position: int = 0
    kind: str = "ExpressionError"

    @classmethod
    def from_error(cls, error: ExpressionError) -> ExpressionErrorInfo:
        """Summarize an :class:`ExpressionError`."""
        return cls(
            expression=error.expression or "",
            message=error.message,
            position=getattr(error, "position", 0),
            kind=type(error).__name__,
        )
