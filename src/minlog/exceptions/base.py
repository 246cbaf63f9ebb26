from __future__ import annotations


class MinlogError(Exception):
    """Base exception class for all minlog-specific errors.

    This is the root of the minlog exception hierarchy. Host applications can
    catch ``MinlogError`` around a parse or evaluate call to handle every
    engine failure in one place while letting unrelated exceptions propagate.

    Attributes:
        message: Human-readable error message describing what went wrong.

    Example:
        ```python
        try:
            enabled = evaluate(rule_text, flags)
        except MinlogError as e:
            log.warning("rule_rejected", error=e.message)
            enabled = False
        ```
    """

    def __init__(self, message: str) -> None:
        """Initialize the MinlogError.

        Args:
            message: Human-readable error message.
        """
        self.message = message
        super().__init__(message)
