"""Tokenizer for flag expressions.

Splits raw expression text into a flat list of :class:`Token` values. The
scanner treats ``(`` and ``)`` as hard boundaries and classifies whole words
(maximal runs of non-whitespace, non-parenthesis characters) against the
reserved keywords, case-insensitively:

- ``AND`` / ``OR`` are operators only when preceded by whitespace, so a
  setting such as ``RAND`` or ``x>ORIGIN`` is never split.
  Any whitespace counts (tabs and newlines as well as spaces), so
  expressions may be wrapped across lines.
- ``NOT`` is an operator only when fused to its opening parenthesis
  (``NOT(``). It emits ``NOT`` followed by a synthetic ``OPEN``.
- ``TRUE`` / ``FALSE`` become literal tokens.

Everything else between boundaries is a setting name, trimmed of
surrounding whitespace. Setting names therefore may contain spaces and
punctuation (``x > 5``) but cannot contain a free-standing ``AND``/``OR``.

Examples:
    >>> [t.kind.value for t in tokenize("a AND NOT(b)")]
    ['name', 'and', 'not', 'open', 'name', 'close']
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from minlog.constants import (
    KEYWORD_AND,
    KEYWORD_FALSE,
    KEYWORD_NOT,
    KEYWORD_OR,
    KEYWORD_TRUE,
)
from minlog.expressions.errors import ExpressionSyntaxError
from minlog.logging import get_logger

__all__ = [
    "TokenKind",
    "Token",
    "tokenize",
]

logger = get_logger(__name__)


class TokenKind(str, Enum):
    """Kind of lexical unit."""

    NAME = "name"
    AND = "and"
    OR = "or"
    NOT = "not"
    OPEN = "open"
    CLOSE = "close"
    TRUE = "true"
    FALSE = "false"


_KEYWORD_TEXT: dict[TokenKind, str] = {
    TokenKind.AND: KEYWORD_AND,
    TokenKind.OR: KEYWORD_OR,
    TokenKind.NOT: KEYWORD_NOT,
    TokenKind.OPEN: "(",
    TokenKind.CLOSE: ")",
    TokenKind.TRUE: KEYWORD_TRUE,
    TokenKind.FALSE: KEYWORD_FALSE,
}

_BINARY_KEYWORDS: dict[str, TokenKind] = {
    KEYWORD_AND: TokenKind.AND,
    KEYWORD_OR: TokenKind.OR,
}

_PARENTHESES = "()"


@dataclass(frozen=True, slots=True)
class Token:
    """A single lexical unit of an expression.

    Attributes:
        kind: Token variant.
        value: Setting name for NAME tokens, the source spelling for
            TRUE/FALSE, None otherwise.
        position: Character offset of the token in the source text.
    """

    kind: TokenKind
    value: str | None = None
    position: int = 0

    @property
    def text(self) -> str:
        """Source-like spelling of the token, used in error messages."""
        if self.kind is TokenKind.NAME:
            return self.value or ""
        return _KEYWORD_TEXT[self.kind]


def _name_token(text: str, start: int, end: int) -> Token | None:
    """Build a NAME/TRUE/FALSE token from ``text[start:end]``, or None if blank."""
    raw = text[start:end]
    name = raw.strip()
    if not name:
        return None
    position = start + len(raw) - len(raw.lstrip())
    upper = name.upper()
    if upper == KEYWORD_TRUE:
        return Token(TokenKind.TRUE, value=name, position=position)
    if upper == KEYWORD_FALSE:
        return Token(TokenKind.FALSE, value=name, position=position)
    return Token(TokenKind.NAME, value=name, position=position)


def tokenize(text: str) -> list[Token]:
    """Tokenize an expression string.

    Args:
        text: Raw expression text.

    Returns:
        Tokens in source order. Blank input yields an empty list.

    Raises:
        ExpressionSyntaxError: If text is fused in front of ``NOT(`` within
            the same segment (e.g. ``xNOT(a)`` or ``x NOT(a)``).
    """
    tokens: list[Token] = []

    def flush(end: int) -> None:
        token = _name_token(text, segment_start, end)
        if token is not None:
            tokens.append(token)

    segment_start = 0
    length = len(text)
    i = 0

    while i < length:
        char = text[i]

        if char == "(":
            not_start = i - len(KEYWORD_NOT)
            if (
                not_start >= segment_start
                and text[not_start:i].upper() == KEYWORD_NOT
            ):
                preceding = text[segment_start:not_start]
                if preceding.strip():
                    offset = segment_start + len(preceding) - len(preceding.lstrip())
                    raise ExpressionSyntaxError(
                        f"Unexpected '{preceding.strip()}' before NOT(",
                        expression=text,
                        position=offset,
                    )
                tokens.append(Token(TokenKind.NOT, position=not_start))
            else:
                flush(i)
            tokens.append(Token(TokenKind.OPEN, position=i))
            i += 1
            segment_start = i
            continue

        if char == ")":
            flush(i)
            tokens.append(Token(TokenKind.CLOSE, position=i))
            i += 1
            segment_start = i
            continue

        if char.isspace():
            # Look at the next whole word; keywords need the leading whitespace
            word_start = i
            while word_start < length and text[word_start].isspace():
                word_start += 1
            word_end = word_start
            while (
                word_end < length
                and not text[word_end].isspace()
                and text[word_end] not in _PARENTHESES
            ):
                word_end += 1
            kind = _BINARY_KEYWORDS.get(text[word_start:word_end].upper())
            if kind is not None:
                flush(i)
                tokens.append(Token(kind, position=word_start))
                segment_start = word_end
            i = word_end
            continue

        i += 1

    flush(length)

    logger.debug("expression_tokenized", expression=text, token_count=len(tokens))
    return tokens
