"""Expression node models.

Nodes serve two roles. The sequencer emits them as a flat, postfix-ordered
list in which operator nodes have no children yet; the tree builder then
folds that list into a tree by creating populated copies. All node classes
are frozen, so a finished tree can be shared and evaluated concurrently.

Each class declares its ``arity``: the number of operands it takes from the
builder's stack (0 for leaves, 1 for NOT, 2 for AND/OR).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar

from minlog.constants import (
    KEYWORD_AND,
    KEYWORD_FALSE,
    KEYWORD_NOT,
    KEYWORD_OR,
    KEYWORD_TRUE,
)

__all__ = [
    "Literal",
    "Setting",
    "And",
    "Or",
    "Not",
    "Node",
    "BinaryNode",
    "format_expression",
    "settings_in",
]


@dataclass(frozen=True, slots=True)
class Literal:
    """Fixed boolean constant (``TRUE`` / ``FALSE``)."""

    value: bool

    arity: ClassVar[int] = 0

    def to_dict(self) -> dict[str, Any]:
        return _tree_dict(self)


@dataclass(frozen=True, slots=True)
class Setting:
    """Reference to a host-supplied flag, by its trimmed source name."""

    name: str

    arity: ClassVar[int] = 0

    def to_dict(self) -> dict[str, Any]:
        return _tree_dict(self)


@dataclass(frozen=True, slots=True)
class And:
    """Conjunction. Children are None until the tree builder fills them."""

    left: Node | None = None
    right: Node | None = None

    arity: ClassVar[int] = 2
    keyword: ClassVar[str] = KEYWORD_AND

    def to_dict(self) -> dict[str, Any]:
        return _tree_dict(self)


@dataclass(frozen=True, slots=True)
class Or:
    """Disjunction. Children are None until the tree builder fills them."""

    left: Node | None = None
    right: Node | None = None

    arity: ClassVar[int] = 2
    keyword: ClassVar[str] = KEYWORD_OR

    def to_dict(self) -> dict[str, Any]:
        return _tree_dict(self)


@dataclass(frozen=True, slots=True)
class Not:
    """Negation of a single operand."""

    operand: Node | None = None

    arity: ClassVar[int] = 1
    keyword: ClassVar[str] = KEYWORD_NOT

    def to_dict(self) -> dict[str, Any]:
        return _tree_dict(self)


# Type aliases for any node and for the two binary operators
Node = Literal | Setting | And | Or | Not
BinaryNode = And | Or


def _tree_dict(node: Node) -> dict[str, Any]:
    """Render a tree as nested dicts without recursing per level."""
    root: dict[str, Any] = {}
    pending: list[tuple[Node, dict[str, Any]]] = [(node, root)]

    def child(operand: Node | None) -> dict[str, Any] | None:
        if operand is None:
            return None
        target: dict[str, Any] = {}
        pending.append((operand, target))
        return target

    while pending:
        current, target = pending.pop()
        if isinstance(current, Literal):
            target.update(type="literal", value=current.value)
        elif isinstance(current, Setting):
            target.update(type="setting", name=current.name)
        elif isinstance(current, Not):
            target.update(type="not", operand=child(current.operand))
        else:
            target["type"] = current.keyword.lower()
            target["left"] = child(current.left)
            target["right"] = child(current.right)
    return root


def format_expression(node: Node) -> str:
    """Render a tree as canonical expression text.

    Every binary node below the root is parenthesized, so the output
    re-parses to an equal tree regardless of the left-to-right fold rule.
    Operator nodes that have not been populated render their missing
    children as ``?``.

    Examples:
        >>> format_expression(Or(And(Setting("a"), Setting("b")), Setting("c")))
        '(a AND b) OR c'
        >>> format_expression(Not(Literal(True)))
        'NOT(TRUE)'
    """
    parts: list[str] = []
    # Literal text fragments interleaved with (node, nested) pairs, popped
    # from the end so pushes go in reverse source order
    pending: list[str | tuple[Node | None, bool]] = [(node, False)]
    while pending:
        item = pending.pop()
        if isinstance(item, str):
            parts.append(item)
            continue
        current, nested = item
        if current is None:
            parts.append("?")
        elif isinstance(current, Literal):
            parts.append(KEYWORD_TRUE if current.value else KEYWORD_FALSE)
        elif isinstance(current, Setting):
            parts.append(current.name)
        elif isinstance(current, Not):
            parts.append(f"{KEYWORD_NOT}(")
            pending.extend([")", (current.operand, False)])
        else:
            if nested:
                parts.append("(")
                pending.append(")")
            pending.extend(
                [(current.right, True), f" {current.keyword} ", (current.left, True)]
            )
    return "".join(parts)


def settings_in(node: Node) -> tuple[str, ...]:
    """Return the setting names a tree references.

    Names appear once each, in left-to-right source order.

    Examples:
        >>> settings_in(And(Setting("b"), Or(Setting("a"), Setting("b"))))
        ('b', 'a')
    """
    seen: dict[str, None] = {}
    pending: list[Node | None] = [node]
    while pending:
        current = pending.pop()
        if isinstance(current, Setting):
            seen.setdefault(current.name, None)
        elif isinstance(current, Not):
            pending.append(current.operand)
        elif isinstance(current, (And, Or)):
            # Right pushed first so the left subtree is visited first
            pending.append(current.right)
            pending.append(current.left)
    return tuple(seen)
