"""Immutable abstract syntax tree nodes for postfix expressions."""

from __future__ import annotations

from dataclasses import dataclass, fields, Field
from enum import Enum
from functools import cache
from typing import ClassVar

U128_MAX = 2**128 - 1


class BinOp(Enum):
    """Binary operators.

    Subtraction has no member of its own: ``a - b`` is ``ADD(a, NEG b)``.
    """

    ADD = "+"
    DIV = "/"
    MUL = "*"
    EQ = "="


class UnOp(Enum):
    NEG = "-"


class Type(Enum):
    BOOL = "bool"
    INTEGER = "integer"


@dataclass(frozen=True)
class Node:
    """Base class for all expression nodes."""

    is_terminal: ClassVar[bool] = False

    @classmethod
    @cache
    def _child_fields(cls) -> tuple[Field, ...]:
        return () if cls.is_terminal else fields(cls)

    def children(self) -> tuple[Node, ...]:
        """Direct sub-trees, in field order."""
        values = (getattr(self, f.name) for f in self._child_fields())
        return tuple(v for v in values if isinstance(v, Node))

    def size(self) -> int:
        """Number of nodes in the tree rooted here."""
        count = 0
        pending: list[Node] = [self]
        while pending:
            count += 1
            pending.extend(pending.pop().children())
        return count

    # --- Reduction ------------------------------------------------------------
    def reduce(self) -> Node:
        """Bottom-up peephole simplification; returns the rewritten tree."""
        # Deferred import avoids a cycle with the reduce package.
        from .reduce import reduce

        return reduce(self)

    # --- Display --------------------------------------------------------------
    def __str__(self) -> str:
        from .pretty import pretty

        return pretty(self)


@dataclass(frozen=True)
class Constant(Node):
    """A symbolic, unbound identifier."""

    name: str
    is_terminal: ClassVar[bool] = True

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Constant names must be non-empty")


@dataclass(frozen=True)
class BinaryOp(Node):
    op: BinOp
    left: Node
    right: Node


@dataclass(frozen=True)
class UnaryOp(Node):
    op: UnOp
    operand: Node


@dataclass(frozen=True)
class IntValue(Node):
    """An unsigned integer literal in the ``u128`` range."""

    value: int
    is_terminal: ClassVar[bool] = True

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError(f"IntValue expects an int, got {self.value!r}")
        if not 0 <= self.value <= U128_MAX:
            raise ValueError(f"Integer literal out of range: {self.value}")


@dataclass(frozen=True)
class BoolValue(Node):
    value: bool
    is_terminal: ClassVar[bool] = True


def structurally_equal(left: Node, right: Node) -> bool:
    """Deep equality of two trees, compared without recursion."""

    pending: list[tuple[Node, Node]] = [(left, right)]
    while pending:
        a, b = pending.pop()
        if a is b:
            continue
        if type(a) is not type(b):
            return False
        for f in fields(a):
            u, v = getattr(a, f.name), getattr(b, f.name)
            if isinstance(u, Node):
                pending.append((u, v))
            elif u != v:
                return False
    return True


__all__ = [
    "U128_MAX",
    "BinOp",
    "UnOp",
    "Type",
    "Node",
    "Constant",
    "BinaryOp",
    "UnaryOp",
    "IntValue",
    "BoolValue",
    "structurally_equal",
]
