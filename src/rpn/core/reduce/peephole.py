"""Peephole simplification of expression trees."""

from __future__ import annotations

import logging
from dataclasses import replace

from ..ast import (
    BinaryOp,
    BinOp,
    BoolValue,
    IntValue,
    Node,
    UnaryOp,
    UnOp,
    structurally_equal,
)

logger = logging.getLogger(__name__)


def rewrite(node: Node) -> Node:
    """Apply at most one rule at the root of ``node``; children are not visited."""

    match node:
        case UnaryOp(UnOp.NEG, UnaryOp(UnOp.NEG, inner)):
            result: Node = inner
        case BinaryOp(BinOp.ADD, left, right) if structurally_equal(left, right):
            result = BinaryOp(BinOp.MUL, left, IntValue(2))
        case BinaryOp(BinOp.EQ, left, right) if structurally_equal(left, right):
            result = BoolValue(True)
        case _:
            return node

    logger.debug("rewrote %s => %s", node, result)
    return result


def _rebuild(node: Node, children: list[Node]) -> Node:
    match node:
        case BinaryOp(_, left, right):
            if children[0] is not left or children[1] is not right:
                return replace(node, left=children[0], right=children[1])
        case UnaryOp(_, operand):
            if children[0] is not operand:
                return replace(node, operand=children[0])
    return node


def reduce(node: Node) -> Node:
    """Reduce the children of ``node`` first, then try the rules on ``node``.

    The walk keeps its own stack, so tree depth is not bounded by the
    interpreter's recursion limit.
    """

    done: list[Node] = []
    pending: list[tuple[Node, bool]] = [(node, False)]
    while pending:
        current, visited = pending.pop()
        children = current.children()
        if not children:
            done.append(current)
        elif not visited:
            pending.append((current, True))
            pending.extend((child, False) for child in reversed(children))
        else:
            reduced = done[-len(children) :]
            del done[-len(children) :]
            done.append(rewrite(_rebuild(current, reduced)))
    return done[0]


__all__ = ["reduce", "rewrite"]
