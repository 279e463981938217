"""Postfix rendering of expression trees."""

from __future__ import annotations

from .ast import BinaryOp, BoolValue, Constant, IntValue, Node, UnaryOp


def pretty(node: Node) -> str:
    """Return space-separated postfix text for ``node``.

    Trees without ``BinOp.DIV`` parse back to themselves.
    """

    out: list[str] = []
    # Operator tokens wait on the stack until their operands are emitted.
    pending: list[Node | str] = [node]
    while pending:
        item = pending.pop()
        match item:
            case str():
                out.append(item)
            case Constant(name):
                out.append(name)
            case IntValue(value):
                out.append(str(value))
            case BoolValue(value):
                out.append("true" if value else "false")
            case UnaryOp(op, operand):
                pending.extend((op.value, operand))
            case BinaryOp(op, left, right):
                pending.extend((op.value, right, left))
            case _:
                raise TypeError(f"Cannot pretty-print unknown node: {item!r}")
    return " ".join(out)


__all__ = ["pretty"]
