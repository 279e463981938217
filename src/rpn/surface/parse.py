"""Parser for postfix expressions.

Tokens come from a ``ply`` lexer; the tree is built with an explicit operand
stack, the way a stack machine would evaluate the expression.
"""

from __future__ import annotations

import logging
import re
from typing import NoReturn

import ply.lex as lex  # type: ignore[import-untyped]

from rpn.common.span import Span
from rpn.core.ast import (
    U128_MAX,
    BinaryOp,
    BinOp,
    BoolValue,
    Constant,
    IntValue,
    Node,
    UnaryOp,
    UnOp,
)
from rpn.surface.errors import (
    EmptyExpressionError,
    MalformedLiteralError,
    MissingOperandError,
    TooManyOperandsError,
    UnexpectedSymbolError,
)

logger = logging.getLogger(__name__)

tokens = (
    "NUMBER",
    "IDENT",
    "NEG",
    "PLUS",
    "TIMES",
    "DIVIDE",
    "EQUALS",
)

t_NEG = r"-"
t_PLUS = r"\+"
t_TIMES = r"\*"
t_DIVIDE = r"/"
t_EQUALS = r"="

t_ignore = " \t"
t_ignore_whitespace = r"\s+"


def t_NUMBER(t: lex.LexToken) -> lex.LexToken:
    r"[0-9]\w*"
    return t


def t_IDENT(t: lex.LexToken) -> lex.LexToken:
    r"[^\W\d]\w*"
    first = t.value[0]
    if not (first.isalpha() or first == "_"):
        _unexpected(t)
    return t


def t_error(t: lex.LexToken) -> None:
    _unexpected(t)


def _unexpected(t: lex.LexToken) -> NoReturn:
    symbol = t.value[0]
    raise UnexpectedSymbolError(
        f"unexpected symbol: '{symbol}'",
        Span(t.lexpos, t.lexpos + 1),
        t.lexer.lexdata,
        symbol=symbol,
    )


# `/` is parsed as addition; BinOp.DIV is never produced.
_BINARY_OPS = {
    "PLUS": BinOp.ADD,
    "TIMES": BinOp.MUL,
    "DIVIDE": BinOp.ADD,
    "EQUALS": BinOp.EQ,
}

_RADIX_PREFIXES = {"x": 16, "o": 8, "b": 2}

_DIGITS = {
    2: re.compile(r"[01]+"),
    8: re.compile(r"[0-7]+"),
    10: re.compile(r"[0-9]+"),
    16: re.compile(r"[0-9a-fA-F]+"),
}


def _tok_span(tok: lex.LexToken) -> Span:
    return Span(tok.lexpos, tok.lexpos + len(tok.value))


def parse_int(token: str, span: Span, source: str | None = None) -> int:
    """Parse a numeric token: ``_`` separators, ``0x``/``0o``/``0b`` prefixes."""

    digits = token.replace("_", "") if "_" in token else token

    base = 10
    if digits.startswith("0") and len(digits) > 1:
        base = _RADIX_PREFIXES.get(digits[1], 10)
    if base != 10:
        digits = digits[2:]

    value = int(digits, base) if _DIGITS[base].fullmatch(digits) else None
    if value is None or value > U128_MAX:
        raise MalformedLiteralError(
            f"unable to parse `{token}` as an integer", span, source, token=token
        )
    return value


def _ident(name: str) -> Node:
    if name == "true":
        return BoolValue(True)
    if name == "false":
        return BoolValue(False)
    return Constant(name)


def _pop(
    stack: list[Node], tok: lex.LexToken, position: str, source: str
) -> Node:
    if stack:
        return stack.pop()
    which = f"{position} " if position else ""
    raise MissingOperandError(
        f"missing {which}argument for '{tok.value}'",
        _tok_span(tok),
        source,
        operator=tok.value,
        position=position,
    )


_LEXER = None


def _lexer() -> lex.Lexer:
    global _LEXER
    if _LEXER is None:
        _LEXER = lex.lex()
    return _LEXER.clone()


def parse(source: str) -> Node:
    """Parse a postfix expression into a single tree.

    Raises a :class:`~rpn.surface.errors.ParseError` subclass on the first
    problem found.
    """

    lexer = _lexer()
    lexer.input(source)
    stack: list[Node] = []
    count = 0

    for tok in lexer:
        count += 1
        match tok.type:
            case "NUMBER":
                stack.append(IntValue(parse_int(tok.value, _tok_span(tok), source)))
            case "IDENT":
                stack.append(_ident(tok.value))
            case "NEG":
                operand = _pop(stack, tok, "", source)
                stack.append(UnaryOp(UnOp.NEG, operand))
            case _:
                op = _BINARY_OPS[tok.type]
                right = _pop(stack, tok, "first", source)
                left = _pop(stack, tok, "second", source)
                stack.append(BinaryOp(op, left, right))

    if len(stack) > 1:
        raise TooManyOperandsError(
            f"too many remaining arguments, expected 1 found {len(stack)}",
            Span.at_end(source),
            source,
            remaining=len(stack),
        )
    if not stack:
        raise EmptyExpressionError(
            "missing return value, potentially an empty string",
            Span.at_end(source),
            source,
        )

    node = stack.pop()
    logger.debug("parsed %d tokens into %s", count, node)
    return node


__all__ = ["parse", "parse_int"]
