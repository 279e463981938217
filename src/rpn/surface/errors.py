"""Parse error types."""

from __future__ import annotations

from dataclasses import dataclass

from rpn.common.span import Span


@dataclass
class ParseError(Exception):
    message: str
    span: Span
    source: str | None = None

    def __str__(self) -> str:
        if self.source is None:
            return f"{self.message} @ {self.span.start}:{self.span.end}"
        snippet = self.span.extract(self.source)
        return f"{self.message} @ {self.span.start}:{self.span.end}: {snippet!r}"


class EmptyExpressionError(ParseError):
    """The input left no value on the operand stack."""


@dataclass
class TooManyOperandsError(ParseError):
    """More than one value was left on the operand stack."""

    remaining: int = 0


@dataclass
class MissingOperandError(ParseError):
    """An operator found too few values on the operand stack."""

    operator: str = ""
    position: str = ""


@dataclass
class MalformedLiteralError(ParseError):
    token: str = ""


@dataclass
class UnexpectedSymbolError(ParseError):
    symbol: str = ""


__all__ = [
    "ParseError",
    "EmptyExpressionError",
    "TooManyOperandsError",
    "MissingOperandError",
    "MalformedLiteralError",
    "UnexpectedSymbolError",
]
