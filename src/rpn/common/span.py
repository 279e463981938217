"""Source span type shared across layers."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Span:
    start: int
    end: int

    @classmethod
    def at_end(cls, source: str) -> Span:
        return cls(len(source), len(source))

    def extract(self, source: str) -> str:
        return source[self.start : self.end]
