"""Reduction utilities: local rewrite rules and the bottom-up pass."""

from .peephole import reduce, rewrite

__all__ = ["reduce", "rewrite"]
