from __future__ import annotations
import sys


class Symbol:
    __slots__ = ("name", "line")

    def __init__(self, name: str, line: int = 0):
        # Intern to ensure fast equality/hash and reduce memory
        self.name = sys.intern(name)
        # Source line, used for error messages only (never for equality)
        self.line = line

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Symbol) and self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)

    def __repr__(self):
        return f"Symbol({self.name!r})"

    def __str__(self):
        return self.name
