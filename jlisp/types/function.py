"""Function representation shared by closures, native primitives and the
native calls synthesized by macros.

A closure's body and captured environment live inside `call`; they are not
separate fields. Two Function objects are equal only if they are the same
object.
"""

from __future__ import annotations

from typing import Callable, TYPE_CHECKING

from jlisp import Term

if TYPE_CHECKING:
    from jlisp.types.environment import Environment

NativeCall = Callable[[list[Term], "Environment"], Term]


class Function:
    """An opaque callable Term with optional id and description metadata."""

    __slots__ = ("call", "id", "description", "line")

    def __init__(
        self,
        call: NativeCall,
        id: str | None = None,
        description: str | None = None,
        line: int = 0,
    ):
        self.call: NativeCall = call
        self.id: str | None = id
        self.description: str | None = description
        self.line: int = line

    def __call__(self, args: list[Term], env: Environment) -> Term:
        return self.call(args, env)

    def __repr__(self) -> str:
        if self.id:
            return f"#<Function '{self.id}'>"
        return "#<Function (native)>"

    __str__ = __repr__
