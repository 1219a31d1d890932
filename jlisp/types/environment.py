"""Runtime environment for jlisp.

The Environment stores bindings of symbol names to Terms and supports nested
lexical scopes via an `outer` link. Every node holds a reference to the same
MacroEnvironment, so macros are global while variables are scoped.
"""

from __future__ import annotations

from io import StringIO
from typing import Optional

from jlisp import Term
from jlisp.types.macro_environment import Macro, MacroEnvironment


class Environment:
    """Hierarchical mapping from symbol names to Terms."""

    __slots__ = ("vars", "outer", "macros")

    def __init__(
        self,
        outer: Optional[Environment] = None,
        macros: Optional[MacroEnvironment] = None,
    ):
        self.vars: dict[str, Term] = {}
        self.outer: Environment | None = outer
        if macros is None:
            macros = outer.macros if outer is not None else MacroEnvironment()
        self.macros: MacroEnvironment = macros

    def define(self, name: str, value: Term) -> None:
        """Bind `name` to `value` in this scope, overwriting any local binding."""
        self.vars[name] = value

    def find(self, name: str) -> Optional[Environment]:
        """Find the nearest environment in the chain that owns `name`."""
        env: Optional[Environment] = self
        while env is not None:
            if name in env.vars:
                return env
            env = env.outer
        return None

    def assign(self, name: str, value: Term) -> None:
        """Update the nearest enclosing binding of `name`.

        Defines `name` in this scope only when no scope in the chain owns it.
        """
        env = self.find(name)
        if env is None:
            env = self
        env.vars[name] = value

    def lookup(self, name: str) -> Optional[Term]:
        """Return the value bound to `name`, walking to the root; None if unbound."""
        env = self.find(name)
        if env is None:
            return None
        return env.vars[name]

    def child(self) -> Environment:
        """Create a nested scope sharing this environment's macro table."""
        return Environment(outer=self, macros=self.macros)

    # --- Macro table (global, shared by every node) ---
    def add_macro(self, macro: Macro) -> None:
        self.macros.define_macro(macro)

    def find_macro(self, name: str) -> Optional[Macro]:
        return self.macros.find_macro(name)

    def is_macro(self, name: str) -> bool:
        return self.macros.is_macro(name)

    def _frame_text(self) -> str:
        with StringIO() as buffer:
            buffer.write("{")
            buffer.write(", ".join(f"{name}: {value!r}" for name, value in self.vars.items()))
            buffer.write("}")
            return buffer.getvalue()

    def __str__(self) -> str:
        """This frame only; a trailing arrow marks an enclosing scope."""
        text = self._frame_text()
        return text if self.outer is None else f"{text} -> ..."

    def __repr__(self) -> str:
        frames = []
        env: Optional[Environment] = self
        while env is not None:
            frames.append(env._frame_text())
            env = env.outer
        return f"<Environment chain: {' -> '.join(frames)}>"
