from __future__ import annotations

import logging
from typing import Callable, TYPE_CHECKING

from jlisp import SExpression
from jlisp.errors import JLispSyntaxError

if TYPE_CHECKING:
    from jlisp.types.environment import Environment

logger = logging.getLogger(__name__)

# (raw unevaluated args, env) -> replacement term
ExpandFn = Callable[[list[SExpression], "Environment"], SExpression]


class Macro:
    """A name-keyed expansion-time rewriter."""

    __slots__ = ("name", "expand")

    def __init__(self, name: str, expand: ExpandFn):
        self.name: str = name
        self.expand: ExpandFn = expand

    def __repr__(self) -> str:
        return f"<Macro {self.name}>"


class MacroEnvironment:
    """
    Registry mapping macro names to Macro objects.

    One instance is created per program run and shared by reference with every
    Environment node, so every macro is global no matter which scope defines it.
    Registration is immediate and cannot be undone.
    """

    def __init__(self):
        self.macros: dict[str, Macro] = {}

    def define_macro(self, macro: Macro) -> None:
        logger.debug("registering macro %s", macro.name)
        self.macros[macro.name] = macro

    def is_macro(self, name: str) -> bool:
        return name in self.macros

    def find_macro(self, name: str) -> Macro | None:
        return self.macros.get(name)

    def alias(self, alias: str, existing: str) -> None:
        """Register `alias` so that it delegates to the macro named `existing`."""
        target = self.find_macro(existing)
        if target is None:
            raise JLispSyntaxError(f"defmacro: macro not found ({existing})")
        self.define_macro(Macro(alias, lambda args, env: target.expand(args, env)))
