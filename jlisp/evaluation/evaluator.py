"""Core evaluator for the jlisp interpreter.

Evaluates already-expanded Term trees. Special forms do not exist at this level:
macros have rewritten them into lists headed by a Function, so every list is an
ordinary call whose elements are evaluated left to right.
"""

from __future__ import annotations

import logging

from jlisp import SExpression, Term
from jlisp.errors import JLispNotAFunction, JLispUnboundSymbol
from jlisp.printer import type_name
from jlisp.types.environment import Environment
from jlisp.types.function import Function
from jlisp.types.nil import Nil
from jlisp.types.symbol import Symbol

logger = logging.getLogger(__name__)


def evaluate(expr: SExpression, env: Environment) -> Term:
    """Evaluate `expr` in `env` and return the resulting Term."""
    match expr:
        case Symbol():
            value = env.lookup(expr.name)
            # A nil binding is reported exactly like a missing one
            if value is None or value is Nil:
                raise JLispUnboundSymbol(
                    f"Interpreter error: symbol '{expr.name}' not found (line {expr.line})"
                )
            # Only a bound Symbol is evaluated again; bound Lists are data
            if isinstance(value, Symbol):
                return evaluate(value, env)
            return value

        case [Symbol() as head, *_] if env.is_macro(head.name):
            # Unexpanded macro call (e.g. quoted code spliced back in): leave it as data
            logger.debug("leaving unexpanded macro form (%s ...) as data", head.name)
            return expr

        case [_, *_]:
            func, *args = [evaluate(item, env) for item in expr]
            if not isinstance(func, Function):
                line = getattr(expr[0], "line", 0)
                raise JLispNotAFunction(
                    f"Interpreter error in line {line}. Item is not a function ({type_name(func)})"
                )
            return func.call(args, env)

    # --- Atoms (and the empty list) evaluate to themselves ---
    return expr
