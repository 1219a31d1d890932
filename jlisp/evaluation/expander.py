"""Macro expansion pass.

Rewrites every macro call in a Term tree before evaluation. Native macros return
lists headed by a synthesized Function; those are terminal, the Function is
opaque to any further expansion.
"""

from __future__ import annotations

import logging

from jlisp import SExpression
from jlisp.types.environment import Environment
from jlisp.types.nil import Nil
from jlisp.types.symbol import Symbol

logger = logging.getLogger(__name__)


def expand(expr: SExpression, env: Environment) -> SExpression:
    """Return `expr` with every macro call replaced by its expansion."""
    if not isinstance(expr, list):
        return expr

    # Nil elements are leftovers of earlier expansions (e.g. a defmacro form)
    items = [item for item in expr if item is not Nil]
    if not items:
        return Nil

    head, *args = items
    if isinstance(head, Symbol):
        macro = env.find_macro(head.name)
        if macro is not None:
            logger.debug("expanding macro %s (line %d)", head.name, head.line)
            return macro.expand(args, env)

    return [expand(item, env) for item in items]
