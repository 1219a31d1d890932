import logging

from jlisp import SExpression
from jlisp.errors import JLispArityError, JLispSyntaxError
from jlisp.evaluation.evaluator import evaluate
from jlisp.evaluation.expander import expand
from jlisp.evaluation.special_forms.quote_forms import QUOTE, unfold_templates
from jlisp.types.environment import Environment
from jlisp.types.macro_environment import Macro
from jlisp.types.nil import Nil
from jlisp.types.symbol import Symbol

logger = logging.getLogger(__name__)


def defmacro_form(tail: list[SExpression], env: Environment) -> SExpression:
    """
    (defmacro name (params...) body)  defines a user macro.
    (defmacro alias existing)          makes `alias` expand like `existing`.

    At a call site each parameter is bound to (quote <raw argument>) in a child
    scope, the body is evaluated there and the produced code is expanded again.
    Registration happens while expanding, so the form itself expands to nil.
    """
    if len(tail) == 2:
        alias, existing = tail
        if not isinstance(alias, Symbol) or not isinstance(existing, Symbol):
            raise JLispSyntaxError("[defmacro] alias form takes 2 macro names")
        env.macros.alias(alias.name, existing.name)
        return Nil

    if len(tail) != 3:
        raise JLispArityError("[defmacro] expects 3 arguments: (name, variables, body)")
    name, params, body = tail
    if not isinstance(name, Symbol):
        raise JLispSyntaxError("[defmacro] macro name must be a symbol")
    if not isinstance(params, list) or any(not isinstance(p, Symbol) for p in params):
        raise JLispSyntaxError("[defmacro] macro parameters must be a list of variable names")
    if not isinstance(body, list):
        raise JLispSyntaxError("[defmacro] macro body must be a list")

    param_names = [p.name for p in params]

    def expand_call(args: list[SExpression], call_env: Environment) -> SExpression:
        if len(args) != len(param_names):
            raise JLispArityError(
                f"[{name.name}] macro takes {len(param_names)} arguments, {len(args)} received"
            )
        macro_env = call_env.child()
        for param, arg in zip(param_names, args):
            macro_env.define(param, [QUOTE, arg])
        produced = evaluate(unfold_templates(body, macro_env), macro_env)
        logger.debug("macro %s produced %r", name.name, produced)
        # The first pass unwraps the quotes, the second expands the macros they exposed
        return expand(expand(produced, macro_env), macro_env)

    env.add_macro(Macro(name.name, expand_call))
    return Nil
