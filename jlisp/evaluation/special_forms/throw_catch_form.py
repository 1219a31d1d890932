import logging

from jlisp import SExpression, Term
from jlisp.errors import JLispArityError, JLispError, JLispThrow
from jlisp.evaluation.evaluator import evaluate
from jlisp.evaluation.expander import expand
from jlisp.printer import to_string
from jlisp.types.environment import Environment
from jlisp.types.function import Function
from jlisp.types.nil import Nil

logger = logging.getLogger(__name__)

EXCEPTION_VAR = "__exception__"


def try_form(tail: list[SExpression], env: Environment) -> SExpression:
    """(try body [fallback]) evaluates `fallback` if `body` raises any jlisp error."""
    if len(tail) < 1 or len(tail) > 2:
        raise JLispArityError("[try] macro takes 1 or 2 arguments: (body, fallback?)")
    body = expand(tail[0], env)
    fallback = expand(tail[1], env) if len(tail) > 1 else Nil

    def call(args: list[Term], call_env: Environment) -> Term:
        try:
            return evaluate(body, call_env)
        except JLispError as ex:
            logger.debug("try: caught %s", ex)
            call_env.define(EXCEPTION_VAR, str(ex))
            return evaluate(fallback, call_env)

    return [Function(call)]


def throw_form(tail: list[SExpression], env: Environment) -> SExpression:
    if len(tail) != 1:
        raise JLispArityError("[throw] macro takes 1 argument")

    def call(args: list[Term], call_env: Environment) -> Term:
        raise JLispThrow(to_string(args[0] if args else Nil))

    return [Function(call), expand(tail[0], env)]
