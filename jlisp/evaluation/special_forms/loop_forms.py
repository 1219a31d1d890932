import logging

from jlisp import SExpression, Term
from jlisp.errors import JLispArityError
from jlisp.evaluation.evaluator import evaluate
from jlisp.evaluation.expander import expand
from jlisp.types.environment import Environment
from jlisp.types.function import Function
from jlisp.types.nil import Nil

logger = logging.getLogger(__name__)

# Not a valid symbol, so programs cannot shadow it
BREAK_FLAG = "<< BREAK >>"


def while_form(tail: list[SExpression], env: Environment) -> SExpression:
    """(while cond body...) loops while `cond` evaluates to true; always yields nil."""
    if not tail:
        raise JLispArityError("[while] macro takes a condition and zero or more body forms")

    cond = expand(tail[0], env)
    body = [form for form in (expand(b, env) for b in tail[1:]) if form is not Nil]

    def call(args: list[Term], call_env: Environment) -> Term:
        loop_env = call_env.child()
        loop_env.define(BREAK_FLAG, False)
        while evaluate(cond, loop_env) is True:
            for form in body:
                evaluate(form, loop_env)
                if loop_env.vars[BREAK_FLAG] is True:
                    logger.debug("while: break")
                    return Nil
        return Nil

    return [Function(call)]


def break_form(tail: list[SExpression], env: Environment) -> SExpression:
    if tail:
        raise JLispArityError("[break] macro takes no arguments")

    def call(args: list[Term], call_env: Environment) -> Term:
        # Lands on the innermost enclosing loop scope
        call_env.assign(BREAK_FLAG, True)
        return Nil

    return [Function(call)]
