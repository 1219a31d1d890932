from jlisp import SExpression, Term
from jlisp.evaluation.expander import expand
from jlisp.types.environment import Environment
from jlisp.types.function import Function
from jlisp.types.nil import Nil


def _last_value(args: list[Term], env: Environment) -> Term:
    return args[-1] if args else Nil


def begin_form(tail: list[SExpression], env: Environment) -> SExpression:
    """(begin form...) evaluates every form in order and yields the last value."""
    return [Function(_last_value), *(expand(form, env) for form in tail)]
