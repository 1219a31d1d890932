from itertools import count

from jlisp import SExpression, Term
from jlisp.errors import JLispArityError
from jlisp.evaluation.evaluator import evaluate
from jlisp.evaluation.expander import expand
from jlisp.types.environment import Environment
from jlisp.types.function import Function
from jlisp.types.nil import Nil

_if_ids = count()


def if_form(tail: list[SExpression], env: Environment) -> SExpression:
    if len(tail) < 2 or len(tail) > 3:
        raise JLispArityError(
            "[if] macro takes 2 or 3 arguments, first of which must evaluate to a boolean"
        )

    cond = expand(tail[0], env)
    then_branch = expand(tail[1], env)
    else_branch = expand(tail[2], env) if len(tail) > 2 else Nil

    def call(args: list[Term], call_env: Environment) -> Term:
        # Only the boolean true selects the then-branch
        if args and args[0] is True:
            return evaluate(then_branch, call_env)
        return evaluate(else_branch, call_env)

    native_if = Function(call, f"<native if[{next(_if_ids)}]>", line=getattr(tail[0], "line", 0))
    return [native_if, cond]
