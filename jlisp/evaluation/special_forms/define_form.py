from jlisp import SExpression, Term
from jlisp.errors import JLispArityError, JLispSyntaxError
from jlisp.evaluation.expander import expand
from jlisp.types.environment import Environment
from jlisp.types.function import Function
from jlisp.types.nil import Nil
from jlisp.types.symbol import Symbol


def define_form(tail: list[SExpression], env: Environment) -> SExpression:
    if not tail or not isinstance(tail[0], Symbol):
        line = getattr(tail[0], "line", 0) if tail else 0
        raise JLispSyntaxError(
            f"[define] macro takes two arguments, the first of which must be a variable name (line = {line})"
        )
    if len(tail) > 2:
        raise JLispArityError(f"[define] macro takes two arguments (line = {tail[0].line})")

    name = tail[0].name
    value = expand(tail[1], env) if len(tail) > 1 else Nil

    def call(args: list[Term], call_env: Environment) -> Term:
        # The binding goes to the scope the define is evaluated in
        bound = args[0] if args else Nil
        call_env.define(name, bound)
        return bound

    return [Function(call, line=tail[0].line), value]
