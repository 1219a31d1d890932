from jlisp import SExpression, Term
from jlisp.errors import JLispArityError, JLispSyntaxError
from jlisp.evaluation.expander import expand
from jlisp.types.environment import Environment
from jlisp.types.function import Function
from jlisp.types.nil import Nil
from jlisp.types.symbol import Symbol


def set_form(tail: list[SExpression], env: Environment) -> SExpression:
    """(set! name value) rebinds `name` in the nearest scope that owns it."""
    if len(tail) != 2:
        raise JLispArityError("[set!] macro takes 2 arguments: a variable name and a value")
    var, value = tail
    if not isinstance(var, Symbol):
        raise JLispSyntaxError("[set!] macro: first argument must be a variable name")

    def call(args: list[Term], call_env: Environment) -> Term:
        call_env.assign(var.name, args[0] if args else Nil)
        return Nil

    return [Function(call, line=var.line), expand(value, env)]
