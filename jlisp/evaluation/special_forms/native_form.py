from jlisp import SExpression, Term
from jlisp.errors import JLispSyntaxError
from jlisp.evaluation.native_ops import HostExpression, run_host_expression
from jlisp.types.environment import Environment
from jlisp.types.function import Function
from jlisp.types.symbol import Symbol


def native_form(tail: list[SExpression], env: Environment) -> SExpression:
    """(native "a + b" a b) evaluates a host expression over the named variables."""
    if not tail or not isinstance(tail[0], str):
        raise JLispSyntaxError("[native] macro takes a string argument as the first argument")
    source, *names = tail
    if any(not isinstance(n, Symbol) for n in names):
        raise JLispSyntaxError(
            "[native] macro takes 0 or more variables as the arguments following the first one"
        )
    expression = HostExpression(source, [n.name for n in names])

    def call(args: list[Term], call_env: Environment) -> Term:
        return run_host_expression(expression, call_env)

    return [Function(call, description=source)]
