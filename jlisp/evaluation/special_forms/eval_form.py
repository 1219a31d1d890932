from jlisp import SExpression, Term
from jlisp.errors import JLispArityError
from jlisp.evaluation.evaluator import evaluate
from jlisp.evaluation.expander import expand
from jlisp.reader.parser import parse
from jlisp.types.environment import Environment
from jlisp.types.function import Function
from jlisp.types.nil import Nil


def eval_form(tail: list[SExpression], env: Environment) -> SExpression:
    """(eval x) expands and evaluates the value of `x` as code."""
    if len(tail) != 1:
        raise JLispArityError("'eval' requires 1 argument")

    def call(args: list[Term], call_env: Environment) -> Term:
        code = args[0] if args else Nil
        return evaluate(expand(code, call_env), call_env)

    return [Function(call), expand(tail[0], env)]


def read_string_form(tail: list[SExpression], env: Environment) -> SExpression:
    """(read-string text) parses `text` and yields its first form, expanded but not evaluated."""
    if len(tail) != 1:
        raise JLispArityError("'read-string' requires 1 string argument")

    def call(args: list[Term], call_env: Environment) -> Term:
        value = args[0] if args else Nil
        if value is Nil:
            return Nil
        if not isinstance(value, str):
            value = evaluate(value, call_env)
            if not isinstance(value, str):
                return value
        forms = parse(value)
        if not forms:
            return Nil
        return expand(forms[0], call_env)

    return [Function(call), expand(tail[0], env)]
