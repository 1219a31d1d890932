"""`lambda` and `defn`: closures over the scope the lambda is evaluated in."""

from __future__ import annotations

from itertools import count

from jlisp import SExpression, Term
from jlisp.errors import JLispArityError, JLispSyntaxError
from jlisp.evaluation.evaluator import evaluate
from jlisp.evaluation.expander import expand
from jlisp.types.environment import Environment
from jlisp.types.function import Function
from jlisp.types.nil import Nil
from jlisp.types.symbol import Symbol

REST_MARKER = "&"

_anonymous_ids = count()


class Closure:
    """Parameter binding plus body evaluation for one lambda value."""

    __slots__ = ("formals", "rest", "body", "env")

    def __init__(
        self,
        formals: list[str],
        rest: str | None,
        body: list[SExpression],
        env: Environment,
    ):
        self.formals = formals
        self.rest = rest
        self.body = body
        self.env = env

    def extend_env(self, args: list[Term]) -> Environment:
        """Bind `args` to the formals in a fresh child of the captured scope."""
        if len(args) < len(self.formals):
            raise JLispArityError(
                f"[lambda] Insufficient number of arguments to the function: "
                f"{len(self.formals)} expected, {len(args)} received"
            )
        local = self.env.child()
        for name, value in zip(self.formals, args):
            local.define(name, value)
        if self.rest is not None:
            local.define(self.rest, list(args[len(self.formals):]))
        return local

    def __call__(self, args: list[Term], caller_env: Environment) -> Term:
        # caller_env is unused: the body sees the defining scope only
        local = self.extend_env(args)
        result: Term = Nil
        for form in self.body:
            result = evaluate(form, local)
        return result


def _split_params(params: list[SExpression]) -> tuple[list[str], str | None]:
    if any(not isinstance(p, Symbol) for p in params):
        raise JLispSyntaxError(
            "[lambda] Function macro error: function parameters must be variable names"
        )
    names = [p.name for p in params]
    if REST_MARKER not in names:
        return names, None
    at = names.index(REST_MARKER)
    rest = names[at + 1:]
    if len(rest) != 1:
        raise JLispSyntaxError(
            f"[lambda] Function macro error: '{REST_MARKER}' must be followed by exactly one variable name"
        )
    return names[:at], rest[0]


def lambda_form(tail: list[SExpression], env: Environment) -> SExpression:
    """
    (lambda [id] [description] (params...) body...)

    Expands to a one-element call whose Function, when evaluated, captures the
    current scope and returns the closure.
    """
    tail = list(tail)
    fn_id = tail.pop(0) if tail and isinstance(tail[0], str) else None
    description = tail.pop(0) if tail and isinstance(tail[0], str) else None

    if len(tail) < 2:
        raise JLispArityError(
            "[lambda] macro takes 2, 3 or 4 arguments: (id?, description?, variables, body)"
        )
    params, *body_forms = tail
    if not isinstance(params, list):
        raise JLispSyntaxError(
            "[lambda] Function macro error: function parameters must be variable names"
        )
    formals, rest = _split_params(params)
    body = [form for form in (expand(b, env) for b in body_forms) if form is not Nil]
    line = getattr(params[0], "line", 0) if params else 0
    name = fn_id if fn_id is not None else f"(anonymous lambda #{next(_anonymous_ids)})"

    def make_closure(args: list[Term], defining_env: Environment) -> Term:
        closure = Closure(formals, rest, body, defining_env)
        return Function(closure, name, description, line)

    return [Function(make_closure)]


def defn_form(tail: list[SExpression], env: Environment) -> SExpression:
    """(defn name [description] (params...) body...) is (define name (lambda ...))."""
    if not tail or not isinstance(tail[0], Symbol):
        raise JLispSyntaxError("[defn] macro takes a function name, a parameter list and a body")
    name, *rest = tail
    return expand([Symbol("define", name.line), name, [Symbol("lambda", name.line), name.name, *rest]], env)
