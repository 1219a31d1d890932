"""Quoting forms.

`quote` returns its argument untouched. `quasiquote` is rewritten into code
that builds the template at runtime:

    `(a ,b (c))   ->   (list (quote a) b' (list (quote c)))

where b' is the expansion of the unquoted term. Splicing is not supported.
"""

from jlisp import SExpression
from jlisp.errors import JLispArityError, JLispSyntaxError
from jlisp.evaluation.expander import expand
from jlisp.types.environment import Environment
from jlisp.types.nil import Nil
from jlisp.types.symbol import Symbol

QUOTE = Symbol("quote")
QUASIQUOTE = Symbol("quasiquote")
UNQUOTE = Symbol("unquote")
UNQUOTE_SPLICE = Symbol("unquote-splice")
LIST = Symbol("list")


def quote_form(tail: list[SExpression], env: Environment) -> SExpression:
    if len(tail) != 1:
        raise JLispArityError("'quote' takes exactly 1 argument")
    return tail[0]


def build_template(expr: SExpression, env: Environment) -> SExpression:
    """Rewrite a quasiquote template into list-construction code."""
    if isinstance(expr, list) and expr:
        head = expr[0]
        if head == UNQUOTE:
            if len(expr) != 2:
                raise JLispArityError("'unquote' takes exactly 1 argument")
            return expand(expr[1], env)
        if head == UNQUOTE_SPLICE:
            raise JLispSyntaxError("[unquote-splice] not implemented")
        return [LIST, *(build_template(item, env) for item in expr)]
    if expr is Nil:
        return Nil
    return [QUOTE, expr]


def unfold_templates(expr: SExpression, env: Environment) -> SExpression:
    """Replace every quasiquote in `expr` by its list-construction code; quoted data is left alone."""
    if not isinstance(expr, list) or not expr:
        return expr
    head = expr[0]
    if head == QUOTE:
        return expr
    if head == QUASIQUOTE:
        if len(expr) != 2:
            raise JLispArityError("'quasiquote' takes exactly 1 argument")
        return build_template(expr[1], env)
    return [unfold_templates(item, env) for item in expr]


def quasiquote_form(tail: list[SExpression], env: Environment) -> SExpression:
    if len(tail) != 1:
        raise JLispArityError("'quasiquote' takes exactly 1 argument")
    return build_template(tail[0], env)


def unquote_form(tail: list[SExpression], env: Environment) -> SExpression:
    raise JLispSyntaxError(
        "[unquote] Unbalanced quotes: 'unquote' found without corresponding ' or `"
    )


def unquote_splice_form(tail: list[SExpression], env: Environment) -> SExpression:
    raise JLispSyntaxError("[unquote-splice] not implemented")
