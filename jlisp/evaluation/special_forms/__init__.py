"""Registry of native macros for the jlisp expander.

Maps macro names to expansion functions. Each one rewrites its raw argument
terms into a list headed by a Function, so the evaluator itself has no special
cases. `register` installs the whole table into a macro registry.
"""

from jlisp.evaluation.special_forms.define_form import define_form
from jlisp.evaluation.special_forms.defmacro_form import defmacro_form
from jlisp.evaluation.special_forms.eval_form import eval_form, read_string_form
from jlisp.evaluation.special_forms.if_form import if_form
from jlisp.evaluation.special_forms.lambda_form import defn_form, lambda_form
from jlisp.evaluation.special_forms.loop_forms import break_form, while_form
from jlisp.evaluation.special_forms.native_form import native_form
from jlisp.evaluation.special_forms.progn_form import begin_form
from jlisp.evaluation.special_forms.quote_forms import (
    quasiquote_form,
    quote_form,
    unquote_form,
    unquote_splice_form,
)
from jlisp.evaluation.special_forms.set_form import set_form
from jlisp.evaluation.special_forms.throw_catch_form import throw_form, try_form
from jlisp.types.macro_environment import ExpandFn, Macro, MacroEnvironment

NATIVE_MACROS: dict[str, ExpandFn] = {
    "define": define_form,
    "if": if_form,
    "eval": eval_form,
    "lambda": lambda_form,
    "defn": defn_form,
    "begin": begin_form,
    "while": while_form,
    "break": break_form,
    "set!": set_form,
    "quote": quote_form,
    "quasiquote": quasiquote_form,
    "unquote": unquote_form,
    "unquote-splice": unquote_splice_form,
    "read-string": read_string_form,
    "defmacro": defmacro_form,
    "try": try_form,
    "throw": throw_form,
    "native": native_form,
}


def register(macros: MacroEnvironment) -> None:
    for name, expand_fn in NATIVE_MACROS.items():
        macros.define_macro(Macro(name, expand_fn))
