"""Built-in functions for the jlisp runtime environment.

This module defines arithmetic, comparison, list and string processing,
console I/O and introspection primitives, plus the registration helper that
installs them into a root Environment. Each primitive takes the calling
Environment and the list of evaluated arguments.
"""
from __future__ import annotations

from typing import Callable

from jlisp import Term
from jlisp.builtin.console import Console
from jlisp.errors import JLispArithmeticError, JLispArityError, JLispTypeError
from jlisp.printer import to_display, to_string
from jlisp.types.environment import Environment
from jlisp.types.function import Function
from jlisp.types.nil import Nil

Builtin = Callable[[Environment, list[Term]], Term]


def _is_number(x: Term) -> bool:
    return isinstance(x, float) and not isinstance(x, bool)


def _numbers(name: str, expr: list[Term], exactly: int | None = None) -> list[float]:
    if exactly is not None and len(expr) != exactly:
        raise JLispArityError(f"[{name}] function takes {exactly} number arguments")
    if exactly is None and len(expr) < 2:
        raise JLispArityError(f"[{name}] function takes 2 or more number arguments")
    if not all(_is_number(x) for x in expr):
        raise JLispTypeError(f"[{name}] function takes only number arguments")
    return expr


# -------------------------------
# Arithmetic and comparison
# -------------------------------
def add(env: Environment, expr: list[Term]) -> Term:
    """Return the sum of two or more numbers."""
    return float(sum(_numbers("+", expr)))


def sub(env: Environment, expr: list[Term]) -> Term:
    """Subtract the second number from the first."""
    a, b = _numbers("-", expr, exactly=2)
    return a - b


def mul(env: Environment, expr: list[Term]) -> Term:
    """Return the product of two or more numbers."""
    result = 1.0
    for x in _numbers("*", expr):
        result *= x
    return result


def div(env: Environment, expr: list[Term]) -> Term:
    """Divide the first number by the second."""
    a, b = _numbers("/", expr, exactly=2)
    if b == 0:
        raise JLispArithmeticError("[/] division by zero")
    return a / b


def lt(env: Environment, expr: list[Term]) -> Term:
    """Return true if the first number is smaller than the second."""
    a, b = _numbers("<", expr, exactly=2)
    return a < b


def equals(env: Environment, expr: list[Term]) -> Term:
    """Return true if both arguments have the same printed representation."""
    if len(expr) != 2:
        raise JLispArityError("[=] function takes 2 arguments")
    return to_string(expr[0]) == to_string(expr[1])


# -------------------------------
# Lists
# -------------------------------
def car(env: Environment, expr: list[Term]) -> Term:
    """Return the first element of a list; nil for the empty list."""
    if len(expr) != 1 or not isinstance(expr[0], list):
        raise JLispTypeError("[car] function takes 1 list argument")
    xs = expr[0]
    return xs[0] if xs else Nil


def cdr(env: Environment, expr: list[Term]) -> Term:
    """Return every element of a list but the first."""
    if len(expr) != 1 or not isinstance(expr[0], list):
        raise JLispTypeError("[cdr] function takes 1 list argument")
    return expr[0][1:]


def cons(env: Environment, expr: list[Term]) -> Term:
    """Return a new list made of the first argument followed by the elements of the second.

    A nil tail is treated as the empty list.
    """
    if len(expr) != 2 or not (isinstance(expr[1], list) or expr[1] is Nil):
        raise JLispTypeError("[cons] function takes 2 arguments, of which the second must be a list")
    head, tail = expr
    if tail is Nil:
        return [head]
    return [head, *tail]


def list_builtin(env: Environment, expr: list[Term]) -> Term:
    """Return a list of the arguments."""
    return list(expr)


def map_builtin(env: Environment, expr: list[Term]) -> Term:
    """(map f list) returns the list of f applied to every element."""
    if len(expr) != 2 or not isinstance(expr[0], Function) or not isinstance(expr[1], list):
        raise JLispTypeError("[map] function takes 2 arguments: a function and a list")
    fn, xs = expr
    return [fn.call([x], env) for x in xs]


def reduce_builtin(env: Environment, expr: list[Term]) -> Term:
    """(reduce f list [initial]) folds the list from the left with f."""
    if len(expr) not in (2, 3) or not isinstance(expr[0], Function) or not isinstance(expr[1], list):
        raise JLispTypeError("[reduce] function takes a function, a list and an optional initial value")
    fn, xs = expr[0], list(expr[1])
    if len(expr) == 3:
        acc = expr[2]
    elif xs:
        acc = xs.pop(0)
    else:
        return Nil
    for x in xs:
        acc = fn.call([acc, x], env)
    return acc


# -------------------------------
# Strings
# -------------------------------
def concat(env: Environment, expr: list[Term]) -> Term:
    """Concatenate one or more strings."""
    if not expr:
        raise JLispArityError("[concat] function takes at least 1 argument")
    if not all(isinstance(x, str) for x in expr):
        raise JLispTypeError("[concat] function needs to be called with arguments of type string")
    return "".join(expr)


def str_to_list(env: Environment, expr: list[Term]) -> Term:
    """Return the list of one-character strings of a string."""
    if len(expr) != 1 or not isinstance(expr[0], str):
        raise JLispTypeError("[str->list] function takes 1 string argument")
    return list(expr[0])


def length(env: Environment, expr: list[Term]) -> Term:
    """Return the number of elements of a list or characters of a string."""
    if len(expr) != 1 or not isinstance(expr[0], (list, str)):
        raise JLispTypeError("[len] function takes 1 list or string argument")
    return float(len(expr[0]))


def is_empty(env: Environment, expr: list[Term]) -> Term:
    """Return true for the empty list or the empty string."""
    if len(expr) != 1 or not isinstance(expr[0], (list, str)):
        raise JLispTypeError("[empty?] function takes 1 list or string argument")
    return len(expr[0]) == 0


# -------------------------------
# Introspection
# -------------------------------
def doc(env: Environment, expr: list[Term]) -> Term:
    """Return the description of a function, or its name when it has none."""
    if len(expr) != 1 or not isinstance(expr[0], Function):
        raise JLispTypeError("[doc] function takes 1 function argument")
    fn = expr[0]
    if fn.description:
        return fn.description
    if fn.id:
        return fn.id
    return Nil


# -------------------------------
# Console I/O
# -------------------------------
def console_builtins(console: Console) -> dict[str, Builtin]:
    def print_builtin(env: Environment, expr: list[Term]) -> Term:
        """Write the arguments to the console, one per line."""
        console.write_line("\n".join(to_display(x) for x in expr))
        return Nil

    def read_builtin(env: Environment, expr: list[Term]) -> Term:
        """(read [prompt]) reads one line from the console."""
        if len(expr) > 1 or (expr and not isinstance(expr[0], str)):
            raise JLispTypeError("[read] function takes an optional string prompt")
        return console.read_line(expr[0] if expr else "")

    return {"print": print_builtin, "read": read_builtin}


BUILTINS: dict[str, Builtin] = {
    "+": add,
    "-": sub,
    "*": mul,
    "/": div,
    "<": lt,
    "=": equals,
    "car": car,
    "cdr": cdr,
    "cons": cons,
    "list": list_builtin,
    "map": map_builtin,
    "reduce": reduce_builtin,
    "concat": concat,
    "str->list": str_to_list,
    "len": length,
    "empty?": is_empty,
    "doc": doc,
}


def as_function(fn: Builtin) -> Function:
    """Wrap a builtin as a native Function Term, documented by its docstring."""
    return Function(lambda args, env: fn(env, args), description=fn.__doc__)


def register(env: Environment, console: Console) -> None:
    """Register all builtin functions into the given environment."""
    for name, fn in {**BUILTINS, **console_builtins(console)}.items():
        env.define(name, as_function(fn))
