"""Host expressions for the `native` macro.

The source text is a Python *expression* over the declared variable names. It is
parsed once with `ast` and evaluated by a small walker that accepts a closed set
of node types: literals, names, arithmetic, comparisons, boolean logic,
conditional expressions, subscripts and calls to the helpers in HOST_FUNCTIONS.
Anything else (attribute access, lambdas, comprehensions, ...) is rejected when
the macro is expanded.

Values cross the boundary through `unpack` (Term -> Python) and `pack`
(Python -> Term).
"""

from __future__ import annotations

import ast
import logging
import operator
from typing import Any, Callable

from jlisp import Term
from jlisp.errors import JLispNativeError, JLispSyntaxError, JLispUnboundSymbol
from jlisp.printer import format_number, to_display
from jlisp.types.environment import Environment
from jlisp.types.function import Function
from jlisp.types.nil import NilType
from jlisp.types.symbol import Symbol

logger = logging.getLogger(__name__)


def _host_str(value: Any) -> str:
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return format_number(float(value))
    if isinstance(value, list):
        return to_display(pack(value))
    return str(value)


HOST_FUNCTIONS: dict[str, Callable[..., Any]] = {
    "len": len,
    "abs": abs,
    "str": _host_str,
    "float": float,
    "int": int,
    "round": round,
    "min": min,
    "max": max,
    "upper": lambda s: s.upper(),
    "lower": lambda s: s.lower(),
    "is_number": lambda v: isinstance(v, (int, float)) and not isinstance(v, bool),
    "is_string": lambda v: isinstance(v, str),
    "is_list": lambda v: isinstance(v, list),
    "is_bool": lambda v: isinstance(v, bool),
    "is_nil": lambda v: v is None,
}

BINARY_OPS: dict[type, Callable[[Any, Any], Any]] = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.Div: operator.truediv,
    ast.FloorDiv: operator.floordiv,
    ast.Mod: operator.mod,
}

UNARY_OPS: dict[type, Callable[[Any], Any]] = {
    ast.USub: operator.neg,
    ast.UAdd: operator.pos,
    ast.Not: operator.not_,
}

COMPARE_OPS: dict[type, Callable[[Any, Any], Any]] = {
    ast.Eq: operator.eq,
    ast.NotEq: operator.ne,
    ast.Lt: operator.lt,
    ast.LtE: operator.le,
    ast.Gt: operator.gt,
    ast.GtE: operator.ge,
    ast.In: lambda a, b: a in b,
    ast.NotIn: lambda a, b: a not in b,
}


class HostExpression:
    """A validated host expression, ready to be evaluated against bindings."""

    def __init__(self, source: str, names: list[str]):
        self.source = source
        self.names = names
        try:
            self.tree = ast.parse(source.strip(), mode="eval")
        except SyntaxError as ex:
            raise JLispSyntaxError(f"[native] invalid expression {source!r}: {ex.msg}") from ex
        self._check(self.tree.body)

    def _check(self, node: ast.AST) -> None:
        match node:
            case ast.Constant(value=value):
                if value is not None and not isinstance(value, (bool, int, float, str)):
                    raise JLispSyntaxError(f"[native] unsupported literal {value!r}")
            case ast.Name(id=name):
                if name not in self.names and name not in HOST_FUNCTIONS:
                    raise JLispSyntaxError(f"[native] unknown name '{name}'")
            case ast.BinOp(left=left, op=op, right=right):
                if type(op) not in BINARY_OPS:
                    raise JLispSyntaxError(f"[native] unsupported operator {type(op).__name__}")
                self._check(left)
                self._check(right)
            case ast.UnaryOp(op=op, operand=operand):
                if type(op) not in UNARY_OPS:
                    raise JLispSyntaxError(f"[native] unsupported operator {type(op).__name__}")
                self._check(operand)
            case ast.BoolOp(values=values):
                for value in values:
                    self._check(value)
            case ast.Compare(left=left, ops=ops, comparators=comparators):
                for op in ops:
                    if type(op) not in COMPARE_OPS:
                        raise JLispSyntaxError(f"[native] unsupported comparison {type(op).__name__}")
                self._check(left)
                for comparator in comparators:
                    self._check(comparator)
            case ast.IfExp(test=test, body=body, orelse=orelse):
                self._check(test)
                self._check(body)
                self._check(orelse)
            case ast.Subscript(value=value, slice=index):
                self._check(value)
                self._check(index)
            case ast.Slice(lower=lower, upper=upper, step=step):
                for part in (lower, upper, step):
                    if part is not None:
                        self._check(part)
            case ast.List(elts=elts) | ast.Tuple(elts=elts):
                for elt in elts:
                    self._check(elt)
            case ast.Call(func=ast.Name(id=fname), args=args, keywords=[]) if fname in HOST_FUNCTIONS:
                for arg in args:
                    self._check(arg)
            case _:
                raise JLispSyntaxError(
                    f"[native] unsupported construct {type(node).__name__} in {self.source!r}"
                )

    def evaluate(self, bindings: dict[str, Any]) -> Any:
        try:
            return self._eval(self.tree.body, bindings)
        except (ArithmeticError, AttributeError, TypeError, ValueError, LookupError) as ex:
            raise JLispNativeError(f"[native] {type(ex).__name__}: {ex}") from ex

    def _eval(self, node: ast.AST, env: dict[str, Any]) -> Any:
        match node:
            case ast.Constant(value=value):
                return value
            case ast.Name(id=name):
                if name in env:
                    return env[name]
                return HOST_FUNCTIONS[name]
            case ast.BinOp(left=left, op=op, right=right):
                return BINARY_OPS[type(op)](self._eval(left, env), self._eval(right, env))
            case ast.UnaryOp(op=op, operand=operand):
                return UNARY_OPS[type(op)](self._eval(operand, env))
            case ast.BoolOp(op=ast.And(), values=values):
                result = True
                for value in values:
                    result = self._eval(value, env)
                    if not result:
                        return result
                return result
            case ast.BoolOp(values=values):
                result = False
                for value in values:
                    result = self._eval(value, env)
                    if result:
                        return result
                return result
            case ast.Compare(left=left, ops=ops, comparators=comparators):
                current = self._eval(left, env)
                for op, comparator in zip(ops, comparators):
                    right = self._eval(comparator, env)
                    if not COMPARE_OPS[type(op)](current, right):
                        return False
                    current = right
                return True
            case ast.IfExp(test=test, body=body, orelse=orelse):
                return self._eval(body, env) if self._eval(test, env) else self._eval(orelse, env)
            case ast.Subscript(value=value, slice=index):
                return self._eval(value, env)[self._eval(index, env)]
            case ast.Slice(lower=lower, upper=upper, step=step):
                return slice(*(None if p is None else self._eval(p, env) for p in (lower, upper, step)))
            case ast.List(elts=elts) | ast.Tuple(elts=elts):
                return [self._eval(elt, env) for elt in elts]
            case ast.Call(func=ast.Name(id=fname), args=args):
                # Helpers win over bindings of the same name in call position
                return HOST_FUNCTIONS[fname](*(self._eval(arg, env) for arg in args))
        raise JLispNativeError(f"[native] cannot evaluate {type(node).__name__}")


def unpack(term: Term, env: Environment) -> Any:
    """Convert a Term into the Python value a host expression works with."""
    if term is True or term is False:
        return term
    if isinstance(term, (str, float, int)):
        return term
    if isinstance(term, NilType):
        return None
    if isinstance(term, Symbol):
        return unpack(lookup(term.name, env), env)
    if isinstance(term, list):
        return [unpack(item, env) for item in term]
    # Functions pass through opaque
    return term


def pack(value: Any) -> Term:
    """Convert a host result back into a Term."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, (list, tuple)):
        return [pack(item) for item in value]
    if isinstance(value, (Symbol, Function, NilType)):
        return value
    raise JLispNativeError("[native] code returned an invalid value")


def lookup(name: str, env: Environment) -> Term:
    value = env.lookup(name)
    if value is None:
        raise JLispUnboundSymbol(f"[native] symbol '{name}' not found")
    return value


def run_host_expression(expression: HostExpression, env: Environment) -> Term:
    bindings = {name: unpack(lookup(name, env), env) for name in expression.names}
    logger.debug("native %r with %r", expression.source, bindings)
    return pack(expression.evaluate(bindings))
