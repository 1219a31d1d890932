import pytest

from jlisp.errors import JLispNativeError, JLispSyntaxError, JLispUnboundSymbol
from jlisp.evaluation.native_ops import HostExpression, pack, unpack
from jlisp.interpreter import run, run_without_includes
from jlisp.types.function import Function
from jlisp.types.nil import Nil
from jlisp.types.symbol import Symbol


@pytest.mark.parametrize(
    "program,expected",
    [
        ('(native "1 + 1")', "2"),
        ('(define a 1) (native "a + 1" a)', "2"),
        ('(defn sum (a b) (native "a + b" a b)) (sum 1 2)', "3"),
        ('(defn strleen (s) (native "len(s) if s else 0" s)) (strleen "abc")', "3"),
        ('(defn strleen (s) (native "len(s) if s else 0" s)) (strleen "")', "0"),
        ("(native \"upper('abc')\")", '"ABC"'),
        ('(native "1 < 2 <= 2")', "true"),
        ('(define xs (list 1 2 3)) (native "xs[1:]" xs)', "(2 3)"),
        ("(native \"[1, 'a', True]\")", '(1 "a" true)'),
        ('(define s "hey") (native "s + \'!\'" s)', '"hey!"'),
        ('(native "str(2.0)")', '"2"'),
        ('(define f car) (native "f" f)', "#<Function (native)>"),
        ('(native "not is_nil(7)")', "true"),
    ],
)
def test_native_expressions(program, expected):
    assert run_without_includes(program) == expected


@pytest.mark.parametrize(
    "program,error,message",
    [
        ('(native "None")', JLispNativeError, "invalid value"),
        ('(native "1 / 0")', JLispNativeError, "ZeroDivisionError"),
        ('(define x 5) (native "upper(x)" x)', JLispNativeError, "AttributeError"),
        ('(define xs (list 1)) (native "lower(xs)" xs)', JLispNativeError, "AttributeError"),
        ("(native \"__import__('os')\")", JLispSyntaxError, "unsupported construct"),
        ('(define x 1) (native "x.real" x)', JLispSyntaxError, "unsupported construct"),
        ('(native "lambda: 1")', JLispSyntaxError, "unsupported construct"),
        ('(native "2 ** 8")', JLispSyntaxError, "unsupported operator"),
        ('(native "1 +")', JLispSyntaxError, "invalid expression"),
        ('(native "b")', JLispSyntaxError, "unknown name 'b'"),
        ('(native "a" 1)', JLispSyntaxError, "variables"),
        ("(native 1)", JLispSyntaxError, "string argument"),
        ('(native "missing" missing)', JLispUnboundSymbol, "missing"),
    ],
)
def test_native_errors(program, error, message):
    with pytest.raises(error, match=message):
        run_without_includes(program)


def test_native_errors_are_catchable():
    assert run_without_includes('(try (native "1 / 0") "caught")') == '"caught"'
    assert run_without_includes('(define x 5) (try (native "upper(x)" x) 0)') == "0"


def test_host_expression_direct():
    expr = HostExpression("a * 2 if is_number(a) else a", ["a"])
    assert expr.evaluate({"a": 4.0}) == 8.0
    assert expr.evaluate({"a": "x"}) == "x"


@pytest.mark.parametrize(
    "value,expected",
    [
        (True, True),
        (False, False),
        (3, 3.0),
        (2.5, 2.5),
        ("s", "s"),
        ((1, "a"), [1.0, "a"]),
        ([[1]], [[1.0]]),
        (Nil, Nil),
        (Symbol("x"), Symbol("x")),
    ],
)
def test_pack(value, expected):
    packed = pack(value)
    assert packed == expected
    assert type(packed) is type(expected)


@pytest.mark.parametrize("value", [None, {"a": 1}, object()])
def test_pack_rejects_other_values(value):
    with pytest.raises(JLispNativeError, match="invalid value"):
        pack(value)


def test_unpack(env):
    env.define("target", 5.0)
    fn = Function(lambda args, e: Nil)
    assert unpack(Nil, env) is None
    assert unpack([1.0, "a", True], env) == [1.0, "a", True]
    assert unpack(Symbol("target"), env) == 5.0
    assert unpack(fn, env) is fn


@pytest.mark.parametrize(
    "program,expected",
    [
        ("(mod 7 3)", "1"),
        ("(abs (- 0 5))", "5"),
        ("(number? 1)", "true"),
        ('(number? "a")', "false"),
        ('(string? "a")', "true"),
        ("(list? (list))", "true"),
        ("(list? 1)", "false"),
    ],
)
def test_prelude_host_helpers(program, expected):
    assert run(program) == expected
