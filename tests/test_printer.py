import math

import pytest

from jlisp.printer import format_number, items_to_string, to_display, to_string, type_name
from jlisp.types.function import Function
from jlisp.types.nil import Nil
from jlisp.types.symbol import Symbol


def _noop(args, env):
    return Nil


@pytest.mark.parametrize(
    "value,expected",
    [
        (4.0, "4"),
        (-3.0, "-3"),
        (0.5, "0.5"),
        (123.456, "123.456"),
        (0.1 + 0.2, "0.30000000000000004"),
        (-0.0, "0"),
        (2.0 ** 53, "9007199254740992"),
        (123456789012e9, "123456789012000000000"),
        (-123456789012e9, "-123456789012000000000"),
        (1e16, "10000000000000000"),
        (1.5e20, "150000000000000000000"),
        (1e21, "1e+21"),
        (1e-7, "1e-7"),
        (math.nan, "NaN"),
        (math.inf, "Infinity"),
        (-math.inf, "-Infinity"),
    ],
)
def test_format_number(value, expected):
    assert format_number(value) == expected


@pytest.mark.parametrize(
    "term,expected",
    [
        (True, "true"),
        (False, "false"),
        ("hi", '"hi"'),
        (2.0, "2"),
        (Nil, "nil"),
        (Symbol("foo"), "foo"),
        ([], "()"),
        ([1.0, [2.0, "a"], Nil], '(1 (2 "a") nil)'),
        (Function(_noop, "sum"), "#<Function 'sum'>"),
        (Function(_noop), "#<Function (native)>"),
    ],
)
def test_to_string(term, expected):
    assert to_string(term) == expected


def test_to_display_shows_bare_strings():
    assert to_display("hi") == "hi"
    assert to_display(["hi"]) == '("hi")'
    assert to_display(1.0) == "1"


def test_items_to_string():
    assert items_to_string([1.0, "a", Nil]) == '1\n"a"\nnil'


@pytest.mark.parametrize(
    "term,expected",
    [
        (True, "BOOLEAN"),
        ("s", "STRING"),
        (1.0, "NUMBER"),
        (Nil, "NIL"),
        (Symbol("x"), "SYMBOL"),
        (Function(_noop), "FUNCTION"),
        ([1.0], "LIST"),
    ],
)
def test_type_name(term, expected):
    assert type_name(term) == expected
