import math

import pytest
from hypothesis import given, strategies as st

from jlisp.errors import JLispReadError
from jlisp.printer import to_string
from jlisp.reader.parser import parse
from jlisp.types.nil import Nil
from jlisp.types.symbol import Symbol


@pytest.mark.parametrize(
    "program",
    [
        "(= 1 1)",
        "(map + (list 1 2 3))",
        "(if (cond) true false)",
        "(begin (define myvalue 15) (+ (if (= 15 myvalue) 10 (+ 8 8)) 0))",
        "(begin (define factorial (lambda (n) (if (= 1 n) 1 (* n (factorial (- n 1)))))) (factorial 5))",
        '(concat "a b" nil ())',
    ],
)
def test_round_trip(program):
    assert to_string(parse(program)[0]) == program


@pytest.mark.parametrize(
    "program,expected",
    [
        ("('print)", "((quote print))"),
        ("'(print)", "(quote (print))"),
        ("`(set! ,a ,@items)", "(quasiquote (set! (unquote a) (unquote-splice items)))"),
        ("''a", "(quote (quote a))"),
        ("'a", "(quote a)"),
        ("(a '(b 'c))", "(a (quote (b (quote c))))"),
    ],
)
def test_quote_markers(program, expected):
    assert to_string(parse(program)[0]) == expected


@pytest.mark.parametrize(
    "program,expected",
    [
        ("", []),
        ("1 2", [1.0, 2.0]),
        ("nil", [Nil]),
        ('"x"', ["x"]),
        ("true false", [True, False]),
        ("(a (b))", [[Symbol("a"), [Symbol("b")]]]),
        ("()", [[]]),
        # unbalanced input
        ("(a", [[Symbol("a")]]),
        (") 1", [1.0]),
        ("(!= 1 0))", [[Symbol("!="), 1.0, 0.0]]),
    ],
)
def test_parse_forms(program, expected):
    assert parse(program) == expected


def test_numbers_are_floats():
    (value,) = parse("42")
    assert isinstance(value, float)
    assert value == 42.0


@pytest.mark.parametrize("program", ["1.2.3", "."])
def test_malformed_numbers_read_as_nan(program):
    assert math.isnan(parse(program)[0])


def test_symbols_carry_line():
    form = parse("\n\n(foo bar)")[0]
    assert form[0].line == 3


@pytest.mark.parametrize("program", ["'", "(a ')", "`"])
def test_dangling_quote_marker(program):
    with pytest.raises(JLispReadError):
        parse(program)


# -------------------------------
# Property tests
# -------------------------------
symbol_strat = st.text(alphabet="abcdefghij-?!*", min_size=1, max_size=8)
number_strat = st.integers(min_value=0, max_value=100000).map(str)
string_strat = st.text(alphabet="abc xyz", max_size=8).map(lambda s: f'"{s}"')
atom_strat = st.one_of(symbol_strat, number_strat, string_strat, st.sampled_from(["true", "false", "nil"]))

sexpr_strat = st.recursive(
    atom_strat,
    lambda children: st.lists(children, max_size=4).map(lambda xs: "(" + " ".join(xs) + ")"),
    max_leaves=20,
)


@given(sexpr_strat)
def test_printed_form_round_trips(source):
    assert to_string(parse(source)[0]) == source


@given(st.lists(sexpr_strat, min_size=1, max_size=4))
def test_parse_keeps_every_top_level_form(sources):
    assert len(parse("\n".join(sources))) == len(sources)
