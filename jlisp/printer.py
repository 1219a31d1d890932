"""Printed representation of Terms.

The format is part of the language contract (program results are compared as
text), so every Term kind has exactly one rendering:

    true / false              Boolean
    "text"                    String, wrapped in double quotes, no escaping
    4  0.5  1e+21  NaN        Number, shortest decimal text
    nil                       Nil
    name                      Symbol
    #<Function 'id'>          Function with an id
    #<Function (native)>      Function without an id
    (1 2 3)                   List
"""

from __future__ import annotations

import math

from jlisp import Term
from jlisp.reader.tokenizer import RAW_FALSE, RAW_NIL, RAW_TRUE
from jlisp.types.function import Function
from jlisp.types.nil import NilType
from jlisp.types.symbol import Symbol


def format_number(n: float) -> str:
    if math.isnan(n):
        return "NaN"
    if math.isinf(n):
        return "Infinity" if n > 0 else "-Infinity"
    if n == 0:
        return "0"
    text = repr(n)
    if n.is_integer() and abs(n) < 1e21:
        if "e" not in text:
            return text[:-2]
        # shortest digits, padded with zeros up to the decimal exponent
        mantissa, exponent = text.split("e")
        sign = "-" if mantissa.startswith("-") else ""
        whole, _, fraction = mantissa.lstrip("-").partition(".")
        digits = whole + fraction
        return sign + digits + "0" * (int(exponent) - len(fraction))
    if "e" in text:
        # 1e-07 -> 1e-7, 1e+22 stays
        mantissa, exponent = text.split("e")
        sign = "-" if exponent.startswith("-") else "+"
        text = f"{mantissa}e{sign}{exponent.lstrip('+-').lstrip('0')}"
    return text


def to_string(term: Term) -> str:
    """Return the printed representation of `term`."""
    if term is True:
        return RAW_TRUE
    if term is False:
        return RAW_FALSE
    if isinstance(term, str):
        return f'"{term}"'
    if isinstance(term, float):
        return format_number(term)
    if isinstance(term, int):
        return format_number(float(term))
    if isinstance(term, NilType):
        return RAW_NIL
    if isinstance(term, Symbol):
        return term.name
    if isinstance(term, Function):
        return repr(term)
    if isinstance(term, list):
        return "(" + " ".join(to_string(t) for t in term) + ")"
    return str(term)


def to_display(term: Term) -> str:
    """Like to_string, but a String shows its bare text (used by `print`)."""
    if isinstance(term, str):
        return term
    return to_string(term)


def items_to_string(items: list[Term]) -> str:
    return "\n".join(to_string(t) for t in items)


def type_name(term: Term) -> str:
    """Kind of a Term, as shown in error messages."""
    if term is True or term is False:
        return "BOOLEAN"
    if isinstance(term, str):
        return "STRING"
    if isinstance(term, (int, float)):
        return "NUMBER"
    if isinstance(term, NilType):
        return "NIL"
    if isinstance(term, Symbol):
        return "SYMBOL"
    if isinstance(term, Function):
        return "FUNCTION"
    if isinstance(term, list):
        return "LIST"
    return type(term).__name__
