"""
  Lisp Reader

Builds Term trees from the token sequence produced by the tokenizer.

    - numbers        -> float (malformed numeric text reads as NaN)
    - strings        -> str
    - symbols        -> Symbol (carrying the source line)
    - true / false   -> True / False
    - nil            -> Nil
    - lists          -> Python list
    - ' ` , ,@ x     -> (quote x) (quasiquote x) (unquote x) (unquote-splice x)

Quote markers are resolved in a second bottom-up pass (`expand_quotes`), since a
marker can prefix a whole sub-list that has not been read yet when the marker is.
"""

from __future__ import annotations

import logging
import math
from collections import deque
from typing import Iterable

from jlisp import SExpression
from jlisp.errors import JLispReadError
from jlisp.reader.tokenizer import Token, TokenKind, RAW_TRUE, tokenize
from jlisp.types.nil import Nil
from jlisp.types.symbol import Symbol

logger = logging.getLogger(__name__)

QUOTE_FORMS: dict[TokenKind, str] = {
    TokenKind.QUOTE: "quote",
    TokenKind.BACKQUOTE: "quasiquote",
    TokenKind.UNQUOTE: "unquote",
    TokenKind.UNQUOTE_SPLICE: "unquote-splice",
}


class _QuoteMarker:
    """Placeholder for a quote-family token until `expand_quotes` folds it."""

    __slots__ = ("symbol",)

    def __init__(self, symbol: Symbol):
        self.symbol = symbol

    def __repr__(self):
        return f"<marker {self.symbol}>"


def parse(program: str) -> list[SExpression]:
    """Parse program text and return its top-level forms."""
    return parse_tokens(tokenize(program))


def parse_tokens(tokens: Iterable[Token]) -> list[SExpression]:
    """Build the top-level forms from a token sequence."""
    stream = deque(tokens)
    items: list = []
    while stream:
        tok = stream.popleft()
        if tok.kind == TokenKind.CLOSE_PAREN:
            logger.debug("ignoring unbalanced ')' at line %d", tok.line)
            continue
        items.append(_parse_unit(tok, stream))
    return expand_quotes(items)


def _parse_unit(tok: Token, stream: deque[Token]):
    if tok.kind == TokenKind.OPEN_PAREN:
        return _parse_list(stream)
    if tok.kind in QUOTE_FORMS:
        return _QuoteMarker(Symbol(QUOTE_FORMS[tok.kind], tok.line))
    return _to_term(tok)


def _parse_list(stream: deque[Token]) -> list:
    items: list = []
    while stream:
        tok = stream.popleft()
        if tok.kind == TokenKind.CLOSE_PAREN:
            return items
        items.append(_parse_unit(tok, stream))
    # Ran out of tokens: keep whatever was read
    return items


def _to_number(text: str) -> float:
    try:
        return float(text)
    except ValueError:
        return math.nan


def _to_term(tok: Token) -> SExpression:
    match tok.kind:
        case TokenKind.NUMBER:
            return _to_number(tok.value)
        case TokenKind.STRING:
            return tok.value
        case TokenKind.SYMBOL:
            return Symbol(tok.value, tok.line)
        case TokenKind.BOOLEAN:
            return tok.value == RAW_TRUE
        case TokenKind.NIL:
            return Nil
    raise JLispReadError(f"Unexpected token {tok.kind.name} (line {tok.line})")


def expand_quotes(items: list) -> list:
    """Fold every quote marker with the unit that follows it, innermost lists first."""
    folded: list = []
    # Walk right to left so consecutive markers nest: ''a -> (quote (quote a))
    for item in reversed(items):
        if isinstance(item, list):
            item = expand_quotes(item)
        if isinstance(item, _QuoteMarker):
            if not folded:
                raise JLispReadError(
                    f"Nothing to {item.symbol} after marker (line {item.symbol.line})"
                )
            folded[-1] = [item.symbol, folded[-1]]
        else:
            folded.append(item)
    folded.reverse()
    return folded
