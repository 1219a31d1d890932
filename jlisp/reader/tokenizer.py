"""
  Lisp Tokenizer

Splits program text into a flat sequence of Tokens, each tagged with the
1-based source line it starts on.

    - ( )                   -> OPEN_PAREN / CLOSE_PAREN
    - "text"                -> STRING (escapes \\" \\\\ \\n \\t decoded)
    - 12 3.5 .5             -> NUMBER (greedy over digits and '.')
    - true false            -> BOOLEAN
    - nil                   -> NIL
    - ' ` , ,@              -> QUOTE / BACKQUOTE / UNQUOTE / UNQUOTE_SPLICE markers
    - ; ...                 -> comment, dropped
    - anything else         -> SYMBOL, up to the next blank or parenthesis
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Iterator, NamedTuple

from jlisp.errors import JLispReadError

RAW_TRUE = "true"
RAW_FALSE = "false"
RAW_NIL = "nil"


class TokenKind(Enum):
    OPEN_PAREN = "("
    CLOSE_PAREN = ")"
    SYMBOL = "symbol"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NIL = "nil"
    QUOTE = "'"
    BACKQUOTE = "`"
    UNQUOTE = ","
    UNQUOTE_SPLICE = ",@"


class Token(NamedTuple):
    kind: TokenKind
    value: str | None = None
    line: int = 1


TOKEN_RE = re.compile(
    r"(?P<blank>[ \t\r\n]+)"  # separators, newlines counted by the caller
    r"|(?P<comment>;[^\n]*)"  # single-line comment
    r"|(?P<lparen>\()"  # (
    r"|(?P<rparen>\))"  # )
    r"|(?P<splice>,@)"  # ,@
    r"|(?P<unquote>,)"  # ,
    r"|(?P<quote>')"  # '
    r"|(?P<backquote>`)"  # `
    r'|(?P<string>"(?:\\.|[^\\"])*")'  # double-quoted strings
    r"|(?P<number>[0-9.]+)"  # permissive: 1.2.3 is still a NUMBER token
    r'|(?P<symbol>[^ \t\r\n()"][^ \t\r\n()]*)',  # fallback: symbols
    re.DOTALL,
)

MARKERS: dict[str, TokenKind] = {
    "splice": TokenKind.UNQUOTE_SPLICE,
    "unquote": TokenKind.UNQUOTE,
    "quote": TokenKind.QUOTE,
    "backquote": TokenKind.BACKQUOTE,
}

ESCAPES: dict[str, str] = {
    "n": "\n",
    "t": "\t",
    '"': '"',
    "\\": "\\",
}

_ESCAPE_RE = re.compile(r"\\(.)", re.DOTALL)


def _unescape(body: str) -> str:
    return _ESCAPE_RE.sub(lambda m: ESCAPES.get(m.group(1), m.group(0)), body)


def _classify_symbol(text: str, line: int) -> Token:
    if text == RAW_TRUE or text == RAW_FALSE:
        return Token(TokenKind.BOOLEAN, text, line)
    if text == RAW_NIL:
        return Token(TokenKind.NIL, text, line)
    return Token(TokenKind.SYMBOL, text, line)


def lex(source: str) -> Iterator[Token]:
    """Token generator: yields Tokens in source order."""
    pos = 0
    line = 1
    n = len(source)

    while pos < n:
        m = TOKEN_RE.match(source, pos)
        if m is None:
            # Only an opening quote without its closing partner fails to match
            raise JLispReadError(f"Error in readString: Unmatched quote (line {line})")
        kind = m.lastgroup
        text = m.group(kind)
        pos = m.end()

        if kind == "blank":
            line += text.count("\n")
        elif kind == "comment":
            continue
        elif kind == "lparen":
            yield Token(TokenKind.OPEN_PAREN, "(", line)
        elif kind == "rparen":
            yield Token(TokenKind.CLOSE_PAREN, ")", line)
        elif kind in MARKERS:
            yield Token(MARKERS[kind], text, line)
        elif kind == "string":
            yield Token(TokenKind.STRING, _unescape(text[1:-1]), line)
            line += text.count("\n")
        elif kind == "number":
            yield Token(TokenKind.NUMBER, text, line)
        else:
            yield _classify_symbol(text, line)


def tokenize(source: str) -> list[Token]:
    """Return every token of `source`; raises JLispReadError with no partial result."""
    return list(lex(source))


def token_to_string(token: Token) -> str:
    if token.kind == TokenKind.STRING:
        return f'"{token.value}"'
    if token.value is not None:
        return token.value
    return token.kind.value
