"""Lexer for the BasicSharp language.

Scanning is split in two stages:

1. **Terminal matching**: the raw source is fed to a lark lexer built from
   the terminal definitions in `BASIC_GRAMMAR`. Lark handles whitespace,
   newline counting and line/column tracking, and yields tokens lazily.

2. **Classification**: each lark token is converted into a `Token`.
   Identifiers are checked against the case-insensitive keyword table,
   `true`/`false` become boolean literals, numbers are parsed into floats
   and string literals are unquoted. Malformed input raises `LexerError`.

The `lex` function is the public entry point and returns a generator that
ends with exactly one EOF token.
"""

from __future__ import annotations

from typing import BinaryIO, Iterator

from lark import Lark
from lark import Token as LarkToken
from lark.exceptions import UnexpectedCharacters

from .errors import LexerError
from .tokens import KEYWORDS, Position, Token, TokenType


BASIC_GRAMMAR = r"""
    start: (LEFT_PAREN | RIGHT_PAREN | COMMA | MINUS | PLUS | STAR | SLASH
           | SEMICOLON | EQUAL_EQUAL | EQUAL | LESS_EQUAL | NOT_EQUAL | LESS
           | GREATER_EQUAL | GREATER | NUMBER | STRING | UNTERMINATED_STRING
           | REM | NAME)*

    LEFT_PAREN: "("
    RIGHT_PAREN: ")"
    COMMA: ","
    MINUS: "-"
    PLUS: "+"
    STAR: "*"
    SLASH: "/"
    SEMICOLON: ";"
    EQUAL_EQUAL: "=="
    EQUAL: "="
    LESS_EQUAL: "<="
    NOT_EQUAL: "<>"
    LESS: "<"
    GREATER_EQUAL: ">="
    GREATER: ">"

    NUMBER: /[0-9]+(\.[0-9]*)?/
    STRING.2: /"[^"]*"/
    UNTERMINATED_STRING: /"[^"]*/

    // A comment keyword swallows the rest of its line.
    REM.2: /rem(?![A-Za-z0-9_])[^\n\r]*/i
    NAME: /[A-Za-z_][A-Za-z0-9_]*/

    WS: /[ \t\r\n]+/
    %ignore WS
"""


BASIC_LEXER = Lark(
    BASIC_GRAMMAR,
    parser='lalr',
    lexer='basic',
)


# Punctuation and operators map one to one onto token types.
SIMPLE_TOKENS = {
    name: TokenType[name]
    for name in (
        'LEFT_PAREN', 'RIGHT_PAREN', 'COMMA', 'MINUS', 'PLUS', 'STAR', 'SLASH',
        'SEMICOLON', 'EQUAL_EQUAL', 'EQUAL', 'LESS_EQUAL', 'NOT_EQUAL', 'LESS',
        'GREATER_EQUAL', 'GREATER',
    )
}


def classify(token: LarkToken) -> Token:
    """Convert a lark token into a BasicSharp token."""
    position = Position(token.line, token.column)
    text = str(token)
    kind = token.type
    if kind in SIMPLE_TOKENS:
        return Token(SIMPLE_TOKENS[kind], text, None, position)
    if kind == 'NUMBER':
        # float() always uses '.' as decimal separator, whatever the locale
        try:
            value = float(text)
        except ValueError:
            raise LexerError(f"Invalid number format: '{text}'.", position)
        return Token(TokenType.NUMBER, text, value, position)
    if kind == 'STRING':
        return Token(TokenType.STRING, text, text[1:-1], position)
    if kind == 'UNTERMINATED_STRING':
        raise LexerError("Unterminated string.", position)
    if kind == 'REM':
        return Token(TokenType.REM, text, None, position)
    if kind == 'NAME':
        lowered = text.lower()
        if lowered in KEYWORDS:
            return Token(KEYWORDS[lowered], text, None, position)
        if lowered in ('true', 'false'):
            return Token(TokenType.BOOLEAN, text, lowered == 'true', position)
        return Token(TokenType.IDENTIFIER, text, text, position)
    raise LexerError(f"Unknown token '{text}'.", position)


def end_position(source: str) -> Position:
    """Position just past the last character of `source`."""
    line = source.count('\n') + 1
    column = len(source) - (source.rfind('\n') + 1) + 1
    return Position(line, column)


def lex(source: str) -> Iterator[Token]:
    """Lazily convert source text into tokens, ending with one EOF token.

    A NUL character terminates the input. Lexical errors are raised while
    iterating, at the point the offending text is reached.
    """
    source = source.split('\0', 1)[0]
    try:
        for token in BASIC_LEXER.lex(source):
            yield classify(token)
    except UnexpectedCharacters as e:
        raise LexerError(f"Unexpected character '{e.char}'.", Position(e.line, e.column))
    yield Token(TokenType.EOF, '', None, end_position(source))


def read_source(stream: BinaryIO, encoding: str = 'utf-8') -> str:
    """Decode a byte stream holding a whole program."""
    return stream.read().decode(encoding)
