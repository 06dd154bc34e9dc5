"""Token and source position definitions shared by the lexer and parser."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Dict


@dataclass(frozen=True)
class Position:
    """Location of a token or node in the source code (1-based)."""
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


class TokenType(Enum):
    # One character
    LEFT_PAREN = auto()
    RIGHT_PAREN = auto()
    COMMA = auto()
    MINUS = auto()
    PLUS = auto()
    SLASH = auto()
    STAR = auto()
    SEMICOLON = auto()

    # One or two characters
    EQUAL = auto()
    EQUAL_EQUAL = auto()
    GREATER = auto()
    GREATER_EQUAL = auto()
    LESS = auto()
    LESS_EQUAL = auto()
    NOT_EQUAL = auto()

    # Literals
    IDENTIFIER = auto()
    STRING = auto()
    NUMBER = auto()
    BOOLEAN = auto()

    # Keywords
    REM = auto()
    LET = auto()
    INPUT = auto()
    PRINT = auto()
    TONUM = auto()
    TOSTR = auto()
    RND = auto()
    IF = auto()
    THEN = auto()
    ELSE = auto()
    END = auto()
    WHILE = auto()
    DO = auto()
    BREAK = auto()
    CONTINUE = auto()
    NOT = auto()
    AND = auto()
    OR = auto()

    EOF = auto()


# Keys are lowercase; identifiers are matched case-insensitively.
KEYWORDS: Dict[str, TokenType] = {
    'rem': TokenType.REM,
    'let': TokenType.LET,
    'input': TokenType.INPUT,
    'print': TokenType.PRINT,
    'tonum': TokenType.TONUM,
    'tostr': TokenType.TOSTR,
    'rnd': TokenType.RND,
    'if': TokenType.IF,
    'then': TokenType.THEN,
    'else': TokenType.ELSE,
    'end': TokenType.END,
    'while': TokenType.WHILE,
    'do': TokenType.DO,
    'break': TokenType.BREAK,
    'continue': TokenType.CONTINUE,
    'not': TokenType.NOT,
    'and': TokenType.AND,
    'or': TokenType.OR,
}


@dataclass(frozen=True)
class Token:
    type: TokenType
    text: str  # original lexeme
    literal: Any  # float, str or bool for literal tokens, else None
    position: Position

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.text!r}, {self.literal!r}, at {self.position})"
