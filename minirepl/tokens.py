"""Token definitions for the minirepl language.

A token is the smallest classified unit of source text. Tokens are
produced by the lexer and consumed, read-only, by the parser.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Dict


class TokenKind(Enum):
    LEFT_PAREN = auto()
    RIGHT_PAREN = auto()
    COMMA = auto()
    DOT = auto()
    DOUBLE_DOT = auto()
    COLON = auto()
    SEMICOLON = auto()

    # arithmetic
    PLUS = auto()
    MINUS = auto()
    ASTERISK = auto()
    SLASH = auto()
    CARET = auto()

    BANG = auto()
    QUESTION_MARK = auto()

    # assignment and comparison
    EQUAL = auto()
    EQUAL_EQUAL = auto()
    NOT_EQUAL = auto()
    GREATER = auto()
    GREATER_EQUAL = auto()
    LESS = auto()
    LESS_EQUAL = auto()

    # keywords
    LET = auto()
    IF = auto()
    THEN = auto()
    ELSE = auto()
    TRUE = auto()
    FALSE = auto()
    AND = auto()
    OR = auto()
    FOR = auto()
    IN = auto()
    BEGIN = auto()
    END = auto()
    WHILE = auto()
    PRINT = auto()

    # literals
    IDENTIFIER = auto()
    STRING = auto()
    NUMBER = auto()

    EOF = auto()


KEYWORDS: Dict[str, TokenKind] = {
    'let': TokenKind.LET,
    'if': TokenKind.IF,
    'then': TokenKind.THEN,
    'else': TokenKind.ELSE,
    'true': TokenKind.TRUE,
    'false': TokenKind.FALSE,
    'and': TokenKind.AND,
    'or': TokenKind.OR,
    'for': TokenKind.FOR,
    'in': TokenKind.IN,
    'begin': TokenKind.BEGIN,
    'end': TokenKind.END,
    'while': TokenKind.WHILE,
    'print': TokenKind.PRINT,
}


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    lexeme: str
    literal: Any
    line: int

    def __str__(self) -> str:
        literal = '' if self.literal is None else repr(self.literal)
        return f"{self.kind.name:<15} {self.lexeme!r:<15} {literal:<15} line: {self.line}"
