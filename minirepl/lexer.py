"""Lexical analysis for the minirepl language.

The lexer makes a single forward pass over the source text with two
cursors: `start` marks the first character of the token being scanned
and `current` the next character to read. It never backtracks. Problems
such as an unexpected character are reported to the error sink and the
scan simply continues, so a caller always receives a token list ending
with exactly one EOF token.
"""

from __future__ import annotations

from typing import Any, List, Optional

from .errors import ErrorLog
from .tokens import KEYWORDS, Token, TokenKind
from .types import MAX_DIGITS


SINGLE_CHAR_TOKENS = {
    '(': TokenKind.LEFT_PAREN,
    ')': TokenKind.RIGHT_PAREN,
    ',': TokenKind.COMMA,
    ':': TokenKind.COLON,
    ';': TokenKind.SEMICOLON,
    '+': TokenKind.PLUS,
    '-': TokenKind.MINUS,
    '^': TokenKind.CARET,
    '?': TokenKind.QUESTION_MARK,
}

# first character -> (second character, kind if both match, kind if only the first)
TWO_CHAR_TOKENS = {
    '=': ('=', TokenKind.EQUAL_EQUAL, TokenKind.EQUAL),
    '!': ('=', TokenKind.NOT_EQUAL, TokenKind.BANG),
    '<': ('=', TokenKind.LESS_EQUAL, TokenKind.LESS),
    '>': ('=', TokenKind.GREATER_EQUAL, TokenKind.GREATER),
    '.': ('.', TokenKind.DOUBLE_DOT, TokenKind.DOT),
    '*': ('*', TokenKind.CARET, TokenKind.ASTERISK),  # "**" is another spelling of "^"
}


def is_digit(c: str) -> bool:
    return '0' <= c <= '9' or c == '_'


def is_alpha(c: str) -> bool:
    return 'a' <= c <= 'z' or 'A' <= c <= 'Z' or c == '_'


def is_alphanumeric(c: str) -> bool:
    return is_alpha(c) or is_digit(c)


class Lexer:
    def __init__(self, source: str, reporter: Optional[ErrorLog] = None):
        self.source = source
        self.reporter = reporter if reporter is not None else ErrorLog()
        self.tokens: List[Token] = []
        self.start = 0
        self.current = 0
        self.line = 1
        self.had_error = False

    def tokenize(self) -> List[Token]:
        while not self.is_at_end():
            self.start = self.current
            self.scan_token()
        self.tokens.append(Token(TokenKind.EOF, '', None, self.line))
        return self.tokens

    def scan_token(self):
        c = self.advance()
        if c in SINGLE_CHAR_TOKENS:
            self.add_token(SINGLE_CHAR_TOKENS[c])
            return
        if c in TWO_CHAR_TOKENS:
            second, both, single = TWO_CHAR_TOKENS[c]
            self.add_token(both if self.match(second) else single)
            return
        if c == '/':
            if self.match('/'):
                self.skip_comment()
            else:
                self.add_token(TokenKind.SLASH)
            return
        if c == '"':
            self.read_string()
            return
        if c in ' \t\r':
            return
        if c == '\n':
            self.line += 1
            return
        # digit-class is checked first, so a leading underscore starts a number
        if is_digit(c):
            self.read_number()
        elif is_alpha(c):
            self.read_identifier()
        else:
            self.error(f"at '{c}'", 'Unexpected character.')

    def add_token(self, kind: TokenKind, literal: Any = None, line: Optional[int] = None):
        lexeme = self.source[self.start:self.current]
        self.tokens.append(Token(kind, lexeme, literal, self.line if line is None else line))

    def advance(self) -> str:
        c = self.source[self.current]
        self.current += 1
        return c

    def peek(self) -> str:
        if self.is_at_end():
            return '\0'
        return self.source[self.current]

    def match(self, expected: str) -> bool:
        if self.is_at_end() or self.source[self.current] != expected:
            return False
        self.current += 1
        return True

    def is_at_end(self) -> bool:
        return self.current >= len(self.source)

    def error(self, where: str, message: str, line: Optional[int] = None):
        self.had_error = True
        self.reporter.error(self.line if line is None else line, where, message)

    def skip_comment(self):
        # the newline itself is left for scan_token so the line count stays right
        while not self.is_at_end() and self.peek() != '\n':
            self.current += 1

    def read_number(self):
        while is_digit(self.peek()):
            self.current += 1
        text = self.source[self.start:self.current]
        digits = text.replace('_', '')
        if not digits or len(digits) > MAX_DIGITS:
            self.error(f"at '{text}'", 'Invalid number literal.')
            return
        self.add_token(TokenKind.NUMBER, int(digits))

    def read_identifier(self):
        while is_alphanumeric(self.peek()):
            self.current += 1
        word = self.source[self.start:self.current]
        kind = KEYWORDS.get(word)
        if kind is None:
            self.add_token(TokenKind.IDENTIFIER, word)
        else:
            self.add_token(kind)

    def read_string(self):
        start_line = self.line
        while not self.is_at_end() and self.peek() != '"':
            if self.peek() == '\n':
                self.line += 1
            self.current += 1
        if self.is_at_end():
            self.error('at end', 'Unterminated string.', line=start_line)
            return
        self.current += 1  # closing quote
        value = self.source[self.start + 1:self.current - 1]
        self.add_token(TokenKind.STRING, value, line=start_line)


def tokenize(source: str, reporter: Optional[ErrorLog] = None) -> List[Token]:
    """Convert source text into a list of tokens terminated by EOF.

    Lexical errors go to `reporter`; they never interrupt the scan.
    """
    return Lexer(source, reporter).tokenize()
