from typing import List, Optional, Tuple

from minirepl.tokens import Token, TokenKind


class ParseError(Exception):
    """Syntax error raised while parsing a statement."""
    def __init__(self, line: int, where: str, message: str):
        super().__init__(f"line {line}: error {where}: {message}")
        self.line = line
        self.where = where
        self.message = message


class RuntimeFault(Exception):
    """Exception type used to abort evaluation of the current run."""
    def __init__(self, token: Optional[Token], message: str):
        super().__init__(message)
        self.token = token
        self.message = message

    @property
    def line(self) -> int:
        return self.token.line if self.token is not None else 0


def where_of(token: Token) -> str:
    """Location hint used in lexical and syntax error reports."""
    if token.kind == TokenKind.EOF:
        return 'at end'
    return f"at '{token.lexeme}'"


class ErrorLog:
    """Error sink that records every report it receives.

    Lexer and parser call `error(line, where, message)`; the interpreter
    calls `runtime_error(line, message)`. Nothing is formatted or printed
    here; see `minirepl.repl.ConsoleReporter` for that.
    """
    def __init__(self):
        self.errors: List[Tuple[int, str, str]] = []
        self.runtime_errors: List[Tuple[int, str]] = []

    @property
    def had_error(self) -> bool:
        return bool(self.errors)

    @property
    def had_runtime_error(self) -> bool:
        return bool(self.runtime_errors)

    @property
    def messages(self) -> List[str]:
        return [e[2] for e in self.errors] + [e[1] for e in self.runtime_errors]

    def error(self, line: int, where: str, message: str):
        self.errors.append((line, where, message))

    def runtime_error(self, line: int, message: str):
        self.runtime_errors.append((line, message))

    def reset(self):
        self.errors.clear()
        self.runtime_errors.clear()
