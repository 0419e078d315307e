"""Interactive session for the minirepl language.

A `Session` owns one `Interpreter`, and with it one environment, for its
whole lifetime: a variable declared on one prompt line is visible on
the next. Each input goes through the lexer and parser; if either
reported an error the input is not executed unless `keep_going` is set,
in which case the statements that did parse are run.
"""

from __future__ import annotations

import builtins
import sys
from typing import Any, Callable, Optional

from .errors import ErrorLog, RuntimeFault
from .interpreter import Interpreter
from .lexer import Lexer
from .parser import Parser

PROMPT = '[repl] '


class ConsoleReporter(ErrorLog):
    """Error sink that records reports and also prints them."""
    def __init__(self, stream=None):
        super().__init__()
        self.stream = stream

    def _write(self, text: str):
        print(text, file=self.stream if self.stream is not None else sys.stdout)

    def error(self, line: int, where: str, message: str):
        super().error(line, where, message)
        if where:
            self._write(f"line {line}: error {where}: {message}")
        else:
            self._write(f"line {line}: error: {message}")

    def runtime_error(self, line: int, message: str):
        super().runtime_error(line, message)
        if line:
            self._write(f"line {line}: {message}")
        else:
            self._write(message)


class Session:
    def __init__(self, reporter: Optional[ErrorLog] = None,
                 output: Optional[Callable[[str], Any]] = None,
                 keep_going: bool = False, debug_level: int = 0,
                 debug_file: str = 'debug.txt'):
        self.reporter = reporter if reporter is not None else ConsoleReporter()
        self.keep_going = keep_going
        self.interpreter = Interpreter(output=output, reporter=self.reporter,
                                       debug_level=debug_level, debug_file=debug_file)

    @property
    def environment(self):
        return self.interpreter.environment

    def run(self, source: str) -> Optional[RuntimeFault]:
        """Run one chunk of input against the session environment.

        Returns the runtime fault that stopped execution, if any. Static
        errors are left in the reporter and, unless `keep_going` is set,
        nothing is executed.
        """
        self.reporter.reset()
        lexer = Lexer(source, self.reporter)
        tokens = lexer.tokenize()
        parser = Parser(tokens, self.reporter)
        statements = parser.parse()
        if self.interpreter.debug_level >= 4:
            for token in tokens:
                self.interpreter.debug(f"token {token}")
            for stmt in statements:
                self.interpreter.debug(f"ast {stmt}")
        # only the EOF token: blank line or comment
        if len(tokens) == 1:
            return None
        if (lexer.had_error or parser.had_error) and not self.keep_going:
            return None
        return self.interpreter.interpret(statements)

    def run_prompt(self, read_line: Optional[Callable[[str], str]] = None):
        """Read lines until end of input, running each one."""
        read_line = read_line if read_line is not None else builtins.input
        while True:
            try:
                line = read_line(PROMPT)
            except EOFError:
                break
            self.run(line + '\n')

    def close(self):
        self.interpreter.close()
