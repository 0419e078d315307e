"""Tree-walking interpreter for the minirepl language.

`Interpreter.execute` runs one statement and `Interpreter.evaluate`
computes the value of one expression; each is a single chain of
`isinstance` checks with one arm per node type. The session environment
is passed explicitly to both, so one interpreter can be pointed at a
different store when embedding it.

A runtime fault raised anywhere below `interpret` unwinds to it, is
reported to the error sink, and ends the current run. Variables defined
before the fault stay in the environment.
"""

from __future__ import annotations

import math
from typing import Any, Callable, List, Optional

from .ast import (
    Assign, Binary, Expr, ExprStmt, ForStmt, Grouping, IfStmt, Literal,
    Logical, PrintStmt, Stmt, Unary, VarDecl, Variable, WhileStmt,
)
from .environment import Environment
from .errors import ErrorLog, RuntimeFault
from .lexer import tokenize
from .parser import Parser
from .tokens import Token, TokenKind
from .types import NIL, in_range, is_number, is_truthy, to_string, type_name, values_equal


class Interpreter:
    """Executes statements against a single session environment."""
    def __init__(self, output: Optional[Callable[[str], Any]] = None,
                 reporter: Optional[ErrorLog] = None,
                 environment: Optional[Environment] = None,
                 debug_level: int = 0, debug_file: str = 'debug.txt'):
        self.output = output if output is not None else print
        self.reporter = reporter if reporter is not None else ErrorLog()
        self.environment = environment if environment is not None else Environment()
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w', encoding='utf-8') if debug_level > 0 else None

    def debug(self, msg: str):
        if self.debug_level > 0 and self.debug_fp:
            self.debug_fp.write(msg + '\n')
            self.debug_fp.flush()

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    # Public API
    def interpret(self, statements: List[Stmt]) -> Optional[RuntimeFault]:
        """Run statements in order; stop at and return the first fault."""
        try:
            for stmt in statements:
                if self.debug_level >= 1:
                    self.debug(f"exec {type(stmt).__name__}")
                self.run_statement(stmt)
        except RuntimeFault as fault:
            self.debug(f"runtime fault at line {fault.line}: {fault.message}")
            self.reporter.runtime_error(fault.line, fault.message)
            return fault
        return None

    def run_statement(self, stmt: Stmt):
        # very long operator chains build trees deeper than the Python stack
        try:
            self.execute(stmt, self.environment)
        except RecursionError:
            raise RuntimeFault(token_of(stmt), 'Expression nests too deeply.') from None

    def execute_block(self, statements: List[Stmt], env: Environment):
        for stmt in statements:
            self.execute(stmt, env)

    def execute(self, node: Stmt, env: Environment):
        if isinstance(node, ExprStmt):
            self.evaluate(node.expression, env)
            return
        if isinstance(node, PrintStmt):
            value = self.evaluate(node.expression, env)
            self.output(to_string(value))
            return
        if isinstance(node, VarDecl):
            value = self.evaluate(node.initializer, env) if node.initializer is not None else NIL
            env.define(node.name.lexeme, value)
            if self.debug_level >= 2:
                self.debug(f"declare {node.name.lexeme}: {type_name(value)} = {to_string(value)}")
            return
        if isinstance(node, IfStmt):
            cond = self.evaluate(node.condition, env)
            truthy = is_truthy(cond)
            if self.debug_level >= 3:
                self.debug(f"if condition {to_string(cond)} -> {truthy}")
            if truthy:
                self.execute(node.then_branch, env)
            elif node.else_branch is not None:
                self.execute(node.else_branch, env)
            return
        if isinstance(node, WhileStmt):
            while True:
                cond = self.evaluate(node.condition, env)
                if self.debug_level >= 3:
                    self.debug(f"while condition {to_string(cond)}")
                if not is_truthy(cond):
                    break
                self.execute_block(node.body, env)
            return
        if isinstance(node, ForStmt):
            start = self.evaluate(node.start, env)
            end = self.evaluate(node.end, env)
            if not is_number(start) or not is_number(end):
                raise RuntimeFault(node.keyword, 'Range must be specified by numbers.')
            if self.debug_level >= 3:
                self.debug(f"for range {start}..{end}")
            # bounds are fixed here; the loop name is not bound in the body
            for _ in range(start, end):
                self.execute_block(node.body, env)
            return
        raise TypeError(f"unknown statement node {type(node).__name__}")

    def evaluate(self, node: Expr, env: Environment) -> Any:
        if isinstance(node, Literal):
            return node.value
        if isinstance(node, Grouping):
            return self.evaluate(node.expression, env)
        if isinstance(node, Variable):
            return env.get(node.name)
        if isinstance(node, Assign):
            value = self.evaluate(node.value, env)
            env.assign(node.name, value)
            if self.debug_level >= 2:
                self.debug(f"assign {node.name.lexeme} = {to_string(value)}")
            return value
        if isinstance(node, Logical):
            left = self.evaluate(node.left, env)
            if node.operator.kind == TokenKind.OR:
                if is_truthy(left):
                    return left
            elif not is_truthy(left):
                return left
            return self.evaluate(node.right, env)
        if isinstance(node, Unary):
            right = self.evaluate(node.right, env)
            if node.operator.kind == TokenKind.BANG:
                return not is_truthy(right)
            if node.operator.kind == TokenKind.MINUS:
                self.check_number_operand(node.operator, right)
                return -right
            raise RuntimeFault(node.operator, f"Unsupported unary operator '{node.operator.lexeme}'.")
        if isinstance(node, Binary):
            left = self.evaluate(node.left, env)
            right = self.evaluate(node.right, env)
            return self.apply_binary_op(node.operator, left, right)
        raise TypeError(f"unknown expression node {type(node).__name__}")

    def check_number_operand(self, operator: Token, operand: Any):
        if is_number(operand):
            return
        raise RuntimeFault(operator, 'Operand must be a number.')

    def check_number_operands(self, operator: Token, left: Any, right: Any):
        if is_number(left) and is_number(right):
            return
        raise RuntimeFault(operator, 'Operands must be numbers.')

    def check_range(self, operator: Token, value: int) -> int:
        if in_range(value):
            return value
        raise RuntimeFault(operator, 'Number is too large.')

    def apply_binary_op(self, operator: Token, a: Any, b: Any) -> Any:
        kind = operator.kind
        if kind == TokenKind.COMMA:
            return b
        if kind == TokenKind.EQUAL_EQUAL:
            return values_equal(a, b)
        if kind == TokenKind.NOT_EQUAL:
            return not values_equal(a, b)
        if kind == TokenKind.PLUS:
            # "+" concatenates only when both sides are strings
            if isinstance(a, str) and isinstance(b, str):
                return a + b
            self.check_number_operands(operator, a, b)
            return self.check_range(operator, a + b)
        self.check_number_operands(operator, a, b)
        if kind == TokenKind.MINUS:
            return self.check_range(operator, a - b)
        if kind == TokenKind.ASTERISK:
            return self.check_range(operator, a * b)
        if kind == TokenKind.SLASH:
            if b == 0:
                raise RuntimeFault(operator, 'Division by zero is undefined.')
            return truncating_divide(a, b)
        if kind == TokenKind.CARET:
            return self.power(operator, a, b)
        if kind == TokenKind.GREATER:
            return a > b
        if kind == TokenKind.GREATER_EQUAL:
            return a >= b
        if kind == TokenKind.LESS:
            return a < b
        if kind == TokenKind.LESS_EQUAL:
            return a <= b
        raise RuntimeFault(operator, f"Unsupported binary operator '{operator.lexeme}'.")

    def power(self, operator: Token, a: int, b: int) -> int:
        # computed in floating point and truncated toward zero
        try:
            result = math.pow(float(a), float(b))
        except (OverflowError, ValueError, ZeroDivisionError):
            raise RuntimeFault(operator, 'Exponent result is out of range.')
        if not math.isfinite(result):
            raise RuntimeFault(operator, 'Exponent result is out of range.')
        return int(result)


def truncating_divide(a: int, b: int) -> int:
    """Integer division rounding toward zero (Python's // floors)."""
    quotient = abs(a) // abs(b)
    return -quotient if (a < 0) != (b < 0) else quotient


def token_of(node: Any) -> Optional[Token]:
    """Find a token inside `node` to attach a fault to, without recursing."""
    while node is not None:
        for field in ('operator', 'name', 'keyword'):
            token = getattr(node, field, None)
            if token is not None:
                return token
        node = (getattr(node, 'expression', None)
                or getattr(node, 'condition', None)
                or getattr(node, 'initializer', None))
    return None


def run_source(source: str, interpreter: Optional[Interpreter] = None,
               reporter: Optional[ErrorLog] = None) -> Optional[RuntimeFault]:
    """Convenience function to tokenize, parse and run a source string.

    Statements that parsed are executed even if other statements had
    syntax errors. Every diagnostic of the call goes to one sink: the
    interpreter's own. `reporter` only configures a new interpreter, so
    it may not be combined with a different interpreter's sink.
    """
    if interpreter is None:
        interpreter = Interpreter(reporter=reporter)
    elif reporter is not None and reporter is not interpreter.reporter:
        raise ValueError('run_source: pass the reporter to the Interpreter instead')
    reporter = interpreter.reporter
    tokens = tokenize(source, reporter)
    statements = Parser(tokens, reporter).parse()
    return interpreter.interpret(statements)
