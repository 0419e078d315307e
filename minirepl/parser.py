"""Recursive-descent parser for the minirepl language.

Each grammar rule is one method. Operator precedence comes from the
order in which the expression methods call each other, lowest binding
first:

    comma -> assignment -> logic_or -> logic_and -> equality
          -> comparison -> addsub -> muldiv -> unary -> exponent -> primary

Syntax errors inside a declaration are reported to the error sink, the
parser skips ahead to the next statement boundary, and parsing resumes.
A malformed statement is therefore dropped without losing the ones that
follow it.
"""

from __future__ import annotations

from typing import List, Optional

from .ast import (
    Assign, Binary, Expr, ExprStmt, ForStmt, Grouping, IfStmt, Literal,
    Logical, PrintStmt, Stmt, Unary, VarDecl, Variable, WhileStmt,
)
from .errors import ErrorLog, ParseError, where_of
from .tokens import Token, TokenKind


# tokens that start a statement; used to find a place to resume after an error
STATEMENT_KEYWORDS = {
    TokenKind.LET,
    TokenKind.PRINT,
    TokenKind.IF,
    TokenKind.FOR,
    TokenKind.WHILE,
}

# parse methods nested deeper than this would exhaust the Python stack
MAX_NESTING = 50
EXPRESSION_TOO_DEEP = 'Expression nests too deeply.'
STATEMENT_TOO_DEEP = 'Statement nests too deeply.'


class Parser:
    def __init__(self, tokens: List[Token], reporter: Optional[ErrorLog] = None):
        self.tokens = list(tokens)
        if not self.tokens or self.tokens[-1].kind != TokenKind.EOF:
            line = self.tokens[-1].line if self.tokens else 1
            self.tokens.append(Token(TokenKind.EOF, '', None, line))
        self.reporter = reporter if reporter is not None else ErrorLog()
        self.pos = 0
        self.depth = 0
        self.had_error = False

    # Token helpers

    def peek(self) -> Token:
        return self.tokens[self.pos]

    def previous(self) -> Token:
        return self.tokens[self.pos - 1]

    def is_at_end(self) -> bool:
        return self.peek().kind == TokenKind.EOF

    def advance(self) -> Token:
        if not self.is_at_end():
            self.pos += 1
        return self.previous()

    def check(self, kind: TokenKind) -> bool:
        if self.is_at_end():
            return False
        return self.peek().kind == kind

    def match(self, *kinds: TokenKind) -> bool:
        for kind in kinds:
            if self.check(kind):
                self.advance()
                return True
        return False

    def consume(self, kind: TokenKind, message: str) -> Token:
        if self.check(kind):
            return self.advance()
        raise self.error(self.peek(), message)

    def error(self, token: Token, message: str) -> ParseError:
        """Report a syntax error and return it for the caller to raise."""
        self.had_error = True
        where = where_of(token)
        self.reporter.error(token.line, where, message)
        return ParseError(token.line, where, message)

    def nested(self, rule, message: str = EXPRESSION_TOO_DEEP):
        """Call the parse method `rule` one nesting level deeper."""
        if self.depth >= MAX_NESTING:
            raise self.error(self.peek(), message)
        self.depth += 1
        try:
            return rule()
        finally:
            self.depth -= 1

    def synchronize(self):
        self.advance()
        while not self.is_at_end():
            if self.previous().kind == TokenKind.SEMICOLON:
                return
            if self.peek().kind in STATEMENT_KEYWORDS:
                return
            self.advance()

    # Statements

    def parse(self) -> List[Stmt]:
        statements: List[Stmt] = []
        while not self.is_at_end():
            stmt = self.parse_declaration()
            if stmt is not None:
                statements.append(stmt)
        return statements

    def parse_declaration(self) -> Optional[Stmt]:
        try:
            if self.match(TokenKind.LET):
                return self.parse_var_decl()
            return self.parse_statement()
        except ParseError:
            self.synchronize()
            return None

    def parse_statement(self) -> Stmt:
        if self.match(TokenKind.IF):
            return self.parse_if_stmt()
        if self.match(TokenKind.PRINT):
            return self.parse_print_stmt()
        if self.match(TokenKind.FOR):
            return self.parse_for_stmt()
        if self.match(TokenKind.WHILE):
            return self.parse_while_stmt()
        return self.parse_expr_stmt()

    def parse_var_decl(self) -> VarDecl:
        name = self.consume(TokenKind.IDENTIFIER, 'Expected variable name.')
        initializer: Optional[Expr] = None
        if self.match(TokenKind.EQUAL):
            initializer = self.parse_expression()
        self.consume(TokenKind.SEMICOLON, "Expected ';' after declaration.")
        return VarDecl(name, initializer)

    def parse_print_stmt(self) -> PrintStmt:
        value = self.parse_expression()
        self.consume(TokenKind.SEMICOLON, "Expected ';' after expression.")
        return PrintStmt(value)

    def parse_expr_stmt(self) -> ExprStmt:
        expr = self.parse_expression()
        self.consume(TokenKind.SEMICOLON, "Expected ';' after expression.")
        return ExprStmt(expr)

    def parse_if_stmt(self) -> IfStmt:
        condition = self.parse_expression()
        self.consume(TokenKind.THEN, "Expected 'then' after condition.")
        then_branch = self.nested(self.parse_statement, STATEMENT_TOO_DEEP)
        else_branch: Optional[Stmt] = None
        if self.match(TokenKind.ELSE):
            else_branch = self.nested(self.parse_statement, STATEMENT_TOO_DEEP)
        return IfStmt(condition, then_branch, else_branch)

    def parse_for_stmt(self) -> ForStmt:
        keyword = self.previous()
        # the loop name is required by the syntax but never bound
        self.consume(TokenKind.IDENTIFIER, "Expected loop variable name after 'for'.")
        self.consume(TokenKind.IN, "Expected 'in' after loop variable.")
        start = self.parse_addsub()
        self.consume(TokenKind.DOUBLE_DOT, "Expected '..' after range start.")
        end = self.parse_addsub()
        self.consume(TokenKind.BEGIN, "Expected 'begin' after range.")
        body = self.parse_block()
        return ForStmt(keyword, start, end, body)

    def parse_while_stmt(self) -> WhileStmt:
        condition = self.parse_expression()
        self.consume(TokenKind.BEGIN, "Expected 'begin' after condition.")
        body = self.parse_block()
        return WhileStmt(condition, body)

    def parse_block(self) -> List[Stmt]:
        body: List[Stmt] = []
        while not self.check(TokenKind.END) and not self.is_at_end():
            stmt = self.nested(self.parse_declaration, STATEMENT_TOO_DEEP)
            if stmt is not None:
                body.append(stmt)
        self.consume(TokenKind.END, "Expected 'end' after block.")
        return body

    # Expressions

    def parse_expression(self) -> Expr:
        return self.parse_comma()

    def parse_comma(self) -> Expr:
        expr = self.parse_assignment()
        while self.match(TokenKind.COMMA):
            op_token = self.previous()
            right = self.parse_assignment()
            expr = Binary(expr, op_token, right)
        return expr

    def parse_assignment(self) -> Expr:
        # the target is parsed as an ordinary expression, then checked
        expr = self.parse_logic_or()
        if self.match(TokenKind.EQUAL):
            equals = self.previous()
            value = self.nested(self.parse_assignment)
            if isinstance(expr, Variable):
                return Assign(expr.name, value)
            self.error(equals, 'Invalid assignment.')
        return expr

    def parse_logic_or(self) -> Expr:
        expr = self.parse_logic_and()
        while self.match(TokenKind.OR):
            op_token = self.previous()
            right = self.parse_logic_and()
            expr = Logical(expr, op_token, right)
        return expr

    def parse_logic_and(self) -> Expr:
        expr = self.parse_equality()
        while self.match(TokenKind.AND):
            op_token = self.previous()
            right = self.parse_equality()
            expr = Logical(expr, op_token, right)
        return expr

    def parse_equality(self) -> Expr:
        expr = self.parse_comparison()
        while self.match(TokenKind.EQUAL_EQUAL, TokenKind.NOT_EQUAL):
            op_token = self.previous()
            right = self.parse_comparison()
            expr = Binary(expr, op_token, right)
        return expr

    def parse_comparison(self) -> Expr:
        expr = self.parse_addsub()
        while self.match(TokenKind.GREATER, TokenKind.GREATER_EQUAL,
                         TokenKind.LESS, TokenKind.LESS_EQUAL):
            op_token = self.previous()
            right = self.parse_addsub()
            expr = Binary(expr, op_token, right)
        return expr

    def parse_addsub(self) -> Expr:
        expr = self.parse_muldiv()
        while self.match(TokenKind.PLUS, TokenKind.MINUS):
            op_token = self.previous()
            right = self.parse_muldiv()
            expr = Binary(expr, op_token, right)
        return expr

    def parse_muldiv(self) -> Expr:
        expr = self.parse_unary()
        while self.match(TokenKind.ASTERISK, TokenKind.SLASH):
            op_token = self.previous()
            right = self.parse_unary()
            expr = Binary(expr, op_token, right)
        return expr

    def parse_unary(self) -> Expr:
        if self.match(TokenKind.BANG, TokenKind.MINUS):
            op_token = self.previous()
            right = self.nested(self.parse_unary)
            return Unary(op_token, right)
        return self.parse_exponent()

    def parse_exponent(self) -> Expr:
        expr = self.parse_primary()
        # the right operand goes back up to unary, which makes "^" right-associative
        while self.match(TokenKind.CARET):
            op_token = self.previous()
            right = self.nested(self.parse_unary)
            expr = Binary(expr, op_token, right)
        return expr

    def parse_primary(self) -> Expr:
        if self.match(TokenKind.TRUE):
            return Literal(True)
        if self.match(TokenKind.FALSE):
            return Literal(False)
        if self.match(TokenKind.NUMBER, TokenKind.STRING):
            return Literal(self.previous().literal)
        if self.match(TokenKind.IDENTIFIER):
            return Variable(self.previous())
        if self.match(TokenKind.LEFT_PAREN):
            expr = self.nested(self.parse_expression)
            self.consume(TokenKind.RIGHT_PAREN, "Expected ')' after expression.")
            return Grouping(expr)
        raise self.error(self.peek(), 'Expected expression.')


def parse(tokens: List[Token], reporter: Optional[ErrorLog] = None) -> List[Stmt]:
    """Parse a token list into statements.

    Statements that fail to parse are reported and left out; the rest are
    always returned so the caller can decide whether to run them.
    """
    return Parser(tokens, reporter).parse()
