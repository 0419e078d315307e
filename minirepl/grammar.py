"""Strict, grammar-driven front end for the minirepl language.

The language is described here once more as a Lark LALR grammar. The
parse tree is turned into exactly the same AST that the hand-written
`minirepl.parser.Parser` produces, with the same tokens and line
numbers, so either front end can feed the interpreter.

Unlike the recursive-descent parser this front end has no error
recovery: the first syntax error is raised as a `ParseError`. It is
used by the CLI's `--strict` mode, where a script is rejected as a
whole if any part of it is malformed.
"""

from __future__ import annotations

from typing import List

from lark import Lark, Transformer, Token as LarkToken
from lark.exceptions import UnexpectedCharacters, UnexpectedEOF, UnexpectedInput, UnexpectedToken, VisitError

from .ast import (
    Assign, Binary, ExprStmt, ForStmt, Grouping, IfStmt, Literal, Logical,
    PrintStmt, Stmt, Unary, VarDecl, Variable, WhileStmt,
)
from .errors import ParseError
from .tokens import Token, TokenKind
from .types import MAX_DIGITS


MINIREPL_GRAMMAR = r"""
    start: declaration*

    ?declaration: var_decl
                | statement

    var_decl: "let" IDENTIFIER ("=" expression)? ";"

    ?statement: if_stmt
              | print_stmt
              | for_stmt
              | while_stmt
              | expr_stmt

    if_stmt: "if" expression "then" statement ("else" statement)?
    print_stmt: "print" expression ";"
    for_stmt: FOR IDENTIFIER "in" addsub ".." addsub "begin" block "end"
    while_stmt: "while" expression "begin" block "end"
    block: declaration*
    expr_stmt: expression ";"

    // Expressions, lowest binding first
    ?expression: comma
    ?comma: assignment (COMMA assignment)*
    ?assignment: logic_or (EQUAL assignment)?
    ?logic_or: logic_and (OR logic_and)*
    ?logic_and: equality (AND equality)*
    ?equality: comparison ((EQUAL_EQUAL | NOT_EQUAL) comparison)*
    ?comparison: addsub ((GREATER | GREATER_EQUAL | LESS | LESS_EQUAL) addsub)*
    ?addsub: muldiv ((PLUS | MINUS) muldiv)*
    ?muldiv: unary ((ASTERISK | SLASH) unary)*
    ?unary: (BANG | MINUS) unary
          | exponent
    ?exponent: primary ((CARET | POWER) unary)?
    ?primary: "true"                -> true_lit
            | "false"               -> false_lit
            | NUMBER                -> number
            | STRING                -> string
            | IDENTIFIER            -> variable
            | "(" expression ")"    -> grouping

    FOR: "for"
    OR: "or"
    AND: "and"
    COMMA: ","
    EQUAL: "="
    EQUAL_EQUAL: "=="
    NOT_EQUAL: "!="
    GREATER: ">"
    GREATER_EQUAL: ">="
    LESS: "<"
    LESS_EQUAL: "<="
    PLUS: "+"
    MINUS: "-"
    ASTERISK: "*"
    SLASH: "/"
    CARET: "^"
    POWER: "**"
    BANG: "!"

    // A leading underscore always starts a number, never a name
    IDENTIFIER: /[A-Za-z][A-Za-z0-9_]*/
    NUMBER: /[0-9_]+/
    STRING: /"[^"]*"/

    COMMENT: /\/\/[^\n]*/
    WS: /[ \t\r\n]+/
    %ignore COMMENT
    %ignore WS
"""


MINIREPL_PARSER = Lark(
    MINIREPL_GRAMMAR,
    parser='lalr',
    lexer='basic',
    propagate_positions=True,
    maybe_placeholders=False,
)


def to_token(tok: LarkToken) -> Token:
    """Convert a Lark token into the token the hand-written lexer would emit."""
    if tok.type == 'POWER':
        return Token(TokenKind.CARET, str(tok), None, tok.line)
    kind = TokenKind[tok.type]
    literal = None
    if kind == TokenKind.IDENTIFIER:
        literal = str(tok)
    elif kind == TokenKind.NUMBER:
        literal = number_value(tok)
    elif kind == TokenKind.STRING:
        literal = str(tok)[1:-1]
    return Token(kind, str(tok), literal, tok.line)


def number_value(tok: LarkToken) -> int:
    digits = str(tok).replace('_', '')
    if not digits or len(digits) > MAX_DIGITS:
        raise ParseError(tok.line, f"at '{tok}'", 'Invalid number literal.')
    return int(digits)


class ASTBuilder(Transformer):
    """Transforms the raw parse tree into an AST."""

    def start(self, items):
        return list(items)

    def var_decl(self, items):
        name = to_token(items[0])
        initializer = items[1] if len(items) > 1 else None
        return VarDecl(name, initializer)

    def if_stmt(self, items):
        condition = items[0]
        then_branch = items[1]
        else_branch = items[2] if len(items) > 2 else None
        return IfStmt(condition, then_branch, else_branch)

    def print_stmt(self, items):
        return PrintStmt(items[0])

    def for_stmt(self, items):
        # items: FOR, loop name, start, end, block; the loop name is unused
        keyword = to_token(items[0])
        return ForStmt(keyword, items[2], items[3], items[4])

    def while_stmt(self, items):
        return WhileStmt(items[0], items[1])

    def block(self, items):
        return list(items)

    def expr_stmt(self, items):
        return ExprStmt(items[0])

    # Expressions
    def binary_chain(self, items, node_type=Binary):
        # items pattern: expr (op expr)*, folded left-associatively
        left = items[0]
        i = 1
        while i < len(items):
            op = to_token(items[i])
            right = items[i + 1]
            left = node_type(left, op, right)
            i += 2
        return left

    def comma(self, items):
        return self.binary_chain(items)

    def assignment(self, items):
        target, equals, value = items
        if not isinstance(target, Variable):
            raise ParseError(equals.line, f"at '{equals}'", 'Invalid assignment.')
        return Assign(target.name, value)

    def logic_or(self, items):
        return self.binary_chain(items, Logical)

    def logic_and(self, items):
        return self.binary_chain(items, Logical)

    def equality(self, items):
        return self.binary_chain(items)

    def comparison(self, items):
        return self.binary_chain(items)

    def addsub(self, items):
        return self.binary_chain(items)

    def muldiv(self, items):
        return self.binary_chain(items)

    def exponent(self, items):
        return self.binary_chain(items)

    def unary(self, items):
        return Unary(to_token(items[0]), items[1])

    def true_lit(self, items):
        return Literal(True)

    def false_lit(self, items):
        return Literal(False)

    def number(self, items):
        return Literal(number_value(items[0]))

    def string(self, items):
        return Literal(str(items[0])[1:-1])

    def variable(self, items):
        return Variable(to_token(items[0]))

    def grouping(self, items):
        return Grouping(items[0])


def describe(error: UnexpectedInput, source: str) -> ParseError:
    """Turn a Lark exception into a ParseError with line and location."""
    last_line = source.count('\n') + 1
    if isinstance(error, UnexpectedEOF):
        return ParseError(last_line, 'at end', 'Unexpected end of input.')
    if isinstance(error, UnexpectedToken):
        if error.token.type == '$END':
            return ParseError(last_line, 'at end', 'Unexpected end of input.')
        return ParseError(error.line, f"at '{error.token}'", 'Unexpected token.')
    if isinstance(error, UnexpectedCharacters):
        return ParseError(error.line, f"at '{error.char}'", 'Unexpected character.')
    return ParseError(error.line, '', str(error))


def parse_strict(source: str) -> List[Stmt]:
    """Parse source text with the grammar; raise ParseError on the first error."""
    try:
        tree = MINIREPL_PARSER.parse(source)
    except UnexpectedInput as e:
        raise describe(e, source) from e
    try:
        return ASTBuilder().transform(tree)
    except VisitError as e:
        if isinstance(e.orig_exc, ParseError):
            raise e.orig_exc from None
        raise
