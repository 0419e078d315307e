"""Abstract Syntax Tree (AST) definitions for the minirepl language.

There are two closed node families. Expressions evaluate to a runtime
value; statements are executed for their effect. Every node owns its
children exclusively, so a parsed program is always a tree.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional

from .tokens import Token


@dataclass
class Node:
    """Base class for all AST nodes."""
    pass


@dataclass
class Expr(Node):
    pass


@dataclass
class Stmt(Node):
    pass


# Expressions

@dataclass
class Literal(Expr):
    value: Any  # int, bool, str or NIL


@dataclass
class Binary(Expr):
    left: Expr
    operator: Token  # a COMMA operator sequences its operands
    right: Expr


@dataclass
class Unary(Expr):
    operator: Token
    right: Expr


@dataclass
class Logical(Expr):
    left: Expr
    operator: Token  # AND or OR
    right: Expr


@dataclass
class Grouping(Expr):
    expression: Expr


@dataclass
class Variable(Expr):
    name: Token


@dataclass
class Assign(Expr):
    name: Token
    value: Expr


# Statements

@dataclass
class ExprStmt(Stmt):
    expression: Expr


@dataclass
class PrintStmt(Stmt):
    expression: Expr


@dataclass
class VarDecl(Stmt):
    name: Token
    initializer: Optional[Expr]


@dataclass
class IfStmt(Stmt):
    condition: Expr
    then_branch: Stmt
    else_branch: Optional[Stmt]


@dataclass
class ForStmt(Stmt):
    keyword: Token
    start: Expr
    end: Expr
    body: List[Stmt]


@dataclass
class WhileStmt(Stmt):
    condition: Expr
    body: List[Stmt]
