"""JSON serialization/deserialization for the minirepl AST.

This module converts between AST dataclasses and plain Python dict/list
structures suitable for JSON encoding. Tokens keep their kind, lexeme,
literal and line so that runtime errors raised from a reloaded AST still
point at the right source line.
"""

from __future__ import annotations

from typing import Any, Dict, List

from .ast import (
    Assign,
    Binary,
    ExprStmt,
    ForStmt,
    Grouping,
    IfStmt,
    Literal,
    Logical,
    PrintStmt,
    Stmt,
    Unary,
    VarDecl,
    Variable,
    WhileStmt,
)
from .tokens import Token, TokenKind
from .types import NIL, Nil


def token_to_obj(t: Token) -> Dict[str, Any]:
    return {"kind": t.kind.name, "lexeme": t.lexeme, "literal": t.literal, "line": t.line}


def token_from_obj(o: Dict[str, Any]) -> Token:
    return Token(TokenKind[o["kind"]], o["lexeme"], o.get("literal"), int(o["line"]))


def value_to_obj(value: Any) -> Any:
    if isinstance(value, Nil):
        return {"__type__": "Nil"}
    return value


def value_from_obj(o: Any) -> Any:
    if isinstance(o, dict) and o.get("__type__") == "Nil":
        return NIL
    return o


def program_to_obj(statements: List[Stmt]) -> Dict[str, Any]:
    return {"type": "Program", "body": [ast_to_obj(s) for s in statements]}


def program_from_obj(obj: Dict[str, Any]) -> List[Stmt]:
    if not isinstance(obj, dict) or obj.get("type") != "Program":
        raise ValueError("Invalid AST document: expected a Program object")
    return [ast_from_obj(s) for s in obj["body"]]


def ast_to_obj(node: Any) -> Any:
    if node is None:
        return None

    # Statements
    if isinstance(node, ExprStmt):
        return {"type": "ExprStmt", "expression": ast_to_obj(node.expression)}
    if isinstance(node, PrintStmt):
        return {"type": "PrintStmt", "expression": ast_to_obj(node.expression)}
    if isinstance(node, VarDecl):
        return {
            "type": "VarDecl",
            "name": token_to_obj(node.name),
            "initializer": ast_to_obj(node.initializer),
        }
    if isinstance(node, IfStmt):
        return {
            "type": "IfStmt",
            "condition": ast_to_obj(node.condition),
            "then_branch": ast_to_obj(node.then_branch),
            "else_branch": ast_to_obj(node.else_branch),
        }
    if isinstance(node, ForStmt):
        return {
            "type": "ForStmt",
            "keyword": token_to_obj(node.keyword),
            "start": ast_to_obj(node.start),
            "end": ast_to_obj(node.end),
            "body": [ast_to_obj(s) for s in node.body],
        }
    if isinstance(node, WhileStmt):
        return {
            "type": "WhileStmt",
            "condition": ast_to_obj(node.condition),
            "body": [ast_to_obj(s) for s in node.body],
        }

    # Expressions
    if isinstance(node, Literal):
        return {"type": "Literal", "value": value_to_obj(node.value)}
    if isinstance(node, Binary):
        return {
            "type": "Binary",
            "left": ast_to_obj(node.left),
            "operator": token_to_obj(node.operator),
            "right": ast_to_obj(node.right),
        }
    if isinstance(node, Logical):
        return {
            "type": "Logical",
            "left": ast_to_obj(node.left),
            "operator": token_to_obj(node.operator),
            "right": ast_to_obj(node.right),
        }
    if isinstance(node, Unary):
        return {"type": "Unary", "operator": token_to_obj(node.operator), "right": ast_to_obj(node.right)}
    if isinstance(node, Grouping):
        return {"type": "Grouping", "expression": ast_to_obj(node.expression)}
    if isinstance(node, Variable):
        return {"type": "Variable", "name": token_to_obj(node.name)}
    if isinstance(node, Assign):
        return {"type": "Assign", "name": token_to_obj(node.name), "value": ast_to_obj(node.value)}

    raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")


def ast_from_obj(obj: Any) -> Any:
    if obj is None:
        return None
    if not isinstance(obj, dict):
        raise TypeError("Invalid AST object")
    t = obj.get("type")
    if t == "ExprStmt":
        return ExprStmt(expression=ast_from_obj(obj["expression"]))
    if t == "PrintStmt":
        return PrintStmt(expression=ast_from_obj(obj["expression"]))
    if t == "VarDecl":
        return VarDecl(name=token_from_obj(obj["name"]), initializer=ast_from_obj(obj.get("initializer")))
    if t == "IfStmt":
        return IfStmt(
            condition=ast_from_obj(obj["condition"]),
            then_branch=ast_from_obj(obj["then_branch"]),
            else_branch=ast_from_obj(obj.get("else_branch")),
        )
    if t == "ForStmt":
        return ForStmt(
            keyword=token_from_obj(obj["keyword"]),
            start=ast_from_obj(obj["start"]),
            end=ast_from_obj(obj["end"]),
            body=[ast_from_obj(s) for s in obj["body"]],
        )
    if t == "WhileStmt":
        return WhileStmt(
            condition=ast_from_obj(obj["condition"]),
            body=[ast_from_obj(s) for s in obj["body"]],
        )
    if t == "Literal":
        return Literal(value=value_from_obj(obj["value"]))
    if t == "Binary":
        return Binary(
            left=ast_from_obj(obj["left"]),
            operator=token_from_obj(obj["operator"]),
            right=ast_from_obj(obj["right"]),
        )
    if t == "Logical":
        return Logical(
            left=ast_from_obj(obj["left"]),
            operator=token_from_obj(obj["operator"]),
            right=ast_from_obj(obj["right"]),
        )
    if t == "Unary":
        return Unary(operator=token_from_obj(obj["operator"]), right=ast_from_obj(obj["right"]))
    if t == "Grouping":
        return Grouping(expression=ast_from_obj(obj["expression"]))
    if t == "Variable":
        return Variable(name=token_from_obj(obj["name"]))
    if t == "Assign":
        return Assign(name=token_from_obj(obj["name"]), value=ast_from_obj(obj["value"]))

    raise ValueError(f"Unknown AST node type: {t}")
