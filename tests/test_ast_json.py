import json

import pytest

from minirepl.ast import Literal, PrintStmt
from minirepl.ast_json import ast_from_obj, ast_to_obj, program_from_obj, program_to_obj
from minirepl.interpreter import Interpreter
from minirepl.lexer import tokenize
from minirepl.parser import parse
from minirepl.types import NIL


def test_program_survives_json_and_still_runs():
    source = 'let n = 3; let acc = "";\nfor i in 0..n begin acc = acc + "*"; end\nwhile n > 0 begin n = n - 1; end\nif !false then print acc; else print n;'
    statements = parse(tokenize(source))
    text = json.dumps(program_to_obj(statements))
    reloaded = program_from_obj(json.loads(text))
    assert reloaded == statements

    lines = []
    Interpreter(output=lines.append).interpret(reloaded)
    assert lines == ['***']


def test_runtime_error_line_kept_after_reload():
    statements = program_from_obj(json.loads(json.dumps(program_to_obj(parse(tokenize('\n\nprint 1 / 0;'))))))
    interp = Interpreter(output=lambda s: None)
    fault = interp.interpret(statements)
    assert fault.line == 3


def test_nil_literal_is_tagged():
    obj = ast_to_obj(PrintStmt(Literal(NIL)))
    assert obj == {"type": "PrintStmt", "expression": {"type": "Literal", "value": {"__type__": "Nil"}}}
    assert ast_from_obj(obj) == PrintStmt(Literal(NIL))


def test_rejects_unknown_documents():
    with pytest.raises(ValueError):
        program_from_obj({"type": "Module", "body": []})
    with pytest.raises(ValueError):
        ast_from_obj({"type": "Call"})
    with pytest.raises(TypeError):
        ast_to_obj(object())
