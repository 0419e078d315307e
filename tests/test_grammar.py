import pytest

from minirepl.errors import ErrorLog, ParseError
from minirepl.grammar import parse_strict
from minirepl.interpreter import Interpreter
from minirepl.lexer import tokenize
from minirepl.parser import parse


PROGRAM = '''// every construct of the language
let a = 1_000;
let b;
let s = "multi
line";
b = a = 2, 3;
if a < 2 or a >= 10 and !false then print "x"; else print -a ^ 2 ** 3;
for i in a + 1..b * 2 begin
    print (a - 1) / 2;
    let inner = s + "!";
end
while a != 0 begin
    a = a - 1;
    if a == 1 then print true;
end
print 1 <= 2 == (3 > 4);
'''


def test_grammar_and_recursive_descent_build_the_same_ast():
    log = ErrorLog()
    expected = parse(tokenize(PROGRAM, log), log)
    assert not log.had_error
    assert parse_strict(PROGRAM) == expected


def test_strict_ast_runs():
    lines = []
    interp = Interpreter(output=lines.append)
    interp.interpret(parse_strict('let x = 2; for i in 0..3 begin x = x * x; end print x;'))
    assert lines == ['256']


def test_keyword_prefixed_identifiers():
    assert parse_strict('let letter = 1; print letter;') == parse(tokenize('let letter = 1; print letter;'))


def test_syntax_error_is_raised():
    with pytest.raises(ParseError) as excinfo:
        parse_strict('print ;')
    assert excinfo.value.where == "at ';'"
    assert excinfo.value.line == 1


def test_unexpected_end_of_input():
    with pytest.raises(ParseError) as excinfo:
        parse_strict('print 1\n')
    assert excinfo.value.where == 'at end'


def test_invalid_assignment_target():
    with pytest.raises(ParseError) as excinfo:
        parse_strict('1 = 2;')
    assert excinfo.value.message == 'Invalid assignment.'


def test_unexpected_character():
    with pytest.raises(ParseError) as excinfo:
        parse_strict('let x = 1;\nprint @;')
    assert excinfo.value.line == 2
    assert excinfo.value.message == 'Unexpected character.'


def test_underscore_only_number_is_rejected():
    with pytest.raises(ParseError) as excinfo:
        parse_strict('print _;')
    assert excinfo.value.message == 'Invalid number literal.'


def test_oversized_number_is_rejected():
    with pytest.raises(ParseError) as excinfo:
        parse_strict('print ' + '1' * 4301 + ';')
    assert excinfo.value.message == 'Invalid number literal.'
