import io

from minirepl.errors import ErrorLog
from minirepl.repl import PROMPT, ConsoleReporter, Session


def make_session(keep_going=False):
    lines = []
    log = ErrorLog()
    return Session(reporter=log, output=lines.append, keep_going=keep_going), lines, log


def test_state_persists_between_inputs():
    session, lines, _ = make_session()
    session.run('let x = 1;\n')
    session.run('x = x + 41;\n')
    session.run('print x;\n')
    assert lines == ['42']
    assert session.environment.values['x'] == 42


def test_input_with_syntax_error_is_not_executed():
    session, lines, log = make_session()
    session.run('let = ; print 1;\n')
    assert lines == []
    assert log.errors == [(1, "at '='", 'Expected variable name.')]


def test_keep_going_runs_what_parsed():
    session, lines, log = make_session(keep_going=True)
    session.run('let = ; print 1;\n')
    assert lines == ['1']
    assert log.had_error


def test_lexical_error_blocks_execution():
    session, lines, log = make_session()
    session.run('print 1; @\n')
    assert lines == []
    assert log.errors == [(1, "at '@'", 'Unexpected character.')]


def test_blank_and_comment_lines_do_nothing():
    session, lines, log = make_session()
    assert session.run('\n') is None
    assert session.run('// just a comment\n') is None
    assert lines == []
    assert not log.had_error


def test_reporter_is_reset_for_each_input():
    session, lines, log = make_session()
    session.run('print nope;\n')
    assert log.runtime_errors == [(1, "Undefined variable 'nope'.")]
    session.run('print 2;\n')
    assert log.runtime_errors == []
    assert lines == ['2']


def test_console_reporter_format():
    out = io.StringIO()
    reporter = ConsoleReporter(stream=out)
    reporter.error(3, "at 'x'", 'Expected expression.')
    reporter.error(4, 'at end', "Expected ';' after expression.")
    reporter.runtime_error(5, 'Division by zero is undefined.')
    assert out.getvalue().splitlines() == [
        "line 3: error at 'x': Expected expression.",
        "line 4: error at end: Expected ';' after expression.",
        'line 5: Division by zero is undefined.',
    ]
    assert reporter.had_error and reporter.had_runtime_error


def test_run_prompt_reads_until_eof(capsys):
    inputs = iter(['let a = "hi";', 'print a + "!";', 'print 1 / 0;', 'print a;'])
    prompts = []

    def read_line(prompt):
        prompts.append(prompt)
        try:
            return next(inputs)
        except StopIteration:
            raise EOFError

    session = Session()
    session.run_prompt(read_line)
    assert capsys.readouterr().out.splitlines() == [
        'hi!',
        'line 1: Division by zero is undefined.',
        'hi',
    ]
    assert prompts == [PROMPT] * 5


def test_session_survives_oversized_and_deeply_nested_input():
    session, lines, log = make_session()
    session.run('print ' + '(' * 300 + '1' + ')' * 300 + ';\n')
    assert log.messages == ['Expression nests too deeply.']
    session.run('print ' + '7' * 5000 + ';\n')
    assert log.messages[0] == 'Invalid number literal.'
    session.run('let x = 2; for i in 0..20 begin x = x * x; end\n')
    assert log.messages == ['Number is too large.']
    session.run('print 1;\n')
    assert lines == ['1']
