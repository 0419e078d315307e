from minirepl.interpreter import Interpreter, run_source


def test_program_7_recovery(capsys):
    with open('examples/program_7.mini', 'r', encoding='utf-8') as f:
        source = f.read()
    interp = Interpreter()
    run_source(source, interp)
    out = capsys.readouterr().out.strip()
    # the malformed declaration is dropped, the print still runs
    assert out == '1'
    assert interp.reporter.errors == [(1, "at '='", 'Expected variable name.')]
