from minirepl.interpreter import Interpreter, run_source


def test_program_6_division_by_zero(capsys):
    with open('examples/program_6.mini', 'r', encoding='utf-8') as f:
        source = f.read()
    interp = Interpreter()
    fault = run_source(source, interp)
    out = capsys.readouterr().out.strip()
    assert out == '1'
    assert fault is not None
    assert interp.reporter.runtime_errors == [(2, 'Division by zero is undefined.')]
