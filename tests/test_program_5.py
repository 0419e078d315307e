from minirepl.interpreter import Interpreter, run_source


def test_program_5_arithmetic(capsys):
    with open('examples/program_5.mini', 'r', encoding='utf-8') as f:
        source = f.read()
    interp = Interpreter()
    run_source(source, interp)
    out = capsys.readouterr().out.split()
    assert out == ['120', '1024', '512', '-3', '1001']
