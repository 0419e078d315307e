from minirepl.interpreter import Interpreter, run_source


def test_program_2_while_sum(capsys):
    with open('examples/program_2.mini', 'r', encoding='utf-8') as f:
        source = f.read()
    interp = Interpreter()
    run_source(source, interp)
    out = capsys.readouterr().out.strip()
    assert out == '10'
