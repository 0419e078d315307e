from minirepl.interpreter import Interpreter, run_source


def test_program_3_for_bound_read_once(capsys):
    with open('examples/program_3.mini', 'r', encoding='utf-8') as f:
        source = f.read()
    interp = Interpreter()
    run_source(source, interp)
    out = capsys.readouterr().out.split()
    # five doublings; growing steps inside the body does not extend the loop
    assert out == ['32', '10']
