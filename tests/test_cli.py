import pytest

from jlisp.__main__ import main


@pytest.fixture
def program(tmp_path):
    def write(text):
        path = tmp_path / "program.lisp"
        path.write_text(text, encoding="utf-8")
        return str(path)

    return write


def test_run_prints_result(program, capsys):
    assert main(["run", program("(defn sq (x) (* x x)) (sq 7)")]) == 0
    assert capsys.readouterr().out == "49\n"


def test_print_output_comes_first(program, capsys):
    assert main(["run", program('(print "hello") (+ 1 1)')]) == 0
    assert capsys.readouterr().out == "hello\n2\n"


def test_missing_file(tmp_path, capsys):
    assert main(["run", str(tmp_path / "nope.lisp")]) == 1
    assert "file not found" in capsys.readouterr().err


def test_empty_program(program, capsys):
    assert main(["run", program("  \n\t")]) == 1
    assert "program is empty" in capsys.readouterr().err


def test_error_exits_nonzero(program, capsys):
    assert main(["run", program("(+ 1 ff)")]) == 1
    assert "symbol 'ff' not found" in capsys.readouterr().err


def test_command_is_required():
    with pytest.raises(SystemExit):
        main([])


def test_deep_nesting_exits_nonzero(program, capsys):
    assert main(["run", program("(" * 3000 + ")" * 3000)]) == 1
    assert "Maximum recursion depth exceeded" in capsys.readouterr().err
