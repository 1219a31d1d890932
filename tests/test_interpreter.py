import pytest

from jlisp.config import get_log_level, get_prelude_root
from jlisp.errors import JLispError, JLispNotAFunction, JLispReadError
from jlisp.interpreter import Interpreter, run, run_without_includes


@pytest.mark.parametrize(
    "program,expected",
    [
        ("(= 1 0)", "false"),
        ("(not (= 1 0))", "true"),
        ("(!= 1 0))", "true"),
        ("(>= 1 1)", "true"),
        ("(<= 1 1)", "true"),
        ("(> 1 0)", "true"),
        ("(or true false)", "true"),
        ("(or false false)", "false"),
        ("(and true true)", "true"),
        ("(and true false)", "false"),
        ("(+ 1 1 (+ 1 1))", "4"),
        ('(strlen "Hello")', "5"),
        ('(strlen "")', "0"),
        ("(define sum (lambda (a b) (+ a b))) (sum 2 3)", "5"),
        ("(defn sum (a b) (+ a (+ 0 b))) (sum 2 2)", "4"),
        ("(defun add (a b) (+ a b)) (add 2 5)", "7"),
        ("(def x 3) (fn (a) a) x", "3"),
        (
            """
            ;;; factorial
            (define factorial
                (lambda (n)
                    (if (= 1 n)
                        1
                        (* n (factorial (- n 1))))))
            (factorial 5)
            """,
            "120",
        ),
        (
            """
            (defn factorial (n)
                (if (= 1 n)
                    1
                    (* n (factorial (- n 1)))))
            (factorial 5)
            """,
            "120",
        ),
        (
            """
            (define fib (lambda (n)
                (if (< n 2) n (+ (fib (- n 1)) (fib (- n 2))))))
            (fib 9)
            """,
            "34",
        ),
        (
            """
            ;;; lexical scope: the loop updates the global a
            (define a 10)
            (while (> a 0)
                (begin
                    (set! a (- a 1))))
            (+ a 0)
            """,
            "0",
        ),
        (
            """
            (defmacro unless (test arg1 arg2)
                `(if (not ,test) ,arg1 ,arg2))
            (unless (= 1 0) 5 0)
            """,
            "5",
        ),
        ("(defn print () 1) (print \"Hello, World!\" 3.45 \"Foo\")", "1"),
    ],
)
def test_programs(program, expected):
    assert run(program) == expected


def test_only_last_result_is_returned():
    assert run_without_includes("1 2 3") == "3"


def test_empty_program():
    assert run_without_includes("") == ""
    assert run_without_includes("; only a comment") == ""


def test_defmacro_only_program_has_no_result():
    assert run_without_includes("(defmacro m () (quote 1))") == ""


def test_without_includes_has_no_prelude():
    with pytest.raises(JLispError, match="symbol 'not' not found"):
        run_without_includes("(not true)")


def test_runs_are_isolated():
    interp = Interpreter(prelude=None)
    interp.run("(define leaked 1)")
    with pytest.raises(JLispError, match="symbol 'leaked' not found"):
        interp.run("leaked")


def test_not_a_function():
    with pytest.raises(JLispNotAFunction, match="Item is not a function"):
        run("(car (2 3 4 5))")


def test_read_errors_propagate():
    with pytest.raises(JLispReadError):
        run_without_includes('(print "abc)')


def test_stack_exhaustion_is_reported():
    with pytest.raises(JLispError, match="Maximum recursion depth exceeded"):
        run_without_includes("(define f (lambda (n) (f n))) (f 1)")


def test_deeply_nested_input_is_reported():
    with pytest.raises(JLispError, match="Maximum recursion depth exceeded"):
        run_without_includes("(" * 3000 + ")" * 3000)


def test_large_integral_numbers_print_shortest_digits():
    assert run_without_includes("(* 123456789012 1000000000)") == "123456789012000000000"


def test_explicit_prelude_text():
    interp = Interpreter(prelude="(define answer 42)")
    assert interp.run("answer") == "42"


def test_prelude_path_from_environment(tmp_path, monkeypatch):
    (tmp_path / "macros.lisp").write_text("(defmacro def define)")
    (tmp_path / "functions.lisp").write_text("(def greeting \"hi\")")
    monkeypatch.setenv("JLISP_PRELUDE_PATH", str(tmp_path))
    assert get_prelude_root() == tmp_path
    assert Interpreter().run("greeting") == '"hi"'


def test_prelude_path_to_a_file_uses_its_directory(tmp_path, monkeypatch):
    monkeypatch.setenv("JLISP_PRELUDE_PATH", str(tmp_path / "macros.lisp"))
    assert get_prelude_root() == tmp_path


def test_missing_prelude_runs_without_it(tmp_path, monkeypatch):
    monkeypatch.setenv("JLISP_PRELUDE_PATH", str(tmp_path))
    interp = Interpreter()
    assert interp.prelude_forms == []
    assert interp.run("(+ 1 2)") == "3"


@pytest.mark.parametrize(
    "value,level",
    [("DEBUG", 10), ("info", 20), ("bogus", 30)],
)
def test_log_level_from_environment(value, level, monkeypatch):
    monkeypatch.setenv("JLISP_LOG_LEVEL", value)
    assert get_log_level() == level
