import io

import pytest

from flint.errors import IllegalControlFlow, TypeMismatch, UnresolvedName
from flint.interpreter import Interpreter
from flint.reader.syntax import Block, BreakStmt, ReturnStmt
from flint.types.signal import BREAK, Return
from flint.types.value import VOID_VALUE


def test_for_loop_is_inclusive(lines):
    assert lines("for (let i = 1, 3) print(i);") == ["1", "2", "3"]


def test_for_loop_with_fractional_bounds(lines):
    assert lines("for (let i = 0.5, 2) print(i);") == ["0.5", "1.5"]


def test_for_loop_that_never_runs(run):
    assert run("for (let i = 3, 1) print(i);") == ""


def test_for_bounds_are_evaluated_once(lines):
    code = """
    var n = 2;
    for (let i = 1, n) { n = 10; print(i); }
    print(n);
    """
    assert lines(code) == ["1", "2", "10"]


def test_for_variable_is_scoped_to_the_loop(run):
    with pytest.raises(UnresolvedName):
        run("for (let i = 1, 2) { } print(i);")


@pytest.mark.parametrize(
    "code",
    [
        'for (let i = "a", 3) print(i);',
        "for (let i = 1, true) print(i);",
    ],
)
def test_for_bounds_must_be_float(run, code):
    with pytest.raises(TypeMismatch):
        run(code)


def test_while_loop(lines):
    code = """
    var i = 0;
    while (i < 3) {
        print(i);
        i = i + 1;
    }
    """
    assert lines(code) == ["0", "1", "2"]


def test_break_only_leaves_the_innermost_loop(lines):
    code = """
    for (let i = 1, 3) {
        var j = 0;
        while (true) {
            j = j + 1;
            if (j == 2) break;
        }
        print(i * 10 + j);
    }
    """
    assert lines(code) == ["12", "22", "32"]


def test_break_stops_the_rest_of_the_body(lines):
    code = """
    for (let i = 1, 5) {
        if (i == 3) break;
        print(i);
    }
    print("done");
    """
    assert lines(code) == ["1", "2", "done"]


def test_return_leaves_nested_loops(lines):
    code = """
    func find(target: float): float {
        for (let i = 1, 10) {
            var j = 0;
            while (j < 10) {
                if (i * j == target) return i * 100 + j;
                j = j + 1;
            }
        }
        return -1;
    }
    print(find(12));
    print(find(1000));
    """
    assert lines(code) == ["206", "-1"]


def test_if_runs_only_the_first_true_clause(lines):
    code = """
    func check(label: string, v: bool): bool { print(label); return v; }
    if (check("a", false)) print(1);
    elseif (check("b", true)) print(2);
    elseif (check("c", true)) print(3);
    else print(4);
    """
    assert lines(code) == ["a", "b", "2"]


def test_else_branch(lines):
    code = """
    func classify(n: float): string {
        if (n < 0) return "negative";
        elseif (n == 0) return "zero";
        else return "positive";
    }
    print(classify(-1));
    print(classify(0));
    print(classify(5));
    """
    assert lines(code) == ["negative", "zero", "positive"]


@pytest.mark.parametrize(
    "code",
    [
        "if (1) print(1);",
        'if (false) print(1); elseif ("yes") print(2);',
        "while (0) print(1);",
    ],
)
def test_conditions_must_be_bool(run, code):
    with pytest.raises(TypeMismatch):
        run(code)


@pytest.mark.parametrize(
    "code",
    [
        "return;",
        "return 1;",
        "break;",
        "{ break; }",
        "if (true) return;",
        "func f(): void { break; } f();",
        "func f(): void { if (true) break; } f();",
    ],
)
def test_control_flow_outside_its_construct(run, code):
    with pytest.raises(IllegalControlFlow):
        run(code)


def test_break_inside_a_loop_inside_a_function(lines):
    code = """
    func count(): float {
        var n = 0;
        while (true) {
            n = n + 1;
            if (n == 4) break;
        }
        return n;
    }
    print(count());
    """
    assert lines(code) == ["4"]


def test_statements_after_the_error_do_not_run(run):
    out = io.StringIO()
    interpreter = Interpreter(stdout=out)
    with pytest.raises(UnresolvedName):
        interpreter.eval("print(1); print(missing); print(2);")
    assert out.getvalue() == "1\n"


def test_execute_returns_signals(evaluator):
    assert evaluator.execute(Block((BreakStmt(),))) is BREAK
    assert evaluator.execute(Block((ReturnStmt(None), BreakStmt()))) == Return(VOID_VALUE)
    assert evaluator.execute(Block(())) is None


def test_scope_is_restored_after_an_error():
    interpreter = Interpreter(stdout=io.StringIO())
    with pytest.raises(TypeMismatch):
        interpreter.eval("{ { if (1) print(1); } }")
    assert interpreter.evaluator.scope is interpreter.env
