import io
import sys

import pytest

from flint.builtin.env_builtin import register
from flint.evaluation.evaluator import Evaluator
from flint.interpreter import Interpreter
from flint.types.environment import Environment

# Every test gets fresh interpreters; builtins are bound to in-memory streams
# so program output can be asserted on directly.


@pytest.fixture
def run():
    """Run a program and return everything it printed."""
    def _run(code: str, stdin: str = "") -> str:
        out = io.StringIO()
        Interpreter(stdin=io.StringIO(stdin), stdout=out).eval(code)
        return out.getvalue()
    return _run


@pytest.fixture
def lines(run):
    """Run a program and return its output split into lines."""
    def _lines(code: str, stdin: str = "") -> list[str]:
        return run(code, stdin).splitlines()
    return _lines


@pytest.fixture
def env():
    e = Environment()
    register(e, io.StringIO(), io.StringIO())
    return e


@pytest.fixture
def evaluator(env):
    """An evaluator whose current scope is a global scope below the builtins.

    `define` executes top-level statements directly in that scope, so their
    bindings stay inspectable after the call.
    """
    ev = Evaluator(Environment(outer=env))

    def define(code: str) -> None:
        for stmt in Interpreter.parse(code).statements:
            ev.execute(stmt)

    ev.define = define
    return ev


@pytest.fixture
def shallow_stack():
    """Run with the default Python recursion limit; the CLI raises it for the whole process."""
    previous = sys.getrecursionlimit()
    sys.setrecursionlimit(1000)
    yield
    sys.setrecursionlimit(previous)
