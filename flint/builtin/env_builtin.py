"""Built-in functions for the Flint runtime environment.

The six host functions scripts can call: input, error, print, length, get and
clear. They are created per interpreter, bound to that interpreter's input and
output streams, and registered as constants in its root scope. Arguments
arrive already checked against the signatures in SIGNATURES.
"""
from __future__ import annotations

import math
import sys
from typing import Callable, TextIO

from flint.errors import IndexOutOfRange, ScriptError
from flint.types.environment import Environment
from flint.types.function import Builtin
from flint.types.type_symbol import (
    FLOAT,
    OBJECT,
    STRING,
    VOID,
    FunctionType,
    array_type,
    function_type,
)
from flint.types.value import VOID_VALUE, Value, format_value

# ANSI: erase the whole display, then move the cursor to the top-left corner
CLEAR_SCREEN = "\033[2J\033[H"

SIGNATURES: dict[str, FunctionType] = {
    "input": function_type(STRING, STRING),
    "error": function_type(VOID, STRING),
    "print": function_type(VOID, OBJECT),
    "length": function_type(FLOAT, array_type(OBJECT)),
    "get": function_type(OBJECT, array_type(OBJECT), FLOAT),
    "clear": function_type(VOID),
}


# -------------------------------
# Pure builtins
# -------------------------------
def error(args: list[Value]) -> Value:
    """Abort the script with its own message."""
    raise ScriptError(args[0].payload)


def length(args: list[Value]) -> Value:
    """Number of elements of an array, as a float."""
    return Value.number(len(args[0].payload))


def get(args: list[Value]) -> Value:
    """Element at the given index; the index is truncated toward zero."""
    elements: list[Value] = args[0].payload
    raw_index: float = args[1].payload
    if not math.isfinite(raw_index):
        raise IndexOutOfRange(f"Index {raw_index} is not a valid array index")
    index = int(raw_index)
    if not 0 <= index < len(elements):
        raise IndexOutOfRange(f"Index {index} is out of range for an array of length {len(elements)}")
    return elements[index]


# -------------------------------
# Stream-bound builtins
# -------------------------------
def make_input(stdin: TextIO, stdout: TextIO) -> Callable[[list[Value]], Value]:
    def input_(args: list[Value]) -> Value:
        """Write the prompt, then block until a line is read (empty string at end of input)."""
        stdout.write(args[0].payload)
        stdout.flush()
        line = stdin.readline()
        return Value.text(line.rstrip("\r\n"))
    return input_


def make_print(stdout: TextIO) -> Callable[[list[Value]], Value]:
    def print_(args: list[Value]) -> Value:
        """Write the value's text form followed by a newline."""
        stdout.write(format_value(args[0]))
        stdout.write("\n")
        return VOID_VALUE
    return print_


def make_clear(stdout: TextIO) -> Callable[[list[Value]], Value]:
    def clear(args: list[Value]) -> Value:
        stdout.write(CLEAR_SCREEN)
        stdout.flush()
        return VOID_VALUE
    return clear


# -------------------------------
# Registration
# -------------------------------
def make_builtins(stdin: TextIO | None = None, stdout: TextIO | None = None) -> list[Builtin]:
    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout
    impls = {
        "input": make_input(stdin, stdout),
        "error": error,
        "print": make_print(stdout),
        "length": length,
        "get": get,
        "clear": make_clear(stdout),
    }
    return [Builtin(name, SIGNATURES[name], impls[name]) for name in SIGNATURES]


def register(env: Environment, stdin: TextIO | None = None, stdout: TextIO | None = None) -> None:
    """Declare every builtin as a constant in `env`."""
    for builtin in make_builtins(stdin, stdout):
        env.declare(builtin.name, builtin.type, Value.function(builtin), is_constant=True)
