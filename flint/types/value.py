"""Runtime values.

A Value pairs a Python payload with its Flint type. The pairing is checked on
every construction, so code holding a Value can rely on, e.g., a `float` value
carrying a Python float and an array value carrying a list of Values.

    float    -> float
    string   -> str
    bool     -> bool
    void     -> None
    Function -> FunctionValue (Closure or Builtin)
    Array    -> list[Value]
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from io import StringIO
from typing import Any

from flint.errors import TypeMismatch
from flint.types.function import FunctionValue
from flint.types.type_symbol import (
    BOOL,
    FLOAT,
    STRING,
    VOID,
    ArrayType,
    FunctionType,
    TypeSymbol,
)


def _payload_fits(payload: Any, type: TypeSymbol) -> bool:
    match type:
        case FunctionType():
            return isinstance(payload, FunctionValue) and payload.type == type
        case ArrayType():
            return isinstance(payload, list) and all(isinstance(v, Value) for v in payload)
        case _ if type == FLOAT:
            return isinstance(payload, float)
        case _ if type == STRING:
            return isinstance(payload, str)
        case _ if type == BOOL:
            return isinstance(payload, bool)
        case _ if type == VOID:
            return payload is None
        case _:
            # `object` is a static type only; no value is ever of type object
            return False


@dataclass(frozen=True, eq=False)
class Value:
    payload: Any
    type: TypeSymbol

    def __post_init__(self):
        if not _payload_fits(self.payload, self.type):
            raise TypeMismatch(f"Payload {self.payload!r} cannot have type {self.type}")

    # --- Constructors ---
    @staticmethod
    def number(number: float | int) -> Value:
        return Value(float(number), FLOAT)

    @staticmethod
    def text(text: str) -> Value:
        return Value(text, STRING)

    @staticmethod
    def boolean(flag: bool) -> Value:
        return Value(flag, BOOL)

    @staticmethod
    def function(fn: FunctionValue) -> Value:
        return Value(fn, fn.type)

    @staticmethod
    def array(elements: list[Value], element_type: TypeSymbol) -> Value:
        return Value(list(elements), ArrayType(element_type))

    @staticmethod
    def literal(raw: float | str | bool) -> Value:
        """Value of a source literal; the literal's Python type picks the Flint type."""
        if isinstance(raw, bool):
            return Value.boolean(raw)
        if isinstance(raw, str):
            return Value.text(raw)
        if isinstance(raw, (int, float)):
            return Value.number(raw)
        raise TypeMismatch(f"Cannot infer a type for literal {raw!r}")

    # --- Comparison / display ---
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        return self.type == other.type and payload_equal(self.payload, other.payload)

    __hash__ = None  # mutable array payloads

    def __str__(self) -> str:
        return format_value(self)


VOID_VALUE = Value(None, VOID)


def payload_equal(a: Any, b: Any) -> bool:
    """Equality of two payloads; arrays compare element-wise, functions by identity."""
    if isinstance(a, FunctionValue) or isinstance(b, FunctionValue):
        return a is b
    if isinstance(a, list) and isinstance(b, list):
        return len(a) == len(b) and all(x == y for x, y in zip(a, b))
    return a == b


def format_float(number: float) -> str:
    if math.isfinite(number) and number == int(number):
        return str(int(number))
    return repr(number)


def format_value(value: Value) -> str:
    """Text form used by print()."""
    payload = value.payload
    if value.type == VOID:
        return "void"
    if isinstance(payload, bool):
        return "true" if payload else "false"
    if isinstance(payload, float):
        return format_float(payload)
    if isinstance(payload, list):
        with StringIO() as buffer:
            buffer.write("[")
            buffer.write(", ".join(format_value(v) for v in payload))
            buffer.write("]")
            return buffer.getvalue()
    return str(payload)
