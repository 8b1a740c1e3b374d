from __future__ import annotations

from flint.types.type_symbol import TypeSymbol
from flint.types.value import Value


class Variable:
    """A binding slot: current value, declared type and constness."""

    __slots__ = ("value", "type", "is_constant")

    def __init__(self, value: Value, type: TypeSymbol, is_constant: bool = False):
        self.value: Value = value
        self.type: TypeSymbol = type
        self.is_constant: bool = is_constant

    def assign(self, value: Value) -> None:
        self.value = value

    def declaration(self, name: str) -> str:
        keyword = "const" if self.is_constant else "let"
        return f"{keyword} {name}: {self.type} = {self.value}"
