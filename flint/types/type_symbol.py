"""Type descriptors for Flint and the structural `matches` relation.

Three shapes exist: scalars (float, string, bool, void, object), function types
and array types. Descriptors are immutable and compare structurally, so two
separately built `float[]` types are equal and usable as dict keys.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class ScalarType:
    name: str

    def matches(self, target: TypeSymbol) -> bool:
        return matches(self, target)

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class FunctionType:
    return_type: TypeSymbol
    parameter_types: tuple[TypeSymbol, ...] = ()

    @property
    def name(self) -> str:
        return "Function"

    def matches(self, target: TypeSymbol) -> bool:
        return matches(self, target)

    def __str__(self) -> str:
        params = ", ".join(str(p) for p in self.parameter_types)
        return f"({params}) -> {self.return_type}"


@dataclass(frozen=True)
class ArrayType:
    element_type: TypeSymbol

    @property
    def name(self) -> str:
        return "Array"

    def matches(self, target: TypeSymbol) -> bool:
        return matches(self, target)

    def __str__(self) -> str:
        if isinstance(self.element_type, FunctionType):
            return f"({self.element_type})[]"
        return f"{self.element_type}[]"


TypeSymbol = Union[ScalarType, FunctionType, ArrayType]

FLOAT = ScalarType("float")
STRING = ScalarType("string")
BOOL = ScalarType("bool")
VOID = ScalarType("void")
OBJECT = ScalarType("object")

SCALARS: dict[str, ScalarType] = {t.name: t for t in (FLOAT, STRING, BOOL, VOID, OBJECT)}


def function_type(return_type: TypeSymbol, *parameter_types: TypeSymbol) -> FunctionType:
    return FunctionType(return_type, tuple(parameter_types))


def array_type(element_type: TypeSymbol) -> ArrayType:
    return ArrayType(element_type)


def scalar_type(name: str) -> ScalarType | None:
    """Return the scalar type called `name`, or None if there is no such type."""
    return SCALARS.get(name)


def matches(candidate: TypeSymbol, target: TypeSymbol) -> bool:
    """True if a value of type `candidate` may be stored where `target` is expected.

    `object` accepts everything. Otherwise the name tags must agree, and
    function and array types are compared component by component.
    """
    if target == OBJECT:
        return True
    if candidate.name != target.name:
        return False

    match candidate, target:
        case FunctionType(), FunctionType():
            if len(candidate.parameter_types) != len(target.parameter_types):
                return False
            for param, target_param in zip(candidate.parameter_types, target.parameter_types):
                if not matches(param, target_param):
                    return False
            return matches(candidate.return_type, target.return_type)
        case ArrayType(), ArrayType():
            return matches(candidate.element_type, target.element_type)
        case _:
            return True
