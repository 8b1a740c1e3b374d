"""Function payloads: script closures and host builtins."""

from __future__ import annotations

from io import StringIO
from typing import TYPE_CHECKING, Callable

from flint.types.type_symbol import FunctionType

if TYPE_CHECKING:
    from flint.reader.syntax import FuncDecl
    from flint.types.environment import Environment
    from flint.types.value import Value


class FunctionValue:
    """Common base of everything a Flint call expression can invoke."""

    __slots__ = ("name", "type")

    def __init__(self, name: str, type: FunctionType):
        self.name: str = name
        self.type: FunctionType = type

    def __str__(self) -> str:
        with StringIO() as buffer:
            buffer.write("<func ")
            buffer.write(self.name)
            buffer.write(": ")
            buffer.write(str(self.type))
            buffer.write(">")
            return buffer.getvalue()

    def __repr__(self) -> str:
        return str(self)


class Closure(FunctionValue):
    """A script function together with the scope chain it was declared in."""

    __slots__ = ("declaration", "env")

    def __init__(self, declaration: FuncDecl, type: FunctionType, env: Environment):
        super().__init__(declaration.name, type)
        self.declaration: FuncDecl = declaration
        # Captured by reference: later assignments in `env` are visible to the body.
        self.env: Environment = env


class Builtin(FunctionValue):
    """A host function. `impl` receives the already type-checked argument values."""

    __slots__ = ("impl",)

    def __init__(self, name: str, type: FunctionType, impl: Callable[[list[Value]], Value]):
        super().__init__(name, type)
        self.impl = impl

    def __call__(self, args: list[Value]) -> Value:
        return self.impl(args)
