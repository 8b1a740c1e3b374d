"""Runtime environment for Flint.

The Environment stores the bindings declared in one lexical scope and links to
the enclosing scope through `outer`. Scopes only point outward, never to their
children, so closures and the evaluator's current scope can share ancestors
freely.
"""

from __future__ import annotations

from typing import Optional

from flint.errors import ConstAssignment, DuplicateBinding, TypeMismatch, UnresolvedName
from flint.types.type_symbol import TypeSymbol, matches
from flint.types.value import Value
from flint.types.variable import Variable


class Environment:
    """Hierarchical mapping from names to typed bindings."""

    __slots__ = ("vars", "outer")

    def __init__(self, outer: Optional[Environment] = None):
        self.vars: dict[str, Variable] = {}
        self.outer: Environment | None = outer

    def declare(self, name: str, type: TypeSymbol, value: Value, is_constant: bool = False) -> Variable:
        """Bind `name` in this scope.

        Shadowing a binding of an outer scope is allowed; redeclaring a name of
        this scope raises DuplicateBinding. Raises TypeMismatch if `value` is
        not assignable to `type`.
        """
        if name in self.vars:
            raise DuplicateBinding(f"'{name}' has already been declared in this scope")
        if not matches(value.type, type):
            raise TypeMismatch(f"Cannot initialise '{name}' of type {type} with a value of type {value.type}")
        variable = Variable(value, type, is_constant)
        self.vars[name] = variable
        return variable

    def find(self, name: str) -> Optional[Environment]:
        """Find the nearest environment in the chain that declares `name`."""
        env: Optional[Environment] = self
        while env is not None:
            if name in env.vars:
                return env
            env = env.outer
        return None

    def resolve(self, name: str) -> Variable:
        """Return the innermost binding of `name`; raises UnresolvedName if there is none."""
        env = self.find(name)
        if env is None:
            raise UnresolvedName(f"Could not resolve '{name}'")
        return env.vars[name]

    def set(self, name: str, value: Value) -> None:
        """Overwrite an existing binding in place.

        Raises UnresolvedName, TypeMismatch (value not assignable to the declared
        type) or ConstAssignment, in that order of checking.
        """
        variable = self.resolve(name)
        if not matches(value.type, variable.type):
            raise TypeMismatch(f"Cannot assign a value of type {value.type} to '{name}' of type {variable.type}")
        if variable.is_constant:
            raise ConstAssignment(f"Cannot change the value of constant '{name}'")
        variable.assign(value)

    def get(self, name: str) -> Value:
        return self.resolve(name).value

    def bindings(self) -> list[str]:
        """This scope's bindings written as declarations, e.g. `const limit: float = 10`."""
        return [variable.declaration(name) for name, variable in self.vars.items()]

    def __str__(self) -> str:
        return "{" + "; ".join(self.bindings()) + "}"

    def __repr__(self) -> str:
        """The whole chain, innermost scope first; builtins included."""
        scopes: list[str] = []
        env: Optional[Environment] = self
        while env is not None:
            scopes.append(str(env))
            env = env.outer
        return f"<Environment depth={len(scopes) - 1} {' -> '.join(scopes)}>"
