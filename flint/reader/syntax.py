"""Flint syntax tree.

Statements and expressions are two closed families of frozen dataclasses,
built once by the parser and only read afterwards. Type annotations are
already resolved to type descriptors by the parser. Nodes introducing or
naming an identifier record the source offset of that identifier.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from flint.reader.tokens import TokenKind
from flint.types.type_symbol import TypeSymbol


# ------------------------------------------------------------
# Expressions
# ------------------------------------------------------------

@dataclass(frozen=True)
class Literal:
    value: float | str | bool


@dataclass(frozen=True)
class Var:
    name: str
    position: int = 0


@dataclass(frozen=True)
class Unary:
    operator: TokenKind
    operand: Expr


@dataclass(frozen=True)
class Binary:
    left: Expr
    operator: TokenKind
    right: Expr


@dataclass(frozen=True)
class Call:
    name: str
    arguments: tuple[Expr, ...] = ()
    position: int = 0


@dataclass(frozen=True)
class ArrayLit:
    elements: tuple[Expr, ...] = ()


Expr = Union[Literal, Var, Unary, Binary, Call, ArrayLit]


# ------------------------------------------------------------
# Statements
# ------------------------------------------------------------

@dataclass(frozen=True)
class Block:
    statements: tuple[Stmt, ...] = ()


@dataclass(frozen=True)
class DeclareStmt:
    """`var`, `let` or `const`. A `declared_type` of None means "infer from the value"."""
    name: str
    declared_type: Optional[TypeSymbol]
    value: Expr
    is_constant: bool = False
    position: int = 0


@dataclass(frozen=True)
class AssignStmt:
    name: str
    value: Expr
    position: int = 0


@dataclass(frozen=True)
class IfClause:
    condition: Expr
    body: Stmt


@dataclass(frozen=True)
class IfStmt:
    """`if` followed by any `elseif` clauses, in source order."""
    clauses: tuple[IfClause, ...]
    else_body: Optional[Stmt] = None


@dataclass(frozen=True)
class WhileStmt:
    condition: Expr
    body: Stmt


@dataclass(frozen=True)
class ForStmt:
    variable: str
    lower: Expr
    upper: Expr
    body: Stmt
    position: int = 0


@dataclass(frozen=True)
class ReturnStmt:
    value: Optional[Expr] = None


@dataclass(frozen=True)
class BreakStmt:
    pass


@dataclass(frozen=True)
class Param:
    name: str
    type: TypeSymbol
    position: int = 0


@dataclass(frozen=True)
class FuncDecl:
    name: str
    params: tuple[Param, ...]
    return_type: TypeSymbol
    body: Block
    position: int = 0


@dataclass(frozen=True)
class CallStmt:
    call: Call


Stmt = Union[
    Block,
    DeclareStmt,
    AssignStmt,
    IfStmt,
    WhileStmt,
    ForStmt,
    ReturnStmt,
    BreakStmt,
    FuncDecl,
    CallStmt,
]
