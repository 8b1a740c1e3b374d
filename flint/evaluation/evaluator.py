"""Core evaluator for the Flint interpreter.

The Evaluator walks the syntax tree with a cursor on the current scope.
`execute` runs a statement and returns its control signal (None, Return or
BREAK); `evaluate` computes an expression's Value. Signals travel back up
through the Python call stack as return values: blocks stop at the first
signal, loops consume BREAK and pass Return on, function calls turn Return
into the call's value (see flint.evaluation.apply).
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from flint.errors import TypeMismatch, located
from flint.evaluation import operators
from flint.evaluation.apply import apply
from flint.reader.syntax import (
    ArrayLit,
    AssignStmt,
    Binary,
    Block,
    BreakStmt,
    Call,
    CallStmt,
    DeclareStmt,
    Expr,
    ForStmt,
    FuncDecl,
    IfStmt,
    Literal,
    ReturnStmt,
    Stmt,
    Unary,
    Var,
    WhileStmt,
)
from flint.types.environment import Environment
from flint.types.function import Closure, FunctionValue
from flint.types.signal import BREAK, Break, Return, Signal
from flint.types.type_symbol import BOOL, FLOAT, function_type, matches
from flint.types.value import VOID_VALUE, Value


class Evaluator:
    """Executes statements and evaluates expressions against a scope chain."""

    def __init__(self, scope: Environment):
        self.scope: Environment = scope

    @contextmanager
    def entered(self, scope: Environment) -> Iterator[Environment]:
        """Make `scope` current for the duration of the block, restoring the previous one after."""
        previous = self.scope
        self.scope = scope
        try:
            yield scope
        finally:
            self.scope = previous

    # ------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------
    def execute(self, stmt: Stmt) -> Signal:
        match stmt:
            case Block():
                return self.execute_block(stmt, Environment(outer=self.scope))
            case DeclareStmt():
                self.execute_declaration(stmt)
            case AssignStmt(name=name, value=value, position=position):
                new_value = self.evaluate(value)
                with located(position):
                    self.scope.set(name, new_value)
            case IfStmt():
                return self.execute_if(stmt)
            case WhileStmt():
                return self.execute_while(stmt)
            case ForStmt():
                return self.execute_for(stmt)
            case ReturnStmt(value=None):
                return Return(VOID_VALUE)
            case ReturnStmt(value=value):
                return Return(self.evaluate(value))
            case BreakStmt():
                return BREAK
            case FuncDecl():
                self.execute_function_declaration(stmt)
            case CallStmt(call=call):
                self.evaluate_call(call)
            case _:
                raise AssertionError(f"Unknown statement {stmt!r}")
        return None

    def execute_block(self, block: Block, scope: Environment) -> Signal:
        """Run the statements of `block` inside `scope`, stopping at the first signal."""
        with self.entered(scope):
            for stmt in block.statements:
                signal = self.execute(stmt)
                if signal is not None:
                    return signal
        return None

    def execute_declaration(self, stmt: DeclareStmt) -> None:
        value = self.evaluate(stmt.value)
        declared_type = value.type if stmt.declared_type is None else stmt.declared_type
        with located(stmt.position):
            self.scope.declare(stmt.name, declared_type, value, stmt.is_constant)

    def condition(self, expr: Expr, construct: str) -> bool:
        value = self.evaluate(expr)
        if not matches(value.type, BOOL):
            raise TypeMismatch(f"The condition of '{construct}' must be bool, got {value.type}")
        return value.payload

    def execute_if(self, stmt: IfStmt) -> Signal:
        for clause in stmt.clauses:
            if self.condition(clause.condition, "if"):
                return self.execute(clause.body)
        if stmt.else_body is not None:
            return self.execute(stmt.else_body)
        return None

    def execute_while(self, stmt: WhileStmt) -> Signal:
        while self.condition(stmt.condition, "while"):
            signal = self.execute(stmt.body)
            if isinstance(signal, Break):
                break
            if isinstance(signal, Return):
                return signal
        return None

    def execute_for(self, stmt: ForStmt) -> Signal:
        lower = self.evaluate(stmt.lower)
        upper = self.evaluate(stmt.upper)
        if not matches(lower.type, FLOAT) or not matches(upper.type, FLOAT):
            raise TypeMismatch(
                f"The bounds of 'for' must be float, got {lower.type} and {upper.type}",
                stmt.position,
            )

        counter: float = lower.payload
        with self.entered(Environment(outer=self.scope)) as loop_scope:
            loop_scope.declare(stmt.variable, FLOAT, Value.number(counter))
            while counter <= upper.payload:
                loop_scope.set(stmt.variable, Value.number(counter))
                signal = self.execute(stmt.body)
                if isinstance(signal, Break):
                    break
                if isinstance(signal, Return):
                    return signal
                counter += 1
        return None

    def execute_function_declaration(self, stmt: FuncDecl) -> None:
        fn_type = function_type(stmt.return_type, *(p.type for p in stmt.params))
        closure = Closure(stmt, fn_type, self.scope)
        with located(stmt.position):
            self.scope.declare(stmt.name, fn_type, Value.function(closure))

    # ------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------
    def evaluate(self, expr: Expr) -> Value:
        match expr:
            case Literal(value=raw):
                return Value.literal(raw)
            case Var(name=name, position=position):
                with located(position):
                    return self.scope.get(name)
            case Unary(operator=operator, operand=operand):
                return operators.unary(operator, self.evaluate(operand))
            case Binary(left=left, operator=operator, right=right):
                return operators.binary(operator, self.evaluate(left), self.evaluate(right))
            case Call():
                return self.evaluate_call(expr)
            case ArrayLit(elements=elements):
                return self.evaluate_array(elements)
        raise AssertionError(f"Unknown expression {expr!r}")

    def evaluate_array(self, elements: tuple[Expr, ...]) -> Value:
        values = [self.evaluate(element) for element in elements]
        if not values:
            raise TypeMismatch("An array literal needs at least one element to infer its type")
        # Only the first element decides the element type.
        return Value.array(values, values[0].type)

    def evaluate_call(self, call: Call) -> Value:
        args = [self.evaluate(arg) for arg in call.arguments]
        with located(call.position):
            callee = self.scope.get(call.name)
        if not isinstance(callee.payload, FunctionValue):
            raise TypeMismatch(f"'{call.name}' is not a function, it has type {callee.type}", call.position)
        return apply(callee.payload, args, self.execute_block, call.position)
