"""Application engine for Flint.

This module centralizes function application semantics for the evaluator:
- Argument checking: the argument count must equal the parameter count and
  each argument must match its parameter type, for closures and builtins alike.
- Closure calls: a fresh scope is created off the closure's captured scope,
  parameters are declared in it, and the body runs there.
- Signal handling at the function boundary: Return ends the call, a Break
  escaping the body is illegal, falling off the end yields void.
- Return checking: the result must match the declared return type.
"""

from __future__ import annotations

import logging
from typing import Callable

from flint.errors import (
    ArityMismatch,
    IllegalControlFlow,
    RecursionDepthExceeded,
    TypeMismatch,
    located,
)
from flint.reader.syntax import Block
from flint.types.environment import Environment
from flint.types.function import Builtin, Closure, FunctionValue
from flint.types.signal import Break, Return, Signal
from flint.types.type_symbol import FunctionType, matches
from flint.types.value import VOID_VALUE, Value

logger = logging.getLogger(__name__)

BodyRunner = Callable[[Block, Environment], Signal]


def check_arguments(name: str, fn_type: FunctionType, args: list[Value]) -> None:
    expected = len(fn_type.parameter_types)
    if len(args) != expected:
        raise ArityMismatch(f"'{name}' expects {expected} argument(s), got {len(args)}")
    for index, (arg, param_type) in enumerate(zip(args, fn_type.parameter_types)):
        if not matches(arg.type, param_type):
            raise TypeMismatch(
                f"Argument {index + 1} of '{name}' must be {param_type}, got {arg.type}"
            )


def bind_arguments(fn: Closure, args: list[Value]) -> Environment:
    """Return a new scope, child of the closure's captured scope, holding the parameters."""
    call_env = Environment(outer=fn.env)
    for param, arg in zip(fn.declaration.params, args):
        call_env.declare(param.name, param.type, arg)
    return call_env


def apply_closure(fn: Closure, args: list[Value], run_body: BodyRunner) -> Value:
    call_env = bind_arguments(fn, args)
    logger.debug("calling %s in %s", fn.name, call_env)
    try:
        signal = run_body(fn.declaration.body, call_env)
    except RecursionError:
        raise RecursionDepthExceeded(f"Calls to '{fn.name}' nest too deeply") from None
    match signal:
        case Return(value=value):
            return value
        case Break():
            raise IllegalControlFlow(f"Cannot break out of function '{fn.name}'")
        case None:
            return VOID_VALUE
    raise AssertionError(f"Unknown control signal {signal!r}")


def apply(fn: FunctionValue, args: list[Value], run_body: BodyRunner, position: int | None = None) -> Value:
    """Invoke a closure or builtin with already-evaluated arguments.

    Errors of the call itself (arguments, builtin failures, the returned type)
    are reported at `position`, the call site. Errors raised inside a closure
    body keep their own position.
    """
    with located(position):
        check_arguments(fn.name, fn.type, args)

    if isinstance(fn, Closure):
        try:
            result = apply_closure(fn, args, run_body)
        except RecursionDepthExceeded as e:
            # report the outermost call of the runaway chain
            e.position = position
            raise
    elif isinstance(fn, Builtin):
        with located(position):
            result = fn(args)
    else:
        raise TypeMismatch(f"Cannot call {fn!r}", position)

    if not matches(result.type, fn.type.return_type):
        raise TypeMismatch(
            f"'{fn.name}' must return {fn.type.return_type}, returned {result.type}",
            position,
        )
    return result
