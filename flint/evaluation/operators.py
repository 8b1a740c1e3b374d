"""Operator semantics for Flint.

Binary operators are looked up by operator kind and operand types:

- `+ - * /` on two floats, `+` on two strings (concatenation)
- `< >` on two floats
- `&& ||` on two bools
- `== !=` on any two values whose types match each other

Both operands are already evaluated when these functions run. Anything not
listed raises UnsupportedOperator.
"""

from __future__ import annotations

import math

from flint.errors import UnsupportedOperator
from flint.reader.tokens import TokenKind
from flint.types.type_symbol import BOOL, FLOAT, STRING, matches
from flint.types.value import Value, payload_equal

SYMBOL_OF: dict[TokenKind, str] = {
    TokenKind.PLUS: "+",
    TokenKind.MINUS: "-",
    TokenKind.STAR: "*",
    TokenKind.SLASH: "/",
    TokenKind.LESS_THAN: "<",
    TokenKind.GREATER_THAN: ">",
    TokenKind.DOUBLE_AMPERSAND: "&&",
    TokenKind.DOUBLE_PIPE: "||",
    TokenKind.DOUBLE_EQUALS: "==",
    TokenKind.BANG_EQUALS: "!=",
}


def divide(left: float, right: float) -> float:
    """IEEE division: a zero divisor gives a signed infinity or NaN instead of an error."""
    if right != 0:
        return left / right
    if left == 0 or math.isnan(left):
        return math.nan
    return math.copysign(math.inf, left) * math.copysign(1.0, right)


ARITHMETIC = {
    TokenKind.PLUS: lambda a, b: a + b,
    TokenKind.MINUS: lambda a, b: a - b,
    TokenKind.STAR: lambda a, b: a * b,
    TokenKind.SLASH: divide,
}

RELATIONAL = {
    TokenKind.LESS_THAN: lambda a, b: a < b,
    TokenKind.GREATER_THAN: lambda a, b: a > b,
}

LOGICAL = {
    TokenKind.DOUBLE_AMPERSAND: lambda a, b: a and b,
    TokenKind.DOUBLE_PIPE: lambda a, b: a or b,
}


def _unsupported(operator: TokenKind, *operands: Value) -> UnsupportedOperator:
    symbol = SYMBOL_OF.get(operator, operator.name)
    types = " and ".join(str(v.type) for v in operands)
    return UnsupportedOperator(f"No operator '{symbol}' exists for {types}")


def unary(operator: TokenKind, operand: Value) -> Value:
    if operator is TokenKind.MINUS and matches(operand.type, FLOAT):
        return Value.number(-operand.payload)
    raise _unsupported(operator, operand)


def binary(operator: TokenKind, left: Value, right: Value) -> Value:
    if matches(left.type, FLOAT) and matches(right.type, FLOAT):
        if operator in ARITHMETIC:
            return Value.number(ARITHMETIC[operator](left.payload, right.payload))
        if operator in RELATIONAL:
            return Value.boolean(RELATIONAL[operator](left.payload, right.payload))

    if matches(left.type, BOOL) and matches(right.type, BOOL) and operator in LOGICAL:
        return Value.boolean(LOGICAL[operator](left.payload, right.payload))

    if operator in (TokenKind.DOUBLE_EQUALS, TokenKind.BANG_EQUALS):
        if not matches(left.type, right.type):
            raise _unsupported(operator, left, right)
        equal = payload_equal(left.payload, right.payload)
        return Value.boolean(equal if operator is TokenKind.DOUBLE_EQUALS else not equal)

    if operator is TokenKind.PLUS and matches(left.type, STRING) and matches(right.type, STRING):
        return Value.text(left.payload + right.payload)

    raise _unsupported(operator, left, right)
