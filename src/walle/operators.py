## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from typing import Callable

from .tokens import TokenKind
from .types import Value, type_of, type_name
from .errors import WalleExecutionError


## ARITHMETIC
def op_add(b: int, a: int) -> int: return b + a
def op_sub(b: int, a: int) -> int: return b - a
def op_mul(b: int, a: int) -> int: return b * a

def op_div(b: int, a: int) -> int:
    if a == 0: raise WalleExecutionError("Division by zero.")
    quotient = abs(b) // abs(a)
    return quotient if (b < 0) == (a < 0) else -quotient

def op_rem(b: int, a: int) -> int:
    if a == 0: raise WalleExecutionError("Modulo by zero.")
    return b - a * op_div(b, a)

def op_pow(b: int, a: int) -> int:
    if a >= 0: return b ** a
    if b == 0: raise WalleExecutionError("Zero cannot be raised to a negative power.")
    return round(b ** a)

## COMPARISON
def op_equal(b: Value, a: Value) -> bool: return b == a
def op_gt(b: Value, a: Value) -> bool: return b > a
def op_gte(b: Value, a: Value) -> bool: return b >= a
def op_lt(b: Value, a: Value) -> bool: return b < a
def op_lte(b: Value, a: Value) -> bool: return b <= a
## BOOLEAN LOGIC
def op_and(b: bool, a: bool) -> bool: return b and a
def op_or(b: bool, a: bool) -> bool: return b or a


ARITHMETIC: dict[TokenKind, Callable[[int, int], int]] = {
    TokenKind.PLUS: op_add, TokenKind.MINUS: op_sub, TokenKind.MULTIPLY: op_mul,
    TokenKind.DIVIDE: op_div, TokenKind.MODULO: op_rem, TokenKind.POWER: op_pow,
}
COMPARISON: dict[TokenKind, Callable[[Value, Value], bool]] = {
    TokenKind.EQUAL: op_equal, TokenKind.GREATER: op_gt, TokenKind.GREATER_EQUAL: op_gte,
    TokenKind.LESS: op_lt, TokenKind.LESS_EQUAL: op_lte,
}
LOGICAL: dict[TokenKind, Callable[[bool, bool], bool]] = {
    TokenKind.AND: op_and, TokenKind.OR: op_or,
}


def apply_binary(operator: TokenKind, left: Value, right: Value) -> Value:
    """Apply an operator to two evaluated operands, enforcing tag agreement without coercions."""
    lt, rt = type_of(left), type_of(right)
    if (fn := ARITHMETIC.get(operator)) is not None:
        if lt is not int or rt is not int:
            raise WalleExecutionError(f"Operator `{operator.value}` expects Int operands, got {type_name(lt)} and {type_name(rt)}.")
        return fn(left, right)
    if (fn := COMPARISON.get(operator)) is not None:
        if lt is not rt:
            raise WalleExecutionError(f"Operator `{operator.value}` compares values of the same type, got {type_name(lt)} and {type_name(rt)}.")
        return fn(left, right)
    if (fn := LOGICAL.get(operator)) is not None:
        if lt is not bool or rt is not bool:
            raise WalleExecutionError(f"Operator `{operator.value}` expects Bool operands, got {type_name(lt)} and {type_name(rt)}.")
        return fn(left, right)
    raise WalleExecutionError(f"Unsupported operator `{operator.value}`.")
