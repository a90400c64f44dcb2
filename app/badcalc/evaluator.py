"""
Arithmetic Evaluator Module

Applies one of the binary operators to two operands.

Undefined results (division or modulo by zero, arithmetic faults) come
back as NaN instead of raising, so callers only need one check:

    result = compute("5", "0", "/")
    if is_undefined(result):
        ...
"""

import math
from typing import Callable, Dict

from .parser import MAX_NUMERIC_LENGTH, parse_operand

UNDEFINED = math.nan

# Exponents saturate to the 32-bit signed integer range
INT_MIN = -2 ** 31
INT_MAX = 2 ** 31 - 1

# Menu option code -> operator symbol
OPERATOR_CODES: Dict[str, str] = {
    "1": "+",
    "2": "-",
    "3": "*",
    "4": "/",
    "5": "^",
    "6": "%",
}


def operator_for_code(code: str) -> str:
    """Resolve a menu option code. Unknown codes give the empty operator."""
    return OPERATOR_CODES.get(code, "")


def is_undefined(value: float) -> bool:
    """True if value is the undefined-result sentinel."""
    return math.isnan(value)


def _divide(a: float, b: float) -> float:
    if b == 0.0:
        return UNDEFINED
    return a / b


def _remainder(a: float, b: float) -> float:
    # fmod keeps the sign of the dividend
    if b == 0.0:
        return UNDEFINED
    return math.fmod(a, b)


def _integer_power(base: float, exponent: float) -> float:
    """
    Raise base to the truncated integer part of exponent by repeated
    multiplication. Exponents <= 0 yield 1.0. The exponent saturates to
    the 32-bit signed range.
    """
    result = 1.0
    remaining = min(max(int(exponent), INT_MIN), INT_MAX)
    while remaining > 0:
        step = result * base
        remaining -= 1
        if abs(step) == abs(result):
            # Magnitude is fixed (0, inf or |base| == 1); only the sign
            # still alternates for a negative base.
            if math.copysign(1.0, base) < 0 and remaining % 2 == 1:
                step = -step
            return step
        result = step
    return result


OPERATIONS: Dict[str, Callable[[float, float], float]] = {
    "+": lambda a, b: a + b,
    "-": lambda a, b: a - b,
    "*": lambda a, b: a * b,
    "/": _divide,
    "^": _integer_power,
    "%": _remainder,
}


def apply(a: float, b: float, operator: str) -> float:
    """
    Apply operator to two parsed values.

    Unknown operators return 0.0. Arithmetic faults return NaN.
    """
    operation = OPERATIONS.get(operator)
    if operation is None:
        return 0.0
    try:
        return operation(a, b)
    except ArithmeticError:
        return UNDEFINED


def compute(a_text: str, b_text: str, operator: str,
            max_length: int = MAX_NUMERIC_LENGTH) -> float:
    """
    Parse both operands and apply operator.

    Args:
        a_text: Left operand text
        b_text: Right operand text
        operator: One of + - * / ^ % (anything else yields 0.0)
        max_length: Parser length cap

    Returns:
        The result, or NaN when the result is undefined

    Raises:
        InvalidInput: If either operand fails to parse
    """
    a = parse_operand(a_text, max_length)
    b = parse_operand(b_text, max_length)
    return apply(a, b, operator)
