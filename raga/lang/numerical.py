"""Runtime values for raga: 32-bit signed integers and unit. Arithmetic is checked, so results that would overflow a
32-bit integer or divide by zero raise an EvalError instead of wrapping or crashing.
"""

from abc import ABC
from dataclasses import dataclass

from raga.lang.error import EvalError


INT_MIN = -2 ** 31
INT_MAX = 2 ** 31 - 1


def fits(num):
    """Whether or not num can be stored in a 32-bit signed integer."""
    return INT_MIN <= num <= INT_MAX


class Val(ABC):
    """Superclass for any value produced by evaluating a statement."""


@dataclass(frozen=True)
class Number(Val):
    value: int

    def __post_init__(self):
        if not fits(self.value):
            raise EvalError("'{}' does not fit in 32 bits", str(self.value), internal=True)

    def __str__(self):
        return str(self.value)


@dataclass(frozen=True)
class Unit(Val):
    """Result of definitions and empty blocks."""

    def __str__(self):
        return "Unit"


UNIT = Unit()


def _checked(result, lhs, symbol, rhs):
    if not fits(result):
        raise EvalError("result of '{}' does not fit in 32 bits", f"{lhs} {symbol} {rhs}")
    return Number(result)


def add(lhs, rhs):
    return _checked(lhs + rhs, lhs, "+", rhs)


def sub(lhs, rhs):
    return _checked(lhs - rhs, lhs, "-", rhs)


def mul(lhs, rhs):
    return _checked(lhs * rhs, lhs, "*", rhs)


def div(lhs, rhs):
    """Integer division truncating toward zero (-7 / 2 = -3), unlike python's floor division."""
    if rhs == 0:
        raise EvalError("cannot divide by zero")

    quotient = abs(lhs) // abs(rhs)
    if (lhs < 0) != (rhs < 0):
        quotient = -quotient
    return _checked(quotient, lhs, "/", rhs)
