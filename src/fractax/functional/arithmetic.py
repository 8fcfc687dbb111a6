from __future__ import annotations

import logging
from typing import Union, overload

import numpy as np

from fractax.core.fraction import Fraction
from fractax.core.typing import IntegerLike, fits_dtype, is_integer_like
from fractax.core.utils import canonicalize, wrapping_arithmetic, wrapping_power

logger = logging.getLogger(__name__)

AnyFractionType = Union[Fraction, IntegerLike]


def promote_operands(
    x: AnyFractionType,
    y: AnyFractionType,
) -> tuple[Fraction, Fraction]:
    """Brings both operands of a binary operation to fractions of one dtype.

    An integer operand is converted to a fraction with the dtype of the other operand.

    Args:
        x (AnyFractionType): Left operand
        y (AnyFractionType): Right operand

    Raises:
        TypeError: If the fractions have different dtypes or an operand is neither fraction nor integer.

    Returns:
        tuple[Fraction, Fraction]: Both operands as fractions
    """
    if isinstance(x, Fraction) and isinstance(y, Fraction):
        if x.dtype != y.dtype:
            raise TypeError(f"Cannot combine fractions of different integer types {x.dtype} and {y.dtype}")
        return x, y
    if isinstance(x, Fraction) and is_integer_like(y):
        return x, Fraction(y, dtype=x.dtype)
    if is_integer_like(x) and isinstance(y, Fraction):
        return Fraction(x, dtype=y.dtype), y
    raise TypeError(f"Unsupported operand types for fraction arithmetic: {type(x).__name__} and {type(y).__name__}")


def _canonical_result(
    num: np.signedinteger,
    den: np.signedinteger,
    op_name: str,
    x: Fraction,
    y: Fraction,
) -> Fraction:
    num, den = canonicalize(num, den)
    result = Fraction._from_canonical(num, den)
    if x.is_finite() and y.is_finite() and not result.is_finite():
        logger.debug("%s(%s, %s) produced non-finite result %s", op_name, x, y, result)
    return result


## Addition ###########################
@overload
def add(x: Fraction, y: Fraction) -> Fraction: ...


@overload
def add(x: Fraction, y: IntegerLike) -> Fraction: ...


@overload
def add(x: IntegerLike, y: Fraction) -> Fraction: ...


def add(x: AnyFractionType, y: AnyFractionType) -> Fraction:
    x, y = promote_operands(x, y)
    with wrapping_arithmetic():
        num = x.num * y.den + y.num * x.den
        den = x.den * y.den
    return _canonical_result(num, den, "add", x, y)


## Subtraction ###########################
@overload
def subtract(x: Fraction, y: Fraction) -> Fraction: ...


@overload
def subtract(x: Fraction, y: IntegerLike) -> Fraction: ...


@overload
def subtract(x: IntegerLike, y: Fraction) -> Fraction: ...


def subtract(x: AnyFractionType, y: AnyFractionType) -> Fraction:
    x, y = promote_operands(x, y)
    with wrapping_arithmetic():
        num = x.num * y.den - y.num * x.den
        den = x.den * y.den
    return _canonical_result(num, den, "subtract", x, y)


## Multiplication ###########################
@overload
def multiply(x: Fraction, y: Fraction) -> Fraction: ...


@overload
def multiply(x: Fraction, y: IntegerLike) -> Fraction: ...


@overload
def multiply(x: IntegerLike, y: Fraction) -> Fraction: ...


def multiply(x: AnyFractionType, y: AnyFractionType) -> Fraction:
    x, y = promote_operands(x, y)
    with wrapping_arithmetic():
        num = x.num * y.num
        den = x.den * y.den
    return _canonical_result(num, den, "multiply", x, y)


## Division ###########################
@overload
def divide(x: Fraction, y: Fraction) -> Fraction: ...


@overload
def divide(x: Fraction, y: IntegerLike) -> Fraction: ...


@overload
def divide(x: IntegerLike, y: Fraction) -> Fraction: ...


def divide(x: AnyFractionType, y: AnyFractionType) -> Fraction:
    """
    Multiplication with the reciprocal of y. Dividing by a zero-valued fraction does not raise, the
    denominator of the result becomes zero and the result is Inf, or NaN if x is zero as well.
    """
    x, y = promote_operands(x, y)
    with wrapping_arithmetic():
        num = x.num * y.den
        den = x.den * y.num
    return _canonical_result(num, den, "divide", x, y)


## Unary ###########################
def negative(x: Fraction) -> Fraction:
    # negation keeps the gcd, so the result is canonical without reduction
    with wrapping_arithmetic():
        return Fraction._from_canonical(-x.num, x.den)


def power(x: Fraction, exponent: IntegerLike) -> Fraction:
    """Raises a fraction to an integer power.

    A negative exponent raises the reciprocal, so zero to a negative power is Inf. Following the
    convention of repeated multiplication, any fraction to the power of zero is 1/1.

    Args:
        x (Fraction): Base
        exponent (IntegerLike): Integer exponent

    Returns:
        Fraction: canonical x**exponent
    """
    if not is_integer_like(exponent):
        raise TypeError(f"Exponent must be an integer, but got {type(exponent).__name__}")
    exponent = int(exponent)
    if exponent < 0:
        x = divide(1, x)
        exponent = -exponent
    num = wrapping_power(x.num, exponent)
    den = wrapping_power(x.den, exponent)
    num, den = canonicalize(num, den)
    return Fraction._from_canonical(num, den)


## Comparison ###########################
def eq(x: AnyFractionType, y: AnyFractionType) -> bool:
    """
    Structural equality of the canonical pairs, which is value equality since the canonical form is
    unique (NaN == NaN included). Fractions of different dtypes and integers outside the dtype range
    are never equal, so this returns a bool wherever the operands are fractions or integers.
    """
    if isinstance(x, Fraction) and isinstance(y, Fraction) and x.dtype != y.dtype:
        return False
    if isinstance(x, Fraction) and is_integer_like(y) and not fits_dtype(y, x.dtype):
        return False
    if is_integer_like(x) and isinstance(y, Fraction) and not fits_dtype(x, y.dtype):
        return False
    x, y = promote_operands(x, y)
    return bool(x.num == y.num and x.den == y.den)


def gt(x: AnyFractionType, y: AnyFractionType) -> bool:
    # cross multiplication, denominators are non-negative. Applied to non-finite values as is.
    x, y = promote_operands(x, y)
    with wrapping_arithmetic():
        return bool(x.num * y.den > y.num * x.den)


def ne(x: AnyFractionType, y: AnyFractionType) -> bool:
    return not eq(x, y)


def lt(x: AnyFractionType, y: AnyFractionType) -> bool:
    return gt(y, x)


def ge(x: AnyFractionType, y: AnyFractionType) -> bool:
    return not gt(y, x)


def le(x: AnyFractionType, y: AnyFractionType) -> bool:
    return not gt(x, y)
