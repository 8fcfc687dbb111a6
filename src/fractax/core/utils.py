from __future__ import annotations

import math
from typing import Any

import numpy as np

from fractax.core.constants import DEFAULT_INT_DTYPE
from fractax.core.typing import is_integer_like, resolve_dtype


def wrapping_arithmetic() -> np.errstate:
    """
    Context in which fixed-width integer overflow wraps around silently. Cross products of large
    fractions can exceed the integer type, detecting this is left to the caller choosing the dtype.
    """
    return np.errstate(over="ignore")


def infer_dtype(*values: Any, dtype: Any = None) -> np.dtype:
    """Determines the integer type of a fraction from its constructor arguments.

    An explicit dtype always wins. Otherwise the dtype of numpy integer arguments is used, and plain
    Python ints fall back to DEFAULT_INT_DTYPE.

    Args:
        *values (Any): Numerator and denominator as passed by the caller
        dtype (Any, optional): Explicit dtype. Defaults to None.

    Raises:
        TypeError: If numpy arguments of different widths are mixed without an explicit dtype.

    Returns:
        np.dtype: dtype of the fraction
    """
    if dtype is not None:
        return resolve_dtype(dtype)
    found: np.dtype | None = None
    for v in values:
        if not isinstance(v, np.generic):
            continue
        dt = resolve_dtype(v.dtype)
        if found is not None and dt != found:
            raise TypeError(f"Cannot build a fraction from mixed integer types {found} and {dt}")
        found = dt
    if found is None:
        return resolve_dtype(DEFAULT_INT_DTYPE)
    return found


def to_integer(x: Any, dtype: np.dtype) -> np.signedinteger:
    """Converts a Python or numpy integer into a scalar of the given dtype.

    Raises:
        TypeError: If x is not an integer value.
        OverflowError: If x does not fit into dtype.
    """
    if not is_integer_like(x):
        raise TypeError(f"Integer required, but got {type(x).__name__}: {x!r}")
    if isinstance(x, np.generic):
        if x.dtype == dtype:
            return x
        x = int(x)
    return dtype.type(x)


def canonicalize(
    num: np.signedinteger,
    den: np.signedinteger,
) -> tuple[np.signedinteger, np.signedinteger]:
    """
    Moves the sign into the numerator and divides out the greatest common divisor. A zero denominator
    marks a non-finite value (Inf or NaN) and is returned unchanged.

    Args:
        num (np.signedinteger): numerator
        den (np.signedinteger): denominator, same dtype as num

    Raises:
        OverflowError: If the canonical denominator does not fit the dtype, e.g. 1/-128 in int8.

    Returns:
        tuple[np.signedinteger, np.signedinteger]: canonical (num, den)
    """
    if den == 0:
        return num, den
    dtype = num.dtype
    info = np.iinfo(dtype)
    if num == info.min or den == info.min:
        # negating the minimum wraps onto itself, reduce with Python ints instead
        n, d = int(num), int(den)
        if d < 0:
            n, d = -n, -d
        common_divisor = math.gcd(n, d)
        n, d = n // common_divisor, d // common_divisor
        if d > info.max or n > info.max:
            raise OverflowError(f"Canonical form of {int(num)}/{int(den)} does not fit into {dtype}")
        return dtype.type(n), dtype.type(d)
    with wrapping_arithmetic():
        if den < 0:
            num, den = -num, -den
        # gcd(0, den) == den, so zero becomes (0, 1)
        common_divisor = np.gcd(num, den)
        if common_divisor != 0:
            num = num // common_divisor
            den = den // common_divisor
    return num, den


def wrapping_power(base: np.signedinteger, exponent: int) -> np.signedinteger:
    """
    Computes base**exponent for a non-negative exponent in the dtype of base, wrapping around on
    overflow like repeated multiplication would.
    """
    if exponent < 0:
        raise ValueError(f"Exponent must be non-negative, but got {exponent}")
    bits = base.dtype.itemsize * 8
    modulus = 1 << bits
    result = pow(int(base), exponent, modulus)
    # two's complement interpretation of the lower bits
    if result >= modulus >> 1:
        result -= modulus
    return base.dtype.type(result)
