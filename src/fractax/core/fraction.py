from __future__ import annotations

import logging
import math
import re
from typing import Any

import jax
import numpy as np

from fractax.core.constants import FRACTION_SEPARATOR, INF_TEXT, NAN_TEXT
from fractax.core.typing import IntegerLike, is_integer_like
from fractax.core.utils import canonicalize, infer_dtype, to_integer

logger = logging.getLogger(__name__)

# optionally signed decimal integers, no whitespace or digit separators around the slash
_FRACTION_TEXT = re.compile(rf"([+-]?[0-9]+)(?:{re.escape(FRACTION_SEPARATOR)}([+-]?[0-9]+))?")


def _is_operand(x: Any) -> bool:
    return isinstance(x, Fraction) or is_integer_like(x)


@jax.tree_util.register_pytree_node_class
class Fraction:
    """Exact rational number num/den over a fixed-width signed integer type.

    Fractions are always stored in canonical form: the denominator is non-negative and the pair is
    reduced by its greatest common divisor, zero being (0, 1). A zero denominator encodes the non-finite
    values, (±n, 0) is infinity and (0, 0) is not-a-number. Arithmetic never raises for these cases,
    dividing by a zero-valued fraction yields Inf (or NaN for 0/0).

    Cross products are computed in the fraction's dtype and wrap around on overflow. Choosing a dtype
    wide enough for the values at hand is up to the caller. A canonical form that cannot be represented
    at all, like 1/-128 in int8 whose denominator would be 128, raises OverflowError.

    Args:
        num (IntegerLike, optional): Numerator. Defaults to 0.
        den (IntegerLike | None, optional): Denominator, may be zero. Defaults to None, meaning 1.
        dtype (Any, optional): Signed integer type of numerator and denominator. Inferred from numpy
            arguments if not given, falling back to int64.

    Raises:
        TypeError: If a value is not an integer or dtype is not a signed integer type.
        OverflowError: If a value, or the canonical denominator, does not fit into dtype.
    """

    __slots__ = ("_num", "_den")

    # numpy scalars on the left hand side defer to the reflected operators below
    __array_ufunc__ = None

    def __init__(
        self,
        num: IntegerLike = 0,
        den: IntegerLike | None = None,
        *,
        dtype: Any = None,
    ):
        dt = infer_dtype(num, den, dtype=dtype)
        n = to_integer(num, dt)
        if den is None:
            d = dt.type(1)
        else:
            n, d = canonicalize(n, to_integer(den, dt))
        object.__setattr__(self, "_num", n)
        object.__setattr__(self, "_den", d)

    @classmethod
    def _from_canonical(cls, num: np.signedinteger, den: np.signedinteger) -> Fraction:
        obj = object.__new__(cls)
        object.__setattr__(obj, "_num", num)
        object.__setattr__(obj, "_den", den)
        return obj

    @classmethod
    def from_text(cls, text: str, dtype: Any = None) -> Fraction:
        """Parses the canonical text form produced by ``str``.

        Accepts "NaN", "Inf", "-Inf", "<num>/<den>" and "<num>". Surrounding whitespace is ignored and
        the result is canonicalized, so "2/4" parses to 1/2.

        Raises:
            ValueError: If the text is not a fraction, or its integers do not fit into dtype.
        """
        if not isinstance(text, str):
            raise TypeError(f"Expected str, but got {type(text).__name__}")
        stripped = text.strip()
        if stripped == NAN_TEXT:
            result = cls(0, 0, dtype=dtype)
        elif stripped in (INF_TEXT, "+" + INF_TEXT, "-" + INF_TEXT):
            result = cls(-1 if stripped.startswith("-") else 1, 0, dtype=dtype)
        else:
            match = _FRACTION_TEXT.fullmatch(stripped)
            if match is None:
                raise ValueError(f"Invalid fraction text: {text!r}")
            values = [int(g) for g in match.groups() if g is not None]
            try:
                result = cls(*values, dtype=dtype)
            except OverflowError as e:
                raise ValueError(f"Fraction text {text!r} does not fit into the integer type") from e
        if not result.is_finite():
            logger.debug("Parsed non-finite fraction %s from %r", result, text)
        return result

    @property
    def num(self) -> np.signedinteger:
        return self._num

    @property
    def den(self) -> np.signedinteger:
        return self._den

    @property
    def dtype(self) -> np.dtype:
        return self._num.dtype

    def is_finite(self) -> bool:
        return bool(self._den != 0)

    def is_inf(self) -> bool:
        return bool(self._den == 0 and self._num != 0)

    def is_nan(self) -> bool:
        return bool(self._den == 0 and self._num == 0)

    def value(self) -> float:
        if self.is_nan():
            return math.nan
        if self.is_inf():
            return math.copysign(math.inf, int(self._num))
        return int(self._num) / int(self._den)

    def __float__(self) -> float:
        return self.value()

    def __str__(self) -> str:
        if self.is_nan():
            return NAN_TEXT
        if self.is_inf():
            return INF_TEXT
        return f"{int(self._num)}{FRACTION_SEPARATOR}{int(self._den)}"

    def __repr__(self) -> str:
        return f"Fraction({int(self._num)}, {int(self._den)}, dtype={self.dtype.name})"

    def __hash__(self) -> int:
        # integral fractions compare equal to ints, so they have to hash like them
        if self._den == 1:
            return hash(int(self._num))
        return hash((int(self._num), int(self._den)))

    def __setattr__(self, name: str, value: Any):
        raise AttributeError(f"Fraction is immutable, cannot set attribute {name}")

    def __delattr__(self, name: str):
        raise AttributeError(f"Fraction is immutable, cannot delete attribute {name}")

    def __copy__(self) -> Fraction:
        return self

    def __deepcopy__(self, memo: dict) -> Fraction:
        return self

    def __reduce__(self):
        return (self.__class__._from_canonical, (self._num, self._den))

    def tree_flatten(self):
        return (self._num, self._den), self.dtype

    @classmethod
    def tree_unflatten(cls, aux_data: np.dtype, children: Any) -> Fraction:
        # concrete integer leaves are restored to the static dtype, other leaves (tracers, placeholders) pass through
        num, den = (aux_data.type(c) if is_integer_like(c) else c for c in children)
        return cls._from_canonical(num, den)

    # Arithmetic
    def __add__(self, other: Fraction | IntegerLike) -> Fraction:
        from fractax.functional.arithmetic import add

        if not _is_operand(other):
            return NotImplemented
        return add(self, other)

    def __radd__(self, other: IntegerLike) -> Fraction:
        from fractax.functional.arithmetic import add

        if not _is_operand(other):
            return NotImplemented
        return add(other, self)

    def __sub__(self, other: Fraction | IntegerLike) -> Fraction:
        from fractax.functional.arithmetic import subtract

        if not _is_operand(other):
            return NotImplemented
        return subtract(self, other)

    def __rsub__(self, other: IntegerLike) -> Fraction:
        from fractax.functional.arithmetic import subtract

        if not _is_operand(other):
            return NotImplemented
        return subtract(other, self)

    def __mul__(self, other: Fraction | IntegerLike) -> Fraction:
        from fractax.functional.arithmetic import multiply

        if not _is_operand(other):
            return NotImplemented
        return multiply(self, other)

    def __rmul__(self, other: IntegerLike) -> Fraction:
        from fractax.functional.arithmetic import multiply

        if not _is_operand(other):
            return NotImplemented
        return multiply(other, self)

    def __truediv__(self, other: Fraction | IntegerLike) -> Fraction:
        from fractax.functional.arithmetic import divide

        if not _is_operand(other):
            return NotImplemented
        return divide(self, other)

    def __rtruediv__(self, other: IntegerLike) -> Fraction:
        from fractax.functional.arithmetic import divide

        if not _is_operand(other):
            return NotImplemented
        return divide(other, self)

    def __pow__(self, exponent: IntegerLike) -> Fraction:
        from fractax.functional.arithmetic import power

        if not is_integer_like(exponent):
            return NotImplemented
        return power(self, exponent)

    def __neg__(self) -> Fraction:
        from fractax.functional.arithmetic import negative

        return negative(self)

    def __pos__(self) -> Fraction:
        return self

    def __abs__(self) -> Fraction:
        from fractax.functional.arithmetic import negative

        if self._num < 0:
            return negative(self)
        return self

    def reciprocal(self) -> Fraction:
        from fractax.functional.arithmetic import divide

        return divide(1, self)

    # Comparison operators
    def __eq__(self, other: Any) -> bool:
        from fractax.functional.arithmetic import eq

        if not _is_operand(other):
            return NotImplemented
        return eq(self, other)

    def __ne__(self, other: Any) -> bool:
        from fractax.functional.arithmetic import ne

        if not _is_operand(other):
            return NotImplemented
        return ne(self, other)

    def __gt__(self, other: Fraction | IntegerLike) -> bool:
        from fractax.functional.arithmetic import gt

        if not _is_operand(other):
            return NotImplemented
        return gt(self, other)

    def __ge__(self, other: Fraction | IntegerLike) -> bool:
        from fractax.functional.arithmetic import ge

        if not _is_operand(other):
            return NotImplemented
        return ge(self, other)

    def __lt__(self, other: Fraction | IntegerLike) -> bool:
        from fractax.functional.arithmetic import lt

        if not _is_operand(other):
            return NotImplemented
        return lt(self, other)

    def __le__(self, other: Fraction | IntegerLike) -> bool:
        from fractax.functional.arithmetic import le

        if not _is_operand(other):
            return NotImplemented
        return le(self, other)
