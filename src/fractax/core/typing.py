from __future__ import annotations

from functools import lru_cache
from typing import Any, Tuple, Union

import numpy as np


# Values accepted as numerator / denominator. Python ints are converted into the fixed-width dtype.
IntegerLike = Union[
    int,
    np.signedinteger,
]


@lru_cache(maxsize=1)
def _signed_integer_dtypes() -> Tuple[np.dtype, ...]:
    """
    Return the fixed-width signed integer dtypes a fraction can be built on.
    Platform aliases (intc, intp, longlong) resolve to one of these and are deduplicated.
    """
    dtypes: list[np.dtype] = []
    for candidate in (np.int8, np.int16, np.int32, np.int64, np.intc, np.intp, np.longlong):
        dt = np.dtype(candidate)
        if dt not in dtypes:
            dtypes.append(dt)
    return tuple(dtypes)


# integer dtypes which satisfy the "integral type required" contract
SIGNED_INTEGER_DTYPES = _signed_integer_dtypes()


def resolve_dtype(dtype: Any) -> np.dtype:
    """Normalizes a dtype specifier and enforces the integral type contract.

    Args:
        dtype (Any): Anything accepted by ``np.dtype``, e.g. ``np.int32`` or ``"int16"``.

    Raises:
        TypeError: If the specifier is not a signed fixed-width integer type.

    Returns:
        np.dtype: The normalized dtype.
    """
    try:
        dt = np.dtype(dtype)
    except TypeError as e:
        raise TypeError(f"Integer required, but got dtype specifier {dtype!r}") from e
    if dt not in SIGNED_INTEGER_DTYPES:
        raise TypeError(f"Integer required, but got dtype {dt}. Only signed integer types are supported.")
    return dt


def is_integer_like(x: Any) -> bool:
    # bool is a subclass of int, but not an integer value here
    if isinstance(x, bool | np.bool_):
        return False
    return isinstance(x, IntegerLike)


def fits_dtype(x: IntegerLike, dtype: np.dtype) -> bool:
    info = np.iinfo(dtype)
    return info.min <= int(x) <= info.max
