import logging

from fractax.core.fraction import Fraction
from fractax.core.typing import SIGNED_INTEGER_DTYPES
from fractax.functional.arithmetic import (
    add,
    divide,
    eq,
    ge,
    gt,
    le,
    lt,
    multiply,
    ne,
    negative,
    power,
    subtract,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())


__all__ = [
    "Fraction",
    "SIGNED_INTEGER_DTYPES",
    "add",
    "subtract",
    "multiply",
    "divide",
    "negative",
    "power",
    "eq",
    "ne",
    "gt",
    "ge",
    "lt",
    "le",
]
