import numpy as np
import pytest

from fractax.core.typing import SIGNED_INTEGER_DTYPES, _signed_integer_dtypes, is_integer_like, resolve_dtype


def test_signed_integer_dtypes_contains_basic_set():
    """Fixed-width signed integers must always be present."""
    for dt in (np.int8, np.int16, np.int32, np.int64):
        assert np.dtype(dt) in SIGNED_INTEGER_DTYPES


def test_signed_integer_dtypes_no_duplicates():
    """Platform aliases like intc and longlong must not show up twice"""
    assert len(SIGNED_INTEGER_DTYPES) == len(set(SIGNED_INTEGER_DTYPES))


def test_signed_integer_dtypes_cached():
    assert _signed_integer_dtypes() is _signed_integer_dtypes()


def test_resolve_dtype_accepts_specifiers():
    assert resolve_dtype(np.int16) == np.dtype(np.int16)
    assert resolve_dtype("int32") == np.dtype(np.int32)
    assert resolve_dtype(np.dtype(np.int64)) == np.dtype(np.int64)


@pytest.mark.parametrize("dtype", [np.uint8, np.uint64, np.float32, np.float64, np.bool_, np.complex64, "not-a-type"])
def test_resolve_dtype_rejects_non_signed_integers(dtype):
    """Only signed integer types satisfy the integral type contract"""
    with pytest.raises(TypeError):
        resolve_dtype(dtype)


def test_is_integer_like():
    assert is_integer_like(3)
    assert is_integer_like(np.int8(3))
    assert not is_integer_like(True)
    assert not is_integer_like(np.bool_(True))
    assert not is_integer_like(3.0)
    assert not is_integer_like(np.uint8(3))
    assert not is_integer_like("3")
