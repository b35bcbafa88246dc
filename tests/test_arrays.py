"""Tests for the numpy bulk helpers."""

import numpy as np
import pytest

from fixedflags import BitFlags8, BitFlags16, BitFlags64, BitFlags128, BitValueError
from fixedflags.engine import arrays


def test_to_words_dtype(flags_cls) -> None:
    values = [flags_cls(0), flags_cls(1), flags_cls.full()]
    words = arrays.to_words(values)
    if flags_cls.WIDTH == 128:
        assert words.shape == (3, 2)
        assert words.dtype == np.uint64
        assert words[2].tolist() == [2**64 - 1, 2**64 - 1]
    else:
        assert words.shape == (3,)
        assert words.dtype.itemsize * 8 == flags_cls.WIDTH
        assert int(words[2]) == flags_cls.MAX
    assert arrays.from_words(words, flags_cls) == values


def test_to_words_128_limbs() -> None:
    words = arrays.to_words([BitFlags128(1 << 64 | 5)])
    assert words.tolist() == [[5, 1]]


def test_empty_sequence_needs_type() -> None:
    with pytest.raises(ValueError):
        arrays.to_words([])
    assert arrays.to_words([], BitFlags128).shape == (0, 2)
    assert arrays.to_bool_matrix([], BitFlags16).shape == (0, 16)


def test_mixed_widths_rejected() -> None:
    with pytest.raises(TypeError):
        arrays.to_words([BitFlags8(1), BitFlags16(1)])


def test_from_words_validates() -> None:
    with pytest.raises(BitValueError):
        arrays.from_words(np.array([256], dtype=np.int64), BitFlags8)
    with pytest.raises(ValueError):
        arrays.from_words(np.zeros((2, 2), dtype=np.uint8), BitFlags8)
    with pytest.raises(ValueError):
        arrays.from_words(np.zeros(4, dtype=np.uint64), BitFlags128)


def test_bool_matrix_columns_follow_bit_index() -> None:
    matrix = arrays.to_bool_matrix([BitFlags8(0b0000_1001), BitFlags8(0b1000_0000)])
    assert matrix.shape == (2, 8)
    assert matrix.dtype == np.bool_
    assert np.flatnonzero(matrix[0]).tolist() == [0, 3]
    assert np.flatnonzero(matrix[1]).tolist() == [7]


def test_bool_matrix_round_trip(flags_cls) -> None:
    values = [flags_cls.from_slice([0, flags_cls.WIDTH - 1]), flags_cls.with_first_n_set(5)]
    matrix = arrays.to_bool_matrix(values)
    assert matrix.sum(axis=1).tolist() == [2, 5]
    assert arrays.from_bool_matrix(matrix, flags_cls) == values


def test_from_bool_matrix_shape_mismatch() -> None:
    with pytest.raises(ValueError):
        arrays.from_bool_matrix(np.zeros((1, 8), dtype=bool), BitFlags64)


@pytest.mark.parametrize(
    "array, cls",
    [
        (np.array([1.7]), BitFlags8),
        (np.array([True, False]), BitFlags8),
        (np.array([[1.0, 0.0]]), BitFlags128),
    ],
)
def test_from_words_rejects_non_integer_dtype(array, cls) -> None:
    with pytest.raises(ValueError, match="integer array"):
        arrays.from_words(array, cls)
