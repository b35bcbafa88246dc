"""Width-parameterized integer bit primitives."""
from __future__ import annotations

import sys
from collections.abc import Iterable, Iterator

WIDTHS = (8, 16, 32, 64, 128)


def max_value(width: int) -> int:
    return (1 << width) - 1


def make_bitset(indexes: Iterable[int]) -> int:
    value = 0
    for idx in indexes:
        value |= 1 << idx
    return value


# Optimize bit counting based on Python version (cached at module load time)
if sys.version_info >= (3, 10):
    def count_bits(value: int) -> int:
        """Count the number of set bits using native int.bit_count() (Python 3.10+)."""
        return value.bit_count()
else:
    def count_bits(value: int) -> int:
        """Count the number of set bits using bin().count('1') (Python 3.9)."""
        return bin(value).count('1')


def iter_indexes(value: int) -> Iterator[int]:
    """Yield set bit positions in ascending order by peeling the lowest bit."""
    while value:
        low = value & -value
        yield low.bit_length() - 1
        value ^= low


def clear_bits(base: int, remove: int) -> int:
    return base & ~remove


def complement(value: int, width: int) -> int:
    return ~value & max_value(width)


def first_n_mask(n: int) -> int:
    top = 1 << (n - 1)
    return top | (top - 1)


def range_mask(start: int, end: int) -> int:
    """Mask with every bit in the inclusive range ``[start, end]`` set."""
    top = 1 << end
    return (top | (top - 1)) & ~((1 << start) - 1)


def smear_right(value: int, width: int) -> int:
    """OR ``value`` with right-shifted copies so every bit below its top bit is set."""
    shift = 1
    while shift < width:
        value |= value >> shift
        shift <<= 1
    return value


def highest_bit(value: int, width: int) -> int:
    smeared = smear_right(value, width)
    return smeared - (smeared >> 1)


def lowest_bit(value: int) -> int:
    return value & -value
