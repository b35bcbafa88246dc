"""Fixed-width bit flag types.

One canonical definition, :class:`BitFlags`, is parameterized by the class
attribute ``WIDTH`` and instantiated as :class:`BitFlags8`,
:class:`BitFlags16`, :class:`BitFlags32`, :class:`BitFlags64` and
:class:`BitFlags128`.
"""
from __future__ import annotations

import operator
from collections.abc import Iterable, Iterator
from typing import TypeVar

from . import bitset
from .errors import BitIndexError, BitRangeError, BitValueError

F = TypeVar("F", bound="BitFlags")


def _as_int(value: object) -> int:
    try:
        return operator.index(value)
    except TypeError:
        raise TypeError(f"expected an integer, got {type(value).__name__}") from None


class BitFlags:
    """Set of bit positions ``0 .. WIDTH - 1`` backed by one unsigned integer.

    Methods named after a mutating verb (``insert``, ``remove``, ``toggle``,
    ``set``, ``clear`` and the ``*_at_index`` family) change the instance in
    place and return ``None``. Every other operation returns a new instance.

    Index-bearing accessors raise :class:`BitIndexError` for positions outside
    ``[0, WIDTH)``. The checked variants ``get_bit_at_index``,
    ``try_from_index`` and ``try_from_slice`` return ``None`` instead.

    Instances are mutable and therefore unhashable; use :meth:`copy` or
    :meth:`to_int` when a value needs to be shared or used as a key.
    """

    __slots__ = ("_bits",)

    WIDTH: int = 0
    MAX: int = 0

    def __init_subclass__(cls, **kwargs) -> None:
        super().__init_subclass__(**kwargs)
        if cls.WIDTH not in bitset.WIDTHS:
            raise TypeError(
                f"{cls.__name__}.WIDTH must be one of {bitset.WIDTHS}, got {cls.WIDTH}"
            )
        cls.MAX = bitset.max_value(cls.WIDTH)

    def __init__(self, value: int = 0) -> None:
        self._require_width()
        value = _as_int(value)
        if not 0 <= value <= self.MAX:
            raise BitValueError(
                f"{type(self).__name__} holds values from 0 to {self.MAX} (got {value})"
            )
        self._bits = value

    @classmethod
    def _require_width(cls) -> None:
        if not cls.WIDTH:
            raise TypeError("BitFlags has no width; use BitFlags8 .. BitFlags128")

    @classmethod
    def _wrap(cls: type[F], value: int) -> F:
        cls._require_width()
        obj = cls.__new__(cls)
        obj._bits = value
        return obj

    @classmethod
    def _check_index(cls, index: int) -> int:
        index = _as_int(index)
        if not 0 <= index < cls.WIDTH:
            raise BitIndexError(cls.__name__, cls.WIDTH, index)
        return index

    @classmethod
    def _in_range(cls, index: int) -> bool:
        return 0 <= _as_int(index) < cls.WIDTH

    @classmethod
    def _check_range(cls, start: int, end: int) -> tuple[int, int]:
        start, end = _as_int(start), _as_int(end)
        if not 0 <= start <= end < cls.WIDTH:
            raise BitRangeError(
                f"{cls.__name__} bit range needs 0 <= start <= end <= {cls.WIDTH - 1}"
                f" (got {start}..={end})"
            )
        return start, end

    def _same_width(self, other: object) -> bool:
        return isinstance(other, BitFlags) and other.WIDTH == self.WIDTH

    def _other_bits(self, other: BitFlags) -> int:
        if not self._same_width(other):
            raise TypeError(
                f"expected {type(self).__name__}, got {type(other).__name__}"
            )
        return other._bits

    # ---- construction ----
    @classmethod
    def new(cls: type[F]) -> F:
        return cls._wrap(0)

    @classmethod
    def empty(cls: type[F]) -> F:
        """Return an instance with every bit cleared."""
        return cls._wrap(0)

    @classmethod
    def full(cls: type[F]) -> F:
        """Return an instance with all ``WIDTH`` bits set."""
        return cls._wrap(cls.MAX)

    @classmethod
    def with_first_n_set(cls: type[F], n: int) -> F:
        """Return an instance with bits ``[0, n)`` set.

        Raises :class:`BitRangeError` unless ``1 <= n <= WIDTH``.
        """
        n = _as_int(n)
        if not 1 <= n <= cls.WIDTH:
            raise BitRangeError(
                f"{cls.__name__}.with_first_n_set needs 1 <= n <= {cls.WIDTH} (got {n})"
            )
        return cls._wrap(bitset.first_n_mask(n))

    @classmethod
    def with_set_bit_range(cls: type[F], start: int, end: int) -> F:
        """Return an instance with every bit in the inclusive range ``[start, end]`` set.

        Raises :class:`BitRangeError` unless ``0 <= start <= end < WIDTH``.
        """
        start, end = cls._check_range(start, end)
        return cls._wrap(bitset.range_mask(start, end))

    @classmethod
    def from_int(cls: type[F], value: int) -> F:
        return cls(value)

    @classmethod
    def from_index(cls: type[F], index: int) -> F:
        """Return the singleton set ``{index}``; raises :class:`BitIndexError` if out of range."""
        return cls._wrap(1 << cls._check_index(index))

    @classmethod
    def try_from_index(cls: type[F], index: int) -> F | None:
        if not cls._in_range(index):
            return None
        return cls._wrap(1 << _as_int(index))

    @classmethod
    def from_slice(cls: type[F], indices: Iterable[int]) -> F:
        """Union of the singleton sets for ``indices``. Order and duplicates do not matter."""
        return cls._wrap(bitset.make_bitset(cls._check_index(idx) for idx in indices))

    @classmethod
    def try_from_slice(cls: type[F], indices: Iterable[int]) -> F | None:
        checked = []
        for idx in indices:
            if not cls._in_range(idx):
                return None
            checked.append(_as_int(idx))
        return cls._wrap(bitset.make_bitset(checked))

    @classmethod
    def num_bits(cls) -> int:
        return cls.WIDTH

    # ---- raw value ----
    @property
    def bits(self) -> int:
        return self._bits

    def to_int(self) -> int:
        return self._bits

    def copy(self: F) -> F:
        return self._wrap(self._bits)

    __copy__ = copy

    def __deepcopy__(self: F, memo: dict) -> F:
        return self._wrap(self._bits)

    def __reduce__(self):
        return (type(self), (self._bits,))

    # ---- queries ----
    def is_empty(self) -> bool:
        return self._bits == 0

    def is_full(self) -> bool:
        return self._bits == self.MAX

    def intersects(self, other: BitFlags) -> bool:
        """True if ``self`` and ``other`` share at least one set bit."""
        return (self._bits & self._other_bits(other)) != 0

    def contains(self, other: BitFlags) -> bool:
        """True if every bit set in ``other`` is also set in ``self``."""
        other_bits = self._other_bits(other)
        return (self._bits & other_bits) == other_bits

    def bit_at_index(self, index: int) -> bool:
        return bool(self._bits >> self._check_index(index) & 1)

    def get_bit_at_index(self, index: int) -> bool | None:
        """Return the bit at ``index``, or ``None`` when ``index`` is out of range."""
        if not self._in_range(index):
            return None
        return bool(self._bits >> _as_int(index) & 1)

    def count_ones(self) -> int:
        return bitset.count_bits(self._bits)

    def count_zeros(self) -> int:
        return self.WIDTH - bitset.count_bits(self._bits)

    def highest_set_bit(self: F) -> F:
        """Return a singleton holding the highest set bit (empty if ``self`` is empty)."""
        return self._wrap(bitset.highest_bit(self._bits, self.WIDTH))

    def highest_set_bit_index(self) -> int | None:
        """Return the 0-based position of the highest set bit, or ``None`` if empty."""
        if not self._bits:
            return None
        return self._bits.bit_length() - 1

    def lowest_set_bit(self: F) -> F:
        return self._wrap(bitset.lowest_bit(self._bits))

    def lowest_set_bit_index(self) -> int | None:
        if not self._bits:
            return None
        return bitset.lowest_bit(self._bits).bit_length() - 1

    def iter(self) -> Iterator[int]:
        """Iterate over the positions of set bits in ascending order.

        E.g. ``BitFlags8(0b0000_1001)`` yields ``0`` then ``3``. Each call
        starts a fresh pass over the value as it is at call time.
        """
        return bitset.iter_indexes(self._bits)

    def to_binary_string(self) -> str:
        """Render as ``0b`` followed by exactly ``WIDTH`` binary digits."""
        return format(self._bits, f"#0{self.WIDTH + 2}b")

    # ---- set algebra (pure) ----
    def union(self: F, other: F) -> F:
        return self._wrap(self._bits | self._other_bits(other))

    def intersection(self: F, other: F) -> F:
        return self._wrap(self._bits & self._other_bits(other))

    def difference(self: F, other: F) -> F:
        return self._wrap(bitset.clear_bits(self._bits, self._other_bits(other)))

    def symmetric_difference(self: F, other: F) -> F:
        return self._wrap(self._bits ^ self._other_bits(other))

    def complement(self: F) -> F:
        """Flip all ``WIDTH`` bits."""
        return self._wrap(bitset.complement(self._bits, self.WIDTH))

    # ---- in-place mutation ----
    def insert(self, other: BitFlags) -> None:
        self._bits |= self._other_bits(other)

    def remove(self, other: BitFlags) -> None:
        self._bits = bitset.clear_bits(self._bits, self._other_bits(other))

    def toggle(self, other: BitFlags) -> None:
        self._bits ^= self._other_bits(other)

    def set(self, other: BitFlags, value: bool) -> None:
        """Insert ``other`` if ``value`` is true, otherwise remove it."""
        if value:
            self.insert(other)
        else:
            self.remove(other)

    def clear(self) -> None:
        self._bits = 0

    def insert_at_index(self, index: int) -> None:
        self._bits |= 1 << self._check_index(index)

    def remove_at_index(self, index: int) -> None:
        self._bits &= ~(1 << self._check_index(index))

    def toggle_at_index(self, index: int) -> None:
        self._bits ^= 1 << self._check_index(index)

    def set_at_index(self, index: int, value: bool) -> None:
        mask = 1 << self._check_index(index)
        if value:
            self._bits |= mask
        else:
            self._bits &= ~mask

    def set_bit_range(self, start: int, end: int) -> None:
        """Set every bit in the inclusive range ``[start, end]``."""
        start, end = self._check_range(start, end)
        self._bits |= bitset.range_mask(start, end)

    # ---- serialization shortcuts ----
    def to_bytes(self) -> bytes:
        from .codecs import get_codec

        return get_codec("bin").encode(self)

    @classmethod
    def from_bytes(cls: type[F], data: bytes) -> F:
        from .codecs import get_codec

        return get_codec("bin").decode(data, cls)

    def to_json(self) -> str:
        from .codecs import get_codec

        return get_codec("json").encode(self)

    @classmethod
    def from_json(cls: type[F], text: str) -> F:
        from .codecs import get_codec

        return get_codec("json").decode(text, cls)

    # ---- python protocols ----
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BitFlags):
            return NotImplemented
        return self.WIDTH == other.WIDTH and self._bits == other._bits

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._bits})"

    def __format__(self, spec: str) -> str:
        if not spec:
            return repr(self)
        if spec == "b":
            return self.to_binary_string()
        return format(self._bits, spec)

    def __int__(self) -> int:
        return self._bits

    def __index__(self) -> int:
        return self._bits

    def __bool__(self) -> bool:
        return self._bits != 0

    def __len__(self) -> int:
        return bitset.count_bits(self._bits)

    def __iter__(self) -> Iterator[int]:
        return bitset.iter_indexes(self._bits)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, BitFlags):
            return self.contains(item)
        return bool(self.get_bit_at_index(item))

    def __or__(self: F, other: object) -> F:
        if not self._same_width(other):
            return NotImplemented
        return self.union(other)

    def __and__(self: F, other: object) -> F:
        if not self._same_width(other):
            return NotImplemented
        return self.intersection(other)

    def __xor__(self: F, other: object) -> F:
        if not self._same_width(other):
            return NotImplemented
        return self.symmetric_difference(other)

    def __sub__(self: F, other: object) -> F:
        if not self._same_width(other):
            return NotImplemented
        return self.difference(other)

    def __invert__(self: F) -> F:
        return self.complement()

    def __ior__(self: F, other: object) -> F:
        if not self._same_width(other):
            return NotImplemented
        self.insert(other)
        return self

    def __iand__(self: F, other: object) -> F:
        if not self._same_width(other):
            return NotImplemented
        self._bits &= other._bits
        return self

    def __ixor__(self: F, other: object) -> F:
        if not self._same_width(other):
            return NotImplemented
        self.toggle(other)
        return self

    def __isub__(self: F, other: object) -> F:
        if not self._same_width(other):
            return NotImplemented
        self.remove(other)
        return self


class BitFlags8(BitFlags):
    """8-bit flags, indexed from bit ``0`` to ``7``."""

    __slots__ = ()
    WIDTH = 8


class BitFlags16(BitFlags):
    """16-bit flags, indexed from bit ``0`` to ``15``."""

    __slots__ = ()
    WIDTH = 16


class BitFlags32(BitFlags):
    """32-bit flags, indexed from bit ``0`` to ``31``."""

    __slots__ = ()
    WIDTH = 32


class BitFlags64(BitFlags):
    """64-bit flags, indexed from bit ``0`` to ``63``."""

    __slots__ = ()
    WIDTH = 64


class BitFlags128(BitFlags):
    """128-bit flags, indexed from bit ``0`` to ``127``."""

    __slots__ = ()
    WIDTH = 128


FLAG_TYPES: dict[int, type[BitFlags]] = {
    cls.WIDTH: cls for cls in (BitFlags8, BitFlags16, BitFlags32, BitFlags64, BitFlags128)
}


def flags_type(width: int) -> type[BitFlags]:
    """Return the flags class for ``width`` bits."""
    try:
        return FLAG_TYPES[width]
    except KeyError:
        raise ValueError(
            f"unsupported width {width}; expected one of {sorted(FLAG_TYPES)}"
        ) from None
