"""NumPy bulk conversion helpers for flag sequences."""
from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

import numpy as np

from .errors import BitValueError
from .flags import BitFlags

F = TypeVar("F", bound=BitFlags)

_WORD_DTYPES = {8: np.uint8, 16: np.uint16, 32: np.uint32, 64: np.uint64}
_LIMB_MASK = (1 << 64) - 1


def _resolve_type(values: Sequence[BitFlags], cls: type[BitFlags] | None) -> type[BitFlags]:
    if cls is None:
        if not values:
            raise ValueError("cannot infer flag width from an empty sequence; pass cls")
        cls = type(values[0])
    for flags in values:
        if flags.WIDTH != cls.WIDTH:
            raise TypeError(
                f"mixed widths: expected {cls.WIDTH}-bit flags, got {type(flags).__name__}"
            )
    return cls


def to_words(values: Sequence[BitFlags], cls: type[BitFlags] | None = None) -> np.ndarray:
    """Pack flags into an unsigned integer array.

    Widths up to 64 produce a 1-D array of the matching ``uint`` dtype.
    128-bit flags produce shape ``(n, 2)`` ``uint64`` limbs ordered
    ``[low, high]``.
    """
    cls = _resolve_type(values, cls)
    if cls.WIDTH == 128:
        limbs = [[flags.bits & _LIMB_MASK, flags.bits >> 64] for flags in values]
        return np.array(limbs, dtype=np.uint64).reshape(-1, 2)
    return np.array([flags.bits for flags in values], dtype=_WORD_DTYPES[cls.WIDTH])


def from_words(array, cls: type[F]) -> list[F]:
    """Inverse of :func:`to_words`."""
    arr = np.asarray(array)
    if arr.dtype.kind not in "iu":
        raise ValueError(f"expected an integer array for {cls.__name__}, got dtype {arr.dtype}")
    if cls.WIDTH == 128:
        if arr.ndim != 2 or arr.shape[1] != 2:
            raise ValueError(f"expected shape (n, 2) for {cls.__name__}, got {arr.shape}")
        values = []
        for low, high in arr.tolist():
            low, high = int(low), int(high)
            if not (0 <= low <= _LIMB_MASK and 0 <= high <= _LIMB_MASK):
                raise BitValueError(f"limb out of uint64 range: {[low, high]}")
            values.append(cls(low | high << 64))
        return values
    if arr.ndim != 1:
        raise ValueError(f"expected a 1-D array for {cls.__name__}, got shape {arr.shape}")
    return [cls(int(value)) for value in arr.tolist()]


def to_bool_matrix(values: Sequence[BitFlags], cls: type[BitFlags] | None = None) -> np.ndarray:
    """Expand flags into an ``(n, WIDTH)`` bool matrix; column ``i`` holds bit ``i``."""
    cls = _resolve_type(values, cls)
    nbytes = cls.WIDTH // 8
    raw = b"".join(flags.bits.to_bytes(nbytes, "little") for flags in values)
    packed = np.frombuffer(raw, dtype=np.uint8) if raw else np.zeros(0, dtype=np.uint8)
    packed = packed.reshape(len(values), nbytes)
    return np.unpackbits(packed, axis=1, bitorder="little").astype(bool)


def from_bool_matrix(matrix, cls: type[F]) -> list[F]:
    """Inverse of :func:`to_bool_matrix`."""
    mask = np.asarray(matrix, dtype=bool)
    if mask.ndim != 2 or mask.shape[1] != cls.WIDTH:
        raise ValueError(
            f"expected shape (n, {cls.WIDTH}) for {cls.__name__}, got {mask.shape}"
        )
    packed = np.packbits(mask, axis=1, bitorder="little")
    return [cls(int.from_bytes(row.tobytes(), "little")) for row in packed]
