"""Exceptions raised by the fixedflags engine."""
from __future__ import annotations


class FlagsError(Exception):
    """Base class for every fixedflags error."""


class BitIndexError(FlagsError, IndexError):
    """A bit index fell outside ``[0, width)`` on an unchecked accessor."""

    def __init__(self, type_name: str, width: int, index: object) -> None:
        self.type_name = type_name
        self.width = width
        self.index = index
        super().__init__(
            f"{type_name} structs are indexed from 0 to {width - 1} (got {index!r})"
        )


class BitRangeError(FlagsError, ValueError):
    """Invalid bit count or bit range bounds."""


class BitValueError(FlagsError, ValueError):
    """Raw integer does not fit in the flag width."""


class DeserializeError(FlagsError, ValueError):
    """Recoverable failure while decoding serialized flags."""


class DeBinError(DeserializeError):
    def __init__(self, offset: int, length: int, size: int) -> None:
        self.offset = offset
        self.length = length
        self.size = size
        super().__init__(
            f"need {length} bytes at offset {offset}, buffer holds {size}"
        )


class DeTextError(DeserializeError):
    def __init__(self, token: object, reason: str) -> None:
        self.token = token
        self.reason = reason
        super().__init__(f"cannot decode {token!r}: {reason}")
