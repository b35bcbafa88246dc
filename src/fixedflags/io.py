"""Serialization helpers in the style of :mod:`json`.

``dumps``/``loads`` handle text formats and ``pack``/``unpack`` the binary
format. A single flags value and a sequence of flags are both accepted.
"""
from __future__ import annotations

from collections.abc import Iterable
from typing import TypeVar, Union

from .engine.codecs import get_codec
from .engine.flags import BitFlags
from .engine.models import DEFAULT_OPTIONS, TextFormat

F = TypeVar("F", bound=BitFlags)

FlagsOrMany = Union[BitFlags, Iterable[BitFlags]]


def _text_codec(fmt: str | TextFormat | None):
    if fmt is None:
        fmt = DEFAULT_OPTIONS.text_format
    return get_codec(TextFormat(fmt.lower()).value)


def dumps(obj: FlagsOrMany, fmt: str | TextFormat | None = None) -> str:
    codec = _text_codec(fmt)
    if isinstance(obj, BitFlags):
        return codec.encode(obj)
    return codec.encode_many(obj)


def loads(text: str | bytes, cls: type[F], fmt: str | TextFormat | None = None,
          many: bool = False) -> F | list[F]:
    codec = _text_codec(fmt)
    if many:
        return codec.decode_many(text, cls)
    return codec.decode(text, cls)


def pack(obj: FlagsOrMany) -> bytes:
    codec = get_codec("bin")
    if isinstance(obj, BitFlags):
        return codec.encode(obj)
    return codec.encode_many(obj)


def unpack(data: bytes, cls: type[F], count: int | None = None) -> list[F]:
    """Decode consecutive values; the whole buffer is consumed when ``count`` is None."""
    return get_codec("bin").decode_many(data, cls, count)
