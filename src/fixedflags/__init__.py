"""fixedflags: fixed-width bit flag sets (8, 16, 32, 64 and 128 bits)."""

from .engine.codecs import available_codecs, get_codec, register_codec
from .engine.errors import (
    BitIndexError,
    BitRangeError,
    BitValueError,
    DeBinError,
    DeserializeError,
    DeTextError,
    FlagsError,
)
from .engine.flags import (
    BitFlags,
    BitFlags8,
    BitFlags16,
    BitFlags32,
    BitFlags64,
    BitFlags128,
    flags_type,
)
from .engine.models import CodecOptions, TextFormat
from .io import dumps, loads, pack, unpack

__all__ = [
    "BitFlags",
    "BitFlags8",
    "BitFlags16",
    "BitFlags32",
    "BitFlags64",
    "BitFlags128",
    "flags_type",
    "FlagsError",
    "BitIndexError",
    "BitRangeError",
    "BitValueError",
    "DeserializeError",
    "DeBinError",
    "DeTextError",
    "CodecOptions",
    "TextFormat",
    "get_codec",
    "register_codec",
    "available_codecs",
    "dumps",
    "loads",
    "pack",
    "unpack",
]
