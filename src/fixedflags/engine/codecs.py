"""Binary and text codecs for fixed-width flags.

Each codec is registered under a short name (``"bin"``, ``"json"``,
``"ron"``) so consumers can pick only the encodings they need::

    codec = get_codec("json")
    codec.encode_many([BitFlags8(1), BitFlags8(255)])   # '[1,255]'

Binary output is ``WIDTH // 8`` little-endian bytes per value with no
framing. Text output is a bare decimal integer per value.
"""
from __future__ import annotations

import json
import re
from collections.abc import Iterable, Sequence
from typing import TypeVar

from .errors import DeBinError, DeTextError
from .flags import BitFlags
from .models import DEFAULT_OPTIONS, CodecOptions

F = TypeVar("F", bound=BitFlags)

_DIGITS = re.compile(r"[0-9]+")


def _check_value(token: object, cls: type[F]) -> F:
    if isinstance(token, bool) or not isinstance(token, int):
        raise DeTextError(token, "expected an unsigned integer")
    if token < 0:
        raise DeTextError(token, "negative values are not allowed")
    if token > cls.MAX:
        raise DeTextError(token, f"exceeds {cls.__name__} maximum {cls.MAX}")
    return cls(token)


def _check_count(items: Sequence, count: int | None) -> None:
    if count is not None and len(items) != count:
        raise DeTextError(items, f"expected {count} values, found {len(items)}")


def _as_text(text: str | bytes) -> str:
    if isinstance(text, bytes):
        try:
            return text.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DeTextError(text, "invalid UTF-8") from exc
    return text


class Codec:
    """Base class for flag codecs."""

    name = ""

    def __init__(self, options: CodecOptions = DEFAULT_OPTIONS) -> None:
        self.options = options

    def encode(self, flags: BitFlags):
        raise NotImplementedError

    def decode(self, data, cls: type[F]) -> F:
        raise NotImplementedError

    def encode_many(self, values: Iterable[BitFlags]):
        raise NotImplementedError

    def decode_many(self, data, cls: type[F], count: int | None = None) -> list[F]:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.options!r})"


class BinaryCodec(Codec):
    name = "bin"

    def ser_bin(self, flags: BitFlags, output: bytearray) -> None:
        output += flags.bits.to_bytes(flags.WIDTH // 8, self.options.byteorder)

    def de_bin(self, cls: type[F], data: bytes, offset: int = 0) -> tuple[F, int]:
        """Read one value at ``offset``; return it with the offset just past it."""
        length = cls.WIDTH // 8
        if offset < 0 or offset + length > len(data):
            raise DeBinError(offset, length, len(data))
        value = int.from_bytes(bytes(data[offset:offset + length]), self.options.byteorder)
        return cls(value), offset + length

    def encode(self, flags: BitFlags) -> bytes:
        output = bytearray()
        self.ser_bin(flags, output)
        return bytes(output)

    def decode(self, data: bytes, cls: type[F]) -> F:
        """Decode the value at the start of ``data``; trailing bytes are ignored."""
        return self.de_bin(cls, data)[0]

    def encode_many(self, values: Iterable[BitFlags]) -> bytes:
        output = bytearray()
        for flags in values:
            self.ser_bin(flags, output)
        return bytes(output)

    def decode_many(self, data: bytes, cls: type[F], count: int | None = None) -> list[F]:
        """Decode ``count`` consecutive values, or the whole buffer when ``count`` is None."""
        length = cls.WIDTH // 8
        if count is None:
            remainder = len(data) % length
            if remainder:
                raise DeBinError(len(data) - remainder, length, len(data))
            count = len(data) // length
        values: list[F] = []
        offset = 0
        for _ in range(count):
            flags, offset = self.de_bin(cls, data, offset)
            values.append(flags)
        return values


class JsonCodec(Codec):
    name = "json"

    @staticmethod
    def _load(text: str | bytes) -> object:
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise DeTextError(text, f"invalid JSON: {exc.msg}") from exc
        except ValueError as exc:
            raise DeTextError(text, str(exc)) from exc

    def encode(self, flags: BitFlags) -> str:
        return json.dumps(flags.bits)

    def decode(self, text: str | bytes, cls: type[F]) -> F:
        return _check_value(self._load(text), cls)

    def encode_many(self, values: Iterable[BitFlags]) -> str:
        return json.dumps([flags.bits for flags in values], separators=(",", ":"))

    def decode_many(self, text: str | bytes, cls: type[F], count: int | None = None) -> list[F]:
        items = self._load(text)
        if not isinstance(items, list):
            raise DeTextError(items, "expected a JSON array")
        _check_count(items, count)
        return [_check_value(item, cls) for item in items]


class RonCodec(Codec):
    name = "ron"

    @staticmethod
    def _parse(token: str, cls: type[F]) -> F:
        token = token.strip()
        if not _DIGITS.fullmatch(token):
            if token.startswith("-") and _DIGITS.fullmatch(token[1:]):
                raise DeTextError(token, "negative values are not allowed")
            raise DeTextError(token, "expected an unsigned decimal integer")
        try:
            value = int(token)
        except ValueError as exc:
            raise DeTextError(token, str(exc)) from exc
        return _check_value(value, cls)

    def encode(self, flags: BitFlags) -> str:
        return str(flags.bits)

    def decode(self, text: str | bytes, cls: type[F]) -> F:
        text = _as_text(text)
        return self._parse(text, cls)

    def encode_many(self, values: Iterable[BitFlags]) -> str:
        return "(" + self.options.ron_separator.join(str(f.bits) for f in values) + ")"

    def decode_many(self, text: str | bytes, cls: type[F], count: int | None = None) -> list[F]:
        """Parse a tuple ``(1, 2)`` or list ``[1, 2]``; a trailing comma is allowed."""
        text = _as_text(text)
        body = text.strip()
        if len(body) < 2 or (body[0], body[-1]) not in (("(", ")"), ("[", "]")):
            raise DeTextError(text, "expected a RON tuple or list")
        inner = body[1:-1].strip()
        tokens = inner.split(",") if inner else []
        if tokens and not tokens[-1].strip():
            tokens.pop()
        _check_count(tokens, count)
        return [self._parse(token, cls) for token in tokens]


_CODECS: dict[str, Codec] = {}


def register_codec(name: str, codec: Codec) -> None:
    _CODECS[name.lower()] = codec


def get_codec(name: str) -> Codec:
    try:
        return _CODECS[name.lower()]
    except KeyError:
        raise ValueError(
            f"unknown codec {name!r}; available: {', '.join(available_codecs())}"
        ) from None


def available_codecs() -> list[str]:
    return sorted(_CODECS)


register_codec(BinaryCodec.name, BinaryCodec())
register_codec(JsonCodec.name, JsonCodec())
register_codec(RonCodec.name, RonCodec())
