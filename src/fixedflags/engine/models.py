"""Configuration models shared by the fixedflags codecs."""
from __future__ import annotations

import enum
from dataclasses import dataclass, replace


class TextFormat(str, enum.Enum):
    JSON = "json"
    RON = "ron"


@dataclass(frozen=True)
class CodecOptions:
    """Options controlling how flags are rendered and parsed.

    text_format: Text codec used by :mod:`fixedflags.io` when no format is given.
    ron_separator: Item separator for RON tuples. The default ``", "`` matches
        the spaced output of the reference RON writer; ``","`` is the compact form.
    byteorder: Byte order for the binary codec. The wire contract is
        ``"little"``; ``"big"`` exists for ad-hoc interop only.
    """
    text_format: TextFormat = TextFormat.JSON
    ron_separator: str = ", "
    byteorder: str = "little"

    def __post_init__(self) -> None:
        if self.byteorder not in ("little", "big"):
            raise ValueError(f"invalid byteorder: {self.byteorder!r}")
        if self.ron_separator.strip() != ",":
            raise ValueError(f"RON separator must be a comma, got {self.ron_separator!r}")

    def compact(self) -> CodecOptions:
        """Return a copy using the compact ``","`` RON separator."""
        return replace(self, ron_separator=",")


DEFAULT_OPTIONS = CodecOptions()
