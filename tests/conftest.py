"""Test configuration ensuring the local package is importable."""

from __future__ import annotations

import pathlib
import sys

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from fixedflags import BitFlags8, BitFlags16, BitFlags32, BitFlags64, BitFlags128  # noqa: E402

ALL_TYPES = [BitFlags8, BitFlags16, BitFlags32, BitFlags64, BitFlags128]


@pytest.fixture(params=ALL_TYPES, ids=lambda cls: cls.__name__)
def flags_cls(request):
    """Each fixed-width flags type in turn."""
    return request.param
