"""Open Location Code (Plus Codes) engine.

Pure functions only; every fallible operation returns None instead of raising.
"""

from __future__ import annotations

from plusgrid.olc.area import CodeArea
from plusgrid.olc.constants import (
    CODE_ALPHABET,
    MAX_DIGIT_COUNT,
    PADDING_CHARACTER,
    PAIR_CODE_LENGTH,
    SEPARATOR,
    SEPARATOR_POSITION,
)
from plusgrid.olc.decoding import decode
from plusgrid.olc.encoding import encode
from plusgrid.olc.shortening import DEFAULT_MAXIMUM_TRUNCATION, recover_nearest, shorten
from plusgrid.olc.validation import is_full, is_short, is_valid

__all__ = [
    "CODE_ALPHABET",
    "CodeArea",
    "DEFAULT_MAXIMUM_TRUNCATION",
    "MAX_DIGIT_COUNT",
    "PADDING_CHARACTER",
    "PAIR_CODE_LENGTH",
    "SEPARATOR",
    "SEPARATOR_POSITION",
    "decode",
    "encode",
    "is_full",
    "is_short",
    "is_valid",
    "recover_nearest",
    "shorten",
]
