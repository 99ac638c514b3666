"""Classification of code strings: invalid, short or full.

Every code is checked against the same structural rules:

- exactly one separator, at an even index no greater than SEPARATOR_POSITION
- padding only in full codes, as one even-length group that ends the code
  right before the separator
- never a single character after the separator
- only alphabet characters otherwise (case-insensitive)

Characters past the fifteenth digit are ignored by decoding but still have to
be legal here.
"""

from __future__ import annotations

from plusgrid.olc.constants import (
    ENCODING_BASE,
    LATITUDE_MAX,
    LONGITUDE_MAX,
    PADDING_CHARACTER,
    SEPARATOR,
    SEPARATOR_POSITION,
    digit_value,
)


def normalize_code(code: str) -> str:
    return code.strip().upper()


def is_valid(code: str) -> bool:
    if not code or code.count(SEPARATOR) != 1:
        return False
    if len(code) == 1:
        return False

    sep = code.find(SEPARATOR)
    if sep > SEPARATOR_POSITION or sep % 2 == 1:
        return False

    pad = code.find(PADDING_CHARACTER)
    if pad != -1:
        # Short codes cannot be padded.
        if sep < SEPARATOR_POSITION:
            return False
        if pad == 0:
            return False
        # One group of even length running up to the separator, which must
        # end the code.
        rpad = code.rfind(PADDING_CHARACTER) + 1
        if rpad != sep:
            return False
        pads = code[pad:rpad]
        if len(pads) % 2 == 1 or pads.count(PADDING_CHARACTER) != len(pads):
            return False
        if not code.endswith(SEPARATOR):
            return False

    if len(code) - sep - 1 == 1:
        return False

    for ch in code:
        if ch in (SEPARATOR, PADDING_CHARACTER):
            continue
        if digit_value(ch) < 0:
            return False
    return True


def is_short(code: str) -> bool:
    if not is_valid(code):
        return False
    return 0 <= code.find(SEPARATOR) < SEPARATOR_POSITION


def is_full(code: str) -> bool:
    if not is_valid(code) or is_short(code):
        return False

    # The first pair must not point outside the globe.
    first_lat_value = digit_value(code[0]) * ENCODING_BASE
    if first_lat_value >= LATITUDE_MAX * 2:
        return False
    if len(code) > 1:
        first_lng_value = digit_value(code[1]) * ENCODING_BASE
        if first_lng_value >= LONGITUDE_MAX * 2:
            return False
    return True
