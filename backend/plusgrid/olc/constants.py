"""Fixed alphabet and grid geometry of Open Location Codes."""

from __future__ import annotations

# Separator inserted after SEPARATOR_POSITION digits.
SEPARATOR = "+"
SEPARATOR_POSITION = 8

PADDING_CHARACTER = "0"

# Digit values 0-19, in order.
CODE_ALPHABET = "23456789CFGHJMPQRVWX"
ENCODING_BASE = len(CODE_ALPHABET)
_DIGIT_VALUES = {c: i for i, c in enumerate(CODE_ALPHABET)}

LATITUDE_MAX = 90
LONGITUDE_MAX = 180

MIN_DIGIT_COUNT = 2
MAX_DIGIT_COUNT = 15

# Digits encoded as interleaved lat/lng pairs; roughly 14x14m at the equator.
PAIR_CODE_LENGTH = 10
PAIR_FIRST_PLACE_VALUE = ENCODING_BASE ** (PAIR_CODE_LENGTH // 2 - 1)
# Integer units per degree after the pair digits.
PAIR_PRECISION = ENCODING_BASE**3

# Place value in degrees of each pair level.
PAIR_RESOLUTIONS = (20.0, 1.0, 0.05, 0.0025, 0.000125)

# Grid refinement: every grid digit splits the cell into 5 rows x 4 columns.
GRID_CODE_LENGTH = MAX_DIGIT_COUNT - PAIR_CODE_LENGTH
GRID_COLUMNS = 4
GRID_ROWS = 5
GRID_LAT_FIRST_PLACE_VALUE = GRID_ROWS ** (GRID_CODE_LENGTH - 1)
GRID_LNG_FIRST_PLACE_VALUE = GRID_COLUMNS ** (GRID_CODE_LENGTH - 1)

# Integer units per degree at MAX_DIGIT_COUNT digits.
FINAL_LAT_PRECISION = PAIR_PRECISION * GRID_ROWS**GRID_CODE_LENGTH
FINAL_LNG_PRECISION = PAIR_PRECISION * GRID_COLUMNS**GRID_CODE_LENGTH

# Codes shorter than this cannot be shortened.
MIN_TRIMMABLE_CODE_LEN = 6

# shorten() keeps this much of a cell's resolution as safety margin.
SHORTEN_SAFETY_FACTOR = 0.3


def digit_value(ch: str) -> int:
    """Return the 0-19 value of an alphabet character, or -1."""

    return _DIGIT_VALUES.get(ch.upper(), -1)
