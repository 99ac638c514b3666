from __future__ import annotations

from plusgrid.olc.area import CodeArea
from plusgrid.olc.constants import (
    ENCODING_BASE,
    FINAL_LAT_PRECISION,
    FINAL_LNG_PRECISION,
    GRID_COLUMNS,
    GRID_LAT_FIRST_PLACE_VALUE,
    GRID_LNG_FIRST_PLACE_VALUE,
    GRID_ROWS,
    LATITUDE_MAX,
    LONGITUDE_MAX,
    MAX_DIGIT_COUNT,
    PADDING_CHARACTER,
    PAIR_CODE_LENGTH,
    PAIR_FIRST_PLACE_VALUE,
    PAIR_PRECISION,
    SEPARATOR,
    digit_value,
)
from plusgrid.olc.validation import is_full


def _significant_digits(code: str) -> str:
    digits = code.replace(SEPARATOR, "").replace(PADDING_CHARACTER, "").upper()
    return digits[:MAX_DIGIT_COUNT]


def decode(code: str) -> CodeArea | None:
    """Decode a full code into the area it covers.

    Short or invalid codes give None. Digits past the fifteenth are ignored.
    """

    if not is_full(code):
        return None
    digits = _significant_digits(code)

    # Lower-left corner in integer units, shifted to be non-negative.
    normal_lat = -LATITUDE_MAX * PAIR_PRECISION
    normal_lng = -LONGITUDE_MAX * PAIR_PRECISION
    grid_lat = 0
    grid_lng = 0

    pair_digits = min(len(digits), PAIR_CODE_LENGTH)
    place_value = PAIR_FIRST_PLACE_VALUE
    for i in range(0, pair_digits, 2):
        normal_lat += digit_value(digits[i]) * place_value
        normal_lng += digit_value(digits[i + 1]) * place_value
        if i < pair_digits - 2:
            place_value //= ENCODING_BASE

    lat_precision = place_value / PAIR_PRECISION
    lng_precision = place_value / PAIR_PRECISION

    if len(digits) > PAIR_CODE_LENGTH:
        row_place_value = GRID_LAT_FIRST_PLACE_VALUE
        col_place_value = GRID_LNG_FIRST_PLACE_VALUE
        for i in range(PAIR_CODE_LENGTH, len(digits)):
            row, col = divmod(digit_value(digits[i]), GRID_COLUMNS)
            grid_lat += row * row_place_value
            grid_lng += col * col_place_value
            if i < len(digits) - 1:
                row_place_value //= GRID_ROWS
                col_place_value //= GRID_COLUMNS
        lat_precision = row_place_value / FINAL_LAT_PRECISION
        lng_precision = col_place_value / FINAL_LNG_PRECISION

    lat = normal_lat / PAIR_PRECISION + grid_lat / FINAL_LAT_PRECISION
    lng = normal_lng / PAIR_PRECISION + grid_lng / FINAL_LNG_PRECISION
    # Rounding hides float noise from the two-part sum.
    return CodeArea(
        latitude_lo=round(lat, 14),
        longitude_lo=round(lng, 14),
        latitude_hi=round(lat + lat_precision, 14),
        longitude_hi=round(lng + lng_precision, 14),
        code_length=len(digits),
    )
