from __future__ import annotations

import math

from plusgrid.olc.constants import (
    CODE_ALPHABET,
    ENCODING_BASE,
    FINAL_LAT_PRECISION,
    FINAL_LNG_PRECISION,
    GRID_CODE_LENGTH,
    GRID_COLUMNS,
    GRID_ROWS,
    LATITUDE_MAX,
    LONGITUDE_MAX,
    MAX_DIGIT_COUNT,
    MIN_DIGIT_COUNT,
    PADDING_CHARACTER,
    PAIR_CODE_LENGTH,
    SEPARATOR,
    SEPARATOR_POSITION,
)


def is_finite_location(latitude: float, longitude: float) -> bool:
    return math.isfinite(latitude) and math.isfinite(longitude)


def clip_latitude(latitude: float) -> float:
    return min(LATITUDE_MAX, max(-LATITUDE_MAX, latitude))


def normalize_longitude(longitude: float) -> float:
    """Wrap a longitude into [-180, 180)."""

    if -LONGITUDE_MAX <= longitude < LONGITUDE_MAX:
        return longitude
    # fmod keeps the sign of the dividend.
    longitude = math.fmod(longitude, LONGITUDE_MAX * 2)
    if longitude < -LONGITUDE_MAX:
        longitude += LONGITUDE_MAX * 2
    elif longitude >= LONGITUDE_MAX:
        longitude -= LONGITUDE_MAX * 2
    return longitude


def compute_latitude_precision(code_length: int) -> float:
    """Height in degrees of the cell of a code with `code_length` digits."""

    if code_length <= PAIR_CODE_LENGTH:
        return float(ENCODING_BASE) ** (code_length // -2 + 2)
    return float(ENCODING_BASE) ** -3 / GRID_ROWS ** (code_length - PAIR_CODE_LENGTH)


def is_valid_code_length(code_length: int) -> bool:
    if code_length < MIN_DIGIT_COUNT:
        return False
    # Pair digits come in lat/lng couples.
    return not (code_length < PAIR_CODE_LENGTH and code_length % 2 == 1)


def location_to_integers(latitude: float, longitude: float) -> tuple[int, int]:
    """Convert degrees into non-negative counts of the finest cell.

    Latitude is clipped; the north pole itself maps onto the last cell below
    it. Longitude wraps around the antimeridian.
    """

    lat_val = math.floor(latitude * FINAL_LAT_PRECISION)
    lat_val += LATITUDE_MAX * FINAL_LAT_PRECISION
    if lat_val < 0:
        lat_val = 0
    elif lat_val >= 2 * LATITUDE_MAX * FINAL_LAT_PRECISION:
        lat_val = 2 * LATITUDE_MAX * FINAL_LAT_PRECISION - 1

    lng_val = math.floor(longitude * FINAL_LNG_PRECISION)
    lng_val += LONGITUDE_MAX * FINAL_LNG_PRECISION
    lng_val %= 2 * LONGITUDE_MAX * FINAL_LNG_PRECISION
    return int(lat_val), int(lng_val)


def encode_integers(lat_val: int, lng_val: int, code_length: int) -> str | None:
    if not is_valid_code_length(code_length):
        return None
    code_length = min(code_length, MAX_DIGIT_COUNT)

    # Digits are produced least significant first.
    digits: list[str] = []
    if code_length > PAIR_CODE_LENGTH:
        for _ in range(GRID_CODE_LENGTH):
            row = lat_val % GRID_ROWS
            col = lng_val % GRID_COLUMNS
            digits.append(CODE_ALPHABET[row * GRID_COLUMNS + col])
            lat_val //= GRID_ROWS
            lng_val //= GRID_COLUMNS
    else:
        lat_val //= GRID_ROWS**GRID_CODE_LENGTH
        lng_val //= GRID_COLUMNS**GRID_CODE_LENGTH

    for _ in range(PAIR_CODE_LENGTH // 2):
        digits.append(CODE_ALPHABET[lng_val % ENCODING_BASE])
        digits.append(CODE_ALPHABET[lat_val % ENCODING_BASE])
        lat_val //= ENCODING_BASE
        lng_val //= ENCODING_BASE

    code = "".join(reversed(digits))
    code = code[:SEPARATOR_POSITION] + SEPARATOR + code[SEPARATOR_POSITION:]
    if code_length >= SEPARATOR_POSITION:
        return code[: code_length + 1]
    return (
        code[:code_length]
        + PADDING_CHARACTER * (SEPARATOR_POSITION - code_length)
        + SEPARATOR
    )


def encode(
    latitude: float, longitude: float, code_length: int = PAIR_CODE_LENGTH
) -> str | None:
    """Encode a location into a code of `code_length` significant digits.

    Returns None for lengths below 2 and for odd lengths below 10. Lengths
    above 15 produce the 15 digit code. Out-of-range coordinates are clipped
    (latitude) or wrapped (longitude); NaN or infinite coordinates give None.
    """

    if not is_valid_code_length(code_length):
        return None
    if not is_finite_location(latitude, longitude):
        return None
    lat_val, lng_val = location_to_integers(
        clip_latitude(latitude), normalize_longitude(longitude)
    )
    return encode_integers(lat_val, lng_val, code_length)
