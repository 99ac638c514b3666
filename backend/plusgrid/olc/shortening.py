"""Short codes: dropping and restoring leading digits near a reference point.

A short code is only meaningful next to a reference location. `shorten` drops
as many leading digits as it can while the reference stays well inside the
cell those digits described; `recover_nearest` puts back the digits of the
reference and then picks the neighbouring cell closest to it.
"""

from __future__ import annotations

from typing import cast

from plusgrid.olc.constants import (
    LATITUDE_MAX,
    MIN_TRIMMABLE_CODE_LEN,
    PADDING_CHARACTER,
    SEPARATOR,
    SEPARATOR_POSITION,
    SHORTEN_SAFETY_FACTOR,
)
from plusgrid.olc.decoding import decode
from plusgrid.olc.encoding import (
    clip_latitude,
    compute_latitude_precision,
    encode,
    is_finite_location,
    normalize_longitude,
)
from plusgrid.olc.validation import is_full, is_short

DEFAULT_MAXIMUM_TRUNCATION = 4
# Largest truncation first.
TRUNCATION_STEPS = (8, 6, 4, 2)


def is_valid_truncation(maximum_truncation: int) -> bool:
    return maximum_truncation in TRUNCATION_STEPS


def shorten(
    code: str,
    latitude: float,
    longitude: float,
    maximum_truncation: int = DEFAULT_MAXIMUM_TRUNCATION,
) -> str | None:
    """Remove up to `maximum_truncation` leading digits from a full code.

    Truncating `t` digits is safe when the reference is closer to the code
    center than 0.3 of the cell size left by the first `t` digits (measured
    as the larger of the latitude and longitude differences, in degrees).
    Returns the code unchanged when no truncation is safe, and None for
    padded, too short or non-full codes and for a truncation that is not one
    of 2, 4, 6 or 8. NaN or infinite reference coordinates also give None.
    """

    if not is_valid_truncation(maximum_truncation):
        return None
    if not is_full(code) or PADDING_CHARACTER in code:
        return None
    if not is_finite_location(latitude, longitude):
        return None
    code = code.upper()
    area = decode(code)
    if area is None or area.code_length < MIN_TRIMMABLE_CODE_LEN:
        return None

    latitude = clip_latitude(latitude)
    longitude = normalize_longitude(longitude)
    distance = max(
        abs(area.latitude_center - latitude),
        abs(area.longitude_center - longitude),
    )

    for truncation in TRUNCATION_STEPS:
        if truncation > maximum_truncation:
            continue
        if distance < compute_latitude_precision(truncation) * SHORTEN_SAFETY_FACTOR:
            return code[truncation:]
    return code


def recover_nearest(
    short_code: str, reference_latitude: float, reference_longitude: float
) -> str | None:
    """Restore the full code of `short_code` closest to the reference.

    Returns None unless `short_code` is a short code and the reference is
    finite.
    """

    if not is_short(short_code):
        return None
    if not is_finite_location(reference_latitude, reference_longitude):
        return None
    short_code = short_code.upper()
    reference_latitude = clip_latitude(reference_latitude)
    reference_longitude = normalize_longitude(reference_longitude)

    prefix_length = SEPARATOR_POSITION - short_code.find(SEPARATOR)
    resolution = compute_latitude_precision(prefix_length)
    half_resolution = resolution / 2

    reference_code = cast(str, encode(reference_latitude, reference_longitude))
    area = decode(reference_code[:prefix_length] + short_code)
    if area is None:
        return None

    # The reference may sit near an edge of its own cell; move the candidate
    # to whichever neighbour is within half a cell of the reference.
    latitude = area.latitude_center
    longitude = area.longitude_center
    if (
        reference_latitude + half_resolution < latitude
        and latitude - resolution >= -LATITUDE_MAX
    ):
        latitude -= resolution
    elif (
        reference_latitude - half_resolution > latitude
        and latitude + resolution <= LATITUDE_MAX
    ):
        latitude += resolution

    if reference_longitude + half_resolution < longitude:
        longitude -= resolution
    elif reference_longitude - half_resolution > longitude:
        longitude += resolution

    return encode(latitude, longitude, area.code_length)
