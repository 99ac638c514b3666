from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import cast

from plusgrid import olc
from plusgrid.core.errors import (
    CODE_INVALID,
    CODE_LENGTH_INVALID,
    CODE_LOCATION_INVALID,
    CODE_NOT_FULL,
    CODE_NOT_SHORT,
    CODE_NOT_SHORTENABLE,
    CODE_REFERENCE_REQUIRED,
    CODE_TRUNCATION_INVALID,
    code_error,
)
from plusgrid.core.settings import get_settings
from plusgrid.olc.encoding import is_finite_location
from plusgrid.olc.shortening import is_valid_truncation
from plusgrid.olc.validation import normalize_code


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Validity:
    code: str
    is_valid: bool
    is_short: bool
    is_full: bool


@dataclass(frozen=True)
class LocatedCode:
    code: str
    area: olc.CodeArea


def _require_finite(latitude: float, longitude: float) -> None:
    if not is_finite_location(latitude, longitude):
        raise code_error(
            CODE_LOCATION_INVALID, "Latitude and longitude must be finite numbers"
        )


def classify(code: str) -> Validity:
    code = normalize_code(code)
    return Validity(
        code=code,
        is_valid=olc.is_valid(code),
        is_short=olc.is_short(code),
        is_full=olc.is_full(code),
    )


def encode_location(
    latitude: float, longitude: float, *, code_length: int | None = None
) -> LocatedCode:
    if code_length is None:
        code_length = get_settings().default_code_length
    _require_finite(latitude, longitude)

    code = olc.encode(latitude, longitude, code_length)
    if code is None:
        logger.debug("Rejected code length %s", code_length)
        raise code_error(
            CODE_LENGTH_INVALID,
            f"Invalid code length {code_length}: "
            "use an even length from 2 to 10, or any length above 10",
        )
    # encode only produces full codes.
    return LocatedCode(code=code, area=cast(olc.CodeArea, olc.decode(code)))


def decode_code(code: str) -> LocatedCode:
    code = normalize_code(code)
    area = olc.decode(code)
    if area is None:
        if olc.is_short(code):
            raise code_error(
                CODE_NOT_FULL,
                "Short codes need a reference location to be decoded",
                value=code,
            )
        raise code_error(CODE_INVALID, "Not a valid Open Location Code", value=code)
    return LocatedCode(code=code, area=area)


def shorten_code(
    code: str,
    latitude: float,
    longitude: float,
    *,
    maximum_truncation: int | None = None,
) -> str:
    if maximum_truncation is None:
        maximum_truncation = get_settings().default_maximum_truncation
    if not is_valid_truncation(maximum_truncation):
        raise code_error(
            CODE_TRUNCATION_INVALID,
            f"Invalid maximum truncation {maximum_truncation}: use 2, 4, 6 or 8",
        )

    _require_finite(latitude, longitude)
    code = normalize_code(code)
    if not olc.is_full(code):
        if olc.is_valid(code):
            raise code_error(CODE_NOT_FULL, "Only full codes can be shortened", value=code)
        raise code_error(CODE_INVALID, "Not a valid Open Location Code", value=code)

    short_code = olc.shorten(code, latitude, longitude, maximum_truncation)
    if short_code is None:
        # Padded codes and codes under 6 digits.
        raise code_error(
            CODE_NOT_SHORTENABLE,
            "Padded codes and codes under 6 digits cannot be shortened",
            value=code,
        )
    if short_code == code:
        logger.debug("Reference too far from %s to shorten", code)
    return short_code


def recover_code(
    short_code: str, reference_latitude: float, reference_longitude: float
) -> LocatedCode:
    short_code = normalize_code(short_code)
    if not olc.is_short(short_code):
        if olc.is_full(short_code):
            raise code_error(
                CODE_NOT_SHORT, "Code is already a full code", value=short_code
            )
        raise code_error(
            CODE_INVALID, "Not a valid Open Location Code", value=short_code
        )

    _require_finite(reference_latitude, reference_longitude)
    code = olc.recover_nearest(short_code, reference_latitude, reference_longitude)
    if code is None:
        raise code_error(
            CODE_INVALID, "Short code could not be recovered", value=short_code
        )
    return decode_code(code)


def locate(
    code: str,
    *,
    reference_latitude: float | None = None,
    reference_longitude: float | None = None,
) -> LocatedCode:
    """Resolve a full or short code to its area.

    Full codes decode directly. Short codes need both reference coordinates.
    """

    code = normalize_code(code)
    if olc.is_full(code):
        return decode_code(code)
    if not olc.is_short(code):
        raise code_error(CODE_INVALID, "Not a valid Open Location Code", value=code)
    if reference_latitude is None or reference_longitude is None:
        raise code_error(
            CODE_REFERENCE_REQUIRED,
            "Short codes need latitude and longitude of a reference location",
            value=code,
        )
    return recover_code(code, reference_latitude, reference_longitude)
