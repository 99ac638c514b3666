from __future__ import annotations

import dataclasses

import pytest

from conftest import load_csv
from plusgrid.olc import CodeArea, decode


ENCODING_ROWS = load_csv(
    "encoding.csv", ["code", "lat", "lng", "lat_lo", "lng_lo", "lat_hi", "lng_hi"]
)

PRECISION = 10**10


def _scaled(value: float) -> int:
    return round(value * PRECISION)


@pytest.mark.parametrize("row", ENCODING_ROWS, ids=lambda r: f"{r['code']}@{r['lat']}")
def test_decoding_table(row: dict[str, str]) -> None:
    area = decode(row["code"])
    assert area is not None
    assert _scaled(area.latitude_lo) == _scaled(float(row["lat_lo"]))
    assert _scaled(area.longitude_lo) == _scaled(float(row["lng_lo"]))
    assert _scaled(area.latitude_hi) == _scaled(float(row["lat_hi"]))
    assert _scaled(area.longitude_hi) == _scaled(float(row["lng_hi"]))


def test_center_and_length() -> None:
    area = decode("7FG49Q00+")
    assert area.code_length == 6
    assert area.latitude_center == pytest.approx(20.375)
    assert area.longitude_center == pytest.approx(2.775)

    area = decode("9C3W9QCJ+2VX")
    assert area.code_length == 11
    assert area.latitude_center == pytest.approx(51.3701125)
    assert area.longitude_center == pytest.approx(-1.217765625)


def test_decode_is_case_insensitive() -> None:
    assert decode("8fvc9g8f+6x") == decode("8FVC9G8F+6X")


def test_digits_past_fifteen_are_ignored() -> None:
    base = decode("849VGJQF+VX7QR4M")
    longer = decode("849VGJQF+VX7QR4M7QR4M")
    assert longer.latitude_center == base.latitude_center
    assert longer.longitude_center == base.longitude_center
    assert longer.code_length == 15


@pytest.mark.parametrize(
    "code", ["", "+", "WC2345+G6g", "+G6", "8FWC2345+G", "X2222222+", "8FWC2_45+G6"]
)
def test_short_and_invalid_codes_decode_to_none(code: str) -> None:
    assert decode(code) is None


def test_area_is_immutable_and_ordered() -> None:
    area = decode("CFX3X2X2+X2")
    assert area.latitude_lo <= area.latitude_center <= area.latitude_hi
    assert area.longitude_lo <= area.longitude_center <= area.longitude_hi
    with pytest.raises(dataclasses.FrozenInstanceError):
        area.latitude_lo = 0.0  # type: ignore[misc]


def test_area_latitude_is_clamped_at_the_pole() -> None:
    area = CodeArea(
        latitude_lo=89.0, longitude_lo=1.0, latitude_hi=91.0, longitude_hi=2.0, code_length=4
    )
    assert area.latitude_hi == 90.0
    assert area.latitude_center == 89.5


def test_area_as_dict() -> None:
    assert decode("62G20000+").as_dict() == {
        "latitude_lo": 0.0,
        "longitude_lo": -180.0,
        "latitude_hi": 1.0,
        "longitude_hi": -179.0,
        "latitude_center": 0.5,
        "longitude_center": -179.5,
        "code_length": 4,
    }


@pytest.mark.parametrize("code", ["8F0000GG+", "8FWC00GG+"])
def test_digits_hidden_behind_padding_do_not_decode(code: str) -> None:
    assert decode(code) is None
