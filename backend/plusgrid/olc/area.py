from __future__ import annotations

import dataclasses

from plusgrid.olc.constants import LATITUDE_MAX, LONGITUDE_MAX


@dataclasses.dataclass(frozen=True, slots=True)
class CodeArea:
    """Bounding box of a decoded code.

    `code_length` is the number of significant digits that produced the box.
    The center is the midpoint of each axis, kept inside the valid range.
    """

    latitude_lo: float
    longitude_lo: float
    latitude_hi: float
    longitude_hi: float
    code_length: int

    def __post_init__(self) -> None:
        # The cell never crosses the north pole.
        if self.latitude_hi > LATITUDE_MAX:
            object.__setattr__(self, "latitude_hi", float(LATITUDE_MAX))

    @property
    def latitude_center(self) -> float:
        return min(
            self.latitude_lo + (self.latitude_hi - self.latitude_lo) / 2,
            LATITUDE_MAX,
        )

    @property
    def longitude_center(self) -> float:
        return min(
            self.longitude_lo + (self.longitude_hi - self.longitude_lo) / 2,
            LONGITUDE_MAX,
        )

    def as_dict(self) -> dict[str, float | int]:
        return {
            "latitude_lo": self.latitude_lo,
            "longitude_lo": self.longitude_lo,
            "latitude_hi": self.latitude_hi,
            "longitude_hi": self.longitude_hi,
            "latitude_center": self.latitude_center,
            "longitude_center": self.longitude_center,
            "code_length": self.code_length,
        }
