from dataclasses import dataclass
from typing import Literal

DistanceUnit = Literal["kilometers", "miles"]

Number = int | float
Coord = tuple[Number, Number]


# Core geometry types used by mechanics
@dataclass(frozen=True)
class Point:
    lon: Number  # degrees, GeoJSON order
    lat: Number

    @property
    def coordinates(self) -> list[Number]:
        return [self.lon, self.lat]


Pt = Point | Coord


def _to_point(p: Pt) -> Point:
    # vertices are returned verbatim so integer input stays integer
    return p if isinstance(p, Point) else Point(p[0], p[1])
