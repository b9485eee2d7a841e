import math
from collections.abc import Sequence

import numpy as np

from pathpos.app.protocols import GeometryProvider
from pathpos.domain.entities.geography import Coord, DistanceUnit, Point, _to_point

DEG2RAD = math.pi / 180
RAD2DEG = 180 / math.pi

# turf.js 3.x radii; positions match simulators that place entities with it
EARTH_RADII: dict[str, float] = {"kilometers": 6373.0, "miles": 3960.0}


class SphericalGeometry(GeometryProvider):
    """
    Great-circle geometry on a sphere with one radius per distance unit.

    Distances are haversine arcs. A point inside a segment is found by stepping back
    from the segment's far vertex along the great circle through both vertices.
    """

    def __init__(self, *, radii: dict[str, float] | None = None):
        self.radii = dict(EARTH_RADII if radii is None else radii)

    def radius(self, unit: DistanceUnit) -> float:
        try:
            return self.radii[unit]
        except KeyError:
            raise ValueError(f"Unsupported distance unit {unit!r}") from None

    # -------- point helpers

    def distance(self, a: Coord, b: Coord, unit: DistanceUnit) -> float:
        d_lat = DEG2RAD * (b[1] - a[1])
        d_lon = DEG2RAD * (b[0] - a[0])
        lat1, lat2 = DEG2RAD * a[1], DEG2RAD * b[1]
        h = math.sin(d_lat / 2) ** 2 + math.sin(d_lon / 2) ** 2 * math.cos(lat1) * math.cos(lat2)
        return self.radius(unit) * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))

    def bearing(self, a: Coord, b: Coord) -> float:
        """Initial bearing from a to b in degrees, (-180, 180]."""
        lon1, lat1 = DEG2RAD * a[0], DEG2RAD * a[1]
        lon2, lat2 = DEG2RAD * b[0], DEG2RAD * b[1]
        y = math.sin(lon2 - lon1) * math.cos(lat2)
        x = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(
            lon2 - lon1
        )
        return RAD2DEG * math.atan2(y, x)

    def destination(
        self, origin: Coord, distance: float, bearing: float, unit: DistanceUnit
    ) -> Point:
        lon1, lat1 = DEG2RAD * origin[0], DEG2RAD * origin[1]
        brg = DEG2RAD * bearing
        ang = distance / self.radius(unit)
        lat2 = math.asin(
            math.sin(lat1) * math.cos(ang) + math.cos(lat1) * math.sin(ang) * math.cos(brg)
        )
        lon2 = lon1 + math.atan2(
            math.sin(brg) * math.sin(ang) * math.cos(lat1),
            math.cos(ang) - math.sin(lat1) * math.sin(lat2),
        )
        return Point(RAD2DEG * lon2, RAD2DEG * lat2)

    # -------- line operations

    def segment_lengths(self, points: Sequence[Coord], unit: DistanceUnit) -> np.ndarray:
        return np.array(
            [self.distance(a, b, unit) for a, b in zip(points[:-1], points[1:])], dtype=float
        )

    def cumulative_lengths(self, points: Sequence[Coord], unit: DistanceUnit) -> np.ndarray:
        # cumsum accumulates left to right, same rounding as walking the line
        return np.concatenate(([0.0], np.cumsum(self.segment_lengths(points, unit))))

    def line_length(self, points: Sequence[Coord], unit: DistanceUnit) -> float:
        return float(self.cumulative_lengths(points, unit)[-1])

    def point_at_distance(
        self,
        points: Sequence[Coord],
        distance: float,
        unit: DistanceUnit,
        *,
        cumulative: np.ndarray | None = None,
    ) -> Point:
        if cumulative is None:
            cumulative = self.cumulative_lengths(points, unit)
        # first vertex reached at or after `distance`
        i = int(np.searchsorted(cumulative, distance, side="left"))
        if i >= len(points):
            return _to_point(points[-1])
        overshot = distance - float(cumulative[i])
        if i == 0 or not overshot:
            return _to_point(points[i])
        direction = self.bearing(points[i], points[i - 1]) - 180
        return self.destination(points[i], overshot, direction, unit)
