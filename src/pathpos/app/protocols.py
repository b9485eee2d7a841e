from collections.abc import Sequence
from typing import Protocol, runtime_checkable

import numpy as np

from pathpos.domain.entities.geography import Coord, DistanceUnit, Point


# ------------- Mechanics --------------------
@runtime_checkable
class GeometryProvider(Protocol):
    """
    Responsibilities:
      • Measure a line made of lon/lat vertices, segment by segment.
      • Locate the point at a traveled distance along that line.
    Units: degrees for coordinates; distances in the requested unit.
    """

    def segment_lengths(self, points: Sequence[Coord], unit: DistanceUnit) -> np.ndarray: ...
    def line_length(self, points: Sequence[Coord], unit: DistanceUnit) -> float: ...
    def point_at_distance(
        self,
        points: Sequence[Coord],
        distance: float,
        unit: DistanceUnit,
        *,
        cumulative: np.ndarray | None = None,
    ) -> Point:
        """Distance is clamped to [0, line length]; `cumulative` skips re-measuring."""


# --------------- Output -------------------------


@runtime_checkable
class OutputFormatter(Protocol):
    kind: str

    def format(self, p: Point) -> dict | str: ...
