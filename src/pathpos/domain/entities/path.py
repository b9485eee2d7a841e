from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from pathpos.app.protocols import GeometryProvider
from pathpos.domain.entities.geography import Coord, DistanceUnit, Point


@dataclass(frozen=True, eq=False)
class PathModel:
    """Validated vertices plus the lengths measured once at construction."""

    coordinates: tuple[Coord, ...]
    unit: DistanceUnit
    segment_lengths: np.ndarray
    cumulative: np.ndarray  # cumulative[0] == 0, cumulative[-1] == total length
    geometry: GeometryProvider

    @classmethod
    def build(
        cls, coordinates: Sequence[Coord], unit: DistanceUnit, geometry: GeometryProvider
    ) -> PathModel:
        coords = tuple((p[0], p[1]) for p in coordinates)
        seg = np.asarray(geometry.segment_lengths(coords, unit), dtype=float)
        cum = np.concatenate(([0.0], np.cumsum(seg)))
        # shared between threads; nothing may write to them
        seg.flags.writeable = False
        cum.flags.writeable = False
        return cls(
            coordinates=coords, unit=unit, segment_lengths=seg, cumulative=cum, geometry=geometry
        )

    @property
    def total_length(self) -> float:
        return float(self.cumulative[-1])

    def point_at(self, distance: float) -> Point:
        return self.geometry.point_at_distance(
            self.coordinates, distance, self.unit, cumulative=self.cumulative
        )
