# pathpos/app/interpolator.py
import logging
import math
from collections.abc import Iterator, Mapping
from dataclasses import dataclass

from pathpos.app.protocols import GeometryProvider, OutputFormatter
from pathpos.app.validator import RawSpec, validate_spec
from pathpos.config.models import InterpolatorSettings, PathSpecModel
from pathpos.domain.entities.geography import DistanceUnit, Point
from pathpos.domain.entities.path import PathModel
from pathpos.domain.errors import InvalidInterpolationSpec
from pathpos.io.interpolator_logging import InterpolatorLogging
from pathpos.runtime.registries import DEFAULT_RETURN, make_formatter, make_geometry


@dataclass(frozen=True)
class PositionInterpolator:
    """
    Position of an entity moving at constant speed along a fixed path.

    Before ``time.from`` the entity waits at the first vertex. Inside the window it
    loops around the path, wrapping to the start each time it covers the full length.
    After ``time.to`` it stays where it was at ``time.to``.
    """

    spec: PathSpecModel
    path: PathModel
    formatter: OutputFormatter
    log: InterpolatorLogging

    @property
    def total_length(self) -> float:
        return self.path.total_length

    @property
    def distance_unit(self) -> DistanceUnit:
        return self.path.unit

    def traveled_distance(self, decimal_hours: float) -> float:
        """Distance from the first vertex, already wrapped into [0, total_length)."""
        if math.isnan(decimal_hours):
            raise ValueError("decimal_hours must be a number, got NaN")
        window, v = self.spec.time, self.spec.speed.value
        if decimal_hours < window.from_:
            return 0.0
        if decimal_hours > window.to:
            traveled = v * (window.to - window.from_)
        else:
            traveled = v * (decimal_hours - window.from_)
        return traveled % self.path.total_length

    def position_at(self, decimal_hours: float) -> Point:
        return self.path.point_at(self.traveled_distance(decimal_hours))

    def __call__(self, decimal_hours: float) -> dict | str:
        d = self.traveled_distance(decimal_hours)
        self.log.query(hours=decimal_hours, distance=d)
        return self.formatter.format(self.path.point_at(d))

    def checkpoints(
        self, start: float, end: float, step: float
    ) -> Iterator[tuple[float, dict | str]]:
        """Yield (decimal_hours, position) every `step` hours from start to end inclusive."""
        if not step > 0:
            raise ValueError(f"step must be > 0, got {step!r}")
        if end < start:
            return
        steps = math.floor((end - start) / step + 1e-9)
        for k in range(steps + 1):
            h = start + k * step
            yield (h, self(h))


def make_interpolator(
    spec: RawSpec,
    *,
    settings: InterpolatorSettings | Mapping | None = None,
    geometry: GeometryProvider | None = None,
    return_format: str | None = None,
    logger: logging.Logger | None = None,
) -> PositionInterpolator:
    """
    Validate `spec` (a mapping or its JSON text) and build its interpolator.

    `return_format` overrides the spec's own ``return`` choice.
    Raises InvalidInterpolationSpec; nothing is built on failure.
    """
    # 0) Validate settings
    cfg = (
        settings
        if isinstance(settings, InterpolatorSettings)
        else InterpolatorSettings.model_validate(settings or {})
    )
    log = InterpolatorLogging(level=cfg.log.level, debug=cfg.log.debug, logger=logger)

    # 1) Spec & path geometry
    geometry = geometry or make_geometry(cfg.geometry)
    try:
        model, path = validate_spec(spec, geometry=geometry)
    except InvalidInterpolationSpec as exc:
        log.spec_rejected(exc)
        raise

    # 2) Output
    fmt = return_format or model.return_format or DEFAULT_RETURN
    formatter = make_formatter(fmt)

    log.interpolator_ready(
        points=len(path.coordinates),
        unit=path.unit,
        total_length=path.total_length,
        return_format=fmt,
    )
    return PositionInterpolator(spec=model, path=path, formatter=formatter, log=log)
