# runtime/registries.py
from collections.abc import Callable

from pathpos.app.formatters import GeoJsonFormatter, GeoPointFormatter
from pathpos.app.protocols import GeometryProvider, OutputFormatter
from pathpos.config.models import GeometrySphericalModel, GeometryUnion
from pathpos.domain.mechanics.mechanics_geometry import SphericalGeometry

DEFAULT_RETURN = "geo:json"

GeometryFactory = Callable[[GeometryUnion], GeometryProvider]
FormatterFactory = Callable[[], OutputFormatter]

_geometry_registry: dict[str, GeometryFactory] = {}
_formatter_registry: dict[str, FormatterFactory] = {}


# ------------------- Geometry providers ---------------------------


def register_geometry(kind: str):
    def deco(fn: GeometryFactory):
        _geometry_registry[kind] = fn
        return fn

    return deco


def make_geometry(cfg: GeometryUnion) -> GeometryProvider:
    return _geometry_registry[cfg.kind](cfg)


@register_geometry("spherical")
def _make_spherical(cfg: GeometrySphericalModel):
    return SphericalGeometry(radii={"kilometers": cfg.km_radius, "miles": cfg.mi_radius})


# ------------------- Output formatters ---------------------------


def register_formatter(kind: str):
    def deco(fn: FormatterFactory):
        _formatter_registry[kind] = fn
        return fn

    return deco


def make_formatter(kind: str | None = None) -> OutputFormatter:
    kind = kind or DEFAULT_RETURN
    try:
        return _formatter_registry[kind]()
    except KeyError:
        raise ValueError(f"Unknown return format {kind!r}") from None


@register_formatter("geo:json")
def _make_geojson():
    return GeoJsonFormatter()


@register_formatter("geo:point")
def _make_geopoint():
    return GeoPointFormatter()
