from pathpos.app.protocols import OutputFormatter
from pathpos.domain.entities.geography import Point


class GeoJsonFormatter(OutputFormatter):
    kind = "geo:json"

    def format(self, p: Point) -> dict:
        return {"type": "Point", "coordinates": p.coordinates}


class GeoPointFormatter(OutputFormatter):
    """`lon,lat` with each number as Python `str()` writes it.

    Integers stay integral (`1,2`) and floats use the shortest round-trip repr, which
    switches to exponent form outside [1e-4, 1e16): `1e-05` rather than `0.00001`.
    """

    kind = "geo:point"

    def format(self, p: Point) -> str:
        return ",".join(str(c) for c in p.coordinates)
