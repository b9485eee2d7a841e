"""
Turn raw path specifications into validated models and measured paths.

Three stages, each with its own error so callers can tell them apart:
parse (JSON text only), schema (pydantic), geometry (measuring the line).
"""

import json
import math
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from pathpos.app.protocols import GeometryProvider
from pathpos.config.models import PathSpecModel
from pathpos.domain.entities.path import PathModel
from pathpos.domain.errors import PathGeometryError, SpecParseError, SpecSchemaError

RawSpec = PathSpecModel | Mapping[str, Any] | str | bytes | bytearray


def parse_spec(raw: RawSpec) -> Any:
    if not isinstance(raw, (str, bytes, bytearray)):
        return raw
    try:
        return json.loads(raw)
    except (ValueError, UnicodeDecodeError) as exc:
        raise SpecParseError(raw, f"invalid JSON: {exc}") from exc


def _first_error(exc: ValidationError) -> str:
    err = exc.errors()[0]
    where = ".".join(str(p) for p in err["loc"]) or "specification"
    return f"{where}: {err['msg']}"


def check_spec(data: Any, raw: RawSpec) -> PathSpecModel:
    try:
        return PathSpecModel.model_validate(data)
    except ValidationError as exc:
        raise SpecSchemaError(raw, _first_error(exc)) from exc


def build_path(model: PathSpecModel, raw: RawSpec, geometry: GeometryProvider) -> PathModel:
    try:
        path = PathModel.build(model.coordinates, model.speed.distance_unit, geometry)
    except (ValueError, ArithmeticError) as exc:
        raise PathGeometryError(raw, f"cannot measure coordinates: {exc}") from exc
    total = path.total_length
    if not (math.isfinite(total) and total > 0):
        raise PathGeometryError(raw, f"path length must be a positive number, got {total!r}")
    return path


def validate_spec(raw: RawSpec, *, geometry: GeometryProvider) -> tuple[PathSpecModel, PathModel]:
    model = check_spec(parse_spec(raw), raw)
    return model, build_path(model, raw, geometry)
