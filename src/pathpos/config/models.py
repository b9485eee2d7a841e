from typing import Annotated, Literal

from pydantic import (
    AliasChoices,
    AfterValidator,
    AllowInfNan,
    BaseModel,
    ConfigDict,
    Field,
    Strict,
    StrictInt,
    ValidationInfo,
    field_validator,
)

from pathpos.domain.entities.geography import DistanceUnit

# JSON numbers only: no bools, no numeric strings, no NaN/Inf
FiniteStrictFloat = Annotated[float, Strict(), AllowInfNan(False)]


def _float_range(v: int) -> int:
    try:
        float(v)
    except OverflowError:
        raise ValueError("number is out of float range") from None
    return v


Number = Annotated[StrictInt, AfterValidator(_float_range)] | FiniteStrictFloat
Coordinate = tuple[Number, Number]

ReturnFormat = Literal["geo:json", "geo:point"]


# ----------------- PATH SPECIFICATION ---------------------
# Specs often ride inside larger simulator documents, so unknown keys are ignored.


class SpeedModel(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)
    value: Number
    units: Literal["km/h", "mi/h"]

    @property
    def distance_unit(self) -> DistanceUnit:
        return "kilometers" if self.units == "km/h" else "miles"


class TimeWindowModel(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)
    from_: Number = Field(alias="from")  # decimal hours
    to: Number


class PathSpecModel(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)
    # field order is validation order: the first failing field is the one reported
    coordinates: tuple[Coordinate, ...] = Field(min_length=2)
    speed: SpeedModel
    time: TimeWindowModel
    return_format: ReturnFormat | None = Field(
        default=None, validation_alias=AliasChoices("return", "returnFormat", "return_format")
    )


# ----------------- SETTINGS ---------------------


class LogModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = False


class GeometrySphericalModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["spherical"] = "spherical"
    km_radius: float = 6373.0
    mi_radius: float = 3960.0

    @field_validator("km_radius", "mi_radius")
    @classmethod
    def _positive(cls, v: float, info: ValidationInfo) -> float:
        if not v > 0:
            raise ValueError(f"{info.field_name} must be > 0")
        return v


GeometryUnion = Annotated[GeometrySphericalModel, Field(discriminator="kind")]


class InterpolatorSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")
    geometry: GeometryUnion = Field(default_factory=GeometrySphericalModel)
    log: LogModel = LogModel()
