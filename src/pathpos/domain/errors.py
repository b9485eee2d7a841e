EXPECTED_SCHEMA = (
    'it should include the following properties: "coordinates" (array of points, each an array of '
    '2 floats or integers), "speed" (an object with a "value" (number) property and a "units" '
    '("km/h" or "mi/h") property), "time" (an object with a "from" (decimal hours) and a "to" '
    '(decimal hours) property) and an optional "return" (with possible values "geo:json" or '
    '"geo:point")'
)


class InvalidInterpolationSpec(ValueError):
    """Raised when a path specification cannot be turned into an interpolator."""

    def __init__(self, raw, reason: str):
        self.raw, self.reason = raw, reason
        super().__init__(
            f"The provided interpolation object or specification ({raw!r}) is not valid "
            f"({reason}); {EXPECTED_SCHEMA}"
        )


class SpecParseError(InvalidInterpolationSpec):
    """Text input is not valid JSON."""


class SpecSchemaError(InvalidInterpolationSpec):
    """Input does not have the shape of a path specification."""


class PathGeometryError(InvalidInterpolationSpec):
    """Coordinates are well formed but do not describe a usable path."""
