"""Exceptions raised by hydromodels.

All errors are raised before any simulation step runs:
- MissingParameterError: A required key is absent from a parameter mapping
- InvalidParameterError: A parameter or initial state value is outside the model's domain
- LengthMismatchError: Paired forcing series have different lengths
"""


class HydroModelError(Exception):
    """Base class for all hydromodels errors."""


class MissingParameterError(HydroModelError, KeyError):
    """A required parameter is missing from a parameter mapping."""

    def __init__(self, name: str, model: str) -> None:
        self.name = name
        self.model = model
        super().__init__(f"{model} parameter '{name}' is missing from the parameter mapping")

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message
        return str(self.args[0])


class InvalidParameterError(HydroModelError, ValueError):
    """A parameter value lies outside the domain where the model is defined."""


class LengthMismatchError(HydroModelError, ValueError):
    """Precipitation and evapotranspiration series have different lengths."""

    def __init__(self, n_precip: int, n_pet: int) -> None:
        self.n_precip = n_precip
        self.n_pet = n_pet
        super().__init__(f"precip length {n_precip} does not match pet length {n_pet}")
