"""Helpers shared by the model Parameters classes.

- read_mapping: Pull named values out of a loosely keyed parameter map
- warn_if_outside_bounds: Log parameters outside typical calibration ranges
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping

from hydromodels.exceptions import InvalidParameterError, MissingParameterError

logger = logging.getLogger(__name__)


def read_mapping(mapping: Mapping[str, float], names: tuple[str, ...], model: str) -> dict[str, float]:
    """Extract the named parameters from a string-keyed mapping.

    Keys are matched case-insensitively so both ``"x1"`` and ``"X1"`` are
    accepted. Keys not in ``names`` are ignored.

    Raises:
        MissingParameterError: If any name has no matching key.
    """
    lowered = {str(key).lower(): value for key, value in mapping.items()}
    values: dict[str, float] = {}
    for name in names:
        if name not in lowered:
            raise MissingParameterError(name, model)
        values[name] = float(lowered[name])
    return values


def require_finite(model: str, **values: float) -> None:
    for name, value in values.items():
        if not math.isfinite(value):
            msg = f"{model} parameter {name}={value} must be finite"
            raise InvalidParameterError(msg)


def require_positive(model: str, **values: float) -> None:
    for name, value in values.items():
        if not value > 0.0:
            msg = f"{model} parameter {name}={value} must be strictly positive"
            raise InvalidParameterError(msg)


def warn_if_outside_bounds(params: object, bounds: Mapping[str, tuple[float, float]]) -> None:
    """Log warnings for parameters outside typical calibration ranges.

    This does not raise errors - parameters outside bounds may still be valid
    for specific catchments or research purposes.
    """
    for name, (lower, upper) in bounds.items():
        value = getattr(params, name)
        if value < lower or value > upper:
            logger.warning(
                "Parameter %s=%.4f is outside typical range [%.2f, %.2f]",
                name,
                value,
                lower,
                upper,
            )
