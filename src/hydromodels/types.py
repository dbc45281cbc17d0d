"""Input data structures for the hydromodels package.

This module defines validated input containers:
- Resolution: Temporal resolution of forcing data
- ForcingData: Time series forcing data (precipitation, PET)
- as_forcing_pair: Validation of bare precip/pet sequences for the engines
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum

import numpy as np
from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from hydromodels.exceptions import LengthMismatchError


class Resolution(str, Enum):
    """Temporal resolution of forcing data."""

    daily = "daily"
    monthly = "monthly"

    @property
    def days_per_timestep(self) -> float:
        return {
            Resolution.daily: 1.0,
            Resolution.monthly: 30.4375,
        }[self]

    @property
    def _ordinal(self) -> int:
        return [Resolution.daily, Resolution.monthly].index(self)

    def __lt__(self, other: Resolution) -> bool:
        if not isinstance(other, Resolution):
            return NotImplemented
        return self._ordinal < other._ordinal

    def __le__(self, other: Resolution) -> bool:
        if not isinstance(other, Resolution):
            return NotImplemented
        return self._ordinal <= other._ordinal


_RESOLUTION_TOLERANCES: dict[Resolution, tuple[float, float]] = {
    Resolution.daily: (22.0, 26.0),  # 22-26 hours
    Resolution.monthly: (27 * 24, 32 * 24),  # 27-32 days in hours
}


def as_forcing_pair(precip: Sequence[float], pet: Sequence[float]) -> tuple[np.ndarray, np.ndarray]:
    """Coerce paired precip/pet samples to 1D float64 arrays of equal length.

    Raises:
        ValueError: If either series is not 1D.
        LengthMismatchError: If the series differ in length.
    """
    precip_arr = np.ascontiguousarray(precip, dtype=np.float64)
    pet_arr = np.ascontiguousarray(pet, dtype=np.float64)
    if precip_arr.ndim != 1 or pet_arr.ndim != 1:
        msg = f"precip and pet must be 1D, got {precip_arr.ndim}D and {pet_arr.ndim}D"
        raise ValueError(msg)
    if len(precip_arr) != len(pet_arr):
        raise LengthMismatchError(len(precip_arr), len(pet_arr))
    return precip_arr, pet_arr


def _as_series(name: str, v: np.ndarray) -> np.ndarray:
    arr = np.asarray(v, dtype=np.float64)
    if arr.ndim != 1:
        msg = f"{name} array must be 1D, got {arr.ndim}D"
        raise ValueError(msg)
    if np.any(np.isnan(arr)):
        msg = f"{name} array contains NaN values"
        raise ValueError(msg)
    return arr


class ForcingData(BaseModel):
    """Validated forcing data for the GR models.

    All arrays must be 1D with the same length. NaN values are rejected.
    Numeric arrays are coerced to float64.

    Attributes:
        time: Datetime array for each timestep (datetime64).
        precip: Precipitation [mm/timestep].
        pet: Potential evapotranspiration [mm/timestep].
        resolution: Temporal resolution of the series.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    time: np.ndarray  # datetime64
    precip: np.ndarray  # [mm/timestep]
    pet: np.ndarray  # [mm/timestep]
    resolution: Resolution = Resolution.daily

    @field_validator("time", mode="before")
    @classmethod
    def validate_time(cls, v: np.ndarray) -> np.ndarray:
        """Validate time array: must be 1D and coerced to datetime64."""
        arr = np.asarray(v)
        if arr.ndim != 1:
            msg = f"time array must be 1D, got {arr.ndim}D"
            raise ValueError(msg)
        return arr.astype("datetime64[ns]")

    @field_validator("precip", mode="before")
    @classmethod
    def validate_precip(cls, v: np.ndarray) -> np.ndarray:
        """Validate precip array: must be 1D float64 with no NaN values."""
        return _as_series("precip", v)

    @field_validator("pet", mode="before")
    @classmethod
    def validate_pet(cls, v: np.ndarray) -> np.ndarray:
        """Validate pet array: must be 1D float64 with no NaN values."""
        return _as_series("pet", v)

    @model_validator(mode="after")
    def validate_array_lengths(self) -> ForcingData:
        """Ensure all arrays have the same length."""
        n = len(self.time)
        if len(self.precip) != n:
            msg = f"precip length {len(self.precip)} does not match time length {n}"
            raise ValueError(msg)
        if len(self.pet) != n:
            msg = f"pet length {len(self.pet)} does not match time length {n}"
            raise ValueError(msg)
        return self

    @model_validator(mode="after")
    def validate_time_resolution(self) -> ForcingData:
        if len(self.time) <= 1:
            return self
        median_gap_hours = float(np.median(np.diff(self.time)) / np.timedelta64(1, "h"))
        min_hours, max_hours = _RESOLUTION_TOLERANCES[self.resolution]
        if not (min_hours <= median_gap_hours <= max_hours):
            msg = (
                f"Time spacing (median {median_gap_hours:.1f} hours) does not match "
                f"resolution '{self.resolution.value}' (expected {min_hours}-{max_hours} hours)"
            )
            raise ValueError(msg)
        return self

    def __len__(self) -> int:
        """Return the number of timesteps."""
        return len(self.time)
