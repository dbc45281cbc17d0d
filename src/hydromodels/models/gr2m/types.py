"""GR2M data structures for parameters and state variables.

This module defines the core data types used by the GR2M hydrological model:
- Parameters: The 2 calibrated model parameters
- State: The mutable state variables tracked during simulation
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

import numpy as np

from hydromodels.models._parameters import (
    read_mapping,
    require_finite,
    require_positive,
    warn_if_outside_bounds,
)

from .constants import DEFAULT_BOUNDS, PARAM_NAMES


@dataclass(frozen=True)
class Parameters:
    """GR2M calibrated parameters.

    Both parameters that define the model behavior. This is a frozen dataclass
    to prevent accidental modification during simulation.

    Attributes:
        x1: Production store capacity [mm].
        x2: Groundwater exchange coefficient [-].

    Raises:
        InvalidParameterError: If a value is not finite or x1 is not strictly positive.
    """

    x1: float  # Production store capacity [mm]
    x2: float  # Groundwater exchange coefficient [-]

    def __post_init__(self) -> None:
        require_finite("GR2M", x1=self.x1, x2=self.x2)
        require_positive("GR2M", x1=self.x1)
        warn_if_outside_bounds(self, DEFAULT_BOUNDS)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, float]) -> Parameters:
        """Build Parameters from a string-keyed map such as ``{"X1": 500.0, "X2": 1.0}``.

        Raises:
            MissingParameterError: If x1 or x2 is absent.
        """
        return cls(**read_mapping(mapping, PARAM_NAMES, "GR2M"))

    def __array__(self, dtype: np.dtype | None = None, copy: bool | None = None) -> np.ndarray:
        """Convert parameters to a 1D array.

        Layout: [x1, x2]
        """
        arr = np.array([self.x1, self.x2], dtype=np.float64)
        if dtype is not None:
            arr = arr.astype(dtype)
        return arr

    @classmethod
    def from_array(cls, arr: np.ndarray) -> Parameters:
        """Reconstruct Parameters from array."""
        return cls(
            x1=float(arr[0]),
            x2=float(arr[1]),
        )


@dataclass
class State:
    """GR2M model state variables.

    Attributes:
        production_store: S - soil moisture store level [mm].
        routing_store: R - routing store level [mm].
    """

    production_store: float  # S - soil moisture [mm]
    routing_store: float  # R - routing store [mm]

    @classmethod
    def initialize(cls, params: Parameters) -> State:
        """Create the completely dry initial state (both stores empty)."""
        return cls(production_store=0.0, routing_store=0.0)

    def __array__(self, dtype: np.dtype | None = None, copy: bool | None = None) -> np.ndarray:
        """Convert state to a 1D array.

        Layout: [production_store, routing_store]
        """
        arr = np.array([self.production_store, self.routing_store], dtype=np.float64)
        if dtype is not None:
            arr = arr.astype(dtype)
        return arr

    @classmethod
    def from_array(cls, arr: np.ndarray) -> State:
        """Reconstruct State from array."""
        return cls(
            production_store=float(arr[0]),
            routing_store=float(arr[1]),
        )
