"""GR4J data structures for parameters and state variables.

This module defines the core data types used by the GR4J hydrological model:
- Parameters: The 4 calibrated model parameters
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

from .constants import DEFAULT_BOUNDS, DEFAULT_PARAMETERS, PARAM_NAMES, uh_lengths


@dataclass(frozen=True)
class Parameters:
    """GR4J calibrated parameters.

    This is a frozen dataclass to prevent accidental modification during
    simulation. Values are validated on construction.

    Attributes:
        x1: Production store capacity [mm].
        x2: Groundwater exchange coefficient [mm]. Negative values export water.
        x3: Routing store reference capacity [mm].
        x4: Unit hydrograph time base [timesteps]. May be fractional.

    Raises:
        InvalidParameterError: If any value is not finite, or if x1, x3 or x4
            is not strictly positive.
    """

    x1: float  # Production store capacity [mm]
    x2: float  # Groundwater exchange coefficient [mm]
    x3: float  # Routing store capacity [mm]
    x4: float  # Unit hydrograph time base [timesteps]

    def __post_init__(self) -> None:
        require_finite("GR4J", x1=self.x1, x2=self.x2, x3=self.x3, x4=self.x4)
        require_positive("GR4J", x1=self.x1, x3=self.x3, x4=self.x4)
        warn_if_outside_bounds(self, DEFAULT_BOUNDS)

    @property
    def uh_lengths(self) -> tuple[int, int]:
        """Lengths of the (UH1, UH2) kernels derived from x4."""
        return uh_lengths(self.x4)

    @classmethod
    def default(cls) -> Parameters:
        """Median parameter set from Perrin et al. (2003)."""
        return cls(**DEFAULT_PARAMETERS)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, float]) -> Parameters:
        """Build Parameters from a string-keyed map such as ``{"X1": 350.0, ...}``.

        Raises:
            MissingParameterError: If any of x1..x4 is absent.
        """
        return cls(**read_mapping(mapping, PARAM_NAMES, "GR4J"))

    def __array__(self, dtype: np.dtype | None = None, copy: bool | None = None) -> np.ndarray:
        """Convert parameters to a 1D array.

        Layout: [x1, x2, x3, x4]
        """
        arr = np.array([self.x1, self.x2, self.x3, self.x4], dtype=np.float64)
        if dtype is not None:
            arr = arr.astype(dtype)
        return arr

    @classmethod
    def from_array(cls, arr: np.ndarray) -> Parameters:
        """Reconstruct Parameters from array."""
        return cls(
            x1=float(arr[0]),
            x2=float(arr[1]),
            x3=float(arr[2]),
            x4=float(arr[3]),
        )


@dataclass
class State:
    """GR4J model state variables.

    Mutable state that evolves during simulation. Contains the two stores
    and the unit hydrograph convolution buffers.

    Attributes:
        production_store: S - soil moisture store level [mm].
        routing_store: R - routing store level [mm].
        uh1_states: Convolution buffer for UH1, normally ceil(x4) elements.
        uh2_states: Convolution buffer for UH2, normally ceil(2*x4) elements.
    """

    production_store: float  # S - soil moisture [mm]
    routing_store: float  # R - routing store [mm]
    uh1_states: np.ndarray  # slow branch, 90% of effective rainfall
    uh2_states: np.ndarray  # fast branch, 10% of effective rainfall

    @classmethod
    def initialize(cls, params: Parameters) -> State:
        """Create the completely dry initial state.

        Both stores start empty and the unit hydrograph buffers are zeroed
        with the lengths derived from x4.

        Args:
            params: Model parameters to size the buffers from.

        Returns:
            Initialized State object ready for simulation.
        """
        n_uh1, n_uh2 = params.uh_lengths
        return cls(
            production_store=0.0,
            routing_store=0.0,
            uh1_states=np.zeros(n_uh1, dtype=np.float64),
            uh2_states=np.zeros(n_uh2, dtype=np.float64),
        )

    def copy(self) -> State:
        """Return a deep copy with independent buffers."""
        return State(
            production_store=self.production_store,
            routing_store=self.routing_store,
            uh1_states=self.uh1_states.copy(),
            uh2_states=self.uh2_states.copy(),
        )

    def __array__(self, dtype: np.dtype | None = None, copy: bool | None = None) -> np.ndarray:
        """Convert state to a 1D array.

        Layout: [production_store, routing_store, uh1_states..., uh2_states...]
        """
        arr = np.concatenate(
            (
                np.array([self.production_store, self.routing_store], dtype=np.float64),
                np.asarray(self.uh1_states, dtype=np.float64),
                np.asarray(self.uh2_states, dtype=np.float64),
            )
        )
        if dtype is not None:
            arr = arr.astype(dtype)
        return arr

    @classmethod
    def from_array(cls, arr: np.ndarray, n_uh1: int) -> State:
        """Reconstruct State from array.

        Args:
            arr: Array with the layout produced by ``__array__``.
            n_uh1: Length of the UH1 buffer; the remainder after it is UH2.
        """
        return cls(
            production_store=float(arr[0]),
            routing_store=float(arr[1]),
            uh1_states=np.array(arr[2 : 2 + n_uh1], dtype=np.float64),
            uh2_states=np.array(arr[2 + n_uh1 :], dtype=np.float64),
        )
