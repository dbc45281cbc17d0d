"""GR4J model flux outputs as arrays.

This module provides the dataclass for organizing and accessing GR4J model outputs.
"""

from __future__ import annotations

from dataclasses import dataclass, fields

import numpy as np


@dataclass(frozen=True)
class GR4JFluxes:
    """GR4J model flux outputs as arrays.

    All arrays have the same length as the input forcing data. Field order
    matches the column order of the Numba output array.

    Attributes:
        pet: Potential evapotranspiration [mm/day].
        precip: Precipitation input [mm/day].
        production_store: Production store level after timestep [mm].
        storage_infiltration: Rainfall entering the production store [mm/day].
        actual_et: Actual evapotranspiration [mm/day].
        percolation: Percolation from the production store [mm/day].
        effective_rainfall: Total water routed through the unit hydrographs [mm/day].
        q9: Slow branch inflow to the routing store, 0.9 * UH1 head [mm/day].
        q1: Fast branch before exchange, 0.1 * UH2 head [mm/day].
        routing_store: Routing store level after timestep [mm].
        exchange: Groundwater exchange applied to each branch [mm/day].
        qr: Routing store outflow [mm/day].
        qd: Direct branch outflow [mm/day].
        streamflow: Total simulated streamflow QR + QD [mm/day].
    """

    pet: np.ndarray
    precip: np.ndarray
    production_store: np.ndarray
    storage_infiltration: np.ndarray
    actual_et: np.ndarray
    percolation: np.ndarray
    effective_rainfall: np.ndarray
    q9: np.ndarray
    q1: np.ndarray
    routing_store: np.ndarray
    exchange: np.ndarray
    qr: np.ndarray
    qd: np.ndarray
    streamflow: np.ndarray

    @classmethod
    def from_array(cls, outputs_arr: np.ndarray) -> GR4JFluxes:
        """Build fluxes from an (n_timesteps, n_fluxes) output array."""
        return cls(*(np.ascontiguousarray(outputs_arr[:, i]) for i in range(len(fields(cls)))))

    def to_dict(self) -> dict[str, np.ndarray]:
        """Convert to dictionary of arrays.

        Returns:
            Dictionary mapping field names to their numpy array values.
        """
        return {field.name: getattr(self, field.name) for field in fields(self)}


N_FLUXES: int = len(fields(GR4JFluxes))
