"""GR2M model flux outputs as arrays.

This module provides the dataclass for organizing and accessing GR2M model outputs.
"""

from __future__ import annotations

from dataclasses import dataclass, fields

import numpy as np


@dataclass(frozen=True)
class GR2MFluxes:
    """GR2M model flux outputs as arrays.

    All arrays have the same length as the input forcing data.

    Attributes:
        pet: Potential evapotranspiration [mm/month].
        precip: Precipitation input [mm/month].
        production_store: Production store level after timestep [mm].
        rainfall_excess: Rainfall excess P1 [mm/month].
        storage_fill: Storage infiltration PS [mm/month].
        actual_et: Actual evapotranspiration AE [mm/month].
        percolation: Percolation from production store P2 [mm/month].
        routing_input: Total water to routing P3 = P1 + P2 [mm/month].
        routing_store: Routing store level after timestep [mm].
        exchange: Groundwater exchange AEXCH [mm/month].
        streamflow: Total simulated streamflow Q [mm/month].
    """

    pet: np.ndarray
    precip: np.ndarray
    production_store: np.ndarray
    rainfall_excess: np.ndarray
    storage_fill: np.ndarray
    actual_et: np.ndarray
    percolation: np.ndarray
    routing_input: np.ndarray
    routing_store: np.ndarray
    exchange: np.ndarray
    streamflow: np.ndarray

    @classmethod
    def from_array(cls, outputs_arr: np.ndarray) -> GR2MFluxes:
        """Build fluxes from an (n_timesteps, n_fluxes) output array."""
        return cls(*(np.ascontiguousarray(outputs_arr[:, i]) for i in range(len(fields(cls)))))

    def to_dict(self) -> dict[str, np.ndarray]:
        """Convert to dictionary of arrays.

        Returns:
            Dictionary mapping field names to their numpy array values.
        """
        return {field.name: getattr(self, field.name) for field in fields(self)}


N_FLUXES: int = len(fields(GR2MFluxes))
