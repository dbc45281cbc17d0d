"""GR2M model orchestration functions.

This module provides the main entry points for running the GR2M model:
- step(): Execute a single timestep
- run(): Execute the model over a timeseries
"""

from __future__ import annotations

import numpy as np
from numba import njit

from hydromodels.outputs import ModelOutput
from hydromodels.types import ForcingData

from .constants import SUPPORTED_RESOLUTIONS
from .outputs import N_FLUXES, GR2MFluxes
from .processes import (
    compute_streamflow,
    percolation,
    production_store_evaporation,
    production_store_rainfall,
    routing_store_update,
)
from .types import Parameters, State


@njit(cache=True)
def _step_numba(
    stores: np.ndarray,  # shape (2,) - [production_store, routing_store], modified in place
    params_arr: np.ndarray,  # shape (2,)
    precip: float,
    pet: float,
    output_arr: np.ndarray,  # shape (11,) - output written here
) -> None:
    """Execute one timestep of GR2M using arrays (Numba-optimized).

    Params layout: [x1, x2]
    Output layout: [pet, precip, production_store, rainfall_excess, storage_fill,
                    actual_et, percolation, routing_input, routing_store, exchange, streamflow]
    """
    x1 = params_arr[0]
    x2 = params_arr[1]

    # 1. Production store update with rainfall
    s1, p1, ps = production_store_rainfall(precip, stores[0], x1)

    # 2. Production store update with evaporation
    s2, ae = production_store_evaporation(pet, s1, x1)

    # 3. Percolation joins the rainfall excess
    s_final, p2 = percolation(s2, x1)
    p3 = p1 + p2

    # 4. Routing store with groundwater exchange
    r2, aexch = routing_store_update(stores[1], p3, x2)

    # 5. Quadratic reservoir outflow
    r_final, q = compute_streamflow(r2)

    stores[0] = s_final
    stores[1] = r_final

    output_arr[0] = pet
    output_arr[1] = precip
    output_arr[2] = s_final
    output_arr[3] = p1
    output_arr[4] = ps
    output_arr[5] = ae
    output_arr[6] = p2
    output_arr[7] = p3
    output_arr[8] = r_final
    output_arr[9] = aexch
    output_arr[10] = q


@njit(cache=True)
def _run_numba(
    stores: np.ndarray,  # shape (2,)
    params_arr: np.ndarray,  # shape (2,)
    precip_arr: np.ndarray,  # shape (n_timesteps,)
    pet_arr: np.ndarray,  # shape (n_timesteps,)
    outputs_arr: np.ndarray,  # shape (n_timesteps, 11)
) -> None:
    """Run GR2M over a timeseries using arrays (Numba-optimized).

    Stores are modified in place. Outputs are written to outputs_arr.
    """
    n_timesteps = len(precip_arr)
    n_outputs = outputs_arr.shape[1]
    output_single = np.zeros(n_outputs)

    for t in range(n_timesteps):
        _step_numba(stores, params_arr, precip_arr[t], pet_arr[t], output_single)
        for i in range(n_outputs):
            outputs_arr[t, i] = output_single[i]


def run_arrays(params: Parameters, stores: np.ndarray, precip: np.ndarray, pet: np.ndarray) -> np.ndarray:
    """Run the Numba kernel on raw arrays, mutating stores in place.

    Returns:
        Output array of shape (n_timesteps, 11).
    """
    outputs_arr = np.zeros((len(precip), N_FLUXES), dtype=np.float64)
    _run_numba(
        stores,
        np.asarray(params),
        np.ascontiguousarray(precip, dtype=np.float64),
        np.ascontiguousarray(pet, dtype=np.float64),
        outputs_arr,
    )
    return outputs_arr


def step(
    state: State,
    params: Parameters,
    precip: float,
    pet: float,
) -> tuple[State, dict[str, float]]:
    """Execute one timestep of the GR2M model.

    Implements the complete GR2M algorithm:
    1. Production store update with rainfall (tanh formulation)
    2. Production store update with evaporation (tanh formulation)
    3. Percolation from production store (cube root)
    4. Routing store update with groundwater exchange (X2 multiplier)
    5. Quadratic reservoir outflow: Q = R^2 / (R + 60)

    Args:
        state: Current model state (stores).
        params: Model parameters (X1, X2).
        precip: Monthly precipitation (mm/month).
        pet: Monthly potential evapotranspiration (mm/month).

    Returns:
        Tuple of (new_state, fluxes) where:
        - new_state: Updated State object after the timestep
        - fluxes: Dictionary containing all model outputs
    """
    precip = float(precip)
    pet = float(pet)

    # 1. Production store update with rainfall
    s1, p1, ps = production_store_rainfall(precip, float(state.production_store), params.x1)

    # 2. Production store update with evaporation
    s2, ae = production_store_evaporation(pet, s1, params.x1)

    # 3. Percolation
    s_final, p2 = percolation(s2, params.x1)
    p3 = p1 + p2

    # 4. Routing store
    r2, aexch = routing_store_update(float(state.routing_store), p3, params.x2)

    # 5. Streamflow
    r_final, q = compute_streamflow(r2)

    new_state = State(production_store=s_final, routing_store=r_final)

    fluxes: dict[str, float] = {
        "pet": pet,
        "precip": precip,
        "production_store": float(s_final),
        "rainfall_excess": float(p1),
        "storage_fill": float(ps),
        "actual_et": float(ae),
        "percolation": float(p2),
        "routing_input": float(p3),
        "routing_store": float(r_final),
        "exchange": float(aexch),
        "streamflow": float(q),
    }

    return new_state, fluxes


def run(
    params: Parameters,
    forcing: ForcingData,
    initial_state: State | None = None,
) -> ModelOutput[GR2MFluxes]:
    """Run the GR2M model over a timeseries.

    Args:
        params: Model parameters (X1, X2).
        forcing: Input forcing data with monthly precip and pet arrays.
        initial_state: Initial model state. If None, both stores start empty.

    Returns:
        ModelOutput containing GR2M flux outputs.

    Raises:
        ValueError: If forcing resolution is not monthly.
    """
    if forcing.resolution not in SUPPORTED_RESOLUTIONS:
        supported = [r.value for r in SUPPORTED_RESOLUTIONS]
        msg = f"GR2M supports resolutions {supported}, got '{forcing.resolution.value}'"
        raise ValueError(msg)

    state = State.initialize(params) if initial_state is None else initial_state

    stores = np.asarray(state).copy()
    outputs_arr = run_arrays(params, stores, forcing.precip, forcing.pet)

    return ModelOutput(
        time=forcing.time,
        fluxes=GR2MFluxes.from_array(outputs_arr),
    )
