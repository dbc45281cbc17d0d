"""GR4J model orchestration functions.

This module provides the main entry points for running the GR4J model:
- step(): Execute a single timestep
- run(): Execute the model over a timeseries
"""

from __future__ import annotations

import numpy as np
from numba import njit

from hydromodels.exceptions import InvalidParameterError
from hydromodels.outputs import ModelOutput
from hydromodels.types import ForcingData

from .constants import B, B_DIRECT, SUPPORTED_RESOLUTIONS
from .outputs import N_FLUXES, GR4JFluxes
from .processes import (
    direct_branch,
    groundwater_exchange,
    percolation,
    production_store_update,
    routing_store_update,
)
from .types import Parameters, State
from .unit_hydrographs import compute_uh_ordinates, convolve_uh, convolve_uh_in_place


@njit(cache=True)
def _step_numba(
    stores: np.ndarray,  # shape (2,) - [production_store, routing_store], modified in place
    params_arr: np.ndarray,  # shape (4,)
    precip: float,
    pet: float,
    uh1_states: np.ndarray,  # modified in place
    uh2_states: np.ndarray,  # modified in place
    uh1_ordinates: np.ndarray,
    uh2_ordinates: np.ndarray,
    output_arr: np.ndarray,  # shape (14,) - output written here
) -> None:
    """Execute one timestep of GR4J using arrays (Numba-optimized).

    Params layout: [x1, x2, x3, x4]
    Output layout: [pet, precip, production_store, storage_infiltration, actual_et,
                    percolation, effective_rainfall, q9, q1, routing_store,
                    exchange, qr, qd, streamflow]
    """
    x1 = params_arr[0]
    x2 = params_arr[1]
    x3 = params_arr[2]
    # x4 only shapes the ordinates, which are computed outside the kernel

    # 1. Production store update
    prod_store, net_evap, storage_infiltration, effective_rainfall = production_store_update(
        precip, pet, stores[0], x1
    )
    if precip > pet:
        actual_et = pet
    else:
        actual_et = net_evap + precip

    # 2. Percolation joins the effective rainfall
    prod_store, percolation_amount = percolation(prod_store, x1)
    effective_rainfall = effective_rainfall + percolation_amount

    # 3. Both unit hydrographs receive the full effective rainfall
    uh1_head = convolve_uh_in_place(uh1_states, effective_rainfall, uh1_ordinates)
    uh2_head = convolve_uh_in_place(uh2_states, effective_rainfall, uh2_ordinates)

    # 4. Groundwater exchange from the routing store level before inflow
    exchange_f = groundwater_exchange(stores[1], x2, x3)

    # 5. Routing store (slow branch)
    q9 = uh1_head * B
    routing_store, qr = routing_store_update(stores[1], q9, exchange_f, x3)

    # 6. Direct branch (fast), exchange added again
    q1 = uh2_head * B_DIRECT
    qd = direct_branch(q1, exchange_f)

    streamflow = qr + qd

    stores[0] = prod_store
    stores[1] = routing_store

    output_arr[0] = pet
    output_arr[1] = precip
    output_arr[2] = prod_store
    output_arr[3] = storage_infiltration
    output_arr[4] = actual_et
    output_arr[5] = percolation_amount
    output_arr[6] = effective_rainfall
    output_arr[7] = q9
    output_arr[8] = q1
    output_arr[9] = routing_store
    output_arr[10] = exchange_f
    output_arr[11] = qr
    output_arr[12] = qd
    output_arr[13] = streamflow


@njit(cache=True)
def _run_numba(
    stores: np.ndarray,  # shape (2,)
    params_arr: np.ndarray,  # shape (4,)
    precip_arr: np.ndarray,  # shape (n_timesteps,)
    pet_arr: np.ndarray,  # shape (n_timesteps,)
    uh1_states: np.ndarray,
    uh2_states: np.ndarray,
    uh1_ordinates: np.ndarray,
    uh2_ordinates: np.ndarray,
    outputs_arr: np.ndarray,  # shape (n_timesteps, 14)
) -> None:
    """Run GR4J over a timeseries using arrays (Numba-optimized).

    Stores and buffers are modified in place. Outputs are written to outputs_arr.
    """
    n_timesteps = len(precip_arr)
    n_outputs = outputs_arr.shape[1]
    output_single = np.zeros(n_outputs)

    for t in range(n_timesteps):
        _step_numba(
            stores,
            params_arr,
            precip_arr[t],
            pet_arr[t],
            uh1_states,
            uh2_states,
            uh1_ordinates,
            uh2_ordinates,
            output_single,
        )
        for i in range(n_outputs):
            outputs_arr[t, i] = output_single[i]


def check_buffers(uh1_states: np.ndarray, uh2_states: np.ndarray) -> None:
    """Reject empty convolution buffers, which have no head to route from."""
    for name, buffer in (("uh1", uh1_states), ("uh2", uh2_states)):
        if len(buffer) == 0:
            msg = f"{name} buffer must contain at least one element"
            raise InvalidParameterError(msg)


def run_arrays(
    params: Parameters,
    stores: np.ndarray,
    uh1_states: np.ndarray,
    uh2_states: np.ndarray,
    precip: np.ndarray,
    pet: np.ndarray,
) -> np.ndarray:
    """Run the Numba kernel on raw arrays, mutating stores and buffers in place.

    Ordinates are recomputed from params.x4 on every call.

    Returns:
        Output array of shape (n_timesteps, 14).
    """
    check_buffers(uh1_states, uh2_states)
    uh1_ordinates, uh2_ordinates = compute_uh_ordinates(params.x4)

    outputs_arr = np.zeros((len(precip), N_FLUXES), dtype=np.float64)
    _run_numba(
        stores,
        np.asarray(params),
        np.ascontiguousarray(precip, dtype=np.float64),
        np.ascontiguousarray(pet, dtype=np.float64),
        uh1_states,
        uh2_states,
        uh1_ordinates,
        uh2_ordinates,
        outputs_arr,
    )
    return outputs_arr


def step(
    state: State,
    params: Parameters,
    precip: float,
    pet: float,
    uh1_ordinates: np.ndarray | None = None,
    uh2_ordinates: np.ndarray | None = None,
) -> tuple[State, dict[str, float]]:
    """Execute one timestep of the GR4J model.

    Implements the complete GR4J algorithm:
    1. Production store update (evaporation and infiltration)
    2. Percolation from production store
    3. Convolve effective rainfall through UH1 and UH2
    4. Compute groundwater exchange
    5. Update routing store with 90% of the UH1 output
    6. Compute direct branch outflow from 10% of the UH2 output
    7. Sum total streamflow

    Args:
        state: Current model state (stores and UH buffers).
        params: Model parameters (X1-X4).
        precip: Daily precipitation (mm/day).
        pet: Daily potential evapotranspiration (mm/day).
        uh1_ordinates: Pre-computed UH1 ordinates. If None, computed from params.x4.
        uh2_ordinates: Pre-computed UH2 ordinates. If None, computed from params.x4.

    Returns:
        Tuple of (new_state, fluxes) where:
        - new_state: Updated State object after the timestep
        - fluxes: Dictionary containing all model outputs
    """
    if uh1_ordinates is None or uh2_ordinates is None:
        uh1_ordinates, uh2_ordinates = compute_uh_ordinates(params.x4)
    check_buffers(state.uh1_states, state.uh2_states)

    # 1. Production store update
    precip = float(precip)
    pet = float(pet)
    prod_store, net_evap, storage_infiltration, effective_rainfall = production_store_update(
        precip, pet, float(state.production_store), params.x1
    )
    actual_et = pet if precip > pet else net_evap + precip

    # 2. Percolation
    prod_store, percolation_amount = percolation(prod_store, params.x1)
    effective_rainfall += percolation_amount

    # 3. Convolve through unit hydrographs
    new_uh1_states, uh1_head = convolve_uh(
        np.asarray(state.uh1_states, dtype=np.float64), effective_rainfall, uh1_ordinates
    )
    new_uh2_states, uh2_head = convolve_uh(
        np.asarray(state.uh2_states, dtype=np.float64), effective_rainfall, uh2_ordinates
    )

    # 4. Groundwater exchange
    exchange_f = groundwater_exchange(float(state.routing_store), params.x2, params.x3)

    # 5. Routing store
    q9 = uh1_head * B
    routing_store, qr = routing_store_update(float(state.routing_store), q9, exchange_f, params.x3)

    # 6. Direct branch
    q1 = uh2_head * B_DIRECT
    qd = direct_branch(q1, exchange_f)

    new_state = State(
        production_store=prod_store,
        routing_store=routing_store,
        uh1_states=new_uh1_states,
        uh2_states=new_uh2_states,
    )

    fluxes: dict[str, float] = {
        "pet": float(pet),
        "precip": float(precip),
        "production_store": float(prod_store),
        "storage_infiltration": float(storage_infiltration),
        "actual_et": float(actual_et),
        "percolation": float(percolation_amount),
        "effective_rainfall": float(effective_rainfall),
        "q9": float(q9),
        "q1": float(q1),
        "routing_store": float(routing_store),
        "exchange": float(exchange_f),
        "qr": float(qr),
        "qd": float(qd),
        "streamflow": float(qr + qd),
    }

    return new_state, fluxes


def run(
    params: Parameters,
    forcing: ForcingData,
    initial_state: State | None = None,
) -> ModelOutput[GR4JFluxes]:
    """Run the GR4J model over a timeseries.

    Executes the GR4J model for each timestep in the input forcing data, returning
    a ModelOutput with all model outputs. The initial state is not modified.

    Args:
        params: Model parameters (X1-X4).
        forcing: Input forcing data with precip and pet arrays.
        initial_state: Initial model state. If None, uses State.initialize(params).

    Returns:
        ModelOutput containing GR4J flux outputs.
        Access streamflow via result.streamflow or result.fluxes.streamflow (numpy array).
        Convert to DataFrame via result.to_dataframe().

    Raises:
        ValueError: If forcing resolution is not daily.

    Example:
        >>> params = Parameters(x1=350, x2=0, x3=90, x4=1.7)
        >>> forcing = ForcingData(
        ...     time=np.array(['2020-01-01', '2020-01-02', '2020-01-03'], dtype='datetime64'),
        ...     precip=np.array([10.0, 5.0, 0.0]),
        ...     pet=np.array([3.0, 4.0, 5.0]),
        ... )
        >>> result = run(params, forcing)
        >>> result.streamflow
        array([...])
    """
    if forcing.resolution not in SUPPORTED_RESOLUTIONS:
        supported = [r.value for r in SUPPORTED_RESOLUTIONS]
        msg = f"GR4J supports resolutions {supported}, got '{forcing.resolution.value}'"
        raise ValueError(msg)

    state = State.initialize(params) if initial_state is None else initial_state.copy()

    stores = np.array([state.production_store, state.routing_store], dtype=np.float64)
    outputs_arr = run_arrays(
        params,
        stores,
        np.ascontiguousarray(state.uh1_states, dtype=np.float64),
        np.ascontiguousarray(state.uh2_states, dtype=np.float64),
        forcing.precip,
        forcing.pet,
    )

    return ModelOutput(
        time=forcing.time,
        fluxes=GR4JFluxes.from_array(outputs_arr),
    )
