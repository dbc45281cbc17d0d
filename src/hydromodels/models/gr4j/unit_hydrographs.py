"""GR4J unit hydrograph functions.

This module implements the S-curve based unit hydrographs (UH1 and UH2) used
in the GR4J rainfall-runoff model for temporal distribution of effective rainfall.

UH1 has base time X4 and spreads 90% of effective rainfall, UH2 has base
time 2*X4 and spreads the remaining 10%. Kernel lengths are ceil(X4) and
ceil(2*X4), so a fractional X4 gives a partial final ordinate.
"""

import numpy as np
from numba import njit

from .constants import D, uh_lengths


def s_curve1(t: float, x4: float) -> float:
    """Cumulative UH1 mass at elapsed time t.

    Args:
        t: Elapsed time [timesteps].
        x4: Unit hydrograph time base [timesteps], must be > 0.

    Returns:
        S-curve value between 0 and 1.
    """
    if t <= 0.0:
        return 0.0
    elif t < x4:
        return (t / x4) ** D
    else:
        return 1.0


def s_curve2(t: float, x4: float) -> float:
    """Cumulative UH2 mass at elapsed time t.

    Args:
        t: Elapsed time [timesteps].
        x4: Unit hydrograph time base [timesteps], must be > 0.

    Returns:
        S-curve value between 0 and 1.
    """
    if t <= 0.0:
        return 0.0
    elif t < x4:
        return 0.5 * (t / x4) ** D
    elif t < 2.0 * x4:
        return 1.0 - 0.5 * (2.0 - t / x4) ** D
    else:
        return 1.0


def compute_uh_ordinates(x4: float) -> tuple[np.ndarray, np.ndarray]:
    """Compute unit hydrograph ordinates for UH1 and UH2.

    The ordinates are first differences of the S-curves at integer times,
    so each kernel is the discretized probability mass of the routing delay
    and sums to 1.

    Args:
        x4: Unit hydrograph time base [timesteps], must be > 0.

    Returns:
        Tuple of (uh1_ordinates, uh2_ordinates) where:
            - uh1_ordinates: Array of length ceil(x4)
            - uh2_ordinates: Array of length ceil(2*x4)

    Notes:
        UH1(i) = SS1(i + 1) - SS1(i) and UH2(j) = SS2(j + 1) - SS2(j)
        with SS1/SS2 given by s_curve1/s_curve2.
    """
    n_uh1, n_uh2 = uh_lengths(x4)

    uh1_ordinates = np.zeros(n_uh1, dtype=np.float64)
    uh2_ordinates = np.zeros(n_uh2, dtype=np.float64)

    for t in range(1, n_uh1 + 1):
        uh1_ordinates[t - 1] = s_curve1(float(t), x4) - s_curve1(t - 1.0, x4)

    for t in range(1, n_uh2 + 1):
        uh2_ordinates[t - 1] = s_curve2(float(t), x4) - s_curve2(t - 1.0, x4)

    return uh1_ordinates, uh2_ordinates


@njit(cache=True)
def convolve_uh_in_place(uh_states: np.ndarray, routing_input: float, uh_ordinates: np.ndarray) -> float:
    """Advance a convolution buffer by one timestep, modifying it in place.

    Each slot holds the partial sum of past inputs still in flight at that
    delay, so one shift-and-accumulate pass is equivalent to convolving the
    whole input history with the kernel.

    A buffer longer than the kernel is allowed: slots past the kernel end
    receive no new input. The last slot always takes the last ordinate.

    Returns:
        The head of the updated buffer, i.e. the flow due at this timestep.
    """
    n = len(uh_states)
    n_ordinates = len(uh_ordinates)

    for k in range(n - 1):
        weight = uh_ordinates[k] if k < n_ordinates else 0.0
        uh_states[k] = uh_states[k + 1] + weight * routing_input

    uh_states[n - 1] = uh_ordinates[n_ordinates - 1] * routing_input

    return uh_states[0]


@njit(cache=True)
def convolve_uh(uh_states: np.ndarray, routing_input: float, uh_ordinates: np.ndarray) -> tuple[np.ndarray, float]:
    """Perform unit hydrograph convolution for one time step.

    Args:
        uh_states: Current unit hydrograph buffer (will not be modified).
        routing_input: Effective rainfall entering the filter this step [mm].
        uh_ordinates: Unit hydrograph ordinates (from compute_uh_ordinates).

    Returns:
        Tuple of (new_states, output) where:
            - new_states: Updated buffer after convolution
            - output: new_states[0], the filter output for this timestep

    Notes:
        The convolution follows the algorithm:
            1. For k = 0 to len-2: new_states[k] = uh_states[k+1] + uh_ordinates[k] * routing_input
            2. For the last element: new_states[-1] = uh_ordinates[-1] * routing_input
            3. Output is the first element of the updated states
    """
    new_states = uh_states.copy()
    output = convolve_uh_in_place(new_states, routing_input, uh_ordinates)
    return new_states, output
