"""GR2M core process functions.

Numba-compiled pure functions implementing the equations of each GR2M model
component (Mouelhi et al., 2006). All inputs and outputs are floats.
"""

import numpy as np
from numba import njit

from .constants import PERC_EXPONENT, ROUTING_DENOMINATOR


@njit(cache=True)
def production_store_rainfall(precip: float, store: float, x1: float) -> tuple[float, float, float]:
    """Neutralize rainfall into the production store.

    Args:
        precip: Monthly precipitation (mm/month).
        store: Current production store level (mm).
        x1: Production store capacity parameter (mm).

    Returns:
        Tuple of (s1, p1, ps):
        - s1: Production store level after rainfall (mm).
        - p1: Rainfall excess (mm/month).
        - ps: Storage fill (mm/month).
    """
    phi = np.tanh(precip / x1)

    s1 = (store + x1 * phi) / (1.0 + phi * (store / x1))
    p1 = precip + store - s1
    ps = precip - p1

    return s1, p1, ps


@njit(cache=True)
def production_store_evaporation(pet: float, s1: float, x1: float) -> tuple[float, float]:
    """Extract evapotranspiration from the production store.

    Returns:
        Tuple of (s2, ae):
        - s2: Production store level after evaporation (mm).
        - ae: Actual evapotranspiration (mm/month).
    """
    psi = np.tanh(pet / x1)

    s2 = s1 * (1.0 - psi) / (1.0 + psi * (1.0 - s1 / x1))
    ae = s1 - s2

    return s2, ae


@njit(cache=True)
def percolation(s2: float, x1: float) -> tuple[float, float]:
    """Compute percolation from the production store.

    Returns:
        Tuple of (s_final, p2):
        - s_final: Production store level after percolation (mm).
        - p2: Percolation amount (mm/month).
    """
    s_final = s2 / (1.0 + (s2 / x1) ** PERC_EXPONENT) ** (1.0 / PERC_EXPONENT)
    p2 = s2 - s_final

    return s_final, p2


@njit(cache=True)
def routing_store_update(routing_store: float, p3: float, x2: float) -> tuple[float, float]:
    """Fill the routing store and apply groundwater exchange via X2.

    Returns:
        Tuple of (r2, aexch):
        - r2: Routing store level after exchange (mm).
        - aexch: Groundwater exchange, positive = gain (mm/month).
    """
    r1 = routing_store + p3
    r2 = x2 * r1
    aexch = r2 - r1

    return r2, aexch


@njit(cache=True)
def compute_streamflow(r2: float) -> tuple[float, float]:
    """Quadratic reservoir routing Q = R^2 / (R + 60).

    Returns:
        Tuple of (r_final, q):
        - r_final: Routing store level after streamflow (mm).
        - q: Simulated streamflow (mm/month).
    """
    q = r2**2.0 / (r2 + ROUTING_DENOMINATOR)
    r_final = r2 - q

    return r_final, q
