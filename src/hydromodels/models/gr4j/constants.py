"""GR4J numerical constants.

These are fixed values used throughout the GR4J model computations.
"""

import math

from hydromodels.types import Resolution

# Routing split fractions, applied to the unit hydrograph outputs
B: float = 0.9  # Share of UH1 output entering the routing store (slow branch)
B_DIRECT: float = 0.1  # Share of UH2 output to direct flow; 1 - B is not exactly 0.1

# Unit hydrograph parameters
D: float = 2.5  # S-curve exponent

# Percolation: S / (1 + (S / (9/4) / X1)^4)^(1/4)
PERC_FACTOR: float = 2.25

# Numerical safeguards to prevent overflow
MAX_TANH_ARG: float = 13.0  # Maximum argument for tanh in production store

# Exponents of the routing store
EXCHANGE_EXPONENT: float = 3.5
ROUTING_EXPONENT: float = 4.0

# Model contract constants
PARAM_NAMES: tuple[str, ...] = ("x1", "x2", "x3", "x4")
DEFAULT_BOUNDS: dict[str, tuple[float, float]] = {
    "x1": (1.0, 2500.0),  # Production store capacity [mm]
    "x2": (-5.0, 5.0),  # Groundwater exchange coefficient [mm]
    "x3": (1.0, 1000.0),  # Routing store capacity [mm]
    "x4": (0.5, 10.0),  # Unit hydrograph time base [timesteps]
}

# Median parameter values from Perrin, Michel & Andréassian (2003),
# "Improvement of a parsimonious model for streamflow simulation",
# Journal of Hydrology 279, 275-289.
DEFAULT_PARAMETERS: dict[str, float] = {
    "x1": 350.0,
    "x2": 0.0,
    "x3": 90.0,
    "x4": 1.7,
}

SUPPORTED_RESOLUTIONS: tuple[Resolution, ...] = (Resolution.daily,)


def uh_lengths(x4: float) -> tuple[int, int]:
    """Return the (UH1, UH2) kernel lengths for time base x4."""
    return max(int(math.ceil(x4)), 1), max(int(math.ceil(2.0 * x4)), 1)


def compute_state_size(x4: float) -> int:
    """Compute total state size for a given unit hydrograph time base.

    State layout: [production_store, routing_store, uh1 (ceil(x4)), uh2 (ceil(2*x4))]
    """
    n_uh1, n_uh2 = uh_lengths(x4)
    return 2 + n_uh1 + n_uh2


# Total state vector size for the default X4 = 1.7
STATE_SIZE: int = compute_state_size(DEFAULT_PARAMETERS["x4"])  # = 8
