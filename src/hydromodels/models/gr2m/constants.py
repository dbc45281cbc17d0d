"""GR2M numerical constants.

These are fixed values used throughout the GR2M model computations.
"""

from hydromodels.types import Resolution

# Routing constant
ROUTING_DENOMINATOR: float = 60.0  # Constant in quadratic routing equation [mm]

# Percolation exponent: S / (1 + (S / X1)^3)^(1/3)
PERC_EXPONENT: float = 3.0

# Model contract constants
PARAM_NAMES: tuple[str, ...] = ("x1", "x2")
DEFAULT_BOUNDS: dict[str, tuple[float, float]] = {
    "x1": (1.0, 2500.0),  # Production store capacity [mm]
    "x2": (0.2, 2.0),  # Groundwater exchange coefficient [-]
}
STATE_SIZE: int = 2
SUPPORTED_RESOLUTIONS: tuple[Resolution, ...] = (Resolution.monthly,)
