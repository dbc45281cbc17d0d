"""GR4J model subpackage.

Public API for the GR4J daily hydrological model.
"""

from .constants import DEFAULT_BOUNDS, PARAM_NAMES, STATE_SIZE, SUPPORTED_RESOLUTIONS, compute_state_size
from .model import GR4J
from .outputs import GR4JFluxes
from .run import _run_numba, _step_numba, run, step
from .types import Parameters, State
from .unit_hydrographs import compute_uh_ordinates, s_curve1, s_curve2

__all__ = [
    "DEFAULT_BOUNDS",
    "GR4J",
    "GR4JFluxes",
    "PARAM_NAMES",
    "Parameters",
    "STATE_SIZE",
    "State",
    "SUPPORTED_RESOLUTIONS",
    "_run_numba",
    "_step_numba",
    "compute_state_size",
    "compute_uh_ordinates",
    "run",
    "s_curve1",
    "s_curve2",
    "step",
]

# Auto-register with the model registry
import hydromodels.models.gr4j as _self
from hydromodels.registry import register

register("gr4j", _self)
