"""GR2M monthly rainfall-runoff model.

Public API:
    GR2M: Stateful engine that advances its stores across successive runs.
    Parameters, State: Model parameter and state dataclasses.
    GR2MFluxes: Flux outputs returned by run() and GR2M.simulate().
    step, run: Functional single-timestep and timeseries entry points.
"""

from .constants import DEFAULT_BOUNDS, PARAM_NAMES, STATE_SIZE, SUPPORTED_RESOLUTIONS
from .model import GR2M
from .outputs import GR2MFluxes
from .run import _run_numba, _step_numba, run, step
from .types import Parameters, State

__all__ = [
    "DEFAULT_BOUNDS",
    "GR2M",
    "GR2MFluxes",
    "PARAM_NAMES",
    "Parameters",
    "STATE_SIZE",
    "SUPPORTED_RESOLUTIONS",
    "State",
    "_run_numba",
    "_step_numba",
    "run",
    "step",
]

# Auto-register with the model registry
import hydromodels.models.gr2m as _self
from hydromodels.registry import register

register("gr2m", _self)
