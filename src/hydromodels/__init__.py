"""hydromodels rainfall-runoff modeling package.

Lumped conceptual rainfall-runoff models: GR4J (Génie Rural à 4 paramètres
Journalier) for daily series and GR2M for monthly series.
"""

import hydromodels.models.gr2m  # noqa: F401 - triggers auto-registration
import hydromodels.models.gr4j  # noqa: F401 - triggers auto-registration
from hydromodels.exceptions import (
    HydroModelError,
    InvalidParameterError,
    LengthMismatchError,
    MissingParameterError,
)
from hydromodels.models.gr2m import GR2M, GR2MFluxes
from hydromodels.models.gr4j import GR4J, GR4JFluxes, Parameters, State, run, step
from hydromodels.outputs import ModelOutput
from hydromodels.registry import get_model, get_model_info, list_models
from hydromodels.types import ForcingData, Resolution

__all__ = [
    "ForcingData",
    "GR2M",
    "GR2MFluxes",
    "GR4J",
    "GR4JFluxes",
    "HydroModelError",
    "InvalidParameterError",
    "LengthMismatchError",
    "MissingParameterError",
    "ModelOutput",
    "Parameters",
    "Resolution",
    "State",
    "get_model",
    "get_model_info",
    "list_models",
    "run",
    "step",
]
