"""Model registry for hydromodels rainfall-runoff models.

Provides a global registry of model modules so callers can select a model
by name at runtime. Each registered model must follow the standard model
contract.

Required model exports:
    - PARAM_NAMES: tuple[str, ...] - Parameter names in order
    - DEFAULT_BOUNDS: dict[str, tuple[float, float]] - (min, max) bounds per parameter
    - STATE_SIZE: int - Number of elements in the default state array
    - SUPPORTED_RESOLUTIONS: tuple[Resolution, ...] - Accepted forcing resolutions
    - Parameters: class with from_array() classmethod and __array__() method
    - State: class with from_array() classmethod and __array__() method
    - run: function - Execute model over timeseries
    - step: function - Execute single timestep
"""

import logging
from types import ModuleType

from hydromodels.types import Resolution

logger = logging.getLogger(__name__)

_REQUIRED_EXPORTS: tuple[str, ...] = (
    "PARAM_NAMES",
    "DEFAULT_BOUNDS",
    "STATE_SIZE",
    "Parameters",
    "State",
    "run",
    "step",
    "SUPPORTED_RESOLUTIONS",
)

# Parameters and State share the same array protocol
_REQUIRED_ARRAY_METHODS: tuple[str, ...] = ("from_array", "__array__")

# Global registry: {name: module}
_models: dict[str, ModuleType] = {}


def _missing(obj: object, names: tuple[str, ...]) -> list[str]:
    return [name for name in names if not hasattr(obj, name)]


def _validate_module(name: str, module: ModuleType) -> None:
    """Validate that a module has all required exports.

    Args:
        name: The model name being registered.
        module: The module to validate.

    Raises:
        ValueError: If the module is missing required exports or methods.
    """
    missing_exports = _missing(module, _REQUIRED_EXPORTS)
    if missing_exports:
        msg = f"Model '{name}' is missing required exports: {', '.join(missing_exports)}"
        raise ValueError(msg)

    for cls_name in ("Parameters", "State"):
        missing_methods = _missing(getattr(module, cls_name), _REQUIRED_ARRAY_METHODS)
        if missing_methods:
            msg = f"Model '{name}' {cls_name} class is missing required methods: {', '.join(missing_methods)}"
            raise ValueError(msg)

    resolutions = module.SUPPORTED_RESOLUTIONS
    if not isinstance(resolutions, tuple):
        msg = f"Model '{name}' SUPPORTED_RESOLUTIONS must be a tuple"
        raise ValueError(msg)
    if not all(isinstance(r, Resolution) for r in resolutions):
        msg = f"Model '{name}' SUPPORTED_RESOLUTIONS must contain only Resolution enum values"
        raise ValueError(msg)


def register(name: str, module: ModuleType) -> None:
    """Register a model module under the given name.

    Args:
        name: The name to register the model under (e.g., "gr4j", "gr2m").
        module: The model module containing the required exports.

    Raises:
        ValueError: If the module is missing required exports or methods.

    Example:
        >>> from hydromodels import registry
        >>> from hydromodels.models import gr4j
        >>> registry.register("gr4j", gr4j)
    """
    _validate_module(name, module)
    _models[name] = module
    logger.debug("Registered model '%s'", name)


def get_model(name: str) -> ModuleType:
    """Get a registered model module by name.

    Raises:
        KeyError: If the model name is not registered.

    Example:
        >>> model = registry.get_model("gr4j")
        >>> result = model.run(params, forcing)
    """
    if name not in _models:
        available = ", ".join(sorted(_models.keys())) if _models else "(none)"
        msg = f"Unknown model '{name}'. Available models: {available}"
        raise KeyError(msg)
    return _models[name]


def list_models() -> list[str]:
    """Return sorted list of registered model names."""
    return sorted(_models.keys())


def get_model_info(name: str) -> dict[str, object]:
    """Get metadata about a registered model.

    Args:
        name: The registered model name.

    Returns:
        Dictionary containing param_names, default_bounds, state_size and
        supported_resolutions.

    Raises:
        KeyError: If the model name is not registered.

    Example:
        >>> info = registry.get_model_info("gr4j")
        >>> info["param_names"]
        ('x1', 'x2', 'x3', 'x4')
    """
    module = get_model(name)

    return {
        "param_names": module.PARAM_NAMES,
        "default_bounds": module.DEFAULT_BOUNDS,
        "state_size": module.STATE_SIZE,
        "supported_resolutions": module.SUPPORTED_RESOLUTIONS,
    }
