"""Stateful GR4J simulation engine.

GR4J owns the two store levels and the two unit hydrograph buffers of one
catchment. Each call to run() advances that state by one timestep per input
sample, so consecutive calls continue the same simulation:

    >>> model = GR4J(Parameters(x1=350.0, x2=0.0, x3=90.0, x4=1.7))
    >>> q_first = model.run(precip[:365], pet[:365])
    >>> q_next = model.run(precip[365:], pet[365:])

An engine is not safe to share between threads; use one engine per catchment.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

import numpy as np

from hydromodels.types import as_forcing_pair

from .outputs import GR4JFluxes
from .run import check_buffers, run_arrays
from .types import Parameters, State

logger = logging.getLogger(__name__)

_UH_KEYS: tuple[str, ...] = ("uh1", "uh2")


def _resized(buffer: np.ndarray, n: int) -> np.ndarray:
    """Zero-pad or truncate a buffer to length n, keeping its head."""
    out = np.zeros(n, dtype=np.float64)
    keep = min(n, len(buffer))
    out[:keep] = buffer[:keep]
    return out


class GR4J:
    """GR4J rainfall-runoff model with persistent state.

    Args:
        params: Model parameters (X1-X4).
        production_store: Initial production store level [mm]. Defaults to 0.
        routing_store: Initial routing store level [mm]. Defaults to 0.
        unit_hydrographs: Optional initial buffer contents keyed by "uh1"
            and/or "uh2". Values are used as given, so a buffer whose length
            differs from ceil(x4) or ceil(2*x4) changes the effective buffer size.
    """

    def __init__(
        self,
        params: Parameters,
        production_store: float | None = None,
        routing_store: float | None = None,
        unit_hydrographs: Mapping[str, Sequence[float]] | None = None,
    ) -> None:
        self._params = params
        self._stores = np.zeros(2, dtype=np.float64)
        self._uh1 = np.zeros(0, dtype=np.float64)
        self._uh2 = np.zeros(0, dtype=np.float64)
        self.reset(
            production_store=production_store,
            routing_store=routing_store,
            unit_hydrographs=unit_hydrographs,
        )

    @classmethod
    def from_mapping(
        cls,
        params: Mapping[str, float],
        production_store: float | None = None,
        routing_store: float | None = None,
        unit_hydrographs: Mapping[str, Sequence[float]] | None = None,
    ) -> GR4J:
        """Create an engine from a string-keyed parameter map like ``{"X1": 350.0, ...}``.

        Raises:
            MissingParameterError: If any of X1..X4 is absent.
        """
        return cls(Parameters.from_mapping(params), production_store, routing_store, unit_hydrographs)

    def reset(
        self,
        params: Parameters | None = None,
        production_store: float | None = None,
        routing_store: float | None = None,
        unit_hydrographs: Mapping[str, Sequence[float]] | None = None,
    ) -> None:
        """Re-initialize the engine state.

        Buffers are zeroed with the lengths derived from x4, then any
        provided values override the defaults. Omitted stores start empty.

        Raises:
            InvalidParameterError: If an override buffer is empty.
            KeyError: If unit_hydrographs has a key other than "uh1" or "uh2".
        """
        params = self._params if params is None else params
        n_uh1, n_uh2 = params.uh_lengths
        uh1 = np.zeros(n_uh1, dtype=np.float64)
        uh2 = np.zeros(n_uh2, dtype=np.float64)

        if unit_hydrographs is not None:
            unknown = sorted(set(unit_hydrographs) - set(_UH_KEYS))
            if unknown:
                msg = f"Unknown unit hydrograph keys {unknown}, expected any of {list(_UH_KEYS)}"
                raise KeyError(msg)
            if "uh1" in unit_hydrographs:
                uh1 = np.array(unit_hydrographs["uh1"], dtype=np.float64)
            if "uh2" in unit_hydrographs:
                uh2 = np.array(unit_hydrographs["uh2"], dtype=np.float64)
            check_buffers(uh1, uh2)
            if len(uh1) != n_uh1 or len(uh2) != n_uh2:
                logger.debug(
                    "Unit hydrograph override sizes (%d, %d) differ from derived sizes (%d, %d)",
                    len(uh1),
                    len(uh2),
                    n_uh1,
                    n_uh2,
                )

        # Nothing is assigned until every override has been validated
        stores = (
            0.0 if production_store is None else float(production_store),
            0.0 if routing_store is None else float(routing_store),
        )
        self._params = params
        self._stores[:] = stores
        self._uh1 = uh1
        self._uh2 = uh2

    @property
    def params(self) -> Parameters:
        return self._params

    @params.setter
    def params(self, params: Parameters) -> None:
        """Replace parameters, resizing the buffers if the kernel lengths change."""
        n_uh1, n_uh2 = params.uh_lengths
        if (n_uh1, n_uh2) != (len(self._uh1), len(self._uh2)):
            logger.debug(
                "Resizing unit hydrograph buffers from (%d, %d) to (%d, %d)",
                len(self._uh1),
                len(self._uh2),
                n_uh1,
                n_uh2,
            )
            self._uh1 = _resized(self._uh1, n_uh1)
            self._uh2 = _resized(self._uh2, n_uh2)
        self._params = params

    @property
    def production_store(self) -> float:
        return float(self._stores[0])

    @property
    def routing_store(self) -> float:
        return float(self._stores[1])

    @property
    def uh1(self) -> np.ndarray:
        """Copy of the UH1 (slow branch) convolution buffer."""
        return self._uh1.copy()

    @property
    def uh2(self) -> np.ndarray:
        """Copy of the UH2 (fast branch) convolution buffer."""
        return self._uh2.copy()

    @property
    def state(self) -> State:
        """Detached snapshot of the current state."""
        return State(
            production_store=self.production_store,
            routing_store=self.routing_store,
            uh1_states=self._uh1.copy(),
            uh2_states=self._uh2.copy(),
        )

    @state.setter
    def state(self, state: State) -> None:
        uh1 = np.array(state.uh1_states, dtype=np.float64)
        uh2 = np.array(state.uh2_states, dtype=np.float64)
        check_buffers(uh1, uh2)
        self._stores[0] = float(state.production_store)
        self._stores[1] = float(state.routing_store)
        self._uh1 = uh1
        self._uh2 = uh2

    def simulate(self, precip: Sequence[float], pet: Sequence[float]) -> GR4JFluxes:
        """Advance the model over paired precip/pet series and return all fluxes.

        Raises:
            LengthMismatchError: If precip and pet differ in length.
        """
        precip_arr, pet_arr = as_forcing_pair(precip, pet)
        outputs_arr = run_arrays(self._params, self._stores, self._uh1, self._uh2, precip_arr, pet_arr)
        return GR4JFluxes.from_array(outputs_arr)

    def run(self, precip: Sequence[float], pet: Sequence[float]) -> np.ndarray:
        """Advance the model over paired precip/pet series.

        Args:
            precip: Catchment average rainfall [mm/timestep].
            pet: Catchment average potential evapotranspiration [mm/timestep].

        Returns:
            Simulated streamflow, one value per input sample [mm/timestep].

        Raises:
            LengthMismatchError: If precip and pet differ in length.
        """
        return self.simulate(precip, pet).streamflow

    def __repr__(self) -> str:
        p = self._params
        return (
            f"GR4J(x1={p.x1}, x2={p.x2}, x3={p.x3}, x4={p.x4}, "
            f"production_store={self.production_store:.4f}, routing_store={self.routing_store:.4f})"
        )


