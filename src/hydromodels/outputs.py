"""Structured output container for model results.

ModelOutput combines the time index with a model-specific flux dataclass
(GR4JFluxes, GR2MFluxes) and converts both to a pandas DataFrame.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

import numpy as np
import pandas as pd

__all__ = ["ModelOutput"]

# Type variable for flux types
F = TypeVar("F")


@dataclass(frozen=True)
class ModelOutput(Generic[F]):
    """Complete model output combining the time index and flux outputs.

    Generic over the flux type F, allowing each model to use its own flux
    output type while sharing the same ModelOutput structure.

    Attributes:
        time: Datetime array for each timestep.
        fluxes: Model flux outputs (type depends on the model).
    """

    time: np.ndarray
    fluxes: F

    @property
    def streamflow(self) -> np.ndarray:
        """Return the streamflow array from flux outputs.

        Returns:
            Streamflow array [mm/timestep].
        """
        return self.fluxes.streamflow  # type: ignore[attr-defined, no-any-return]

    def __len__(self) -> int:
        """Return the number of timesteps."""
        return len(self.time)

    def to_dataframe(self) -> pd.DataFrame:
        """Convert to DataFrame with time index.

        Returns:
            DataFrame with all flux outputs as columns and time as index.
        """
        data = self.fluxes.to_dict()  # type: ignore[attr-defined]

        df = pd.DataFrame(data, index=self.time)
        df.index.name = "time"

        return df
