"""Tests for GR2M Parameters and State data structures."""

import numpy as np
import pytest
from hydromodels.exceptions import InvalidParameterError, MissingParameterError
from hydromodels.models.gr2m import Parameters, State


class TestParameters:
    """Tests for the GR2M Parameters frozen dataclass."""

    def test_creates_with_valid_values(self) -> None:
        params = Parameters(x1=500.0, x2=1.0)

        assert params.x1 == 500.0
        assert params.x2 == 1.0

    def test_is_frozen(self) -> None:
        params = Parameters(x1=500.0, x2=1.0)

        with pytest.raises(AttributeError):
            params.x2 = 0.5  # type: ignore[misc]

    def test_rejects_non_positive_x1(self) -> None:
        with pytest.raises(InvalidParameterError, match="x1"):
            Parameters(x1=0.0, x2=1.0)

    def test_rejects_infinite_x2(self) -> None:
        with pytest.raises(InvalidParameterError, match="finite"):
            Parameters(x1=500.0, x2=float("inf"))

    def test_from_mapping(self) -> None:
        assert Parameters.from_mapping({"X1": 500.0, "X2": 0.8}) == Parameters(x1=500.0, x2=0.8)

    def test_from_mapping_missing_key(self) -> None:
        with pytest.raises(MissingParameterError, match="x2"):
            Parameters.from_mapping({"X1": 500.0})

    def test_array_roundtrip(self) -> None:
        params = Parameters(x1=420.0, x2=0.9)

        arr = np.asarray(params)

        np.testing.assert_array_equal(arr, [420.0, 0.9])
        assert Parameters.from_array(arr) == params


class TestState:
    """Tests for the GR2M State dataclass."""

    def test_initialize_is_dry(self) -> None:
        state = State.initialize(Parameters(x1=500.0, x2=1.0))

        assert state.production_store == 0.0
        assert state.routing_store == 0.0

    def test_array_roundtrip(self) -> None:
        state = State(production_store=120.0, routing_store=35.0)

        restored = State.from_array(np.asarray(state))

        assert restored == state
