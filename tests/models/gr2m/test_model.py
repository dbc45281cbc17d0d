"""Tests for the stateful GR2M engine."""

import numpy as np
import pytest
from hydromodels import GR2M, GR2MFluxes, LengthMismatchError, MissingParameterError
from hydromodels.models.gr2m import Parameters

PRECIP = [1.0, 2.0, 3.0, 4.0, 3.0, 2.0, 1.0]
PET = [1.0] * 7


class TestGR2M:
    """Tests for GR2M engine construction and runs."""

    def test_reference_scenario(self) -> None:
        model = GR2M.from_mapping({"X1": 1.0, "X2": 1.0})

        q = model.run(PRECIP, PET)

        np.testing.assert_allclose(
            q,
            [
                0.0009450053530675536,
                0.0327630181266177,
                0.2055971698811445,
                0.6632149029988136,
                0.991927371887451,
                1.0533436405957102,
                0.9029856114321761,
            ],
            rtol=1e-10,
        )
        assert model.production_store == pytest.approx(0.1792526700466929, rel=1e-10)
        assert model.routing_store == pytest.approx(6.922989036389427, rel=1e-10)

    def test_chained_runs_equal_single_run(self) -> None:
        whole = GR2M(Parameters(x1=1.0, x2=1.0)).run(PRECIP, PET)

        model = GR2M(Parameters(x1=1.0, x2=1.0))
        chained = np.concatenate([model.run(PRECIP[:3], PET[:3]), model.run(PRECIP[3:], PET[3:])])

        np.testing.assert_allclose(chained, whole, rtol=1e-12)

    def test_warm_start_and_reset(self) -> None:
        model = GR2M(Parameters(x1=400.0, x2=0.9), production_store=150.0, routing_store=25.0)

        assert model.production_store == 150.0
        assert model.routing_store == 25.0

        model.reset()

        assert model.production_store == 0.0
        assert model.routing_store == 0.0

    def test_state_roundtrip(self) -> None:
        model = GR2M(Parameters(x1=400.0, x2=0.9))
        model.run([90.0, 60.0], [20.0, 30.0])
        checkpoint = model.state

        first = model.run([50.0, 10.0], [40.0, 80.0])
        model.state = checkpoint
        second = model.run([50.0, 10.0], [40.0, 80.0])

        np.testing.assert_array_equal(first, second)

    def test_simulate_returns_fluxes(self) -> None:
        fluxes = GR2M(Parameters(x1=400.0, x2=0.9)).simulate([90.0, 60.0], [20.0, 30.0])

        assert isinstance(fluxes, GR2MFluxes)
        assert len(fluxes.streamflow) == 2

    def test_length_mismatch_raises(self) -> None:
        with pytest.raises(LengthMismatchError):
            GR2M(Parameters(x1=400.0, x2=0.9)).run([1.0, 2.0], [1.0])

    def test_missing_parameter(self) -> None:
        with pytest.raises(MissingParameterError, match="x1"):
            GR2M.from_mapping({"X2": 1.0})
