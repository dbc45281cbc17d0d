"""Tests for GR4J core process functions.

Tests verify the mathematical correctness of each process function:
production store, percolation, groundwater exchange, routing store and
the direct branch.
"""

import numpy as np
import pytest
from hydromodels.models.gr4j.processes import (
    direct_branch,
    groundwater_exchange,
    percolation,
    production_store_update,
    routing_store_update,
)


class TestProductionStoreUpdate:
    """Tests for production_store_update function."""

    def test_rainfall_case_fills_store(self) -> None:
        """When P > E, the store gains rainfall and no evaporation is drawn."""
        new_store, net_evap, storage_infiltration, effective_rainfall = production_store_update(10.0, 0.5, 0.0, 10.0)

        expected_ps = 10.0 * np.tanh(0.95)
        assert storage_infiltration == pytest.approx(expected_ps)
        assert net_evap == 0.0
        assert effective_rainfall == pytest.approx(9.5 - expected_ps)
        assert new_store == pytest.approx(expected_ps)

    def test_rainfall_case_water_balance(self) -> None:
        """Net rainfall P - E splits into storage infiltration and effective rainfall."""
        for precip, pet, store, x1 in [(20.0, 2.0, 100.0, 350.0), (5.0, 1.0, 300.0, 350.0), (60.0, 0.0, 10.0, 50.0)]:
            _, _, ps, pr = production_store_update(precip, pet, store, x1)
            assert np.isclose(ps + pr, precip - pet), f"Failed for P={precip}, E={pet}, S={store}"

    def test_evaporation_case_empties_store(self) -> None:
        """When P <= E, the store loses water and no rainfall is routed."""
        new_store, net_evap, storage_infiltration, effective_rainfall = production_store_update(1.0, 5.0, 200.0, 350.0)

        assert net_evap > 0.0
        assert storage_infiltration == 0.0
        assert effective_rainfall == 0.0
        assert new_store == pytest.approx(200.0 - net_evap)

    def test_equal_precip_and_pet_is_evaporation_case(self) -> None:
        """P == E goes through the evaporation branch with zero net demand."""
        new_store, net_evap, storage_infiltration, effective_rainfall = production_store_update(3.0, 3.0, 100.0, 350.0)

        assert net_evap == 0.0
        assert storage_infiltration == 0.0
        assert effective_rainfall == 0.0
        assert new_store == 100.0

    def test_empty_store_cannot_evaporate(self) -> None:
        """An empty store yields no evaporation."""
        new_store, net_evap, _, _ = production_store_update(0.0, 10.0, 0.0, 350.0)

        assert net_evap == 0.0
        assert new_store == 0.0

    def test_tanh_argument_is_capped(self) -> None:
        """Very large rainfall does not overflow and nearly fills an empty store."""
        x1 = 100.0
        new_store, _, ps, pr = production_store_update(1.0e6, 0.0, 0.0, x1)

        assert np.isfinite(new_store)
        assert ps == pytest.approx(x1 * np.tanh(13.0))
        assert pr == pytest.approx(1.0e6 - ps)


class TestPercolation:
    """Tests for percolation function."""

    def test_zero_store_zero_percolation(self) -> None:
        """Empty store produces no percolation."""
        new_store, perc = percolation(0.0, 350.0)

        assert new_store == 0.0
        assert perc == 0.0

    def test_formula(self) -> None:
        """S_new = S / (1 + (S / 2.25 / X1)^4)^0.25."""
        store, x1 = 300.0, 350.0

        new_store, perc = percolation(store, x1)

        expected = store / (1.0 + (store / 2.25 / x1) ** 4) ** 0.25
        assert new_store == pytest.approx(expected)
        assert perc == pytest.approx(store - expected)

    def test_percolation_increases_with_store(self) -> None:
        """A fuller store percolates more."""
        _, perc_low = percolation(50.0, 350.0)
        _, perc_high = percolation(300.0, 350.0)

        assert perc_high > perc_low > 0.0


class TestGroundwaterExchange:
    """Tests for groundwater_exchange function."""

    def test_formula(self) -> None:
        """F = X2 * (R / X3)^3.5."""
        assert groundwater_exchange(45.0, 2.0, 90.0) == pytest.approx(2.0 * 0.5**3.5)

    def test_zero_x2_no_exchange(self) -> None:
        """X2 = 0 disables the exchange."""
        assert groundwater_exchange(80.0, 0.0, 90.0) == 0.0

    def test_empty_routing_store_no_exchange(self) -> None:
        """An empty routing store exchanges nothing."""
        assert groundwater_exchange(0.0, 3.0, 90.0) == 0.0

    def test_sign_follows_x2(self) -> None:
        """Negative X2 exports water, positive X2 imports it."""
        assert groundwater_exchange(50.0, -1.5, 90.0) < 0.0
        assert groundwater_exchange(50.0, 1.5, 90.0) > 0.0


class TestRoutingStoreUpdate:
    """Tests for routing_store_update function."""

    def test_outflow_formula(self) -> None:
        """QR = R - R / (1 + (R / X3)^4)^0.25 after inflow and exchange."""
        new_store, qr = routing_store_update(40.0, 10.0, 0.5, 90.0)

        filled = 50.5
        expected = filled / (1.0 + (filled / 90.0) ** 4) ** 0.25
        assert new_store == pytest.approx(expected)
        assert qr == pytest.approx(filled - expected)

    def test_store_clamped_at_zero(self) -> None:
        """A large export empties the store instead of driving it negative."""
        new_store, qr = routing_store_update(1.0, 0.0, -5.0, 90.0)

        assert new_store == 0.0
        assert qr == 0.0

    def test_water_balance(self) -> None:
        """Store before outflow equals new store plus outflow."""
        for store, inflow, exchange in [(10.0, 5.0, 0.0), (80.0, 20.0, 1.2), (200.0, 0.0, -0.3)]:
            new_store, qr = routing_store_update(store, inflow, exchange, 90.0)
            assert np.isclose(new_store + qr, store + inflow + exchange)


class TestDirectBranch:
    """Tests for direct_branch function."""

    def test_adds_exchange(self) -> None:
        """QD = UH2 output + F when positive."""
        assert direct_branch(1.0, 0.25) == pytest.approx(1.25)

    def test_clamped_at_zero(self) -> None:
        """Negative exchange larger than the input yields zero flow."""
        assert direct_branch(0.1, -1.0) == 0.0
