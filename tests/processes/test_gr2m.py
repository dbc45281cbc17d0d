"""Tests for GR2M core process functions.

Tests verify the mathematical correctness of each process function
against the GR2M equations of Mouelhi et al. (2006).
"""

import numpy as np
import pytest
from hydromodels.models.gr2m.processes import (
    compute_streamflow,
    percolation,
    production_store_evaporation,
    production_store_rainfall,
    routing_store_update,
)


class TestProductionStoreRainfall:
    """Tests for production_store_rainfall function."""

    def test_store_increases_with_rainfall(self) -> None:
        """Production store should increase when rainfall is added."""
        s1, p1, ps = production_store_rainfall(50.0, 100.0, 500.0)

        assert s1 > 100.0
        assert p1 > 0.0
        assert ps > 0.0
        assert np.isclose(p1 + ps, 50.0)

    def test_zero_precipitation(self) -> None:
        """Zero precipitation leaves the store unchanged."""
        s1, p1, ps = production_store_rainfall(0.0, 100.0, 500.0)

        assert np.isclose(s1, 100.0)
        assert p1 == 0.0
        assert ps == 0.0

    def test_formula(self) -> None:
        """S1 = (S + X1*phi) / (1 + phi*S/X1) with phi = tanh(P/X1)."""
        precip, store, x1 = 40.0, 120.0, 300.0
        phi = np.tanh(precip / x1)

        s1, p1, _ = production_store_rainfall(precip, store, x1)

        assert s1 == pytest.approx((store + x1 * phi) / (1.0 + phi * store / x1))
        assert p1 == pytest.approx(precip + store - s1)

    def test_full_store_more_excess(self) -> None:
        """Nearly full store produces more rainfall excess."""
        _, p1_empty, _ = production_store_rainfall(50.0, 10.0, 500.0)
        _, p1_full, _ = production_store_rainfall(50.0, 480.0, 500.0)

        assert p1_full > p1_empty

    def test_very_high_precip_is_finite(self) -> None:
        """Rainfall far above capacity stays finite and conserves water."""
        s1, p1, ps = production_store_rainfall(10000.0, 100.0, 500.0)

        assert np.isfinite(s1)
        assert np.isclose(p1 + ps, 10000.0)


class TestProductionStoreEvaporation:
    """Tests for production_store_evaporation function."""

    def test_store_decreases_with_evaporation(self) -> None:
        """Production store should decrease when evaporation occurs."""
        s2, ae = production_store_evaporation(30.0, 200.0, 500.0)

        assert s2 < 200.0
        assert ae > 0.0
        assert np.isclose(200.0 - s2, ae)

    def test_zero_pet(self) -> None:
        """Zero PET produces no change."""
        s2, ae = production_store_evaporation(0.0, 200.0, 500.0)

        assert np.isclose(s2, 200.0)
        assert ae == 0.0

    def test_high_pet_limited_by_store(self) -> None:
        """Actual ET cannot exceed the water in the store."""
        s2, ae = production_store_evaporation(1000.0, 50.0, 500.0)

        assert s2 >= 0.0
        assert ae <= 50.0


class TestPercolation:
    """Tests for percolation function."""

    def test_zero_store(self) -> None:
        """Zero store produces zero percolation."""
        s_final, p2 = percolation(0.0, 500.0)

        assert s_final == 0.0
        assert p2 == 0.0

    def test_cube_root_formula(self) -> None:
        """S = S2 / (1 + (S2/X1)^3)^(1/3)."""
        s_final, p2 = percolation(200.0, 500.0)

        expected = 200.0 / (1.0 + 0.4**3) ** (1.0 / 3.0)
        assert s_final == pytest.approx(expected)
        assert p2 == pytest.approx(200.0 - expected)

    def test_percolation_increases_with_store(self) -> None:
        """Higher store produces more percolation."""
        _, p2_low = percolation(50.0, 500.0)
        _, p2_high = percolation(400.0, 500.0)

        assert p2_high > p2_low


class TestRoutingStoreUpdate:
    """Tests for routing_store_update function."""

    def test_x2_greater_than_one_increases_water(self) -> None:
        """X2 > 1 causes water gain."""
        r2, aexch = routing_store_update(50.0, 30.0, 1.5)

        assert np.isclose(r2, 120.0)
        assert aexch > 0.0

    def test_x2_less_than_one_decreases_water(self) -> None:
        """X2 < 1 causes water loss."""
        r2, aexch = routing_store_update(50.0, 30.0, 0.8)

        assert np.isclose(r2, 64.0)
        assert aexch < 0.0

    def test_x2_equals_one_no_exchange(self) -> None:
        """X2 = 1 causes no exchange."""
        r2, aexch = routing_store_update(50.0, 30.0, 1.0)

        assert np.isclose(r2, 80.0)
        assert np.isclose(aexch, 0.0)


class TestComputeStreamflow:
    """Tests for compute_streamflow function."""

    def test_quadratic_routing(self) -> None:
        """Q = R^2 / (R + 60)."""
        r_final, q = compute_streamflow(100.0)

        assert np.isclose(q, 100.0 * 100.0 / 160.0)
        assert np.isclose(r_final, 100.0 - q)

    def test_zero_store_zero_flow(self) -> None:
        """Zero store produces zero streamflow."""
        r_final, q = compute_streamflow(0.0)

        assert q == 0.0
        assert r_final == 0.0

    def test_very_large_store(self) -> None:
        """Very large store produces finite results."""
        r_final, q = compute_streamflow(100000.0)

        assert np.isfinite(q)
        assert np.isfinite(r_final)
        assert q > 0.0
