"""Tests for the closed-form Black-Scholes model."""

import math

import numpy as np
import pytest
from tradeval.core import CALL, PUT
from tradeval.black_scholes import bs_price_delta, bs_price, bs_delta


def test_bs_known_values():
    price, delta = bs_price_delta(100, 100, 1.0, 0.05, 0.2, CALL)
    assert abs(float(price) - 10.4506) < 1e-3
    assert abs(float(delta) - 0.6368) < 1e-3
    assert abs(float(bs_price(100, 100, 1.0, 0.05, 0.2, PUT)) - 5.5735) < 1e-3


def test_string_labels_accepted():
    assert float(bs_price(100, 100, 1.0, 0.05, 0.2, "Call")) == float(bs_price(100, 100, 1.0, 0.05, 0.2, CALL))


class TestPutCallParity:
    @pytest.mark.parametrize("S,K,T,r,sigma", [
        (100, 100, 1.0, 0.05, 0.2),
        (80, 120, 0.25, 0.01, 0.5),
        (150, 90, 2.0, 0.08, 0.1),
    ])
    def test_parity(self, S, K, T, r, sigma):
        call = float(bs_price(S, K, T, r, sigma, CALL))
        put = float(bs_price(S, K, T, r, sigma, PUT))
        assert abs((call - put) - (S - K * math.exp(-r * T))) < 1e-9


class TestDelta:
    def test_call_delta_in_unit_interval(self):
        spots = np.linspace(50, 200, 31)
        d = bs_delta(spots, 100, 1.0, 0.05, 0.2, "Call")
        assert np.all((d >= 0.0) & (d <= 1.0))

    def test_put_delta_in_negative_unit_interval(self):
        spots = np.linspace(50, 200, 31)
        d = bs_delta(spots, 100, 1.0, 0.05, 0.2, "Put")
        assert np.all((d >= -1.0) & (d <= 0.0))

    def test_put_delta_is_call_delta_minus_one(self):
        dc = float(bs_delta(110, 100, 0.5, 0.03, 0.3, CALL))
        dp = float(bs_delta(110, 100, 0.5, 0.03, 0.3, PUT))
        assert abs(dp - (dc - 1.0)) < 1e-15


class TestLimits:
    @pytest.mark.parametrize("S", [90.0, 100.0, 110.0])
    def test_vanishing_vol_gives_discounted_intrinsic(self, S):
        K, T, r = 100.0, 1.0, 0.05
        px = float(bs_price(S, K, T, r, 1e-8, CALL))
        assert abs(px - max(S - K * math.exp(-r * T), 0.0)) < 1e-6

    def test_negative_time_propagates_nan(self):
        px, d = bs_price_delta(100, 100, -0.5, 0.05, 0.2, CALL)
        assert np.isnan(px) and np.isnan(d)

    def test_zero_vol_at_the_money_zero_drift_is_nan(self):
        px, _ = bs_price_delta(100, 100, 1.0, 0.0, 0.0, CALL)
        assert np.isnan(px)


class TestVectorised:
    def test_array_of_spots_matches_scalar(self):
        spots = np.array([90.0, 100.0, 110.0])
        prices = bs_price(spots, 100, 1.0, 0.05, 0.2, CALL)
        assert prices.shape == (3,)
        for i, S in enumerate(spots):
            assert abs(prices[i] - float(bs_price(S, 100, 1.0, 0.05, 0.2, CALL))) < 1e-12

    def test_mixed_kinds(self):
        prices = bs_price(100, 100, 1.0, 0.05, 0.2, ["Call", "Put"])
        np.testing.assert_allclose(prices, [10.4506, 5.5735], atol=1e-3)

    def test_call_monotone_in_strike(self):
        strikes = np.linspace(80, 120, 50)
        prices = bs_price(100, strikes, 1.0, 0.05, 0.2, CALL)
        assert np.all(np.diff(prices) < 0)
