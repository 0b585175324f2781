"""Tests for reporting-currency resolution."""

import math

from tradeval.currency import resolve_currency, to_money
from tradeval.core import Money


def test_base_currency_with_fx_rate():
    rate, ccy = resolve_currency("EUR", "USD", {"FX::USDEUR": "0.9"})
    assert ccy == "USD"
    assert rate == 0.9


def test_missing_fx_rate_falls_back_to_trade_currency():
    rate, ccy = resolve_currency("EUR", "USD", {"FX::EURUSD": "1.1"})
    assert ccy == "EUR"
    assert rate == 1.0


def test_no_base_currency_keeps_trade_currency():
    rate, ccy = resolve_currency("PLN", None, {})
    assert (rate, ccy) == (1.0, "PLN")


def test_same_currency_key_is_honoured():
    # target == trade still goes through the lookup
    rate, ccy = resolve_currency("USD", "USD", {"FX::USDUSD": "2"})
    assert (rate, ccy) == (2.0, "USD")


def test_key_order_is_target_then_trade():
    rate, ccy = resolve_currency("PLN", "USD", {"FX::USDPLN": "3.76", "FX::PLNUSD": "0.3"})
    assert (rate, ccy) == (3.76, "USD")


def test_to_money_divides_by_rate():
    assert to_money(9.0, 0.9, "USD") == Money(10.0, "USD")


def test_to_money_zero_rate_is_not_masked():
    assert math.isinf(to_money(5.0, 0.0, "USD").value)
    assert math.isnan(to_money(0.0, 0.0, "USD").value)
