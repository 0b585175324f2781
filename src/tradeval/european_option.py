"""European option valuation: trade terms -> (value, delta) in reporting currency.

The trade stores drift and volatility in percent; they are converted to
decimals here, once, before any model sees them.  The pricing method is
chosen per trade from a module-level table keyed by ``ValuationMethod``.
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable, Optional

from .binomial import crr_price_delta
from .black_scholes import bs_price_delta
from .config import ValuationSettings
from .core import (
    EuropeanOptionRecord,
    EuropeanOptionValuationInputs,
    Money,
    ValuationMethod,
    time_to_expiry,
)
from .currency import resolve_currency, to_money
from .monte_carlo import RngLike, euro_price_delta_mc

__all__ = ["option_value", "OPTION_PRICERS"]

# (trade, time, settings, rng) -> (value, delta) in trade-currency units
OptionPricer = Callable[
    [EuropeanOptionRecord, float, ValuationSettings, RngLike], tuple[float, float]
]


def _analytical(trade, T, settings, rng):
    price, delta = bs_price_delta(
        trade.spot_price, trade.strike, T,
        trade.drift / 100.0, trade.volatility / 100.0, trade.option_type,
    )
    return float(price), float(delta)


def _monte_carlo(trade, T, settings, rng):
    return euro_price_delta_mc(
        trade.spot_price, trade.strike, T,
        trade.drift / 100.0, trade.volatility / 100.0, trade.option_type,
        n_paths=settings.require_runs(),
        bump=settings.require_bump_size(),
        rng=rng,
    )


def _binomial(trade, T, settings, rng):
    return crr_price_delta(
        trade.spot_price, trade.strike, T,
        trade.drift / 100.0, trade.volatility / 100.0, trade.option_type,
        N=settings.require_steps(),
        bump=settings.require_bump_size(),
    )


OPTION_PRICERS: dict[ValuationMethod, OptionPricer] = {
    ValuationMethod.ANALYTICAL: _analytical,
    ValuationMethod.MONTE_CARLO: _monte_carlo,
    ValuationMethod.BINOMIAL: _binomial,
}


def option_value(
    inputs: EuropeanOptionValuationInputs,
    settings: Optional[ValuationSettings] = None,
    *,
    now: Optional[datetime] = None,
    rng: RngLike = None,
) -> tuple[Money, Money]:
    """Value and delta of a European option, both in the reporting currency.

    Parameters
    ----------
    inputs : EuropeanOptionValuationInputs
        Trade, configuration and market data snapshot.
    settings : ValuationSettings, optional
        Settings view of ``inputs``; built here when omitted.
    now : datetime, optional
        Valuation instant.  Defaults to the wall clock.
    rng : Generator | SeedSequence | int | None
        Random source for Monte Carlo; ignored by the other methods.

    Raises
    ------
    MissingParameterError
        Monte Carlo / binomial selected but ``monteCarlo::runs`` or
        ``methodology::bumpSize`` absent.
    """
    if settings is None:
        settings = ValuationSettings.from_mappings(inputs.data, inputs.market_data)
    trade = inputs.trade
    T = time_to_expiry(trade.expiry, now)

    pricer = OPTION_PRICERS[ValuationMethod(trade.valuation_method)]
    raw_value, raw_delta = pricer(trade, T, settings, rng)

    fx_rate, ccy = resolve_currency(trade.currency, settings.base_currency, inputs.data)
    return to_money(raw_value, fx_rate, ccy), to_money(raw_delta, fx_rate, ccy)
