"""Fixed cash-flow valuation."""

from __future__ import annotations

from typing import Optional

from .config import ValuationSettings
from .core import Money, PaymentValuationInputs
from .currency import resolve_currency, to_money

__all__ = ["payment_value"]


def payment_value(
    inputs: PaymentValuationInputs, settings: Optional[ValuationSettings] = None
) -> Money:
    """Principal converted to the reporting currency, undiscounted.

    Payments carry no spot sensitivity, so there is no delta.
    """
    if settings is None:
        settings = ValuationSettings.from_mappings(inputs.data, inputs.market_data)
    trade = inputs.trade
    fx_rate, ccy = resolve_currency(trade.currency, settings.base_currency, inputs.data)
    return to_money(float(trade.principal), fx_rate, ccy)
