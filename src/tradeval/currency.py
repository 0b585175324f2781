from __future__ import annotations

import logging
from typing import Optional

import numpy as np

from .config import Configuration, InvalidParameterError, fx_key
from .core import Money

logger = logging.getLogger(__name__)

__all__ = ["resolve_currency", "to_money"]


def resolve_currency(
    trade_ccy: str, base_ccy: Optional[str], configuration: Configuration
) -> tuple[float, str]:
    """Return ``(fx_rate, result_ccy)`` for reporting a trade-currency amount.

    The target is ``base_ccy`` when given, else the trade currency.  The rate
    is looked up under ``"FX::" + target + trade``; when that key is absent the
    result stays in the trade currency at rate 1.0.  Callers divide raw
    amounts by the rate.
    """
    target_ccy = base_ccy if base_ccy is not None else trade_ccy
    key = fx_key(target_ccy, trade_ccy)
    raw = configuration.get(key)
    if raw is None:
        if target_ccy != trade_ccy:
            logger.debug("no FX rate %s, reporting in %s", key, trade_ccy)
        return 1.0, trade_ccy
    try:
        return float(raw), target_ccy
    except ValueError as exc:
        raise InvalidParameterError(f"{key}={raw!r} is not a valid float") from exc


def to_money(amount: float, fx_rate: float, ccy: str) -> Money:
    """Convert a trade-currency amount at ``fx_rate`` and tag it with ``ccy``.

    A zero rate yields ``inf``/``nan`` rather than raising.
    """
    with np.errstate(divide="ignore", invalid="ignore"):
        return Money(float(np.float64(amount) / fx_rate), ccy)
