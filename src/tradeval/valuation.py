"""Valuation dispatcher.

``valuate_trade`` matches on the trade variant, builds its valuation inputs,
wraps the string-keyed configuration in typed settings, and returns a *new*
record with the result fields filled.  Inputs are never mutated.

``recalculate_all`` reruns it over a whole trade book.  Trades are
independent, so the pass can be spread over worker processes; each trade gets
its own child ``SeedSequence`` so no two valuations share generator state.
"""

from __future__ import annotations

import logging
from concurrent.futures import ProcessPoolExecutor
from dataclasses import replace
from datetime import datetime
from typing import Hashable, Mapping, Optional, TypeVar

import numpy as np

from .config import Configuration, MarketData, ValuationSettings
from .core import (
    EuropeanOptionRecord,
    EuropeanOptionValuationInputs,
    PaymentRecord,
    PaymentValuationInputs,
    Trade,
    ValuationMethod,
)
from .european_option import option_value
from .monte_carlo import RngLike
from .payment import payment_value

logger = logging.getLogger(__name__)

__all__ = ["valuate_trade", "recalculate_all"]

K = TypeVar("K", bound=Hashable)


def valuate_trade(
    trade: Trade,
    configuration: Configuration,
    market_data: MarketData,
    *,
    now: Optional[datetime] = None,
    rng: RngLike = None,
) -> Trade:
    """Return a copy of *trade* with ``value`` (and ``delta`` for options) set."""
    settings = ValuationSettings.from_mappings(configuration, market_data)

    if isinstance(trade, PaymentRecord):
        inputs = PaymentValuationInputs(trade, configuration, market_data)
        value = payment_value(inputs, settings)
        logger.debug("valued payment %r: %s", trade.trade_name, value)
        return replace(trade, value=value)

    if isinstance(trade, EuropeanOptionRecord):
        inputs = EuropeanOptionValuationInputs(trade, configuration, market_data)
        value, delta = option_value(inputs, settings, now=now, rng=rng)
        logger.debug(
            "valued option %r (%s): value=%s delta=%s",
            trade.trade_name, ValuationMethod(trade.valuation_method).value, value, delta,
        )
        return replace(trade, value=value, delta=delta)

    raise TypeError(f"cannot value {type(trade).__name__}")


def _valuate_item(args):
    key, trade, configuration, market_data, now, seed = args
    return key, valuate_trade(trade, configuration, market_data, now=now, rng=seed)


def recalculate_all(
    trades: Mapping[K, Trade],
    configuration: Configuration,
    market_data: MarketData,
    *,
    now: Optional[datetime] = None,
    seed: int | np.random.SeedSequence | None = None,
    n_workers: int = 1,
) -> dict[K, Trade]:
    """Revalue every trade; returns a new mapping with the same keys.

    Parameters
    ----------
    trades : mapping id -> trade
        The book.  Not modified.
    now : datetime, optional
        Single valuation instant for the whole pass (wall clock if omitted).
    seed : int | SeedSequence | None
        Root seed; one child stream is derived per trade in ``str(id)`` order,
        making a seeded pass reproducible regardless of ``n_workers``.  A
        ``SeedSequence`` passed in is not advanced, so reusing it repeats the
        pass exactly.
    n_workers : int
        Process-level parallelism.  1 (default) runs in-process.
    """
    if not trades:
        return {}
    if now is None:
        now = datetime.now()

    keys = sorted(trades, key=str)
    root = seed if isinstance(seed, np.random.SeedSequence) else np.random.SeedSequence(seed)
    # same streams as root.spawn(), without advancing a caller's SeedSequence
    children = [
        np.random.SeedSequence(root.entropy, spawn_key=root.spawn_key + (i,))
        for i in range(len(keys))
    ]
    work = [
        (k, trades[k], dict(configuration), dict(market_data), now, ss)
        for k, ss in zip(keys, children)
    ]

    logger.debug("recalculating %d trades (workers=%d)", len(work), n_workers)
    if n_workers <= 1:
        valued = dict(map(_valuate_item, work))
    else:
        with ProcessPoolExecutor(max_workers=n_workers) as ex:
            valued = dict(ex.map(_valuate_item, work))
    return {k: valued[k] for k in trades}
