"""JSON (de)serialisation of trade books.

A book file is a JSON object ``{id: trade}``; each trade carries a ``"kind"``
discriminator (``"Payment"`` or ``"EuropeanOption"``) and camelCase fields::

    {"kind": "EuropeanOption", "tradeName": "opt1", "spotPrice": 100,
     "strike": 100, "drift": 5, "volatility": 20, "expiry": "2026-06-30",
     "currency": "EUR", "valuationMethod": "MonteCarlo", "optionType": "Put"}

``value`` / ``delta`` are written as ``{"value": float, "currency": str}``
and may be omitted on input.
"""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Mapping, Optional

from .core import (
    EuropeanOptionRecord,
    Money,
    OptionType,
    PaymentRecord,
    Trade,
    ValuationMethod,
)

__all__ = ["trade_from_dict", "trade_to_dict", "load_trades", "dump_trades"]


def _money_from(d: Optional[Mapping]) -> Optional[Money]:
    if d is None:
        return None
    return Money(float(d["value"]), str(d["currency"]))


def _money_to(m: Optional[Money]) -> Optional[dict]:
    if m is None:
        return None
    return {"value": m.value, "currency": m.currency}


def trade_from_dict(d: Mapping[str, Any]) -> Trade:
    """Build a trade record from its JSON form.  Raises ``ValueError`` on bad input."""
    if not isinstance(d, Mapping):
        raise ValueError(f"trade must be a JSON object, got {type(d).__name__}")
    kind = d.get("kind")
    expiry = datetime.fromisoformat(str(d["expiry"]))
    if kind == "Payment":
        return PaymentRecord(
            trade_name=str(d["tradeName"]),
            principal=int(d["principal"]),
            expiry=expiry,
            currency=str(d["currency"]),
            value=_money_from(d.get("value")),
        )
    if kind == "EuropeanOption":
        return EuropeanOptionRecord(
            trade_name=str(d["tradeName"]),
            spot_price=float(d["spotPrice"]),
            strike=float(d["strike"]),
            drift=float(d["drift"]),
            volatility=float(d["volatility"]),
            expiry=expiry,
            currency=str(d["currency"]),
            valuation_method=ValuationMethod(d.get("valuationMethod", "Analytical")),
            option_type=OptionType(d.get("optionType", "Call")),
            value=_money_from(d.get("value")),
            delta=_money_from(d.get("delta")),
        )
    raise ValueError(f"unknown trade kind {kind!r}")


def trade_to_dict(trade: Trade) -> dict[str, Any]:
    if isinstance(trade, PaymentRecord):
        return {
            "kind": "Payment",
            "tradeName": trade.trade_name,
            "principal": trade.principal,
            "expiry": trade.expiry.isoformat(),
            "currency": trade.currency,
            "value": _money_to(trade.value),
        }
    if isinstance(trade, EuropeanOptionRecord):
        return {
            "kind": "EuropeanOption",
            "tradeName": trade.trade_name,
            "spotPrice": trade.spot_price,
            "strike": trade.strike,
            "drift": trade.drift,
            "volatility": trade.volatility,
            "expiry": trade.expiry.isoformat(),
            "currency": trade.currency,
            "valuationMethod": trade.valuation_method.value,
            "optionType": trade.option_type.value,
            "value": _money_to(trade.value),
            "delta": _money_to(trade.delta),
        }
    raise TypeError(f"cannot serialise {type(trade).__name__}")


def load_trades(path: str | Path) -> dict[str, Trade]:
    with open(path, encoding="utf-8") as f:
        raw = json.load(f)
    if not isinstance(raw, Mapping):
        raise ValueError(f"{path}: trade book must be a JSON object")
    return {str(k): trade_from_dict(v) for k, v in raw.items()}


def dump_trades(trades: Mapping[Any, Trade], path: str | Path) -> None:
    payload = {str(k): trade_to_dict(t) for k, t in trades.items()}
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2)
