"""Configuration and market-data snapshots.

Both are flat ``str -> str`` mappings with ``::``-namespaced keys, e.g.
``"FX::USDPLN"`` or ``"monteCarlo::runs"``.  They are loaded from JSON
documents shaped ``[{"category": ..., "config": [{"key": ..., "value": ...}]}]``
and flattened to ``"<category>::<key>"``.

Pricing code never reads the raw mappings directly: the dispatcher parses
them into a :class:`ValuationSettings`.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Mapping, Optional

__all__ = [
    "Configuration",
    "MarketData",
    "ValuationError",
    "MissingParameterError",
    "InvalidParameterError",
    "ValuationSettings",
    "flatten_config",
    "load_config",
    "set_entry",
    "DEFAULT_CONFIGURATION",
    "BASE_CURRENCY_KEY",
    "RUNS_KEY",
    "BUMP_SIZE_KEY",
    "STEPS_KEY",
    "fx_key",
]

Configuration = Mapping[str, str]
MarketData = Mapping[str, str]

BASE_CURRENCY_KEY = "valuation::baseCurrency"
RUNS_KEY = "monteCarlo::runs"
BUMP_SIZE_KEY = "methodology::bumpSize"
STEPS_KEY = "binomial::steps"   # optional lattice-only override of RUNS_KEY

DEFAULT_CONFIGURATION: dict[str, str] = {
    "FX::USDPLN": "3.76",
    "FX::PLNUSD": "0.3",
    "FX::USDEUR": "0.95",
    "FX::EURGBP": "0.9",
}


def fx_key(target_ccy: str, trade_ccy: str) -> str:
    """FX lookup key: target currency first, then trade currency."""
    return f"FX::{target_ccy}{trade_ccy}"


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------
class ValuationError(Exception):
    """Base class for input-contract violations raised during valuation."""


class MissingParameterError(ValuationError, KeyError):
    def __init__(self, key: str):
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"required parameter {self.key!r} is missing"


class InvalidParameterError(ValuationError, ValueError):
    pass


# ---------------------------------------------------------------------------
# JSON documents
# ---------------------------------------------------------------------------
def flatten_config(document: Iterable[Mapping]) -> dict[str, str]:
    """Flatten category documents to ``{"<category>::<key>": value}``.

    Later duplicates overwrite earlier ones.  Values are kept as strings.
    """
    flat: dict[str, str] = {}
    for category in document:
        name = category["category"]
        for entry in category.get("config", ()):
            flat[f"{name}::{entry['key']}"] = str(entry["value"])
    return flat


def load_config(path: str | Path) -> dict[str, str]:
    """Read a category JSON document from disk and flatten it."""
    with open(path, encoding="utf-8") as f:
        return flatten_config(json.load(f))


def set_entry(mapping: Mapping[str, str], key: str, value: str) -> dict[str, str]:
    """Return a copy of *mapping* with ``key`` set to ``value``."""
    updated = dict(mapping)
    updated[key] = value
    return updated


# ---------------------------------------------------------------------------
# Typed settings
# ---------------------------------------------------------------------------
def _parse(key: str, raw: str, conv):
    try:
        return conv(raw)
    except (TypeError, ValueError) as exc:
        raise InvalidParameterError(f"{key}={raw!r} is not a valid {conv.__name__}") from exc


def _positive_int(key: str, raw: str) -> int:
    value = _parse(key, raw, int)
    if value <= 0:
        raise InvalidParameterError(f"{key} must be positive, got {value}")
    return value


@dataclass(frozen=True)
class ValuationSettings:
    """Methodology parameters used by the pricing models.

    Values are held as the raw market-data strings and only parsed by the
    ``require_*`` accessor of the model that needs them, so a malformed
    Monte Carlo setting never affects an analytical option or a payment.

    Parameters
    ----------
    base_currency : str | None
        Reporting currency; ``None`` means report in trade currency.
    runs : str | None
        Monte Carlo sample count (and, by default, lattice depth).
    bump_size : str | None
        Spot bump used for finite-difference delta.  Absolute for Monte Carlo,
        relative for the binomial tree.
    steps : str | None
        Lattice depth override; falls back to ``runs`` when absent.
    """
    base_currency: Optional[str] = None
    runs: Optional[str] = None
    bump_size: Optional[str] = None
    steps: Optional[str] = None

    @classmethod
    def from_mappings(
        cls, configuration: Configuration, market_data: MarketData
    ) -> "ValuationSettings":
        # methodology parameters live in market data; configuration only
        # carries FX rates, which currency resolution reads directly
        return cls(
            base_currency=market_data.get(BASE_CURRENCY_KEY),
            runs=market_data.get(RUNS_KEY),
            bump_size=market_data.get(BUMP_SIZE_KEY),
            steps=market_data.get(STEPS_KEY),
        )

    def require_runs(self) -> int:
        if self.runs is None:
            raise MissingParameterError(RUNS_KEY)
        return _positive_int(RUNS_KEY, self.runs)

    def require_steps(self) -> int:
        if self.steps is None:
            return self.require_runs()
        return _positive_int(STEPS_KEY, self.steps)

    def require_bump_size(self) -> float:
        if self.bump_size is None:
            raise MissingParameterError(BUMP_SIZE_KEY)
        return _parse(BUMP_SIZE_KEY, self.bump_size, float)
