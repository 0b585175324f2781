from __future__ import annotations
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Mapping, Optional, Union


@dataclass(frozen=True)
class Money:
    """An amount tagged with a currency code (free-form, e.g. ``"USD"``)."""
    value: float
    currency: str


class OptionType(str, Enum):
    CALL = "Call"
    PUT = "Put"


class ValuationMethod(str, Enum):
    ANALYTICAL = "Analytical"
    MONTE_CARLO = "MonteCarlo"
    BINOMIAL = "Binomial"


CALL = OptionType.CALL
PUT = OptionType.PUT


def parse_option_type(label: str) -> Optional[OptionType]:
    """Return the option type for an exact enum label, else ``None``."""
    for member in OptionType:
        if member.value == label:
            return member
    return None


def parse_valuation_method(label: str) -> Optional[ValuationMethod]:
    """Return the valuation method for an exact enum label, else ``None``."""
    for member in ValuationMethod:
        if member.value == label:
            return member
    return None


# ---------------------------------------------------------------------------
# Trade records — immutable snapshots; revaluation produces a replacement
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class PaymentRecord:
    """Fixed cash flow of ``principal`` units of ``currency`` at ``expiry``."""
    trade_name: str
    principal: int
    expiry: datetime
    currency: str
    value: Optional[Money] = None


@dataclass(frozen=True)
class EuropeanOptionRecord:
    """European option on a single underlying.

    ``drift`` and ``volatility`` are stored as percentages (5 means 5%);
    pricing models divide by 100 before use.
    """
    trade_name: str
    spot_price: float
    strike: float
    drift: float          # percent
    volatility: float     # percent
    expiry: datetime
    currency: str
    valuation_method: ValuationMethod = ValuationMethod.ANALYTICAL
    option_type: OptionType = OptionType.CALL
    value: Optional[Money] = None
    delta: Optional[Money] = None


Trade = Union[PaymentRecord, EuropeanOptionRecord]


@dataclass(frozen=True)
class PaymentValuationInputs:
    """Everything a payment valuation may read."""
    trade: PaymentRecord
    data: Mapping[str, str]          # configuration
    market_data: Mapping[str, str]


@dataclass(frozen=True)
class EuropeanOptionValuationInputs:
    """Everything an option valuation may read."""
    trade: EuropeanOptionRecord
    data: Mapping[str, str]          # configuration
    market_data: Mapping[str, str]


# ---------------------------------------------------------------------------
# Time convention
# ---------------------------------------------------------------------------
DAYS_PER_YEAR = 365.0


def _as_datetime(d: date | datetime) -> datetime:
    if isinstance(d, datetime):
        return d
    return datetime(d.year, d.month, d.day)


def time_to_expiry(expiry: date | datetime, now: Optional[datetime] = None) -> float:
    """Year fraction from ``now`` (wall clock by default) to ``expiry``.

    Negative for expired trades; no clamping.
    """
    if now is None:
        now = datetime.now()
    delta = _as_datetime(expiry) - _as_datetime(now)
    return delta.total_seconds() / 86400.0 / DAYS_PER_YEAR
