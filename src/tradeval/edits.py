"""Validated edits on a trade book.

Every edit takes the raw text a user typed.  If it parses and applies to the
trade's kind, a new book with the replaced record is returned; otherwise the
book comes back unchanged together with exactly one :class:`EditWarning`.
Edits never raise on bad input.  Books are plain mappings and are never
modified in place.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Callable, Hashable, Mapping, NamedTuple, Optional

from .core import (
    EuropeanOptionRecord,
    PaymentRecord,
    Trade,
    parse_option_type,
    parse_valuation_method,
)

logger = logging.getLogger(__name__)

__all__ = [
    "EditWarning",
    "EditResult",
    "EDIT_FIELDS",
    "apply_edit",
    "add_trade",
    "remove_trade",
    "parse_int",
    "parse_float",
    "parse_date",
]

_INT64_MIN, _INT64_MAX = -(2 ** 63), 2 ** 63 - 1


@dataclass(frozen=True)
class EditWarning:
    trade_id: Hashable
    trade_name: Optional[str]
    message: str

    def __str__(self) -> str:
        return self.message


class EditResult(NamedTuple):
    trades: dict
    warning: Optional[EditWarning] = None


# ---------------------------------------------------------------------------
# Parsers: return None on failure
# ---------------------------------------------------------------------------
def parse_int(raw: str) -> Optional[int]:
    # digit-group underscores are Python literal syntax, not user input
    try:
        if "_" in raw:
            return None
        value = int(raw.strip())
    except (AttributeError, TypeError, ValueError):
        return None
    if not _INT64_MIN <= value <= _INT64_MAX:
        return None
    return value


def parse_float(raw: str) -> Optional[float]:
    try:
        if "_" in raw:
            return None
        return float(raw)
    except (TypeError, ValueError):
        return None


def parse_date(raw: str) -> Optional[datetime]:
    """ISO-8601 date or date-time (``2025-06-30``, ``2025-06-30T12:00``)."""
    try:
        return datetime.fromisoformat(raw.strip())
    except (AttributeError, ValueError):
        return None


# ---------------------------------------------------------------------------
# Field appliers: (trade, raw) -> new trade, or None when rejected
# ---------------------------------------------------------------------------
Applier = Callable[[Trade, str], Optional[Trade]]


def _any_kind(field: str, parse) -> Applier:
    def apply(trade, raw):
        value = parse(raw)
        return None if value is None else replace(trade, **{field: value})
    return apply


def _only(kind: type, field: str, parse) -> Applier:
    def apply(trade, raw):
        if not isinstance(trade, kind):
            return None
        value = parse(raw)
        return None if value is None else replace(trade, **{field: value})
    return apply


EDIT_FIELDS: dict[str, Applier] = {
    "name": _any_kind("trade_name", str),
    "currency": _any_kind("currency", str),
    "expiry": _any_kind("expiry", parse_date),
    "principal": _only(PaymentRecord, "principal", parse_int),
    "spot": _only(EuropeanOptionRecord, "spot_price", parse_float),
    "strike": _only(EuropeanOptionRecord, "strike", parse_float),
    "drift": _only(EuropeanOptionRecord, "drift", parse_float),
    "volatility": _only(EuropeanOptionRecord, "volatility", parse_float),
    "valuation_method": _only(EuropeanOptionRecord, "valuation_method", parse_valuation_method),
    "option_type": _only(EuropeanOptionRecord, "option_type", parse_option_type),
}


def _warn(trade_id, name, message) -> EditWarning:
    logger.warning(message)
    return EditWarning(trade_id, name, message)


def apply_edit(
    trades: Mapping[Hashable, Trade], trade_id: Hashable, field: str, raw: str
) -> EditResult:
    """Apply one edit to ``trades[trade_id]``.

    ``field`` is one of :data:`EDIT_FIELDS`; an unknown field name is a
    programming error and raises ``KeyError``.
    """
    applier = EDIT_FIELDS[field]
    book = dict(trades)
    trade = book.get(trade_id)
    if trade is None:
        return EditResult(book, _warn(trade_id, None, f"could not find trade {trade_id}"))

    updated = applier(trade, raw)
    if updated is None:
        msg = (f"could not update trade {trade.trade_name} ({trade_id}): "
               f"invalid {field} {raw!r}")
        return EditResult(book, _warn(trade_id, trade.trade_name, msg))

    book[trade_id] = updated
    return EditResult(book)


def add_trade(
    trades: Mapping[Hashable, Trade], trade: Trade, trade_id: Optional[Hashable] = None
) -> tuple[dict, Hashable]:
    """Return ``(new_book, id)``; a fresh ``uuid4`` is used when no id is given."""
    if trade_id is None:
        trade_id = uuid.uuid4()
    book = dict(trades)
    book[trade_id] = trade
    return book, trade_id


def remove_trade(trades: Mapping[Hashable, Trade], trade_id: Hashable) -> dict:
    """Return a new book without ``trade_id`` (no-op if absent)."""
    return {k: v for k, v in trades.items() if k != trade_id}
