"""Tests for trade-book JSON serialisation."""

import json
from datetime import datetime
from pathlib import Path

import pytest
from tradeval.book import dump_trades, load_trades, trade_from_dict, trade_to_dict
from tradeval.core import EuropeanOptionRecord, Money, OptionType, PaymentRecord, ValuationMethod

DATA = Path(__file__).resolve().parents[1] / "data"


def test_load_bundled_book():
    book = load_trades(DATA / "trades.json")
    assert set(book) == {"pay-1", "opt-1", "opt-2", "opt-3"}
    assert isinstance(book["pay-1"], PaymentRecord)
    assert book["pay-1"].principal == 1_000_000
    opt = book["opt-2"]
    assert isinstance(opt, EuropeanOptionRecord)
    assert opt.valuation_method is ValuationMethod.MONTE_CARLO
    assert opt.option_type is OptionType.PUT
    assert opt.value is None and opt.delta is None


def test_option_defaults():
    t = trade_from_dict({
        "kind": "EuropeanOption", "tradeName": "o", "spotPrice": 1, "strike": 1,
        "drift": 0, "volatility": 10, "expiry": "2027-01-01", "currency": "USD",
    })
    assert t.valuation_method is ValuationMethod.ANALYTICAL
    assert t.option_type is OptionType.CALL


def test_valued_trade_survives_dump_and_load(tmp_path):
    trade = PaymentRecord("p", 10, datetime(2027, 1, 1), "EUR", Money(9.5, "USD"))
    path = tmp_path / "book.json"
    dump_trades({"p": trade}, path)
    assert load_trades(path) == {"p": trade}
    assert json.loads(path.read_text())["p"]["value"] == {"value": 9.5, "currency": "USD"}


def test_option_to_dict_uses_enum_labels():
    t = EuropeanOptionRecord("o", 1.0, 1.0, 0.0, 10.0, datetime(2027, 1, 1), "USD",
                             ValuationMethod.MONTE_CARLO, OptionType.PUT)
    d = trade_to_dict(t)
    assert d["valuationMethod"] == "MonteCarlo"
    assert d["optionType"] == "Put"
    assert d["kind"] == "EuropeanOption"


@pytest.mark.parametrize("bad", [
    {"kind": "Swap", "expiry": "2027-01-01"},
    {"kind": "Payment", "tradeName": "p", "principal": "x", "expiry": "2027-01-01", "currency": "USD"},
    {"kind": "EuropeanOption", "tradeName": "o", "spotPrice": 1, "strike": 1, "drift": 0,
     "volatility": 1, "expiry": "2027-01-01", "currency": "USD", "optionType": "Straddle"},
    ["Payment", "p"],
])
def test_bad_input_raises_value_error(bad):
    with pytest.raises(ValueError):
        trade_from_dict(bad)


def test_book_must_be_an_object(tmp_path):
    path = tmp_path / "book.json"
    path.write_text("[]")
    with pytest.raises(ValueError):
        load_trades(path)
