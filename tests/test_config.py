"""Tests for configuration documents and parsed settings."""

import json
from pathlib import Path

import pytest
from tradeval.config import (
    DEFAULT_CONFIGURATION,
    InvalidParameterError,
    MissingParameterError,
    ValuationError,
    ValuationSettings,
    flatten_config,
    load_config,
    set_entry,
)

DATA = Path(__file__).resolve().parents[1] / "data"

DOC = [
    {"category": "valuation", "config": [{"key": "baseCurrency", "value": "USD"}]},
    {"category": "monteCarlo", "config": [{"key": "runs", "value": "1000"}]},
    {"category": "methodology", "config": [{"key": "bumpSize", "value": "0.01"}]},
]


class TestFlatten:
    def test_keys_are_category_qualified(self):
        flat = flatten_config(DOC)
        assert flat == {
            "valuation::baseCurrency": "USD",
            "monteCarlo::runs": "1000",
            "methodology::bumpSize": "0.01",
        }

    def test_later_duplicate_wins(self):
        doc = [
            {"category": "FX", "config": [{"key": "USDEUR", "value": "0.9"}]},
            {"category": "FX", "config": [{"key": "USDEUR", "value": "0.95"}]},
        ]
        assert flatten_config(doc) == {"FX::USDEUR": "0.95"}

    def test_values_kept_as_strings(self):
        doc = [{"category": "monteCarlo", "config": [{"key": "runs", "value": 500}]}]
        assert flatten_config(doc)["monteCarlo::runs"] == "500"

    def test_empty_document(self):
        assert flatten_config([]) == {}


def test_load_config_from_file(tmp_path):
    path = tmp_path / "md.json"
    path.write_text(json.dumps(DOC))
    assert load_config(path)["monteCarlo::runs"] == "1000"


def test_bundled_configuration_matches_defaults():
    assert load_config(DATA / "configuration.json") == DEFAULT_CONFIGURATION


def test_set_entry_copies():
    original = {"a": "1"}
    updated = set_entry(original, "b", "2")
    assert original == {"a": "1"}
    assert updated == {"a": "1", "b": "2"}


class TestSettings:
    def test_parsed_on_demand(self):
        s = ValuationSettings.from_mappings({}, flatten_config(DOC))
        assert s.base_currency == "USD"
        assert s.runs == "1000"
        assert s.require_runs() == 1000
        assert s.require_bump_size() == 0.01
        assert s.require_steps() == 1000

    def test_absent_keys_are_none(self):
        s = ValuationSettings.from_mappings({}, {})
        assert s == ValuationSettings()

    def test_require_missing_runs(self):
        s = ValuationSettings.from_mappings({}, {})
        with pytest.raises(MissingParameterError) as exc:
            s.require_runs()
        assert exc.value.key == "monteCarlo::runs"
        assert isinstance(exc.value, KeyError)
        assert isinstance(exc.value, ValuationError)

    def test_require_missing_bump(self):
        with pytest.raises(MissingParameterError):
            ValuationSettings(runs="10").require_bump_size()

    def test_unparseable_runs(self):
        s = ValuationSettings.from_mappings({}, {"monteCarlo::runs": "1e5"})
        with pytest.raises(InvalidParameterError):
            s.require_runs()

    def test_malformed_runs_does_not_block_other_parameters(self):
        s = ValuationSettings.from_mappings(
            {}, {"monteCarlo::runs": "lots", "methodology::bumpSize": "0.5"}
        )
        assert s.require_bump_size() == 0.5

    def test_unparseable_bump(self):
        s = ValuationSettings(bump_size="tiny")
        with pytest.raises(InvalidParameterError):
            s.require_bump_size()

    def test_non_positive_runs(self):
        with pytest.raises(InvalidParameterError):
            ValuationSettings(runs="0").require_runs()

    def test_steps_override(self):
        s = ValuationSettings.from_mappings(
            {}, {"monteCarlo::runs": "100000", "binomial::steps": "250"}
        )
        assert s.require_runs() == 100000
        assert s.require_steps() == 250

    def test_non_positive_steps(self):
        with pytest.raises(InvalidParameterError):
            ValuationSettings(runs="10", steps="-1").require_steps()
