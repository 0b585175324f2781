# tradeval — trade valuation engine
# Public API

# Data model
from .core import (
    Money, OptionType, ValuationMethod, CALL, PUT,
    PaymentRecord, EuropeanOptionRecord, Trade,
    PaymentValuationInputs, EuropeanOptionValuationInputs,
    parse_option_type, parse_valuation_method, time_to_expiry,
)

# Configuration / market data
from .config import (
    ValuationSettings, ValuationError, MissingParameterError, InvalidParameterError,
    flatten_config, load_config, set_entry, DEFAULT_CONFIGURATION,
)
from .currency import resolve_currency

# Pricing models
from .black_scholes import bs_price_delta
from .monte_carlo import euro_price_delta_mc
from .binomial import crr, crr_price_delta
from .payment import payment_value
from .european_option import option_value

# Dispatcher and book operations
from .valuation import valuate_trade, recalculate_all
from .edits import EditWarning, EditResult, apply_edit, add_trade, remove_trade
from .book import trade_from_dict, trade_to_dict, load_trades, dump_trades

__all__ = [
    # Data model
    "Money", "OptionType", "ValuationMethod", "CALL", "PUT",
    "PaymentRecord", "EuropeanOptionRecord", "Trade",
    "PaymentValuationInputs", "EuropeanOptionValuationInputs",
    "parse_option_type", "parse_valuation_method", "time_to_expiry",
    # Configuration
    "ValuationSettings", "ValuationError", "MissingParameterError",
    "InvalidParameterError", "flatten_config", "load_config", "set_entry",
    "DEFAULT_CONFIGURATION", "resolve_currency",
    # Models
    "bs_price_delta", "euro_price_delta_mc", "crr", "crr_price_delta",
    "payment_value", "option_value",
    # Dispatcher / book
    "valuate_trade", "recalculate_all",
    "EditWarning", "EditResult", "apply_edit", "add_trade", "remove_trade",
    "trade_from_dict", "trade_to_dict", "load_trades", "dump_trades",
]

__version__ = "0.1.0"
