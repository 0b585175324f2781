# black_scholes.py
# Closed-form Black-Scholes value and delta.
# All public functions accept scalars *or* NumPy arrays and broadcast.
# Degenerate inputs (zero vol, non-positive time) propagate as NaN/Inf.

from __future__ import annotations
import numpy as np
from scipy.stats import norm

from .core import OptionType

_N = norm.cdf   # vectorised standard-normal CDF

__all__ = ["bs_price_delta", "bs_price", "bs_delta"]


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------
def _d1_d2(S, K, T, r, sigma):
    """Compute d1, d2 arrays.  All inputs broadcast."""
    sig_sqrt_T = sigma * np.sqrt(T)
    d1 = (np.log(S / K) + (r + 0.5 * sigma * sigma) * T) / sig_sqrt_T
    d2 = d1 - sig_sqrt_T
    return d1, d2


def _is_call(kind) -> np.ndarray:
    """Return boolean mask: True where kind is a call."""
    kind = np.asarray(kind, dtype=object)
    if kind.ndim == 0:
        return np.bool_(OptionType(kind.item()) is OptionType.CALL)
    return np.array(
        [OptionType(k) is OptionType.CALL for k in kind.flat], dtype=bool
    ).reshape(kind.shape)


# ---------------------------------------------------------------------------
# Price and delta
# ---------------------------------------------------------------------------
def bs_price_delta(S, K, T, r, sigma, kind):
    """Black-Scholes value and delta, no dividend yield.

    Parameters
    ----------
    S, K : float or array
        Spot and strike.
    T : float or array
        Time to expiry in years.
    r : float or array
        Drift used both for growth and discounting (decimal, 0.05 = 5%).
    sigma : float or array
        Volatility (decimal).
    kind : OptionType, str, or array of those
        ``"Call"`` / ``"Put"``.

    Returns
    -------
    (price, delta) : tuple of np.ndarray
        Broadcast shape of the inputs; 0-d arrays for scalar input.
    """
    S, K, T, r, sigma = (np.asarray(x, dtype=float) for x in (S, K, T, r, sigma))
    with np.errstate(all="ignore"):
        d1, d2 = _d1_d2(S, K, T, r, sigma)
        N_d1 = _N(d1)
        N_d2 = _N(d2)
        disc = np.exp(-r * T)

        call_px = S * N_d1 - K * disc * N_d2
        put_px  = K * disc * (1.0 - N_d2) - S * (1.0 - N_d1)

    is_call = _is_call(kind)
    price = np.where(is_call, call_px, put_px)
    delta = np.where(is_call, N_d1, N_d1 - 1.0)
    return price, delta


def bs_price(S, K, T, r, sigma, kind):
    """Black-Scholes value only."""
    return bs_price_delta(S, K, T, r, sigma, kind)[0]


def bs_delta(S, K, T, r, sigma, kind):
    """Black-Scholes delta only."""
    return bs_price_delta(S, K, T, r, sigma, kind)[1]
