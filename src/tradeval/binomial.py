from __future__ import annotations
import numpy as np
from .core import OptionType

__all__ = ["crr", "crr_price_delta"]


def crr(S0: float, K: float, T: float, r: float, sigma: float,
        kind: OptionType | str = OptionType.CALL, N: int = 500) -> float:
    """Cox-Ross-Rubinstein tree for a European option, no dividends.

    Only one lattice layer is kept during backward induction, so memory is
    O(N) while work stays O(N^2).  Degenerate parameters (p outside (0,1),
    zero or negative T) are not rejected; they surface as NaN/Inf.
    """
    if N <= 0:
        raise ValueError("N must be positive.")
    with np.errstate(all="ignore"):
        dt = np.float64(T) / N
        u  = np.exp(sigma * np.sqrt(dt))
        d  = 1.0 / u
        disc = np.exp(-r * dt)
        p = (np.exp(r * dt) - d) / (u - d)

        # Payoff at maturity
        j = np.arange(N + 1)
        ST = S0 * (u ** j) * (d ** (N - j))
        if OptionType(kind) is OptionType.CALL:
            V = np.maximum(ST - K, 0.0)
        else:
            V = np.maximum(K - ST, 0.0)

        # Backward induction
        for _ in range(N - 1, -1, -1):
            V = disc * (p * V[1:] + (1.0 - p) * V[:-1])

    return float(V[0])


def crr_price_delta(S0: float, K: float, T: float, r: float, sigma: float,
                    kind: OptionType | str, N: int, bump: float) -> tuple[float, float]:
    """Tree value plus delta from full rebuilds at ``S0*(1 +/- bump)``.

    ``bump`` is relative to spot.
    """
    price = crr(S0, K, T, r, sigma, kind, N)
    up = crr(S0 * (1.0 + bump), K, T, r, sigma, kind, N)
    down = crr(S0 * (1.0 - bump), K, T, r, sigma, kind, N)
    with np.errstate(all="ignore"):
        delta = (np.float64(up) - down) / (2.0 * bump * S0)
    return price, float(delta)
