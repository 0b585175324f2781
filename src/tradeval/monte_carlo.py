# tradeval/monte_carlo.py

from __future__ import annotations
from typing import Union

import numpy as np

from .core import OptionType

__all__ = ["euro_price_delta_mc", "make_rng"]

RngLike = Union[np.random.Generator, np.random.SeedSequence, int, None]


def make_rng(rng: RngLike = None) -> np.random.Generator:
    """Return a Generator; pass-through for Generators, otherwise seeded from *rng*."""
    if isinstance(rng, np.random.Generator):
        return rng
    return np.random.default_rng(rng)


# ---- helper: one chunk of draws, evaluated at base / up / down spot ----

def _mc_chunk_sums(
    Z: np.ndarray,
    spots: np.ndarray,
    *,
    K: float, T: float, r: float, sigma: float, is_call: bool,
) -> np.ndarray:
    """
    Terminal prices ``spot * exp(r*T + sigma*sqrt(T)*Z)`` for every (spot, draw)
    pair, discounted payoff summed over draws.  The same ``Z`` feeds every
    spot (common random numbers).
    Returns shape ``(len(spots),)``.
    """
    mu = r * T
    sig = sigma * np.sqrt(T)
    df = np.exp(-r * T)

    # shape (n_spots, n_draws)
    ST = spots[:, np.newaxis] * np.exp(mu + sig * Z[np.newaxis, :])
    if is_call:
        payoff = np.maximum(ST - K, 0.0)
    else:
        payoff = np.maximum(K - ST, 0.0)
    return (df * payoff).sum(axis=1)


def euro_price_delta_mc(
    S: float, K: float, T: float, r: float, sigma: float,
    kind: OptionType | str, *,
    n_paths: int,
    bump: float,
    rng: RngLike = None,
    chunk_size: int = 100_000,
) -> tuple[float, float]:
    """
    European option value and central-difference delta by Monte Carlo.
    Returns (price, delta).

    - Draws ``n_paths`` standard normals once and reuses them for spot,
      spot + bump and spot - bump.
    - ``bump`` is absolute (price units).
    - The growth term is ``r*T`` with no ``-0.5*sigma**2`` correction, so the
      estimator converges to the closed form evaluated at spot
      ``S * exp(0.5*sigma**2*T)``, not at ``S``.
    - ``rng`` may be a Generator (consumed in place), a seed, or None.
    - Streams in chunks to cap memory; chunks are drawn sequentially from
      the same generator, so results do not depend on ``chunk_size``.
    """
    if n_paths <= 0:
        raise ValueError("n_paths must be positive.")
    is_call = OptionType(kind) is OptionType.CALL
    gen = make_rng(rng)

    S, K, T, r, sigma, bump = (np.float64(x) for x in (S, K, T, r, sigma, bump))
    spots = np.array([S, S + bump, S - bump], dtype=np.float64)

    totals = np.zeros(3)
    remaining = int(n_paths)
    with np.errstate(all="ignore"):
        while remaining > 0:
            m = min(chunk_size, remaining)
            Z = gen.standard_normal(m)
            totals += _mc_chunk_sums(Z, spots, K=K, T=T, r=r, sigma=sigma, is_call=is_call)
            remaining -= m

        base, up, down = totals / n_paths
        delta = (up - down) / (2.0 * bump)

    return float(base), float(delta)

