"""
Elementary samplers — every shock severity is built from these.

Hierarchy:
  uniform(0,1)        numpy Generator.random(), half-open [0, 1): never returns 1.0
  Exponential(1)      inverse transform on a uniform
  Gamma(k, 1)         sum of k Exponential(1) draws (integer k only)
  Binomial(n, p)      count of n Bernoulli(p) trials, scaled to [0, max_value]
  NegBinomial(r, p)   failures before the r-th success, squashed to [0, max_value]

All functions take the caller's np.random.Generator so a seeded run is
reproducible end to end.
"""

from __future__ import annotations

import math

import numpy as np

DEFAULT_MAX_NEGBIN_TRIALS = 100_000


class SamplingExhaustedError(RuntimeError):
    """Negative-binomial sampling hit its trial limit before r successes."""


def sample_exponential(rng: np.random.Generator) -> float:
    """Exponential(1) via inverse transform: -ln(1 - u)."""
    u = rng.random()
    return -math.log1p(-u)


def sample_gamma(rng: np.random.Generator, k: int) -> float:
    """Gamma(k, 1) as the sum of k independent Exponential(1) draws."""
    if k < 1 or int(k) != k:
        raise ValueError(f"Gamma shape k must be a positive integer, got {k}.")
    total = 0.0
    for _ in range(int(k)):
        total += sample_exponential(rng)
    return total


def sample_binomial_severity(
    rng: np.random.Generator,
    n: int,
    p: float,
    max_value: float,
) -> float:
    """
    Run n Bernoulli(p) trials and scale the success fraction by max_value.

    Result is in [0, max_value]; E[result] = p * max_value.
    """
    if n < 1:
        raise ValueError(f"Binomial trial count n must be >= 1, got {n}.")
    if not 0.0 <= p <= 1.0:
        raise ValueError(f"Binomial p must lie in [0, 1], got {p}.")

    successes = 0
    for _ in range(n):
        if rng.random() < p:
            successes += 1
    return (successes / n) * max_value


def sample_negbin_severity(
    rng: np.random.Generator,
    r: int,
    p: float,
    max_value: float,
    *,
    max_trials: int = DEFAULT_MAX_NEGBIN_TRIALS,
) -> float:
    """
    Repeat Bernoulli(p) trials until r successes, counting failures F.

    Severity = min(F / (F + r), 1) * max_value.

    Expected trial count is r / p, so for the fixed shock parameters this
    finishes in a handful of draws. max_trials bounds the loop for
    user-supplied p close to zero.

    Raises
    ------
    ValueError
        If r < 1 or p is not in (0, 1] (p = 0 would never terminate).
    SamplingExhaustedError
        If max_trials draws pass without r successes.
    """
    if r < 1:
        raise ValueError(f"Negative-binomial r must be >= 1, got {r}.")
    if not 0.0 < p <= 1.0:
        raise ValueError(f"Negative-binomial p must lie in (0, 1], got {p}.")

    successes = 0
    failures = 0
    trials = 0
    while successes < r:
        if trials >= max_trials:
            raise SamplingExhaustedError(
                f"No {r} successes within {max_trials} trials (p={p})."
            )
        trials += 1
        if rng.random() < p:
            successes += 1
        else:
            failures += 1

    ratio = min(failures / (failures + r), 1.0)
    return ratio * max_value


def sample_uniform_severity(rng: np.random.Generator, max_value: float) -> float:
    """U[0, 1) * max_value — magnitude model of the uniform presets."""
    return rng.random() * max_value
