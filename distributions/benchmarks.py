"""
Reference (theoretical) moments for the elementary samplers and severity models.

The samplers in sampler.py are hand-built from uniforms on purpose. These
scipy.stats distributions give the exact values their empirical averages
should converge to, so severity assumptions can be read off without
simulating:

  Exponential(1)      mean 1
  Gamma(k, 1)         mean k
  Binomial severity   p * max_value
  NegBin severity     E[F / (F + r)] * max_value,   F ~ NegBinomial(r, p)
  Gamma severity      E[min(G, cap)] / cap * max_value,   G ~ Gamma(k, 1)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
import pandas as pd
from scipy import stats

if TYPE_CHECKING:
    from core.config import SimulationConfig

_TAIL_TOLERANCE = 1e-12


def exponential_reference():
    """Frozen scipy Exponential(1)."""
    return stats.expon()


def gamma_reference(k: int):
    """Frozen scipy Gamma(k, 1)."""
    return stats.gamma(a=k)


def expected_binomial_severity(n: int, p: float, max_value: float) -> float:
    return float(stats.binom(n, p).mean() / n * max_value)


def expected_negbin_severity(r: int, p: float, max_value: float) -> float:
    """E[F / (F + r)] * max_value, summing the pmf until the tail is negligible."""
    dist = stats.nbinom(r, p)
    upper = int(dist.isf(_TAIL_TOLERANCE)) + 1
    failures = np.arange(0, upper + 1)
    ratio = failures / (failures + r)
    return float(np.sum(ratio * dist.pmf(failures)) * max_value)


def expected_gamma_severity(k: int, gamma_cap: float, max_value: float) -> float:
    """
    E[min(G, cap)] / cap * max_value for G ~ Gamma(k, 1).

    E[min(G, c)] = E[G; G < c] + c * P(G >= c), and for integer k
    E[G; G < c] = k * P(Gamma(k+1) < c).
    """
    truncated = k * stats.gamma(a=k + 1).cdf(gamma_cap)
    tail = gamma_cap * stats.gamma(a=k).sf(gamma_cap)
    return float((truncated + tail) / gamma_cap * max_value)


def severity_benchmarks(config: "SimulationConfig") -> pd.DataFrame:
    """One row per shock: model, parameters, cap, and theoretical mean severity."""
    from models.severity_model import build_severity_models

    models = build_severity_models(config)
    rows = []
    for shock, model in models.items():
        cap = config.magnitude_caps[shock]
        rows.append({
            "Shock": shock,
            "Model": model.name,
            "Parameters": model.describe(),
            "Cap": cap,
            "Expected Severity": model.expected(cap),
            "Base Probability": config.base_probabilities[shock],
        })
    return pd.DataFrame(rows)
