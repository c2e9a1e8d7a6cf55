"""
Population-level solvency metrics.

posterior_probability is the single Laplace-smoothed estimate of a shock's
monthly rate over every month of every run. It is unrelated to the adaptive
per-run probabilities in behaviors/bayesian.py.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence, Tuple

import numpy as np
import pandas as pd
from scipy import stats

if TYPE_CHECKING:
    from .aggregator import AggregateResult


def posterior_probability(hits: int, runs: int, months: int) -> float:
    """(H + 1) / (runs * months + 2); strictly inside (0, 1) for 0 <= H <= runs * months."""
    return (hits + 1.0) / (runs * months + 2.0)


def insolvency_confidence_interval(
    insolvent: int,
    runs: int,
    *,
    level: float = 0.95,
) -> Tuple[float, float]:
    """
    Clopper-Pearson interval for the insolvency probability (as a fraction).

    Exact binomial interval from beta quantiles; stays inside [0, 1] even when
    no run (or every run) is insolvent.
    """
    if runs <= 0:
        raise ValueError("Need at least one run for a confidence interval.")
    if not 0 <= insolvent <= runs:
        raise ValueError(f"insolvent ({insolvent}) must lie in [0, runs={runs}].")

    tail = (1.0 - level) / 2.0
    lower = 0.0 if insolvent == 0 else float(stats.beta.ppf(tail, insolvent, runs - insolvent + 1))
    upper = 1.0 if insolvent == runs else float(stats.beta.ppf(1.0 - tail, insolvent + 1, runs - insolvent))
    return lower, upper


def final_value_distribution(
    result: "AggregateResult",
    *,
    percentiles: Sequence[float] = (0.01, 0.05, 0.25, 0.50, 0.75, 0.95, 0.99),
) -> pd.DataFrame:
    """
    Percentile summary of final fund values.

    Requires the result to have been built with store_run_summaries=True.
    """
    if result.final_values is None:
        raise ValueError(
            "Final values were not stored. Re-run with store_run_summaries=True."
        )
    values = np.asarray(result.final_values, dtype=float)
    if len(values) == 0:
        raise ValueError("No final values to summarize.")

    row = {
        "Metric": "Final Fund Value",
        "Mean": float(np.mean(values)),
        "Std Dev": float(np.std(values)),
        "Min": float(np.min(values)),
    }
    for p in percentiles:
        row[f"P{int(p * 100):02d}"] = float(np.percentile(values, p * 100))
    row["Max"] = float(np.max(values))
    return pd.DataFrame([row])
