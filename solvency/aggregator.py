"""
Fold per-run summaries into population-level results.

The accumulator only holds sums and counts, so two partial results built from
disjoint sets of runs combine with merge() into exactly the result a single
pass over all runs would give.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, List, Optional

import pandas as pd

from core.config import DOWNSIDE_SHOCKS, SHOCK_LABELS, SimulationConfig

from .metrics import posterior_probability

if TYPE_CHECKING:
    from engine.state import RunSummary


def _zero_hits() -> Dict[str, int]:
    return {shock: 0 for shock in DOWNSIDE_SHOCKS}


@dataclass
class AggregateResult:
    months: int
    floor: float
    runs: int = 0
    insolvent_runs: int = 0
    depleted_runs: int = 0
    total_final_value: float = 0.0
    total_hits: Dict[str, int] = field(default_factory=_zero_hits)
    final_values: Optional[List[float]] = None  # only when store_run_summaries

    @classmethod
    def empty(cls, config: SimulationConfig) -> "AggregateResult":
        return cls(
            months=config.months,
            floor=config.floor,
            final_values=[] if config.store_run_summaries else None,
        )

    def accumulate(self, summary: "RunSummary") -> None:
        self.runs += 1
        self.total_final_value += summary.final_value
        if summary.insolvent:
            self.insolvent_runs += 1
        if summary.depleted:
            self.depleted_runs += 1
        for shock in DOWNSIDE_SHOCKS:
            self.total_hits[shock] += summary.hits[shock]
        if self.final_values is not None:
            self.final_values.append(summary.final_value)

    def merge(self, other: "AggregateResult") -> "AggregateResult":
        """Combine two partial results over disjoint runs."""
        if self.months != other.months or self.floor != other.floor:
            raise ValueError(
                "Cannot merge results from different horizons or floors: "
                f"({self.months}, {self.floor}) vs ({other.months}, {other.floor})."
            )
        if (self.final_values is None) != (other.final_values is None):
            raise ValueError(
                "Cannot merge a result that stored final values with one that did not."
            )
        final_values = None
        if self.final_values is not None:
            final_values = self.final_values + other.final_values
        return AggregateResult(
            months=self.months,
            floor=self.floor,
            runs=self.runs + other.runs,
            insolvent_runs=self.insolvent_runs + other.insolvent_runs,
            depleted_runs=self.depleted_runs + other.depleted_runs,
            total_final_value=self.total_final_value + other.total_final_value,
            total_hits={s: self.total_hits[s] + other.total_hits[s] for s in DOWNSIDE_SHOCKS},
            final_values=final_values,
        )

    def _require_runs(self) -> None:
        if self.runs == 0:
            raise ValueError("No runs have been accumulated.")

    @property
    def average_final_value(self) -> float:
        self._require_runs()
        return self.total_final_value / self.runs

    @property
    def insolvency_probability(self) -> float:
        self._require_runs()
        return self.insolvent_runs / self.runs

    @property
    def insolvency_pct(self) -> float:
        return 100.0 * self.insolvency_probability

    def posterior(self, shock: str) -> float:
        self._require_runs()
        return posterior_probability(self.total_hits[shock], self.runs, self.months)

    @property
    def posterior_probabilities(self) -> Dict[str, float]:
        return {shock: self.posterior(shock) for shock in DOWNSIDE_SHOCKS}

    def to_dataframe(self) -> pd.DataFrame:
        """One row per downside shock: total events and posterior monthly probability."""
        rows = []
        for shock in DOWNSIDE_SHOCKS:
            rows.append({
                "Shock": SHOCK_LABELS[shock],
                "Total Events": self.total_hits[shock],
                "Posterior Monthly Probability": self.posterior(shock),
            })
        return pd.DataFrame(rows)
