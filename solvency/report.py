"""
Solvency report — turns an AggregateResult into answers a trustee can act on:
  Q1: "How likely is the fund to end below the floor?"  → insolvency probability (+ CI)
  Q2: "What do we expect to be left?"                   → average final value
  Q3: "How often did each crisis actually hit?"          → posterior monthly probabilities
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

import pandas as pd

from core.config import DOWNSIDE_SHOCKS, SHOCK_LABELS
from core.utils import format_currency

from .aggregator import AggregateResult
from .metrics import insolvency_confidence_interval

HIGH_INSOLVENCY_PCT = 5.0


@dataclass
class SolvencyReport:
    """Structured solvency output."""
    runs: int
    months: int
    floor: float
    average_final_value: float
    insolvency_pct: float
    insolvency_ci_pct: Tuple[float, float]
    depleted_runs: int
    posterior_probabilities: Dict[str, float]
    total_shock_events: Dict[str, int]
    posterior_decimals: int = 6

    flags: List[str] = field(default_factory=list)

    def to_dataframe(self) -> pd.DataFrame:
        """Convert to a display-friendly table."""
        rows = [
            {"Metric": "Simulations Run", "Value": f"{self.runs:,d}", "Unit": ""},
            {"Metric": "Horizon", "Value": f"{self.months:d}", "Unit": "months"},
            {"Metric": "Insolvency Floor", "Value": format_currency(self.floor), "Unit": ""},
            {"Metric": "Average Final Value", "Value": format_currency(self.average_final_value), "Unit": ""},
            {"Metric": "Insolvency Probability", "Value": f"{self.insolvency_pct:.2f}%", "Unit": ""},
            {
                "Metric": "Insolvency 95% CI",
                "Value": f"{self.insolvency_ci_pct[0]:.2f}% - {self.insolvency_ci_pct[1]:.2f}%",
                "Unit": "",
            },
            {"Metric": "Depleted Runs", "Value": f"{self.depleted_runs:,d}", "Unit": ""},
        ]
        for shock in DOWNSIDE_SHOCKS:
            rows.append({
                "Metric": f"Posterior P({SHOCK_LABELS[shock]})",
                "Value": f"{self.posterior_probabilities[shock]:.{self.posterior_decimals}f}",
                "Unit": "per month",
            })
        for shock in DOWNSIDE_SHOCKS:
            rows.append({
                "Metric": f"{SHOCK_LABELS[shock]} Events",
                "Value": f"{self.total_shock_events[shock]:,d}",
                "Unit": "",
            })
        if self.flags:
            rows.append({"Metric": "FLAGS", "Value": " | ".join(self.flags), "Unit": ""})
        return pd.DataFrame(rows)

    def render_text(self) -> str:
        """Console report in the fixed label layout used across model variants."""
        d = self.posterior_decimals
        lines = [
            f"Simulations Run        : {self.runs:,d}",
            f"Average Final Value    : {format_currency(self.average_final_value)}",
            f"Insolvency Probability : {self.insolvency_pct:.2f}%",
            "",
            "Posterior Shock Probabilities (monthly):",
        ]
        for shock in DOWNSIDE_SHOCKS:
            lines.append(f"  {SHOCK_LABELS[shock]:<10}: {self.posterior_probabilities[shock]:.{d}f}")
        lines.append("")
        lines.append("Total Shock Events Across All Runs:")
        for shock in DOWNSIDE_SHOCKS:
            lines.append(f"  {SHOCK_LABELS[shock]:<10}: {self.total_shock_events[shock]:,d}")
        return "\n".join(lines)


def generate_solvency_report(
    result: AggregateResult,
    *,
    posterior_decimals: int = 6,
    confidence: float = 0.95,
) -> SolvencyReport:
    """
    Build a solvency report from aggregated Monte Carlo results.

    Parameters
    ----------
    result : AggregateResult
        Output of engine.runner.run_monte_carlo()
    posterior_decimals : int
        Decimal places for posterior probabilities (4-6 is typical)
    confidence : float
        Level of the insolvency confidence interval
    """
    if result.runs == 0:
        raise ValueError("No runs to generate report from.")

    lo, hi = insolvency_confidence_interval(result.insolvent_runs, result.runs, level=confidence)

    flags = []
    if result.insolvency_pct > HIGH_INSOLVENCY_PCT:
        flags.append(
            f"HIGH_INSOLVENCY_RISK: {result.insolvency_pct:.2f}% of runs end below the floor"
        )
    if result.depleted_runs > 0:
        flags.append(f"DEPLETION_OBSERVED: {result.depleted_runs:,d} runs exhausted the fund")
    if result.average_final_value < result.floor:
        flags.append("AVERAGE_BELOW_FLOOR: mean final value is under the insolvency floor")

    return SolvencyReport(
        runs=result.runs,
        months=result.months,
        floor=result.floor,
        average_final_value=result.average_final_value,
        insolvency_pct=result.insolvency_pct,
        insolvency_ci_pct=(100.0 * lo, 100.0 * hi),
        depleted_runs=result.depleted_runs,
        posterior_probabilities=result.posterior_probabilities,
        total_shock_events=dict(result.total_hits),
        posterior_decimals=posterior_decimals,
        flags=flags,
    )
