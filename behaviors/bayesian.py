"""
Within-run Bayesian adaptation of downside shock probabilities.

After month m (0-indexed) with h hits of a shock so far in the run:

  empirical = (h + 1) / (m + 2)                    Laplace-smoothed hit rate
  p_new     = p_old * (1 - alpha) + alpha * empirical
  p_new     = clamp(p_new, band)                   when bands are configured

The bull probability is never adapted. Probabilities are not carried across
runs: every run starts again from the configured base rates.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Mapping, Optional

from core.config import DOWNSIDE_SHOCKS, ProbabilityBand, SimulationConfig
from core.utils import clamp, laplace_smoothed


@dataclass(frozen=True)
class BayesianShockUpdater:
    alpha: float = 0.002
    bands: Optional[Mapping[str, ProbabilityBand]] = None

    @classmethod
    def from_config(cls, config: SimulationConfig) -> "BayesianShockUpdater":
        return cls(alpha=config.alpha, bands=config.probability_bands)

    def update_one(self, shock: str, probability: float, hits: int, month: int) -> float:
        empirical = laplace_smoothed(hits, month)
        p = probability * (1.0 - self.alpha) + self.alpha * empirical
        if self.bands is not None:
            band = self.bands[shock]
            p = clamp(p, band.lo, band.hi)
        return p

    def update(
        self,
        probabilities: Mapping[str, float],
        hits: Mapping[str, int],
        month: int,
    ) -> Dict[str, float]:
        """Return the next month's working probabilities; shocks other than the downside four pass through."""
        updated = dict(probabilities)
        for shock in DOWNSIDE_SHOCKS:
            updated[shock] = self.update_one(shock, probabilities[shock], hits[shock], month)
        return updated
