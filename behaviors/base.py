"""
Base classes for market behaviour models.
"""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class MarketRegime:
    """
    Annualized drift and volatility in force for one month.
    """

    drift: float
    volatility: float


class MarketModel:
    """Interface for turning fund state into a monthly market return."""

    dt: float = 1.0 / 12.0

    def regime(self, fund: float) -> MarketRegime:
        raise NotImplementedError

    def monthly_return(self, regime: MarketRegime, z: float) -> float:
        """
        GBM simple return over one step for a standard-normal draw z:

            exp[(drift - vol^2 / 2) * dt + vol * sqrt(dt) * z] - 1
        """
        mu = (regime.drift - 0.5 * regime.volatility * regime.volatility) * self.dt
        sigma = regime.volatility * math.sqrt(self.dt)
        return math.exp(mu + sigma * z) - 1.0
