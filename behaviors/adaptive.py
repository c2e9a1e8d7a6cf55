"""
AdaptiveGBMModel — drift and volatility respond to fund health.

health = clamp(fund / initial_fund, health_band)

  volatility = base_vol   * (1 + (1 - health) * vol_sensitivity)
  drift      = base_drift * (drift_floor + drift_slope * health)

An underfunded plan sees higher volatility and lower drift, an overfunded one
the reverse. The health clamp keeps both inside a realistic band however far
the fund strays.

ConstantGBMModel is the no-feedback baseline, useful to validate the plumbing.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from core.config import SimulationConfig
from core.utils import clamp_band

from .base import MarketModel, MarketRegime


@dataclass(frozen=True)
class AdaptiveGBMModel(MarketModel):
    initial_fund: float = 1_000_000_000.0
    base_drift: float = 0.07
    base_volatility: float = 0.10
    health_band: Tuple[float, float] = (0.7, 1.3)
    vol_sensitivity: float = 0.4
    drift_floor: float = 0.90
    drift_slope: float = 0.20
    dt: float = 1.0 / 12.0

    @classmethod
    def from_config(cls, config: SimulationConfig) -> "AdaptiveGBMModel":
        return cls(
            initial_fund=config.initial_fund,
            base_drift=config.base_drift,
            base_volatility=config.base_volatility,
            health_band=config.health_band,
            vol_sensitivity=config.vol_sensitivity,
            drift_floor=config.drift_floor,
            drift_slope=config.drift_slope,
            dt=config.dt,
        )

    def health(self, fund: float) -> float:
        return clamp_band(fund / self.initial_fund, self.health_band)

    def regime(self, fund: float) -> MarketRegime:
        h = self.health(fund)
        return MarketRegime(
            drift=self.base_drift * (self.drift_floor + self.drift_slope * h),
            volatility=self.base_volatility * (1.0 + (1.0 - h) * self.vol_sensitivity),
        )


@dataclass(frozen=True)
class ConstantGBMModel(MarketModel):
    """Fixed drift/volatility regardless of fund health."""

    drift: float = 0.07
    volatility: float = 0.10
    dt: float = 1.0 / 12.0

    def regime(self, fund: float) -> MarketRegime:
        return MarketRegime(drift=self.drift, volatility=self.volatility)
