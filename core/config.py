"""
Simulation configuration.

One frozen SimulationConfig holds every constant the engine needs. The three
historical parameterizations of the engine are kept as named presets:

  hybrid            — distribution-based severities, loss cap, clamped adaptation (default)
  capped_uniform    — uniform severities, loss cap, clamped adaptation
  baseline_uniform  — uniform severities, no cap, unclamped and faster adaptation
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Dict, Literal, Mapping, Optional, Tuple

RECESSION = "recession"
WAR = "war"
PANDEMIC = "pandemic"
BLACK_SWAN = "black_swan"
BULL = "bull"

# Order matters: shock uniforms are consumed in this order every month.
DOWNSIDE_SHOCKS: Tuple[str, ...] = (RECESSION, WAR, PANDEMIC, BLACK_SWAN)
ALL_SHOCKS: Tuple[str, ...] = DOWNSIDE_SHOCKS + (BULL,)

SHOCK_LABELS: Dict[str, str] = {
    RECESSION: "Recession",
    WAR: "War",
    PANDEMIC: "Pandemic",
    BLACK_SWAN: "Black Swan",
    BULL: "Bull",
}

SeverityMode = Literal["distribution", "uniform"]


@dataclass(frozen=True)
class ProbabilityBand:
    """Closed interval a working shock probability is clamped into."""
    lo: float
    hi: float


def _default_probabilities() -> Dict[str, float]:
    return {
        RECESSION: 0.0020,
        WAR: 0.0005,
        PANDEMIC: 0.0005,
        BLACK_SWAN: 0.0003,
        BULL: 0.0400,
    }


def _default_caps() -> Dict[str, float]:
    return {
        RECESSION: 0.04,
        WAR: 0.03,
        PANDEMIC: 0.06,
        BLACK_SWAN: 0.10,
        BULL: 0.03,
    }


def _default_bands() -> Dict[str, ProbabilityBand]:
    return {
        RECESSION: ProbabilityBand(0.0001, 0.0200),
        WAR: ProbabilityBand(0.00005, 0.0100),
        PANDEMIC: ProbabilityBand(0.00005, 0.0100),
        BLACK_SWAN: ProbabilityBand(0.00001, 0.0050),
    }


@dataclass(frozen=True)
class SimulationConfig:
    # fund
    initial_fund: float = 1_000_000_000.0
    base_drift: float = 0.07
    base_volatility: float = 0.10
    years: int = 10
    runs: int = 1_000_000
    floor: float = 700_000_000.0
    monthly_payout: float = 3_000_000.0
    dt: float = 1.0 / 12.0

    # shocks (monthly probabilities, magnitudes as fraction of fund value);
    # the tables are stored as read-only mappings
    base_probabilities: Mapping[str, float] = field(default_factory=_default_probabilities, hash=False)
    magnitude_caps: Mapping[str, float] = field(default_factory=_default_caps, hash=False)
    max_monthly_loss: Optional[float] = 0.25  # None = combined loss is not capped
    gamma_cap: float = 5.0
    severity_mode: SeverityMode = "distribution"

    # Bayesian adaptation; probability_bands=None leaves probabilities unclamped
    alpha: float = 0.002
    probability_bands: Optional[Mapping[str, ProbabilityBand]] = field(default_factory=_default_bands, hash=False)

    # adaptive drift / volatility
    health_band: Tuple[float, float] = (0.7, 1.3)
    vol_sensitivity: float = 0.4
    drift_floor: float = 0.90
    drift_slope: float = 0.20

    # sampling / output controls
    seed: Optional[int] = None
    max_negbin_trials: int = 100_000
    store_run_summaries: bool = False  # keep every run's final value for percentile metrics

    def __post_init__(self):
        for name in ("base_probabilities", "magnitude_caps", "probability_bands"):
            table = getattr(self, name)
            if table is not None:
                object.__setattr__(self, name, MappingProxyType(dict(table)))

    @property
    def months(self) -> int:
        return int(self.years * 12)

    def with_overrides(self, **changes) -> "SimulationConfig":
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)


NAMED_PRESETS: Dict[str, SimulationConfig] = {
    "hybrid": SimulationConfig(),
    "capped_uniform": SimulationConfig(severity_mode="uniform"),
    "baseline_uniform": SimulationConfig(
        base_drift=0.06,
        base_volatility=0.12,
        base_probabilities={
            RECESSION: 0.003,
            WAR: 0.001,
            PANDEMIC: 0.002,
            BLACK_SWAN: 0.002,
            BULL: 0.03,
        },
        magnitude_caps={
            RECESSION: 0.06,
            WAR: 0.04,
            PANDEMIC: 0.08,
            BLACK_SWAN: 0.12,
            BULL: 0.04,
        },
        max_monthly_loss=None,
        severity_mode="uniform",
        alpha=0.01,
        probability_bands=None,
        health_band=(0.5, 1.5),
        vol_sensitivity=0.5,
        drift_floor=0.8,
        drift_slope=0.4,
    ),
}


def get_preset(name: str) -> SimulationConfig:
    """
    Return a named configuration preset.

    Parameters
    ----------
    name : str
        One of: "hybrid", "capped_uniform", "baseline_uniform"
    """
    if name not in NAMED_PRESETS:
        raise KeyError(
            f"Unknown preset '{name}'. "
            f"Available: {list(NAMED_PRESETS.keys())}"
        )
    return NAMED_PRESETS[name]
