"""
Shock severity models.

Each shock type fixes its own distribution family and parameters; the engine
never chooses a family, it just asks the shock's model for a severity:

  Recession   Negative-Binomial  r=2, p=0.25
  War         Binomial           n=8, p=0.15
  Pandemic    Gamma(3, 1)        capped at gamma_cap, normalised to [0, 1]
  Black Swan  Negative-Binomial  r=4, p=0.18
  Bull burst  Binomial           n=8, p=0.30

Severities are fractions of fund value in [0, max_value], where max_value is
the shock's magnitude cap from SimulationConfig.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

import numpy as np

from core.config import (
    ALL_SHOCKS,
    BLACK_SWAN,
    BULL,
    PANDEMIC,
    RECESSION,
    WAR,
    SimulationConfig,
)
from distributions.benchmarks import (
    expected_binomial_severity,
    expected_gamma_severity,
    expected_negbin_severity,
)
from distributions.sampler import (
    DEFAULT_MAX_NEGBIN_TRIALS,
    sample_binomial_severity,
    sample_gamma,
    sample_negbin_severity,
    sample_uniform_severity,
)


class SeverityModel:
    """Interface: draw a severity in [0, max_value] for one triggered shock."""

    name: str = "base"

    def sample(self, rng: np.random.Generator, max_value: float) -> float:
        raise NotImplementedError

    def expected(self, max_value: float) -> float:
        raise NotImplementedError

    def describe(self) -> str:
        return ""


@dataclass(frozen=True)
class BinomialSeverity(SeverityModel):
    n: int
    p: float
    name: str = "binomial"

    def sample(self, rng: np.random.Generator, max_value: float) -> float:
        return sample_binomial_severity(rng, self.n, self.p, max_value)

    def expected(self, max_value: float) -> float:
        return expected_binomial_severity(self.n, self.p, max_value)

    def describe(self) -> str:
        return f"n={self.n}, p={self.p}"


@dataclass(frozen=True)
class NegativeBinomialSeverity(SeverityModel):
    r: int
    p: float
    max_trials: int = DEFAULT_MAX_NEGBIN_TRIALS
    name: str = "negative_binomial"

    def sample(self, rng: np.random.Generator, max_value: float) -> float:
        return sample_negbin_severity(rng, self.r, self.p, max_value, max_trials=self.max_trials)

    def expected(self, max_value: float) -> float:
        return expected_negbin_severity(self.r, self.p, max_value)

    def describe(self) -> str:
        return f"r={self.r}, p={self.p}"


@dataclass(frozen=True)
class GammaSeverity(SeverityModel):
    k: int
    gamma_cap: float
    name: str = "gamma"

    def sample(self, rng: np.random.Generator, max_value: float) -> float:
        g = min(sample_gamma(rng, self.k), self.gamma_cap)
        return (g / self.gamma_cap) * max_value

    def expected(self, max_value: float) -> float:
        return expected_gamma_severity(self.k, self.gamma_cap, max_value)

    def describe(self) -> str:
        return f"k={self.k}, cap={self.gamma_cap}"


@dataclass(frozen=True)
class UniformSeverity(SeverityModel):
    name: str = "uniform"

    def sample(self, rng: np.random.Generator, max_value: float) -> float:
        return sample_uniform_severity(rng, max_value)

    def expected(self, max_value: float) -> float:
        return 0.5 * max_value

    def describe(self) -> str:
        return "U[0, 1)"


# Canonical parameterisation — reproduce exactly.
RECESSION_MODEL = NegativeBinomialSeverity(r=2, p=0.25)
WAR_MODEL = BinomialSeverity(n=8, p=0.15)
PANDEMIC_GAMMA_SHAPE = 3
BLACK_SWAN_MODEL = NegativeBinomialSeverity(r=4, p=0.18)
BULL_MODEL = BinomialSeverity(n=8, p=0.30)


def recession_severity(rng: np.random.Generator, max_drop: float) -> float:
    return RECESSION_MODEL.sample(rng, max_drop)


def war_severity(rng: np.random.Generator, max_drop: float) -> float:
    return WAR_MODEL.sample(rng, max_drop)


def pandemic_severity(rng: np.random.Generator, max_drop: float, gamma_cap: float) -> float:
    return GammaSeverity(k=PANDEMIC_GAMMA_SHAPE, gamma_cap=gamma_cap).sample(rng, max_drop)


def black_swan_severity(rng: np.random.Generator, max_drop: float) -> float:
    return BLACK_SWAN_MODEL.sample(rng, max_drop)


def bull_severity(rng: np.random.Generator, max_gain: float) -> float:
    return BULL_MODEL.sample(rng, max_gain)


def build_severity_models(config: SimulationConfig) -> Dict[str, SeverityModel]:
    """
    Map every shock to its severity model for this config.

    severity_mode="distribution" gives the canonical table above (with the
    config's gamma_cap and negative-binomial trial bound); "uniform" gives
    U[0, 1) * cap for every shock.
    """
    if config.severity_mode == "uniform":
        return {shock: UniformSeverity() for shock in ALL_SHOCKS}
    if config.severity_mode != "distribution":
        raise ValueError(
            f"Unknown severity_mode '{config.severity_mode}'. "
            f"Available: ['distribution', 'uniform']"
        )

    trials = config.max_negbin_trials
    return {
        RECESSION: NegativeBinomialSeverity(r=RECESSION_MODEL.r, p=RECESSION_MODEL.p, max_trials=trials),
        WAR: WAR_MODEL,
        PANDEMIC: GammaSeverity(k=PANDEMIC_GAMMA_SHAPE, gamma_cap=config.gamma_cap),
        BLACK_SWAN: NegativeBinomialSeverity(r=BLACK_SWAN_MODEL.r, p=BLACK_SWAN_MODEL.p, max_trials=trials),
        BULL: BULL_MODEL,
    }
