"""
Sanity checks for a SimulationConfig before it enters the engine.

Catches problems early:
- Probabilities outside [0, 1]
- Negative shock magnitudes
- Clamp bands that are inverted or don't contain the base probability
- Parameters that would make the negative-binomial sampler loop forever
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from .config import ALL_SHOCKS, DOWNSIDE_SHOCKS, SimulationConfig

_SEVERITY_MODES = ("distribution", "uniform")


@dataclass
class ValidationResult:
    """Collects all validation warnings/errors for a config."""
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def summary(self) -> str:
        lines = []
        if self.errors:
            lines.append(f"ERRORS ({len(self.errors)}):")
            for e in self.errors:
                lines.append(f"  ✗ {e}")
        if self.warnings:
            lines.append(f"WARNINGS ({len(self.warnings)}):")
            for w in self.warnings:
                lines.append(f"  ⚠ {w}")
        if not lines:
            lines.append("✓ All checks passed.")
        return "\n".join(lines)


def validate_config(config: SimulationConfig) -> ValidationResult:
    """
    Run all validation checks on a simulation config.
    Returns a ValidationResult with errors (blocking) and warnings (informational).
    """
    result = ValidationResult()

    # --- Shock tables ---
    for table_name, table in [
        ("base_probabilities", config.base_probabilities),
        ("magnitude_caps", config.magnitude_caps),
    ]:
        missing = [s for s in ALL_SHOCKS if s not in table]
        if missing:
            result.errors.append(f"{table_name} is missing shocks: {missing}")
    if result.errors:
        return result  # can't continue without every shock

    for shock in ALL_SHOCKS:
        p = config.base_probabilities[shock]
        if not 0.0 <= p <= 1.0:
            result.errors.append(f"Base probability for {shock} is {p}, outside [0, 1].")
        cap = config.magnitude_caps[shock]
        if cap < 0:
            result.errors.append(f"Magnitude cap for {shock} is negative ({cap}).")

    # --- Clamp bands ---
    if config.probability_bands is not None:
        for shock in DOWNSIDE_SHOCKS:
            band = config.probability_bands.get(shock)
            if band is None:
                result.errors.append(f"probability_bands is missing {shock}.")
                continue
            if band.lo > band.hi:
                result.errors.append(f"Band for {shock} is inverted: [{band.lo}, {band.hi}].")
            if band.lo < 0.0 or band.hi > 1.0:
                result.errors.append(f"Band for {shock} lies outside [0, 1]: [{band.lo}, {band.hi}].")
            p = config.base_probabilities[shock]
            if not band.lo <= p <= band.hi:
                result.warnings.append(
                    f"Base probability for {shock} ({p}) is outside its band "
                    f"[{band.lo}, {band.hi}] and will be clamped after the first month."
                )

    # --- Fund & horizon ---
    for name in ["initial_fund", "years", "runs", "dt", "gamma_cap"]:
        value = getattr(config, name)
        if value <= 0:
            result.errors.append(f"{name} must be positive, got {value}.")

    if config.monthly_payout < 0:
        result.errors.append(f"monthly_payout must be non-negative, got {config.monthly_payout}.")
    if config.max_monthly_loss is not None and config.max_monthly_loss < 0:
        result.errors.append(f"max_monthly_loss must be non-negative, got {config.max_monthly_loss}.")
    if not 0.0 <= config.alpha <= 1.0:
        result.errors.append(f"alpha must lie in [0, 1], got {config.alpha}.")

    # --- Adaptive market ---
    lo, hi = config.health_band
    if lo > hi:
        result.errors.append(f"health_band is inverted: {config.health_band}.")
    if config.base_volatility < 0:
        result.errors.append(f"base_volatility must be non-negative, got {config.base_volatility}.")

    # --- Sampling ---
    if config.severity_mode not in _SEVERITY_MODES:
        result.errors.append(
            f"Unknown severity_mode '{config.severity_mode}'. Available: {list(_SEVERITY_MODES)}"
        )
    if config.max_negbin_trials < 1:
        result.errors.append(f"max_negbin_trials must be >= 1, got {config.max_negbin_trials}.")

    if config.floor > config.initial_fund:
        result.warnings.append(
            f"Insolvency floor ({config.floor:,.0f}) exceeds the initial fund "
            f"({config.initial_fund:,.0f}); runs are insolvent unless the fund grows past it."
        )

    return result
