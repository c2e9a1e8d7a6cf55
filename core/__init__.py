"""
Core package — configuration, presets, validation, and shared utilities.
No simulation logic lives here.
"""

from .config import (
    ALL_SHOCKS,
    DOWNSIDE_SHOCKS,
    NAMED_PRESETS,
    ProbabilityBand,
    SimulationConfig,
    get_preset,
)
from .utils import clamp, laplace_smoothed, format_currency
from .validators import ValidationResult, validate_config

__all__ = [
    "ALL_SHOCKS",
    "DOWNSIDE_SHOCKS",
    "NAMED_PRESETS",
    "ProbabilityBand",
    "SimulationConfig",
    "get_preset",
    "clamp",
    "laplace_smoothed",
    "format_currency",
    "ValidationResult",
    "validate_config",
]
