"""
Behavioural models — market regime per month and adaptive shock probabilities.
"""

from .base import MarketRegime, MarketModel
from .adaptive import AdaptiveGBMModel, ConstantGBMModel
from .bayesian import BayesianShockUpdater

__all__ = [
    "MarketRegime",
    "MarketModel",
    "AdaptiveGBMModel",
    "ConstantGBMModel",
    "BayesianShockUpdater",
]
