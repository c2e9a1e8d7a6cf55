"""
Shock severity models — one fixed distribution family per shock type.
"""

from .severity_model import (
    SeverityModel,
    BinomialSeverity,
    NegativeBinomialSeverity,
    GammaSeverity,
    UniformSeverity,
    recession_severity,
    war_severity,
    pandemic_severity,
    black_swan_severity,
    bull_severity,
    build_severity_models,
)

__all__ = [
    "SeverityModel",
    "BinomialSeverity",
    "NegativeBinomialSeverity",
    "GammaSeverity",
    "UniformSeverity",
    "recession_severity",
    "war_severity",
    "pandemic_severity",
    "black_swan_severity",
    "bull_severity",
    "build_severity_models",
]
