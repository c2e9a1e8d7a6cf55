"""
Solvency outputs — aggregation across runs, population metrics, and the report.
"""

from .aggregator import AggregateResult
from .metrics import (
    posterior_probability,
    insolvency_confidence_interval,
    final_value_distribution,
)
from .report import SolvencyReport, generate_solvency_report

__all__ = [
    "AggregateResult",
    "posterior_probability",
    "insolvency_confidence_interval",
    "final_value_distribution",
    "SolvencyReport",
    "generate_solvency_report",
]
