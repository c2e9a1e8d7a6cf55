"""
Simulation engine — monthly shock evaluation, the per-run state machine, and the Monte Carlo runner.
"""

from .events import MonthOutcome, simulate_fund_month
from .state import RunState, RunStatus, RunSummary
from .runner import simulate_run, run_monte_carlo

__all__ = [
    "MonthOutcome",
    "simulate_fund_month",
    "RunState",
    "RunStatus",
    "RunSummary",
    "simulate_run",
    "run_monte_carlo",
]
