"""
Per-run state and the summary each run hands to the aggregator.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict

from core.config import DOWNSIDE_SHOCKS, SimulationConfig


class RunStatus(str, Enum):
    RUNNING = "running"
    DEPLETED = "depleted"    # fund hit zero; remaining months skipped
    COMPLETED = "completed"  # survived the full horizon


@dataclass
class RunState:
    """Mutable state owned by exactly one run."""
    fund: float
    probabilities: Dict[str, float]
    hits: Dict[str, int] = field(default_factory=lambda: {s: 0 for s in DOWNSIDE_SHOCKS})
    month: int = 0
    status: RunStatus = RunStatus.RUNNING

    @classmethod
    def fresh(cls, config: SimulationConfig) -> "RunState":
        """Start of a run: full fund, base probabilities, zero hits. Nothing carries over."""
        return cls(
            fund=float(config.initial_fund),
            probabilities=dict(config.base_probabilities),
        )


@dataclass(frozen=True)
class RunSummary:
    """What one run reports back to the aggregator."""
    final_value: float
    insolvent: bool
    hits: Dict[str, int]
    months_simulated: int  # months evaluated, including the one that depleted the fund
    status: RunStatus

    @property
    def depleted(self) -> bool:
        return self.status is RunStatus.DEPLETED
