"""
Monthly shock evaluation — which shocks fire this month and how hard they hit.

This is the SECOND layer of randomness (the first being the GBM market return):
  Layer 1 (behaviors): what does the market do this month?       rtn = GBM draw
  Layer 2 (events):    do any rare events land on top of that?   rtn -= losses, += bull

Downside shocks are evaluated in a fixed order (recession, war, pandemic,
black swan), each against its own uniform draw and its current working
probability. Their severities are summed and the total is capped at
max_monthly_loss before it is taken off the return. The bull burst is
evaluated last with its own uniform and adds to the return.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Mapping, Optional, Sequence, Tuple

import numpy as np

from core.config import BULL, DOWNSIDE_SHOCKS
from models.severity_model import SeverityModel


@dataclass
class MonthOutcome:
    """Result of simulating the fund for one month."""
    gbm_return: float
    shocks: List[Tuple[str, float]] = field(default_factory=list)  # (shock, severity) for downside hits
    raw_loss: float = 0.0
    capped_loss: float = 0.0
    bull_gain: float = 0.0
    net_return: float = 0.0
    fund_after: float = 0.0

    @property
    def hit_shocks(self) -> List[str]:
        return [shock for shock, _ in self.shocks]


def simulate_fund_month(
    *,
    fund: float,
    gbm_return: float,
    shock_draws: Sequence[float],
    probabilities: Mapping[str, float],
    magnitude_caps: Mapping[str, float],
    severity_models: Mapping[str, SeverityModel],
    max_monthly_loss: Optional[float],
    monthly_payout: float,
    rng: np.random.Generator,
) -> MonthOutcome:
    """
    Apply shocks and the liability outflow to one month of fund evolution.

    Parameters
    ----------
    fund : float
        Fund value at the start of the month
    gbm_return : float
        Baseline simple return drawn by the market model
    shock_draws : sequence of float
        Five uniform(0,1) draws: one per downside shock in DOWNSIDE_SHOCKS order,
        then one for the bull burst
    probabilities : mapping
        Current working probability per shock
    magnitude_caps : mapping
        Maximum severity per shock (fraction of fund value)
    severity_models : mapping
        Severity model per shock
    max_monthly_loss : float or None
        Cap on the combined downside loss; None leaves it uncapped
    monthly_payout : float
        Liability outflow taken after the return is applied
    rng : np.random.Generator
        Random number generator for severity sampling

    The returned fund_after may be negative; the caller decides depletion.
    """
    outcome = MonthOutcome(gbm_return=gbm_return)

    total_loss = 0.0
    for shock, u in zip(DOWNSIDE_SHOCKS, shock_draws):
        if u < probabilities[shock]:
            sev = severity_models[shock].sample(rng, magnitude_caps[shock])
            outcome.shocks.append((shock, sev))
            total_loss += sev

    outcome.raw_loss = total_loss
    if max_monthly_loss is not None and total_loss > max_monthly_loss:
        total_loss = max_monthly_loss
    outcome.capped_loss = total_loss

    rtn = gbm_return - total_loss

    if shock_draws[len(DOWNSIDE_SHOCKS)] < probabilities[BULL]:
        outcome.bull_gain = severity_models[BULL].sample(rng, magnitude_caps[BULL])
        rtn += outcome.bull_gain

    outcome.net_return = rtn
    outcome.fund_after = fund * (1.0 + rtn) - monthly_payout
    return outcome
