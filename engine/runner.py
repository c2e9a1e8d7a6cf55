"""
Simulation runner — drives single fund paths and the Monte Carlo loop over them.

One run is a small state machine:

  RUNNING ──(fund <= 0 after a month)──> DEPLETED   final value 0, remaining months skipped
     │
     └──(all months evaluated)──────────> COMPLETED  final value = fund

Each month, in order:
  1. market regime from fund health (adaptive drift / volatility)
  2. GBM return from a standard-normal draw
  3. downside shocks → capped combined loss; bull burst
  4. fund ← fund × (1 + rtn) − payout
  5. depletion check
  6. Bayesian update of the downside probabilities (surviving months only)

run_monte_carlo executes many independent runs. Every run starts from a fresh
RunState; the only thing shared between runs is the random generator.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Mapping, Optional

import numpy as np
from tqdm import tqdm

from behaviors.adaptive import AdaptiveGBMModel
from behaviors.base import MarketModel
from behaviors.bayesian import BayesianShockUpdater
from core.config import ALL_SHOCKS, SimulationConfig
from core.validators import validate_config
from distributions.sampler import SamplingExhaustedError
from models.severity_model import SeverityModel, build_severity_models
from solvency.aggregator import AggregateResult

from .events import MonthOutcome, simulate_fund_month
from .state import RunState, RunStatus, RunSummary

logger = logging.getLogger(__name__)

MonthObserver = Callable[[RunState, MonthOutcome], None]


def simulate_run(
    config: SimulationConfig,
    rng: np.random.Generator,
    *,
    market_model: Optional[MarketModel] = None,
    updater: Optional[BayesianShockUpdater] = None,
    severity_models: Optional[Mapping[str, SeverityModel]] = None,
    on_month: Optional[MonthObserver] = None,
) -> RunSummary:
    """
    Simulate one fund path over config.months months.

    Parameters
    ----------
    config : SimulationConfig
        Fund, shock, and adaptation settings
    rng : np.random.Generator
        Random source; the run draws all of its variates from it
    market_model, updater, severity_models : optional
        Pre-built components (built from config when omitted)
    on_month : callable, optional
        Called as on_month(state, outcome) after every evaluated month,
        including the month that depletes the fund

    Returns
    -------
    RunSummary with the final value (0 if depleted), insolvency flag and
    this run's per-shock hit counts.
    """
    if market_model is None:
        market_model = AdaptiveGBMModel.from_config(config)
    if updater is None:
        updater = BayesianShockUpdater.from_config(config)
    if severity_models is None:
        severity_models = build_severity_models(config)

    months = config.months
    state = RunState.fresh(config)

    # One normal and five uniforms per month, drawn up front for the whole path
    normals = rng.standard_normal(months).tolist()
    shock_draws = rng.random((months, len(ALL_SHOCKS))).tolist()

    for month in range(months):
        state.month = month

        regime = market_model.regime(state.fund)
        gbm_return = market_model.monthly_return(regime, normals[month])

        outcome = simulate_fund_month(
            fund=state.fund,
            gbm_return=gbm_return,
            shock_draws=shock_draws[month],
            probabilities=state.probabilities,
            magnitude_caps=config.magnitude_caps,
            severity_models=severity_models,
            max_monthly_loss=config.max_monthly_loss,
            monthly_payout=config.monthly_payout,
            rng=rng,
        )
        for shock in outcome.hit_shocks:
            state.hits[shock] += 1

        if outcome.fund_after <= 0.0:
            state.fund = 0.0
            state.status = RunStatus.DEPLETED
            if on_month is not None:
                on_month(state, outcome)
            break

        state.fund = outcome.fund_after
        state.probabilities = updater.update(state.probabilities, state.hits, month)
        if on_month is not None:
            on_month(state, outcome)
    else:
        state.status = RunStatus.COMPLETED

    months_simulated = state.month + 1 if months > 0 else 0
    return RunSummary(
        final_value=state.fund,
        insolvent=state.fund < config.floor,
        hits=dict(state.hits),
        months_simulated=months_simulated,
        status=state.status,
    )


def run_monte_carlo(
    config: SimulationConfig,
    *,
    runs: Optional[int] = None,
    seed: Optional[int] = None,
    show_progress: bool = False,
    market_model: Optional[MarketModel] = None,
) -> AggregateResult:
    """
    Run `runs` independent fund paths and aggregate them.

    Parameters
    ----------
    config : SimulationConfig
        Validated before anything runs; invalid configs raise ValueError
    runs : int, optional
        Overrides config.runs
    seed : int, optional
        Overrides config.seed. The same seed reproduces the same result.
    show_progress : bool
        Show a tqdm progress bar over runs
    market_model : MarketModel, optional
        Replaces the adaptive GBM model built from config

    Returns
    -------
    AggregateResult with sums, counts, and posterior shock probabilities.
    """
    validation = validate_config(config)
    if not validation.is_valid:
        raise ValueError(f"Invalid simulation config:\n{validation.summary()}")
    for warning in validation.warnings:
        logger.warning(warning)

    n_runs = config.runs if runs is None else runs
    if n_runs <= 0:
        raise ValueError(f"runs must be positive, got {n_runs}.")
    seed = config.seed if seed is None else seed

    rng = np.random.default_rng(seed)
    if market_model is None:
        market_model = AdaptiveGBMModel.from_config(config)
    updater = BayesianShockUpdater.from_config(config)
    severity_models = build_severity_models(config)

    result = AggregateResult.empty(config)

    logger.info(
        "Monte Carlo: %d runs x %d months (severity_mode=%s, alpha=%s, seed=%s)",
        n_runs, config.months, config.severity_mode, config.alpha, seed,
    )
    started = time.perf_counter()

    iterator = range(n_runs)
    if show_progress:
        iterator = tqdm(iterator, total=n_runs, desc="Simulating runs", unit="run")

    for run in iterator:
        try:
            summary = simulate_run(
                config,
                rng,
                market_model=market_model,
                updater=updater,
                severity_models=severity_models,
            )
        except SamplingExhaustedError:
            logger.warning("Severity sampling exhausted in run %d of %d", run, n_runs)
            raise
        result.accumulate(summary)

    logger.info(
        "Monte Carlo complete in %.1fs: insolvency %.2f%%, %d depleted runs",
        time.perf_counter() - started, result.insolvency_pct, result.depleted_runs,
    )
    return result
