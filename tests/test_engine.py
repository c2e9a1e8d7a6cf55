import numpy as np
import pytest

from core.config import ALL_SHOCKS, BULL, DOWNSIDE_SHOCKS, RECESSION, SimulationConfig
from engine.events import simulate_fund_month
from engine.runner import simulate_run
from engine.state import RunState, RunStatus
from models.severity_model import SeverityModel


class FullSeverity(SeverityModel):
    """Always hits for the full cap."""

    name = "full"

    def sample(self, rng, max_value):
        return max_value

    def expected(self, max_value):
        return max_value


FULL_MODELS = {shock: FullSeverity() for shock in ALL_SHOCKS}
CAPS = {shock: 0.20 for shock in ALL_SHOCKS}


def _month(rng, *, draws, probabilities, max_monthly_loss=0.25, fund=100.0, payout=0.0):
    return simulate_fund_month(
        fund=fund,
        gbm_return=0.01,
        shock_draws=draws,
        probabilities=probabilities,
        magnitude_caps=CAPS,
        severity_models=FULL_MODELS,
        max_monthly_loss=max_monthly_loss,
        monthly_payout=payout,
        rng=rng,
    )


def test_no_shock_fires_above_probability(rng):
    outcome = _month(rng, draws=[0.9] * 5, probabilities={s: 0.5 for s in ALL_SHOCKS})

    assert outcome.shocks == []
    assert outcome.capped_loss == 0.0
    assert outcome.bull_gain == 0.0
    assert outcome.net_return == pytest.approx(0.01)
    assert outcome.fund_after == pytest.approx(101.0)


def test_combined_loss_is_capped(rng):
    outcome = _month(rng, draws=[0.0] * 4 + [0.9], probabilities={s: 0.5 for s in ALL_SHOCKS})

    assert outcome.hit_shocks == list(DOWNSIDE_SHOCKS)
    assert outcome.raw_loss == pytest.approx(0.80)
    assert outcome.capped_loss == 0.25
    assert outcome.net_return == pytest.approx(0.01 - 0.25)


def test_uncapped_loss_when_cap_disabled(rng):
    outcome = _month(
        rng, draws=[0.0] * 4 + [0.9], probabilities={s: 0.5 for s in ALL_SHOCKS}, max_monthly_loss=None
    )
    assert outcome.capped_loss == pytest.approx(0.80)


def test_bull_burst_adds_to_return(rng):
    outcome = _month(rng, draws=[0.9] * 4 + [0.0], probabilities={s: 0.5 for s in ALL_SHOCKS})
    assert outcome.bull_gain == 0.20
    assert outcome.net_return == pytest.approx(0.21)


def test_payout_taken_after_return(rng):
    outcome = _month(rng, draws=[0.9] * 5, probabilities={s: 0.0 for s in ALL_SHOCKS}, payout=30.0)
    assert outcome.fund_after == pytest.approx(100.0 * 1.01 - 30.0)


def test_fresh_state_resets_everything():
    config = SimulationConfig()
    state = RunState.fresh(config)
    state.probabilities[RECESSION] = 0.5

    again = RunState.fresh(config)
    assert again.fund == config.initial_fund
    assert again.probabilities == config.base_probabilities
    assert again.hits == {s: 0 for s in DOWNSIDE_SHOCKS}
    assert again.status is RunStatus.RUNNING


def test_depleted_run_stops_immediately(rng):
    config = SimulationConfig(monthly_payout=2_000_000_000.0)
    observed = []

    summary = simulate_run(config, rng, on_month=lambda state, outcome: observed.append(state.status))

    assert observed == [RunStatus.DEPLETED]
    assert summary.status is RunStatus.DEPLETED
    assert summary.final_value == 0.0
    assert summary.insolvent
    assert summary.depleted
    assert summary.months_simulated == 1


def test_fund_never_negative_and_probabilities_stay_in_bands(rng):
    config = SimulationConfig(
        years=5,
        alpha=0.3,
        base_probabilities={RECESSION: 0.02, "war": 0.01, "pandemic": 0.01, "black_swan": 0.005, BULL: 0.04},
        monthly_payout=8_000_000.0,
    )
    bands = config.probability_bands

    def check(state, outcome):
        assert state.fund >= 0.0
        assert outcome.capped_loss <= config.max_monthly_loss
        for shock in DOWNSIDE_SHOCKS:
            assert bands[shock].lo <= state.probabilities[shock] <= bands[shock].hi
        assert state.probabilities[BULL] == config.base_probabilities[BULL]

    for _ in range(50):
        simulate_run(config, rng, on_month=check)


def test_probabilities_reset_between_runs(rng):
    config = SimulationConfig(
        years=2,
        alpha=0.5,
        probability_bands=None,
        base_probabilities={RECESSION: 0.001, "war": 0.001, "pandemic": 0.001, "black_swan": 0.001, BULL: 0.04},
    )

    for _ in range(3):
        first_month = []

        def record(state, outcome):
            if state.month == 0:
                first_month.append((dict(state.probabilities), dict(state.hits)))

        simulate_run(config, rng, on_month=record)

        probabilities, hits = first_month[0]
        for shock in DOWNSIDE_SHOCKS:
            expected = 0.001 * 0.5 + 0.5 * (hits[shock] + 1) / 2
            assert probabilities[shock] == pytest.approx(expected)


def test_completed_run_summary(calm_config, rng):
    summary = simulate_run(calm_config, rng)

    assert summary.status is RunStatus.COMPLETED
    assert summary.months_simulated == calm_config.months
    assert summary.final_value == pytest.approx(1e9 - 120 * 3e6)
    assert not summary.insolvent
    assert summary.hits == {s: 0 for s in DOWNSIDE_SHOCKS}


def test_calm_fund_declines_by_payout_each_month(calm_config, rng):
    funds = []
    simulate_run(calm_config, rng, on_month=lambda state, outcome: funds.append(state.fund))

    steps = np.diff([calm_config.initial_fund] + funds)
    assert np.allclose(steps, -calm_config.monthly_payout)


def test_same_seed_same_run():
    config = SimulationConfig(years=3)
    a = simulate_run(config, np.random.default_rng(5))
    b = simulate_run(config, np.random.default_rng(5))
    assert a == b
