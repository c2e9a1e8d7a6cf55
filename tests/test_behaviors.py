import math

import pytest

from behaviors.adaptive import AdaptiveGBMModel, ConstantGBMModel
from behaviors.base import MarketRegime
from behaviors.bayesian import BayesianShockUpdater
from core.config import BULL, DOWNSIDE_SHOCKS, RECESSION, ProbabilityBand, SimulationConfig


@pytest.fixture
def model() -> AdaptiveGBMModel:
    return AdaptiveGBMModel.from_config(SimulationConfig())


def test_regime_at_full_health(model):
    regime = model.regime(1_000_000_000.0)
    assert regime.volatility == pytest.approx(0.10)
    assert regime.drift == pytest.approx(0.07 * 1.10)


def test_regime_underfunded_is_clamped_at_lower_health(model):
    # 50% funded clamps to health 0.7
    regime = model.regime(500_000_000.0)
    assert model.health(500_000_000.0) == 0.7
    assert regime.volatility == pytest.approx(0.10 * (1 + 0.3 * 0.4))
    assert regime.drift == pytest.approx(0.07 * (0.90 + 0.20 * 0.7))
    assert model.regime(0.0) == regime


def test_regime_overfunded_is_clamped_at_upper_health(model):
    regime = model.regime(5_000_000_000.0)
    assert model.health(5_000_000_000.0) == 1.3
    assert regime.volatility == pytest.approx(0.10 * (1 - 0.3 * 0.4))
    assert regime.drift == pytest.approx(0.07 * (0.90 + 0.20 * 1.3))


def test_volatility_rises_and_drift_falls_as_fund_weakens(model):
    strong = model.regime(1_200_000_000.0)
    weak = model.regime(800_000_000.0)
    assert weak.volatility > strong.volatility
    assert weak.drift < strong.drift


def test_gbm_return_formula(model):
    regime = MarketRegime(drift=0.08, volatility=0.12)
    z = 1.3
    dt = 1.0 / 12.0
    expected = math.exp((0.08 - 0.5 * 0.12 ** 2) * dt + 0.12 * math.sqrt(dt) * z) - 1.0
    assert model.monthly_return(regime, z) == pytest.approx(expected)


def test_zero_volatility_return_is_deterministic():
    model = ConstantGBMModel(drift=0.06, volatility=0.0)
    regime = model.regime(123.0)
    assert model.monthly_return(regime, 2.5) == pytest.approx(math.exp(0.06 / 12.0) - 1.0)
    assert model.monthly_return(regime, -2.5) == model.monthly_return(regime, 2.5)


def test_bayesian_update_moves_toward_smoothed_rate():
    updater = BayesianShockUpdater(alpha=0.002, bands=None)
    p = updater.update_one(RECESSION, 0.002, hits=0, month=0)
    assert p == pytest.approx(0.002 * 0.998 + 0.002 * 0.5)


def test_bayesian_update_clamps_into_band():
    bands = SimulationConfig().probability_bands
    updater = BayesianShockUpdater(alpha=0.9, bands=bands)
    probabilities = {RECESSION: 0.002, "war": 0.0005, "pandemic": 0.0005, "black_swan": 0.0003, BULL: 0.04}
    hits = {shock: 5 for shock in DOWNSIDE_SHOCKS}

    updated = updater.update(probabilities, hits, month=5)

    for shock in DOWNSIDE_SHOCKS:
        assert updated[shock] == bands[shock].hi
    assert updated[BULL] == 0.04


def test_bayesian_update_clamps_up_to_band_floor():
    bands = {shock: ProbabilityBand(0.01, 0.02) for shock in DOWNSIDE_SHOCKS}
    updater = BayesianShockUpdater(alpha=0.0, bands=bands)
    assert updater.update_one(RECESSION, 0.0, hits=0, month=100) == 0.01


def test_unclamped_update_stays_in_unit_interval():
    updater = BayesianShockUpdater(alpha=1.0, bands=None)
    assert updater.update_one(RECESSION, 0.3, hits=10, month=9) == pytest.approx(11 / 11)
    assert updater.update_one(RECESSION, 0.3, hits=0, month=9) == pytest.approx(1 / 11)


def test_update_does_not_mutate_input():
    updater = BayesianShockUpdater.from_config(SimulationConfig())
    probabilities = dict(SimulationConfig().base_probabilities)
    before = dict(probabilities)
    updater.update(probabilities, {s: 0 for s in DOWNSIDE_SHOCKS}, month=0)
    assert probabilities == before
