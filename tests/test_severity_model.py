import numpy as np
import pytest

from core.config import ALL_SHOCKS, BULL, PANDEMIC, RECESSION, WAR, SimulationConfig
from distributions.benchmarks import expected_gamma_severity, severity_benchmarks
from models.severity_model import (
    BLACK_SWAN_MODEL,
    BULL_MODEL,
    RECESSION_MODEL,
    WAR_MODEL,
    BinomialSeverity,
    GammaSeverity,
    NegativeBinomialSeverity,
    UniformSeverity,
    black_swan_severity,
    build_severity_models,
    bull_severity,
    pandemic_severity,
    recession_severity,
    war_severity,
)


def test_canonical_parameters():
    assert RECESSION_MODEL == NegativeBinomialSeverity(r=2, p=0.25)
    assert WAR_MODEL == BinomialSeverity(n=8, p=0.15)
    assert BLACK_SWAN_MODEL == NegativeBinomialSeverity(r=4, p=0.18)
    assert BULL_MODEL == BinomialSeverity(n=8, p=0.30)


@pytest.mark.parametrize(
    "sample, cap",
    [
        (lambda rng, cap: recession_severity(rng, cap), 0.04),
        (lambda rng, cap: war_severity(rng, cap), 0.03),
        (lambda rng, cap: pandemic_severity(rng, cap, 5.0), 0.06),
        (lambda rng, cap: black_swan_severity(rng, cap), 0.10),
        (lambda rng, cap: bull_severity(rng, cap), 0.03),
    ],
)
def test_named_severities_stay_within_cap(rng, sample, cap):
    for _ in range(2000):
        assert 0.0 <= sample(rng, cap) <= cap


def test_pandemic_saturates_at_gamma_cap(rng):
    # a tiny cap means almost every Gamma(3) draw is clipped to the full magnitude
    draws = [pandemic_severity(rng, 0.06, 0.01) for _ in range(500)]
    assert max(draws) == pytest.approx(0.06)
    assert sum(d == pytest.approx(0.06) for d in draws) > 490


@pytest.mark.parametrize("shock", list(ALL_SHOCKS))
def test_empirical_mean_matches_reference(rng, shock):
    model = build_severity_models(SimulationConfig())[shock]
    draws = np.array([model.sample(rng, 1.0) for _ in range(20_000)])
    assert draws.mean() == pytest.approx(model.expected(1.0), abs=0.01)


def test_gamma_expected_severity_limits():
    # with a huge cap nothing is clipped: E[G] / cap
    assert expected_gamma_severity(3, 1e6, 1.0) == pytest.approx(3 / 1e6, rel=1e-6)
    # with a tiny cap everything is clipped
    assert expected_gamma_severity(3, 1e-6, 1.0) == pytest.approx(1.0, abs=1e-6)


def test_distribution_mode_mapping():
    config = SimulationConfig(gamma_cap=4.0, max_negbin_trials=500)
    models = build_severity_models(config)

    assert set(models) == set(ALL_SHOCKS)
    assert models[WAR] == WAR_MODEL
    assert models[BULL] == BULL_MODEL
    assert models[PANDEMIC] == GammaSeverity(k=3, gamma_cap=4.0)
    assert models[RECESSION].max_trials == 500


def test_uniform_mode_mapping():
    models = build_severity_models(SimulationConfig(severity_mode="uniform"))
    assert all(isinstance(m, UniformSeverity) for m in models.values())
    assert models[RECESSION].expected(0.04) == pytest.approx(0.02)


def test_unknown_mode_rejected():
    with pytest.raises(ValueError, match="Available"):
        build_severity_models(SimulationConfig(severity_mode="lognormal"))


def test_severity_benchmarks_table():
    config = SimulationConfig()
    table = severity_benchmarks(config)

    assert list(table["Shock"]) == list(ALL_SHOCKS)
    assert list(table.columns) == [
        "Shock", "Model", "Parameters", "Cap", "Expected Severity", "Base Probability",
    ]
    assert (table["Expected Severity"] <= table["Cap"]).all()
    war = table.set_index("Shock").loc[WAR]
    assert war["Expected Severity"] == pytest.approx(0.15 * 0.03)
    assert war["Parameters"] == "n=8, p=0.15"
