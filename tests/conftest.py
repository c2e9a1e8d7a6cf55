import numpy as np
import pytest

from core.config import ALL_SHOCKS, SimulationConfig


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(20240601)


@pytest.fixture
def small_config() -> SimulationConfig:
    """Default economics on a short horizon and small run count."""
    return SimulationConfig(runs=300, years=1, seed=11)


@pytest.fixture
def calm_config() -> SimulationConfig:
    """No volatility, no drift, no shocks, no adaptation: the fund only pays out."""
    return SimulationConfig(
        base_drift=0.0,
        base_volatility=0.0,
        base_probabilities={shock: 0.0 for shock in ALL_SHOCKS},
        alpha=0.0,
        probability_bands=None,
        floor=500_000_000.0,
        runs=50,
        seed=3,
    )
