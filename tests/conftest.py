"""
Pytest fixtures for pathwise xVA testing.

Provides reusable test fixtures for grids, curves, models, forwards and
exposure series. Grids are coarser than the reference scenario: the
log-normal step is exact, so terminal distributions do not depend on Δt.
"""

import pytest

from pathwise_xva.exposure import ExposureEngine, ExposureSeries
from pathwise_xva.instruments import EquityForward
from pathwise_xva.market import AssetPaths, BlackScholesModel, DiscountCurve, HazardCurve
from pathwise_xva.stochastic import TimeGrid


@pytest.fixture
def time_grid() -> TimeGrid:
    """Uniform grid of 100 points, Δt = 0.01, horizon 0.99."""
    return TimeGrid.uniform(0.0, 100, 0.01)


@pytest.fixture
def collateral_curve() -> DiscountCurve:
    """Flat 1% collateral curve."""
    return DiscountCurve(rate=0.01)


@pytest.fixture
def funding_curve() -> DiscountCurve:
    """Flat 5% unsecured funding curve."""
    return DiscountCurve(rate=0.05)


@pytest.fixture
def hazard_curve() -> HazardCurve:
    """Counterparty hazard curve with λ = 4%."""
    return HazardCurve(hazard_rate=0.04)


@pytest.fixture
def bs_model(time_grid: TimeGrid) -> BlackScholesModel:
    """Black-Scholes model with S_0 = 100, r = 1%, σ = 25%."""
    return BlackScholesModel(
        time_grid=time_grid,
        n_paths=4000,
        initial_value=100.0,
        risk_free_rate=0.01,
        volatility=0.25,
        seed=3141,
    )


@pytest.fixture
def paths(bs_model: BlackScholesModel) -> AssetPaths:
    """Simulated asset paths on the standard grid."""
    return bs_model.simulate()


@pytest.fixture
def long_forward(time_grid: TimeGrid) -> EquityForward:
    """Long 1000 units struck at 80, maturing at the grid horizon."""
    return EquityForward(strike=80.0, maturity=time_grid.horizon, quantity=1000.0)


@pytest.fixture
def opposing_forwards(time_grid: TimeGrid) -> list[EquityForward]:
    """Long forward struck at 100 and short forward struck at 90."""
    return [
        EquityForward(strike=100.0, maturity=time_grid.horizon, quantity=1000.0, sign=1),
        EquityForward(strike=90.0, maturity=time_grid.horizon, quantity=1000.0, sign=-1),
    ]


@pytest.fixture
def engine() -> ExposureEngine:
    """Exposure engine discounting at the 1% collateral rate."""
    return ExposureEngine(collateral_rate=0.01)


@pytest.fixture
def long_series(
    engine: ExposureEngine, paths: AssetPaths, long_forward: EquityForward
) -> ExposureSeries:
    """Exposure series of the long forward."""
    return engine.calculate(paths, long_forward)
