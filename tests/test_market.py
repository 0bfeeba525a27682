"""
Tests for market models: discount curve, hazard curve, Black-Scholes model.
"""

import numpy as np
import pytest

from pathwise_xva.config import MarketConfig, SimulationConfig
from pathwise_xva.errors import InvalidParameter, NumericalDomain
from pathwise_xva.market import AssetPaths, BlackScholesModel, DiscountCurve, HazardCurve
from pathwise_xva.stochastic import TimeGrid

class TestDiscountCurve:
    """Tests for flat discount curve."""

    def test_discount_factor_at_zero(self, collateral_curve: DiscountCurve) -> None:
        """DF at t=0 should be 1."""
        assert collateral_curve.discount_factor(0.0) == 1.0

    def test_discount_factor_value(self, collateral_curve: DiscountCurve) -> None:
        """DF = exp(-r t)."""
        assert collateral_curve.discount_factor(0.999) == pytest.approx(np.exp(-0.01 * 0.999))

    def test_discount_factor_from_start(self, collateral_curve: DiscountCurve) -> None:
        """D(t, T) = exp(-r (T - t))."""
        df = collateral_curve.discount_factor(0.999, t_start=0.4)
        assert df == pytest.approx(np.exp(-0.01 * 0.599))

    def test_discount_factor_array(self, funding_curve: DiscountCurve) -> None:
        """Array input gives an array of factors."""
        t = np.array([0.0, 0.5, 1.0])
        df = funding_curve.discount_factor(t)
        assert isinstance(df, np.ndarray)
        assert np.allclose(df, np.exp(-0.05 * t))

    def test_spread(self, collateral_curve: DiscountCurve, funding_curve: DiscountCurve) -> None:
        """Spread is the rate difference."""
        assert collateral_curve.spread_to(funding_curve) == pytest.approx(-0.04)

    def test_non_finite_rate(self) -> None:
        """Non-finite rates should raise."""
        with pytest.raises(NumericalDomain):
            DiscountCurve(rate=float("nan"))

class TestHazardCurve:
    """Tests for hazard rate curve."""

    def test_survival_at_zero(self, hazard_curve: HazardCurve) -> None:
        """Survival probability at t=0 should be 1."""
        assert hazard_curve.survival_probability(0.0) == 1.0

    def test_survival_decreasing(self, hazard_curve: HazardCurve) -> None:
        """Survival probability should decrease over time."""
        t = np.linspace(0, 1, 11)
        assert np.all(np.diff(hazard_curve.survival_probability(t)) < 0)

    def test_default_probability(self, hazard_curve: HazardCurve) -> None:
        """PD(t1, t2) = Q(t1) - Q(t2)."""
        pd = hazard_curve.default_probability(0.2, 0.5)
        assert pd == pytest.approx(np.exp(-0.04 * 0.2) - np.exp(-0.04 * 0.5))
        assert hazard_curve.default_probability(1.0) == pytest.approx(1 - np.exp(-0.04))

    def test_incremental_probabilities_telescope(
        self, hazard_curve: HazardCurve, time_grid: TimeGrid
    ) -> None:
        """Interval probabilities sum to 1 - Q(horizon) on a grid starting at 0."""
        inc_pd = hazard_curve.incremental_default_probabilities(time_grid.times)
        assert inc_pd[0] == 0.0
        assert np.sum(inc_pd) == pytest.approx(1 - np.exp(-0.04 * time_grid.horizon))
        assert np.all(inc_pd[1:] > 0)

    def test_negative_hazard_rate(self) -> None:
        """Negative hazard rates should raise."""
        with pytest.raises(InvalidParameter):
            HazardCurve(hazard_rate=-0.01)

    def test_bumped(self, hazard_curve: HazardCurve) -> None:
        """Bumped curve shifts the intensity."""
        assert hazard_curve.bumped(0.0001).hazard_rate == pytest.approx(0.0401)

class TestBlackScholesModel:
    """Tests for the Black-Scholes Monte Carlo model."""

    def test_shape_and_initial_value(self, paths: AssetPaths, time_grid: TimeGrid) -> None:
        """Paths are time-major and start at S_0."""
        assert paths.values.shape == (len(time_grid), 4000)
        assert paths.n_steps == len(time_grid)
        assert paths.n_paths == 4000
        assert np.all(paths.values[0] == 100.0)

    def test_paths_positive(self, paths: AssetPaths) -> None:
        """Log-normal paths stay strictly positive."""
        assert np.all(paths.values > 0)

    def test_paths_read_only(self, paths: AssetPaths) -> None:
        """The path matrix cannot be modified."""
        with pytest.raises(ValueError):
            paths.values[1, 0] = 0.0

    def test_caller_matrix_is_copied(self, time_grid: TimeGrid) -> None:
        """Writes to the source matrix do not reach the stored paths."""
        base = np.full((len(time_grid), 8), 100.0)
        paths = AssetPaths(time_grid, base[:, :], 100.0)
        base[1, :] = -5.0
        assert paths.asset_value(1).mean() == 100.0
        assert not np.shares_memory(paths.values, base)

    def test_deterministic_with_seed(self, bs_model: BlackScholesModel) -> None:
        """Same seed should produce identical paths."""
        assert np.array_equal(bs_model.simulate().values, bs_model.simulate().values)

    def test_different_seeds_differ(self, time_grid: TimeGrid) -> None:
        """Different seeds should produce different paths."""
        a = BlackScholesModel(time_grid, n_paths=100, seed=1).simulate()
        b = BlackScholesModel(time_grid, n_paths=100, seed=2).simulate()
        assert not np.array_equal(a.values, b.values)

    def test_martingale(self, paths: AssetPaths, time_grid: TimeGrid) -> None:
        """Discounted asset mean stays at S_0 within Monte Carlo error."""
        tolerance = 4 * 0.25 * 100.0 / np.sqrt(paths.n_paths)
        for i, t in enumerate(time_grid):
            discounted_mean = paths.asset_value(i).mean() * np.exp(-0.01 * t)
            assert abs(discounted_mean - 100.0) <= tolerance

    def test_first_moment(self, bs_model: BlackScholesModel, paths: AssetPaths) -> None:
        """E[S(T)] = S_0 exp(r T) within four standard errors."""
        terminal = paths.asset_value(paths.n_steps - 1)
        expected = bs_model.expected_value(terminal.time)
        assert abs(terminal.mean() - expected) <= 4 * terminal.standard_error()

    def test_log_variance(self, paths: AssetPaths, time_grid: TimeGrid) -> None:
        """Var[log S(T)] = σ² T up to sampling error."""
        log_terminal = np.log(paths.values[-1])
        expected = 0.25**2 * time_grid.horizon
        assert np.var(log_terminal) == pytest.approx(expected, rel=0.1)

    def test_zero_volatility(self, time_grid: TimeGrid) -> None:
        """With σ = 0 every path is the deterministic forward."""
        paths = BlackScholesModel(time_grid, n_paths=50, volatility=0.0).simulate()
        expected = 100.0 * np.exp(0.01 * time_grid.times)
        for i in range(paths.n_steps):
            rv = paths.asset_value(i)
            assert rv.is_deterministic
            assert rv.mean() == pytest.approx(expected[i], rel=1e-12)

    def test_antithetic_pairs(self, time_grid: TimeGrid) -> None:
        """Antithetic halves mirror each other in log space."""
        model = BlackScholesModel(time_grid, n_paths=200, antithetic=True, seed=11)
        log_paths = np.log(model.simulate().values / 100.0)
        drift = (0.01 - 0.5 * 0.25**2) * time_grid.times[:, np.newaxis]
        assert np.allclose(log_paths[:, :100] + log_paths[:, 100:], 2 * drift)

    def test_asset_value_is_view(self, paths: AssetPaths, time_grid: TimeGrid) -> None:
        """Time slices are zero-copy and carry their grid time."""
        rv = paths.asset_value(10)
        assert np.shares_memory(rv.samples, paths.values)
        assert rv.time == time_grid.time(10)

    def test_asset_value_at(self, paths: AssetPaths) -> None:
        """Lookup by time uses the grid point at or before t."""
        assert np.array_equal(paths.asset_value_at(0.505).samples, paths.values[50])
        assert np.array_equal(paths.asset_value_at(5.0).samples, paths.values[-1])

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"volatility": -0.1},
            {"n_paths": 0},
            {"initial_value": 0.0},
            {"n_paths": 101, "antithetic": True},
        ],
    )
    def test_invalid_parameters(self, time_grid: TimeGrid, kwargs: dict) -> None:
        """Invalid model parameters should raise."""
        with pytest.raises(InvalidParameter):
            BlackScholesModel(time_grid, **kwargs)

    def test_from_config(self) -> None:
        """Model built from configuration objects."""
        simulation = SimulationConfig(deltaT=0.01, numberOfTimeSteps=50, numberOfPaths=64, seed=5)
        market = MarketConfig(initialValue=50.0, collateralRate=0.02, volatility=0.3)
        model = BlackScholesModel.from_config(simulation, market)

        assert len(model.time_grid) == 50
        assert model.n_paths == 64
        assert model.initial_value == 50.0
        assert model.risk_free_rate == 0.02
        assert model.volatility == 0.3
        assert model.seed == 5
